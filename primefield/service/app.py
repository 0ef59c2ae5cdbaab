"""Prime-field arithmetic FastAPI application (optional ``service`` extra).

The arithmetic in ``primefield.arith`` does not depend on this module.
Stateless: every request carries its operands and modulus.

Endpoints:
- POST /add, /sub, /mul, /div  – binary operation on two elements
- POST /pow                    – element raised to an integer exponent
- POST /inverse, /neg          – unary operation on one element
- GET  /health

Integers travel as decimal strings (or JSON numbers) so 512-bit values
survive any JSON parser.  ``width`` selects the backing type: null for
Python int, or 64/128/256/512 for the fixed-width unsigned types.

Status codes: 409 different fields, 422 division by the zero residue,
400 for anything else wrong with the operands, including bodies that fail
request validation.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from primefield.arith.element import FieldElement
from primefield.arith.errors import DivisionByZeroResidueError, FieldMismatchError
from primefield.arith.uint import backing_type
from primefield.config import DEFAULT_PRIME, MAX_MODULUS_BITS

logger = logging.getLogger(__name__)

# ------ request / response models ------


class ElementModel(BaseModel):
    value: Union[str, int]
    p: Union[str, int]


class BinaryOpRequest(BaseModel):
    a: ElementModel
    b: ElementModel
    width: Optional[int] = None


class UnaryOpRequest(BaseModel):
    a: ElementModel
    width: Optional[int] = None


class PowRequest(BaseModel):
    base: ElementModel
    exponent: Union[str, int]
    width: Optional[int] = None


class ElementResponse(BaseModel):
    value: str
    p: str
    width: Optional[int] = None


# ------ helpers ------


def _to_element(m: ElementModel, width: Optional[int]) -> FieldElement:
    """Build a FieldElement from its wire form (raises ValueError/OverflowError)."""
    tp = backing_type(width)
    p = int(str(m.p))
    if p.bit_length() > MAX_MODULUS_BITS:
        raise ValueError(f"modulus exceeds {MAX_MODULUS_BITS} bits")
    return FieldElement(int(str(m.value)), tp(p))


def _to_response(e: FieldElement, width: Optional[int]) -> ElementResponse:
    return ElementResponse(value=str(int(e.value)), p=str(int(e.p)), width=width)


def _run(op: str, width: Optional[int], compute: Callable[[], FieldElement]) -> ElementResponse:
    """Evaluate *compute* and map field errors to HTTP errors."""
    try:
        result = compute()
    except FieldMismatchError as exc:
        logger.warning("%s rejected: %s", op, exc)
        raise HTTPException(409, str(exc))
    except DivisionByZeroResidueError as exc:
        logger.warning("%s rejected: %s", op, exc)
        raise HTTPException(422, str(exc))
    except (ValueError, OverflowError, TypeError) as exc:
        logger.warning("%s rejected: %s", op, exc)
        raise HTTPException(400, str(exc))
    return _to_response(result, width)


_BINARY_OPS = {
    "add": lambda a, b: a + b,
    "sub": lambda a, b: a - b,
    "mul": lambda a, b: a * b,
    "div": lambda a, b: a / b,
}


def create_app() -> FastAPI:
    """Factory that creates the arithmetic service app."""
    app = FastAPI(title="primefield arithmetic service")

    # 422 is reserved for division by the zero residue
    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        logger.warning("%s rejected: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    def _binary(op: str) -> Callable[[BinaryOpRequest], Any]:
        fn = _BINARY_OPS[op]

        def endpoint(req: BinaryOpRequest) -> ElementResponse:
            return _run(
                op,
                req.width,
                lambda: fn(_to_element(req.a, req.width), _to_element(req.b, req.width)),
            )

        endpoint.__name__ = op
        endpoint.__doc__ = f"Field {op} of two elements."
        return endpoint

    for op in _BINARY_OPS:
        app.post(f"/{op}", response_model=ElementResponse)(_binary(op))

    @app.post("/pow", response_model=ElementResponse)
    def power(req: PowRequest):
        """Raise an element to an integer exponent (reduced mod p-1)."""

        def compute() -> FieldElement:
            base = _to_element(req.base, req.width)
            return base.pow(int(str(req.exponent)))

        return _run("pow", req.width, compute)

    @app.post("/inverse", response_model=ElementResponse)
    def inverse(req: UnaryOpRequest):
        return _run("inverse", req.width, lambda: _to_element(req.a, req.width).inverse())

    @app.post("/neg", response_model=ElementResponse)
    def negate(req: UnaryOpRequest):
        return _run("neg", req.width, lambda: -_to_element(req.a, req.width))

    @app.get("/health")
    async def health():
        return {"status": "ok", "default_prime": str(DEFAULT_PRIME)}

    return app


app = create_app()
