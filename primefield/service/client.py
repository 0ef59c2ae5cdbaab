"""HTTP client for the arithmetic service.

    with FieldClient() as client:
        c = client.add(FieldElement(3, 7), FieldElement(5, 7))

Any ``httpx.Client`` can be injected, including FastAPI's ``TestClient``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from primefield.arith.element import FieldElement
from primefield.arith.errors import DivisionByZeroResidueError, FieldMismatchError
from primefield.arith.uint import width_of
from primefield.config import HTTP_TIMEOUT, SERVICE_URL


def _wire(e: FieldElement) -> Dict[str, str]:
    return {"value": str(int(e.value)), "p": str(int(e.p))}


class FieldClient:
    """Synchronous client returning elements of the caller's backing type."""

    def __init__(self, base_url: str = SERVICE_URL, client: Optional[httpx.Client] = None) -> None:
        self._owned = client is None
        self._client = client if client is not None else httpx.Client(
            base_url=base_url, timeout=HTTP_TIMEOUT
        )

    def close(self) -> None:
        if self._owned:
            self._client.close()

    def __enter__(self) -> "FieldClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ---- transport ----

    def _post(self, path: str, payload: Dict[str, Any], like: FieldElement) -> FieldElement:
        resp = self._client.post(path, json=payload)
        if resp.status_code == 409:
            other = payload.get("b", payload.get("a"))
            raise FieldMismatchError(like.p, type(like.p)(int(other["p"])))
        if resp.status_code == 422:
            raise DivisionByZeroResidueError(like.p)
        resp.raise_for_status()
        body = resp.json()
        tp = type(like.p)
        return FieldElement(tp(int(body["value"])), tp(int(body["p"])))

    def _binary(self, op: str, a: FieldElement, b: FieldElement) -> FieldElement:
        payload = {"a": _wire(a), "b": _wire(b), "width": width_of(type(a.p))}
        return self._post(f"/{op}", payload, a)

    # ---- operations ----

    def add(self, a: FieldElement, b: FieldElement) -> FieldElement:
        return self._binary("add", a, b)

    def sub(self, a: FieldElement, b: FieldElement) -> FieldElement:
        return self._binary("sub", a, b)

    def mul(self, a: FieldElement, b: FieldElement) -> FieldElement:
        return self._binary("mul", a, b)

    def div(self, a: FieldElement, b: FieldElement) -> FieldElement:
        return self._binary("div", a, b)

    def pow(self, base: FieldElement, exponent: Any) -> FieldElement:
        payload = {
            "base": _wire(base),
            "exponent": str(int(exponent)),
            "width": width_of(type(base.p)),
        }
        return self._post("/pow", payload, base)

    def inverse(self, a: FieldElement) -> FieldElement:
        payload = {"a": _wire(a), "width": width_of(type(a.p))}
        return self._post("/inverse", payload, a)

    def neg(self, a: FieldElement) -> FieldElement:
        payload = {"a": _wire(a), "width": width_of(type(a.p))}
        return self._post("/neg", payload, a)
