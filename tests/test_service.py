"""Tests for the arithmetic service and its HTTP client.

The app runs in-process through FastAPI's TestClient, which is also an
``httpx.Client`` and can therefore back ``FieldClient`` directly.
"""

from __future__ import annotations

import inspect
import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from primefield.arith.capability import register
from primefield.arith.element import FieldElement
from primefield.arith.errors import DivisionByZeroResidueError, FieldMismatchError
from primefield.arith.uint import U64, U512
from primefield.config import DEFAULT_PRIME, MAX_MODULUS_BITS
from primefield.service.app import create_app
from primefield.service.client import FieldClient


@pytest.fixture()
def http():
    return TestClient(create_app())


@pytest.fixture()
def client(http):
    return FieldClient(client=http)


def _el(value, p=7):
    return {"value": str(value), "p": str(p)}


# ---------- raw endpoints ----------------------------------------------------


@pytest.mark.parametrize(
    "op,expected",
    [("add", "1"), ("sub", "5"), ("mul", "1"), ("div", "2")],
)
def test_binary_ops_p7(http, op, expected):
    resp = http.post(f"/{op}", json={"a": _el(3), "b": _el(5)})
    assert resp.status_code == 200
    assert resp.json() == {"value": expected, "p": "7", "width": None}


def test_json_numbers_accepted(http):
    resp = http.post("/add", json={"a": {"value": 3, "p": 7}, "b": {"value": 5, "p": 7}})
    assert resp.status_code == 200
    assert resp.json()["value"] == "1"


def test_pow_endpoint(http):
    resp = http.post("/pow", json={"base": _el(3), "exponent": "6"})
    assert resp.status_code == 200
    assert resp.json()["value"] == "1"


def test_inverse_and_neg(http):
    assert http.post("/inverse", json={"a": _el(5)}).json()["value"] == "3"
    assert http.post("/neg", json={"a": _el(3)}).json()["value"] == "4"


def test_fixed_width(http):
    p = 2**512 - 1
    resp = http.post(
        "/sub", json={"a": _el(2, p), "b": _el(3, p), "width": 512}
    )
    assert resp.status_code == 200
    assert resp.json() == {"value": str(p - 1), "p": str(p), "width": 512}


def test_mismatch_is_409(http):
    resp = http.post("/mul", json={"a": _el(3, 7), "b": _el(3, 11)})
    assert resp.status_code == 409


def test_division_by_zero_is_422(http):
    resp = http.post("/div", json={"a": _el(3), "b": _el(0)})
    assert resp.status_code == 422
    resp = http.post("/inverse", json={"a": _el(14)})
    assert resp.status_code == 422


@pytest.mark.parametrize(
    "payload",
    [
        {"a": _el(3, 1), "b": _el(3, 1)},                   # modulus < 2
        {"a": _el("x"), "b": _el(3)},                       # not an integer
        {"a": _el(3), "b": _el(3), "width": 32},            # unknown width
        {"a": _el(3, 2**64 + 13), "b": _el(3, 2**64 + 13), "width": 64},  # overflow
        {"a": _el(3, 2 ** (MAX_MODULUS_BITS + 1) + 1), "b": _el(3)},      # too large
    ],
)
def test_bad_operands_are_400(http, payload):
    assert http.post("/add", json=payload).status_code == 400


def test_health(http):
    body = http.get("/health").json()
    assert body == {"status": "ok", "default_prime": str(DEFAULT_PRIME)}


# ---------- client -------------------------------------------------------------


def test_client_matches_local(client):
    a = FieldElement(12345, DEFAULT_PRIME)
    b = FieldElement(67890, DEFAULT_PRIME)
    assert client.add(a, b) == a + b
    assert client.sub(a, b) == a - b
    assert client.mul(a, b) == a * b
    assert client.div(a, b) == a / b
    assert client.pow(a, 65537) == a.pow(65537)
    assert client.inverse(b) == b.inverse()
    assert client.neg(a) == -a


def test_client_keeps_backing_type(client):
    a = FieldElement(U512(2), U512.MAX)
    b = FieldElement(U512(3), U512.MAX)
    result = client.mul(a, b)
    assert type(result.value) is U512
    assert result == a * b

    small = client.add(FieldElement(U64(3), U64(7)), FieldElement(U64(5), U64(7)))
    assert small == FieldElement(U64(1), U64(7))


def test_client_raises_field_errors(client):
    with pytest.raises(FieldMismatchError):
        client.add(FieldElement(1, 7), FieldElement(1, 11))
    with pytest.raises(DivisionByZeroResidueError):
        client.div(FieldElement(1, 7), FieldElement(0, 7))


def test_client_context_manager_keeps_injected_client(http):
    with FieldClient(client=http) as c:
        assert c.add(FieldElement(1, 7), FieldElement(1, 7)) == FieldElement(2, 7)
    # injected client is not closed by FieldClient
    assert http.get("/health").status_code == 200


# ---------- request validation ------------------------------------------------


def test_fractional_value_is_400(http):
    resp = http.post("/add", json={"a": {"value": 1.5, "p": 7}, "b": _el(1)})
    assert resp.status_code == 400


def test_missing_operand_is_400(http):
    resp = http.post("/add", json={"a": _el(1)})
    assert resp.status_code == 400


def test_client_validation_failure_is_not_division_error(http):
    # a 400 surfaces as an HTTP error, never as a field error
    c = FieldClient(client=http)
    with pytest.raises(httpx.HTTPStatusError):
        c._post("/add", {"a": _el(1)}, FieldElement(1, 7))


def test_rejections_are_logged(http, caplog):
    with caplog.at_level(logging.WARNING, logger="primefield.service.app"):
        http.post("/mul", json={"a": _el(3, 7), "b": _el(3, 11)})
        http.post("/add", json={"a": _el(1)})
    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any(m.startswith("mul rejected: Different field") for m in messages)
    assert any(m.startswith("/add rejected:") for m in messages)


def test_arithmetic_endpoints_run_in_threadpool():
    app = create_app()
    endpoints = {r.path: r.endpoint for r in app.routes if hasattr(r, "endpoint")}
    for path in ("/add", "/sub", "/mul", "/div", "/pow", "/inverse", "/neg"):
        assert not inspect.iscoroutinefunction(endpoints[path]), path


def test_client_rejects_backing_type_without_width(client):
    class Wide(int):
        pass

    register(Wide, lambda: Wide(0), lambda: Wide(1))
    a = FieldElement(Wide(3), Wide(7))
    with pytest.raises(TypeError):
        client.add(a, a)
