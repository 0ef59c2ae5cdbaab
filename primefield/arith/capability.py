"""DefaultNumber capability for backing integer types.

A type ``T`` can back a field element if it supports ``==``, ordering,
``+``, ``-``, ``%`` and ``//`` between two ``T`` values and supplies its
additive and multiplicative identities.  Types either implement
``zero()`` / ``one()`` themselves or are registered here.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Protocol, Tuple, runtime_checkable


@runtime_checkable
class DefaultNumber(Protocol):
    """Integer type exposing its identities as pure constructors."""

    @classmethod
    def zero(cls) -> Any: ...

    @classmethod
    def one(cls) -> Any: ...


# type -> (zero factory, one factory) for types that cannot carry the methods
_REGISTRY: Dict[type, Tuple[Callable[[], Any], Callable[[], Any]]] = {
    int: (lambda: 0, lambda: 1),
}

# types whose own * and three-argument pow() are exact for any size
_NATIVE = (int,)


def register(tp: type, zero: Callable[[], Any], one: Callable[[], Any]) -> None:
    """Register identity factories for *tp*."""
    _REGISTRY[tp] = (zero, one)


def identities(tp: type) -> Tuple[Any, Any]:
    """Return ``(zero, one)`` for the backing type *tp*."""
    factories = _REGISTRY.get(tp)
    if factories is not None:
        return factories[0](), factories[1]()
    if isinstance(tp, type) and issubclass(tp, DefaultNumber):
        return tp.zero(), tp.one()
    raise TypeError(f"{getattr(tp, '__name__', tp)!r} does not provide zero()/one()")


def is_native(tp: type) -> bool:
    return tp in _NATIVE
