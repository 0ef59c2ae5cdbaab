"""Fixed-width unsigned integers.

Each subclass pins ``BITS``; values live in ``[0, 2**BITS)``.  Arithmetic
is only defined between values of the same class, and any result that
leaves the range raises ``OverflowError`` instead of wrapping.
"""

from __future__ import annotations

import operator
from typing import Dict, Optional


class FixedUInt:
    """Unsigned integer of ``BITS`` bits backed by a Python int."""

    BITS: int = 0
    MAX: "FixedUInt"

    __slots__ = ("_v",)

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if cls.BITS <= 0:
            raise TypeError(f"{cls.__name__} must declare a positive BITS")
        cls.MAX = cls((1 << cls.BITS) - 1)

    def __init__(self, value=0) -> None:
        v = value._v if isinstance(value, FixedUInt) else operator.index(value)
        if v < 0 or v >> type(self).BITS:
            raise OverflowError(f"{v} does not fit in {type(self).__name__}")
        self._v = v

    # ---- DefaultNumber ----

    @classmethod
    def zero(cls) -> "FixedUInt":
        return cls(0)

    @classmethod
    def one(cls) -> "FixedUInt":
        return cls(1)

    # ---- arithmetic ----

    def _same(self, other) -> bool:
        return type(other) is type(self)

    def __add__(self, other):
        if not self._same(other):
            return NotImplemented
        return type(self)(self._v + other._v)

    def __sub__(self, other):
        if not self._same(other):
            return NotImplemented
        return type(self)(self._v - other._v)

    def __mul__(self, other):
        if not self._same(other):
            return NotImplemented
        return type(self)(self._v * other._v)

    def __mod__(self, other):
        if not self._same(other):
            return NotImplemented
        return type(self)(self._v % other._v)

    def __floordiv__(self, other):
        if not self._same(other):
            return NotImplemented
        return type(self)(self._v // other._v)

    # ---- comparison ----

    def __eq__(self, other):
        if not self._same(other):
            return NotImplemented
        return self._v == other._v

    def __lt__(self, other):
        if not self._same(other):
            return NotImplemented
        return self._v < other._v

    def __le__(self, other):
        if not self._same(other):
            return NotImplemented
        return self._v <= other._v

    def __gt__(self, other):
        if not self._same(other):
            return NotImplemented
        return self._v > other._v

    def __ge__(self, other):
        if not self._same(other):
            return NotImplemented
        return self._v >= other._v

    def __hash__(self) -> int:
        return hash((type(self).BITS, self._v))

    # ---- conversion ----

    def __int__(self) -> int:
        return self._v

    def __index__(self) -> int:
        return self._v

    def __bool__(self) -> bool:
        return self._v != 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._v})"

    def __str__(self) -> str:
        return str(self._v)


class U64(FixedUInt):
    BITS = 64
    __slots__ = ()


class U128(FixedUInt):
    BITS = 128
    __slots__ = ()


class U256(FixedUInt):
    BITS = 256
    __slots__ = ()


class U512(FixedUInt):
    BITS = 512
    __slots__ = ()


_BY_WIDTH: Dict[int, type] = {t.BITS: t for t in (U64, U128, U256, U512)}


def backing_type(width: Optional[int]) -> type:
    """Map a bit width to its backing type; ``None`` selects Python int."""
    if width is None:
        return int
    try:
        return _BY_WIDTH[width]
    except KeyError:
        raise ValueError(
            f"Unsupported width {width}; expected one of {sorted(_BY_WIDTH)}"
        ) from None


def width_of(tp: type) -> Optional[int]:
    """Inverse of :func:`backing_type`; TypeError for types without a width."""
    if tp is int:
        return None
    width = getattr(tp, "BITS", None)
    if _BY_WIDTH.get(width) is not tp:
        raise TypeError(f"no wire width for backing type {getattr(tp, '__name__', tp)!r}")
    return width
