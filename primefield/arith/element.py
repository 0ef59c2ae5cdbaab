"""Elements of a prime field F_p over a pluggable integer type.

A ``FieldElement`` is an immutable ``(value, p)`` pair.  The backing type
of ``value`` and ``p`` may be Python's int or any type satisfying the
DefaultNumber contract, e.g. ``U512``:

    >>> a = FieldElement(3, 7)
    >>> b = FieldElement(5, 7)
    >>> a + b, a - b, a * b, a / b
    (FieldElement(value=1, p=7), FieldElement(value=5, p=7), FieldElement(value=1, p=7), FieldElement(value=2, p=7))

Binary operators require both operands to share the same modulus and
raise ``FieldMismatchError`` otherwise.
"""

from __future__ import annotations

from typing import Any

from primefield.arith import modular
from primefield.arith.capability import identities
from primefield.arith.errors import (
    DivisionByZeroResidueError,
    FieldMismatchError,
    InvalidModulusError,
)


class FieldElement:
    """Residue class of ``value`` modulo the prime ``p``."""

    __slots__ = ("_value", "_p")

    def __init__(self, value: Any, p: Any) -> None:
        zero, one = identities(type(p))
        if p < one + one:
            raise InvalidModulusError(p)
        if type(value) is not type(p):
            if not isinstance(value, int):
                raise TypeError(
                    f"value of type {type(value).__name__} cannot live in a field "
                    f"over {type(p).__name__}"
                )
            # Plain ints are reduced before conversion so negatives normalize.
            value = type(p)(value % int(p))
        self._value = modular.reduce(value, p)
        self._p = p

    @classmethod
    def zero(cls, p: Any) -> "FieldElement":
        zero, _ = identities(type(p))
        return cls(zero, p)

    @classmethod
    def one(cls, p: Any) -> "FieldElement":
        _, one = identities(type(p))
        return cls(one, p)

    @property
    def value(self) -> Any:
        return self._value

    @property
    def p(self) -> Any:
        return self._p

    def _new(self, value: Any) -> "FieldElement":
        # value is already reduced; skip validation
        obj = object.__new__(FieldElement)
        obj._value = value
        obj._p = self._p
        return obj

    def _check_field(self, other: "FieldElement") -> None:
        if self._p != other._p:
            raise FieldMismatchError(self._p, other._p)

    # ---- arithmetic ----

    def __add__(self, other):
        if not isinstance(other, FieldElement):
            return NotImplemented
        self._check_field(other)
        return self._new(modular.add(self._value, other._value, self._p))

    def __sub__(self, other):
        if not isinstance(other, FieldElement):
            return NotImplemented
        self._check_field(other)
        return self._new(modular.sub(self._value, other._value, self._p))

    def __mul__(self, other):
        if not isinstance(other, FieldElement):
            return NotImplemented
        self._check_field(other)
        return self._new(modular.mul(self._value, other._value, self._p))

    def __truediv__(self, other):
        if not isinstance(other, FieldElement):
            return NotImplemented
        self._check_field(other)
        return self * other.inverse()

    def __neg__(self) -> "FieldElement":
        return self._new(modular.neg(self._value, self._p))

    def __pow__(self, e):
        return self.pow(e)

    def pow(self, e: Any) -> "FieldElement":
        """Raise to the power *e*, reducing the exponent modulo ``p - 1``.

        *e* is a value of the backing type or a Python int.  Negative ints
        denote powers of the inverse and need a nonzero base.
        """
        zero, one = identities(type(self._p))
        order = self._p - one
        if isinstance(e, int) and type(e) is not type(self._p):
            if e < 0 and self._value == zero:
                raise DivisionByZeroResidueError(self._p)
            e = type(self._p)(e % int(order))
        elif type(e) is not type(self._p):
            raise TypeError(f"exponent must be int or {type(self._p).__name__}")
        elif e < zero:
            if self._value == zero:
                raise DivisionByZeroResidueError(self._p)
            e = e % order
        else:
            e = e % order
        return self._new(modular.power(self._value, e, self._p))

    def inverse(self) -> "FieldElement":
        """Multiplicative inverse ``self^(p-2)``."""
        return self._new(modular.inv(self._value, self._p))

    # ---- predicates / protocol ----

    def is_zero(self) -> bool:
        zero, _ = identities(type(self._p))
        return self._value == zero

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __eq__(self, other):
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self._p == other._p and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._value, self._p))

    def __int__(self) -> int:
        return int(self._value)

    def __repr__(self) -> str:
        return f"FieldElement(value={self._value!r}, p={self._p!r})"
