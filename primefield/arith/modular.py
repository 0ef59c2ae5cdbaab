"""Prime-field arithmetic on raw residues.

Every function takes the modulus explicitly and works for any backing
type satisfying the DefaultNumber contract (see ``capability``).  Inputs
are assumed already reduced into [0, p); results are too.
"""

from __future__ import annotations

from typing import Any

from primefield.arith.capability import identities, is_native
from primefield.arith.errors import DivisionByZeroResidueError


def reduce(a: Any, p: Any) -> Any:
    """Reduce *a* into [0, p)."""
    return a % p


def add(a: Any, b: Any, p: Any) -> Any:
    """Field addition.

    ``a + b`` is only formed when it stays below *p*, so a modulus near the
    top of a fixed-width type cannot overflow.
    """
    gap = p - b
    if a >= gap:
        return a - gap
    return a + b


def sub(a: Any, b: Any, p: Any) -> Any:
    """Field subtraction, borrowing from *p* instead of going negative."""
    if a < b:
        return p - b + a
    return a - b


def neg(a: Any, p: Any) -> Any:
    """Additive inverse."""
    zero, _ = identities(type(p))
    return sub(zero, a, p)


def mul(a: Any, b: Any, p: Any) -> Any:
    """Field multiplication by double-and-add over the bits of *b*."""
    if is_native(type(p)):
        return (a * b) % p
    zero, one = identities(type(p))
    two = one + one
    result = zero
    addend = a
    while b > zero:
        if b % two == one:
            result = add(result, addend, p)
        addend = add(addend, addend, p)
        b = b // two
    return result


def power(base: Any, e: Any, p: Any) -> Any:
    """Square-and-multiply exponentiation; *e* is a non-negative exponent."""
    if is_native(type(p)):
        return pow(base, e, p)
    zero, one = identities(type(p))
    two = one + one
    result = one
    while e > zero:
        if e % two == one:
            result = mul(result, base, p)
        base = mul(base, base, p)
        e = e // two
    return result


def inv(a: Any, p: Any) -> Any:
    """Multiplicative inverse via Fermat's little theorem (p is prime)."""
    zero, one = identities(type(p))
    if a == zero:
        raise DivisionByZeroResidueError(p)
    return power(a, p - (one + one), p)
