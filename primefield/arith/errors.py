"""Errors raised by prime-field arithmetic."""

from __future__ import annotations

from typing import Any


class FieldError(Exception):
    """Base class for field arithmetic errors."""


class FieldMismatchError(FieldError, ValueError):
    """Operands belong to fields with different moduli."""

    def __init__(self, left: Any, right: Any) -> None:
        super().__init__(f"Different field: p={left!r} vs p={right!r}")
        self.left = left
        self.right = right


class DivisionByZeroResidueError(FieldError, ZeroDivisionError):
    """Attempt to invert the zero residue."""

    def __init__(self, p: Any) -> None:
        super().__init__(f"Cannot invert zero in F_{p}")
        self.p = p


class InvalidModulusError(FieldError, ValueError):
    """Modulus cannot define a field (must be >= 2)."""

    def __init__(self, p: Any) -> None:
        super().__init__(f"Invalid field modulus: {p!r}")
        self.p = p
