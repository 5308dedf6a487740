"""Exceptions for invalid transaction fields."""

from .exceptions import (
    DecodeError,
    RangeError,
    TransactionFieldError,
    TypeMismatchError,
    UnsupportedFieldError,
    ValidationError,
)

__all__ = [
    "DecodeError",
    "RangeError",
    "TransactionFieldError",
    "TypeMismatchError",
    "UnsupportedFieldError",
    "ValidationError",
]
