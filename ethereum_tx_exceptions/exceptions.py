"""
Errors raised while normalizing, validating or converting transaction fields.

None of these subclass `ValueError`: pydantic wraps `ValueError` and
`AssertionError` raised inside validators into its own `ValidationError`,
while any other exception propagates to the caller unchanged.
"""

from typing import Any, Final


class TransactionFieldError(Exception):
    """
    Base class for all errors raised by the transaction data model.
    """


class ValidationError(TransactionFieldError):
    """
    Thrown when a value has the right shape but is not valid: malformed hex,
    wrong fixed byte length, a partial signature or a mismatching type
    discriminant.
    """


class TypeMismatchError(TransactionFieldError):
    """
    Thrown when the input for a field has a shape that cannot be normalized.
    """

    value: Final[Any]
    """
    The offending input.
    """

    expected: Final[str]
    """
    Description of the accepted input shapes.
    """

    def __init__(self, value: Any, expected: str):
        super().__init__(
            f"unrecognized input {value!r} of type `{type(value).__name__}`, "
            f"expected {expected}"
        )
        self.value = value
        self.expected = expected


class RangeError(TransactionFieldError):
    """
    Thrown when a numeric value is negative or does not fit in the byte width
    allowed for its field.
    """

    value: Final[int]
    """
    The offending number.
    """

    byte_length: Final[int]
    """
    Maximum width of the field, in bytes.
    """

    def __init__(self, value: int, byte_length: int, message: str | None = None):
        if message is None:
            if value < 0:
                message = f"value {value} is negative"
            else:
                message = f"value {value} does not fit in {byte_length} bytes"
        super().__init__(message)
        self.value = value
        self.byte_length = byte_length


class UnsupportedFieldError(TransactionFieldError):
    """
    Thrown when a field that is not part of a transaction type is populated.
    """

    field: Final[str]
    """
    Name of the forbidden field.
    """

    transaction_type: Final[int]
    """
    Type discriminant of the transaction being built.
    """

    def __init__(self, field: str, transaction_type: int):
        super().__init__(
            f"field `{field}` is not supported by transaction type `{transaction_type}`"
        )
        self.field = field
        self.transaction_type = transaction_type


class DecodeError(TransactionFieldError):
    """
    Thrown when a values array or a serialized transaction envelope cannot be
    decoded.
    """
