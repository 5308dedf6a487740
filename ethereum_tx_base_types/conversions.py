"""Common conversion methods."""

from re import fullmatch, sub
from typing import List, SupportsBytes, TypeAlias

from ethereum_tx_exceptions import TypeMismatchError, ValidationError

BytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int]
FixedSizeBytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int]
NumberConvertible: TypeAlias = str | bytes | SupportsBytes | int


def strip_hex_prefix(input_str: str) -> str:
    """Remove a leading `0x` (or `0X`) from a string, if present."""
    if input_str[:2] in ("0x", "0X"):
        return input_str[2:]
    return input_str


def to_bytes(input_bytes: BytesConvertible) -> bytes:
    """Convert multiple types into bytes."""
    if isinstance(input_bytes, (bytes, bytearray, memoryview, SupportsBytes)):
        return bytes(input_bytes)

    if isinstance(input_bytes, list):
        if not all(isinstance(b, int) and not isinstance(b, bool) for b in input_bytes):
            raise TypeMismatchError(input_bytes, "a list of byte values")
        if not all(0 <= b <= 0xFF for b in input_bytes):
            raise ValidationError(f"byte values out of range in {input_bytes!r}")
        return bytes(input_bytes)

    if isinstance(input_bytes, str):
        # We can have a hex representation of bytes with spaces for readability
        hex_str = strip_hex_prefix(sub(r"\s+", "", input_bytes))
        if len(hex_str) % 2 == 1:
            hex_str = "0" + hex_str
        try:
            return bytes.fromhex(hex_str)
        except ValueError as e:
            raise ValidationError(f"malformed hex string {input_bytes!r}") from e

    raise TypeMismatchError(input_bytes, "a hex string, bytes or a list of byte values")


def to_fixed_size_bytes(input_bytes: FixedSizeBytesConvertible, size: int) -> bytes:
    """
    Convert multiple types into fixed-size bytes.

    The input must already have exactly `size` bytes: it is never padded nor
    truncated. Hex strings must therefore have exactly `2 * size` digits.

    :param input_bytes: The input data to convert.
    :param size: The size of the output bytes.
    """
    if isinstance(input_bytes, str):
        hex_str = strip_hex_prefix(sub(r"\s+", "", input_bytes))
        if len(hex_str) != 2 * size:
            raise ValidationError(
                f"expected {2 * size} hex digits but got {len(hex_str)}: {input_bytes!r}"
            )
    output = to_bytes(input_bytes)
    if len(output) != size:
        raise ValidationError(f"expected {size} bytes but got {len(output)}: {to_hex(output)}")
    return output


def to_hex(input_bytes: BytesConvertible) -> str:
    """Convert multiple types into a lower-case bytes hex string."""
    return "0x" + to_bytes(input_bytes).hex()


def to_number(input_number: NumberConvertible) -> int:
    """
    Convert multiple types into a number.

    Strings are read as hexadecimal when `0x`-prefixed and as decimal
    otherwise; `"0x"` is zero. Bytes are read big-endian.
    """
    if isinstance(input_number, bool):
        raise TypeMismatchError(input_number, "an int, a numeric string or bytes")
    if isinstance(input_number, int):
        return input_number
    if isinstance(input_number, str):
        number_str = input_number.strip()
        if number_str[:2] in ("0x", "0X"):
            digits = number_str[2:]
            if not fullmatch(r"[0-9a-fA-F]*", digits):
                raise ValidationError(f"malformed hex number {input_number!r}")
            return int(digits, 16) if digits else 0
        if not fullmatch(r"-?[0-9]+", number_str):
            raise ValidationError(f"malformed decimal number {input_number!r}")
        return int(number_str, 10)
    if isinstance(input_number, (bytes, bytearray, SupportsBytes)):
        return int.from_bytes(bytes(input_number), byteorder="big")
    raise TypeMismatchError(input_number, "an int, a numeric string or bytes")


def int_to_bytes(value: int) -> bytes:
    """Convert a non-negative integer to its minimal big-endian representation."""
    if value == 0:
        return b""
    return value.to_bytes((value.bit_length() + 7) // 8, byteorder="big")
