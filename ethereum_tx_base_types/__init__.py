"""
Common definitions and types.
"""

from .base_types import (
    Address,
    Bytes,
    FixedSizeBytes,
    Hash,
    HexNumber,
    Number,
    StorageKey,
)
from .conversions import (
    BytesConvertible,
    FixedSizeBytesConvertible,
    NumberConvertible,
    int_to_bytes,
    to_bytes,
    to_hex,
    to_number,
)
from .pydantic import CamelModel

__all__ = (
    "Address",
    "Bytes",
    "BytesConvertible",
    "CamelModel",
    "FixedSizeBytes",
    "FixedSizeBytesConvertible",
    "Hash",
    "HexNumber",
    "Number",
    "NumberConvertible",
    "StorageKey",
    "int_to_bytes",
    "to_bytes",
    "to_hex",
    "to_number",
)
