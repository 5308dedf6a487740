"""Basic type primitives used to define other types."""

from typing import Any, ClassVar, SupportsBytes, Type, TypeVar

from Crypto.Hash import keccak
from pydantic import GetCoreSchemaHandler
from pydantic_core.core_schema import (
    PlainValidatorFunctionSchema,
    no_info_plain_validator_function,
    to_string_ser_schema,
)

from ethereum_tx_exceptions import RangeError, TypeMismatchError, ValidationError

from .conversions import (
    BytesConvertible,
    FixedSizeBytesConvertible,
    NumberConvertible,
    int_to_bytes,
    to_bytes,
    to_fixed_size_bytes,
    to_number,
)

N = TypeVar("N", bound="Number")


class ToStringSchema:
    """
    Type converter to add a simple pydantic schema that correctly
    parses and serializes the type.
    """

    @staticmethod
    def __get_pydantic_core_schema__(
        source_type: Any, handler: GetCoreSchemaHandler
    ) -> PlainValidatorFunctionSchema:
        """Call the class constructor without info and appends the serialization schema."""
        return no_info_plain_validator_function(
            source_type,
            serialization=to_string_ser_schema(),
        )


class Number(int, ToStringSchema):
    """Non-negative number that fits in `byte_length` bytes."""

    byte_length: ClassVar[int] = 32

    def __new__(cls, input_number: NumberConvertible | N):
        """Create a new Number object."""
        if type(input_number) is cls:
            return input_number
        i = to_number(input_number)
        if i < 0 or i.bit_length() > 8 * cls.byte_length:
            raise RangeError(i, cls.byte_length)
        return super(Number, cls).__new__(cls, i)

    def __str__(self) -> str:
        """Return the string representation of the number."""
        return str(int(self))

    def hex(self) -> str:
        """Return the minimal hexadecimal representation of the number."""
        return hex(self)

    def to_be_bytes(self) -> bytes:
        """Return the minimal big-endian bytes of the number, empty for zero."""
        return int_to_bytes(int(self))


class HexNumber(Number):
    """Number that is represented in hexadecimal when converted to string."""

    def __str__(self) -> str:
        """Return the string representation of the number."""
        return self.hex()


class Bytes(bytes, ToStringSchema):
    """Class that helps represent bytes of variable length."""

    def __new__(cls, input_bytes: BytesConvertible = b""):
        """Create a new Bytes object."""
        if type(input_bytes) is cls:
            return input_bytes
        return super(Bytes, cls).__new__(cls, to_bytes(input_bytes))

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super(Bytes, self).__hash__()

    def __str__(self) -> str:
        """Return the hexadecimal representation of the bytes."""
        return self.hex()

    def hex(self, *args, **kwargs) -> str:
        """Return the hexadecimal representation of the bytes."""
        return "0x" + super().hex(*args, **kwargs)

    def keccak256(self) -> "Hash":
        """Return the keccak256 hash of the bytes."""
        k = keccak.new(digest_bits=256)
        return Hash(k.update(bytes(self)).digest())


T = TypeVar("T", bound="FixedSizeBytes")


class FixedSizeBytes(Bytes):
    """
    Bytes of an exact length.

    Inputs of any other length are rejected with a `ValidationError`, they are
    never padded nor truncated.
    """

    byte_length: ClassVar[int]
    _sized_: ClassVar[Type["FixedSizeBytes"]]

    def __class_getitem__(cls, length: int) -> Type["FixedSizeBytes"]:
        """Create a new FixedSizeBytes class with the given length."""

        class Sized(cls):  # type: ignore
            byte_length = length

        Sized._sized_ = Sized
        return Sized

    def __new__(cls, input_bytes: FixedSizeBytesConvertible | T):
        """Create a new FixedSizeBytes object."""
        if type(input_bytes) is cls:
            return input_bytes
        if isinstance(input_bytes, int):
            raise TypeMismatchError(input_bytes, f"{cls.byte_length} bytes or a hex string")
        return super(FixedSizeBytes, cls).__new__(
            cls, to_fixed_size_bytes(input_bytes, cls.byte_length)
        )

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super(FixedSizeBytes, self).__hash__()

    def __eq__(self, other: object) -> bool:
        """
        Compare two FixedSizeBytes objects to be equal.

        Hex strings are compared regardless of their case.
        """
        if other is None:
            return False
        if not isinstance(other, FixedSizeBytes):
            if not isinstance(other, (str, bytes, SupportsBytes)):
                return NotImplemented
            try:
                other = self._sized_(other)
            except ValidationError:
                return False
        return super().__eq__(other)

    def __ne__(self, other: object) -> bool:
        """Compare two FixedSizeBytes objects to be not equal."""
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return equal
        return not equal


class Address(FixedSizeBytes[20]):  # type: ignore
    """Class that helps represent Ethereum addresses."""

    pass


class StorageKey(FixedSizeBytes[32]):  # type: ignore
    """Class that helps represent storage slot keys of an access list."""

    pass


class Hash(FixedSizeBytes[32]):  # type: ignore
    """Class that helps represent hashes."""

    pass
