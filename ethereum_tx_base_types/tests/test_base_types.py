"""
Test suite for `ethereum_tx_base_types` module base types.
"""

from typing import Any

import pytest

from ethereum_tx_exceptions import RangeError, TypeMismatchError, ValidationError

from ..base_types import Address, Bytes, Hash, HexNumber, Number, StorageKey
from ..pydantic import CamelModel

ADDRESS_1 = "0x" + "00" * 19 + "01"
ADDRESS_AB = "0x" + "00" * 19 + "ab"


@pytest.mark.parametrize(
    "a, b, equal",
    [
        (Address(ADDRESS_1), Address(ADDRESS_1), True),
        (Address(ADDRESS_1), Address(ADDRESS_AB), False),
        (Address(ADDRESS_1), ADDRESS_1, True),
        (Address(ADDRESS_AB), ADDRESS_AB.upper().replace("0X", "0x"), True),
        (Address(ADDRESS_1), ADDRESS_AB, False),
        (Address(ADDRESS_1), b"\x00" * 19 + b"\x01", True),
        (Address(ADDRESS_1), b"\x01", False),
        (Address(ADDRESS_1), "0x01", False),
        (Address(ADDRESS_1), 1, False),
        (Address(ADDRESS_1), None, False),
        (ADDRESS_1, Address(ADDRESS_1), True),
        (1, Address(ADDRESS_1), False),
        (Hash("0x" + "00" * 32), Hash("0x" + "00" * 32), True),
        (Hash("0x" + "00" * 32), Address("0x" + "00" * 20), False),
        (Hash("0x" + "00" * 32), "0x" + "00" * 31 + "01", False),
    ],
)
def test_comparisons(a: Any, b: Any, equal: bool):
    """
    Test the comparison methods of the fixed size bytes types.
    """
    if equal:
        assert a == b
        assert not a != b
    else:
        assert a != b
        assert not a == b


@pytest.mark.parametrize(
    "input_number, expected",
    [
        pytest.param(0, 0, id="int_zero"),
        pytest.param("0x10", 16, id="hex_string"),
        pytest.param("0X10", 16, id="upper_hex_prefix"),
        pytest.param("0x", 0, id="empty_hex_string"),
        pytest.param("16", 16, id="decimal_string"),
        pytest.param(" 16 ", 16, id="decimal_string_with_spaces"),
        pytest.param(b"\x01\x00", 256, id="bytes"),
        pytest.param(b"", 0, id="empty_bytes"),
        pytest.param(2**256 - 1, 2**256 - 1, id="max_uint256"),
    ],
)
def test_number_conversions(input_number: Any, expected: int):
    """
    Test that numbers are accepted as ints, decimal or hex strings, and bytes.
    """
    assert Number(input_number) == expected
    assert HexNumber(input_number) == expected


@pytest.mark.parametrize(
    "input_number, exception",
    [
        pytest.param(2**256, RangeError, id="too_wide"),
        pytest.param(-1, RangeError, id="negative_int"),
        pytest.param("-1", RangeError, id="negative_string"),
        pytest.param("0xzz", ValidationError, id="malformed_hex"),
        pytest.param("ten", ValidationError, id="malformed_decimal"),
        pytest.param("", ValidationError, id="empty_string"),
        pytest.param(1.5, TypeMismatchError, id="float"),
        pytest.param(True, TypeMismatchError, id="bool"),
        pytest.param(None, TypeMismatchError, id="none"),
        pytest.param([1], TypeMismatchError, id="list"),
    ],
)
def test_number_rejections(input_number: Any, exception: type):
    """
    Test the errors raised for numbers that cannot be normalized.
    """
    with pytest.raises(exception):
        Number(input_number)


def test_number_range_error():
    """
    Test that out of range numbers report the value and the 32-byte width.
    """
    with pytest.raises(RangeError) as e:
        HexNumber(2**256)
    assert e.value.byte_length == 32
    assert e.value.value == 2**256


@pytest.mark.parametrize(
    "number, as_string, as_bytes",
    [
        (HexNumber(0), "0x0", b""),
        (HexNumber(255), "0xff", b"\xff"),
        (HexNumber(256), "0x100", b"\x01\x00"),
    ],
)
def test_number_representations(number: HexNumber, as_string: str, as_bytes: bytes):
    """
    Test that hex numbers render minimally and encode to minimal big-endian bytes.
    """
    assert str(number) == as_string
    assert number.to_be_bytes() == as_bytes
    assert str(Number(int(number))) == str(int(number))


@pytest.mark.parametrize(
    "input_bytes, expected",
    [
        pytest.param("0x", b"", id="empty_hex"),
        pytest.param("", b"", id="empty_string"),
        pytest.param("0x1", b"\x01", id="odd_length_hex"),
        pytest.param("0xABcd", b"\xab\xcd", id="mixed_case_hex"),
        pytest.param("0x ab cd", b"\xab\xcd", id="hex_with_spaces"),
        pytest.param([], b"", id="empty_list"),
        pytest.param([1, 255], b"\x01\xff", id="byte_list"),
        pytest.param(bytearray(b"\x02"), b"\x02", id="bytearray"),
    ],
)
def test_bytes_conversions(input_bytes: Any, expected: bytes):
    """
    Test that bytes are accepted as hex strings, byte lists and bytes-like objects.
    """
    assert Bytes(input_bytes) == expected


@pytest.mark.parametrize(
    "input_bytes, exception",
    [
        pytest.param("0xzz", ValidationError, id="malformed_hex"),
        pytest.param([256], ValidationError, id="byte_out_of_range"),
        pytest.param(["a"], TypeMismatchError, id="list_of_strings"),
        pytest.param(5, TypeMismatchError, id="int"),
        pytest.param(None, TypeMismatchError, id="none"),
    ],
)
def test_bytes_rejections(input_bytes: Any, exception: type):
    """
    Test the errors raised for byte inputs that cannot be normalized.
    """
    with pytest.raises(exception):
        Bytes(input_bytes)


@pytest.mark.parametrize(
    "type_, input_bytes, exception",
    [
        pytest.param(Address, "0x01", ValidationError, id="short_address"),
        pytest.param(Address, "0x" + "00" * 21, ValidationError, id="long_address"),
        pytest.param(Address, 1, TypeMismatchError, id="address_from_int"),
        pytest.param(StorageKey, "0x" + "00" * 31, ValidationError, id="short_storage_key"),
        pytest.param(Hash, "0x" + "00" * 33, ValidationError, id="long_hash"),
        pytest.param(Address, "0x" + "a" * 39, ValidationError, id="odd_length_address"),
        pytest.param(StorageKey, "0x" + "1" * 63, ValidationError, id="odd_length_storage_key"),
        pytest.param(Hash, "0x" + "00" * 31 + "0", ValidationError, id="short_odd_length_hash"),
    ],
)
def test_fixed_size_bytes_rejections(type_: type, input_bytes: Any, exception: type):
    """
    Test that fixed size bytes are never padded nor truncated.
    """
    with pytest.raises(exception):
        type_(input_bytes)


def test_bytes_hex_and_keccak():
    """
    Test the hexadecimal representation and the keccak256 hash of bytes.
    """
    assert Bytes(b"\xab").hex() == "0xab"
    assert str(Bytes(b"")) == "0x"
    assert Bytes(b"").keccak256() == (
        "0xc5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    )
    assert isinstance(Bytes(b"").keccak256(), Hash)


class Sample(CamelModel):
    """Model used to test the pydantic integration of the base types."""

    gas_limit: HexNumber
    payload: Bytes = Bytes(b"")
    recipient: Address | None = None


def test_model_serialization():
    """
    Test that models accept loose input and serialize to canonical JSON.
    """
    sample = Sample(gas_limit="21000", payload=[1])
    assert sample.gas_limit == 21000
    serialized = sample.serialize(mode="json", by_alias=True)
    assert serialized == {"gasLimit": "0x5208", "payload": "0x01"}
    assert Sample.model_validate(serialized) == sample
    assert "recipient" not in repr(sample)
    assert "gas_limit='0x5208'" in repr(sample)


def test_model_propagates_field_errors():
    """
    Test that errors raised by the base types reach the caller unchanged.
    """
    with pytest.raises(RangeError):
        Sample(gas_limit=-1)
    with pytest.raises(ValidationError):
        Sample(gas_limit=0, recipient="0x01")


def test_model_copy():
    """
    Test that copies of a model are validated again.
    """
    sample = Sample(gas_limit=1)
    assert sample.copy(gas_limit="0x2").gas_limit == 2
    with pytest.raises(RangeError):
        sample.copy(gas_limit=2**256)
