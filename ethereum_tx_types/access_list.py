"""
Access lists, as defined in [EIP-2930](https://eips.ethereum.org/EIPS/eip-2930).

An access list has two interchangeable representations:

- the struct form, used in JSON: a list of
  `{"address": "0x...", "storageKeys": ["0x...", ...]}` items;
- the positional form, used in the values array handed to the wire codec: a
  list of `(address_bytes, [storage_key_bytes, ...])` pairs.

Transaction models store neither of them but a tuple of frozen `Access`
entries, which can be rendered in both forms.
"""

from typing import Any, Iterator, List, Mapping, Sequence, Tuple, TypedDict

from pydantic import ConfigDict

from ethereum_tx_base_types import Address, CamelModel, StorageKey
from ethereum_tx_exceptions import TypeMismatchError, ValidationError


class AccessListItem(TypedDict):
    """Access list entry in struct form."""

    address: str
    storageKeys: List[str]


AccessList = List[AccessListItem]

AccessListBufferItem = Tuple[bytes, List[bytes]]
AccessListBuffer = List[AccessListBufferItem]


class Access(CamelModel):
    """Normalized access list entry."""

    model_config = ConfigDict(frozen=True)

    address: Address
    storage_keys: Tuple[StorageKey, ...] = ()

    def to_buffer_item(self) -> AccessListBufferItem:
        """Return the entry in positional form."""
        return (bytes(self.address), [bytes(key) for key in self.storage_keys])


def _ensure_sequence(value: Any, expected: str) -> Sequence:
    if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
        raise TypeMismatchError(value, expected)
    return value


def is_access_list_buffer(access_list: Any) -> bool:
    """
    Return whether `access_list` is in positional form.

    The shape of the first element decides: a mapping (or `Access` entry) is
    struct form, a list or tuple is positional form. An empty list has no
    element to inspect and is always reported as positional form; empty
    lists of either form are interchangeable.
    """
    _ensure_sequence(access_list, "an access list")
    if len(access_list) == 0:
        return True
    first = access_list[0]
    if isinstance(first, (Mapping, Access)):
        return False
    if isinstance(first, (list, tuple)):
        return True
    raise TypeMismatchError(first, "an access list item or an (address, storage keys) pair")


def is_access_list(access_list: Any) -> bool:
    """Return whether `access_list` is in struct form."""
    return not is_access_list_buffer(access_list)


def _struct_item_fields(item: Any) -> Tuple[Any, Sequence]:
    """Extract the address and storage keys of a struct-form item."""
    if isinstance(item, Access):
        return item.address, item.storage_keys
    if not isinstance(item, Mapping):
        raise TypeMismatchError(item, "an access list item mapping")
    if "address" not in item:
        raise ValidationError(f"access list item {item!r} has no address")
    storage_keys = item.get("storageKeys", item.get("storage_keys", []))
    return item["address"], _ensure_sequence(storage_keys, "a list of storage keys")


def _buffer_item_fields(item: Any) -> Tuple[Any, Sequence]:
    """Extract the address and storage keys of a positional-form item."""
    if not isinstance(item, (list, tuple)) or len(item) != 2:
        raise TypeMismatchError(item, "an (address, storage keys) pair")
    address, storage_keys = item
    return address, _ensure_sequence(storage_keys, "a list of storage keys")


def _raw_bytes(value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeMismatchError(value, "bytes")
    return bytes(value)


def to_positional_form(access_list: Sequence[AccessListItem | Access]) -> AccessListBuffer:
    """
    Convert a struct-form access list into positional form.

    Every address must decode to exactly 20 bytes and every storage key to
    exactly 32 bytes, otherwise a `ValidationError` is raised. The order of
    the items and of their storage keys is preserved.
    """
    buffer: AccessListBuffer = []
    for item in _ensure_sequence(access_list, "an access list"):
        address, storage_keys = _struct_item_fields(item)
        buffer.append(
            (bytes(Address(address)), [bytes(StorageKey(key)) for key in storage_keys])
        )
    return buffer


def to_struct_form(access_list: Sequence[AccessListBufferItem]) -> AccessList:
    """
    Convert a positional-form access list into struct form.

    Bytes are rendered as lower-case `0x`-prefixed hex. Lengths are not
    checked again: the positional form only comes from already validated
    values.
    """
    struct: AccessList = []
    for item in _ensure_sequence(access_list, "an access list"):
        address, storage_keys = _buffer_item_fields(item)
        struct.append(
            AccessListItem(
                address="0x" + _raw_bytes(address).hex(),
                storageKeys=["0x" + _raw_bytes(key).hex() for key in storage_keys],
            )
        )
    return struct


def _iter_items(access_list: Any) -> Iterator[Tuple[Any, Sequence]]:
    if is_access_list_buffer(access_list):
        for item in access_list:
            yield _buffer_item_fields(item)
    else:
        for item in access_list:
            yield _struct_item_fields(item)


def normalize_access_list(access_list: Any) -> Tuple[Access, ...]:
    """
    Normalize an access list given in either form into `Access` entries.

    `None` is read as an empty access list.
    """
    if access_list is None:
        return ()
    return tuple(
        Access(
            address=Address(address),
            storage_keys=tuple(StorageKey(key) for key in storage_keys),
        )
        for address, storage_keys in _iter_items(access_list)
    )
