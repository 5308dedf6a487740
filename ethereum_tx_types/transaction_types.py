"""
Transaction types: legacy, access list ([EIP-2930]) and fee market
([EIP-1559]).

Every type is a frozen pydantic model built from loosely-typed field data,
converted to and from the ordered values array consumed by the wire codec,
and rendered as canonical JSON.

[EIP-2930]: https://eips.ethereum.org/EIPS/eip-2930
[EIP-1559]: https://eips.ethereum.org/EIPS/eip-1559
"""

from dataclasses import dataclass
from enum import IntEnum
from functools import cached_property
from types import MappingProxyType
from typing import (
    Annotated,
    Any,
    ClassVar,
    Dict,
    FrozenSet,
    List,
    Mapping,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

import ethereum_rlp as eth_rlp
from ethereum_rlp.exceptions import RLPException
from ethereum_types.bytes import Bytes32
from ethereum_types.frozen import slotted_freezable
from pydantic import BeforeValidator, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

from ethereum_tx_base_types import (
    Address,
    Bytes,
    BytesConvertible,
    CamelModel,
    Hash,
    HexNumber,
    Number,
    to_bytes,
    to_number,
)
from ethereum_tx_exceptions import (
    DecodeError,
    RangeError,
    TransactionFieldError,
    TypeMismatchError,
    UnsupportedFieldError,
    ValidationError,
)
from ethereum_tx_logging import get_logger

from .access_list import Access, is_access_list_buffer, normalize_access_list
from .capabilities import FEE_MARKET_FIELDS, Capability, capabilities_from_fields

logger = get_logger(__name__)

MAX_UINT256 = 2**256 - 1

TX = TypeVar("TX", bound="TransactionBase")


class TransactionType(IntEnum):
    """Transaction types."""

    LEGACY = 0
    ACCESS_LIST = 1
    FEE_MARKET = 2


@dataclass
class TransactionDefaults:
    """Default values for transactions."""

    chain_id: int = 1


@slotted_freezable
@dataclass
class ECDSASignature:
    """
    Signature of a transaction: the recovery value `v` and the `r`, `s`
    scalars as 32 big-endian bytes.
    """

    v: int
    r: Bytes32
    s: Bytes32


def empty_to_none(value: Any) -> Any:
    """Read an empty recipient (`""`, `"0x"` or `b""`) as contract creation."""
    if isinstance(value, str) and value in ("", "0x"):
        return None
    if isinstance(value, (bytes, bytearray)) and len(value) == 0:
        return None
    return value


Recipient = Annotated[Address | None, BeforeValidator(empty_to_none)]
AccessListField = Annotated[Tuple[Access, ...], BeforeValidator(normalize_access_list)]


def check_fee_cap(gas_limit: int, fee_per_gas: int, field: str) -> None:
    """Check that the maximum fee a transaction can pay fits in 32 bytes."""
    if gas_limit * fee_per_gas > MAX_UINT256:
        raise RangeError(
            gas_limit * fee_per_gas, 32, f"gasLimit * {field} cannot exceed 32 bytes"
        )


class TransactionBase(CamelModel):
    """
    Fields and behavior shared by every transaction type.

    Subclasses declare their own type-specific fields and the layout of their
    values array. Fields that belong to another type are rejected when given
    a non-null value.
    """

    model_config = ConfigDict(frozen=True)

    transaction_type: ClassVar[TransactionType]
    values_fields: ClassVar[Tuple[str, ...]]
    signature_fields: ClassVar[Tuple[str, ...]] = ("v", "r", "s")

    nonce: HexNumber = HexNumber(0)
    gas_limit: HexNumber = HexNumber(0)
    to: Recipient = None
    value: HexNumber = HexNumber(0)
    data: Bytes = Bytes(b"")

    v: HexNumber | None = None
    r: HexNumber | None = None
    s: HexNumber | None = None

    @model_validator(mode="before")
    @classmethod
    def check_input_fields(cls, data: Any) -> Dict[str, Any]:
        """
        Map the input keys to field names, check the type discriminant, and
        reject the fields that do not belong to this transaction type.

        A field given as None takes its default value, so a null `gasPrice`
        is zero and a null `chainId` is the default chain ID.
        """
        fields = canonicalize_fields(data)
        ty = fields.pop("ty", None)
        if ty is not None and to_number(ty) != cls.transaction_type:
            raise ValidationError(
                f"type {to_number(ty)} does not match {cls.__name__} "
                f"(type {int(cls.transaction_type)})"
            )
        for name, value in list(fields.items()):
            if value is None:
                del fields[name]
            elif name not in cls.model_fields:
                raise UnsupportedFieldError(to_camel(name), cls.transaction_type)
        return fields

    @model_validator(mode="after")
    def check_signature(self):
        """Check that the signature fields are either all present or all absent."""
        present = [name for name in self.signature_fields if getattr(self, name) is not None]
        if 0 < len(present) < len(self.signature_fields):
            raise ValidationError(
                f"inconsistent signature: only {', '.join(present)} given, "
                f"expected all or none of {', '.join(self.signature_fields)}"
            )
        return self

    @computed_field(alias="type")  # type: ignore[prop-decorator]
    @property
    def ty(self) -> HexNumber:
        """Type discriminant of the transaction."""
        return HexNumber(self.transaction_type)

    @classmethod
    def from_field_data(cls: Type[TX], data: Mapping[str, Any]) -> TX:
        """
        Build a transaction from loosely-typed field data.

        Keys can be camelCase, snake_case, or the JSON-RPC names `gas` and
        `input`. Numbers can be given as ints, decimal or hex strings, or
        big-endian bytes.
        """
        return cls.model_validate(data)

    @classmethod
    def from_json(cls: Type[TX], data: Mapping[str, Any]) -> TX:
        """Build a transaction from its JSON representation."""
        return cls.model_validate(data)

    @classmethod
    def from_values_array(cls: Type[TX], values: Sequence[Any]) -> TX:
        """
        Build a transaction from the values array produced by the wire codec.

        The array must have the unsigned or the signed length of this
        transaction type; any other length, or any malformed entry, raises a
        `DecodeError`.
        """
        if not isinstance(values, (list, tuple)):
            raise DecodeError(f"expected a list of values, got `{type(values).__name__}`")
        unsigned_length = len(cls.values_fields)
        signed_length = unsigned_length + len(cls.signature_fields)
        if len(values) not in (unsigned_length, signed_length):
            raise DecodeError(
                f"invalid values array length {len(values)} for {cls.__name__}, "
                f"expected {unsigned_length} or {signed_length}"
            )
        logger.debug(f"decoding {cls.__name__} from {len(values)} values")
        names = cls.values_fields + cls.signature_fields
        try:
            return cls.model_validate(
                {name: field_from_bytes(name, value) for name, value in zip(names, values)}
            )
        except TransactionFieldError as e:
            if isinstance(e, DecodeError):
                raise
            raise DecodeError(f"unable to decode {cls.__name__} values: {e}") from e

    def supports(self, capability: Any) -> bool:
        """Return whether this transaction type supports `capability`."""
        return supports(self.transaction_type, capability)

    def is_signed(self) -> bool:
        """Return whether the transaction carries a signature."""
        return self.v is not None

    @property
    def signature(self) -> ECDSASignature | None:
        """Return the signature of the transaction, if any."""
        if self.v is None or self.r is None or self.s is None:
            return None
        return ECDSASignature(
            v=int(self.v),
            r=Bytes32(int(self.r).to_bytes(32, byteorder="big")),
            s=Bytes32(int(self.s).to_bytes(32, byteorder="big")),
        )

    def with_signature(self: TX, signature: ECDSASignature) -> TX:
        """Return a copy of the transaction carrying `signature`."""
        return self.copy(
            v=signature.v,
            r=int.from_bytes(signature.r, byteorder="big"),
            s=int.from_bytes(signature.s, byteorder="big"),
        )

    def to_json(self) -> Dict[str, Any]:
        """
        Return the canonical JSON representation of the transaction.

        Fields that are absent, or that do not belong to this transaction
        type, are omitted.
        """
        return self.serialize(mode="json", by_alias=True)

    def to_values_array(self) -> List[Any]:
        """
        Return the fields of the transaction in the order expected by the wire
        codec, with the signature fields appended only when signed.
        """
        names = self.values_fields
        if self.is_signed():
            names += self.signature_fields
        return [self.field_to_bytes(name) for name in names]

    def field_to_bytes(self, name: str) -> Any:
        """Return the values array entry of a field."""
        value = getattr(self, name)
        if name == "to":
            return b"" if value is None else bytes(value)
        if name == "access_list":
            return [entry.to_buffer_item() for entry in value]
        if isinstance(value, Number):
            return value.to_be_bytes()
        return bytes(value)

    @cached_property
    def serialized(self) -> Bytes:
        """Return the serialized transaction, prefixed with its type if not legacy."""
        payload = eth_rlp.encode(self.to_values_array())
        if self.transaction_type == TransactionType.LEGACY:
            return Bytes(payload)
        return Bytes(bytes([self.transaction_type]) + payload)

    @cached_property
    def hash(self) -> Hash:
        """Return the hash of the serialized transaction."""
        return self.serialized.keccak256()


class LegacyTransaction(TransactionBase):
    """Transaction with a single gas price, as used before any typed transaction."""

    transaction_type: ClassVar[TransactionType] = TransactionType.LEGACY
    values_fields: ClassVar[Tuple[str, ...]] = (
        "nonce",
        "gas_price",
        "gas_limit",
        "to",
        "value",
        "data",
    )

    gas_price: HexNumber = HexNumber(0)

    @model_validator(mode="after")
    def check_fees(self):
        """Check that the gas price can be paid for the whole gas limit."""
        check_fee_cap(self.gas_limit, self.gas_price, "gasPrice")
        return self


class TypedTransactionBase(TransactionBase):
    """Checks common to the [EIP-2718](https://eips.ethereum.org/EIPS/eip-2718) types."""

    @model_validator(mode="after")
    def check_y_parity(self):
        """Check that `v` holds a y-parity."""
        if self.v is not None and self.v not in (0, 1):
            raise ValidationError(f"y-parity must be 0 or 1, got {int(self.v)}")
        return self


class AccessListTransaction(TypedTransactionBase):
    """Transaction with an access list, introduced in EIP-2930."""

    transaction_type: ClassVar[TransactionType] = TransactionType.ACCESS_LIST
    values_fields: ClassVar[Tuple[str, ...]] = (
        "chain_id",
        "nonce",
        "gas_price",
        "gas_limit",
        "to",
        "value",
        "data",
        "access_list",
    )

    chain_id: HexNumber = Field(default_factory=lambda: HexNumber(TransactionDefaults.chain_id))
    gas_price: HexNumber = HexNumber(0)
    access_list: AccessListField = ()

    @model_validator(mode="after")
    def check_fees(self):
        """Check that the gas price can be paid for the whole gas limit."""
        check_fee_cap(self.gas_limit, self.gas_price, "gasPrice")
        return self


class FeeMarketTransaction(TypedTransactionBase):
    """Transaction paying a base fee plus a priority fee, introduced in EIP-1559."""

    transaction_type: ClassVar[TransactionType] = TransactionType.FEE_MARKET
    values_fields: ClassVar[Tuple[str, ...]] = (
        "chain_id",
        "nonce",
        "max_priority_fee_per_gas",
        "max_fee_per_gas",
        "gas_limit",
        "to",
        "value",
        "data",
        "access_list",
    )

    chain_id: HexNumber = Field(default_factory=lambda: HexNumber(TransactionDefaults.chain_id))
    max_priority_fee_per_gas: HexNumber = HexNumber(0)
    max_fee_per_gas: HexNumber = HexNumber(0)
    access_list: AccessListField = ()

    @model_validator(mode="after")
    def check_fees(self):
        """Check the fee caps against each other and against the gas limit."""
        if self.max_fee_per_gas < self.max_priority_fee_per_gas:
            raise ValidationError(
                f"maxFeePerGas ({int(self.max_fee_per_gas)}) cannot be less than "
                f"maxPriorityFeePerGas ({int(self.max_priority_fee_per_gas)})"
            )
        check_fee_cap(self.gas_limit, self.max_fee_per_gas, "maxFeePerGas")
        return self


Transaction = LegacyTransaction | AccessListTransaction | FeeMarketTransaction

TRANSACTION_TYPES: Mapping[TransactionType, Type[Transaction]] = MappingProxyType(
    {
        tx_class.transaction_type: tx_class
        for tx_class in (LegacyTransaction, AccessListTransaction, FeeMarketTransaction)
    }
)

CAPABILITIES: Mapping[TransactionType, FrozenSet[Capability]] = MappingProxyType(
    {
        transaction_type: capabilities_from_fields(transaction_type, tx_class.model_fields)
        for transaction_type, tx_class in TRANSACTION_TYPES.items()
    }
)


def supports(transaction_type: Any, capability: Any) -> bool:
    """
    Return whether `transaction_type` supports `capability`.

    Unknown transaction types and unknown capabilities are not supported.
    """
    for value in (transaction_type, capability):
        if not isinstance(value, int) or isinstance(value, bool):
            return False
    return capability in CAPABILITIES.get(transaction_type, frozenset())


class TransactionBuilder(CamelModel):
    """
    Transaction under construction.

    Holds the fields of every transaction type and validates each value when
    it is assigned. `build` checks the fields against the selected (or
    inferred) type and returns the frozen transaction.
    """

    model_config = ConfigDict(validate_assignment=True)

    ty: HexNumber | None = Field(None, alias="type")
    chain_id: HexNumber | None = None
    nonce: HexNumber = HexNumber(0)
    gas_price: HexNumber | None = None
    max_priority_fee_per_gas: HexNumber | None = None
    max_fee_per_gas: HexNumber | None = None
    gas_limit: HexNumber = HexNumber(0)
    to: Recipient = None
    value: HexNumber = HexNumber(0)
    data: Bytes = Bytes(b"")
    access_list: AccessListField | None = None

    v: HexNumber | None = None
    r: HexNumber | None = None
    s: HexNumber | None = None

    @classmethod
    def from_field_data(cls, data: Mapping[str, Any]) -> "TransactionBuilder":
        """Create a builder populated with loosely-typed field data, skipping nulls."""
        fields = canonicalize_fields(data)
        return cls(**{name: value for name, value in fields.items() if value is not None})

    def build(self) -> Transaction:
        """Validate the fields against the transaction type and freeze them."""
        fields = {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }
        return from_field_data(fields)


ALL_FIELD_NAMES: FrozenSet[str] = frozenset(TransactionBuilder.model_fields)

FIELD_NAME_ALIASES: Mapping[str, str] = MappingProxyType(
    {to_camel(name): name for name in ALL_FIELD_NAMES}
    | {"type": "ty", "gas": "gas_limit", "input": "data"}
)


def canonical_field_name(key: Any) -> str | None:
    """Return the field name for an input key, or None if the key is unknown."""
    if key in ALL_FIELD_NAMES:
        return key
    return FIELD_NAME_ALIASES.get(key)


def canonicalize_fields(data: Any) -> Dict[str, Any]:
    """
    Return the input fields keyed by field name.

    Unknown keys, such as the `hash` or `blockNumber` returned by JSON-RPC,
    are dropped.
    """
    if not isinstance(data, Mapping):
        raise TypeMismatchError(data, "a mapping of transaction fields")
    fields: Dict[str, Any] = {}
    for key, value in data.items():
        name = canonical_field_name(key)
        if name is None:
            continue
        if name in fields:
            raise ValidationError(f"field `{to_camel(name)}` given more than once")
        fields[name] = value
    return fields


def infer_transaction_type(data: Mapping[str, Any]) -> TransactionType:
    """
    Return the transaction type selected by the field data.

    An explicit `type` wins; otherwise fee market fields select a fee market
    transaction, an access list an access list transaction, and anything
    else a legacy transaction.
    """
    fields = {name: value for name, value in canonicalize_fields(data).items() if value is not None}
    if "ty" in fields:
        ty = to_number(fields["ty"])
        if ty not in TRANSACTION_TYPES:
            raise ValidationError(f"unsupported transaction type {ty}")
        return TransactionType(ty)
    if FEE_MARKET_FIELDS.intersection(fields):
        transaction_type = TransactionType.FEE_MARKET
    elif "access_list" in fields:
        transaction_type = TransactionType.ACCESS_LIST
    else:
        transaction_type = TransactionType.LEGACY
    logger.debug(f"inferred transaction type {transaction_type.name}")
    return transaction_type


def from_field_data(
    data: Mapping[str, Any], *, freeze: bool = True
) -> Transaction | TransactionBuilder:
    """
    Build a transaction from loosely-typed field data.

    The type is taken from the `type` field or inferred from the fields
    present. With `freeze=False` the validated `TransactionBuilder` is
    returned instead, to be completed and frozen later with `build`.
    """
    if not freeze:
        return TransactionBuilder.from_field_data(data)
    return TRANSACTION_TYPES[infer_transaction_type(data)].from_field_data(data)


def from_json(data: Mapping[str, Any]) -> Transaction:
    """Build a transaction from its JSON representation."""
    return TRANSACTION_TYPES[infer_transaction_type(data)].from_json(data)


def from_values_array(
    values: Sequence[Any], transaction_type: int = TransactionType.LEGACY
) -> Transaction:
    """Build a transaction of the given type from its values array."""
    if transaction_type not in TRANSACTION_TYPES:
        raise DecodeError(f"unknown transaction type `{transaction_type}`")
    return TRANSACTION_TYPES[TransactionType(transaction_type)].from_values_array(values)


def from_serialized(envelope: BytesConvertible) -> Transaction:
    """
    Decode a serialized transaction: either a legacy RLP list or a type byte
    followed by the RLP payload.
    """
    raw = to_bytes(envelope)
    if len(raw) == 0:
        raise DecodeError("empty transaction envelope")
    if raw[0] >= 0xC0:
        transaction_type, payload = TransactionType.LEGACY, raw
    elif raw[0] in TRANSACTION_TYPES and raw[0] != TransactionType.LEGACY:
        transaction_type, payload = TransactionType(raw[0]), raw[1:]
    else:
        raise DecodeError(f"unknown transaction type `{raw[0]}`")
    logger.debug(f"decoding {transaction_type.name} envelope of {len(raw)} bytes")
    try:
        values = eth_rlp.decode(payload)
    except RLPException as e:
        raise DecodeError(f"invalid RLP payload: {e}") from e
    if isinstance(values, bytes):
        raise DecodeError("transaction payload is not an RLP list")
    return TRANSACTION_TYPES[transaction_type].from_values_array(values)


def field_from_bytes(name: str, value: Any) -> Any:
    """Convert a values array entry into the input expected by the field."""
    if name == "access_list":
        if not isinstance(value, (list, tuple)) or not is_access_list_buffer(value):
            raise DecodeError("access list must be in positional form")
        return value
    if not isinstance(value, (bytes, bytearray)):
        raise DecodeError(f"field `{to_camel(name)}` must be bytes, got `{type(value).__name__}`")
    if name == "to":
        if len(value) not in (0, 20):
            raise DecodeError(f"recipient must be empty or 20 bytes, got {len(value)}")
        return bytes(value)
    if name == "data":
        return bytes(value)
    if len(value) > 0 and value[0] == 0:
        raise DecodeError(f"field `{to_camel(name)}` has leading zero bytes")
    return int.from_bytes(value, byteorder="big")
