"""Ethereum transaction types, access lists and capabilities."""

from .access_list import (
    Access,
    AccessList,
    AccessListBuffer,
    AccessListBufferItem,
    AccessListItem,
    is_access_list,
    is_access_list_buffer,
    normalize_access_list,
    to_positional_form,
    to_struct_form,
)
from .capabilities import Capability
from .transaction_types import (
    CAPABILITIES,
    TRANSACTION_TYPES,
    AccessListTransaction,
    ECDSASignature,
    FeeMarketTransaction,
    LegacyTransaction,
    Transaction,
    TransactionBase,
    TransactionBuilder,
    TransactionDefaults,
    TransactionType,
    from_field_data,
    from_json,
    from_serialized,
    from_values_array,
    infer_transaction_type,
    supports,
)

__all__ = (
    "CAPABILITIES",
    "TRANSACTION_TYPES",
    "Access",
    "AccessList",
    "AccessListBuffer",
    "AccessListBufferItem",
    "AccessListItem",
    "AccessListTransaction",
    "Capability",
    "ECDSASignature",
    "FeeMarketTransaction",
    "LegacyTransaction",
    "Transaction",
    "TransactionBase",
    "TransactionBuilder",
    "TransactionDefaults",
    "TransactionType",
    "from_field_data",
    "from_json",
    "from_serialized",
    "from_values_array",
    "infer_transaction_type",
    "is_access_list",
    "is_access_list_buffer",
    "normalize_access_list",
    "supports",
    "to_positional_form",
    "to_struct_form",
)
