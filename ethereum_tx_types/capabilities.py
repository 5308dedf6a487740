"""Protocol capabilities a transaction type can support."""

from enum import IntEnum
from typing import Collection, FrozenSet


class Capability(IntEnum):
    """
    Protocol features that can be queried on a transaction type, numbered
    after the EIP that introduced them.
    """

    EIP155_REPLAY_PROTECTION = 155
    """
    Chain ID bound into the signed payload, see
    [EIP-155](https://eips.ethereum.org/EIPS/eip-155).
    """

    EIP1559_FEE_MARKET = 1559
    """
    Base fee plus priority fee pricing, see
    [EIP-1559](https://eips.ethereum.org/EIPS/eip-1559).
    """

    EIP2718_TYPED_TRANSACTION = 2718
    """
    Typed transaction envelope, see
    [EIP-2718](https://eips.ethereum.org/EIPS/eip-2718).
    """

    EIP2930_ACCESS_LISTS = 2930
    """
    Declared access lists, see
    [EIP-2930](https://eips.ethereum.org/EIPS/eip-2930).
    """


FEE_MARKET_FIELDS = frozenset({"max_priority_fee_per_gas", "max_fee_per_gas"})


def capabilities_from_fields(
    transaction_type: int, field_names: Collection[str]
) -> FrozenSet[Capability]:
    """
    Derive the capabilities of a transaction type from its type discriminant
    and the names of the fields it declares.

    Replay protection is reported for every type, typed ones included: legacy
    transactions encode the chain ID in `v` and typed transactions sign over
    their `chain_id` field, so both are bound to a single chain.
    """
    capabilities = {Capability.EIP155_REPLAY_PROTECTION}
    if transaction_type > 0:
        capabilities.add(Capability.EIP2718_TYPED_TRANSACTION)
    if "access_list" in field_names:
        capabilities.add(Capability.EIP2930_ACCESS_LISTS)
    if FEE_MARKET_FIELDS.issubset(field_names):
        capabilities.add(Capability.EIP1559_FEE_MARKET)
    return frozenset(capabilities)
