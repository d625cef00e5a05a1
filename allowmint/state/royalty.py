"""
AllowMint Royalty Table

ERC-2981 royalty lookup: one default (receiver, fee) pair plus optional
per-token overrides. Fees are parts per FEE_DENOMINATOR.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from allowmint.constants import FEE_DENOMINATOR
from allowmint.core.types import Address
from allowmint.errors import InvalidRoyaltyError


@dataclass(frozen=True)
class RoyaltyInfo:
    """Royalty receiver and fee numerator."""
    receiver: Address
    fee_numerator: int

    def amount_for(self, sale_price: int) -> int:
        """Royalty owed on a sale, truncated."""
        return sale_price * self.fee_numerator // FEE_DENOMINATOR


def _validated(receiver: Address, fee_numerator: int) -> RoyaltyInfo:
    if fee_numerator < 0 or fee_numerator > FEE_DENOMINATOR:
        raise InvalidRoyaltyError(
            f"fee {fee_numerator} outside [0, {FEE_DENOMINATOR}]",
            {"fee_numerator": fee_numerator}
        )
    if receiver.is_zero():
        raise InvalidRoyaltyError("zero receiver")
    return RoyaltyInfo(receiver=receiver, fee_numerator=fee_numerator)


class RoyaltyTable:
    """Default royalty with per-token overrides."""

    def __init__(self, default_receiver: Address, default_fee: int):
        self._default = _validated(default_receiver, default_fee)
        self._overrides: Dict[int, RoyaltyInfo] = {}

    @property
    def default(self) -> RoyaltyInfo:
        return self._default

    def get_override(self, token_id: int) -> Optional[RoyaltyInfo]:
        return self._overrides.get(token_id)

    def set_override(self, token_id: int, receiver: Address, fee_numerator: int) -> RoyaltyInfo:
        """Set a per-token override. Authorization is the caller's job."""
        info = _validated(receiver, fee_numerator)
        self._overrides[token_id] = info
        return info

    def royalty_of(self, token_id: int, sale_price: int) -> Tuple[Address, int]:
        """(receiver, amount) for a sale of token_id at sale_price."""
        info = self._overrides.get(token_id, self._default)
        return info.receiver, info.amount_for(sale_price)

    def copy(self) -> "RoyaltyTable":
        """Create an independent copy (entries are immutable)."""
        table = RoyaltyTable.__new__(RoyaltyTable)
        table._default = self._default
        table._overrides = dict(self._overrides)
        return table

    def __len__(self) -> int:
        return len(self._overrides)
