"""
AllowMint Contract State

Everything a call can change, bundled so it can be staged and committed as
one unit.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

from allowmint.core.types import Address
from allowmint.state.bitmap import TicketBitmap
from allowmint.state.ledger import TokenLedger
from allowmint.state.royalty import RoyaltyTable


@dataclass(frozen=True)
class Event:
    """One emitted contract event."""
    name: str
    args: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "event": self.name,
            "args": {k: str(v) if isinstance(v, Address) else v for k, v in self.args.items()},
        }


@dataclass
class ContractState:
    """
    Mutable contract state.

    - Ticket bitmap
    - Token ownership ledger
    - Royalty table
    - Event log
    """
    bitmap: TicketBitmap
    ledger: TokenLedger
    royalties: RoyaltyTable
    events: List[Event] = field(default_factory=list)
    sequence: int = 0                   # Committed calls so far

    def emit(self, name: str, **args: Any) -> None:
        """Append an event to the log."""
        self.events.append(Event(name=name, args=args))

    def copy(self) -> "ContractState":
        """Create a deep copy of this state."""
        return ContractState(
            bitmap=self.bitmap.copy(),
            ledger=self.ledger.copy(),
            royalties=self.royalties.copy(),
            events=list(self.events),
            sequence=self.sequence,
        )

    @classmethod
    def initial(cls, royalty_receiver: Address, royalty_fee: int) -> "ContractState":
        """Fresh state: every ticket available, no tokens, default royalty only."""
        return cls(
            bitmap=TicketBitmap(),
            ledger=TokenLedger(),
            royalties=RoyaltyTable(royalty_receiver, royalty_fee),
        )

    def __repr__(self) -> str:
        return (
            f"ContractState(seq={self.sequence}, "
            f"tokens={self.ledger.total_minted()}, "
            f"tickets_available={self.bitmap.available_count()}, "
            f"events={len(self.events)})"
        )
