"""
AllowMint State Components

Ticket bitmap, token ledger and royalty table. Transitions over the bundled
state live in allowmint.state.machine.
"""

from allowmint.state.bitmap import TicketBitmap
from allowmint.state.ledger import TokenLedger
from allowmint.state.royalty import RoyaltyInfo, RoyaltyTable

__all__ = [
    "TicketBitmap",
    "TokenLedger",
    "RoyaltyInfo",
    "RoyaltyTable",
]
