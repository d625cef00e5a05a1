"""
AllowMint Ticket Bitmap

Single-use presale tickets packed into fixed-width words.

Ticket i lives in word i // WORD_BITS at bit i % WORD_BITS. A set bit means
the ticket is still available. Bits are only ever cleared.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from allowmint.constants import MAX_TICKETS, WORD_BITS
from allowmint.errors import TicketRangeError, TicketAlreadyUsedError

logger = logging.getLogger(__name__)


class TicketBitmap:
    """Fixed-capacity set of available ticket numbers."""

    def __init__(
        self,
        max_tickets: int = MAX_TICKETS,
        word_bits: int = WORD_BITS,
        words: Optional[List[int]] = None
    ):
        if max_tickets <= 0 or word_bits <= 0:
            raise ValueError(f"Bad bitmap sizing: {max_tickets} tickets, {word_bits}-bit words")

        self.max_tickets = max_tickets
        self.word_bits = word_bits
        self._word_mask = (1 << word_bits) - 1

        word_count = (max_tickets + word_bits - 1) // word_bits
        if words is None:
            self._words = [self._word_mask] * word_count
        else:
            if len(words) != word_count:
                raise ValueError(f"Expected {word_count} words, got {len(words)}")
            self._words = list(words)

    def _locate(self, ticket: int) -> Tuple[int, int]:
        """Return (word index, bit offset) of a ticket."""
        if ticket < 0 or ticket >= self.max_tickets:
            raise TicketRangeError(ticket, self.max_tickets)
        return ticket // self.word_bits, ticket % self.word_bits

    def is_available(self, ticket: int) -> bool:
        """True while the ticket has not been consumed."""
        word, offset = self._locate(ticket)
        return (self._words[word] >> offset) & 1 == 1

    def consume(self, ticket: int) -> None:
        """
        Clear a ticket's bit.

        Raises:
            TicketRangeError: ticket outside [0, max_tickets)
            TicketAlreadyUsedError: bit already cleared
        """
        word, offset = self._locate(ticket)
        mask = 1 << offset

        if not self._words[word] & mask:
            raise TicketAlreadyUsedError(ticket)

        self._words[word] &= ~mask & self._word_mask

        logger.debug(f"Consumed ticket {ticket} (word {word}, offset {offset})")

    @property
    def words(self) -> Tuple[int, ...]:
        """Current word values."""
        return tuple(self._words)

    @property
    def word_count(self) -> int:
        return len(self._words)

    def available_count(self) -> int:
        """Number of tickets still available."""
        padding = len(self._words) * self.word_bits - self.max_tickets
        return sum(bin(word).count("1") for word in self._words) - padding

    def consumed_count(self) -> int:
        return self.max_tickets - self.available_count()

    def copy(self) -> "TicketBitmap":
        """Create an independent copy."""
        return TicketBitmap(self.max_tickets, self.word_bits, list(self._words))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TicketBitmap):
            return (
                self.max_tickets == other.max_tickets
                and self.word_bits == other.word_bits
                and self._words == other._words
            )
        return False

    def __repr__(self) -> str:
        return (
            f"TicketBitmap(tickets={self.max_tickets}, "
            f"words={len(self._words)}x{self.word_bits}, "
            f"available={self.available_count()})"
        )
