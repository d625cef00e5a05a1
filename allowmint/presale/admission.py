"""
AllowMint Presale Admission

Binds proof verification, ticket consumption, payment validation and token
creation into one transition.
"""

from __future__ import annotations
import logging
from typing import Sequence

from allowmint.config import PresaleConfig
from allowmint.constants import EVENT_TICKET_CONSUMED, MAX_TICKETS
from allowmint.core.state import ContractState
from allowmint.core.types import Address, Hash
from allowmint.crypto.merkle import MembershipVerifier
from allowmint.errors import InvalidProofError, TicketRangeError
from allowmint.state.machine import mint_token, require_payment

logger = logging.getLogger(__name__)


class AdmissionController:
    """
    Presale admission control.

    The checks run in a fixed order. The proof is checked before anything
    is touched; every later step runs on a staged copy of the state, so a
    failure after the ticket bit is cleared still leaves the committed
    bitmap unchanged.
    """

    def __init__(self, config: PresaleConfig, verifier: MembershipVerifier):
        if verifier.root != config.merkle_root:
            raise ValueError("Verifier root does not match presale merkle_root")
        self._config = config
        self._verifier = verifier

    @property
    def verifier(self) -> MembershipVerifier:
        return self._verifier

    def admit_presale(
        self,
        state: ContractState,
        claimant: Address,
        ticket: int,
        proof: Sequence[Hash],
        token_id: int,
        paid: int
    ) -> ContractState:
        """
        Admit one presale claim.

        1. (claimant, ticket) must be proven under the Merkle root
        2. Ticket must be in [0, MAX_TICKETS)
        3. Ticket must be unused; it is consumed
        4. Payment must equal discount_price exactly
        5. Token id must be in [1, presale_max_supply]
        6. Token id must be unused; token is minted to claimant

        Args:
            state: Committed state (not modified)
            claimant: Address claiming the ticket, receives the token
            ticket: Allowlist ticket number
            proof: Merkle proof for (claimant, ticket)
            token_id: Token id to mint
            paid: Amount sent with the call

        Returns:
            New state with ticket consumed and token minted

        Raises:
            InvalidProofError, TicketRangeError, TicketAlreadyUsedError,
            WrongPaymentError, TokenIdRangeError, DuplicateTokenError
        """
        if not self._verifier.verify(claimant, ticket, proof):
            raise InvalidProofError(str(claimant), ticket)

        if ticket >= MAX_TICKETS:
            raise TicketRangeError(ticket, MAX_TICKETS)

        new_state = state.copy()
        new_state.bitmap.consume(ticket)
        new_state.emit(EVENT_TICKET_CONSUMED, ticket=ticket, claimant=claimant)

        require_payment(paid, self._config.discount_price)

        mint_token(new_state, self._config, claimant, token_id)

        logger.debug(f"Admitted {claimant}: ticket {ticket} -> token {token_id}")

        return new_state
