"""
AllowMint State Machine

State transitions: apply_mint, apply_royalty_override, apply_approve,
apply_set_approval_for_all, apply_transfer.

Every transition takes the committed state, works on a copy and returns
the new state. A raised error leaves the committed state untouched, so a
call either takes full effect or none.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable

from allowmint.config import PresaleConfig
from allowmint.constants import (
    EVENT_APPROVAL,
    EVENT_APPROVAL_FOR_ALL,
    EVENT_TOKEN_ROYALTY_SET,
    EVENT_TRANSFER,
    FIRST_TOKEN_ID,
)
from allowmint.core.state import ContractState
from allowmint.core.types import Address, zero_address
from allowmint.errors import (
    AllowMintError,
    TokenIdRangeError,
    UnauthorizedError,
    WrongPaymentError,
)

logger = logging.getLogger(__name__)


def require_payment(paid: int, required: int) -> None:
    """Exact payment: no overpay, no underpay."""
    if paid != required:
        raise WrongPaymentError(paid, required)


def require_token_in_range(token_id: int, config: PresaleConfig) -> None:
    if token_id < FIRST_TOKEN_ID or token_id > config.presale_max_supply:
        raise TokenIdRangeError(token_id, config.presale_max_supply)


def mint_token(state: ContractState, config: PresaleConfig, to: Address, token_id: int) -> None:
    """
    Create a token with a unique id, in place.

    The one mint primitive behind every issuance path. Callers pass a staged
    copy, never the committed state.
    """
    require_token_in_range(token_id, config)
    state.ledger.mint(to, token_id)
    state.emit(EVENT_TRANSFER, from_=zero_address(), to=to, token_id=token_id)


def apply_mint(
    state: ContractState,
    config: PresaleConfig,
    to: Address,
    token_id: int,
    paid: int
) -> ContractState:
    """
    Apply a full-price mint.

    1. Payment must equal mint_price
    2. Token id must be in [1, presale_max_supply]
    3. Token id must be unused

    Returns:
        New state with token minted

    Raises:
        WrongPaymentError, TokenIdRangeError, DuplicateTokenError,
        InvalidReceiverError
    """
    require_payment(paid, config.mint_price)

    new_state = state.copy()
    mint_token(new_state, config, to, token_id)

    return new_state


def apply_royalty_override(
    state: ContractState,
    caller: Address,
    token_id: int,
    receiver: Address,
    fee_numerator: int
) -> ContractState:
    """
    Apply a per-token royalty override.

    Caller must own the token or be approved for it.

    Raises:
        NonexistentTokenError, UnauthorizedError, InvalidRoyaltyError
    """
    if not state.ledger.is_approved_or_owner(caller, token_id):
        raise UnauthorizedError(str(caller), token_id, "set_token_royalty")

    new_state = state.copy()
    info = new_state.royalties.set_override(token_id, receiver, fee_numerator)
    new_state.emit(
        EVENT_TOKEN_ROYALTY_SET,
        token_id=token_id,
        receiver=info.receiver,
        fee_numerator=info.fee_numerator,
    )

    return new_state


def apply_approve(
    state: ContractState,
    caller: Address,
    to: Address,
    token_id: int
) -> ContractState:
    """Approve one address for one token."""
    new_state = state.copy()
    owner = new_state.ledger.approve(caller, to, token_id)
    new_state.emit(EVENT_APPROVAL, owner=owner, approved=to, token_id=token_id)
    return new_state


def apply_set_approval_for_all(
    state: ContractState,
    owner: Address,
    operator: Address,
    approved: bool
) -> ContractState:
    """Grant or revoke an operator."""
    new_state = state.copy()
    new_state.ledger.set_approval_for_all(owner, operator, approved)
    new_state.emit(EVENT_APPROVAL_FOR_ALL, owner=owner, operator=operator, approved=approved)
    return new_state


def apply_transfer(
    state: ContractState,
    caller: Address,
    from_: Address,
    to: Address,
    token_id: int
) -> ContractState:
    """Move a token between addresses."""
    new_state = state.copy()
    new_state.ledger.transfer(caller, from_, to, token_id)
    new_state.emit(EVENT_TRANSFER, from_=from_, to=to, token_id=token_id)
    return new_state


@dataclass
class StateMachine:
    """
    Holds the committed state and swaps in the result of each successful
    transition.
    """
    current_state: ContractState

    def execute(
        self,
        label: str,
        transition: Callable[..., ContractState],
        *args: Any
    ) -> ContractState:
        """
        Run a transition against the committed state and commit its result.

        Raises:
            AllowMintError: propagated unchanged; nothing is committed
        """
        try:
            new_state = transition(self.current_state, *args)
        except AllowMintError as e:
            logger.debug(f"{label} reverted: {e}")
            raise

        new_state.sequence = self.current_state.sequence + 1
        self.current_state = new_state

        logger.debug(f"{label} committed (seq={new_state.sequence})")
        return new_state
