"""
AllowMint Token Ledger

ERC-721 style ownership bookkeeping: owners, balances, per-token approvals
and operator approvals. The ledger is the only place that enforces token
id uniqueness.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterator, Optional, Set, Tuple

from allowmint.core.types import Address
from allowmint.errors import (
    DuplicateTokenError,
    IncorrectOwnerError,
    InvalidApprovalError,
    InvalidParameterError,
    InvalidReceiverError,
    NonexistentTokenError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


class TokenLedger:
    """In-memory token ownership ledger."""

    def __init__(self):
        self._owners: Dict[int, Address] = {}
        self._balances: Dict[Address, int] = {}
        self._token_approvals: Dict[int, Address] = {}
        self._operators: Set[Tuple[Address, Address]] = set()

    # --------------------------------------------------------------------------
    # Reads
    # --------------------------------------------------------------------------

    def exists(self, token_id: int) -> bool:
        return token_id in self._owners

    def owner_of(self, token_id: int) -> Address:
        """Owner of a minted token."""
        owner = self._owners.get(token_id)
        if owner is None:
            raise NonexistentTokenError(token_id)
        return owner

    def balance_of(self, owner: Address) -> int:
        """Number of tokens held by an address."""
        if owner.is_zero():
            raise InvalidParameterError("owner", "zero address has no balance")
        return self._balances.get(owner, 0)

    def get_approved(self, token_id: int) -> Optional[Address]:
        """Approved address for a token, or None."""
        self.owner_of(token_id)
        return self._token_approvals.get(token_id)

    def is_approved_for_all(self, owner: Address, operator: Address) -> bool:
        return (owner, operator) in self._operators

    def is_approved_or_owner(self, spender: Address, token_id: int) -> bool:
        """True if spender owns the token or is approved for it."""
        owner = self.owner_of(token_id)
        return (
            spender == owner
            or self.is_approved_for_all(owner, spender)
            or self._token_approvals.get(token_id) == spender
        )

    def total_minted(self) -> int:
        return len(self._owners)

    def iter_tokens(self) -> Iterator[Tuple[int, Address]]:
        """Iterate (token_id, owner) in id order."""
        for token_id in sorted(self._owners):
            yield token_id, self._owners[token_id]

    # --------------------------------------------------------------------------
    # Mutations
    # --------------------------------------------------------------------------

    def mint(self, to: Address, token_id: int) -> None:
        """
        Create a token.

        Raises:
            InvalidReceiverError: to is the zero address
            DuplicateTokenError: token id already minted
        """
        if to.is_zero():
            raise InvalidReceiverError(str(to))
        if token_id in self._owners:
            raise DuplicateTokenError(token_id)

        self._owners[token_id] = to
        self._balances[to] = self._balances.get(to, 0) + 1

        logger.debug(f"Minted token {token_id} to {to}")

    def approve(self, caller: Address, to: Address, token_id: int) -> Address:
        """
        Approve one address for one token. Returns the token owner.

        Caller must be the owner or an operator of the owner.
        """
        owner = self.owner_of(token_id)
        if to == owner:
            raise InvalidApprovalError("approval to current owner")
        if caller != owner and not self.is_approved_for_all(owner, caller):
            raise UnauthorizedError(str(caller), token_id, "approve")

        if to.is_zero():
            self._token_approvals.pop(token_id, None)
        else:
            self._token_approvals[token_id] = to
        return owner

    def set_approval_for_all(self, owner: Address, operator: Address, approved: bool) -> None:
        """Grant or revoke an operator for all of owner's tokens."""
        if owner == operator:
            raise InvalidApprovalError("approve to caller")

        if approved:
            self._operators.add((owner, operator))
        else:
            self._operators.discard((owner, operator))

    def transfer(self, caller: Address, from_: Address, to: Address, token_id: int) -> None:
        """
        Move a token, clearing its approval.

        Raises:
            UnauthorizedError: caller neither owner nor approved
            IncorrectOwnerError: from_ is not the owner
            InvalidReceiverError: to is the zero address
        """
        if not self.is_approved_or_owner(caller, token_id):
            raise UnauthorizedError(str(caller), token_id, "transfer")

        owner = self._owners[token_id]
        if owner != from_:
            raise IncorrectOwnerError(token_id, str(from_), str(owner))
        if to.is_zero():
            raise InvalidReceiverError(str(to))

        self._token_approvals.pop(token_id, None)
        self._balances[from_] -= 1
        self._balances[to] = self._balances.get(to, 0) + 1
        self._owners[token_id] = to

        logger.debug(f"Transferred token {token_id}: {from_} -> {to}")

    def copy(self) -> "TokenLedger":
        """Create an independent copy."""
        ledger = TokenLedger()
        ledger._owners = dict(self._owners)
        ledger._balances = dict(self._balances)
        ledger._token_approvals = dict(self._token_approvals)
        ledger._operators = set(self._operators)
        return ledger

    def __repr__(self) -> str:
        return f"TokenLedger(tokens={len(self._owners)}, holders={len(self._balances)})"
