"""
AllowMint Issuance Gateway

Public entry points of the contract. Every mutating call runs through the
state machine and either commits in full or raises with no effect.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

from allowmint.config import ContractConfig, PresaleConfig
from allowmint.constants import SUPPORTED_INTERFACES, INTERFACE_ID_INVALID
from allowmint.core.state import ContractState, Event
from allowmint.core.types import Address, Hash
from allowmint.crypto.merkle import MembershipVerifier
from allowmint.errors import NonexistentTokenError
from allowmint.presale.admission import AdmissionController
from allowmint.state.machine import (
    StateMachine,
    apply_approve,
    apply_mint,
    apply_royalty_override,
    apply_set_approval_for_all,
    apply_transfer,
)

logger = logging.getLogger(__name__)


class IssuanceGateway:
    """
    Collectible token contract with open, self and presale minting.

    Usage:
        gateway = IssuanceGateway(config, deployer)
        gateway.self_mint(sender=alice, token_id=1, value=config.presale.mint_price)
        gateway.presale_mint(sender=bob, token_id=2, ticket=42, proof=proof,
                             value=config.presale.discount_price)
    """

    def __init__(self, config: ContractConfig, deployer: Address):
        config.check()

        self._name = config.name
        self._symbol = config.symbol
        self._base_uri = config.metadata.base_uri
        self._presale = config.presale
        self._deployer = deployer

        self._admission = AdmissionController(
            self._presale,
            MembershipVerifier(self._presale.merkle_root),
        )
        self._machine = StateMachine(
            ContractState.initial(
                config.royalty_receiver(deployer),
                config.royalty.fee_numerator,
            )
        )

        logger.info(
            f"Deployed {self._name} ({self._symbol}) by {deployer}: "
            f"max_supply={self._presale.presale_max_supply}, "
            f"root={self._presale.merkle_root}"
        )

    @classmethod
    def from_config(cls, path: str, deployer: Address) -> "IssuanceGateway":
        """Deploy from a JSON configuration file."""
        return cls(ContractConfig.load(path), deployer)

    @property
    def _state(self) -> ContractState:
        return self._machine.current_state

    # --------------------------------------------------------------------------
    # Issuance
    # --------------------------------------------------------------------------

    def mint_to(self, sender: Address, to: Address, token_id: int, value: int) -> None:
        """Mint token_id to a recipient at mint_price."""
        self._machine.execute("mint_to", apply_mint, self._presale, to, token_id, value)
        logger.info(f"mint_to: token {token_id} -> {to} (sender {sender})")

    def self_mint(self, sender: Address, token_id: int, value: int) -> None:
        """Mint token_id to the caller at mint_price."""
        self._machine.execute("self_mint", apply_mint, self._presale, sender, token_id, value)
        logger.info(f"self_mint: token {token_id} -> {sender}")

    def presale_mint(
        self,
        sender: Address,
        token_id: int,
        ticket: int,
        proof: Sequence[Hash],
        value: int
    ) -> None:
        """Mint token_id to the caller at discount_price, consuming an allowlist ticket."""
        self._machine.execute(
            "presale_mint",
            self._admission.admit_presale,
            sender,
            ticket,
            list(proof),
            token_id,
            value,
        )
        logger.info(f"presale_mint: ticket {ticket}, token {token_id} -> {sender}")

    # --------------------------------------------------------------------------
    # Royalties
    # --------------------------------------------------------------------------

    def set_token_royalty(
        self,
        sender: Address,
        token_id: int,
        receiver: Address,
        fee_numerator: int
    ) -> None:
        """Override the royalty of one token. Owner or approved only."""
        self._machine.execute(
            "set_token_royalty",
            apply_royalty_override,
            sender,
            token_id,
            receiver,
            fee_numerator,
        )

    def royalty_info(self, token_id: int, sale_price: int) -> Tuple[Address, int]:
        """ERC-2981 royaltyInfo: (receiver, amount)."""
        return self._state.royalties.royalty_of(token_id, sale_price)

    # --------------------------------------------------------------------------
    # Ledger
    # --------------------------------------------------------------------------

    def approve(self, sender: Address, to: Address, token_id: int) -> None:
        self._machine.execute("approve", apply_approve, sender, to, token_id)

    def set_approval_for_all(self, sender: Address, operator: Address, approved: bool) -> None:
        self._machine.execute(
            "set_approval_for_all", apply_set_approval_for_all, sender, operator, approved
        )

    def transfer_from(self, sender: Address, from_: Address, to: Address, token_id: int) -> None:
        self._machine.execute("transfer_from", apply_transfer, sender, from_, to, token_id)

    def owner_of(self, token_id: int) -> Address:
        return self._state.ledger.owner_of(token_id)

    def balance_of(self, owner: Address) -> int:
        return self._state.ledger.balance_of(owner)

    def get_approved(self, token_id: int) -> Optional[Address]:
        return self._state.ledger.get_approved(token_id)

    def is_approved_for_all(self, owner: Address, operator: Address) -> bool:
        return self._state.ledger.is_approved_for_all(owner, operator)

    def total_minted(self) -> int:
        return self._state.ledger.total_minted()

    # --------------------------------------------------------------------------
    # Presale reads
    # --------------------------------------------------------------------------

    def is_ticket_available(self, ticket: int) -> bool:
        return self._state.bitmap.is_available(ticket)

    def ticket_words(self) -> Tuple[int, ...]:
        """Raw bitmap words (set bit = ticket available)."""
        return self._state.bitmap.words

    @property
    def merkle_root(self) -> Hash:
        return self._presale.merkle_root

    @property
    def presale_config(self) -> PresaleConfig:
        return self._presale

    # --------------------------------------------------------------------------
    # Metadata and capabilities
    # --------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def deployer(self) -> Address:
        return self._deployer

    def token_uri(self, token_id: int) -> str:
        """Metadata location: base URI followed by the decimal token id."""
        if not self._state.ledger.exists(token_id):
            raise NonexistentTokenError(token_id)
        return f"{self._base_uri}{token_id}"

    def supports_interface(self, interface_id: int) -> bool:
        """ERC-165 capability query against a fixed set."""
        if interface_id == INTERFACE_ID_INVALID:
            return False
        return interface_id in SUPPORTED_INTERFACES

    @property
    def events(self) -> List[Event]:
        """Committed event log."""
        return list(self._state.events)

    def snapshot(self) -> ContractState:
        """Independent copy of the committed state."""
        return self._state.copy()

    def __repr__(self) -> str:
        return f"IssuanceGateway({self._name!r}, {self._state!r})"
