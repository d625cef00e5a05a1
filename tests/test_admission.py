"""
AllowMint Presale Admission Tests

Step ordering and the no-partial-effect guarantee.
"""

import pytest

from allowmint.config import PresaleConfig
from allowmint.constants import EVENT_TICKET_CONSUMED, EVENT_TRANSFER, MAX_TICKETS
from allowmint.core.types import Hash
from allowmint.crypto.merkle import MembershipVerifier, MerkleTree
from allowmint.errors import (
    DuplicateTokenError,
    InvalidProofError,
    TicketAlreadyUsedError,
    TicketRangeError,
    TokenIdRangeError,
    WrongPaymentError,
)
from allowmint.presale.admission import AdmissionController


@pytest.fixture
def controller(config) -> AdmissionController:
    return AdmissionController(config.presale, MembershipVerifier(config.presale.merkle_root))


class TestAdmissionSuccess:
    """Successful admissions."""

    def test_admit(self, controller, empty_state, tree, alice, discount_price):
        """Test a valid claim consumes the ticket and mints the token."""
        proof = tree.proof_for(alice, 42)
        new_state = controller.admit_presale(empty_state, alice, 42, proof, 7, discount_price)

        assert not new_state.bitmap.is_available(42)
        assert new_state.ledger.owner_of(7) == alice
        assert [e.name for e in new_state.events] == [EVENT_TICKET_CONSUMED, EVENT_TRANSFER]

    def test_input_state_untouched(self, controller, empty_state, tree, alice, discount_price):
        """Test the committed state passed in is never modified."""
        proof = tree.proof_for(alice, 42)
        controller.admit_presale(empty_state, alice, 42, proof, 7, discount_price)

        assert empty_state.bitmap.is_available(42)
        assert not empty_state.ledger.exists(7)
        assert empty_state.events == []

    def test_mismatched_root(self, config, mock_hash):
        """Test the verifier must hold the configured root."""
        with pytest.raises(ValueError):
            AdmissionController(config.presale, MembershipVerifier(mock_hash))


class TestAdmissionFailures:
    """Each step rejects on its own."""

    def test_invalid_proof(self, controller, empty_state, tree, alice, mallory, discount_price):
        """Step 1: proof for another address."""
        proof = tree.proof_for(alice, 42)
        with pytest.raises(InvalidProofError):
            controller.admit_presale(empty_state, mallory, 42, proof, 7, discount_price)

    def test_ticket_out_of_range(self, deployer, empty_state, alice, discount_price):
        """Step 2: a proven ticket beyond the bitmap is still rejected."""
        tree = MerkleTree.from_entries([(alice, MAX_TICKETS), (alice, 1)])
        presale = PresaleConfig(presale_max_supply=500, merkle_root=tree.root)
        controller = AdmissionController(presale, MembershipVerifier(tree.root))

        with pytest.raises(TicketRangeError):
            controller.admit_presale(
                empty_state, alice, MAX_TICKETS, tree.proof_for(alice, MAX_TICKETS), 7, discount_price
            )

    def test_ticket_already_used(self, controller, empty_state, tree, alice, discount_price):
        """Step 3: second claim of the same ticket."""
        proof = tree.proof_for(alice, 42)
        state = controller.admit_presale(empty_state, alice, 42, proof, 7, discount_price)

        with pytest.raises(TicketAlreadyUsedError):
            controller.admit_presale(state, alice, 42, proof, 8, discount_price)

    @pytest.mark.parametrize("delta", [-1, 1, 500_000_000_000])
    def test_wrong_payment(self, controller, empty_state, tree, alice, discount_price, delta):
        """Step 4: under- and overpayment."""
        proof = tree.proof_for(alice, 42)
        with pytest.raises(WrongPaymentError):
            controller.admit_presale(empty_state, alice, 42, proof, 7, discount_price + delta)

    def test_full_price_is_wrong_payment(self, controller, empty_state, tree, alice, mint_price):
        """Step 4: paying mint_price on the presale path is rejected."""
        proof = tree.proof_for(alice, 42)
        with pytest.raises(WrongPaymentError):
            controller.admit_presale(empty_state, alice, 42, proof, 7, mint_price)

    @pytest.mark.parametrize("token_id", [0, 501, -3])
    def test_token_out_of_range(self, controller, empty_state, tree, alice, discount_price, token_id):
        """Step 5: token id outside [1, presale_max_supply]."""
        proof = tree.proof_for(alice, 42)
        with pytest.raises(TokenIdRangeError):
            controller.admit_presale(empty_state, alice, 42, proof, token_id, discount_price)

    def test_duplicate_token(self, controller, empty_state, tree, alice, bob, discount_price):
        """Step 6: token id already minted by another claim."""
        state = controller.admit_presale(
            empty_state, alice, 42, tree.proof_for(alice, 42), 7, discount_price
        )
        with pytest.raises(DuplicateTokenError):
            controller.admit_presale(state, bob, 7, tree.proof_for(bob, 7), 7, discount_price)

        assert state.bitmap.is_available(7)


class TestAdmissionOrdering:
    """When several checks fail, the earliest step wins."""

    def test_proof_before_payment(self, controller, empty_state, alice, mock_hash):
        """Test invalid proof is reported before wrong payment."""
        with pytest.raises(InvalidProofError):
            controller.admit_presale(empty_state, alice, 42, [mock_hash], 0, 1)

    def test_used_ticket_before_payment(self, controller, empty_state, tree, alice, discount_price):
        """Test used ticket is reported before wrong payment."""
        proof = tree.proof_for(alice, 42)
        state = controller.admit_presale(empty_state, alice, 42, proof, 7, discount_price)
        with pytest.raises(TicketAlreadyUsedError):
            controller.admit_presale(state, alice, 42, proof, 9999, 1)

    def test_payment_before_token_range(self, controller, empty_state, tree, alice):
        """Test wrong payment is reported before a bad token id."""
        proof = tree.proof_for(alice, 42)
        with pytest.raises(WrongPaymentError):
            controller.admit_presale(empty_state, alice, 42, proof, 0, 1)


class TestAdmissionRollback:
    """A failure after the ticket bit is cleared leaves no trace."""

    @pytest.mark.parametrize("token_id,paid_delta,error", [
        (7, 1, WrongPaymentError),
        (0, 0, TokenIdRangeError),
        (3, 0, DuplicateTokenError),
    ])
    def test_late_failure_keeps_ticket(
        self, controller, empty_state, tree, alice, bob, discount_price, token_id, paid_delta, error
    ):
        """Test the committed bitmap, ledger and log survive a late failure."""
        state = controller.admit_presale(
            empty_state, bob, 7, tree.proof_for(bob, 7), 3, discount_price
        )
        words = state.bitmap.words
        events = list(state.events)

        with pytest.raises(error):
            controller.admit_presale(
                state, alice, 42, tree.proof_for(alice, 42), token_id, discount_price + paid_delta
            )

        assert state.bitmap.words == words
        assert state.bitmap.is_available(42)
        assert state.events == events
        assert state.ledger.total_minted() == 1

        retried = controller.admit_presale(
            state, alice, 42, tree.proof_for(alice, 42), 8, discount_price
        )
        assert retried.ledger.owner_of(8) == alice
