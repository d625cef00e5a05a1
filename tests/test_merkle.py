"""
AllowMint Merkle Allowlist Tests
"""

import pytest

from allowmint.core.abi import encode_allowlist_entry
from allowmint.core.types import Address, Hash
from allowmint.crypto.hash import keccak256, keccak256_raw
from allowmint.crypto.merkle import (
    MembershipVerifier,
    MerkleTree,
    build_allowlist,
    hash_leaf,
    hash_pair,
    process_proof,
    verify_proof,
)


class TestLeafAndNodeHashing:
    """Leaf and node construction."""

    def test_leaf_is_double_hash(self, alice):
        """Test leaf = keccak(keccak(abi.encode(address, ticket)))."""
        inner = keccak256_raw(encode_allowlist_entry(alice, 42))
        assert hash_leaf(alice, 42) == keccak256(inner)

    def test_leaf_differs_from_single_hash(self, alice):
        """Test the leaf is not the single hash of the entry."""
        assert hash_leaf(alice, 42) != keccak256(encode_allowlist_entry(alice, 42))

    def test_leaf_binds_both_fields(self, alice, bob):
        """Test changing address or ticket changes the leaf."""
        assert hash_leaf(alice, 42) != hash_leaf(bob, 42)
        assert hash_leaf(alice, 42) != hash_leaf(alice, 43)

    def test_pair_hash_commutative(self):
        """Test node hash does not depend on argument order."""
        a = Hash.from_int(1)
        b = Hash.from_int(2)
        assert hash_pair(a, b) == hash_pair(b, a)
        assert hash_pair(a, b) == keccak256(a.data + b.data)

    def test_pair_hash_orders_numerically(self):
        """Test the smaller value is hashed first."""
        high = Hash(b"\xff" + bytes(31))
        low = Hash(bytes(31) + b"\xff")
        assert hash_pair(high, low) == keccak256(low.data + high.data)


class TestProofVerification:
    """Proof folding and verification."""

    def test_two_leaf_root(self, alice, bob):
        """Test a two-entry tree by hand."""
        la = hash_leaf(alice, 1)
        lb = hash_leaf(bob, 2)
        lo, hi = sorted([la, lb])
        root = keccak256(lo.data + hi.data)

        assert verify_proof(root, la, [lb])
        assert verify_proof(root, lb, [la])

    def test_empty_proof_is_leaf(self, alice):
        """Test an empty proof folds to the leaf itself."""
        leaf = hash_leaf(alice, 5)
        assert process_proof(leaf, []) == leaf
        assert verify_proof(leaf, leaf, [])

    def test_every_entry_verifies(self, tree, allowlist):
        """Test every allowlist entry has a valid proof."""
        verifier = MembershipVerifier(tree.root)
        for address, ticket in allowlist:
            proof = tree.proof_for(address, ticket)
            assert proof is not None
            assert verifier.verify(address, ticket, proof)

    def test_wrong_ticket_rejected(self, tree, alice):
        """Test a proof does not transfer to another ticket."""
        verifier = MembershipVerifier(tree.root)
        proof = tree.proof_for(alice, 42)
        assert not verifier.verify(alice, 43, proof)

    def test_wrong_claimant_rejected(self, tree, alice, mallory):
        """Test a proof does not transfer to another address."""
        verifier = MembershipVerifier(tree.root)
        proof = tree.proof_for(alice, 42)
        assert not verifier.verify(mallory, 42, proof)

    def test_tampered_proof_rejected(self, tree, alice, mock_hash):
        """Test altering, dropping or extending the proof fails."""
        verifier = MembershipVerifier(tree.root)
        proof = tree.proof_for(alice, 42)

        assert not verifier.verify(alice, 42, [mock_hash] + proof[1:])
        assert not verifier.verify(alice, 42, proof[:-1])
        assert not verifier.verify(alice, 42, proof + [mock_hash])
        assert not verifier.verify(alice, 42, [])

    def test_negative_ticket_rejected(self, tree, alice):
        """Test negative tickets never verify."""
        verifier = MembershipVerifier(tree.root)
        assert not verifier.verify(alice, -1, tree.proof_for(alice, 42))

    def test_oversized_ticket_rejected(self, tree, alice):
        """Test tickets that do not fit a uint256 never verify."""
        verifier = MembershipVerifier(tree.root)
        assert not verifier.verify(alice, 2**256, tree.proof_for(alice, 42))

    def test_verification_is_repeatable(self, tree, alice):
        """Test repeated verification gives the same answer."""
        verifier = MembershipVerifier(tree.root)
        proof = tree.proof_for(alice, 42)
        results = {verifier.verify(alice, 42, proof) for _ in range(5)}
        assert results == {True}


class TestMerkleTree:
    """Tree construction."""

    def test_empty_tree(self):
        """Test an empty tree has the zero root and no proofs."""
        tree = MerkleTree([])
        assert tree.root == Hash.zero()
        assert tree.get_proof(0) is None

    def test_single_leaf(self, alice):
        """Test a single leaf is its own root."""
        tree = MerkleTree.from_entries([(alice, 1)])
        assert tree.root == hash_leaf(alice, 1)
        assert tree.get_proof(0) == []

    def test_root_independent_of_entry_order(self, allowlist):
        """Test listing order does not change the root."""
        forward = MerkleTree.from_entries(allowlist)
        backward = MerkleTree.from_entries(list(reversed(allowlist)))
        assert forward.root == backward.root

    @pytest.mark.parametrize("size", [2, 3, 5, 8, 13, 64])
    def test_all_proofs_valid_for_any_size(self, size):
        """Test odd-sized levels still produce valid proofs."""
        entries = [(Address(bytes([i + 1] * 20)), i) for i in range(size)]
        tree = MerkleTree.from_entries(entries)
        for address, ticket in entries:
            leaf = hash_leaf(address, ticket)
            assert tree.verify_proof(leaf, tree.get_proof(tree.find_index(leaf)))

    def test_unknown_entry_has_no_proof(self, tree, mallory):
        """Test proof_for returns None for non-members."""
        assert tree.proof_for(mallory, 1) is None
        assert not tree.contains(hash_leaf(mallory, 1))

    def test_out_of_range_index(self, tree):
        """Test bad indices return None."""
        assert tree.get_proof(-1) is None
        assert tree.get_proof(tree.leaf_count) is None

    def test_build_allowlist(self, allowlist, tree):
        """Test build_allowlist returns the tree root and per-entry proofs."""
        root, proofs = build_allowlist(allowlist)
        assert root == tree.root
        assert set(proofs) == set(allowlist)
        for (address, ticket), proof in proofs.items():
            assert verify_proof(root, hash_leaf(address, ticket), proof)
