"""
AllowMint Merkle Allowlist

Binary Merkle tree over Keccak-256 with sorted-pair node hashing.

- Leaf: keccak256(keccak256(abi.encode(address, uint256 ticket)))
- Node: keccak256(min(a, b) || max(a, b))

Because siblings are ordered by value, a proof is a plain list of sibling
hashes with no left/right flags.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from allowmint.constants import UINT256_MAX
from allowmint.core.abi import encode_allowlist_entry
from allowmint.core.types import Address, Hash
from allowmint.crypto.hash import keccak256, double_keccak256

logger = logging.getLogger(__name__)


def hash_leaf(claimant: Address, ticket: int) -> Hash:
    """
    Leaf hash of one allowlist entry.

    Double-hashed so a leaf can never be confused with a 64-byte inner node.
    """
    return double_keccak256(encode_allowlist_entry(claimant, ticket))


def hash_pair(a: Hash, b: Hash) -> Hash:
    """Commutative node hash: the smaller value goes first."""
    if a < b:
        return keccak256(a.data + b.data)
    return keccak256(b.data + a.data)


def process_proof(leaf: Hash, proof: Sequence[Hash]) -> Hash:
    """
    Fold a proof over a leaf.

    Args:
        leaf: Starting leaf hash
        proof: Sibling hashes from the leaf level upwards

    Returns:
        Reconstructed root
    """
    current = leaf
    for sibling in proof:
        current = hash_pair(current, sibling)
    return current


def verify_proof(root: Hash, leaf: Hash, proof: Sequence[Hash]) -> bool:
    """True iff the proof reconstructs exactly this root."""
    return process_proof(leaf, proof) == root


class MembershipVerifier:
    """
    Checks (claimant, ticket) pairs against one fixed allowlist root.

    Read-only: the same inputs always give the same answer.
    """

    def __init__(self, root: Hash):
        self._root = root

    @property
    def root(self) -> Hash:
        """Return the committed Merkle root."""
        return self._root

    def verify(self, claimant: Address, ticket: int, proof: Sequence[Hash]) -> bool:
        """
        Verify that (claimant, ticket) is a leaf under the root.

        Args:
            claimant: Address claiming the ticket
            ticket: Ticket number
            proof: Sibling hashes

        Returns:
            True if proof is valid
        """
        if ticket < 0 or ticket > UINT256_MAX:
            return False
        valid = verify_proof(self._root, hash_leaf(claimant, ticket), proof)
        if not valid:
            logger.debug(f"Proof rejected for {claimant} ticket {ticket}")
        return valid


class MerkleTree:
    """
    Complete allowlist tree with proof generation.

    Leaves are sorted before building so the root does not depend on the
    order entries were listed in. A node without a sibling is promoted to
    the next level unchanged.
    """

    def __init__(self, leaves: List[Hash]):
        """
        Build a Merkle tree from leaf hashes.

        Args:
            leaves: List of leaf hashes (must be non-empty for proofs)
        """
        self._leaves: List[Hash] = sorted(leaves)
        self._levels: List[List[Hash]] = []

        if len(self._leaves) == 0:
            self._root = Hash.zero()
            return

        self._levels = [self._leaves]
        current = self._leaves

        while len(current) > 1:
            next_level = []
            for i in range(0, len(current), 2):
                if i + 1 < len(current):
                    next_level.append(hash_pair(current[i], current[i + 1]))
                else:
                    next_level.append(current[i])
            self._levels.append(next_level)
            current = next_level

        self._root = current[0]

    @classmethod
    def from_entries(cls, entries: Sequence[Tuple[Address, int]]) -> "MerkleTree":
        """Build a tree from (address, ticket) allowlist entries."""
        return cls([hash_leaf(address, ticket) for address, ticket in entries])

    @property
    def root(self) -> Hash:
        """Return the Merkle root."""
        return self._root

    @property
    def leaf_count(self) -> int:
        """Return the number of leaves."""
        return len(self._leaves)

    def get_proof(self, index: int) -> Optional[List[Hash]]:
        """
        Generate a proof for the leaf at the given index.

        Args:
            index: Index of the leaf in sorted order

        Returns:
            Sibling hashes if index is valid, None otherwise
        """
        if index < 0 or index >= len(self._leaves):
            return None

        proof = []
        current_index = index

        for level in self._levels[:-1]:  # Exclude root level
            sibling_index = current_index ^ 1
            if sibling_index < len(level):
                proof.append(level[sibling_index])
            current_index //= 2

        return proof

    def proof_for(self, claimant: Address, ticket: int) -> Optional[List[Hash]]:
        """Proof for an allowlist entry, or None if it is not in the tree."""
        index = self.find_index(hash_leaf(claimant, ticket))
        if index is None:
            return None
        return self.get_proof(index)

    def find_index(self, leaf: Hash) -> Optional[int]:
        """
        Find the index of a leaf in sorted order.

        Args:
            leaf: Hash to find

        Returns:
            Index if found, None otherwise
        """
        try:
            return self._leaves.index(leaf)
        except ValueError:
            return None

    def contains(self, leaf: Hash) -> bool:
        """Check if a leaf is in the tree."""
        return self.find_index(leaf) is not None

    def verify_proof(self, leaf: Hash, proof: Sequence[Hash]) -> bool:
        """Verify a proof against this tree's root."""
        return verify_proof(self._root, leaf, proof)


def build_allowlist(entries: Sequence[Tuple[Address, int]]) -> Tuple[Hash, Dict[Tuple[Address, int], List[Hash]]]:
    """
    Build root and proofs for a whole allowlist.

    Args:
        entries: (address, ticket) pairs

    Returns:
        (root, {(address, ticket): proof})
    """
    tree = MerkleTree.from_entries(entries)
    proofs = {}
    for address, ticket in entries:
        proofs[(address, ticket)] = tree.proof_for(address, ticket)

    logger.info(f"Built allowlist tree: {tree.leaf_count} leaves, root {tree.root}")
    return tree.root, proofs
