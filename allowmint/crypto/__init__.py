"""
AllowMint Cryptographic Primitives
"""

from allowmint.crypto.hash import keccak256, keccak256_raw, double_keccak256
from allowmint.crypto.merkle import (
    MembershipVerifier,
    MerkleTree,
    build_allowlist,
    hash_leaf,
    hash_pair,
    verify_proof,
)

__all__ = [
    # Hash functions
    "keccak256",
    "keccak256_raw",
    "double_keccak256",
    # Merkle allowlist
    "MembershipVerifier",
    "MerkleTree",
    "build_allowlist",
    "hash_leaf",
    "hash_pair",
    "verify_proof",
]
