"""
AllowMint Hash Functions

Keccak-256 as used by the EVM (original Keccak padding, not NIST SHA3-256).
"""

from __future__ import annotations
from typing import Union

from Crypto.Hash import keccak

from allowmint.core.types import Hash


def keccak256_raw(data: Union[bytes, bytearray, memoryview]) -> bytes:
    """
    Keccak-256 returning raw bytes.

    Args:
        data: Input data to hash

    Returns:
        bytes: 32-byte hash output
    """
    hasher = keccak.new(digest_bits=256)
    hasher.update(bytes(data))
    return hasher.digest()


def keccak256(data: Union[bytes, bytearray, memoryview]) -> Hash:
    """
    Keccak-256 wrapped in Hash type.

    Args:
        data: Input data to hash

    Returns:
        Hash: 32-byte hash output
    """
    return Hash(keccak256_raw(data))


def double_keccak256(data: bytes) -> Hash:
    """
    Double Keccak-256.

    Args:
        data: Input data

    Returns:
        Hash: keccak256(keccak256(data))
    """
    return keccak256(keccak256_raw(data))
