"""
AllowMint ABI Encoding

Canonical 32-byte word encoding of static values, function selectors and
ERC-165 interface ids. All words are BIG-ENDIAN.
"""

from __future__ import annotations
from functools import reduce
from typing import Iterable

from allowmint.constants import (
    ABI_WORD_SIZE,
    ADDRESS_SIZE,
    BIG_ENDIAN,
    SELECTOR_SIZE,
    UINT256_MAX,
)
from allowmint.core.types import Address

# ==============================================================================
# Static Words
# ==============================================================================


def encode_uint256(value: int) -> bytes:
    """Encode an unsigned 256-bit integer as one word."""
    if not 0 <= value <= UINT256_MAX:
        raise ValueError(f"uint256 value out of range: {value}")
    return value.to_bytes(ABI_WORD_SIZE, BIG_ENDIAN)


def encode_address(address: Address) -> bytes:
    """Encode an address as one word (left-padded with zeros)."""
    return bytes(ABI_WORD_SIZE - ADDRESS_SIZE) + address.data


def decode_uint256(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decode one word as an unsigned integer.
    Returns (value, bytes_consumed).
    """
    word = data[offset:offset + ABI_WORD_SIZE]
    if len(word) != ABI_WORD_SIZE:
        raise ValueError(f"Need {ABI_WORD_SIZE} bytes at offset {offset}, got {len(word)}")
    return int.from_bytes(word, BIG_ENDIAN), ABI_WORD_SIZE


def decode_address(data: bytes, offset: int = 0) -> tuple[Address, int]:
    """
    Decode one word as an address.
    Returns (Address, bytes_consumed).
    """
    word = data[offset:offset + ABI_WORD_SIZE]
    if len(word) != ABI_WORD_SIZE:
        raise ValueError(f"Need {ABI_WORD_SIZE} bytes at offset {offset}, got {len(word)}")
    if any(word[:ABI_WORD_SIZE - ADDRESS_SIZE]):
        raise ValueError("Address word has non-zero padding")
    return Address(word[ABI_WORD_SIZE - ADDRESS_SIZE:]), ABI_WORD_SIZE


def encode_allowlist_entry(claimant: Address, ticket: int) -> bytes:
    """abi.encode(address claimant, uint256 ticket): 64 bytes."""
    return encode_address(claimant) + encode_uint256(ticket)


# ==============================================================================
# Selectors and Interface Ids
# ==============================================================================


def function_selector(signature: str) -> bytes:
    """First four bytes of keccak256 of a canonical function signature."""
    from allowmint.crypto.hash import keccak256_raw

    return keccak256_raw(signature.encode("ascii"))[:SELECTOR_SIZE]


def interface_id(signatures: Iterable[str]) -> int:
    """ERC-165 interface id: XOR of the selectors of every function."""
    selectors = [int.from_bytes(function_selector(s), BIG_ENDIAN) for s in signatures]
    return reduce(lambda a, b: a ^ b, selectors, 0)
