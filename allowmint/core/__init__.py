"""
AllowMint Core Data Structures
"""

from allowmint.core.types import Address, Hash, zero_address
from allowmint.core.abi import (
    encode_uint256,
    encode_address,
    encode_allowlist_entry,
    decode_uint256,
    decode_address,
    function_selector,
    interface_id,
)

__all__ = [
    # Types
    "Address",
    "Hash",
    "zero_address",
    # ABI
    "encode_uint256",
    "encode_address",
    "encode_allowlist_entry",
    "decode_uint256",
    "decode_address",
    "function_selector",
    "interface_id",
]
