"""
AllowMint Core Types

Fixed-width value types. All multi-byte integers are BIG-ENDIAN.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from allowmint.constants import ADDRESS_SIZE, HASH_SIZE, BIG_ENDIAN
from allowmint.errors import InvalidParameterError


def _strip_hex_prefix(hex_string: str) -> str:
    if hex_string[:2] in ("0x", "0X"):
        return hex_string[2:]
    return hex_string


@dataclass(frozen=True, slots=True)
class Hash:
    """
    Keccak-256 hash output.

    SIZE: 32 bytes
    SERIALIZATION: raw bytes
    ORDERING: as unsigned 256-bit big-endian integers
    """
    data: bytes = field(default_factory=lambda: bytes(HASH_SIZE))

    def __post_init__(self):
        if len(self.data) != HASH_SIZE:
            raise ValueError(f"Hash must be {HASH_SIZE} bytes, got {len(self.data)}")

    def __bytes__(self) -> bytes:
        return self.data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Hash):
            return self.data == other.data
        if isinstance(other, bytes):
            return self.data == other
        return False

    def __lt__(self, other: Hash) -> bool:
        return self.data < other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"Hash({self.data.hex()[:16]}...)"

    def __str__(self) -> str:
        return "0x" + self.data.hex()

    def hex(self) -> str:
        return self.data.hex()

    def to_int(self) -> int:
        return int.from_bytes(self.data, BIG_ENDIAN)

    @classmethod
    def from_hex(cls, hex_string: str) -> Hash:
        digits = _strip_hex_prefix(hex_string.strip())
        if len(digits) != HASH_SIZE * 2:
            raise InvalidParameterError("hash", f"expected {HASH_SIZE * 2} hex digits, got {len(digits)}")
        try:
            return cls(bytes.fromhex(digits))
        except ValueError:
            raise InvalidParameterError("hash", f"not hex: {hex_string!r}")

    @classmethod
    def from_int(cls, value: int) -> Hash:
        return cls(value.to_bytes(HASH_SIZE, BIG_ENDIAN))

    @classmethod
    def zero(cls) -> Hash:
        return cls(bytes(HASH_SIZE))

    def is_zero(self) -> bool:
        return self.data == bytes(HASH_SIZE)


@dataclass(frozen=True, slots=True)
class Address:
    """
    Account address.

    SIZE: 20 bytes
    TEXT: EIP-55 mixed-case checksummed hex
    """
    data: bytes = field(default_factory=lambda: bytes(ADDRESS_SIZE))

    def __post_init__(self):
        if len(self.data) != ADDRESS_SIZE:
            raise ValueError(f"Address must be {ADDRESS_SIZE} bytes, got {len(self.data)}")

    def __bytes__(self) -> bytes:
        return self.data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Address):
            return self.data == other.data
        return False

    def __lt__(self, other: Address) -> bool:
        return self.data < other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"Address({self.to_checksum()})"

    def __str__(self) -> str:
        return self.to_checksum()

    def hex(self) -> str:
        return self.data.hex()

    def to_checksum(self) -> str:
        """Render as EIP-55 checksummed hex."""
        from allowmint.crypto.hash import keccak256_raw

        lower = self.data.hex()
        digest = keccak256_raw(lower.encode("ascii")).hex()
        return "0x" + "".join(
            c.upper() if int(digest[i], 16) >= 8 else c
            for i, c in enumerate(lower)
        )

    @classmethod
    def from_hex(cls, hex_string: str) -> Address:
        """
        Parse an address from hex.

        All-lowercase and all-uppercase input is accepted as-is; mixed-case
        input must carry a valid EIP-55 checksum.
        """
        digits = _strip_hex_prefix(hex_string.strip())
        if len(digits) != ADDRESS_SIZE * 2:
            raise InvalidParameterError("address", f"expected {ADDRESS_SIZE * 2} hex digits, got {len(digits)}")
        try:
            address = cls(bytes.fromhex(digits))
        except ValueError:
            raise InvalidParameterError("address", f"not hex: {hex_string!r}")

        if digits != digits.lower() and digits != digits.upper():
            if address.to_checksum()[2:] != digits:
                raise InvalidParameterError("address", f"bad checksum: {hex_string}")

        return address

    @classmethod
    def zero(cls) -> Address:
        return cls(bytes(ADDRESS_SIZE))

    def is_zero(self) -> bool:
        return self.data == bytes(ADDRESS_SIZE)


def zero_address() -> Address:
    """The zero address (never a valid owner or receiver)."""
    return Address.zero()
