"""
AllowMint
Allowlist-gated collectible token issuance

Open and self minting at a fixed price, plus a discounted presale gated by
a Merkle allowlist proof and a single-use ticket.
"""

__version__ = "0.1.0"
__author__ = "AllowMint"

from allowmint.config import ContractConfig, PresaleConfig
from allowmint.core.types import Address, Hash
from allowmint.presale.gateway import IssuanceGateway

__all__ = [
    "Address",
    "ContractConfig",
    "Hash",
    "IssuanceGateway",
    "PresaleConfig",
    "__version__",
]
