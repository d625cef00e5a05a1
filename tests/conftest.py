"""
AllowMint Test Fixtures
"""

import pytest
from typing import List, Tuple

from allowmint.config import ContractConfig, PresaleConfig
from allowmint.core.state import ContractState
from allowmint.core.types import Address, Hash
from allowmint.crypto.merkle import MerkleTree
from allowmint.presale.gateway import IssuanceGateway


@pytest.fixture
def deployer() -> Address:
    """Address that deploys the contract."""
    return Address(bytes([0xD0] * 20))


@pytest.fixture
def alice() -> Address:
    return Address(bytes([0xA1] * 20))


@pytest.fixture
def bob() -> Address:
    return Address(bytes([0xB2] * 20))


@pytest.fixture
def carol() -> Address:
    return Address(bytes([0xC3] * 20))


@pytest.fixture
def mallory() -> Address:
    """Address on no allowlist and owning nothing."""
    return Address(bytes([0xEE] * 20))


@pytest.fixture
def allowlist(alice, bob, carol) -> List[Tuple[Address, int]]:
    """Allowlist entries: (address, ticket)."""
    return [
        (alice, 42),
        (alice, 0),
        (bob, 7),
        (bob, 256),
        (carol, 999),
    ]


@pytest.fixture
def tree(allowlist) -> MerkleTree:
    """Merkle tree over the allowlist."""
    return MerkleTree.from_entries(allowlist)


@pytest.fixture
def config(tree) -> ContractConfig:
    """Contract configuration committed to the allowlist root."""
    config = ContractConfig(name="Test Collection", symbol="TEST")
    config.presale = PresaleConfig(
        presale_max_supply=500,
        mint_price=1_000_000_000_000,
        discount_price=500_000_000_000,
        merkle_root=tree.root,
    )
    config.metadata.base_uri = "ipfs://test/"
    return config


@pytest.fixture
def gateway(config, deployer) -> IssuanceGateway:
    """Freshly deployed contract."""
    return IssuanceGateway(config, deployer)


@pytest.fixture
def empty_state(deployer) -> ContractState:
    """Initial contract state with a 5% default royalty to the deployer."""
    return ContractState.initial(deployer, 500)


@pytest.fixture
def mint_price(config) -> int:
    return config.presale.mint_price


@pytest.fixture
def discount_price(config) -> int:
    return config.presale.discount_price


@pytest.fixture
def mock_hash() -> Hash:
    """Create a mock hash for testing."""
    return Hash(bytes([i % 256 for i in range(32)]))
