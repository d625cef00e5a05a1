"""
AllowMint Contract Configuration
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from allowmint.constants import (
    DEFAULT_BASE_URI,
    DEFAULT_NAME,
    DEFAULT_PRESALE_MAX_SUPPLY,
    DEFAULT_ROYALTY_FEE,
    DEFAULT_SYMBOL,
    DISCOUNT_PRICE,
    FEE_DENOMINATOR,
    MINT_PRICE,
)
from allowmint.core.types import Address, Hash
from allowmint.errors import InvalidConfigError, InvalidParameterError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresaleConfig:
    """
    Presale parameters, fixed at construction.

    Never mutated afterwards; there is exactly one active Merkle root.
    """
    presale_max_supply: int = DEFAULT_PRESALE_MAX_SUPPLY
    mint_price: int = MINT_PRICE
    discount_price: int = DISCOUNT_PRICE
    merkle_root: Hash = field(default_factory=Hash.zero)

    def validate(self) -> List[str]:
        errors = []

        if self.presale_max_supply < 1:
            errors.append("presale_max_supply must be positive")

        if self.discount_price < 0 or self.mint_price < 0:
            errors.append("prices cannot be negative")

        if self.discount_price >= self.mint_price:
            errors.append(
                f"discount_price ({self.discount_price}) must be below mint_price ({self.mint_price})"
            )

        return errors

    def to_dict(self) -> dict:
        return {
            "presale_max_supply": self.presale_max_supply,
            "mint_price": self.mint_price,
            "discount_price": self.discount_price,
            "merkle_root": str(self.merkle_root),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PresaleConfig":
        return cls(
            presale_max_supply=data.get("presale_max_supply", DEFAULT_PRESALE_MAX_SUPPLY),
            mint_price=data.get("mint_price", MINT_PRICE),
            discount_price=data.get("discount_price", DISCOUNT_PRICE),
            merkle_root=Hash.from_hex(data["merkle_root"]) if data.get("merkle_root") else Hash.zero(),
        )


@dataclass
class RoyaltyConfig:
    """Default royalty configuration."""
    fee_numerator: int = DEFAULT_ROYALTY_FEE
    receiver: Optional[str] = None      # Hex address; None means the deployer


@dataclass
class MetadataConfig:
    """Token metadata configuration."""
    base_uri: str = DEFAULT_BASE_URI


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 100
    backup_count: int = 5


@dataclass
class ContractConfig:
    """
    Complete contract configuration.

    All construction parameters of an issuance contract.
    """
    # Identity
    name: str = DEFAULT_NAME
    symbol: str = DEFAULT_SYMBOL

    # Sub-configurations
    presale: PresaleConfig = field(default_factory=PresaleConfig)
    royalty: RoyaltyConfig = field(default_factory=RoyaltyConfig)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def royalty_receiver(self, deployer: Address) -> Address:
        """Configured default royalty receiver, falling back to the deployer."""
        if self.royalty.receiver:
            return Address.from_hex(self.royalty.receiver)
        return deployer

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.name:
            errors.append("name cannot be empty")

        if not self.symbol:
            errors.append("symbol cannot be empty")

        errors.extend(self.presale.validate())

        if not 0 <= self.royalty.fee_numerator <= FEE_DENOMINATOR:
            errors.append(
                f"royalty fee_numerator must be in [0, {FEE_DENOMINATOR}], got {self.royalty.fee_numerator}"
            )

        if self.royalty.receiver:
            try:
                receiver = Address.from_hex(self.royalty.receiver)
            except InvalidParameterError as e:
                errors.append(f"royalty receiver: {e.message}")
            else:
                if receiver.is_zero():
                    errors.append("royalty receiver cannot be the zero address")

        return errors

    def check(self) -> None:
        """Raise InvalidConfigError if the configuration is not valid."""
        errors = self.validate()
        if errors:
            raise InvalidConfigError(errors)

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "ContractConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        config = cls(
            name=data.get("name", DEFAULT_NAME),
            symbol=data.get("symbol", DEFAULT_SYMBOL),
        )

        if "presale" in data:
            config.presale = PresaleConfig.from_dict(data["presale"])

        if "royalty" in data:
            config.royalty = RoyaltyConfig(**data["royalty"])

        if "metadata" in data:
            config.metadata = MetadataConfig(**data["metadata"])

        if "log" in data:
            config.log = LogConfig(**data["log"])

        logger.info(f"Configuration loaded from {path}")
        return config

    @classmethod
    def default_testnet(cls, merkle_root: Optional[Hash] = None) -> "ContractConfig":
        """Create default testnet configuration."""
        config = cls(
            name="AllowMint Testnet",
            symbol="tAMNT",
        )

        if merkle_root is not None:
            config.presale = PresaleConfig(merkle_root=merkle_root)

        config.metadata.base_uri = "ipfs://allowmint-testnet/metadata/"

        return config

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "name": self.name,
            "symbol": self.symbol,
            "presale": self.presale.to_dict(),
            "royalty": asdict(self.royalty),
            "metadata": asdict(self.metadata),
            "log": asdict(self.log),
        }


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
    )
