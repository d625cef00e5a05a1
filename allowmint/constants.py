"""
AllowMint Constants

All contract constants defined here for single source of truth.
"""

from typing import Final, Tuple

# ==============================================================================
# ENCODING
# ==============================================================================

HASH_SIZE: Final[int] = 32                      # Keccak-256 output
ADDRESS_SIZE: Final[int] = 20                   # Account address
ABI_WORD_SIZE: Final[int] = 32                  # One ABI-encoded word
SELECTOR_SIZE: Final[int] = 4                   # Function selector / interface id
UINT256_MAX: Final[int] = (1 << 256) - 1

BIG_ENDIAN: Final[str] = "big"

# ==============================================================================
# PRESALE TICKETS
# ==============================================================================

MAX_TICKETS: Final[int] = 1000                  # Ticket domain is [0, MAX_TICKETS)
WORD_BITS: Final[int] = 256                     # Bits per bitmap word
TICKET_WORDS: Final[int] = (MAX_TICKETS + WORD_BITS - 1) // WORD_BITS   # 4 words

# ==============================================================================
# PRICING (wei)
# ==============================================================================

MINT_PRICE: Final[int] = 1_000_000_000_000      # 0.000001 ether
DISCOUNT_PRICE: Final[int] = 500_000_000_000    # 0.0000005 ether

# ==============================================================================
# TOKENS
# ==============================================================================

FIRST_TOKEN_ID: Final[int] = 1
DEFAULT_PRESALE_MAX_SUPPLY: Final[int] = 500
DEFAULT_NAME: Final[str] = "AllowMint"
DEFAULT_SYMBOL: Final[str] = "AMNT"
DEFAULT_BASE_URI: Final[str] = "ipfs://allowmint/metadata/"

# ==============================================================================
# ROYALTIES (ERC-2981)
# ==============================================================================

FEE_DENOMINATOR: Final[int] = 10000             # Fee numerators are parts per 10000
DEFAULT_ROYALTY_FEE: Final[int] = 500           # 5%

# ==============================================================================
# INTERFACE IDS (ERC-165)
# ==============================================================================

INTERFACE_ID_ERC165: Final[int] = 0x01FFC9A7
INTERFACE_ID_ERC721: Final[int] = 0x80AC58CD
INTERFACE_ID_ERC721_METADATA: Final[int] = 0x5B5E139F
INTERFACE_ID_ERC2981: Final[int] = 0x2A55205A
INTERFACE_ID_INVALID: Final[int] = 0xFFFFFFFF

SUPPORTED_INTERFACES: Final[Tuple[int, ...]] = (
    INTERFACE_ID_ERC165,
    INTERFACE_ID_ERC721,
    INTERFACE_ID_ERC721_METADATA,
    INTERFACE_ID_ERC2981,
)

# ==============================================================================
# EVENTS
# ==============================================================================

EVENT_TRANSFER: Final[str] = "Transfer"
EVENT_APPROVAL: Final[str] = "Approval"
EVENT_APPROVAL_FOR_ALL: Final[str] = "ApprovalForAll"
EVENT_TOKEN_ROYALTY_SET: Final[str] = "TokenRoyaltySet"
EVENT_TICKET_CONSUMED: Final[str] = "TicketConsumed"
