"""
AllowMint Error Handling

All error codes and exception classes. Every error is a caller error: the
operation that raised it has no effect and is never retried internally.
"""

from enum import IntEnum
from typing import Optional, Any


class ErrorCode(IntEnum):
    """Contract error codes."""

    # 1xxx - General errors
    UNKNOWN_ERROR = 1000
    INVALID_PARAMETER = 1001
    INVALID_CONFIG = 1002

    # 2xxx - Payment errors
    WRONG_PAYMENT = 2001

    # 3xxx - Token ledger errors
    TOKEN_ID_OUT_OF_RANGE = 3001
    DUPLICATE_TOKEN = 3002
    NONEXISTENT_TOKEN = 3003
    INVALID_RECEIVER = 3004
    INCORRECT_OWNER = 3005

    # 4xxx - Presale errors
    INVALID_PROOF = 4001
    TICKET_OUT_OF_RANGE = 4002
    TICKET_ALREADY_USED = 4003

    # 5xxx - Authorization errors
    UNAUTHORIZED = 5001
    INVALID_APPROVAL = 5002

    # 6xxx - Royalty errors
    INVALID_ROYALTY = 6001


class AllowMintError(Exception):
    """Base exception for all AllowMint errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for tool output."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# ==============================================================================
# General Errors (1xxx)
# ==============================================================================

class InvalidParameterError(AllowMintError):
    def __init__(self, param: str, message: str = ""):
        msg = f"Invalid parameter: {param}"
        if message:
            msg += f" - {message}"
        super().__init__(ErrorCode.INVALID_PARAMETER, msg, {"parameter": param})


class InvalidConfigError(AllowMintError):
    def __init__(self, problems: list):
        super().__init__(
            ErrorCode.INVALID_CONFIG,
            f"Invalid configuration: {'; '.join(problems)}",
            {"problems": list(problems)}
        )


# ==============================================================================
# Payment Errors (2xxx)
# ==============================================================================

class WrongPaymentError(AllowMintError):
    def __init__(self, paid: int, required: int):
        super().__init__(
            ErrorCode.WRONG_PAYMENT,
            f"Wrong payment: sent {paid}, required exactly {required}",
            {"paid": paid, "required": required}
        )


# ==============================================================================
# Token Ledger Errors (3xxx)
# ==============================================================================

class TokenIdRangeError(AllowMintError):
    def __init__(self, token_id: int, max_supply: int):
        super().__init__(
            ErrorCode.TOKEN_ID_OUT_OF_RANGE,
            f"Token id {token_id} outside [1, {max_supply}]",
            {"token_id": token_id, "max_supply": max_supply}
        )


class DuplicateTokenError(AllowMintError):
    def __init__(self, token_id: int):
        super().__init__(
            ErrorCode.DUPLICATE_TOKEN,
            f"Token {token_id} already minted",
            {"token_id": token_id}
        )


class NonexistentTokenError(AllowMintError):
    def __init__(self, token_id: int):
        super().__init__(
            ErrorCode.NONEXISTENT_TOKEN,
            f"Token {token_id} does not exist",
            {"token_id": token_id}
        )


class InvalidReceiverError(AllowMintError):
    def __init__(self, receiver: str):
        super().__init__(
            ErrorCode.INVALID_RECEIVER,
            f"Invalid token receiver: {receiver}",
            {"receiver": receiver}
        )


class IncorrectOwnerError(AllowMintError):
    def __init__(self, token_id: int, claimed: str, actual: str):
        super().__init__(
            ErrorCode.INCORRECT_OWNER,
            f"Token {token_id} is owned by {actual}, not {claimed}",
            {"token_id": token_id, "claimed": claimed, "actual": actual}
        )


# ==============================================================================
# Presale Errors (4xxx)
# ==============================================================================

class InvalidProofError(AllowMintError):
    def __init__(self, claimant: str, ticket: int):
        super().__init__(
            ErrorCode.INVALID_PROOF,
            f"Allowlist proof rejected for {claimant} ticket {ticket}",
            {"claimant": claimant, "ticket": ticket}
        )


class TicketRangeError(AllowMintError):
    def __init__(self, ticket: int, max_tickets: int):
        super().__init__(
            ErrorCode.TICKET_OUT_OF_RANGE,
            f"Ticket {ticket} outside [0, {max_tickets})",
            {"ticket": ticket, "max_tickets": max_tickets}
        )


class TicketAlreadyUsedError(AllowMintError):
    def __init__(self, ticket: int):
        super().__init__(
            ErrorCode.TICKET_ALREADY_USED,
            f"Ticket {ticket} already used",
            {"ticket": ticket}
        )


# ==============================================================================
# Authorization Errors (5xxx)
# ==============================================================================

class UnauthorizedError(AllowMintError):
    def __init__(self, caller: str, token_id: int, action: str):
        super().__init__(
            ErrorCode.UNAUTHORIZED,
            f"{caller} is not owner or approved for token {token_id} ({action})",
            {"caller": caller, "token_id": token_id, "action": action}
        )


class InvalidApprovalError(AllowMintError):
    def __init__(self, reason: str):
        super().__init__(ErrorCode.INVALID_APPROVAL, f"Invalid approval: {reason}")


# ==============================================================================
# Royalty Errors (6xxx)
# ==============================================================================

class InvalidRoyaltyError(AllowMintError):
    def __init__(self, reason: str, details: Any = None):
        super().__init__(ErrorCode.INVALID_ROYALTY, f"Invalid royalty: {reason}", details)
