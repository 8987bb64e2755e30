"""
Error kinds and operation results.

Business-rule failures are returned to the caller as values rather than
raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class VaultErrorKind(Enum):
    """Failure categories reported by vault operations"""
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    AUTO_COMPOUND_REQUIRES_FUNDS = "auto_compound_requires_funds"
    PERSISTENCE_READ_FAILURE = "persistence_read_failure"
    PERSISTENCE_WRITE_FAILURE = "persistence_write_failure"
    REMOTE_QUERY_FAILURE = "remote_query_failure"
    INVALID_ADDRESS = "invalid_address"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a vault mutation"""
    success: bool
    error: Optional[VaultErrorKind] = None
    message: str = ""
    operation_id: Optional[str] = None

    @classmethod
    def ok(cls, message: str = "", operation_id: Optional[str] = None) -> 'OperationResult':
        return cls(success=True, message=message, operation_id=operation_id)

    @classmethod
    def fail(cls, error: VaultErrorKind, message: str) -> 'OperationResult':
        return cls(success=False, error=error, message=message)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "error": self.error.value if self.error else None,
            "message": self.message,
            "operation_id": self.operation_id,
        }
