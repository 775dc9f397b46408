# core/domain.py
"""Shared enumerations, domain models and service errors."""
from enum import Enum

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

# ============= Enums =============

class ErrorCode(str, Enum):
    """Error codes for user-facing error messages."""
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    INVALID_FORMAT = "INVALID_FORMAT"
    NO_TEXT_FOUND = "NO_TEXT_FOUND"
    EMPTY_QUERY = "EMPTY_QUERY"
    INSUFFICIENT_CREDITS = "INSUFFICIENT_CREDITS"
    INVALID_CREDIT_AMOUNT = "INVALID_CREDIT_AMOUNT"
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    REQUEST_NOT_FOUND = "REQUEST_NOT_FOUND"
    REQUEST_ALREADY_RESOLVED = "REQUEST_ALREADY_RESOLVED"
    PERMISSION_DENIED = "PERMISSION_DENIED"


class CreditRequestStatus(str, Enum):
    """Lifecycle of a credit top-up request."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# ============= Errors =============

class ServiceError(Exception):
    """Raised when a service operation is rejected with a specific error code"""

    def __init__(self, message: str, error_code: ErrorCode):
        self.message = message
        self.error_code = error_code
        super().__init__(message)

    def __str__(self):
        # Format used for logging
        return f"[{self.error_code.value}] {self.message}"


# ============= Domain Models =============

@dataclass(frozen=True)
class Document:
    """An uploaded plain-text document. Content never changes after upload."""
    id: str
    name: str
    content: Optional[str]
    owner_id: str
    upload_date: datetime = field(default_factory=_utcnow)

@dataclass
class ScoredDocument:
    """A candidate document paired with its similarity to the query"""
    document: Document
    score: float

@dataclass
class UserAccount:
    id: str
    name: str
    email: str
    is_admin: bool = False
    credits_remaining: int = 20

@dataclass
class ScanRecord:
    """One successful scan, kept for admin analytics"""
    id: str
    user_id: str
    user_name: str
    timestamp: datetime = field(default_factory=_utcnow)
    results_count: int = 0

@dataclass
class CreditRequest:
    id: str
    user_id: str
    user_name: str
    requested_credits: int
    status: CreditRequestStatus = CreditRequestStatus.PENDING
    request_date: datetime = field(default_factory=_utcnow)
