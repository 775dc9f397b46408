# core/interfaces.py
"""Core interfaces for the document similarity system"""
from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain import CreditRequest, CreditRequestStatus, Document, ScanRecord, UserAccount
from core.vectors import TermVector

# ============= Vector Cache Interface =============
class IVectorCache(ABC):
    """
    Cache of per-document term vectors.

    Entries are keyed by document ID plus content hash, so a stale vector
    is never served for changed content.
    """

    @abstractmethod
    def get(self, document_id: str, content_hash: str) -> Optional[TermVector]:
        """Return the cached vector, or None on a miss"""
        pass

    @abstractmethod
    def put(self, document_id: str, content_hash: str, vector: TermVector) -> None:
        """Store a vector for a document's current content"""
        pass

    @abstractmethod
    def invalidate(self, document_id: str) -> None:
        """Drop every entry for a document"""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

# ============= Repository Interfaces =============
class IDocumentRepository(ABC):
    """
    Interface for uploaded document persistence.

    Implementations: InMemoryDocumentRepository. Swap for SQL, key-value store, remote API, etc.
    """

    @abstractmethod
    async def add(self, document: Document) -> Document:
        """Store a new document"""
        pass

    @abstractmethod
    async def get_by_id(self, document_id: str) -> Optional[Document]:
        """Get document by ID"""
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> List[Document]:
        """
        List an owner's documents in upload order.
        This is the authorization boundary for scans: only these are candidates.
        """
        pass

    @abstractmethod
    async def delete(self, document_id: str) -> bool:
        """Delete document record"""
        pass

class IUserAccountRepository(ABC):
    """Interface for account lookup and credit balance updates"""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[UserAccount]:
        pass

    @abstractmethod
    async def list_all(self) -> List[UserAccount]:
        pass

    @abstractmethod
    async def save(self, account: UserAccount) -> UserAccount:
        """Insert or replace an account"""
        pass

    @abstractmethod
    async def adjust_credits(self, user_id: str, delta: int) -> Optional[UserAccount]:
        """
        Atomically add delta (possibly negative) to an account's balance.
        Returns the updated account, or None if the account is missing or
        the balance would drop below zero. Nothing changes when None is returned.
        """
        pass

    @abstractmethod
    async def top_up_credits(self, user_id: str, floor: int) -> Optional[UserAccount]:
        """Atomically raise a balance below floor up to floor. Returns None if missing."""
        pass

class IScanRecordRepository(ABC):
    """Interface for scan history used by admin analytics"""

    @abstractmethod
    async def add(self, record: ScanRecord) -> None:
        pass

    @abstractmethod
    async def list_all(self) -> List[ScanRecord]:
        """All scan records, oldest first"""
        pass

class ICreditRequestRepository(ABC):
    """Interface for credit top-up requests"""

    @abstractmethod
    async def add(self, request: CreditRequest) -> CreditRequest:
        pass

    @abstractmethod
    async def get_by_id(self, request_id: str) -> Optional[CreditRequest]:
        pass

    @abstractmethod
    async def list_all(self) -> List[CreditRequest]:
        pass

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[CreditRequest]:
        pass

    @abstractmethod
    async def update_status(
        self,
        request_id: str,
        status: CreditRequestStatus,
        expected: Optional[CreditRequestStatus] = None
    ) -> Optional[CreditRequest]:
        """
        Set a request's status. When expected is given this is a compare-and-set:
        the status only changes if it is still expected.
        Returns the updated request, or None if missing or the status did not match.
        """
        pass
