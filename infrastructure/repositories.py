# infrastructure/repositories.py
"""In-memory repository implementations"""
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from core.interfaces import (
    ICreditRequestRepository, IDocumentRepository,
    IScanRecordRepository, IUserAccountRepository
)
from core.domain import CreditRequest, CreditRequestStatus, Document, ScanRecord, UserAccount
from config import settings

logger = logging.getLogger(settings.LOGGER_NAME)

class InMemoryDocumentRepository(IDocumentRepository):
    def __init__(self):
        # Dicts keep insertion order, which is upload order
        self._documents: Dict[str, Document] = {}

    async def add(self, document: Document) -> Document:
        if document.id in self._documents:
            raise ValueError(f"Document '{document.id}' already exists")
        self._documents[document.id] = document
        return document

    async def get_by_id(self, document_id: str) -> Optional[Document]:
        return self._documents.get(document_id)

    async def list_by_owner(self, owner_id: str) -> List[Document]:
        return [doc for doc in self._documents.values() if doc.owner_id == owner_id]

    async def delete(self, document_id: str) -> bool:
        return self._documents.pop(document_id, None) is not None

class InMemoryUserAccountRepository(IUserAccountRepository):
    """Accounts are copied in and out so callers never share mutable state."""

    def __init__(self, accounts: Optional[Iterable[UserAccount]] = None):
        self._accounts: Dict[str, UserAccount] = {}
        for account in accounts or []:
            self._accounts[account.id] = replace(account)

    async def get_by_id(self, user_id: str) -> Optional[UserAccount]:
        account = self._accounts.get(user_id)
        return replace(account) if account else None

    async def list_all(self) -> List[UserAccount]:
        return [replace(account) for account in self._accounts.values()]

    async def save(self, account: UserAccount) -> UserAccount:
        self._accounts[account.id] = replace(account)
        return replace(account)

    # No awaits between the read and the write below, so each update is
    # atomic with respect to other coroutines on the event loop.
    async def adjust_credits(self, user_id: str, delta: int) -> Optional[UserAccount]:
        account = self._accounts.get(user_id)
        if not account:
            logger.warning(f"Attempted to adjust credits of missing account: {user_id}")
            return None
        if account.credits_remaining + delta < 0:
            return None
        account.credits_remaining += delta
        return replace(account)

    async def top_up_credits(self, user_id: str, floor: int) -> Optional[UserAccount]:
        account = self._accounts.get(user_id)
        if not account:
            return None
        account.credits_remaining = max(account.credits_remaining, floor)
        return replace(account)

class InMemoryScanRecordRepository(IScanRecordRepository):
    def __init__(self):
        self._records: List[ScanRecord] = []

    async def add(self, record: ScanRecord) -> None:
        self._records.append(record)

    async def list_all(self) -> List[ScanRecord]:
        return list(self._records)

class InMemoryCreditRequestRepository(ICreditRequestRepository):
    def __init__(self):
        self._requests: Dict[str, CreditRequest] = {}

    async def add(self, request: CreditRequest) -> CreditRequest:
        self._requests[request.id] = replace(request)
        return replace(request)

    async def get_by_id(self, request_id: str) -> Optional[CreditRequest]:
        request = self._requests.get(request_id)
        return replace(request) if request else None

    async def list_all(self) -> List[CreditRequest]:
        return [replace(req) for req in self._requests.values()]

    async def list_by_user(self, user_id: str) -> List[CreditRequest]:
        return [replace(req) for req in self._requests.values() if req.user_id == user_id]

    async def update_status(
        self,
        request_id: str,
        status: CreditRequestStatus,
        expected: Optional[CreditRequestStatus] = None
    ) -> Optional[CreditRequest]:
        request = self._requests.get(request_id)
        if not request:
            logger.warning(f"Attempted to update missing credit request: {request_id}")
            return None
        if expected is not None and request.status != expected:
            logger.warning(
                f"Credit request {request_id} is {request.status.value}, expected {expected.value}"
            )
            return None
        request.status = status
        return replace(request)
