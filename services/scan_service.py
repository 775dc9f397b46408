# services/scan_service.py
import logging
from typing import List
from uuid import uuid4

from api.schemas import DocumentsListItem, ScanResponse, ScanResultItem
from config import settings
from core.domain import Document, ErrorCode, ScanRecord, ServiceError, UserAccount
from core.interfaces import IDocumentRepository, IScanRecordRepository, IUserAccountRepository
from services.search_service import SimilaritySearchService
from utils.common import make_snippet, validate_text_upload

logger = logging.getLogger(settings.LOGGER_NAME)

class DocumentScanService:
    """
    User-facing document operations: upload, listing, download, deletion and
    credit-charged similarity scans over the user's own documents.
    """

    def __init__(
        self,
        search_service: SimilaritySearchService,
        document_repo: IDocumentRepository,
        account_repo: IUserAccountRepository,
        scan_repo: IScanRecordRepository
    ):
        self.search_service = search_service
        self.document_repo = document_repo
        self.account_repo = account_repo
        self.scan_repo = scan_repo

    async def _get_account(self, user_id: str) -> UserAccount:
        account = await self.account_repo.get_by_id(user_id)
        if not account:
            logger.warning(f"Unknown account: {user_id}")
            raise ServiceError(f"Account '{user_id}' not found", ErrorCode.ACCOUNT_NOT_FOUND)
        return account

    async def upload_document(self, owner_id: str, filename: str, content: bytes) -> Document:
        """Validate a .txt upload and store it as a new document owned by owner_id."""
        await self._get_account(owner_id)
        try:
            text = validate_text_upload(filename, content)
        except ServiceError as e:
            logger.warning(f"Upload rejected for '{filename}': {e}")
            raise

        document = Document(id=str(uuid4()), name=filename, content=text, owner_id=owner_id)
        await self.document_repo.add(document)
        logger.info(f"Stored document '{filename}' ({document.id}) for user {owner_id}")
        return document

    async def list_documents(self, owner_id: str) -> List[DocumentsListItem]:
        documents = await self.document_repo.list_by_owner(owner_id)
        return [
            DocumentsListItem(id=doc.id, filename=doc.name, upload_date=doc.upload_date)
            for doc in documents
        ]

    async def get_document(self, owner_id: str, document_id: str) -> Document:
        """Fetch one of the owner's documents. Other users' documents look missing."""
        document = await self.document_repo.get_by_id(document_id)
        if not document or document.owner_id != owner_id:
            raise ServiceError(f"Document '{document_id}' not found", ErrorCode.DOCUMENT_NOT_FOUND)
        return document

    async def delete_document(self, owner_id: str, document_id: str) -> bool:
        document = await self.document_repo.get_by_id(document_id)
        if not document or document.owner_id != owner_id:
            logger.warning(f"Attempted to delete missing document: {document_id}")
            return False

        deleted = await self.document_repo.delete(document_id)
        self.search_service.forget(document_id)
        if deleted:
            logger.info(f"Deleted document {document_id} for user {owner_id}")
        return deleted

    async def scan(self, user_id: str, query_text: str) -> ScanResponse:
        """
        Rank the user's documents against query_text.

        Costs one credit. Nothing is charged or recorded when the scan is rejected.
        """
        if not query_text or not query_text.strip():
            raise ServiceError("Please enter text to search for similar documents", ErrorCode.EMPTY_QUERY)

        account = await self._get_account(user_id)
        if account.credits_remaining <= 0:
            logger.warning(f"Scan refused for user {user_id}: no credits remaining")
            raise ServiceError(
                "No credits remaining. Request more or try again tomorrow",
                ErrorCode.INSUFFICIENT_CREDITS
            )

        candidates = await self.document_repo.list_by_owner(user_id)
        ranked = self.search_service.search(query_text, candidates)

        # Charge atomically; a concurrent scan may have spent the last credit
        charged = await self.account_repo.adjust_credits(user_id, -1)
        if not charged:
            logger.warning(f"Scan refused for user {user_id}: credits spent concurrently")
            raise ServiceError(
                "No credits remaining. Request more or try again tomorrow",
                ErrorCode.INSUFFICIENT_CREDITS
            )

        await self.scan_repo.add(ScanRecord(
            id=str(uuid4()),
            user_id=account.id,
            user_name=account.name,
            results_count=len(ranked)
        ))

        logger.info(
            f"Scan by user {user_id} ranked {len(ranked)} documents, "
            f"{charged.credits_remaining} credits left"
        )

        return ScanResponse(
            query=query_text,
            results=[
                ScanResultItem(
                    document_id=r.document.id,
                    document_name=r.document.name,
                    score=r.score,
                    content_snippet=make_snippet(r.document.content or "", settings.SNIPPET_LENGTH)
                )
                for r in ranked
            ],
            total_results=len(ranked),
            credits_remaining=charged.credits_remaining
        )
