# services/factory.py
from dataclasses import dataclass
from typing import Iterable, Optional

from config import settings
from core.domain import UserAccount
from core.interfaces import (
    ICreditRequestRepository, IDocumentRepository, IScanRecordRepository,
    IUserAccountRepository, IVectorCache
)
from infrastructure.repositories import (
    InMemoryCreditRequestRepository, InMemoryDocumentRepository,
    InMemoryScanRecordRepository, InMemoryUserAccountRepository
)
from infrastructure.vector_cache import InMemoryVectorCache
from services.analytics_service import AnalyticsService
from services.credit_service import CreditService
from services.logger_config import setup_logging
from services.scan_service import DocumentScanService
from services.search_service import SimilaritySearchService

# Provider functions for each component
def get_vector_cache() -> Optional[IVectorCache]:
    """Create the vector cache if enabled in configuration."""
    if not settings.VECTOR_CACHE_ENABLED:
        return None
    return InMemoryVectorCache(max_entries=settings.VECTOR_CACHE_MAX_ENTRIES)

def get_search_service(vector_cache: Optional[IVectorCache] = None) -> SimilaritySearchService:
    return SimilaritySearchService(vector_cache if vector_cache is not None else get_vector_cache())

@dataclass
class Services:
    """Wired service layer sharing one set of repositories."""
    search: SimilaritySearchService
    scans: DocumentScanService
    credits: CreditService
    analytics: AnalyticsService

def build_services(
    accounts: Optional[Iterable[UserAccount]] = None,
    document_repo: Optional[IDocumentRepository] = None,
    account_repo: Optional[IUserAccountRepository] = None,
    scan_repo: Optional[IScanRecordRepository] = None,
    request_repo: Optional[ICreditRequestRepository] = None,
    vector_cache: Optional[IVectorCache] = None,
    configure_logging: bool = True
) -> Services:
    """
    Create the service layer with dependency injection.

    Any repository left out falls back to its in-memory implementation,
    so tests and alternative storage backends override only what they need.
    """
    if configure_logging:
        setup_logging()

    document_repo = document_repo or InMemoryDocumentRepository()
    account_repo = account_repo or InMemoryUserAccountRepository(accounts)
    scan_repo = scan_repo or InMemoryScanRecordRepository()
    request_repo = request_repo or InMemoryCreditRequestRepository()
    search = get_search_service(vector_cache)

    return Services(
        search=search,
        scans=DocumentScanService(
            search_service=search,
            document_repo=document_repo,
            account_repo=account_repo,
            scan_repo=scan_repo
        ),
        credits=CreditService(account_repo=account_repo, request_repo=request_repo),
        analytics=AnalyticsService(
            account_repo=account_repo,
            scan_repo=scan_repo,
            request_repo=request_repo
        )
    )
