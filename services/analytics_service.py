# services/analytics_service.py
"""Admin usage analytics over scan records"""
import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional

from api.schemas import AnalyticsResponse, DailyScanCount, TopUser
from config import settings
from core.domain import CreditRequestStatus, ErrorCode, ScanRecord, ServiceError
from core.interfaces import ICreditRequestRepository, IScanRecordRepository, IUserAccountRepository

logger = logging.getLogger(settings.LOGGER_NAME)


def count_scans_by_day(records: Iterable[ScanRecord]) -> List[DailyScanCount]:
    """Scans per UTC calendar day, oldest day first."""
    counts = Counter(record.timestamp.date().isoformat() for record in records)
    return [DailyScanCount(date=day, count=counts[day]) for day in sorted(counts)]


def rank_top_users(records: Iterable[ScanRecord], limit: Optional[int] = None) -> List[TopUser]:
    """
    Users ordered by number of scans, highest first.
    Ties keep the order in which users first appear in the records.
    """
    users: Dict[str, TopUser] = {}
    for record in records:
        if record.user_id not in users:
            users[record.user_id] = TopUser(user_id=record.user_id, name=record.user_name, scans=0)
        users[record.user_id].scans += 1

    ranked = sorted(users.values(), key=lambda u: u.scans, reverse=True)
    return ranked[:limit] if limit is not None else ranked


class AnalyticsService:
    def __init__(
        self,
        account_repo: IUserAccountRepository,
        scan_repo: IScanRecordRepository,
        request_repo: ICreditRequestRepository
    ):
        self.account_repo = account_repo
        self.scan_repo = scan_repo
        self.request_repo = request_repo

    async def get_usage_analytics(self, admin_id: str) -> AnalyticsResponse:
        account = await self.account_repo.get_by_id(admin_id)
        if not account or not account.is_admin:
            logger.warning(f"User {admin_id} denied access to analytics")
            raise ServiceError("You do not have permission to access analytics", ErrorCode.PERMISSION_DENIED)

        records = await self.scan_repo.list_all()
        statuses = Counter(req.status for req in await self.request_repo.list_all())

        return AnalyticsResponse(
            total_scans=len(records),
            daily_scans=count_scans_by_day(records),
            top_users=rank_top_users(records, settings.ANALYTICS_TOP_USERS),
            pending_requests=statuses[CreditRequestStatus.PENDING],
            approved_requests=statuses[CreditRequestStatus.APPROVED],
            rejected_requests=statuses[CreditRequestStatus.REJECTED]
        )
