# services/credit_service.py
import logging
from typing import List
from uuid import uuid4

from api.schemas import CreditRequestItem
from config import settings
from core.domain import CreditRequest, CreditRequestStatus, ErrorCode, ServiceError, UserAccount
from core.interfaces import ICreditRequestRepository, IUserAccountRepository

logger = logging.getLogger(settings.LOGGER_NAME)


def _to_item(request: CreditRequest) -> CreditRequestItem:
    return CreditRequestItem(
        id=request.id,
        user_id=request.user_id,
        user_name=request.user_name,
        requested_credits=request.requested_credits,
        status=request.status,
        request_date=request.request_date
    )


class CreditService:
    """Credit top-up requests and the admin approval workflow."""

    def __init__(self, account_repo: IUserAccountRepository, request_repo: ICreditRequestRepository):
        self.account_repo = account_repo
        self.request_repo = request_repo

    async def _get_account(self, user_id: str) -> UserAccount:
        account = await self.account_repo.get_by_id(user_id)
        if not account:
            raise ServiceError(f"Account '{user_id}' not found", ErrorCode.ACCOUNT_NOT_FOUND)
        return account

    async def _require_admin(self, admin_id: str) -> UserAccount:
        account = await self._get_account(admin_id)
        if not account.is_admin:
            logger.warning(f"Non-admin user {admin_id} attempted an admin action")
            raise ServiceError("You do not have permission to do this", ErrorCode.PERMISSION_DENIED)
        return account

    async def _get_pending(self, request_id: str) -> CreditRequest:
        request = await self.request_repo.get_by_id(request_id)
        if not request:
            raise ServiceError(f"Credit request '{request_id}' not found", ErrorCode.REQUEST_NOT_FOUND)
        if request.status != CreditRequestStatus.PENDING:
            raise ServiceError(
                f"Credit request '{request_id}' is already {request.status.value}",
                ErrorCode.REQUEST_ALREADY_RESOLVED
            )
        return request

    async def request_credits(self, user_id: str, amount: int) -> CreditRequestItem:
        if not settings.MIN_CREDIT_REQUEST <= amount <= settings.MAX_CREDIT_REQUEST:
            raise ServiceError(
                f"Requested credits must be between {settings.MIN_CREDIT_REQUEST} "
                f"and {settings.MAX_CREDIT_REQUEST}",
                ErrorCode.INVALID_CREDIT_AMOUNT
            )

        account = await self._get_account(user_id)
        request = await self.request_repo.add(CreditRequest(
            id=str(uuid4()),
            user_id=account.id,
            user_name=account.name,
            requested_credits=amount
        ))
        logger.info(f"User {user_id} requested {amount} credits ({request.id})")
        return _to_item(request)

    async def list_user_requests(self, user_id: str) -> List[CreditRequestItem]:
        return [_to_item(req) for req in await self.request_repo.list_by_user(user_id)]

    async def list_requests(self, admin_id: str) -> List[CreditRequestItem]:
        await self._require_admin(admin_id)
        return [_to_item(req) for req in await self.request_repo.list_all()]

    async def _resolve(self, request_id: str, status: CreditRequestStatus) -> CreditRequest:
        """Move a pending request to status. Only one concurrent caller can win."""
        resolved = await self.request_repo.update_status(
            request_id, status, expected=CreditRequestStatus.PENDING
        )
        if not resolved:
            raise ServiceError(
                f"Credit request '{request_id}' has already been resolved",
                ErrorCode.REQUEST_ALREADY_RESOLVED
            )
        return resolved

    async def approve_request(self, admin_id: str, request_id: str) -> CreditRequestItem:
        """Approve a pending request and credit the requester's account."""
        await self._require_admin(admin_id)
        request = await self._get_pending(request_id)
        await self._get_account(request.user_id)

        updated = await self._resolve(request_id, CreditRequestStatus.APPROVED)
        account = await self.account_repo.adjust_credits(request.user_id, request.requested_credits)
        if not account:
            # Account vanished after the status flip; put the request back
            await self.request_repo.update_status(
                request_id, CreditRequestStatus.PENDING, expected=CreditRequestStatus.APPROVED
            )
            raise ServiceError(f"Account '{request.user_id}' not found", ErrorCode.ACCOUNT_NOT_FOUND)

        logger.info(
            f"Admin {admin_id} approved {request.requested_credits} credits for user {account.id}"
        )
        return _to_item(updated)

    async def reject_request(self, admin_id: str, request_id: str) -> CreditRequestItem:
        await self._require_admin(admin_id)
        await self._get_pending(request_id)

        updated = await self._resolve(request_id, CreditRequestStatus.REJECTED)
        logger.info(f"Admin {admin_id} rejected credit request {request_id}")
        return _to_item(updated)

    async def reset_daily_credits(self) -> int:
        """
        Top up every non-admin account to the daily allowance.
        Balances already above it (e.g. from approved requests) are left alone.
        """
        changed = 0
        for account in await self.account_repo.list_all():
            if account.is_admin or account.credits_remaining >= settings.DEFAULT_DAILY_CREDITS:
                continue
            if await self.account_repo.top_up_credits(account.id, settings.DEFAULT_DAILY_CREDITS):
                changed += 1

        logger.info(f"Daily credit reset applied to {changed} accounts")
        return changed
