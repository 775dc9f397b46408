# api/schemas.py
from datetime import datetime
from pydantic import BaseModel
from typing import List

from core.domain import CreditRequestStatus

class DocumentsListItem(BaseModel):
    id: str
    filename: str
    upload_date: datetime

class ScanResultItem(BaseModel):
    document_id: str
    document_name: str
    score: float  # cosine similarity in [0, 1]
    content_snippet: str

class ScanResponse(BaseModel):
    query: str
    results: List[ScanResultItem]
    total_results: int
    credits_remaining: int

class CreditRequestItem(BaseModel):
    id: str
    user_id: str
    user_name: str
    requested_credits: int
    status: CreditRequestStatus
    request_date: datetime

class DailyScanCount(BaseModel):
    date: str  # ISO date, UTC
    count: int

class TopUser(BaseModel):
    user_id: str
    name: str
    scans: int

class AnalyticsResponse(BaseModel):
    total_scans: int
    daily_scans: List[DailyScanCount]
    top_users: List[TopUser]
    pending_requests: int = 0
    approved_requests: int = 0
    rejected_requests: int = 0
