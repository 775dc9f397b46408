"""Shared fixtures for service-layer tests."""
import asyncio

import pytest

from core.domain import Document, UserAccount
from services.factory import build_services


def run(coro):
    """Drive an async service call from a synchronous test."""
    return asyncio.run(coro)


@pytest.fixture
def accounts():
    return [
        UserAccount(id="1", name="Admin User", email="admin@example.com", is_admin=True, credits_remaining=9999),
        UserAccount(id="2", name="Regular User", email="user@example.com", credits_remaining=20),
        UserAccount(id="3", name="Other User", email="other@example.com", credits_remaining=0),
    ]


@pytest.fixture
def services(accounts):
    return build_services(accounts=accounts, configure_logging=False)


@pytest.fixture
def make_document():
    def _make(doc_id, content, owner_id="2", name=None):
        return Document(id=doc_id, name=name or f"{doc_id}.txt", content=content, owner_id=owner_id)
    return _make
