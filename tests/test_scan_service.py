"""Tests for document uploads and credit-charged scans."""

import pytest

from core.domain import ErrorCode, ServiceError
from infrastructure.vector_cache import InMemoryVectorCache
from services.factory import build_services
from utils.common import get_content_hash
from tests.conftest import run


class TestUploads:

    def test_upload_and_list(self, services):
        doc = run(services.scans.upload_document("2", "notes.txt", b"hello world"))
        assert doc.owner_id == "2"
        assert doc.content == "hello world"

        listed = run(services.scans.list_documents("2"))
        assert [item.id for item in listed] == [doc.id]
        assert listed[0].filename == "notes.txt"

    def test_upload_rejects_wrong_extension(self, services):
        with pytest.raises(ServiceError) as exc:
            run(services.scans.upload_document("2", "report.pdf", b"%PDF-1.4"))
        assert exc.value.error_code == ErrorCode.INVALID_FORMAT

    def test_upload_rejects_binary(self, services):
        with pytest.raises(ServiceError) as exc:
            run(services.scans.upload_document("2", "bad.txt", b"\xff\xfe\x00\x80"))
        assert exc.value.error_code == ErrorCode.INVALID_FORMAT

    def test_upload_rejects_empty_file(self, services):
        with pytest.raises(ServiceError) as exc:
            run(services.scans.upload_document("2", "empty.txt", b""))
        assert exc.value.error_code == ErrorCode.NO_TEXT_FOUND

    def test_upload_for_unknown_account(self, services):
        with pytest.raises(ServiceError) as exc:
            run(services.scans.upload_document("nobody", "a.txt", b"text"))
        assert exc.value.error_code == ErrorCode.ACCOUNT_NOT_FOUND

    def test_get_document_is_owner_scoped(self, services):
        doc = run(services.scans.upload_document("2", "mine.txt", b"private"))
        assert run(services.scans.get_document("2", doc.id)).content == "private"

        with pytest.raises(ServiceError) as exc:
            run(services.scans.get_document("1", doc.id))
        assert exc.value.error_code == ErrorCode.DOCUMENT_NOT_FOUND

    def test_delete_document(self, services):
        doc = run(services.scans.upload_document("2", "gone.txt", b"bye"))
        assert run(services.scans.delete_document("1", doc.id)) is False
        assert run(services.scans.delete_document("2", doc.id)) is True
        assert run(services.scans.list_documents("2")) == []
        assert run(services.scans.delete_document("2", doc.id)) is False

    def test_delete_document_evicts_cached_vector(self, accounts):
        cache = InMemoryVectorCache(max_entries=10)
        services = build_services(accounts=accounts, vector_cache=cache, configure_logging=False)
        doc = run(services.scans.upload_document("2", "cached.txt", b"cat dog"))
        keep = run(services.scans.upload_document("2", "kept.txt", b"cat"))

        run(services.scans.scan("2", "cat"))
        assert len(cache) == 2

        assert run(services.scans.delete_document("2", doc.id)) is True
        assert len(cache) == 1
        assert cache.get(doc.id, get_content_hash("cat dog")) is None
        assert cache.get(keep.id, get_content_hash("cat")) == {"cat": 1}

    def test_failed_delete_keeps_cached_vector(self, accounts):
        cache = InMemoryVectorCache(max_entries=10)
        services = build_services(accounts=accounts, vector_cache=cache, configure_logging=False)
        doc = run(services.scans.upload_document("2", "cached.txt", b"cat dog"))
        run(services.scans.scan("2", "cat"))

        assert run(services.scans.delete_document("1", doc.id)) is False
        assert len(cache) == 1


class TestScan:

    def _upload(self, services, owner, name, text):
        return run(services.scans.upload_document(owner, name, text.encode("utf-8")))

    def test_scan_ranks_only_own_documents(self, services):
        fox = self._upload(services, "2", "fox.txt", "the quick brown fox jumps")
        other = self._upload(services, "2", "other.txt", "completely unrelated words")
        self._upload(services, "1", "admin.txt", "the quick brown fox")

        response = run(services.scans.scan("2", "the quick brown fox"))

        assert [r.document_id for r in response.results] == [fox.id, other.id]
        assert response.total_results == 2
        assert response.results[0].score > 0.8
        assert response.results[1].score == 0.0
        assert response.results[0].document_name == "fox.txt"

    def test_scan_charges_one_credit_and_records_scan(self, services):
        self._upload(services, "2", "a.txt", "some text")

        response = run(services.scans.scan("2", "text"))

        assert response.credits_remaining == 19
        account = run(services.scans.account_repo.get_by_id("2"))
        assert account.credits_remaining == 19
        records = run(services.scans.scan_repo.list_all())
        assert len(records) == 1
        assert records[0].user_id == "2"
        assert records[0].user_name == "Regular User"
        assert records[0].results_count == 1

    def test_scan_with_no_documents(self, services):
        response = run(services.scans.scan("2", "anything"))
        assert response.results == []
        assert response.credits_remaining == 19

    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    def test_blank_query_rejected_without_charge(self, services, query):
        with pytest.raises(ServiceError) as exc:
            run(services.scans.scan("2", query))
        assert exc.value.error_code == ErrorCode.EMPTY_QUERY
        assert run(services.scans.account_repo.get_by_id("2")).credits_remaining == 20
        assert run(services.scans.scan_repo.list_all()) == []

    def test_no_credits_rejected_without_record(self, services):
        with pytest.raises(ServiceError) as exc:
            run(services.scans.scan("3", "query"))
        assert exc.value.error_code == ErrorCode.INSUFFICIENT_CREDITS
        assert "INSUFFICIENT_CREDITS" in str(exc.value)
        assert run(services.scans.scan_repo.list_all()) == []

    def test_credits_run_out(self, services):
        account = run(services.scans.account_repo.get_by_id("2"))
        account.credits_remaining = 1
        run(services.scans.account_repo.save(account))

        run(services.scans.scan("2", "first"))
        with pytest.raises(ServiceError):
            run(services.scans.scan("2", "second"))
        assert run(services.scans.account_repo.get_by_id("2")).credits_remaining == 0

    def test_unknown_account(self, services):
        with pytest.raises(ServiceError) as exc:
            run(services.scans.scan("nobody", "query"))
        assert exc.value.error_code == ErrorCode.ACCOUNT_NOT_FOUND

    def test_snippet_is_truncated(self, services):
        self._upload(services, "2", "long.txt", "word " * 200)
        response = run(services.scans.scan("2", "word"))
        assert response.results[0].content_snippet.endswith("...")
