"""Test fixtures and utilities."""

from typing import Any

import pytest

API_ROOT = "https://paperless.test/api/"
TOKEN = "test-token-12345"


def document_payload(doc_id: int, **overrides: Any) -> dict:
    """Document as the documents endpoint returns it."""
    payload = {
        "id": doc_id,
        "correspondent": None,
        "document_type": None,
        "storage_path": None,
        "title": f"Document {doc_id}",
        "content": "OCR text",
        "tags": [],
        "created": "2024-11-18T00:00:00+01:00",
        "created_date": "2024-11-18",
        "modified": "2024-11-19T08:15:01Z",
        "added": "2024-11-19T08:14:22Z",
        "archive_serial_number": None,
        "original_file_name": f"scan_{doc_id}.pdf",
        "archived_file_name": f"{doc_id}.pdf",
        "notes": [],
    }
    payload.update(overrides)
    return payload


def page_payload(results: list, next_url: str | None = None, count: int | None = None) -> dict:
    """Paginated envelope around a list of results."""
    return {
        "count": len(results) if count is None else count,
        "next": next_url,
        "previous": None,
        "results": results,
    }


class FakeExecutor:
    """In-memory HTTP executor mapping URLs to JSON payloads (or exceptions)."""

    def __init__(self, pages: dict[str, Any]):
        self.pages = pages
        self.calls: list[tuple[str, str]] = []

    def execute_json(self, method: str, url: str) -> Any:
        self.calls.append((method, url))
        result = self.pages[url]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def sample_paperless_document() -> dict:
    """Sample Paperless document API response."""
    return document_payload(
        12345,
        title="SPAR Einkauf 18.11.2024",
        content="SPAR Österreich\nSumme EUR 11,48",
        correspondent=5,
        document_type=2,
        storage_path=1,
        tags=[1, 3],
        archive_serial_number=7421,
        original_file_name="receipt_18112024.pdf",
        notes_count=2,
    )


@pytest.fixture
def sample_tag() -> dict:
    return {
        "id": 1,
        "slug": "finance-inbox",
        "name": "finance/inbox",
        "color": "#a6cee3",
        "text_color": "#000000",
        "match": "",
        "matching_algorithm": 6,
        "is_insensitive": True,
        "is_inbox_tag": True,
        "document_count": 12,
    }


@pytest.fixture
def sample_correspondent() -> dict:
    return {
        "id": 5,
        "slug": "spar",
        "name": "SPAR",
        "match": "spar",
        "matching_algorithm": 1,
        "is_insensitive": True,
        "document_count": 31,
        "last_correspondence": "2024-11-18T00:00:00+01:00",
    }


@pytest.fixture
def sample_saved_view() -> dict:
    return {
        "id": 3,
        "name": "Finance inbox",
        "show_on_dashboard": True,
        "show_in_sidebar": False,
        "sort_field": "created",
        "sort_reverse": True,
        "filter_rules": [
            {"rule_type": 6, "value": "1"},
            {"rule_type": 6, "value": "3"},
            {"rule_type": 3, "value": "5"},
            {"rule_type": 0, "value": "SPAR"},
        ],
    }
