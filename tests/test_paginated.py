"""Tests for the pagination engine."""

import pytest

from paperless_api.errors import PaperlessConnectionError, PaperlessDecodeError
from paperless_api.paperless_client.paginated import PageState, Paginated, force_https
from paperless_api.schemas.identifiers import TagId
from paperless_api.schemas.tag import Tag

from conftest import FakeExecutor, page_payload

START = "https://paperless.test/api/tags/?name__icontains="
PAGE_2 = "https://paperless.test/api/tags/?name__icontains=&page=2"
PAGE_3 = "https://paperless.test/api/tags/?name__icontains=&page=3"


def tag(tag_id: int) -> dict:
    return {"id": tag_id, "name": f"tag-{tag_id}"}


def identity(item):
    return item


class TestPaginated:
    """Walking pages lazily."""

    def test_single_page(self):
        executor = FakeExecutor({START: page_payload([1, 2, 3])})

        assert list(Paginated(executor, START, identity)) == [1, 2, 3]
        assert executor.calls == [("GET", START)]

    def test_lazy(self):
        """Nothing is fetched until the first item is pulled."""
        executor = FakeExecutor({START: page_payload([1])})
        pages = Paginated(executor, START, identity)

        assert executor.calls == []
        assert pages.state == PageState.EMPTY

        assert next(pages) == 1
        assert executor.calls == [("GET", START)]
        assert pages.state == PageState.DRAINING

    def test_follows_next_links_one_page_at_a_time(self):
        executor = FakeExecutor({
            START: page_payload([1, 2], next_url=PAGE_2, count=4),
            PAGE_2: page_payload([3, 4], count=4),
        })
        pages = Paginated(executor, START, identity)

        assert next(pages) == 1
        assert next(pages) == 2
        assert len(executor.calls) == 1
        assert pages.count == 4

        assert next(pages) == 3
        assert len(executor.calls) == 2
        assert list(pages) == [4]
        assert pages.pages_fetched == 2

    def test_empty_last_page_ends_sequence(self):
        """[a, b] + next, then [] without next: exactly a, b."""
        executor = FakeExecutor({
            START: page_payload(["a", "b"], next_url=PAGE_2),
            PAGE_2: page_payload([]),
        })
        pages = Paginated(executor, START, identity)

        assert list(pages) == ["a", "b"]
        assert pages.state == PageState.EXHAUSTED

        # Further pulls: no item, no error, no request
        assert next(pages, None) is None
        assert list(pages) == []
        assert len(executor.calls) == 2

    def test_empty_listing(self):
        executor = FakeExecutor({START: page_payload([])})
        pages = Paginated(executor, START, identity)

        assert list(pages) == []
        assert pages.state == PageState.EXHAUSTED
        assert pages.count == 0

    def test_empty_middle_page_is_skipped(self):
        executor = FakeExecutor({
            START: page_payload([1], next_url=PAGE_2),
            PAGE_2: page_payload([], next_url=PAGE_3),
            PAGE_3: page_payload([2]),
        })

        assert list(Paginated(executor, START, identity)) == [1, 2]
        assert len(executor.calls) == 3

    def test_next_link_upgraded_to_https(self):
        insecure = "http://paperless.test:8000/api/tags/?page=2"
        secure = "https://paperless.test:8000/api/tags/?page=2"
        executor = FakeExecutor({
            START: page_payload([1], next_url=insecure),
            secure: page_payload([2]),
        })

        assert list(Paginated(executor, START, identity)) == [1, 2]
        assert executor.calls[1] == ("GET", secure)

    def test_relative_next_link_resolved_against_page(self):
        executor = FakeExecutor({
            START: page_payload(["a", "b"], next_url="/api/tags/?page=2"),
            "https://paperless.test/api/tags/?page=2": page_payload(["c"]),
        })
        pages = Paginated(executor, START, identity)

        assert next(pages) == "a"
        assert pages.next_url == "https://paperless.test/api/tags/?page=2"
        assert list(pages) == ["b", "c"]
        assert pages.state == PageState.EXHAUSTED

    def test_self_referencing_empty_page_fails(self):
        executor = FakeExecutor({START: page_payload([], next_url=START)})
        pages = Paginated(executor, START, identity)

        with pytest.raises(PaperlessDecodeError, match="fetched page"):
            next(pages)

        assert pages.state == PageState.FAILED
        assert executor.calls == [("GET", START)]
        assert next(pages, None) is None

    def test_link_back_to_earlier_page_fails_after_delivering_items(self):
        executor = FakeExecutor({
            START: page_payload([1], next_url=PAGE_2),
            PAGE_2: page_payload([2], next_url=START.replace("https://", "http://")),
        })
        pages = Paginated(executor, START, identity)

        assert next(pages) == 1
        assert next(pages) == 2
        with pytest.raises(PaperlessDecodeError):
            next(pages)
        assert pages.next_url == START
        assert len(executor.calls) == 2

    def test_items_are_decoded(self):
        executor = FakeExecutor({START: page_payload([tag(1), tag(2)])})
        tags = list(Paginated(executor, START, Tag.from_api_response))

        assert [t.id for t in tags] == [TagId(1), TagId(2)]

    def test_fetch_error_stops_iteration(self):
        executor = FakeExecutor({
            START: page_payload([1], next_url=PAGE_2),
            PAGE_2: PaperlessConnectionError("connection refused"),
        })
        pages = Paginated(executor, START, identity)

        assert next(pages) == 1
        with pytest.raises(PaperlessConnectionError):
            next(pages)

        assert pages.state == PageState.FAILED
        assert next(pages, None) is None
        assert len(executor.calls) == 2

    def test_resume_from_checkpoint(self):
        executor = FakeExecutor({
            START: page_payload([1], next_url=PAGE_2),
            PAGE_2: PaperlessConnectionError("timeout"),
        })
        pages = Paginated(executor, START, identity)
        next(pages)
        with pytest.raises(PaperlessConnectionError):
            next(pages)

        assert pages.next_url == PAGE_2
        executor.pages[PAGE_2] = page_payload([2])
        assert list(Paginated(executor, pages.next_url, identity)) == [2]

    def test_bad_item_fails_the_page(self):
        executor = FakeExecutor({START: page_payload([tag(1), {"name": "no id"}])})
        pages = Paginated(executor, START, Tag.from_api_response)

        with pytest.raises(PaperlessDecodeError):
            next(pages)
        assert pages.state == PageState.FAILED

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"count": 1, "next": None, "previous": None},
            {"count": 1, "next": 5, "previous": None, "results": []},
        ],
    )
    def test_malformed_envelope(self, payload):
        pages = Paginated(FakeExecutor({START: payload}), START, identity)

        with pytest.raises(PaperlessDecodeError):
            next(pages)


class TestForceHttps:
    def test_rewrites_scheme_only(self):
        assert force_https("http://host:8000/api/documents/?page=2&x=1") == (
            "https://host:8000/api/documents/?page=2&x=1"
        )

    def test_keeps_https(self):
        assert force_https("https://host/api/?page=3") == "https://host/api/?page=3"

    def test_relative_link_rejected(self):
        with pytest.raises(PaperlessDecodeError):
            force_https("/api/documents/?page=2")
