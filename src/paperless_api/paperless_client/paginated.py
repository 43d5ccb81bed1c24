"""
Lazy iteration over paginated listing endpoints.

The server splits listings into pages:

    {"count": 42, "next": "<url>" | null, "previous": "<url>" | null, "results": [...]}

Paginated walks those pages one request at a time, only fetching the next
page once every item of the current one has been handed out.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterator, Optional, Protocol, TypeVar
from urllib.parse import urljoin, urlsplit, urlunsplit

from ..errors import PaperlessDecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HttpExecutor(Protocol):
    """Anything that can perform an authenticated GET and decode the JSON body."""

    def execute_json(self, method: str, url: str) -> Any:
        ...


class PageState(str, Enum):
    """
    Where a Paginated is in its walk.

    EMPTY: nothing fetched yet
    DRAINING: a page is buffered (possibly already emptied)
    EXHAUSTED: the server reported no further pages and the buffer is empty
    FAILED: a fetch failed; no further progress is possible
    """

    EMPTY = "EMPTY"
    DRAINING = "DRAINING"
    EXHAUSTED = "EXHAUSTED"
    FAILED = "FAILED"


@dataclass
class PaginatedResult(Generic[T]):
    """One page of a listing."""

    count: Optional[int]
    next: Optional[str]
    previous: Optional[str]
    results: deque = field(default_factory=deque)

    @classmethod
    def from_api_response(cls, data: Any, decode: Callable[[Any], T]) -> "PaginatedResult[T]":
        """Decode the page envelope and every item in it."""
        if not isinstance(data, dict):
            raise PaperlessDecodeError(
                f"Expected JSON object for page, got {type(data).__name__}"
            )
        results = data.get("results")
        if not isinstance(results, list):
            raise PaperlessDecodeError("Page has no 'results' list")
        for key in ("next", "previous"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise PaperlessDecodeError(f"Page field '{key}' is not a string")

        count = data.get("count")
        return cls(
            count=count if isinstance(count, int) else None,
            next=data.get("next"),
            previous=data.get("previous"),
            results=deque(decode(item) for item in results),
        )


def force_https(url: str) -> str:
    """Rewrite the scheme of a URL to https, keeping host, port, path and query."""
    parts = urlsplit(url)
    if not parts.netloc:
        raise PaperlessDecodeError(f"Next page link is not an absolute URL: {url!r}")
    return urlunsplit(parts._replace(scheme="https"))


class Paginated(Iterator[T]):
    """
    Iterator over every item of a paginated listing.

    Items are yielded in server order. Not restartable: once exhausted,
    build a new instance. Not safe to share between threads.

    A failed fetch raises from the __next__ call that triggered it and
    leaves the iterator in the FAILED state, where it stops. ``next_url``
    then holds the URL that failed, so iteration can be resumed with
    ``Paginated(executor, it.next_url, decode)``.

    A next link that points back to a page already fetched by this iterator
    fails the same way, with PaperlessDecodeError.
    """

    def __init__(self, executor: HttpExecutor, url: str, decode: Callable[[Any], T]):
        """
        Args:
            executor: Performs the HTTP requests (usually a PaperlessClient)
            url: Absolute URL of the first page, filters included
            decode: Turns one item of "results" into a typed record
        """
        self._executor = executor
        self._decode = decode
        self._page: Optional[PaginatedResult[T]] = None
        self.next_url: Optional[str] = url
        self.state = PageState.EMPTY
        self.pages_fetched = 0
        self._fetched: set[str] = set()

    @property
    def count(self) -> Optional[int]:
        """Total number of items reported by the server, once a page was fetched."""
        return self._page.count if self._page is not None else None

    def __iter__(self) -> "Paginated[T]":
        return self

    def __next__(self) -> T:
        while True:
            if self.state in (PageState.EXHAUSTED, PageState.FAILED):
                raise StopIteration

            if self._page is not None and self._page.results:
                return self._page.results.popleft()

            if self.next_url is None:
                logger.debug("Pagination exhausted")
                self.state = PageState.EXHAUSTED
                raise StopIteration

            self._fetch_next()

    def _fetch_next(self) -> None:
        url = self.next_url
        if url in self._fetched:
            self.state = PageState.FAILED
            raise PaperlessDecodeError(f"Next page link points back to a fetched page: {url}")

        logger.debug(f"Fetching page {url}")
        try:
            data = self._executor.execute_json("GET", url)
            page = PaginatedResult.from_api_response(data, self._decode)
        except Exception:
            self.state = PageState.FAILED
            raise

        self._fetched.add(url)
        self._page = page
        self.pages_fetched += 1
        self.state = PageState.DRAINING
        # Relative links are resolved against the page they came from
        self.next_url = force_https(urljoin(url, page.next)) if page.next else None
