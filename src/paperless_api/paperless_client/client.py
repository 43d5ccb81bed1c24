"""
Paperless-ngx API client implementation.
"""

import logging
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import urlencode, urljoin

import requests

from ..config import ConfigValidationError, PaperlessConfig
from ..errors import (
    PaperlessAPIError,
    PaperlessConnectionError,
    PaperlessDecodeError,
    PaperlessError,
)
from ..schemas.correspondent import Correspondent, CorrespondentFilter
from ..schemas.document import Document, DocumentFilter
from ..schemas.document_type import DocumentType, DocumentTypeFilter
from ..schemas.identifiers import (
    CorrespondentId,
    DocumentId,
    DocumentTypeId,
    SavedViewId,
    StoragePathId,
    TagId,
)
from ..schemas.saved_view import SavedView
from ..schemas.storage_path import StoragePath, StoragePathFilter
from ..schemas.tag import Tag, TagFilter
from .paginated import Paginated

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACCEPT_HEADER = "application/json; version=2"


class PaperlessClient:
    """
    Client for Paperless-ngx API.

    Features:
    - List correspondents, document types, documents, storage paths, tags
      and saved views as lazy iterators
    - Get a single entity by id
    - Download document files

    Every request carries the token and the API version header. Requests
    are never retried.
    """

    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize Paperless client.

        Args:
            base_url: Root URL of the API (e.g., "https://paperless.example.com/api/")
            token: API token for authentication
            timeout: Request timeout in seconds
        """
        # urljoin drops the last path segment unless the root ends with "/"
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Token {token}",
            "Accept": ACCEPT_HEADER,
        })

    @classmethod
    def from_config(cls, config: PaperlessConfig) -> "PaperlessClient":
        """
        Build a client from configuration.

        Raises:
            ConfigValidationError: If the configuration is incomplete
        """
        errors = config.validate()
        if errors:
            raise ConfigValidationError("; ".join(errors))
        return cls(config.base_url, config.token, timeout=config.timeout)

    def url(self, path: str, params: Optional[list[tuple[str, str]]] = None) -> str:
        """Absolute URL of an endpoint below the API root."""
        url = urljoin(self.base_url, path)
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def _request(
        self,
        method: str,
        url: str,
        stream: bool = False,
    ) -> requests.Response:
        """Make an API request with error handling."""
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=self.timeout,
                stream=stream,
            )
        except requests.exceptions.ConnectionError as e:
            raise PaperlessConnectionError(f"Failed to connect to Paperless at {url}: {e}") from e
        except requests.exceptions.Timeout as e:
            raise PaperlessConnectionError(f"Request to Paperless timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            raise PaperlessConnectionError(f"Request failed: {e}") from e

        if not response.ok:
            raise PaperlessAPIError(
                status_code=response.status_code,
                message=response.reason or "",
                response_body=response.text,
            )

        return response

    def execute_json(self, method: str, url: str) -> Any:
        """
        Perform a request and decode the JSON body.

        Raises:
            PaperlessConnectionError: Transport failure
            PaperlessAPIError: Non-2xx response
            PaperlessDecodeError: Body is not JSON
        """
        response = self._request(method, url)
        try:
            return response.json()
        except ValueError as e:
            raise PaperlessDecodeError(f"Invalid JSON from {url}: {e}") from e

    def test_connection(self) -> bool:
        """Test connection to Paperless API."""
        try:
            self._request("GET", self.base_url)
            return True
        except PaperlessError as e:
            logger.warning(f"Paperless connection check failed: {e}")
            return False

    # === Listings ===

    def _paginate(
        self,
        path: str,
        params: Optional[list[tuple[str, str]]],
        decode: Callable[[Any], T],
    ) -> Paginated[T]:
        return Paginated(self, self.url(path, params), decode)

    def list_correspondents(
        self, filters: Optional[CorrespondentFilter] = None
    ) -> Paginated[Correspondent]:
        """
        List correspondents lazily.

        Args:
            filters: Name constraints; defaults to no constraint
        """
        filters = filters or CorrespondentFilter()
        return self._paginate(
            "correspondents/", filters.to_query_params(), Correspondent.from_api_response
        )

    def list_document_types(
        self, filters: Optional[DocumentTypeFilter] = None
    ) -> Paginated[DocumentType]:
        """List document types lazily."""
        filters = filters or DocumentTypeFilter()
        return self._paginate(
            "document_types/", filters.to_query_params(), DocumentType.from_api_response
        )

    def list_documents(self, filters: Optional[DocumentFilter] = None) -> Paginated[Document]:
        """
        List documents lazily.

        Args:
            filters: Document constraints; defaults to no constraint

        Yields:
            Document objects, one page fetched at a time
        """
        filters = filters or DocumentFilter()
        return self._paginate("documents/", filters.to_query_params(), Document.from_api_response)

    def list_storage_paths(
        self, filters: Optional[StoragePathFilter] = None
    ) -> Paginated[StoragePath]:
        """List storage paths lazily."""
        filters = filters or StoragePathFilter()
        return self._paginate(
            "storage_paths/", filters.to_query_params(), StoragePath.from_api_response
        )

    def list_tags(self, filters: Optional[TagFilter] = None) -> Paginated[Tag]:
        """List tags lazily."""
        filters = filters or TagFilter()
        return self._paginate("tags/", filters.to_query_params(), Tag.from_api_response)

    def list_saved_views(self) -> Paginated[SavedView]:
        """List saved views lazily."""
        return self._paginate("saved_views/", None, SavedView.from_api_response)

    def list_saved_view_documents(self, view: SavedView) -> Paginated[Document]:
        """List the documents a saved view selects."""
        return self.list_documents(view.to_document_filter())

    # === Single entities ===

    def _get(self, collection: str, entity_id: Any, id_type: type, decode: Callable[[Any], T]) -> T:
        if not isinstance(entity_id, id_type):
            raise TypeError(
                f"Expected {id_type.__name__} for {collection}, got {type(entity_id).__name__}"
            )
        return decode(self.execute_json("GET", self.url(f"{collection}/{entity_id}/")))

    def get_correspondent(self, correspondent_id: CorrespondentId) -> Correspondent:
        """Get a correspondent by id."""
        return self._get(
            "correspondents", correspondent_id, CorrespondentId, Correspondent.from_api_response
        )

    def get_document_type(self, document_type_id: DocumentTypeId) -> DocumentType:
        """Get a document type by id."""
        return self._get(
            "document_types", document_type_id, DocumentTypeId, DocumentType.from_api_response
        )

    def get_document(self, document_id: DocumentId) -> Document:
        """
        Get full document details by ID.

        Args:
            document_id: Paperless document ID

        Returns:
            Document with ids of its correspondent, type, storage path and tags
        """
        return self._get("documents", document_id, DocumentId, Document.from_api_response)

    def get_storage_path(self, storage_path_id: StoragePathId) -> StoragePath:
        """Get a storage path by id."""
        return self._get(
            "storage_paths", storage_path_id, StoragePathId, StoragePath.from_api_response
        )

    def get_tag(self, tag_id: TagId) -> Tag:
        """Get a tag by id."""
        return self._get("tags", tag_id, TagId, Tag.from_api_response)

    def get_saved_view(self, saved_view_id: SavedViewId) -> SavedView:
        """Get a saved view, with its filter rules decoded."""
        return self._get("saved_views", saved_view_id, SavedViewId, SavedView.from_api_response)

    # === Files ===

    def _download_url(self, document_id: DocumentId, original: bool = False) -> str:
        if not isinstance(document_id, DocumentId):
            raise TypeError(f"Expected DocumentId, got {type(document_id).__name__}")
        params = [("original", "true")] if original else None
        return self.url(f"documents/{document_id}/download/", params)

    def download_document(self, document_id: DocumentId, original: bool = False) -> bytes:
        """
        Download a document file.

        Args:
            document_id: Paperless document ID
            original: Fetch the uploaded original instead of the archived PDF

        Returns:
            File content
        """
        response = self._request("GET", self._download_url(document_id, original), stream=True)
        return response.content

    def get_document_size(self, document_id: DocumentId, original: bool = False) -> int:
        """
        Size in bytes of a document file, without downloading it.

        Raises:
            PaperlessDecodeError: If the server sent no usable Content-Length
        """
        # HEAD has no body to read
        response = self._request("HEAD", self._download_url(document_id, original), stream=True)
        length = response.headers.get("Content-Length")
        response.close()
        try:
            return int(length)
        except (TypeError, ValueError) as e:
            raise PaperlessDecodeError(
                f"Invalid Content-Length for document {document_id}: {length!r}"
            ) from e
