"""
Document types (invoice, receipt, contract, ...).
"""

from dataclasses import dataclass
from typing import Optional

from .coercion import as_bool, as_int, as_str, optional, require_object, required
from .correspondent import NameFilter
from .identifiers import DocumentTypeId


@dataclass(frozen=True)
class DocumentType:
    """Document type as returned by the API."""

    id: DocumentTypeId
    name: str
    slug: str = ""
    match: str = ""
    matching_algorithm: Optional[int] = None
    is_insensitive: bool = False
    document_count: Optional[int] = None

    @classmethod
    def from_api_response(cls, data: dict) -> "DocumentType":
        """Create from Paperless API response."""
        data = require_object(data, "document type")
        return cls(
            id=required(data, "id", DocumentTypeId, "document type"),
            name=required(data, "name", as_str, "document type"),
            slug=optional(data, "slug", as_str, "document type", default=""),
            match=optional(data, "match", as_str, "document type", default=""),
            matching_algorithm=optional(data, "matching_algorithm", as_int, "document type"),
            is_insensitive=optional(data, "is_insensitive", as_bool, "document type", default=False),
            document_count=optional(data, "document_count", as_int, "document type"),
        )


class DocumentTypeFilter(NameFilter):
    """Filter used when listing document types."""
