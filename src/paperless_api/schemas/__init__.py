"""
Typed records, filters and filter rules of the Paperless API.
"""

from .correspondent import Correspondent, CorrespondentFilter, NameFilter
from .document import Document, DocumentFilter
from .document_type import DocumentType, DocumentTypeFilter
from .filter_rules import RULE_TYPES, FilterRule, decode_filter_rule
from .identifiers import (
    ArchiveSerialNumber,
    CorrespondentId,
    DocumentId,
    DocumentTypeId,
    SavedViewId,
    StoragePathId,
    TagId,
)
from .saved_view import SavedView
from .storage_path import StoragePath, StoragePathFilter
from .tag import Tag, TagFilter

__all__ = [
    "ArchiveSerialNumber",
    "Correspondent",
    "CorrespondentFilter",
    "CorrespondentId",
    "Document",
    "DocumentFilter",
    "DocumentId",
    "DocumentType",
    "DocumentTypeFilter",
    "DocumentTypeId",
    "FilterRule",
    "NameFilter",
    "RULE_TYPES",
    "SavedView",
    "SavedViewId",
    "StoragePath",
    "StoragePathFilter",
    "StoragePathId",
    "Tag",
    "TagFilter",
    "TagId",
    "decode_filter_rule",
]
