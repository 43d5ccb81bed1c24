"""
Documents and the document filter.

DocumentFilter covers every dimension the documents endpoint can filter on.
It is compiled to query parameters with to_query_params(), or built from
the rules of a saved view with from_filter_rules().
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional

from .coercion import (
    as_date,
    as_int,
    as_str,
    as_timestamp,
    format_query_timestamp,
    id_list,
    optional,
    require_object,
    required,
)
from .filter_rules import (
    AddedAfter,
    AddedBefore,
    ASNGreaterThan,
    ASNIs,
    ASNLessThan,
    ContentContains,
    CorrespondentIs,
    CreatedAfter,
    CreatedBefore,
    CreatedDayIs,
    CreatedMonthIs,
    CreatedYearIs,
    DocumentTypeIs,
    DontHaveASN,
    DontHaveTag,
    FilterRule,
    FullTextQuery,
    HasAnyTag,
    HasTag,
    HasTagIn,
    IsInInbox,
    ModifiedAfter,
    ModifiedBefore,
    MoreLikeThis,
    StoragePathIs,
    TitleContains,
    TitleOrContentContains,
)
from .identifiers import (
    ArchiveSerialNumber,
    CorrespondentId,
    DocumentId,
    DocumentTypeId,
    StoragePathId,
    TagId,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """
    Paperless document representation.

    Related entities are referenced by id only; fetch them separately when
    their details are needed.
    """
    id: DocumentId
    title: str
    content: str  # OCR text
    created: datetime
    modified: datetime
    added: datetime
    created_date: Optional[date] = None

    # Classification
    correspondent: Optional[CorrespondentId] = None
    document_type: Optional[DocumentTypeId] = None
    storage_path: Optional[StoragePathId] = None
    tags: list[TagId] = field(default_factory=list)

    # File info
    archive_serial_number: Optional[ArchiveSerialNumber] = None
    original_file_name: Optional[str] = None
    archived_file_name: Optional[str] = None
    notes_count: Optional[int] = None

    @classmethod
    def from_api_response(cls, data: dict) -> "Document":
        """Create from Paperless API response."""
        data = require_object(data, "document")
        return cls(
            id=required(data, "id", DocumentId, "document"),
            title=required(data, "title", as_str, "document"),
            content=optional(data, "content", as_str, "document", default=""),
            created=required(data, "created", as_timestamp, "document"),
            modified=required(data, "modified", as_timestamp, "document"),
            added=required(data, "added", as_timestamp, "document"),
            created_date=optional(data, "created_date", as_date, "document"),
            correspondent=optional(data, "correspondent", CorrespondentId, "document"),
            document_type=optional(data, "document_type", DocumentTypeId, "document"),
            storage_path=optional(data, "storage_path", StoragePathId, "document"),
            tags=id_list(data, "tags", TagId, "document"),
            archive_serial_number=optional(
                data, "archive_serial_number", ArchiveSerialNumber, "document"
            ),
            original_file_name=optional(data, "original_file_name", as_str, "document"),
            archived_file_name=optional(data, "archived_file_name", as_str, "document"),
            notes_count=optional(data, "notes_count", as_int, "document"),
        )


def _text(value: Optional[str]) -> str:
    return value or ""


def _scalar(value) -> str:
    """Render an optional id, ASN or number; None gives an empty string."""
    return "" if value is None else str(value)


def _flag(value: Optional[bool]) -> str:
    if value is None:
        return ""
    return "true" if value else "false"


def _timestamp(value: Optional[date]) -> str:
    return "" if value is None else format_query_timestamp(value)


def _ids(values: Iterable) -> str:
    return ",".join(str(v) for v in values)


@dataclass
class DocumentFilter:
    """
    Filter used when searching for documents.

    Any combination of fields can be set at once; the server ANDs them.
    """

    # Equivalent to "advanced search" in the web interface
    query: Optional[str] = None
    more_like: Optional[DocumentId] = None
    title_content_contains: Optional[str] = None
    is_in_inbox: Optional[bool] = None

    title_starts_with: Optional[str] = None
    title_ends_with: Optional[str] = None
    title_contains: Optional[str] = None
    title_is: Optional[str] = None
    content_starts_with: Optional[str] = None
    content_ends_with: Optional[str] = None
    content_contains: Optional[str] = None
    content_is: Optional[str] = None

    archive_serial_number_is: Optional[ArchiveSerialNumber] = None
    archive_serial_number_gt: Optional[ArchiveSerialNumber] = None
    archive_serial_number_gte: Optional[ArchiveSerialNumber] = None
    archive_serial_number_lt: Optional[ArchiveSerialNumber] = None
    archive_serial_number_lte: Optional[ArchiveSerialNumber] = None
    archive_serial_number_isnull: Optional[bool] = None

    created_year: Optional[int] = None
    created_month: Optional[int] = None
    created_day: Optional[int] = None
    created_date_gt: Optional[date] = None
    created_gt: Optional[datetime] = None
    created_date_lt: Optional[date] = None
    created_lt: Optional[datetime] = None

    added_year: Optional[int] = None
    added_month: Optional[int] = None
    added_day: Optional[int] = None
    added_date_gt: Optional[date] = None
    added_gt: Optional[datetime] = None
    added_date_lt: Optional[date] = None
    added_lt: Optional[datetime] = None

    modified_year: Optional[int] = None
    modified_month: Optional[int] = None
    modified_day: Optional[int] = None
    modified_date_gt: Optional[date] = None
    modified_gt: Optional[datetime] = None
    modified_date_lt: Optional[date] = None
    modified_lt: Optional[datetime] = None

    correspondent_isnull: Optional[bool] = None
    correspondent_id_in: list[CorrespondentId] = field(default_factory=list)
    correspondent_id: Optional[CorrespondentId] = None
    correspondent_name_starts_with: Optional[str] = None
    correspondent_name_ends_with: Optional[str] = None
    correspondent_name_contains: Optional[str] = None
    correspondent_name_is: Optional[str] = None

    is_tagged: Optional[bool] = None
    # Document must have any of these tags
    tag_id_in: list[TagId] = field(default_factory=list)
    # Document must have all of these tags
    tag_id_all: list[TagId] = field(default_factory=list)
    # Document must have none of these tags
    tag_id_none: list[TagId] = field(default_factory=list)
    tag_id: Optional[TagId] = None
    tag_name_starts_with: Optional[str] = None
    tag_name_ends_with: Optional[str] = None
    tag_name_contains: Optional[str] = None
    tag_name_is: Optional[str] = None

    document_type_isnull: Optional[bool] = None
    document_type_id_in: list[DocumentTypeId] = field(default_factory=list)
    document_type_id: Optional[DocumentTypeId] = None
    document_type_name_starts_with: Optional[str] = None
    document_type_name_ends_with: Optional[str] = None
    document_type_name_contains: Optional[str] = None
    document_type_name_is: Optional[str] = None

    storage_path_isnull: Optional[bool] = None
    storage_path_id_in: list[StoragePathId] = field(default_factory=list)
    storage_path_id: Optional[StoragePathId] = None
    storage_path_name_starts_with: Optional[str] = None
    storage_path_name_ends_with: Optional[str] = None
    storage_path_name_contains: Optional[str] = None
    storage_path_name_is: Optional[str] = None

    def to_query_params(self) -> list[tuple[str, str]]:
        """
        Build query parameters for the documents endpoint.

        more_like_id, query and is_tagged are left out when unset. Every
        other parameter is always sent, as an empty string when unset,
        which the server reads as "no constraint".
        """
        params: list[tuple[str, str]] = []
        if self.more_like is not None:
            params.append(("more_like_id", str(self.more_like)))
        if self.query is not None:
            params.append(("query", self.query))
        if self.is_tagged is not None:
            params.append(("is_tagged", _flag(self.is_tagged)))

        params += [
            ("title_content", _text(self.title_content_contains)),
            ("is_in_inbox", _flag(self.is_in_inbox)),
            ("title__istartswith", _text(self.title_starts_with)),
            ("title__iendswith", _text(self.title_ends_with)),
            ("title__icontains", _text(self.title_contains)),
            ("title__iexact", _text(self.title_is)),
            ("content__istartswith", _text(self.content_starts_with)),
            ("content__iendswith", _text(self.content_ends_with)),
            ("content__icontains", _text(self.content_contains)),
            ("content__iexact", _text(self.content_is)),
            ("archive_serial_number", _scalar(self.archive_serial_number_is)),
            ("archive_serial_number__gt", _scalar(self.archive_serial_number_gt)),
            ("archive_serial_number__gte", _scalar(self.archive_serial_number_gte)),
            ("archive_serial_number__lt", _scalar(self.archive_serial_number_lt)),
            ("archive_serial_number__lte", _scalar(self.archive_serial_number_lte)),
            ("archive_serial_number__isnull", _flag(self.archive_serial_number_isnull)),
        ]

        for prefix in ("created", "added", "modified"):
            params += [
                (f"{prefix}__year", _scalar(getattr(self, f"{prefix}_year"))),
                (f"{prefix}__month", _scalar(getattr(self, f"{prefix}_month"))),
                (f"{prefix}__day", _scalar(getattr(self, f"{prefix}_day"))),
                (f"{prefix}__date__gt", _timestamp(getattr(self, f"{prefix}_date_gt"))),
                (f"{prefix}__gt", _timestamp(getattr(self, f"{prefix}_gt"))),
                (f"{prefix}__date__lt", _timestamp(getattr(self, f"{prefix}_date_lt"))),
                (f"{prefix}__lt", _timestamp(getattr(self, f"{prefix}_lt"))),
            ]

        params += [
            ("correspondent__isnull", _flag(self.correspondent_isnull)),
            ("correspondent__id__in", _ids(self.correspondent_id_in)),
            ("correspondent__id", _scalar(self.correspondent_id)),
            ("correspondent__name__istartswith", _text(self.correspondent_name_starts_with)),
            ("correspondent__name__iendswith", _text(self.correspondent_name_ends_with)),
            ("correspondent__name__icontains", _text(self.correspondent_name_contains)),
            ("correspondent__name__iexact", _text(self.correspondent_name_is)),
            ("tags__id__in", _ids(self.tag_id_in)),
            ("tags__id__all", _ids(self.tag_id_all)),
            ("tags__id__none", _ids(self.tag_id_none)),
            ("tags__id", _scalar(self.tag_id)),
            ("tags__name__istartswith", _text(self.tag_name_starts_with)),
            ("tags__name__iendswith", _text(self.tag_name_ends_with)),
            ("tags__name__icontains", _text(self.tag_name_contains)),
            ("tags__name__iexact", _text(self.tag_name_is)),
            ("document_type__isnull", _flag(self.document_type_isnull)),
            ("document_type__id__in", _ids(self.document_type_id_in)),
            ("document_type__id", _scalar(self.document_type_id)),
            ("document_type__name__istartswith", _text(self.document_type_name_starts_with)),
            ("document_type__name__iendswith", _text(self.document_type_name_ends_with)),
            ("document_type__name__icontains", _text(self.document_type_name_contains)),
            ("document_type__name__iexact", _text(self.document_type_name_is)),
            ("storage_path__isnull", _flag(self.storage_path_isnull)),
            ("storage_path__id__in", _ids(self.storage_path_id_in)),
            ("storage_path__id", _scalar(self.storage_path_id)),
            ("storage_path__name__istartswith", _text(self.storage_path_name_starts_with)),
            ("storage_path__name__iendswith", _text(self.storage_path_name_ends_with)),
            ("storage_path__name__icontains", _text(self.storage_path_name_contains)),
            ("storage_path__name__iexact", _text(self.storage_path_name_is)),
        ]
        return params

    @classmethod
    def from_filter_rules(cls, rules: Iterable[FilterRule]) -> "DocumentFilter":
        """
        Create a filter from saved view rules.

        Rules are applied in order. Rules on single-valued fields overwrite
        each other (last one wins); tag rules accumulate. Rules that cannot
        be expressed are logged and skipped.
        """
        f = cls()
        for rule in rules:
            v = rule.value
            if isinstance(rule, TitleContains):
                f.title_contains = v
            elif isinstance(rule, ContentContains):
                f.content_contains = v
            elif isinstance(rule, ASNIs):
                if v is None:
                    f.archive_serial_number_isnull = True
                else:
                    f.archive_serial_number_is = v
            elif isinstance(rule, CorrespondentIs):
                if v is None:
                    f.correspondent_isnull = True
                else:
                    f.correspondent_id = v
            elif isinstance(rule, DocumentTypeIs):
                if v is None:
                    f.document_type_isnull = True
                else:
                    f.document_type_id = v
            elif isinstance(rule, IsInInbox):
                f.is_in_inbox = v
            elif isinstance(rule, HasTag) and v is not None:
                f.tag_id_all.append(v)
            elif isinstance(rule, HasAnyTag):
                f.is_tagged = v
            elif isinstance(rule, CreatedBefore):
                f.created_lt = v
            elif isinstance(rule, CreatedAfter):
                f.created_gt = v
            elif isinstance(rule, CreatedYearIs):
                f.created_year = v
            elif isinstance(rule, CreatedMonthIs):
                f.created_month = v
            elif isinstance(rule, CreatedDayIs):
                f.created_day = v
            elif isinstance(rule, AddedBefore):
                f.added_lt = v
            elif isinstance(rule, AddedAfter):
                f.added_gt = v
            elif isinstance(rule, ModifiedBefore):
                f.modified_lt = v
            elif isinstance(rule, ModifiedAfter):
                f.modified_gt = v
            elif isinstance(rule, DontHaveTag) and v is not None:
                f.tag_id_none.append(v)
            elif isinstance(rule, DontHaveASN):
                f.archive_serial_number_isnull = v
            elif isinstance(rule, TitleOrContentContains):
                f.title_content_contains = v
            elif isinstance(rule, FullTextQuery):
                f.query = v
            elif isinstance(rule, MoreLikeThis):
                f.more_like = v
            elif isinstance(rule, HasTagIn) and v is not None:
                f.tag_id_in.append(v)
            elif isinstance(rule, ASNGreaterThan):
                f.archive_serial_number_gt = v
            elif isinstance(rule, ASNLessThan):
                f.archive_serial_number_lt = v
            elif isinstance(rule, StoragePathIs):
                if v is None:
                    f.storage_path_isnull = True
                else:
                    f.storage_path_id = v
            else:
                logger.warning(f"Ignoring filter rule {rule!r}")
        return f
