"""
Saved views.

A saved view is a filtered document listing created from the web
interface: a name, a sort order and a list of filter rules.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..errors import PaperlessDecodeError
from .coercion import as_bool, as_str, optional, require_object, required
from .document import DocumentFilter
from .filter_rules import FilterRule, decode_filter_rule
from .identifiers import SavedViewId


@dataclass(frozen=True)
class SavedView:
    """Saved view as returned by the API."""

    id: SavedViewId
    name: str
    show_on_dashboard: bool = False
    show_in_sidebar: bool = False
    sort_field: Optional[str] = None
    sort_reverse: bool = False
    filter_rules: list[FilterRule] = field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict) -> "SavedView":
        """
        Create from Paperless API response.

        Raises:
            PaperlessDecodeError: Malformed view
            PaperlessProtocolError: A filter rule has a missing or unknown rule_type
        """
        data = require_object(data, "saved view")
        raw_rules = data.get("filter_rules") or []
        if not isinstance(raw_rules, list):
            raise PaperlessDecodeError("saved view: field 'filter_rules' is not a list")

        return cls(
            id=required(data, "id", SavedViewId, "saved view"),
            name=required(data, "name", as_str, "saved view"),
            show_on_dashboard=optional(data, "show_on_dashboard", as_bool, "saved view", default=False),
            show_in_sidebar=optional(data, "show_in_sidebar", as_bool, "saved view", default=False),
            sort_field=optional(data, "sort_field", as_str, "saved view"),
            sort_reverse=optional(data, "sort_reverse", as_bool, "saved view", default=False),
            filter_rules=[decode_filter_rule(rule) for rule in raw_rules],
        )

    def to_document_filter(self) -> DocumentFilter:
        """Document filter equivalent to this view's rules."""
        return DocumentFilter.from_filter_rules(self.filter_rules)
