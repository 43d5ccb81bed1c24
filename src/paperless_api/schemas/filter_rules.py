"""
Saved view filter rules.

On the wire a rule is a pair {"rule_type": int, "value": str | null}. The
integer selects the meaning of the rule and the string is interpreted
according to that meaning: a tag id, a boolean, a timestamp, free text...

Decoding turns each pair into one of the FilterRule subclasses below, each
carrying a typed payload. A value that cannot be read as the type its rule
needs becomes a None payload, not an error. An unknown rule_type is an
error: it means the server speaks a newer protocol than this client.

Rule types:
    0  TitleContains           13 AddedBefore
    1  ContentContains         14 AddedAfter
    2  ASNIs                   15 ModifiedBefore
    3  CorrespondentIs         16 ModifiedAfter
    4  DocumentTypeIs          17 DontHaveTag
    5  IsInInbox               18 DontHaveASN
    6  HasTag                  19 TitleOrContentContains
    7  HasAnyTag               20 FullTextQuery
    8  CreatedBefore           21 MoreLikeThis
    9  CreatedAfter            22 HasTagIn
    10 CreatedYearIs           23 ASNGreaterThan
    11 CreatedMonthIs          24 ASNLessThan
    12 CreatedDayIs            25 StoragePathIs
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Optional

from ..errors import PaperlessDecodeError, PaperlessProtocolError, UnknownRuleTypeError
from .coercion import parse_rfc3339
from .identifiers import (
    ArchiveSerialNumber,
    CorrespondentId,
    DocumentId,
    DocumentTypeId,
    StoragePathId,
    TagId,
    parse_u64,
)


@dataclass(frozen=True)
class RawValueCandidates:
    """
    Every typed reading of a raw rule value, computed once.

    Each attribute is None when the raw value is null or cannot be read as
    that type.
    """

    text: Optional[str] = None
    integer: Optional[int] = None
    boolean: Optional[bool] = None
    timestamp: Optional[datetime] = None

    @classmethod
    def from_raw(cls, value: Optional[str]) -> "RawValueCandidates":
        if value is None:
            return cls()

        try:
            integer: Optional[int] = parse_u64(value)
        except ValueError:
            integer = None

        return cls(
            text=value,
            integer=integer,
            boolean={"true": True, "false": False}.get(value),
            timestamp=parse_rfc3339(value),
        )


@dataclass(frozen=True)
class FilterRule:
    """Base class of the decoded filter rules."""

    value: Any = None

    rule_type: ClassVar[int]
    # Which RawValueCandidates attribute the payload is taken from
    candidate: ClassVar[str]
    # Identifier type wrapping integer payloads, if any
    wraps: ClassVar[Optional[type]] = None

    @classmethod
    def from_candidates(cls, candidates: RawValueCandidates) -> "FilterRule":
        value = getattr(candidates, cls.candidate)
        if value is not None and cls.wraps is not None:
            value = cls.wraps(value)
        return cls(value)


class TitleContains(FilterRule):
    rule_type = 0
    candidate = "text"


class ContentContains(FilterRule):
    rule_type = 1
    candidate = "text"


class ASNIs(FilterRule):
    rule_type = 2
    candidate = "integer"
    wraps = ArchiveSerialNumber


class CorrespondentIs(FilterRule):
    rule_type = 3
    candidate = "integer"
    wraps = CorrespondentId


class DocumentTypeIs(FilterRule):
    rule_type = 4
    candidate = "integer"
    wraps = DocumentTypeId


class IsInInbox(FilterRule):
    rule_type = 5
    candidate = "boolean"


class HasTag(FilterRule):
    rule_type = 6
    candidate = "integer"
    wraps = TagId


class HasAnyTag(FilterRule):
    rule_type = 7
    candidate = "boolean"


class CreatedBefore(FilterRule):
    rule_type = 8
    candidate = "timestamp"


class CreatedAfter(FilterRule):
    rule_type = 9
    candidate = "timestamp"


class CreatedYearIs(FilterRule):
    rule_type = 10
    candidate = "integer"


class CreatedMonthIs(FilterRule):
    rule_type = 11
    candidate = "integer"


class CreatedDayIs(FilterRule):
    rule_type = 12
    candidate = "integer"


class AddedBefore(FilterRule):
    rule_type = 13
    candidate = "timestamp"


class AddedAfter(FilterRule):
    rule_type = 14
    candidate = "timestamp"


class ModifiedBefore(FilterRule):
    rule_type = 15
    candidate = "timestamp"


class ModifiedAfter(FilterRule):
    rule_type = 16
    candidate = "timestamp"


class DontHaveTag(FilterRule):
    rule_type = 17
    candidate = "integer"
    wraps = TagId


class DontHaveASN(FilterRule):
    rule_type = 18
    candidate = "boolean"


class TitleOrContentContains(FilterRule):
    rule_type = 19
    candidate = "text"


class FullTextQuery(FilterRule):
    rule_type = 20
    candidate = "text"


class MoreLikeThis(FilterRule):
    rule_type = 21
    candidate = "integer"
    wraps = DocumentId


class HasTagIn(FilterRule):
    rule_type = 22
    candidate = "integer"
    wraps = TagId


class ASNGreaterThan(FilterRule):
    rule_type = 23
    candidate = "integer"
    wraps = ArchiveSerialNumber


class ASNLessThan(FilterRule):
    rule_type = 24
    candidate = "integer"
    wraps = ArchiveSerialNumber


class StoragePathIs(FilterRule):
    rule_type = 25
    candidate = "integer"
    wraps = StoragePathId


RULE_TYPES: dict[int, type[FilterRule]] = {
    rule.rule_type: rule
    for rule in (
        TitleContains,
        ContentContains,
        ASNIs,
        CorrespondentIs,
        DocumentTypeIs,
        IsInInbox,
        HasTag,
        HasAnyTag,
        CreatedBefore,
        CreatedAfter,
        CreatedYearIs,
        CreatedMonthIs,
        CreatedDayIs,
        AddedBefore,
        AddedAfter,
        ModifiedBefore,
        ModifiedAfter,
        DontHaveTag,
        DontHaveASN,
        TitleOrContentContains,
        FullTextQuery,
        MoreLikeThis,
        HasTagIn,
        ASNGreaterThan,
        ASNLessThan,
        StoragePathIs,
    )
}


def decode_filter_rule(data: Any) -> FilterRule:
    """
    Decode one raw filter rule.

    Args:
        data: Decoded JSON object {"rule_type": int, "value": str | null}

    Returns:
        The FilterRule variant selected by rule_type

    Raises:
        PaperlessProtocolError: rule_type is missing or not an integer
        UnknownRuleTypeError: rule_type is outside the known range
        PaperlessDecodeError: data is not an object or value is not a string
    """
    if not isinstance(data, dict):
        raise PaperlessDecodeError(
            f"Expected JSON object for filter rule, got {type(data).__name__}"
        )
    if data.get("rule_type") is None:
        raise PaperlessProtocolError("Filter rule is missing field 'rule_type'")

    rule_type = data["rule_type"]
    if isinstance(rule_type, bool) or not isinstance(rule_type, int):
        raise PaperlessProtocolError(f"Filter rule has non-integer rule_type {rule_type!r}")

    value = data.get("value")
    if value is not None and not isinstance(value, str):
        raise PaperlessDecodeError(
            f"Filter rule {rule_type}: value must be a string or null, got {value!r}"
        )

    rule_class = RULE_TYPES.get(rule_type)
    if rule_class is None:
        raise UnknownRuleTypeError(rule_type)

    return rule_class.from_candidates(RawValueCandidates.from_raw(value))
