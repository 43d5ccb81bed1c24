"""
Coercion helpers shared by the schema modules.

Covers two directions:
- server -> client: pulling typed fields out of decoded JSON objects
- client -> server: rendering timestamps for query parameters
"""

import re
from datetime import date, datetime, time, timezone
from typing import Any, Callable, Optional, TypeVar

from ..errors import PaperlessDecodeError

T = TypeVar("T")

# Format the server expects for every date and date-time query parameter
QUERY_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_RFC3339 = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})[Tt ]"
    r"(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})"
)


def parse_rfc3339(text: str) -> Optional[datetime]:
    """
    Parse an RFC 3339 date-time and normalise it to UTC.

    Returns None instead of raising when the text is not a valid RFC 3339
    timestamp (missing offset, impossible date, ...).
    """
    if not isinstance(text, str):
        return None
    match = _RFC3339.fullmatch(text)
    if not match:
        return None

    offset = match.group("offset")
    if offset in ("Z", "z"):
        offset = "+00:00"
    # fromisoformat on 3.10 only accepts 3 or 6 fraction digits
    fraction = (match.group("fraction") or "0")[:6].ljust(6, "0")

    try:
        parsed = datetime.fromisoformat(
            f"{match.group('date')}T{match.group('time')}.{fraction}{offset}"
        )
    except ValueError:
        return None
    return parsed.astimezone(timezone.utc)


def parse_timestamp(text: str) -> datetime:
    """
    Parse a timestamp field of an entity.

    Accepts full RFC 3339 date-times as well as bare dates, which newer
    server versions send for "created". Bare dates are taken as midnight UTC.

    Raises:
        ValueError: If the text is neither
    """
    parsed = parse_rfc3339(text)
    if parsed is not None:
        return parsed
    return datetime.combine(date.fromisoformat(text), time(0, 0), tzinfo=timezone.utc)


def format_query_timestamp(value: date) -> str:
    """Render a date or date-time as YYYY-MM-DDTHH:MM:SSZ in UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime(QUERY_TIMESTAMP_FORMAT)
    return datetime.combine(value, time(0, 0)).strftime(QUERY_TIMESTAMP_FORMAT)


def require_object(data: Any, entity: str) -> dict:
    """Check that a decoded JSON value is an object."""
    if not isinstance(data, dict):
        raise PaperlessDecodeError(
            f"Expected JSON object for {entity}, got {type(data).__name__}"
        )
    return data


def required(data: dict, key: str, convert: Callable[[Any], T], entity: str) -> T:
    """
    Read a mandatory field and convert it.

    Raises:
        PaperlessDecodeError: If the field is missing, null or fails conversion
    """
    if data.get(key) is None:
        raise PaperlessDecodeError(f"{entity}: missing required field '{key}'")
    return _convert(data[key], key, convert, entity)


def optional(
    data: dict,
    key: str,
    convert: Callable[[Any], T],
    entity: str,
    default: Optional[T] = None,
) -> Optional[T]:
    """Read a nullable field; absent or null gives the default."""
    if data.get(key) is None:
        return default
    return _convert(data[key], key, convert, entity)


def id_list(data: dict, key: str, convert: Callable[[Any], T], entity: str) -> list[T]:
    """Read a list of identifiers; absent or null gives an empty list."""
    raw = data.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise PaperlessDecodeError(f"{entity}: field '{key}' is not a list")
    return [_convert(item, key, convert, entity) for item in raw]


def _convert(raw: Any, key: str, convert: Callable[[Any], T], entity: str) -> T:
    try:
        return convert(raw)
    except (TypeError, ValueError) as e:
        raise PaperlessDecodeError(f"{entity}: invalid value for '{key}': {e}") from e


def as_str(raw: Any) -> str:
    if not isinstance(raw, str):
        raise TypeError(f"expected string, got {type(raw).__name__}")
    return raw


def as_bool(raw: Any) -> bool:
    if not isinstance(raw, bool):
        raise TypeError(f"expected boolean, got {type(raw).__name__}")
    return raw


def as_int(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise TypeError(f"expected integer, got {type(raw).__name__}")
    return raw


def as_timestamp(raw: Any) -> datetime:
    return parse_timestamp(as_str(raw))


def as_date(raw: Any) -> date:
    return date.fromisoformat(as_str(raw))
