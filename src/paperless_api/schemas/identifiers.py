"""
Identifier value types.

Every entity kind has its own identifier type. They all wrap an unsigned
64-bit integer, but a DocumentId never equals a TagId with the same number,
so ids of different kinds cannot be mixed up.
"""

import re
from dataclasses import dataclass

U64_MAX = 2**64 - 1

_DECIMAL = re.compile(r"\+?[0-9]+")


def parse_u64(text: str) -> int:
    """
    Parse an unsigned 64-bit decimal integer.

    Only ASCII digits with an optional leading "+" are accepted.

    Raises:
        ValueError: If the text is not a decimal number or is out of range
    """
    if not isinstance(text, str) or not _DECIMAL.fullmatch(text):
        raise ValueError(f"Not an unsigned integer: {text!r}")
    value = int(text)
    if value > U64_MAX:
        raise ValueError(f"Value out of range for u64: {text!r}")
    return value


@dataclass(frozen=True)
class _U64Value:
    """Immutable wrapper around an unsigned 64-bit integer."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass, but True is not an id
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"{type(self).__name__} expects int, got {type(self.value).__name__}"
            )
        if not 0 <= self.value <= U64_MAX:
            raise ValueError(f"{type(self).__name__} out of range: {self.value}")

    @classmethod
    def parse(cls, text: str):
        """Build from the decimal string form."""
        return cls(parse_u64(text))

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


class DocumentId(_U64Value):
    """Identifier of a document."""


class CorrespondentId(_U64Value):
    """Identifier of a correspondent."""


class TagId(_U64Value):
    """Identifier of a tag."""


class DocumentTypeId(_U64Value):
    """Identifier of a document type."""


class StoragePathId(_U64Value):
    """Identifier of a storage path."""


class SavedViewId(_U64Value):
    """Identifier of a saved view."""


class ArchiveSerialNumber(_U64Value):
    """
    Archive serial number (ASN).

    A number written on a physical document so that its digital copy can be
    found again.
    """
