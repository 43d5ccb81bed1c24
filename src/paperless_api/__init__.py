"""
Typed client for the Paperless-ngx REST API.

Lists correspondents, tags, document types, storage paths, documents and
saved views as lazy iterators, compiles filters (or the rules of a saved
view) into query parameters, and downloads document files.
"""

from .config import ConfigValidationError, PaperlessConfig, load_config
from .errors import (
    PaperlessAPIError,
    PaperlessConnectionError,
    PaperlessDecodeError,
    PaperlessError,
    PaperlessProtocolError,
    UnknownRuleTypeError,
)
from .paperless_client import Paginated, PaperlessClient

__version__ = "0.1.0"

__all__ = [
    "ConfigValidationError",
    "PaperlessAPIError",
    "PaperlessClient",
    "PaperlessConfig",
    "PaperlessConnectionError",
    "PaperlessDecodeError",
    "PaperlessError",
    "PaperlessProtocolError",
    "Paginated",
    "UnknownRuleTypeError",
    "load_config",
]
