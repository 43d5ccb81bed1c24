"""
Paperless-ngx API Client.

Provides:
- Lazy, paginated listings with filters (documents, tags, correspondents,
  document types, storage paths, saved views)
- Get single entities by id
- Download document files and query their size

Token auth; no retries.
"""

from .client import PaperlessClient
from .paginated import HttpExecutor, PageState, Paginated

__all__ = [
    "HttpExecutor",
    "PageState",
    "Paginated",
    "PaperlessClient",
]
