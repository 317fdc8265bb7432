"""Core module exports."""

from identdoc.core.errors import (
    ConfigError,
    DocLookupError,
    ErrorCode,
    IdentDocError,
    LoadError,
    NoDocumentationError,
    NotFoundError,
)
from identdoc.core.logging import (
    configure_logging,
    get_request_id,
    lookup_scope,
)

__all__ = [
    # Errors
    "ConfigError",
    "DocLookupError",
    "ErrorCode",
    "IdentDocError",
    "LoadError",
    "NoDocumentationError",
    "NotFoundError",
    # Logging
    "configure_logging",
    "get_request_id",
    "lookup_scope",
]
