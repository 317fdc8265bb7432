"""identdoc error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Load (source discovery, parsing)
- 4xxx: Doc lookup
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Load (3xxx)
    LOAD_FILE_NOT_FOUND = 3001
    LOAD_GRAMMAR_UNAVAILABLE = 3002
    LOAD_MODULE_INVALID = 3003

    # Doc lookup (4xxx)
    DOC_NOT_FOUND = 4001
    DOC_NO_DOCUMENTATION = 4002
    DOC_INVALID_POSITION = 4003


@dataclass(frozen=True, slots=True)
class IdentDocError(Exception):
    """Base error with structured context for front ends."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'DOC_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(IdentDocError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class LoadError(IdentDocError):
    """Errors raised while discovering or parsing Go sources."""

    @classmethod
    def file_not_found(cls, path: str) -> "LoadError":
        return cls(
            code=ErrorCode.LOAD_FILE_NOT_FOUND,
            message=f"Source not readable: {path}",
            details={"path": path},
        )

    @classmethod
    def grammar_unavailable(cls, module: str) -> "LoadError":
        return cls(
            code=ErrorCode.LOAD_GRAMMAR_UNAVAILABLE,
            message=f"Tree-sitter grammar not installed: {module}",
            details={"module": module},
        )

    @classmethod
    def module_invalid(cls, path: str, reason: str) -> "LoadError":
        return cls(
            code=ErrorCode.LOAD_MODULE_INVALID,
            message=f"Cannot read module file {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class DocLookupError(IdentDocError):
    """Errors surfaced by a documentation lookup."""

    @classmethod
    def invalid_position(cls, position: str) -> "DocLookupError":
        return cls(
            code=ErrorCode.DOC_INVALID_POSITION,
            message=f"Invalid position {position!r}, expected <file>:#<offset>",
            details={"position": position},
        )


class NotFoundError(DocLookupError):
    """The identifier or its defining declaration could not be located."""

    @classmethod
    def no_identifier(cls, filename: str, offset: int) -> "NotFoundError":
        return cls(
            code=ErrorCode.DOC_NOT_FOUND,
            message=f"No identifier found at {filename}:#{offset}",
            details={"filename": filename, "offset": offset},
        )

    @classmethod
    def no_file(cls, filename: str) -> "NotFoundError":
        return cls(
            code=ErrorCode.DOC_NOT_FOUND,
            message=f"File is not part of the loaded program: {filename}",
            details={"filename": filename},
        )

    @classmethod
    def unresolved(cls, name: str) -> "NotFoundError":
        return cls(
            code=ErrorCode.DOC_NOT_FOUND,
            message=f"Cannot resolve identifier {name}",
            details={"name": name},
        )

    @classmethod
    def no_declaration(cls, name: str) -> "NotFoundError":
        return cls(
            code=ErrorCode.DOC_NOT_FOUND,
            message=f"No documentation found for {name}",
            details={"name": name},
        )

    @classmethod
    def no_package(cls, import_path: str) -> "NotFoundError":
        return cls(
            code=ErrorCode.DOC_NOT_FOUND,
            message=f"Package not found: {import_path}",
            details={"import_path": import_path},
        )


class NoDocumentationError(DocLookupError):
    """The ancestor chain holds no renderable declaration."""

    @classmethod
    def for_symbol(cls, name: str) -> "NoDocumentationError":
        return cls(
            code=ErrorCode.DOC_NO_DOCUMENTATION,
            message=f"No documentation found for {name}",
            details={"name": name},
        )

