"""
Structured error types for the CampFire data layer.

Every failure a persistence operation can produce is represented by a typed
error that carries a category, a retry hint and structured context. Record
operations return these inside :class:`~campfire.core.result.Err` instead of
collapsing everything into ``False``, so callers can tell a permission
refusal from a database failure from a contract violation.

Manifesto:
    - **Typed hierarchy:** one error class per failure family
    - **Explicit categories:** VALIDATION, AUTH, DATABASE, CONFIG, ...
    - **Rich context:** entity, table, field and free-form metadata
    - **Error chaining:** the driver exception survives as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      CampfireError                           │
        │        (category, retryable, context, cause)                 │
        ├─────────────────────────────────────────────────────────────┤
        │  ValidationError          AuthError          DatabaseError   │
        │  (VALIDATION)             (AUTH)             (DATABASE)      │
        │       │                       │                   │          │
        │  UnknownFieldError       AuthorizationError   QueryError     │
        │  NotApplicableError                           IntegrityError │
        │  SchemaError                                                  │
        │                                                               │
        │  ConfigError             TransientError                      │
        │  (CONFIG)                (retryable)                          │
        │       │                       │                               │
        │  MissingConfigError      DatabaseConnectionError              │
        │  DependencyError                                              │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = UnknownFieldError("strNope", entity="Screen")
    >>> error.category.value
    'VALIDATION'
    >>> error.to_dict()["context"]["entity"]
    'Screen'

Guardrails:
    ❌ DON'T: Return bare booleans from persistence operations
    ✅ DO: Return Err(<typed error>) so callers can render a response

    ❌ DON'T: Swallow the driver exception
    ✅ DO: Pass it as cause= when wrapping

Tags:
    error-handling, exception-hierarchy, campfire, persistence
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        DATABASE: Storage backend failures (driver errors, constraint violations)
        VALIDATION: Contract violations (unknown field, not-applicable query)
        CONFIG: Missing configuration, dependency resolution failures
        AUTH: Permission refusals
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    DATABASE = "DATABASE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    AUTH = "AUTH"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only non-None fields are emitted by :meth:`to_dict`, so the context can be
    splatted straight into a structured log call.

    Attributes:
        entity: Entity type name (e.g. ``"Screen"``)
        table: Backing table name
        column: Column involved in the failure
        operation: Operation name (``create``, ``write``, ``broker_by_id``...)
        metadata: Additional key-value pairs
    """

    entity: str | None = None
    table: str | None = None
    column: str | None = None
    operation: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["entity", "table", "column", "operation"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class CampfireError(Exception):
    """
    Base exception for all CampFire errors.

    Subclasses set ``default_category`` and ``default_retryable`` so that
    raising sites only need a message.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CampfireError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(DatabaseError("insert failed").with_context(table="screen"))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# TRANSIENT ERRORS
# =============================================================================


class TransientError(CampfireError):
    """Temporary error that may succeed on retry."""

    default_category = ErrorCategory.DATABASE
    default_retryable = True


class DatabaseConnectionError(TransientError):
    """Could not open a connection to the storage backend."""

    default_category = ErrorCategory.DATABASE


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(CampfireError):
    """Caller violated the data-access contract. Never retryable."""

    default_category = ErrorCategory.VALIDATION
    default_retryable = False


class UnknownFieldError(ValidationError):
    """A field name is not declared on the entity type."""

    def __init__(self, field_name: str, *, entity: str | None = None, **kwargs: Any):
        self.field_name = field_name
        super().__init__(
            f"Unknown field {field_name!r}" + (f" on {entity}" if entity else ""),
            context=ErrorContext(entity=entity, column=field_name),
            **kwargs,
        )


class NotApplicableError(ValidationError):
    """The operation does not apply to this entity type."""

    pass


class SchemaError(ValidationError):
    """An entity descriptor is malformed."""

    pass


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(CampfireError):
    """Configuration error. Never retryable."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class MissingConfigError(ConfigError):
    """Required configuration value is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")


class DependencyError(ConfigError):
    """A collaborator could not be injected or resolved."""

    def __init__(self, message: str, *, dependency: str | None = None, **kwargs: Any):
        self.dependency = dependency
        super().__init__(message, **kwargs)
        if dependency is not None:
            self.context.metadata["dependency"] = dependency


# =============================================================================
# AUTH ERRORS
# =============================================================================


class AuthError(CampfireError):
    """Authentication or authorization error."""

    default_category = ErrorCategory.AUTH
    default_retryable = False


class AuthorizationError(AuthError):
    """Current actor is not allowed to modify the record."""

    pass


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(CampfireError):
    """Database query or statement error."""

    default_category = ErrorCategory.DATABASE
    default_retryable = False


class QueryError(DatabaseError):
    """The driver rejected a statement; adapters put the SQL in ``context.metadata``."""

    pass


class IntegrityError(DatabaseError):
    """A unique, primary key or foreign key constraint refused a write."""

    pass


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, CampfireError):
        return error.category
    if isinstance(error, (KeyError, AttributeError)):
        return ErrorCategory.CONFIG
    if isinstance(error, ValueError):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, CampfireError):
        return error.retryable
    return isinstance(error, (ConnectionError, BrokenPipeError))


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "CampfireError",
    "TransientError",
    "DatabaseConnectionError",
    "ValidationError",
    "UnknownFieldError",
    "NotApplicableError",
    "SchemaError",
    "ConfigError",
    "MissingConfigError",
    "DependencyError",
    "AuthError",
    "AuthorizationError",
    "DatabaseError",
    "QueryError",
    "IntegrityError",
    "categorize_error",
    "is_retryable",
]
