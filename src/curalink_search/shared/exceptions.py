"""
Unified Exception Hierarchy for Curalink Search.

Exception Hierarchy:
    CuralinkSearchError (base)
    ├── ValidationError
    │   └── EmptyQueryError
    ├── ProviderError
    └── ConfigurationError

Every error raised by the engine is terminal for the current search call.
Nothing here is retried automatically.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    WARNING = auto()  # User can fix the input and search again
    ERROR = auto()  # Upstream failed, user may re-issue the search
    CRITICAL = auto()  # Engine cannot be constructed


class ErrorCategory(Enum):
    """Categories for error classification."""

    VALIDATION = "validation"
    PROVIDER = "provider"
    CONFIGURATION = "config"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Rich context for error messages."""

    operation: str | None = None
    input_value: Any = None
    suggestion: str | None = None
    related_errors: tuple[Exception, ...] = field(default_factory=tuple)
    metadata: dict[str, Any] = field(default_factory=dict)


class CuralinkSearchError(Exception):
    """
    Base exception for all Curalink Search errors.

    Provides:
    - Structured error context
    - Severity classification
    - Serialization for API/UI consumers
    """

    __slots__ = ("context", "severity", "category", "retryable")

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        category: ErrorCategory = ErrorCategory.PROVIDER,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.severity = severity
        self.category = category
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": str(self),
            "category": self.category.value,
            "severity": self.severity.name.lower(),
            "retryable": self.retryable,
        }
        if self.context.operation:
            result["operation"] = self.context.operation
        if self.context.suggestion:
            result["suggestion"] = self.context.suggestion
        return result


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(CuralinkSearchError):
    """Base class for validation errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.WARNING,
            category=ErrorCategory.VALIDATION,
            retryable=False,
        )


class EmptyQueryError(ValidationError):
    """Raised when the merged query yields no keywords."""

    def __init__(
        self,
        query: str | None = None,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = context or ErrorContext()
        ctx = ErrorContext(
            operation=ctx.operation or "search",
            input_value=query,
            suggestion=ctx.suggestion or "Type a condition, treatment or researcher name",
            related_errors=ctx.related_errors,
            metadata=ctx.metadata,
        )
        super().__init__("Enter at least one keyword", context=ctx)


# =============================================================================
# Provider Errors
# =============================================================================


class ProviderError(CuralinkSearchError):
    """
    Raised when a candidate provider fails.

    When several providers fail in one search, a single ProviderError is
    raised with every underlying exception in ``context.related_errors``.
    """

    def __init__(
        self,
        message: str = "Unable to complete search. Please try again.",
        *,
        providers: tuple[str, ...] = (),
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.PROVIDER,
            retryable=True,
        )
        self.providers = providers

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.providers:
            result["providers"] = list(self.providers)
        return result


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(CuralinkSearchError):
    """Raised for invalid weight tables or engine settings."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
            retryable=False,
        )


def provider_error_from_group(
    failures: dict[str, Exception],
    *,
    operation: str = "search",
) -> ProviderError:
    """
    Collapse per-provider failures into one aggregate ProviderError.

    Example:
        >>> err = provider_error_from_group({"experts": TimeoutError("slow")})
        >>> err.providers
        ('experts',)
    """
    names = tuple(failures)
    details = "; ".join(f"{name}: {exc}" for name, exc in failures.items())
    return ProviderError(
        f"Unable to complete search. Please try again. ({details})",
        providers=names,
        context=ErrorContext(
            operation=operation,
            related_errors=tuple(failures.values()),
        ),
    )
