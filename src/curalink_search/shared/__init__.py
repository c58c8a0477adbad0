"""
Shared module for Curalink Search.

Provides:
- Unified exception hierarchy
- Async utilities for provider fan-out
"""

from .async_utils import gather_with_errors, with_timeout
from .exceptions import (
    ConfigurationError,
    CuralinkSearchError,
    EmptyQueryError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    ProviderError,
    ValidationError,
    provider_error_from_group,
)

__all__ = [
    # Exceptions
    "CuralinkSearchError",
    "ErrorContext",
    "ErrorSeverity",
    "ErrorCategory",
    "ValidationError",
    "EmptyQueryError",
    "ProviderError",
    "ConfigurationError",
    "provider_error_from_group",
    # Async utilities
    "gather_with_errors",
    "with_timeout",
]
