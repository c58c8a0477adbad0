"""Tests for exceptions.py — hierarchy, serialization and aggregation."""

from curalink_search.shared.exceptions import (
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


class TestCuralinkSearchError:
    def test_basic_creation(self):
        e = CuralinkSearchError("boom")
        assert str(e) == "boom"
        assert e.severity == ErrorSeverity.ERROR
        assert e.category == ErrorCategory.PROVIDER
        assert e.retryable is False
        assert e.context == ErrorContext()

    def test_to_dict(self):
        ctx = ErrorContext(operation="search", suggestion="try again")
        e = CuralinkSearchError("fail", context=ctx, retryable=True)
        assert e.to_dict() == {
            "error": "fail",
            "category": "provider",
            "severity": "error",
            "retryable": True,
            "operation": "search",
            "suggestion": "try again",
        }

    def test_to_dict_minimal(self):
        d = CuralinkSearchError("x").to_dict()
        assert "operation" not in d
        assert "suggestion" not in d


class TestValidationErrors:
    def test_empty_query_message(self):
        e = EmptyQueryError("   ")
        assert str(e) == "Enter at least one keyword"
        assert e.context.input_value == "   "
        assert e.context.operation == "search"
        assert e.context.suggestion

    def test_empty_query_hierarchy(self):
        e = EmptyQueryError()
        assert isinstance(e, ValidationError)
        assert isinstance(e, CuralinkSearchError)
        assert e.severity == ErrorSeverity.WARNING
        assert e.category == ErrorCategory.VALIDATION
        assert e.retryable is False

    def test_empty_query_keeps_given_context(self):
        e = EmptyQueryError("", context=ErrorContext(operation="typeahead", suggestion="type more"))
        assert e.context.operation == "typeahead"
        assert e.context.suggestion == "type more"


class TestProviderError:
    def test_default_message(self):
        e = ProviderError()
        assert str(e) == "Unable to complete search. Please try again."
        assert e.retryable is True
        assert e.providers == ()
        assert "providers" not in e.to_dict()

    def test_providers_serialized(self):
        e = ProviderError("down", providers=("trials",))
        assert e.to_dict()["providers"] == ["trials"]

    def test_from_group(self):
        timeout = TimeoutError("slow")
        refused = ConnectionError("refused")
        e = provider_error_from_group({"experts": timeout, "trials": refused})

        assert e.providers == ("experts", "trials")
        assert e.context.related_errors == (timeout, refused)
        assert e.context.operation == "search"
        assert str(e).startswith("Unable to complete search. Please try again.")
        assert "experts: slow" in str(e)
        assert "trials: refused" in str(e)


class TestConfigurationError:
    def test_is_critical(self):
        e = ConfigurationError("bad weights")
        assert e.severity == ErrorSeverity.CRITICAL
        assert e.category == ErrorCategory.CONFIGURATION
        assert e.to_dict()["category"] == "config"
