"""HTTP candidate providers for the REST backend."""

from __future__ import annotations

from .base_client import DEFAULT_TIMEOUT, BaseProviderClient, encode_params
from .experts import HttpExpertProvider
from .trials import HttpTrialProvider

__all__ = [
    "BaseProviderClient",
    "DEFAULT_TIMEOUT",
    "encode_params",
    "HttpExpertProvider",
    "HttpTrialProvider",
]
