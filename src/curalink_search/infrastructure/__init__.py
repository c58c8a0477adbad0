"""
Infrastructure Layer - External adapters.

Submodules:
- providers: HTTP expert and trial providers (httpx)
- discussions: discussion repositories
"""

from __future__ import annotations
