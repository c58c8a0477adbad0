"""
Application Layer - Use cases and orchestration.

Submodules:
- search: tokenization, scoring, location ranking, unified search
"""

from __future__ import annotations
