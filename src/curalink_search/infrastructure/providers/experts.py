"""
Expert Provider - researchers/clinicians from the REST backend

Endpoint: GET {base_url}/experts?search=&condition=&location=&limit=

Usage:
    >>> async with HttpExpertProvider("http://localhost:8080/api/v1") as provider:
    ...     experts = await provider.fetch(ProviderQuery(search="glioblastoma", limit=40))
"""

from __future__ import annotations

import logging

from curalink_search.domain.entities import Expert, ProviderQuery

from .base_client import BaseProviderClient

logger = logging.getLogger(__name__)


class HttpExpertProvider(BaseProviderClient):
    """Client for the experts endpoint."""

    _service_name = "experts"
    _path = "/experts"

    async def fetch(self, query: ProviderQuery) -> list[Expert]:
        payload = await self._get_json(query.to_params())
        records = self.unwrap(payload, "experts", "researchers")
        experts = [Expert.from_dict(record) for record in records]
        logger.debug(f"Fetched {len(experts)} experts for {query.search!r}")
        return experts
