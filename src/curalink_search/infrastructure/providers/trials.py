"""
Trial Provider - clinical trials from the REST backend

Endpoint: GET {base_url}/clinical-trials?search=&condition=&location=&limit=&includeExternal=true

External (registry) trials are included by default, matching what patients
see elsewhere in the application.
"""

from __future__ import annotations

import logging

from curalink_search.domain.entities import ProviderQuery, Trial

from .base_client import DEFAULT_TIMEOUT, BaseProviderClient

logger = logging.getLogger(__name__)


class HttpTrialProvider(BaseProviderClient):
    """Client for the clinical-trials endpoint."""

    _service_name = "trials"
    _path = "/clinical-trials"

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
        include_external: bool = True,
    ) -> None:
        super().__init__(base_url, timeout=timeout, headers=headers)
        self.include_external = include_external

    async def fetch(self, query: ProviderQuery) -> list[Trial]:
        params = query.to_params()
        params["includeExternal"] = self.include_external
        payload = await self._get_json(params)
        records = self.unwrap(payload, "trials", "studies")
        trials = [Trial.from_dict(record) for record in records]
        logger.debug(f"Fetched {len(trials)} trials for {query.search!r}")
        return trials
