"""DefiLlama client: yield pools, protocols and per-pool APY history.

Endpoints:
    GET {yields_url}/pools            -> {"status": "success", "data": [pool, ...]}
    GET {yields_url}/chart/{pool_id}  -> {"status": "success", "data": [point, ...]}
    GET {protocols_url}/protocols     -> [protocol, ...]
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from pydantic import ValidationError

from yield_analytics.config.schema import SourceConfig
from yield_analytics.logging.setup import get_logger
from yield_analytics.models.history import HistoryPoint

log = get_logger(__name__)


class DataSourceError(Exception):
    """A bulk list could not be fetched after all retry attempts."""


class DefiLlamaClient:
    """Async client for the DefiLlama yields and protocols APIs."""

    def __init__(
        self,
        yields_url: str = "https://yields.llama.fi",
        protocols_url: str = "https://api.llama.fi",
        *,
        timeout_s: float = 30.0,
        retry_attempts: int = 3,
        retry_backoff_s: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.yields_url = yields_url.rstrip("/")
        self.protocols_url = protocols_url.rstrip("/")
        self.timeout_s = timeout_s
        self.retry_attempts = max(1, retry_attempts)
        self.retry_backoff_s = retry_backoff_s
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, config: SourceConfig, **kwargs) -> DefiLlamaClient:
        return cls(
            config.yields_url,
            config.protocols_url,
            timeout_s=config.timeout_s,
            retry_attempts=config.retry_attempts,
            retry_backoff_s=config.retry_backoff_s,
            **kwargs,
        )

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)
        return self._http

    async def close(self) -> None:
        if self._http and not self._http.is_closed:
            await self._http.aclose()

    async def __aenter__(self) -> DefiLlamaClient:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    # --- bulk lists ---

    async def _get_json_with_retry(self, url: str) -> Any:
        http = await self._get_http()
        delay = self.retry_backoff_s
        for attempt in range(1, self.retry_attempts + 1):
            try:
                resp = await http.get(url)
                resp.raise_for_status()
                return resp.json()
            except (httpx.HTTPError, ValueError) as exc:
                if attempt == self.retry_attempts:
                    raise DataSourceError(f"GET {url} failed after {attempt} attempts: {exc}") from exc
                log.warning("bulk_fetch_retry", url=url, attempt=attempt, error=str(exc))
                await asyncio.sleep(delay)
                delay *= 2

    async def get_pools(self) -> list[dict]:
        """Fetch the full yield pool list (raw wire dicts)."""
        data = await self._get_json_with_retry(f"{self.yields_url}/pools")
        pools = data.get("data") if isinstance(data, dict) else None
        if not isinstance(pools, list):
            raise DataSourceError("pools payload has no 'data' list")
        log.info("pools_fetched", count=len(pools))
        return pools

    async def get_protocols(self) -> list[dict]:
        """Fetch the protocol list (raw wire dicts)."""
        data = await self._get_json_with_retry(f"{self.protocols_url}/protocols")
        if not isinstance(data, list):
            raise DataSourceError("protocols payload is not a list")
        log.info("protocols_fetched", count=len(data))
        return data

    # --- per pool ---

    async def get_pool_history(self, pool_id: str) -> list[HistoryPoint]:
        """Fetch the APY chart for one pool, oldest point first.

        Single attempt. A non-2xx status or malformed payload yields ``[]``;
        transport errors propagate to the caller.
        """
        http = await self._get_http()
        resp = await http.get(f"{self.yields_url}/chart/{pool_id}")
        if resp.status_code != 200:
            return []
        try:
            data = resp.json()
        except ValueError:
            return []
        points = data.get("data") if isinstance(data, dict) else None
        if not isinstance(points, list):
            return []
        try:
            return [HistoryPoint.model_validate(p) for p in points]
        except ValidationError:
            return []
