from __future__ import annotations

import asyncio
import logging
from typing import Any

import backoff
import requests
from pydantic import ValidationError

from ...constants import ORACLE_QUOTE_SUFFIX
from ...settings import MonitorSettings
from .base import BasePriceAdapter, OracleFeed

logger = logging.getLogger(__name__)


def _should_giveup(exc: Exception) -> bool:
    """Client errors (4xx) are permanent; retry only transport and 5xx failures."""
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    return status is not None and 400 <= status < 500


class DovesPriceAdapter(BasePriceAdapter):
    """Adapter for the Jupiter Doves oracle worker.

    The worker serves ``GET {url}/btcusd,ethusd,...`` as a JSON list of
    ``{feedId, price, ts, expo}`` entries.
    """

    def __init__(self, config: MonitorSettings):
        super().__init__(config)
        self.endpoint = config.oracle_url
        self.timeout = config.oracle_timeout
        self.max_tries = config.oracle_retries + 1

    @property
    def adapter_name(self) -> str:
        return "doves"

    def feeds_url(self, symbols: list[str]) -> str:
        pairs = ",".join(f"{s}{ORACLE_QUOTE_SUFFIX}".lower() for s in symbols)
        return f"{self.endpoint}/{pairs}"

    async def _http_get(self, url: str):
        return await asyncio.to_thread(
            lambda: requests.get(url, timeout=self.timeout)
        )

    async def _get_payload(self, url: str) -> Any:
        @backoff.on_exception(
            backoff.expo,
            requests.RequestException,
            max_tries=self.max_tries,
            max_time=self.timeout * self.max_tries,
            giveup=_should_giveup,
            on_backoff=lambda details: logger.warning(
                "Oracle request failed (attempt %d of %d): %s",
                details["tries"],
                self.max_tries,
                details.get("exception"),
            ),
        )
        async def _fetch() -> Any:
            response = await self._http_get(url)
            response.raise_for_status()
            return response.json()

        return await _fetch()

    def parse_feeds(self, payload: Any) -> list[OracleFeed]:
        """Parse the worker payload, skipping malformed entries."""
        if not isinstance(payload, list):
            logger.warning(
                "Unexpected oracle payload of type %s; no prices available",
                type(payload).__name__,
            )
            return []

        feeds: list[OracleFeed] = []
        for entry in payload:
            try:
                feeds.append(OracleFeed.model_validate(entry))
            except ValidationError as e:
                logger.warning("Skipping malformed oracle entry %r: %s", entry, e)
        return feeds

    async def fetch_feeds(self, symbols: list[str]) -> list[OracleFeed]:
        """Fetch feeds for ``symbols``.

        Never raises for transport or payload errors: the failure is logged
        and an empty list is returned so valuation degrades to no-price mode.
        """
        if not symbols:
            return []

        url = self.feeds_url(symbols)
        logger.debug("Fetching oracle prices from %s", url)
        try:
            payload = await self._get_payload(url)
        except (requests.RequestException, ValueError) as e:
            logger.error("Failed to fetch oracle prices: %s", e)
            return []

        feeds = self.parse_feeds(payload)
        logger.info(
            "Oracle prices received: %s",
            ", ".join(feed.feed_id for feed in feeds) or "<none>",
        )
        return feeds
