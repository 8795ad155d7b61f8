"""Webhook connector: fetches the raw record array and maps it to canonical rows."""

import logging
from typing import Any, Optional

import httpx

from vuce_dashboard.errors import NetworkError, PayloadError, TransportError
from vuce_dashboard.models.raw import RawRecord
from vuce_dashboard.models.row import CanonicalRow
from vuce_dashboard.normalization import map_record
from vuce_dashboard.settings import LoaderSettings

logger = logging.getLogger(__name__)


class WebhookConnector:
    """
    Connector for the VUCE tracking webhook.
    One GET per call, expecting a JSON array of Airtable-like records.
    """

    source_id = "vuce-webhook"

    def __init__(
        self,
        settings: Optional[LoaderSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            settings: Endpoint and timeout; defaults to LoaderSettings.from_env()
            client: Optional httpx async client (closed by the caller when given)
        """
        self.settings = settings or LoaderSettings.from_env()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self.settings.timeout,
            follow_redirects=True,
            headers=self.settings.headers,
        )

    async def __aenter__(self) -> "WebhookConnector":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this connector created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _fetch_json(self) -> Any:
        """GET the webhook and decode the JSON body."""
        url = self.settings.webhook_url
        logger.debug("Fetching %s", url)
        try:
            response = await self._client.get(url)
        except httpx.RequestError as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise NetworkError(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning("Webhook returned %d %s", response.status_code, response.reason_phrase)
            raise TransportError(response.status_code, response.reason_phrase)

        try:
            return response.json()
        except ValueError as e:
            raise PayloadError(f"Webhook returned invalid JSON: {e}") from e

    async def search(self) -> list[RawRecord]:
        """Fetch the raw record list. Non-object array elements are skipped."""
        payload = await self._fetch_json()
        if not isinstance(payload, list):
            raise PayloadError(f"Expected a JSON array of records, got {type(payload).__name__}")

        raw_list: list[RawRecord] = []
        for index, item in enumerate(payload):
            if not isinstance(item, dict):
                logger.warning("Skipping non-object record at index %d (%s)", index, type(item).__name__)
                continue
            raw_list.append(RawRecord(data=item))
        logger.debug("Fetched %d records", len(raw_list))
        return raw_list

    def normalize(self, raw: RawRecord) -> CanonicalRow:
        """Convert one raw webhook record to a CanonicalRow."""
        return map_record(raw)

    async def fetch_all(self) -> list[CanonicalRow]:
        """
        Fetch and normalize every record.
        Raises TransportError, NetworkError or PayloadError; an empty array is not an error.
        """
        raw_list = await self.search()
        return [self.normalize(r) for r in raw_list]
