"""Unit tests for the webhook connector with a mocked HTTP transport."""

import asyncio
import json
from typing import Any

import httpx
import pytest

from vuce_dashboard.connectors import WebhookConnector
from vuce_dashboard.errors import NetworkError, PayloadError, TransportError
from vuce_dashboard.models.row import Observacion
from vuce_dashboard.settings import LoaderSettings


def _json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"content-type": "application/json"},
    )


def _connector(settings: LoaderSettings, mock_client_factory, handler) -> WebhookConnector:
    return WebhookConnector(settings, client=mock_client_factory(handler))


class TestWebhookConnectorFetchAll:
    """Tests for fetch_all."""

    def test_fetches_and_maps(
        self,
        webhook_settings: LoaderSettings,
        mock_client_factory,
        sample_raw_record: dict[str, Any],
    ) -> None:
        """A JSON array becomes one canonical row per record."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return _json_response([sample_raw_record])

        rows = asyncio.run(_connector(webhook_settings, mock_client_factory, handler).fetch_all())

        assert len(requests) == 1
        assert str(requests[0].url) == webhook_settings.webhook_url
        assert requests[0].method == "GET"
        assert len(rows) == 1
        assert rows[0].record_id == "CALC001"
        assert rows[0].greq == 1001
        assert rows[0].porcentaje_avance == pytest.approx(65)

    def test_empty_array(self, webhook_settings: LoaderSettings, mock_client_factory) -> None:
        connector = _connector(webhook_settings, mock_client_factory, lambda r: _json_response([]))
        assert asyncio.run(connector.fetch_all()) == []

    def test_accented_observation(self, webhook_settings: LoaderSettings, mock_client_factory) -> None:
        payload = [{"GREQ": 1002, "Observación": "ACTUALIZACIÓN", "Cálculo": "CALC002"}]
        connector = _connector(webhook_settings, mock_client_factory, lambda r: _json_response(payload))
        rows = asyncio.run(connector.fetch_all())
        assert rows[0].observacion == Observacion.ACTUALIZACION

    def test_string_attachment(self, webhook_settings: LoaderSettings, mock_client_factory) -> None:
        payload = [{"GREQ": 1003, "Archivo adjunto": "https://example.com/direct-link.pdf"}]
        connector = _connector(webhook_settings, mock_client_factory, lambda r: _json_response(payload))
        rows = asyncio.run(connector.fetch_all())
        assert len(rows[0].archivo_adjunto) == 1
        assert rows[0].archivo_adjunto[0].url == "https://example.com/direct-link.pdf"
        assert rows[0].archivo_adjunto[0].filename == "Ver Documento"

    def test_skips_non_object_elements(self, webhook_settings: LoaderSettings, mock_client_factory) -> None:
        payload = [{"GREQ": 1}, "garbage", 3, None, {"GREQ": 2}]
        connector = _connector(webhook_settings, mock_client_factory, lambda r: _json_response(payload))
        rows = asyncio.run(connector.fetch_all())
        assert [r.greq for r in rows] == [1, 2]


class TestWebhookConnectorErrors:
    """Tests for transport, network and payload failures."""

    def test_http_error_status(self, webhook_settings: LoaderSettings, mock_client_factory) -> None:
        """Non-2xx responses raise TransportError with the status text."""
        connector = _connector(webhook_settings, mock_client_factory, lambda r: httpx.Response(500))
        with pytest.raises(TransportError) as exc_info:
            asyncio.run(connector.fetch_all())
        assert str(exc_info.value) == "Error fetching data: Internal Server Error"
        assert exc_info.value.status_code == 500

    def test_not_found(self, webhook_settings: LoaderSettings, mock_client_factory) -> None:
        connector = _connector(webhook_settings, mock_client_factory, lambda r: httpx.Response(404))
        with pytest.raises(TransportError, match="Not Found"):
            asyncio.run(connector.fetch_all())

    def test_connection_failure(self, webhook_settings: LoaderSettings, mock_client_factory) -> None:
        """Connection errors raise NetworkError carrying the underlying message."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Network error", request=request)

        connector = _connector(webhook_settings, mock_client_factory, handler)
        with pytest.raises(NetworkError, match="Network error") as exc_info:
            asyncio.run(connector.fetch_all())
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_invalid_json(self, webhook_settings: LoaderSettings, mock_client_factory) -> None:
        connector = _connector(
            webhook_settings, mock_client_factory, lambda r: httpx.Response(200, content=b"<html>oops</html>")
        )
        with pytest.raises(PayloadError):
            asyncio.run(connector.fetch_all())

    def test_object_instead_of_array(self, webhook_settings: LoaderSettings, mock_client_factory) -> None:
        connector = _connector(webhook_settings, mock_client_factory, lambda r: _json_response({"data": []}))
        with pytest.raises(PayloadError, match="JSON array"):
            asyncio.run(connector.fetch_all())


class TestWebhookConnectorClient:
    """Tests for client ownership."""

    def test_injected_client_left_open(self, webhook_settings: LoaderSettings, mock_client_factory) -> None:
        client = mock_client_factory(lambda r: _json_response([]))
        connector = WebhookConnector(webhook_settings, client=client)
        asyncio.run(connector.aclose())
        assert client.is_closed is False

    def test_owned_client_closed(self, webhook_settings: LoaderSettings) -> None:
        async def run() -> WebhookConnector:
            async with WebhookConnector(webhook_settings) as connector:
                pass
            return connector

        connector = asyncio.run(run())
        assert connector._client.is_closed is True
