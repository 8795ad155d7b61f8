"""Pytest fixtures for vuce-dashboard tests."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from vuce_dashboard.models.raw import RawRecord
from vuce_dashboard.settings import LoaderSettings

TEST_URL = "https://webhook.test/records"


@pytest.fixture
def sample_raw_record() -> dict[str, Any]:
    """Complete webhook record with every known field populated."""
    return {
        "GREQ": 1001,
        "Estado": "En Desarrollo",
        "Entidad": "ENT001",
        "Nombre Entidad": "Entidad Test",
        "SIGLA": "ET",
        "APCO": "APCO001",
        "Observación": "ORIGINAL",
        "Descripción GREQ": "Descripción de prueba",
        "Responsable ANALISIS": "Juan Pérez",
        "Estado ANALISIS": "Completado",
        "Fecha Inicial ANALISIS": "2024-01-01",
        "Fecha Final ANALISIS": "2024-01-15",
        "Responsable DESARROLLO": ["María García", "Pedro López"],
        "Estado DESARROLLO": "En Progreso",
        "Fecha Inicial DESARROLLO": "2024-01-16",
        "Fecha Final DESARROLLO": None,
        "Responsable CONTROL DE CALIDAD": "Ana Martínez",
        "Estado CONTROL DE CALIDAD": "Pendiente",
        "Fecha Inicial CONTROL CALIDAD": None,
        "Fecha Final CONTROL CALIDAD": None,
        "Fecha Inicio": "2024-01-01",
        "Fecha Final": "2024-03-01",
        "Fecha Publicación": "2024-03-15",
        "Porcentaje de avance": 0.65,
        "Orden": 1,
        "Cálculo": "CALC001",
        "createdTime": "2024-01-01T10:00:00Z",
        "Fecha GREQ": "2024-01-01",
        "Archivo adjunto": [
            {
                "id": "att123",
                "url": "https://example.com/file.pdf",
                "filename": "documento.pdf",
                "size": 1024,
                "type": "application/pdf",
            }
        ],
    }


@pytest.fixture
def raw_record(sample_raw_record: dict[str, Any]) -> RawRecord:
    """RawRecord built from the sample webhook record."""
    return RawRecord(data=sample_raw_record)


@pytest.fixture
def webhook_settings() -> LoaderSettings:
    """Settings pointing at a fake endpoint."""
    return LoaderSettings(webhook_url=TEST_URL)


@pytest.fixture
def mock_client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by the given handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
