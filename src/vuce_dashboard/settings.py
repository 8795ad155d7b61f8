"""Loader configuration sourced from the environment."""

import logging
import os
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_WEBHOOK_URL = "http://desa.vuce.gob.bo:5678/webhook/a0c58ae1-baa3-4825-8da2-412fc7ae5dc8"

WEBHOOK_URL_ENV = "VUCE_WEBHOOK_URL"
TIMEOUT_ENV = "VUCE_FETCH_TIMEOUT"


class LoaderSettings(BaseModel):
    """Where and how to fetch the records."""

    webhook_url: str = DEFAULT_WEBHOOK_URL
    timeout: Optional[float] = Field(default=None, description="Seconds; None waits indefinitely")
    headers: dict[str, str] = Field(
        default_factory=lambda: {
            "User-Agent": "vuce-dashboard/0.1",
            "Accept": "application/json",
        }
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LoaderSettings":
        """Build settings from VUCE_WEBHOOK_URL / VUCE_FETCH_TIMEOUT, falling back to defaults."""
        env = os.environ if environ is None else environ
        url = (env.get(WEBHOOK_URL_ENV) or "").strip() or DEFAULT_WEBHOOK_URL

        timeout: Optional[float] = None
        raw_timeout = (env.get(TIMEOUT_ENV) or "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logger.warning("Ignoring invalid %s=%r", TIMEOUT_ENV, raw_timeout)
        return cls(webhook_url=url, timeout=timeout)
