"""Source connectors for record ingestion."""

from vuce_dashboard.connectors.webhook import WebhookConnector

__all__ = ["WebhookConnector"]
