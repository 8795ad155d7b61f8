"""Data models for raw records, canonical rows and filter specs."""

from vuce_dashboard.models.filters import ALL, FilterSpec
from vuce_dashboard.models.raw import RawRecord
from vuce_dashboard.models.row import Attachment, CanonicalRow, Observacion

__all__ = ["ALL", "Attachment", "CanonicalRow", "FilterSpec", "Observacion", "RawRecord"]
