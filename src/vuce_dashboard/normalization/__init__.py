"""Normalization layer: scalar normalizers and the raw-to-canonical record mapper."""

from vuce_dashboard.normalization.mapper import FIELD_ALIASES, map_record, map_records
from vuce_dashboard.normalization.normalizers import (
    normalize_array,
    normalize_attachment,
    normalize_integer,
    normalize_internal_type,
    normalize_percentage,
    normalize_text,
    parse_date,
)

__all__ = [
    "FIELD_ALIASES",
    "map_record",
    "map_records",
    "normalize_array",
    "normalize_attachment",
    "normalize_integer",
    "normalize_internal_type",
    "normalize_percentage",
    "normalize_text",
    "parse_date",
]
