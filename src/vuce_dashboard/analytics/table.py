"""Table helpers: filter option discovery and pagination."""

import math
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field

from vuce_dashboard.models.row import CanonicalRow

DEFAULT_PAGE_SIZE = 10


class FilterOptions(BaseModel):
    """Distinct non-empty values available to each multi-select filter."""

    entidades: list[str] = Field(default_factory=list)
    siglas: list[str] = Field(default_factory=list)
    resp_analisis: list[str] = Field(default_factory=list)
    resp_desarrollo: list[str] = Field(default_factory=list)
    resp_cc: list[str] = Field(default_factory=list)
    estados: list[str] = Field(default_factory=list)


class Page(BaseModel):
    """One page of rows."""

    items: list[CanonicalRow] = Field(default_factory=list)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_items: int = 0
    total_pages: int = 0


def _distinct(values: Iterable[str]) -> list[str]:
    """Unique non-empty values, first-seen order."""
    return list(dict.fromkeys(v for v in values if v))


def filter_options(rows: Sequence[CanonicalRow]) -> FilterOptions:
    """Collect the selectable values for the filter panel."""
    return FilterOptions(
        entidades=_distinct(r.entidad for r in rows),
        siglas=_distinct(r.sigla for r in rows),
        resp_analisis=_distinct(r.responsable_analisis for r in rows),
        resp_desarrollo=_distinct(dev for r in rows for dev in r.responsables_desarrollo),
        resp_cc=_distinct(r.responsable_cc for r in rows),
        estados=_distinct(r.estado for r in rows),
    )


def paginate(rows: Sequence[CanonicalRow], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice rows into 1-based pages. Pages past the end are empty."""
    page_size = max(1, page_size)
    page = max(1, page)
    start = (page - 1) * page_size
    return Page(
        items=list(rows[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_items=len(rows),
        total_pages=math.ceil(len(rows) / page_size),
    )
