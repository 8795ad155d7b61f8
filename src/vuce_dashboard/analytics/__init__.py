"""Aggregations over canonical rows for KPI cards, charts and the records table."""

from vuce_dashboard.analytics.charts import (
    MonthlySeries,
    monthly_observations,
    observation_counts,
    top_developers,
    top_entities,
)
from vuce_dashboard.analytics.kpis import KpiSummary, compute_kpis
from vuce_dashboard.analytics.table import FilterOptions, Page, filter_options, paginate

__all__ = [
    "FilterOptions",
    "KpiSummary",
    "MonthlySeries",
    "Page",
    "compute_kpis",
    "filter_options",
    "monthly_observations",
    "observation_counts",
    "paginate",
    "top_developers",
    "top_entities",
]
