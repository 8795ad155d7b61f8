"""Filter predicate engine over canonical rows."""

from vuce_dashboard.filtering.engine import FilterEngine, FilterResult, filter_rows, sort_by_greq_date

__all__ = ["FilterEngine", "FilterResult", "filter_rows", "sort_by_greq_date"]
