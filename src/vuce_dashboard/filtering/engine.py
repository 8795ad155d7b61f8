"""Filter engine with pluggable rules and explanation trail."""

from collections.abc import Callable, Iterable, Iterator
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from vuce_dashboard.models.filters import FilterSpec
from vuce_dashboard.models.row import CanonicalRow

from .rules import (
    apply_entidad_rule,
    apply_estado_rule,
    apply_greq_date_rule,
    apply_observacion_rule,
    apply_publication_date_rule,
    apply_resp_analisis_rule,
    apply_resp_cc_rule,
    apply_resp_desarrollo_rule,
    apply_search_rule,
    apply_sigla_rule,
)

# Rows without a GREQ date sort as if dated at the epoch
EPOCH = datetime(1970, 1, 1)


class FilterResult(BaseModel):
    """Result of checking one row against a filter spec."""

    passed: bool = Field(..., description="All criteria passed")
    explanations: list[str] = Field(default_factory=list)
    row: CanonicalRow = Field(..., description="The row that was filtered")
    excluded_by_rule: Optional[str] = Field(
        default=None,
        description="First rule that excluded the row",
    )


RuleFn = Callable[[CanonicalRow, FilterSpec], tuple[bool, str, str]]


def sort_by_greq_date(rows: Iterable[CanonicalRow]) -> list[CanonicalRow]:
    """Newest GREQ date first; undated rows go last. Stable for ties."""
    return sorted(rows, key=lambda r: r.fecha_greq or EPOCH, reverse=True)


class FilterEngine:
    """
    Applies a FilterSpec to canonical rows.
    Criteria combine with AND; unset criteria always pass.
    """

    def __init__(self, spec: FilterSpec):
        self.spec = spec
        self._rules: list[RuleFn] = [
            apply_publication_date_rule,
            apply_greq_date_rule,
            apply_observacion_rule,
            apply_estado_rule,
            apply_entidad_rule,
            apply_sigla_rule,
            apply_resp_analisis_rule,
            apply_resp_cc_rule,
            apply_resp_desarrollo_rule,
            apply_search_rule,
        ]

    def _outcomes(self, row: CanonicalRow) -> Iterator[tuple[bool, str, str]]:
        return (rule_fn(row, self.spec) for rule_fn in self._rules)

    def filter(self, row: CanonicalRow) -> FilterResult:
        """Run every rule and record its explanation; the first failing rule is reported."""
        outcomes = list(self._outcomes(row))
        failed = [rule_id for passed, _, rule_id in outcomes if not passed]
        return FilterResult(
            passed=not failed,
            explanations=[explanation for _, explanation, _ in outcomes],
            row=row,
            excluded_by_rule=failed[0] if failed else None,
        )

    def matches(self, row: CanonicalRow) -> bool:
        """True when the row passes every rule. Stops at the first failure."""
        return all(passed for passed, _, _ in self._outcomes(row))

    def filter_many(self, rows: Iterable[CanonicalRow]) -> list[FilterResult]:
        """Full result, with explanations, for every row."""
        return [self.filter(row) for row in rows]

    def filter_passed(self, rows: Iterable[CanonicalRow]) -> list[FilterResult]:
        """Full results for the rows that pass."""
        return [result for result in map(self.filter, rows) if result.passed]

    def apply(self, rows: Iterable[CanonicalRow]) -> list[CanonicalRow]:
        """Matching rows sorted by GREQ date, newest first."""
        return sort_by_greq_date(row for row in rows if self.matches(row))


def filter_rows(rows: Iterable[CanonicalRow], spec: FilterSpec) -> list[CanonicalRow]:
    """Subset of rows matching every active criterion of spec, newest GREQ date first."""
    return FilterEngine(spec).apply(rows)
