"""Chart series: monthly observation trend and top-N rankings."""

from collections import Counter
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field

from vuce_dashboard.models.row import CanonicalRow, Observacion

# Observation types plotted in the monthly trend
TREND_SERIES = (Observacion.ORIGINAL, Observacion.AJUSTE, Observacion.SUMA_VUCE)


class MonthlySeries(BaseModel):
    """Per-month counts keyed by observation type, months ascending (YYYY-MM)."""

    months: list[str] = Field(default_factory=list)
    series: dict[str, list[int]] = Field(default_factory=dict)


def monthly_observations(
    rows: Iterable[CanonicalRow],
    observaciones: Sequence[Observacion] = TREND_SERIES,
) -> MonthlySeries:
    """Group by publication month; rows without a publication date are skipped."""
    grouped: dict[str, Counter] = {}
    for row in rows:
        if row.fecha_publicacion is None:
            continue
        month = row.fecha_publicacion.strftime("%Y-%m")
        grouped.setdefault(month, Counter())[row.observacion] += 1

    months = sorted(grouped)
    return MonthlySeries(
        months=months,
        series={obs.value: [grouped[m][obs] for m in months] for obs in observaciones},
    )


def observation_counts(rows: Iterable[CanonicalRow]) -> dict[str, int]:
    """Rows per observation type, in first-seen order."""
    counts: Counter = Counter(r.observacion.value for r in rows)
    return dict(counts)


def _ranked(values: Iterable[str], limit: int) -> list[tuple[str, int]]:
    counts = Counter(v for v in values if v)
    return counts.most_common(limit)


def top_entities(rows: Iterable[CanonicalRow], limit: int = 10) -> list[tuple[str, int]]:
    """Entities with the most records, descending."""
    return _ranked((r.entidad for r in rows), limit)


def top_developers(rows: Iterable[CanonicalRow], limit: int = 10) -> list[tuple[str, int]]:
    """Developers assigned to the most records, descending."""
    return _ranked((dev for r in rows for dev in r.responsables_desarrollo), limit)
