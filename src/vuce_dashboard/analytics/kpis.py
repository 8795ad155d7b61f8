"""Headline indicators over a set of canonical rows."""

from collections import Counter
from collections.abc import Sequence
from typing import Optional

from pydantic import BaseModel

from vuce_dashboard.models.row import CanonicalRow, Observacion


class KpiSummary(BaseModel):
    """Counts by key observation type, average progress and busiest entity."""

    total: int = 0
    original: int = 0
    ajuste: int = 0
    suma_vuce: int = 0
    avg_progress: float = 0.0
    top_entity: Optional[tuple[str, int]] = None


def compute_kpis(rows: Sequence[CanonicalRow]) -> KpiSummary:
    """Compute the KPI summary; average progress is 0 for an empty set."""
    total = len(rows)
    by_type = Counter(r.observacion for r in rows)
    avg_progress = sum(r.porcentaje_avance for r in rows) / total if total else 0.0

    entity_counts = Counter(r.entidad for r in rows if r.entidad)
    # most_common keeps first-seen order among ties
    top = entity_counts.most_common(1)

    return KpiSummary(
        total=total,
        original=by_type[Observacion.ORIGINAL],
        ajuste=by_type[Observacion.AJUSTE],
        suma_vuce=by_type[Observacion.SUMA_VUCE],
        avg_progress=avg_progress,
        top_entity=top[0] if top else None,
    )
