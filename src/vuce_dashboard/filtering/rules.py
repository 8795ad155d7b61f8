"""Filter rules: each returns (passed, explanation, rule_id)."""

from datetime import date, datetime
from typing import Optional

from vuce_dashboard.models.filters import ALL, FilterSpec
from vuce_dashboard.models.row import CanonicalRow

RuleOutcome = tuple[bool, str, str]


def _date_in_range(
    value: Optional[datetime],
    start: Optional[date],
    end: Optional[date],
    label: str,
) -> tuple[bool, str]:
    """Inclusive [start, end] at day granularity; a missing date fails any set bound."""
    if start is None and end is None:
        return True, f"{label} range not set"
    if value is None:
        return False, f"Excluded: no {label} while a range is set"

    day = value.date()
    if start is not None and day < start:
        return False, f"Excluded: {label} {day} before {start}"
    if end is not None and day > end:
        return False, f"Excluded: {label} {day} after {end}"
    return True, f"{label} {day} within range"


def _select_active(value: str) -> bool:
    return bool(value) and value != ALL


def apply_publication_date_rule(row: CanonicalRow, spec: FilterSpec) -> RuleOutcome:
    """Publication date within [start_date, end_date]."""
    passed, explanation = _date_in_range(row.fecha_publicacion, spec.start_date, spec.end_date, "publication date")
    return passed, explanation, "publication_date"


def apply_greq_date_rule(row: CanonicalRow, spec: FilterSpec) -> RuleOutcome:
    """GREQ date within [start_greq, end_greq]."""
    passed, explanation = _date_in_range(row.fecha_greq, spec.start_greq, spec.end_greq, "GREQ date")
    return passed, explanation, "greq_date"


def apply_observacion_rule(row: CanonicalRow, spec: FilterSpec) -> RuleOutcome:
    """Exact observation type unless the ALL sentinel is selected."""
    if not _select_active(spec.observacion):
        return True, "Observation filter not set", "observacion"
    if row.observacion.value == spec.observacion:
        return True, f"Matches observation: {spec.observacion}", "observacion"
    return False, f"Excluded: observation {row.observacion.value} is not {spec.observacion}", "observacion"


def apply_estado_rule(row: CanonicalRow, spec: FilterSpec) -> RuleOutcome:
    """Exact status unless the ALL sentinel is selected."""
    if not _select_active(spec.estado):
        return True, "Status filter not set", "estado"
    if row.estado == spec.estado:
        return True, f"Matches status: {spec.estado}", "estado"
    return False, f"Excluded: status '{row.estado}' is not '{spec.estado}'", "estado"


def _membership(value: str, selected: list[str], label: str, rule_id: str) -> RuleOutcome:
    if not selected:
        return True, f"{label} filter not set", rule_id
    if value in selected:
        return True, f"Matches {label}: {value}", rule_id
    return False, f"Excluded: {label} '{value}' not selected", rule_id


def apply_entidad_rule(row: CanonicalRow, spec: FilterSpec) -> RuleOutcome:
    return _membership(row.entidad, spec.entidades, "entity", "entidad")


def apply_sigla_rule(row: CanonicalRow, spec: FilterSpec) -> RuleOutcome:
    return _membership(row.sigla, spec.siglas, "acronym", "sigla")


def apply_resp_analisis_rule(row: CanonicalRow, spec: FilterSpec) -> RuleOutcome:
    return _membership(row.responsable_analisis, spec.resp_analisis, "analysis responsible", "resp_analisis")


def apply_resp_cc_rule(row: CanonicalRow, spec: FilterSpec) -> RuleOutcome:
    return _membership(row.responsable_cc, spec.resp_cc, "quality control responsible", "resp_cc")


def apply_resp_desarrollo_rule(row: CanonicalRow, spec: FilterSpec) -> RuleOutcome:
    """Passes when any of the row's developers is selected."""
    if not spec.resp_desarrollo:
        return True, "Development responsible filter not set", "resp_desarrollo"
    selected = set(spec.resp_desarrollo)
    for dev in row.responsables_desarrollo:
        if dev in selected:
            return True, f"Matches developer: {dev}", "resp_desarrollo"
    return False, "Excluded: no selected developer assigned", "resp_desarrollo"


def apply_search_rule(row: CanonicalRow, spec: FilterSpec) -> RuleOutcome:
    """
    Case-insensitive substring search over GREQ number, APCO code,
    GREQ description and entity name. Any field may match.
    """
    if not spec.search:
        return True, "Search not set", "search"

    term = spec.search.lower()
    candidates = (
        ("GREQ", str(row.greq) if row.greq else ""),
        ("APCO", row.apco),
        ("description", row.descripcion_greq),
        ("entity name", row.nombre_entidad),
    )
    for label, text in candidates:
        if term in text.lower():
            return True, f"Search '{spec.search}' found in {label}", "search"
    return False, f"Excluded: search '{spec.search}' not found", "search"
