"""Map raw webhook records to canonical rows."""

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Union

from vuce_dashboard.models.raw import RawRecord
from vuce_dashboard.models.row import CanonicalRow

from . import aliases
from .normalizers import (
    first_present,
    normalize_array,
    normalize_attachment,
    normalize_integer,
    normalize_internal_type,
    normalize_percentage,
    normalize_text,
    parse_date,
)

FieldRule = tuple[tuple[str, ...], Callable[[Any], Any]]

# Canonical attribute -> (header aliases, normalizer)
FIELD_ALIASES: dict[str, FieldRule] = {
    "record_id": (aliases.RECORD_ID, normalize_text),
    "greq": (aliases.GREQ, normalize_integer),
    "estado": (aliases.ESTADO, normalize_text),
    "entidad": (aliases.ENTIDAD, normalize_text),
    "nombre_entidad": (aliases.NOMBRE_ENTIDAD, normalize_text),
    "sigla": (aliases.SIGLA, normalize_text),
    "apco": (aliases.APCO, normalize_text),
    "observacion": (aliases.OBSERVACION, normalize_internal_type),
    "descripcion_greq": (aliases.DESCRIPCION_GREQ, normalize_text),
    "responsable_analisis": (aliases.RESPONSABLE_ANALISIS, normalize_text),
    "estado_analisis": (aliases.ESTADO_ANALISIS, normalize_text),
    "fecha_ini_analisis": (aliases.FECHA_INI_ANALISIS, parse_date),
    "fecha_fin_analisis": (aliases.FECHA_FIN_ANALISIS, parse_date),
    "responsables_desarrollo": (aliases.RESPONSABLE_DESARROLLO, normalize_array),
    "estado_desarrollo": (aliases.ESTADO_DESARROLLO, normalize_text),
    "fecha_ini_desarrollo": (aliases.FECHA_INI_DESARROLLO, parse_date),
    "fecha_fin_desarrollo": (aliases.FECHA_FIN_DESARROLLO, parse_date),
    "responsable_cc": (aliases.RESPONSABLE_CC, normalize_text),
    "estado_cc": (aliases.ESTADO_CC, normalize_text),
    "fecha_ini_cc": (aliases.FECHA_INI_CC, parse_date),
    "fecha_fin_cc": (aliases.FECHA_FIN_CC, parse_date),
    "fecha_inicio": (aliases.FECHA_INICIO, parse_date),
    "fecha_final": (aliases.FECHA_FINAL, parse_date),
    "fecha_publicacion": (aliases.FECHA_PUBLICACION, parse_date),
    "fecha_greq": (aliases.FECHA_GREQ, parse_date),
    "created_time": (aliases.CREATED_TIME, parse_date),
    "porcentaje_avance": (aliases.PORCENTAJE_AVANCE, normalize_percentage),
    "orden": (aliases.ORDEN, normalize_integer),
    "archivo_adjunto": (aliases.ARCHIVO_ADJUNTO, normalize_attachment),
}


def map_record(raw: Union[RawRecord, Mapping[str, Any]]) -> CanonicalRow:
    """
    Build one CanonicalRow from a raw record.
    Each field reads the first alias with a non-null value; absent fields get
    the normalizer's default. Pure and deterministic.
    """
    data = raw.data if isinstance(raw, RawRecord) else raw
    values = {
        attr: normalize(first_present(data, keys))
        for attr, (keys, normalize) in FIELD_ALIASES.items()
    }
    return CanonicalRow.model_validate(values)


def map_records(raws: Iterable[Union[RawRecord, Mapping[str, Any]]]) -> list[CanonicalRow]:
    """Map every raw record, preserving order."""
    return [map_record(r) for r in raws]
