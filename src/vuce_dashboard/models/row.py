"""Canonical row and attachment models consumed by filters and aggregations."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Observacion(str, Enum):
    """Closed set of observation types. OBSERVACION is the catch-all."""

    ORIGINAL = "ORIGINAL"
    AJUSTE = "AJUSTE"
    ACTUALIZACION = "ACTUALIZACION"
    SUMA_VUCE = "SUMA-VUCE"
    COMPLEMENTARIO = "COMPLEMENTARIO"
    PENDIENTE = "PENDIENTE"
    OBSERVACION = "OBSERVACION"


class Attachment(BaseModel):
    """File metadata for an attachment linked to a record."""

    model_config = ConfigDict(frozen=True)

    id: str
    url: str = ""
    filename: str = "Documento"
    size: Optional[int] = None
    type: Optional[str] = None


class CanonicalRow(BaseModel):
    """
    Normalized record. Every field has a defined value; missing or malformed
    raw data is replaced by the field default. Multi-valued fields are tuples;
    JSON output uses camelCase keys and arrays.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    record_id: str = ""
    greq: int = 0
    estado: str = ""
    entidad: str = ""
    nombre_entidad: str = ""
    sigla: str = ""
    apco: str = ""
    observacion: Observacion = Observacion.OBSERVACION
    descripcion_greq: str = ""

    responsable_analisis: str = ""
    estado_analisis: str = ""
    fecha_ini_analisis: Optional[datetime] = None
    fecha_fin_analisis: Optional[datetime] = None

    responsables_desarrollo: tuple[str, ...] = Field(default_factory=tuple)
    estado_desarrollo: str = ""
    fecha_ini_desarrollo: Optional[datetime] = None
    fecha_fin_desarrollo: Optional[datetime] = None

    responsable_cc: str = Field(default="", alias="responsableCC")
    estado_cc: str = Field(default="", alias="estadoCC")
    fecha_ini_cc: Optional[datetime] = Field(default=None, alias="fechaIniCC")
    fecha_fin_cc: Optional[datetime] = Field(default=None, alias="fechaFinCC")

    fecha_inicio: Optional[datetime] = None
    fecha_final: Optional[datetime] = None
    fecha_publicacion: Optional[datetime] = None
    fecha_greq: Optional[datetime] = None
    created_time: Optional[datetime] = None

    porcentaje_avance: float = 0.0
    orden: int = 0

    archivo_adjunto: tuple[Attachment, ...] = Field(default_factory=tuple)
