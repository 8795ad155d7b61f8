"""Filter specification model for the predicate engine."""

from datetime import date
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

# Select value meaning "do not constrain"
ALL = "Todos"


class FilterSpec(BaseModel):
    """Multi-criteria filter; every unset criterion is a no-op."""

    start_date: Optional[date] = Field(default=None, description="Publication date lower bound (inclusive)")
    end_date: Optional[date] = Field(default=None, description="Publication date upper bound (inclusive)")
    start_greq: Optional[date] = Field(default=None, description="GREQ date lower bound (inclusive)")
    end_greq: Optional[date] = Field(default=None, description="GREQ date upper bound (inclusive)")

    observacion: str = ALL
    estado: str = ALL

    entidades: list[str] = Field(default_factory=list)
    siglas: list[str] = Field(default_factory=list)
    resp_analisis: list[str] = Field(default_factory=list)
    resp_desarrollo: list[str] = Field(default_factory=list)
    resp_cc: list[str] = Field(default_factory=list)

    search: str = ""

    @field_validator("start_date", "end_date", "start_greq", "end_greq", mode="before")
    @classmethod
    def _blank_date_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("observacion", "estado", mode="before")
    @classmethod
    def _blank_select_is_all(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return ALL
        return v

    @field_validator("entidades", "siglas", "resp_analisis", "resp_desarrollo", "resp_cc", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("search", mode="before")
    @classmethod
    def _none_is_blank(cls, v: Any) -> Any:
        return "" if v is None else v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "FilterSpec":
        """Load a filter spec from YAML. Supports a nested `filters:` block or a flat mapping."""
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        nested = data.get("filters")
        if isinstance(nested, dict):
            data = {**{k: v for k, v in data.items() if k != "filters"}, **nested}
        return cls.model_validate(data)
