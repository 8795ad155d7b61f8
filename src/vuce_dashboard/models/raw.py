"""Raw record representation before normalization."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


class RawRecord(BaseModel):
    """
    Untrusted record as received from the webhook (Airtable-like fields).
    The same logical field may appear under several header spellings.
    """

    model_config = ConfigDict(extra="allow")

    data: dict[str, Any] = Field(default_factory=dict)


@dataclass(frozen=True)
class Missing:
    """Absent key or explicit null."""


@dataclass(frozen=True)
class Scalar:
    """String, number or boolean value."""

    value: Union[str, int, float, bool]


@dataclass(frozen=True)
class ObjectRef:
    """Single object such as {"value": ...}, {"name": ...} or {"id": ...}."""

    fields: Mapping[str, Any]


@dataclass(frozen=True)
class ListValue:
    """Array of scalars and/or objects."""

    items: tuple[Any, ...]


@dataclass(frozen=True)
class Unsupported:
    """Any other Python value (dates, sets, custom objects)."""

    value: Any


RawFieldValue = Union[Missing, Scalar, ObjectRef, ListValue, Unsupported]

MISSING = Missing()


def classify(value: Any) -> RawFieldValue:
    """Tag a raw field value with its shape. The only runtime shape test on raw input."""
    if value is None:
        return MISSING
    if isinstance(value, (str, int, float, bool)):
        return Scalar(value)
    if isinstance(value, Mapping):
        return ObjectRef(value)
    if isinstance(value, (list, tuple)):
        return ListValue(tuple(value))
    return Unsupported(value)
