"""
Scalar normalizers for webhook field values.

Each function takes one untrusted raw value and returns one canonical value.
None of them raise: malformed input degrades to the documented default
("" for text, 0 for numbers, None for dates, [] for lists, OBSERVACION for
the observation type).
"""

import hashlib
import math
import re
import unicodedata
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from typing import Any, Optional, TypeVar

from vuce_dashboard.models.raw import ListValue, ObjectRef, Scalar, Unsupported, classify
from vuce_dashboard.models.row import Attachment, Observacion

T = TypeVar("T")

# Keys tried, in order, when an object stands in for a scalar
OBJECT_TEXT_KEYS = ("value", "name", "id")

# Checked in order; first substring hit wins
OBSERVACION_TOKENS: list[tuple[str, Observacion]] = [
    ("ACTUALIZACION", Observacion.ACTUALIZACION),
    ("OBSERVACION", Observacion.OBSERVACION),
    ("ORIGINAL", Observacion.ORIGINAL),
    ("AJUSTE", Observacion.AJUSTE),
    ("SUMA-VUCE", Observacion.SUMA_VUCE),
    ("COMPLEMENTARIO", Observacion.COMPLEMENTARIO),
    ("PENDIENTE", Observacion.PENDIENTE),
]

CALENDAR_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
GENERIC_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%Y-%m-%d",
)
DAY_FIRST_FORMAT = "%d/%m/%Y"

LINK_FILENAME = "Ver Documento"
LINK_TYPE = "link"
DEFAULT_FILENAME = "Documento"


def with_default(value: Optional[T], default: T) -> T:
    """Return value unless it is None."""
    return default if value is None else value


def first_present(mapping: Mapping[str, Any], keys: Iterable[str]) -> Optional[Any]:
    """Return the value of the first key whose value is not None."""
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return None


def _scalar_text(value: Any) -> Optional[str]:
    """Stringify str/int/float; None for booleans and non-finite floats."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # 3.0 -> "3", matching how the webhook renders whole numbers
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, int):
        return str(value)
    return None


def _to_number(value: Any) -> Optional[float]:
    """Coerce a numeric or numeric-string scalar to a finite float."""
    field = classify(value)
    if not isinstance(field, Scalar) or isinstance(field.value, bool):
        return None
    raw = field.value
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        number = float(raw)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def normalize_text(value: Any) -> str:
    """String/number -> str; object -> its value/name/id; anything else -> ""."""
    field = classify(value)
    if isinstance(field, Scalar):
        return with_default(_scalar_text(field.value), "")
    if isinstance(field, ObjectRef):
        for key in OBJECT_TEXT_KEYS:
            if key in field.fields:
                inner = classify(field.fields[key])
                if isinstance(inner, Scalar):
                    return with_default(_scalar_text(inner.value), "")
                return ""
    return ""


def normalize_percentage(value: Any) -> float:
    """
    Progress on a 0-100 scale. Values <= 1 are fractions and are scaled x100
    (so exactly 1 becomes 100); larger values pass through unchanged.
    """
    number = _to_number(value)
    if number is None:
        return 0.0
    if number <= 1:
        return number * 100
    return number


def normalize_integer(value: Any) -> int:
    """Numeric or numeric-string value truncated to int; 0 when unparseable."""
    number = _to_number(value)
    if number is None:
        return 0
    return int(number)


def fold_accents(text: str) -> str:
    """Uppercase and strip combining marks (NFD), so Ó and O compare equal."""
    decomposed = unicodedata.normalize("NFD", text.upper())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_internal_type(value: Any) -> Observacion:
    """Classify free text into the closed observation set; default OBSERVACION."""
    folded = fold_accents(normalize_text(value))
    for token, observacion in OBSERVACION_TOKENS:
        if token in folded:
            return observacion
    return Observacion.OBSERVACION


def normalize_array(value: Any) -> list[str]:
    """List -> texts without empty strings; bare string -> [string]; else []."""
    field = classify(value)
    if isinstance(field, ListValue):
        texts = (normalize_text(item) for item in field.items)
        return [text for text in texts if text]
    if isinstance(field, Scalar) and isinstance(field.value, str):
        return [field.value] if field.value else []
    return []


def _generated_id(url: str, position: int) -> str:
    """Stable id for attachments the source did not identify."""
    digest = hashlib.sha256(f"{position}:{url}".encode()).hexdigest()
    return f"att-{digest[:12]}"


def _link_attachment(url: str, position: int) -> Attachment:
    return Attachment(
        id=_generated_id(url, position),
        url=url,
        filename=LINK_FILENAME,
        type=LINK_TYPE,
    )


def _attachment_from_object(fields: Mapping[str, Any], position: int) -> Attachment:
    url = normalize_text(fields.get("url"))
    size = _to_number(fields.get("size"))
    return Attachment(
        id=normalize_text(fields.get("id")) or _generated_id(url, position),
        url=url,
        filename=normalize_text(fields.get("filename")) or DEFAULT_FILENAME,
        size=int(size) if size is not None and size >= 0 else None,
        type=normalize_text(fields.get("type")) or None,
    )


def normalize_attachment(value: Any) -> list[Attachment]:
    """
    Attachment list in a consistent shape.
    A bare URL string becomes one "Ver Documento" link; an array of objects
    (Airtable format) maps item by item with defaults for missing url/filename.
    """
    field = classify(value)
    if isinstance(field, Scalar) and isinstance(field.value, str):
        return [_link_attachment(field.value, 0)] if field.value else []
    if not isinstance(field, ListValue):
        return []

    attachments: list[Attachment] = []
    for position, item in enumerate(field.items):
        entry = classify(item)
        if isinstance(entry, ObjectRef):
            attachments.append(_attachment_from_object(entry.fields, position))
        elif isinstance(entry, Scalar) and isinstance(entry.value, str) and entry.value:
            attachments.append(_link_attachment(entry.value, position))
    return attachments


def _to_local(value: datetime) -> datetime:
    """Aware datetimes become naive local wall-clock time."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def _strptime(text: str, fmt: str) -> Optional[datetime]:
    try:
        return datetime.strptime(text, fmt)
    except ValueError:
        return None


def _parse_generic(text: str) -> Optional[datetime]:
    """ISO 8601 (with Z or offset) and a few common date-time layouts."""
    try:
        return _to_local(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except (ValueError, OverflowError, OSError):
        pass
    for fmt in GENERIC_DATE_FORMATS:
        parsed = _strptime(text, fmt)
        if parsed is not None:
            return parsed
    return None


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a date in any of the formats the webhook emits.
    Order: YYYY-MM-DD as local midnight, then ISO/generic date-time, then
    DD/MM/YYYY. Returns None for empty or unparseable input.
    """
    field = classify(value)
    if isinstance(field, Unsupported):
        if isinstance(field.value, datetime):
            return _to_local(field.value)
        if isinstance(field.value, date):
            return datetime.combine(field.value, time())
        return None
    if not isinstance(field, Scalar) or not isinstance(field.value, str):
        return None

    text = field.value.strip()
    if not text:
        return None

    if CALENDAR_DATE.match(text):
        parsed = _strptime(text, "%Y-%m-%d")
        if parsed is not None:
            return parsed

    parsed = _parse_generic(text)
    if parsed is None:
        parsed = _strptime(text, DAY_FIRST_FORMAT)
    return parsed
