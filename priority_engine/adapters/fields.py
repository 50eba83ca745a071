"""Field coercion shared by the event adapters.

Adapters are the validation boundary: the core accepts whatever it is given,
so everything that reaches an ``Event`` from a file passes through here.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Callable

from priority_engine.schema import Event

_TRUE = {"true", "1", "yes", "y"}
_FALSE = {"false", "0", "no", "n", ""}

_DATETIME_FIELDS = ("start_datetime", "end_datetime")
_INT_FIELDS = ("duration_minutes", "margin_minutes", "recurrence_interval_days", "event_id", "manual_priority")
_BOOL_FIELDS = ("is_completed", "is_recurring", "has_margin", "is_important", "is_urgent", "is_set_event")
_TEXT_FIELDS = ("title", "description")


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"not an integer: {value!r}")
    return int(str(value).strip()) if isinstance(value, str) else int(value)


def _to_deadline(value: Any) -> date:
    text = str(value).strip()
    # A bare date stays a date so the deadline is due until the end of the day.
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text)


def _convert(name: str, value: Any, converter: Callable[[Any], Any], label: str) -> Any:
    try:
        return converter(value)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label}: invalid {name}") from exc


def _in_range(name: str, value: int, low: int, high: int, label: str) -> int:
    if not low <= value <= high:
        raise ValueError(f"{label}: {name} must be between {low} and {high}, got {value}")
    return value


def build_event(record: dict, label: str) -> Event:
    """Validate a raw record and build an ``Event`` from it.

    Absent or blank fields keep the ``Event`` defaults. ``label`` prefixes every
    error message (for example ``"Row 3"``).
    """

    values: dict[str, Any] = {}

    for name in _TEXT_FIELDS:
        if not _blank(record.get(name)):
            values[name] = str(record[name]).strip()

    for name in _DATETIME_FIELDS:
        if not _blank(record.get(name)):
            values[name] = _convert(name, str(record[name]).strip(), datetime.fromisoformat, label)

    if not _blank(record.get("end_date")):
        values["end_date"] = _convert("end_date", str(record["end_date"]).strip(), date.fromisoformat, label)
    if not _blank(record.get("end_time")):
        values["end_time"] = _convert("end_time", str(record["end_time"]).strip(), time.fromisoformat, label)
    if not _blank(record.get("deadline")):
        values["deadline"] = _convert("deadline", record["deadline"], _to_deadline, label)

    for name in _INT_FIELDS:
        if not _blank(record.get(name)):
            values[name] = _convert(name, record[name], _to_int, label)

    for name in _BOOL_FIELDS:
        if not _blank(record.get(name)):
            values[name] = _convert(name, record[name], _to_bool, label)

    if not _blank(record.get("category_code")):
        code = _convert("category_code", record["category_code"], _to_int, label)
        values["category_code"] = _in_range("category_code", code, 0, 8, label)

    if not _blank(record.get("priority")):
        priority = _convert("priority", record["priority"], _to_int, label)
        values["priority"] = _in_range("priority", priority, 1, 5, label)

    if "manual_priority" in values:
        _in_range("manual_priority", values["manual_priority"], 2, 4, label)

    return Event(**values)
