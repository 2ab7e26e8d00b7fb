"""
Daybook Backend — Field Validation
====================================

What:  Explicit field-level checks for notes, tasks and events.
Why:   Request schemas accept loosely-typed values so that every bad input
       reaches these functions and comes back as a ValidationError (HTTP 400)
       naming the offending field, rather than FastAPI's generic 422.
How:   Small reusable checks (text, datetime, choice) composed into one
       `validate_<resource>` function per resource. Each takes the full set
       of mutable fields (for updates: the stored values merged with the
       request) and returns the cleaned values ready to assign to the model.

Field names in error messages are the wire names clients send
(`dateTime`, `dueDate`), not the Python attribute names.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, Optional

from app.exceptions import ValidationError
from app.models.task import DEFAULT_TASK_STATUS, TASK_STATUSES


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def clean_text(value: Any, field: str, required: bool = False) -> Optional[str]:
    """
    Trim a text field.

    A required field fails when absent or blank after trimming. An optional
    field keeps an empty string as-is and None as None.
    """
    if value is None:
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", field=field)
    trimmed = value.strip()
    if required and not trimmed:
        raise ValidationError(f"{field} is required", field=field)
    return trimmed


def parse_datetime(value: Any, field: str, required: bool = False) -> Optional[datetime]:
    """
    Coerce a datetime field to an aware UTC datetime.

    Accepts datetime/date objects, ISO 8601 strings (a trailing "Z" and
    date-only strings included), and numbers as epoch milliseconds, which is
    what browser clients produce from Date.getTime().
    """
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return None

    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    # bool is an int subclass; true/false is never a timestamp
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValidationError(f"{field} is out of range", field=field)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(
                f"{field} must be an ISO 8601 date or datetime, got '{value}'",
                field=field,
            )
        try:
            return as_utc(parsed)
        except OverflowError:
            # offset pushes the instant outside year 1..9999
            raise ValidationError(f"{field} is out of range", field=field)

    raise ValidationError(f"{field} must be a date or datetime", field=field)


def check_choice(value: Any, field: str, choices: Iterable[str], default: str) -> str:
    """Enum check; None falls back to the default."""
    if value is None:
        return default
    allowed = tuple(choices)
    if value not in allowed:
        raise ValidationError(
            f"{field} must be one of: {', '.join(allowed)}; got '{value}'",
            field=field,
            context={"allowed": list(allowed)},
        )
    return value


# ── Per-resource validators ───────────────────────────────────────────────

def validate_note(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {"note": clean_text(fields.get("note"), "note", required=True)}


def validate_task(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "task": clean_text(fields.get("task"), "task"),
        "status": check_choice(fields.get("status"), "status", TASK_STATUSES, DEFAULT_TASK_STATUS),
        "due_date": parse_datetime(fields.get("due_date"), "dueDate"),
    }


def validate_event(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "event": clean_text(fields.get("event"), "event"),
        "date_time": parse_datetime(fields.get("date_time"), "dateTime", required=True),
    }
