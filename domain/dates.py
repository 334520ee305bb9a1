"""
Normalisation des dates de saisie

Un "jour" est un jour calendaire UTC: l'heure de la saisie est ignorée.
"""

from datetime import date, datetime, timezone
from typing import Union

from domain.exceptions import ValidationError

DateLike = Union[date, datetime, str]


def to_calendar_day(value: DateLike) -> date:
    """Tronque une date/datetime (ou une chaîne ISO 8601) au jour calendaire UTC"""
    if value is None or value == "":
        raise ValidationError("log_date is required", field="log_date", constraint="required")

    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(raw) if "T" in raw or " " in raw else date.fromisoformat(raw)
        except ValueError:
            raise ValidationError(
                f"Invalid log_date '{value}' (expected ISO 8601)",
                field="log_date",
                constraint="iso8601",
            )

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value

    raise ValidationError(f"Invalid log_date type: {type(value).__name__}", field="log_date", constraint="date")
