"""Event access policy: required fields and creator-only mutation."""

from collections.abc import Iterable, Mapping
from typing import Any

from college_events.exceptions import ForbiddenError, ValidationError
from college_events.models import Event

REQUIRED_EVENT_FIELDS = ("title", "description", "date", "location", "type")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def validate_required(
    fields: Mapping[str, Any],
    required: Iterable[str] = REQUIRED_EVENT_FIELDS,
) -> None:
    """Raise ValidationError listing every required field that is missing or empty."""
    missing = [name for name in required if _is_blank(fields.get(name))]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            missing=missing,
        )


def authorize(event: Event, caller_id: str) -> None:
    """Only the event's creator may update or delete it."""
    if event.created_by != caller_id:
        raise ForbiddenError("Not authorized")
