"""Persistence-facing operations for events."""

import logging
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from college_events.exceptions import ErrorCode, NotFoundError, ValidationError
from college_events.models import Event, is_valid_id, utcnow
from college_events.policy import REQUIRED_EVENT_FIELDS, authorize, validate_required
from college_events.schemas import EventFilter
from college_events.text_index import build_search_terms, search_clause

logger = logging.getLogger(__name__)

# Fields update replaces; type is fixed at creation
UPDATABLE_EVENT_FIELDS = ("title", "description", "date", "location")

# Columns returned by the public listing
LISTING_COLUMNS = (
    Event.id,
    Event.title,
    Event.description,
    Event.date,
    Event.type,
    Event.image,
)

_datetime_adapter = TypeAdapter(datetime)
_NUMERIC_RE = re.compile(r"[+-]?\d+(\.\d*)?")


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and bool(_NUMERIC_RE.fullmatch(value))


def parse_event_date(value: Any) -> datetime:
    """
    Parse an event date into an aware UTC datetime.

    Accepts ISO 8601 dates and datetimes (``2025-04-01``,
    ``2025-04-01T18:00:00Z``). Naive values are taken
    as UTC. Bare numbers are not dates here, even though they would parse
    as Unix timestamps.

    Raises:
        ValidationError: If the value is not a recognizable point in time
    """
    if isinstance(value, str):
        value = value.strip()
    if _is_numeric(value):
        raise ValidationError(f"Invalid date: {value!r}", ErrorCode.INVALID_DATE)
    try:
        parsed = _datetime_adapter.validate_python(value)
    except PydanticValidationError:
        raise ValidationError(f"Invalid date: {value!r}", ErrorCode.INVALID_DATE)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class EventRepository:
    """Event CRUD on top of a database session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def check_create(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """
        Validate a create form without touching the database.

        Returns:
            dict: The five event fields with ``date`` parsed to UTC

        Raises:
            ValidationError: If a required field is missing/empty or the date is invalid
        """
        validate_required(fields)
        values = {name: fields[name] for name in REQUIRED_EVENT_FIELDS}
        values["date"] = parse_event_date(fields["date"])
        return values

    def insert(
        self,
        values: Mapping[str, Any],
        creator_id: str,
        image: str | None = None,
    ) -> Event:
        """Persist an event from values returned by ``check_create``."""
        now = utcnow()
        event = Event(
            title=values["title"],
            description=values["description"],
            date=values["date"],
            location=values["location"],
            type=values["type"],
            image=image,
            created_by=creator_id,
            search_terms=build_search_terms(values["title"], values["type"]),
            created_at=now,
            updated_at=now,
        )
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)

        logger.info("Event %s created by %s", event.id, creator_id)
        return event

    def create(
        self,
        fields: Mapping[str, Any],
        creator_id: str,
        image: str | None = None,
    ) -> Event:
        """
        Create an event owned by ``creator_id``.

        Args:
            fields: title, description, date, location and type
            creator_id: ID of the authenticated caller
            image: Stored image filename, if one was uploaded

        Returns:
            Event: The persisted event

        Raises:
            ValidationError: If a required field is missing/empty or the date is invalid
        """
        return self.insert(self.check_create(fields), creator_id, image=image)

    def list_events(self, event_filter: EventFilter | None = None) -> list[Row]:
        """
        Public listing: projected rows, newest date first.

        ``search`` is a stemmed text match over title and type, ``type`` an
        exact match; both apply together when given.
        """
        query = self.db.query(*LISTING_COLUMNS)

        if event_filter is not None:
            if event_filter.search:
                query = query.filter(search_clause(event_filter.search))
            if event_filter.type:
                query = query.filter(Event.type == event_filter.type)

        return query.order_by(Event.date.desc(), Event.created_at.desc()).all()

    def list_all(self) -> list[Event]:
        """Diagnostic listing: full events, oldest date first, no filters."""
        return (
            self.db.query(Event)
            .order_by(Event.date.asc(), Event.created_at.asc())
            .all()
        )

    def get_by_id(self, event_id: str) -> Event:
        """
        Fetch one event.

        Raises:
            NotFoundError: If the id is malformed or no such event exists
        """
        if not is_valid_id(event_id):
            logger.debug("Malformed event id %r", event_id)
            raise NotFoundError("Event not found")

        event = self.db.query(Event).filter(Event.id == event_id).first()
        if event is None:
            raise NotFoundError("Event not found")
        return event

    def check_update(
        self,
        event_id: str,
        fields: Mapping[str, Any],
        caller_id: str,
    ) -> tuple[Event, dict[str, Any]]:
        """
        Run every check an update needs before anything is written.

        Existence and ownership come first, so a non-creator is refused
        whatever the form holds.

        Returns:
            tuple: The event and the four updatable fields, ``date`` parsed

        Raises:
            NotFoundError: If the event does not exist
            ForbiddenError: If the caller did not create the event
            ValidationError: If an updatable field is missing or the date is invalid
        """
        event = self.get_by_id(event_id)
        authorize(event, caller_id)
        validate_required(fields, UPDATABLE_EVENT_FIELDS)
        values = {name: fields[name] for name in UPDATABLE_EVENT_FIELDS}
        values["date"] = parse_event_date(fields["date"])
        return event, values

    def apply_update(
        self,
        event: Event,
        values: Mapping[str, Any],
        caller_id: str,
        image: str | None = None,
    ) -> Event:
        """
        Write values returned by ``check_update`` onto ``event``.

        The image is replaced only when a new one is given; type and
        created_by are never changed here.
        """
        event.title = values["title"]
        event.description = values["description"]
        event.date = values["date"]
        event.location = values["location"]
        event.search_terms = build_search_terms(event.title, event.type)
        event.updated_at = utcnow()
        if image is not None:
            # The previous file stays on disk
            event.image = image

        self.db.commit()
        self.db.refresh(event)

        logger.info("Event %s updated by %s", event.id, caller_id)
        return event

    def update(
        self,
        event_id: str,
        fields: Mapping[str, Any],
        caller_id: str,
        image: str | None = None,
    ) -> Event:
        """Replace title, description, date and location of an event."""
        event, values = self.check_update(event_id, fields, caller_id)
        return self.apply_update(event, values, caller_id, image=image)

    def delete(self, event_id: str, caller_id: str) -> None:
        """
        Delete an event. Its stored image file is left in place.

        Raises:
            NotFoundError: If the event does not exist
            ForbiddenError: If the caller did not create the event
        """
        event = self.get_by_id(event_id)
        authorize(event, caller_id)

        self.db.delete(event)
        self.db.commit()

        logger.info("Event %s deleted by %s", event_id, caller_id)
