"""Event routes for College Events API."""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from college_events.dependencies import CurrentUserId, Events, Images
from college_events.models import Event
from college_events.schemas import (
    EventFilter,
    EventResponse,
    EventSummary,
    MessageResponse,
    error_responses,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["Events"])

OptionalForm = Annotated[str | None, Form()]
OptionalImage = Annotated[UploadFile | None, File()]


@router.get("", response_model=list[EventSummary])
def list_events(
    events: Events,
    search: str | None = None,
    event_type: Annotated[str | None, Query(alias="type")] = None,
) -> list[EventSummary]:
    """
    List events, newest date first.

    Args:
        search: Text search over title and type (stemmed, any term matches)
        event_type: Exact event type
    """
    rows = events.list_events(EventFilter(search=search, type=event_type))
    return [EventSummary.model_validate(row) for row in rows]


@router.get("/debug/all", response_model=list[EventResponse])
def list_all_events(events: Events) -> list[Event]:
    """Diagnostic listing of every stored event, oldest date first."""
    all_events = events.list_all()
    logger.debug("Debug listing returned %d events", len(all_events))
    return all_events


@router.get("/{event_id}", response_model=EventResponse, responses=error_responses(404))
def get_event(event_id: str, events: Events) -> Event:
    """Get a single event."""
    return events.get_by_id(event_id)


@router.post(
    "",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 401),
)
async def create_event(
    user_id: CurrentUserId,
    events: Events,
    images: Images,
    title: OptionalForm = None,
    description: OptionalForm = None,
    date: OptionalForm = None,
    location: OptionalForm = None,
    event_type: Annotated[str | None, Form(alias="type")] = None,
    image: OptionalImage = None,
) -> Event:
    """
    Create an event owned by the caller.

    Accepts multipart form data with an optional ``image`` file. The form
    is fully validated before the image is written to disk.
    """
    fields = {
        "title": title,
        "description": description,
        "date": date,
        "location": location,
        "type": event_type,
    }
    values = events.check_create(fields)

    filename = await images.save(image) if image is not None else None
    return await run_in_threadpool(events.insert, values, user_id, filename)


@router.put(
    "/{event_id}",
    response_model=EventResponse,
    responses=error_responses(400, 401, 403, 404),
)
async def update_event(
    event_id: str,
    user_id: CurrentUserId,
    events: Events,
    images: Images,
    title: OptionalForm = None,
    description: OptionalForm = None,
    date: OptionalForm = None,
    location: OptionalForm = None,
    image: OptionalImage = None,
) -> Event:
    """
    Update an event's title, description, date, location and, optionally,
    its image. Only the creator may do this.
    """
    fields = {
        "title": title,
        "description": description,
        "date": date,
        "location": location,
    }
    event, values = await run_in_threadpool(events.check_update, event_id, fields, user_id)

    filename = await images.save(image) if image is not None else None
    return await run_in_threadpool(events.apply_update, event, values, user_id, filename)


@router.delete(
    "/{event_id}",
    response_model=MessageResponse,
    responses=error_responses(401, 403, 404),
)
def delete_event(event_id: str, user_id: CurrentUserId, events: Events) -> MessageResponse:
    """Delete an event. Only the creator may do this."""
    events.delete(event_id, caller_id=user_id)
    return MessageResponse(message="Event deleted successfully")
