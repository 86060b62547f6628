"""API routes for usage events."""
from fastapi import APIRouter, Depends

from .deps import get_event_service
from .schemas import CreateEventRequest, EmptyResponse, EventOut, EventResponse, ListEventsResponse
from ..services import EVENTS_COLLECTION, EventService
from ..store import format_name

router = APIRouter(prefix="/v1/events", tags=["events"])


@router.post("", response_model=EventResponse)
async def create_event(req: CreateEventRequest, service: EventService = Depends(get_event_service)):
    """Create a usage event."""
    event = service.create_event(
        subject=req.event.subject,
        source=req.event.source,
        action=req.event.action,
        execution_duration=req.event.execution_duration,
    )
    return EventResponse(event=EventOut.from_event(event))


@router.get("", response_model=ListEventsResponse)
async def list_events(
    page_size: int = 0,
    page_token: str = "",
    service: EventService = Depends(get_event_service),
):
    """List usage events, newest first."""
    page = service.list_events(page_size=page_size, page_token=page_token)
    return ListEventsResponse(
        events=[EventOut.from_event(e) for e in page.items],
        next_page_token=page.next_page_token,
    )


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: str, service: EventService = Depends(get_event_service)):
    """Get a usage event by id."""
    event = service.get_event(format_name(EVENTS_COLLECTION, event_id))
    return EventResponse(event=EventOut.from_event(event))


@router.delete("/{event_id}", response_model=EmptyResponse)
async def delete_event(event_id: str, service: EventService = Depends(get_event_service)):
    """Delete a usage event."""
    service.delete_event(format_name(EVENTS_COLLECTION, event_id))
    return EmptyResponse()
