# sitepulse/adapters/inbound/api/v1/endpoints/events_endpoint.py

"""
Endpoints for analytics events.

Every route requires a valid bearer token; events are stored under the
client the token belongs to.
"""

from typing import Optional
from fastapi import APIRouter, Depends

from sitepulse.adapters.inbound.api.deps import get_current_client_id, get_event_service
from sitepulse.application.dtos.event_dto import (
    ClickIn,
    EventCreatedResponse,
    EventListResponse,
    PathIn,
    RemovePathRequest,
    RemovePathResponse,
    ScrollIn,
    SessionEventsResponse,
    SessionPathsQuery,
    VisitIn,
)
from sitepulse.application.use_cases.event_use_cases import AsyncEventService

router = APIRouter()


########################################################################
# Visits
########################################################################

@router.get("/get/visits", response_model=EventListResponse)
async def get_visits(
        url: Optional[str] = None,
        client_id: str = Depends(get_current_client_id),
        events: AsyncEventService = Depends(get_event_service),
):
    data = await events.list_events("visits", client_id, url=url)
    return EventListResponse(client_id=client_id, data=data)


@router.post("/set/visits", response_model=EventCreatedResponse)
async def set_visit(
        visit: VisitIn,
        client_id: str = Depends(get_current_client_id),
        events: AsyncEventService = Depends(get_event_service),
):
    event_id = await events.record("visits", client_id, visit.to_record())
    return EventCreatedResponse(id=event_id)


########################################################################
# Scroll
########################################################################

@router.get("/get/scroll", response_model=EventListResponse)
async def get_scroll(
        url: Optional[str] = None,
        client_id: str = Depends(get_current_client_id),
        events: AsyncEventService = Depends(get_event_service),
):
    data = await events.list_events("scroll", client_id, url=url)
    return EventListResponse(client_id=client_id, data=data)


@router.post("/set/scroll", response_model=EventCreatedResponse)
async def set_scroll(
        scroll: ScrollIn,
        client_id: str = Depends(get_current_client_id),
        events: AsyncEventService = Depends(get_event_service),
):
    event_id = await events.record("scroll", client_id, scroll.to_record())
    return EventCreatedResponse(id=event_id)


########################################################################
# Clicks
########################################################################

@router.get("/get/clicks", response_model=EventListResponse)
async def get_clicks(
        url: Optional[str] = None,
        client_id: str = Depends(get_current_client_id),
        events: AsyncEventService = Depends(get_event_service),
):
    data = await events.list_events("clicks", client_id, url=url)
    return EventListResponse(client_id=client_id, data=data)


@router.post("/set/click", response_model=EventCreatedResponse)
async def set_click(
        click: ClickIn,
        client_id: str = Depends(get_current_client_id),
        events: AsyncEventService = Depends(get_event_service),
):
    event_id = await events.record("clicks", client_id, click.to_record())
    return EventCreatedResponse(id=event_id)


########################################################################
# Paths
########################################################################

@router.get("/get/paths", response_model=EventListResponse)
async def get_paths(
        url: Optional[str] = None,
        client_id: str = Depends(get_current_client_id),
        events: AsyncEventService = Depends(get_event_service),
):
    data = await events.list_events("paths", client_id, url=url)
    return EventListResponse(client_id=client_id, data=data)


@router.post("/get/paths", response_model=EventListResponse)
async def get_session_paths(
        query: SessionPathsQuery,
        client_id: str = Depends(get_current_client_id),
        events: AsyncEventService = Depends(get_event_service),
):
    data = await events.list_events("paths", client_id, session_id=query.session_id, url=query.url)
    return EventListResponse(client_id=client_id, data=data)


@router.post("/set/path", response_model=EventCreatedResponse)
async def set_path(
        path: PathIn,
        client_id: str = Depends(get_current_client_id),
        events: AsyncEventService = Depends(get_event_service),
):
    event_id = await events.record("paths", client_id, path.to_record())
    return EventCreatedResponse(id=event_id)


@router.post("/remove/path", response_model=RemovePathResponse)
async def remove_path(
        body: RemovePathRequest,
        client_id: str = Depends(get_current_client_id),
        events: AsyncEventService = Depends(get_event_service),
):
    deleted = await events.remove_path(client_id, body.id)
    return RemovePathResponse(deleted_count=deleted)


########################################################################
# Sessions
########################################################################

# Declared last so it does not shadow the /get/<kind> routes above
@router.get("/get/{session_id}", response_model=SessionEventsResponse)
async def get_session(
        session_id: str,
        client_id: str = Depends(get_current_client_id),
        events: AsyncEventService = Depends(get_event_service),
):
    grouped = await events.get_session(client_id, session_id)
    return SessionEventsResponse(session_id=session_id, client_id=client_id, **grouped)
