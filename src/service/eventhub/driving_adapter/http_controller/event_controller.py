from collections.abc import AsyncIterator
from typing import List, Optional

import anyio
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
import orjson
from sse_starlette.sse import EventSourceResponse

from src.platform.config.di import container
from src.platform.event.i_in_memory_broadcaster import IInMemoryEventBroadcaster
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.command.create_event_use_case import CreateEventUseCase
from src.service.eventhub.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.eventhub.app.command.update_event_use_case import UpdateEventUseCase
from src.service.eventhub.app.query.get_attendee_stats_use_case import GetAttendeeStatsUseCase
from src.service.eventhub.app.query.get_event_use_case import GetEventUseCase
from src.service.eventhub.app.query.list_event_attendees_use_case import (
    ListEventAttendeesUseCase,
)
from src.service.eventhub.app.query.list_events_use_case import ListEventsUseCase
from src.service.eventhub.domain.entity.user_entity import UserEntity
from src.service.eventhub.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.eventhub.driving_adapter.http_controller.schema.event_schema import (
    AttendeeStatsResponse,
    DeleteEventResponse,
    EventAttendeesResponse,
    EventCreateRequest,
    EventDetailResponse,
    EventResponse,
    EventUpdateRequest,
)


router = APIRouter()


@router.get('')
@Logger.io
async def list_events(
    category: Optional[str] = None,
    search: Optional[str] = None,
    sort: str = '-created_at',
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_events(category=category, search=search, sort=sort)
    return [EventResponse.from_entity(event) for event in events]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.create_event(
        owner_id=current_user.id or 0,
        title=request.title,
        description=request.description,
        category=request.category,
        event_date=request.event_date,
        event_time=request.event_time,
        location=request.location,
        max_attendees=request.max_attendees,
        ticket_price=request.ticket_price,
    )
    return EventResponse.from_entity(event)


@router.get('/my-events')
@Logger.io
async def list_my_events(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_by_owner(owner_id=current_user.id or 0)
    return [EventResponse.from_entity(event) for event in events]


@router.get('/{event_id}')
@Logger.io
async def get_event(
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventDetailResponse:
    detail = await use_case.get_event(event_id=event_id)
    return EventDetailResponse.from_detail(detail)


@router.put('/{event_id}')
@Logger.io
async def update_event(
    event_id: int,
    request: EventUpdateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.update_event(
        event_id=event_id,
        actor=current_user,
        changes=request.model_dump(exclude_unset=True, exclude_none=True),
    )
    return EventResponse.from_entity(event)


@router.delete('/{event_id}')
@Logger.io
async def delete_event(
    event_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> DeleteEventResponse:
    await use_case.delete_event(event_id=event_id, actor=current_user)
    return DeleteEventResponse(message='Event deleted successfully')


@router.get('/{event_id}/attendees')
@Logger.io
async def list_event_attendees(
    event_id: int,
    use_case: ListEventAttendeesUseCase = Depends(ListEventAttendeesUseCase.depends),
) -> EventAttendeesResponse:
    event_attendees = await use_case.execute(event_id=event_id)
    return EventAttendeesResponse.from_dto(event_attendees)


# ============================ Live attendee updates ============================


async def forward_attendee_updates(
    websocket: WebSocket, *, event_id: int, broadcaster: IInMemoryEventBroadcaster
) -> None:
    """
    Relay one event's ATTENDEE_UPDATE messages to a WebSocket until it disconnects

    Subscribes before accepting, so nothing committed after the handshake is missed.
    Incoming frames are read only to notice the disconnect.
    """
    stream = await broadcaster.subscribe(event_id=event_id)
    try:
        await websocket.accept()
        Logger.base.info(f'🔌 [WS] Viewer connected to event {event_id}')

        async with anyio.create_task_group() as tg:

            async def forward_updates() -> None:
                async for message in stream:
                    await websocket.send_json(message)

            tg.start_soon(forward_updates)
            try:
                while True:
                    await websocket.receive_text()
            except WebSocketDisconnect:
                Logger.base.info(f'🔌 [WS] Viewer disconnected from event {event_id}')
            tg.cancel_scope.cancel()
    finally:
        await broadcaster.unsubscribe(event_id=event_id, stream=stream)


async def attendee_event_stream(
    *,
    event_id: int,
    use_case: GetAttendeeStatsUseCase,
    broadcaster: IInMemoryEventBroadcaster,
) -> AsyncIterator[dict[str, str]]:
    """
    SSE frames for one event

    First frame: stats snapshot (`attendee_stats`), read after subscribing so no
    update falls between the snapshot and the stream. Then every broadcast
    ATTENDEE_UPDATE (`attendee_update`).
    """
    stream = await broadcaster.subscribe(event_id=event_id)
    try:
        try:
            stats = await use_case.execute(event_id=event_id)
        except NotFoundError:
            Logger.base.info(f'📡 [SSE] Event {event_id} gone before the first frame')
            return

        yield {
            'event': 'attendee_stats',
            'data': orjson.dumps(
                AttendeeStatsResponse.from_stats(stats).model_dump(by_alias=True)
            ).decode(),
        }
        async for message in stream:
            yield {'event': 'attendee_update', 'data': orjson.dumps(message).decode()}
    finally:
        await broadcaster.unsubscribe(event_id=event_id, stream=stream)
        Logger.base.info(f'📡 [SSE] Viewer left event {event_id}')


@router.websocket('/{event_id}/ws')
async def attendee_updates_ws(websocket: WebSocket, event_id: int) -> None:
    await forward_attendee_updates(
        websocket, event_id=event_id, broadcaster=container.attendee_broadcaster()
    )


@router.get('/{event_id}/sse', status_code=status.HTTP_200_OK)
@Logger.io
async def stream_attendee_updates(
    event_id: int,
    use_case: GetAttendeeStatsUseCase = Depends(GetAttendeeStatsUseCase.depends),
) -> EventSourceResponse:
    """SSE stream of attendee updates for one event; 404 if the event does not exist"""
    await use_case.execute(event_id=event_id)
    return EventSourceResponse(
        attendee_event_stream(
            event_id=event_id,
            use_case=use_case,
            broadcaster=container.attendee_broadcaster(),
        )
    )
