import time
from typing import Optional, Self, Tuple

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.event.i_in_memory_broadcaster import IInMemoryEventBroadcaster
from src.platform.exception.exceptions import (
    CapacityExceededError,
    ConflictError,
    DuplicateBookingError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.platform.state.event_lock import EventLockRegistry
from src.service.eventhub.app.dto.ticket_detail import TicketDetail
from src.service.eventhub.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.eventhub.domain.entity.event_entity import EventEntity
from src.service.eventhub.domain.entity.ticket_entity import TicketEntity
from src.service.eventhub.domain.value_object.attendee_update import AttendeeUpdate
from src.service.eventhub.domain.value_object.summary import EventSummary


def booking_result_label(error: Exception) -> str:
    # DuplicateBookingError is a ConflictError, check it first
    if isinstance(error, DuplicateBookingError):
        return 'duplicate'
    if isinstance(error, CapacityExceededError):
        return 'capacity_exceeded'
    if isinstance(error, NotFoundError):
        return 'not_found'
    if isinstance(error, ConflictError):
        return 'conflict'
    return 'error'


class BookTicketUseCase:
    """
    Book one ticket for the caller

    Flow (per event, under the event lock):
    1. Load event -> NotFoundError
    2. Capacity check -> CapacityExceededError
    3. Active ticket check -> DuplicateBookingError
    4. Add attendee + version-checked event update + ticket insert, one transaction
    5. Broadcast ATTENDEE_UPDATE (best effort)

    A lost version check restarts the attempt from a fresh transaction, up to
    max_retries times, then ConflictError.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        event_lock_registry: EventLockRegistry,
        broadcaster: IInMemoryEventBroadcaster,
        user_query_repo: IUserQueryRepo,
        max_retries: int = 3,
    ) -> None:
        self.uow = uow
        self.event_lock_registry = event_lock_registry
        self.broadcaster = broadcaster
        self.user_query_repo = user_query_repo
        self.max_retries = max_retries
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        event_lock_registry: EventLockRegistry = Depends(Provide[Container.event_lock_registry]),
        broadcaster: IInMemoryEventBroadcaster = Depends(
            Provide[Container.attendee_broadcaster]
        ),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    ) -> Self:
        return cls(
            uow=uow,
            event_lock_registry=event_lock_registry,
            broadcaster=broadcaster,
            user_query_repo=user_query_repo,
            max_retries=settings.BOOKING_MAX_RETRIES,
        )

    @Logger.io
    async def execute(self, *, user_id: int, event_id: int) -> TicketDetail:
        start_time = time.perf_counter()

        with self.tracer.start_as_current_span(
            'use_case.book_ticket',
            attributes={'event.id': event_id, 'user.id': user_id},
        ):
            try:
                async with self.event_lock_registry.hold(event_id=event_id):
                    event, ticket = await self._book_with_retry(user_id=user_id, event_id=event_id)
                    # Still under the lock: updates for one event leave in commit order
                    await self._broadcast(event=event)
            except Exception as e:
                metrics.record_booking(
                    result=booking_result_label(e), duration=time.perf_counter() - start_time
                )
                raise

            metrics.record_booking(result='success', duration=time.perf_counter() - start_time)
            metrics.update_event_attendees(event_id=event_id, current=event.current_attendees)
            Logger.base.info(
                f'🎟️ [BOOK] User {user_id} booked event {event_id} '
                f'ticket={ticket.ticket_number} attendees={event.current_attendees}/{event.max_attendees}'
            )

            user_summaries = await self.user_query_repo.get_summaries([user_id])
            return TicketDetail(
                ticket=ticket,
                event=EventSummary.from_event(event),
                user=user_summaries.get(user_id),
            )

    async def _book_with_retry(
        self, *, user_id: int, event_id: int
    ) -> Tuple[EventEntity, TicketEntity]:
        for attempt in range(1, self.max_retries + 1):
            result = await self._book_once(user_id=user_id, event_id=event_id)
            if result is not None:
                return result

            metrics.record_cas_retry(operation='book')
            Logger.base.warning(
                f'🔁 [BOOK] Event {event_id} changed concurrently '
                f'(attempt {attempt}/{self.max_retries})'
            )

        raise ConflictError('Event was updated concurrently, please retry')

    async def _book_once(
        self, *, user_id: int, event_id: int
    ) -> Optional[Tuple[EventEntity, TicketEntity]]:
        async with self.uow:
            event = await self.uow.event_command_repo.get_by_id(event_id=event_id)
            if not event:
                raise NotFoundError('Event not found')

            event.validate_has_capacity()

            if await self.uow.ticket_command_repo.get_active_ticket(
                event_id=event_id, user_id=user_id
            ):
                raise DuplicateBookingError()

            updated_event = event.add_attendee(user_id)
            if not await self.uow.event_command_repo.update_attendees(
                event=updated_event, expected_version=event.version
            ):
                return None

            ticket = await self.uow.ticket_command_repo.create(
                ticket=TicketEntity.create(event_id=event_id, user_id=user_id)
            )
            await self.uow.commit()

        return attrs.evolve(updated_event, version=event.version + 1), ticket

    async def _broadcast(self, *, event: EventEntity) -> None:
        message = AttendeeUpdate(
            event_id=event.id or 0,
            current_attendees=event.current_attendees,
            attendees=event.attendees,
        ).to_message()
        try:
            await self.broadcaster.broadcast(event_id=event.id or 0, message=message)
        except Exception as e:
            Logger.base.warning(f'⚠️ [BOOK] Broadcast failed for event {event.id}: {e}')
