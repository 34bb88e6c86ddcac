from typing import Optional, Self, Tuple

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.event.i_in_memory_broadcaster import IInMemoryEventBroadcaster
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.platform.state.event_lock import EventLockRegistry
from src.service.eventhub.app.command.book_ticket_use_case import booking_result_label
from src.service.eventhub.app.dto.ticket_detail import TicketDetail
from src.service.eventhub.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.eventhub.domain.entity.event_entity import EventEntity
from src.service.eventhub.domain.entity.ticket_entity import TicketEntity
from src.service.eventhub.domain.value_object.attendee_update import AttendeeUpdate
from src.service.eventhub.domain.value_object.summary import EventSummary


TICKET_NOT_FOUND = 'Ticket not found'


class CancelTicketUseCase:
    """
    Cancel the caller's active ticket

    The ticket row is kept with status cancelled; the caller leaves the event's
    attendee set in the same transaction. A ticket that is missing, owned by
    someone else or no longer active is reported as NotFoundError.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        ticket_query_repo: ITicketQueryRepo,
        event_lock_registry: EventLockRegistry,
        broadcaster: IInMemoryEventBroadcaster,
        max_retries: int = 3,
    ) -> None:
        self.uow = uow
        self.ticket_query_repo = ticket_query_repo
        self.event_lock_registry = event_lock_registry
        self.broadcaster = broadcaster
        self.max_retries = max_retries
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        event_lock_registry: EventLockRegistry = Depends(Provide[Container.event_lock_registry]),
        broadcaster: IInMemoryEventBroadcaster = Depends(
            Provide[Container.attendee_broadcaster]
        ),
    ) -> Self:
        return cls(
            uow=uow,
            ticket_query_repo=ticket_query_repo,
            event_lock_registry=event_lock_registry,
            broadcaster=broadcaster,
            max_retries=settings.BOOKING_MAX_RETRIES,
        )

    @Logger.io
    async def execute(self, *, user_id: int, ticket_id: int) -> TicketDetail:
        with self.tracer.start_as_current_span(
            'use_case.cancel_ticket',
            attributes={'ticket.id': ticket_id, 'user.id': user_id},
        ):
            # Lock key comes from the ticket; its state is re-read under the lock
            ticket = await self.ticket_query_repo.get_by_id_for_user(
                ticket_id=ticket_id, user_id=user_id
            )
            if not ticket or not ticket.is_active:
                metrics.record_cancel(result='not_found')
                raise NotFoundError(TICKET_NOT_FOUND)

            try:
                async with self.event_lock_registry.hold(event_id=ticket.event_id):
                    event, cancelled = await self._cancel_with_retry(
                        user_id=user_id, ticket_id=ticket_id
                    )
                    if event is not None:
                        await self._broadcast(event=event)
            except Exception as e:
                metrics.record_cancel(result=booking_result_label(e))
                raise

            metrics.record_cancel(result='success')
            if event is not None:
                metrics.update_event_attendees(
                    event_id=ticket.event_id, current=event.current_attendees
                )
            Logger.base.info(
                f'🗑️ [CANCEL] User {user_id} cancelled ticket {cancelled.ticket_number} '
                f'for event {ticket.event_id}'
            )

            return TicketDetail(
                ticket=cancelled,
                event=EventSummary.from_event(event) if event is not None else None,
            )

    async def _cancel_with_retry(
        self, *, user_id: int, ticket_id: int
    ) -> Tuple[Optional[EventEntity], TicketEntity]:
        for attempt in range(1, self.max_retries + 1):
            result = await self._cancel_once(user_id=user_id, ticket_id=ticket_id)
            if result is not None:
                return result

            metrics.record_cas_retry(operation='cancel')
            Logger.base.warning(
                f'🔁 [CANCEL] Ticket {ticket_id} event changed concurrently '
                f'(attempt {attempt}/{self.max_retries})'
            )

        raise ConflictError('Event was updated concurrently, please retry')

    async def _cancel_once(
        self, *, user_id: int, ticket_id: int
    ) -> Optional[Tuple[Optional[EventEntity], TicketEntity]]:
        async with self.uow:
            ticket = await self.uow.ticket_command_repo.get_active_by_id_for_user(
                ticket_id=ticket_id, user_id=user_id
            )
            if not ticket:
                raise NotFoundError(TICKET_NOT_FOUND)

            cancelled = await self.uow.ticket_command_repo.update_status(ticket=ticket.cancel())

            updated_event: Optional[EventEntity] = None
            event = await self.uow.event_command_repo.get_by_id(event_id=ticket.event_id)
            if event is not None:
                updated_event = event.remove_attendee(user_id)
                if not await self.uow.event_command_repo.update_attendees(
                    event=updated_event, expected_version=event.version
                ):
                    return None
                updated_event = attrs.evolve(updated_event, version=event.version + 1)

            await self.uow.commit()

        return updated_event, cancelled

    async def _broadcast(self, *, event: EventEntity) -> None:
        message = AttendeeUpdate(
            event_id=event.id or 0,
            current_attendees=event.current_attendees,
            attendees=event.attendees,
        ).to_message()
        try:
            await self.broadcaster.broadcast(event_id=event.id or 0, message=message)
        except Exception as e:
            Logger.base.warning(f'⚠️ [CANCEL] Broadcast failed for event {event.id}: {e}')
