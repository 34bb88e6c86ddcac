"""
Unit tests for CancelTicketUseCase

Test Coverage:
1. Successful cancel: ticket kept as cancelled, attendee removed, broadcast
2. Missing, foreign or inactive ticket -> NotFoundError
3. Ticket whose event was deleted
4. Book then cancel restores the event state
"""

from datetime import date
from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.state.event_lock import EventLockRegistry
from src.service.eventhub.app.command.book_ticket_use_case import BookTicketUseCase
from src.service.eventhub.app.command.cancel_ticket_use_case import CancelTicketUseCase
from src.service.eventhub.domain.entity.event_entity import EventEntity
from src.service.eventhub.domain.entity.ticket_entity import TicketEntity
from src.service.eventhub.domain.enum.ticket_status import TicketStatus
from test.shared.fake_unit_of_work import FakeUnitOfWork, InMemoryStore


pytestmark = pytest.mark.unit

EVENT_ID = 7
USER_ID = 10
TICKET_ID = 5


def make_event(*, attendees=None, version: int = 2) -> EventEntity:
    return EventEntity(
        title='Summer Jazz Night',
        description='Open air jazz',
        category='music',
        event_date=date(2099, 7, 1),
        event_time='19:30',
        location='Riverside Park',
        owner_id=1,
        max_attendees=2,
        attendees=list(attendees or []),
        id=EVENT_ID,
        version=version,
    )


def make_ticket(*, status: TicketStatus = TicketStatus.ACTIVE) -> TicketEntity:
    ticket = TicketEntity.create(event_id=EVENT_ID, user_id=USER_ID)
    return attrs.evolve(ticket, id=TICKET_ID, status=status)


class MockUnitOfWork:
    def __init__(self) -> None:
        self.event_command_repo = AsyncMock()
        self.ticket_command_repo = AsyncMock()
        self.commit = AsyncMock()

    async def __aenter__(self) -> 'MockUnitOfWork':
        return self

    async def __aexit__(self, *args) -> None:
        return None


class TestCancelTicket:
    def setup_method(self):
        self.uow = MockUnitOfWork()
        self.ticket_query_repo = AsyncMock()
        self.broadcaster = AsyncMock()
        self.lock_registry = EventLockRegistry(timeout_seconds=1)

        ticket = make_ticket()
        self.ticket_query_repo.get_by_id_for_user.return_value = ticket
        self.uow.ticket_command_repo.get_active_by_id_for_user.return_value = ticket
        self.uow.ticket_command_repo.update_status.side_effect = lambda *, ticket: ticket
        self.uow.event_command_repo.get_by_id.return_value = make_event(attendees=[USER_ID, 11])
        self.uow.event_command_repo.update_attendees.return_value = True

        self.use_case = CancelTicketUseCase(
            uow=self.uow,
            ticket_query_repo=self.ticket_query_repo,
            event_lock_registry=self.lock_registry,
            broadcaster=self.broadcaster,
            max_retries=3,
        )

    @pytest.mark.asyncio
    async def test_cancel_ticket_success(self):
        # When: Cancelling an active ticket
        result = await self.use_case.execute(user_id=USER_ID, ticket_id=TICKET_ID)

        # Then: The ticket is kept with status cancelled
        assert result.ticket.id == TICKET_ID
        assert result.ticket.status == TicketStatus.CANCELLED
        saved = self.uow.ticket_command_repo.update_status.await_args.kwargs['ticket']
        assert saved.status == TicketStatus.CANCELLED

        # And: The user left the attendee set under a version check
        kwargs = self.uow.event_command_repo.update_attendees.await_args.kwargs
        assert kwargs['event'].attendees == [11]
        assert kwargs['expected_version'] == 2
        self.uow.commit.assert_awaited_once()

        # And: Viewers are told about the new count
        self.broadcaster.broadcast.assert_awaited_once_with(
            event_id=EVENT_ID,
            message={
                'type': 'ATTENDEE_UPDATE',
                'eventId': EVENT_ID,
                'currentAttendees': 1,
                'attendees': [11],
            },
        )
        assert result.event.id == EVENT_ID

    @pytest.mark.asyncio
    async def test_missing_ticket_raises_not_found(self):
        # Given: No ticket with this id for this user
        self.ticket_query_repo.get_by_id_for_user.return_value = None

        # When/Then
        with pytest.raises(NotFoundError, match='Ticket not found'):
            await self.use_case.execute(user_id=USER_ID, ticket_id=TICKET_ID)

        self.uow.ticket_command_repo.update_status.assert_not_awaited()

    @pytest.mark.parametrize('status', [TicketStatus.CANCELLED, TicketStatus.USED])
    @pytest.mark.asyncio
    async def test_inactive_ticket_raises_not_found(self, status):
        self.ticket_query_repo.get_by_id_for_user.return_value = make_ticket(status=status)

        with pytest.raises(NotFoundError):
            await self.use_case.execute(user_id=USER_ID, ticket_id=TICKET_ID)

        self.uow.commit.assert_not_awaited()
        self.broadcaster.broadcast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ticket_cancelled_while_waiting_for_lock(self):
        # Given: The ticket is no longer active once re-read under the lock
        self.uow.ticket_command_repo.get_active_by_id_for_user.return_value = None

        # When/Then
        with pytest.raises(NotFoundError):
            await self.use_case.execute(user_id=USER_ID, ticket_id=TICKET_ID)

        self.uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancel_ticket_of_deleted_event(self):
        # Given: The event row is gone
        self.uow.event_command_repo.get_by_id.return_value = None

        # When
        result = await self.use_case.execute(user_id=USER_ID, ticket_id=TICKET_ID)

        # Then: The ticket is still cancelled, nothing to broadcast
        assert result.ticket.status == TicketStatus.CANCELLED
        assert result.event is None
        self.uow.event_command_repo.update_attendees.assert_not_awaited()
        self.uow.commit.assert_awaited_once()
        self.broadcaster.broadcast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_retries_exhausted_raises_conflict(self):
        self.uow.event_command_repo.update_attendees.return_value = False

        with pytest.raises(ConflictError):
            await self.use_case.execute(user_id=USER_ID, ticket_id=TICKET_ID)

        assert self.uow.event_command_repo.update_attendees.await_count == 3
        self.uow.commit.assert_not_awaited()


class TestBookCancelRoundTrip:
    @pytest.mark.asyncio
    async def test_cancel_restores_event_state(self):
        # Given: An event with one attendee
        store = InMemoryStore()
        store.add_event(make_event(attendees=[11], version=0))
        lock_registry = EventLockRegistry(timeout_seconds=1)
        broadcaster = AsyncMock()
        user_query_repo = AsyncMock()
        user_query_repo.get_summaries.return_value = {}
        before = store.events[EVENT_ID]

        booked = await BookTicketUseCase(
            uow=FakeUnitOfWork(store),
            event_lock_registry=lock_registry,
            broadcaster=broadcaster,
            user_query_repo=user_query_repo,
        ).execute(user_id=USER_ID, event_id=EVENT_ID)

        ticket_query_repo = AsyncMock()
        ticket_query_repo.get_by_id_for_user.side_effect = (
            lambda *, ticket_id, user_id: store.tickets.get(ticket_id)
        )

        # When: The same user cancels the ticket
        await CancelTicketUseCase(
            uow=FakeUnitOfWork(store),
            ticket_query_repo=ticket_query_repo,
            event_lock_registry=lock_registry,
            broadcaster=broadcaster,
        ).execute(user_id=USER_ID, ticket_id=booked.ticket.id)

        # Then: Attendance is back to where it started, the ticket row remains
        after = store.events[EVENT_ID]
        assert after.attendees == before.attendees
        assert after.current_attendees == before.current_attendees
        assert after.version == before.version + 2
        assert store.tickets[booked.ticket.id].status == TicketStatus.CANCELLED
