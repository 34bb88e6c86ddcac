"""
In-memory Unit of Work for use case tests

Writes are staged per `async with` block and only become visible to other
units of work after commit(). update_attendees performs the same version
check as the SQL repository.
"""

from typing import Dict, List, Optional

import attrs

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DuplicateBookingError
from src.service.eventhub.domain.entity.event_entity import EventEntity
from src.service.eventhub.domain.entity.ticket_entity import TicketEntity


class InMemoryStore:
    def __init__(self) -> None:
        self.events: Dict[int, EventEntity] = {}
        self.tickets: Dict[int, TicketEntity] = {}
        self._next_ticket_id = 1

    def add_event(self, event: EventEntity) -> EventEntity:
        self.events[event.id] = event
        return event

    def next_ticket_id(self) -> int:
        ticket_id = self._next_ticket_id
        self._next_ticket_id += 1
        return ticket_id


class _FakeEventCommandRepo:
    def __init__(self, uow: 'FakeUnitOfWork') -> None:
        self.uow = uow

    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        return self.uow.staged_events.get(event_id) or self.uow.store.events.get(event_id)

    async def update_attendees(self, *, event: EventEntity, expected_version: int) -> bool:
        current = self.uow.store.events.get(event.id)
        if current is None or current.version != expected_version:
            return False
        self.uow.staged_events[event.id] = attrs.evolve(event, version=expected_version + 1)
        return True


class _FakeTicketCommandRepo:
    def __init__(self, uow: 'FakeUnitOfWork') -> None:
        self.uow = uow

    def _all(self) -> List[TicketEntity]:
        merged = {**self.uow.store.tickets, **self.uow.staged_tickets}
        return list(merged.values())

    async def get_active_ticket(self, *, event_id: int, user_id: int) -> Optional[TicketEntity]:
        for ticket in self._all():
            if ticket.event_id == event_id and ticket.user_id == user_id and ticket.is_active:
                return ticket
        return None

    async def get_active_by_id_for_user(
        self, *, ticket_id: int, user_id: int
    ) -> Optional[TicketEntity]:
        for ticket in self._all():
            if ticket.id == ticket_id and ticket.user_id == user_id and ticket.is_active:
                return ticket
        return None

    async def create(self, *, ticket: TicketEntity) -> TicketEntity:
        if await self.get_active_ticket(event_id=ticket.event_id, user_id=ticket.user_id):
            raise DuplicateBookingError()
        created = attrs.evolve(ticket, id=self.uow.store.next_ticket_id())
        self.uow.staged_tickets[created.id] = created
        return created

    async def update_status(self, *, ticket: TicketEntity) -> TicketEntity:
        self.uow.staged_tickets[ticket.id] = ticket
        return ticket


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.staged_events: Dict[int, EventEntity] = {}
        self.staged_tickets: Dict[int, TicketEntity] = {}
        self.commits = 0
        self.event_command_repo = _FakeEventCommandRepo(self)
        self.ticket_command_repo = _FakeTicketCommandRepo(self)

    async def _commit(self) -> None:
        self.store.events.update(self.staged_events)
        self.store.tickets.update(self.staged_tickets)
        self.staged_events = {}
        self.staged_tickets = {}
        self.commits += 1

    async def rollback(self) -> None:
        self.staged_events = {}
        self.staged_tickets = {}
