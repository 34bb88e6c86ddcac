from datetime import date, datetime, timezone
import re
from typing import Any, List, Optional

import attrs

from src.platform.exception.exceptions import (
    CapacityExceededError,
    ConflictError,
    DomainError,
    ForbiddenError,
)
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.domain.enum.event_category import EventCategory
from src.service.eventhub.domain.enum.event_status import EventStatus


_EVENT_TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')

# Owner-editable fields; capacity, owner and attendance are not among them
EDITABLE_FIELDS = frozenset(
    {
        'title',
        'description',
        'category',
        'event_date',
        'event_time',
        'location',
        'ticket_price',
        'status',
    }
)


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise DomainError(f'Event {attribute.name} cannot be empty')


def _validate_event_time(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not _EVENT_TIME_PATTERN.match(value or ''):
        raise DomainError('Event time must use HH:MM format')


def _validate_max_attendees(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value <= 0:
        raise DomainError('Maximum attendees must be a positive integer')


def _validate_ticket_price(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value < 0:
        raise DomainError('Ticket price cannot be negative')


def _validate_attendees(instance: object, attribute: attrs.Attribute, value: List[int]) -> None:
    if len(set(value)) != len(value):
        raise DomainError('Attendee set cannot contain duplicates')


@attrs.define
class EventEntity:
    """
    Event record with its attendee set.

    current_attendees is derived from the attendee list; add_attendee and
    remove_attendee are the only ways attendance changes.
    """

    title: str = attrs.field(validator=_validate_non_empty_string)
    description: str = attrs.field(validator=_validate_non_empty_string)
    category: EventCategory = attrs.field(converter=EventCategory)
    event_date: date
    event_time: str = attrs.field(validator=_validate_event_time)
    location: str = attrs.field(validator=_validate_non_empty_string)
    owner_id: int
    max_attendees: int = attrs.field(default=100, validator=_validate_max_attendees)
    ticket_price: int = attrs.field(default=0, validator=_validate_ticket_price)
    status: EventStatus = attrs.field(default=EventStatus.UPCOMING, converter=EventStatus)
    attendees: List[int] = attrs.field(factory=list, validator=_validate_attendees)
    id: Optional[int] = None
    version: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        title: str,
        description: str,
        category: EventCategory | str,
        event_date: date,
        event_time: str,
        location: str,
        owner_id: int,
        max_attendees: int = 100,
        ticket_price: int = 0,
    ) -> 'EventEntity':
        now = datetime.now(timezone.utc)
        return cls(
            title=title,
            description=description,
            category=EventCategory(category),
            event_date=event_date,
            event_time=event_time,
            location=location,
            owner_id=owner_id,
            max_attendees=max_attendees,
            ticket_price=ticket_price,
            status=EventStatus.UPCOMING,
            attendees=[],
            created_at=now,
            updated_at=now,
        )

    # ========== Attendance ==========

    @property
    def current_attendees(self) -> int:
        return len(self.attendees)

    @property
    def available(self) -> int:
        return max(self.max_attendees - self.current_attendees, 0)

    @property
    def is_full(self) -> bool:
        return self.current_attendees >= self.max_attendees

    def has_attendee(self, user_id: int) -> bool:
        return user_id in self.attendees

    def validate_has_capacity(self) -> None:
        if self.is_full:
            raise CapacityExceededError()

    def add_attendee(self, user_id: int) -> 'EventEntity':
        if self.has_attendee(user_id):
            return self
        self.validate_has_capacity()
        return attrs.evolve(
            self,
            attendees=[*self.attendees, user_id],
            updated_at=datetime.now(timezone.utc),
        )

    def remove_attendee(self, user_id: int) -> 'EventEntity':
        return attrs.evolve(
            self,
            attendees=[attendee for attendee in self.attendees if attendee != user_id],
            updated_at=datetime.now(timezone.utc),
        )

    # ========== Owner operations ==========

    def is_owned_by(self, user_id: Optional[int]) -> bool:
        return user_id is not None and self.owner_id == user_id

    @Logger.io
    def update_details(self, **changes: Any) -> 'EventEntity':
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise DomainError(f'Cannot update fields: {", ".join(sorted(unknown))}')

        updates = {key: value for key, value in changes.items() if value is not None}
        if not updates:
            return self
        return attrs.evolve(self, **updates, updated_at=datetime.now(timezone.utc))

    def validate_can_be_managed_by(self, *, user_id: Optional[int], is_admin: bool) -> None:
        if not (self.is_owned_by(user_id) or is_admin):
            raise ForbiddenError('Not authorized to modify this event')

    def validate_can_be_deleted(self) -> None:
        if self.attendees:
            raise ConflictError('Cannot delete an event with active attendees')

    def lifecycle_status(self, *, today: date) -> str:
        """Dashboard grouping: completed once the event date has passed"""
        return 'completed' if self.event_date < today else 'upcoming'
