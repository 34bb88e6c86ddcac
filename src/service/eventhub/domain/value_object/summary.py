"""Read-side projections attached to tickets and events for display"""

from datetime import date
from typing import TYPE_CHECKING

import attrs


if TYPE_CHECKING:
    from src.service.eventhub.domain.entity.event_entity import EventEntity


@attrs.frozen
class UserSummary:
    id: int
    name: str
    email: str


@attrs.frozen
class EventSummary:
    id: int
    title: str
    event_date: date
    event_time: str
    location: str

    @classmethod
    def from_event(cls, event: 'EventEntity') -> 'EventSummary':
        return cls(
            id=event.id or 0,
            title=event.title,
            event_date=event.event_date,
            event_time=event.event_time,
            location=event.location,
        )
