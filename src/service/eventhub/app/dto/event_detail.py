"""Event with owner and attendee summaries resolved."""

from typing import List, Optional

import attrs

from src.service.eventhub.domain.entity.event_entity import EventEntity
from src.service.eventhub.domain.value_object.summary import UserSummary


@attrs.define(frozen=True)
class EventDetail:
    event: EventEntity
    owner: Optional[UserSummary] = None
    attendees: List[UserSummary] = attrs.field(factory=list)
