"""Attendee projection of one event."""

from typing import List

import attrs

from src.service.eventhub.domain.value_object.attendee_stats import AttendeeStats
from src.service.eventhub.domain.value_object.summary import UserSummary


@attrs.define(frozen=True)
class EventAttendees:
    event_id: int
    attendees: List[UserSummary]
    stats: AttendeeStats
