"""Owner dashboard DTOs: per-event stats, grouping and activity summary."""

from typing import List, Optional

import attrs

from src.service.eventhub.app.dto.event_detail import EventDetail


@attrs.define(frozen=True)
class OwnerEventStats:
    total_attendees: int
    is_full: bool
    spots_left: int
    status: str  # upcoming/completed


@attrs.define(frozen=True)
class OwnerEventView:
    detail: EventDetail
    stats: OwnerEventStats


@attrs.define(frozen=True)
class OwnerDashboard:
    events: List[OwnerEventView]
    upcoming: List[OwnerEventView]
    completed: List[OwnerEventView]

    @property
    def total_attendees(self) -> int:
        return sum(view.stats.total_attendees for view in self.events)


@attrs.define(frozen=True)
class OwnerEventSummary:
    total_events: int
    upcoming_events: int
    past_events: int
    total_attendees: int
    average_attendees: int
    most_popular_category: Optional[str]
