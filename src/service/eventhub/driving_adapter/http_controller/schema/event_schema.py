"""
Event API Schemas
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from src.platform.config.core_setting import settings
from src.service.eventhub.app.dto.event_attendees import EventAttendees
from src.service.eventhub.app.dto.event_detail import EventDetail
from src.service.eventhub.app.dto.owner_dashboard import (
    OwnerDashboard,
    OwnerEventSummary,
    OwnerEventView,
)
from src.service.eventhub.domain.entity.event_entity import EventEntity
from src.service.eventhub.domain.enum.event_category import EventCategory
from src.service.eventhub.domain.enum.event_status import EventStatus
from src.service.eventhub.domain.value_object.attendee_stats import AttendeeStats
from src.service.eventhub.driving_adapter.http_controller.schema.camel_model import CamelModel
from src.service.eventhub.driving_adapter.http_controller.schema.user_schema import (
    UserSummaryResponse,
)


EVENT_TIME_PATTERN = r'^([01]\d|2[0-3]):[0-5]\d$'


# ============================ Requests ============================


class EventCreateRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: EventCategory
    event_date: date
    event_time: str = Field(..., pattern=EVENT_TIME_PATTERN)
    location: str = Field(..., min_length=1, max_length=255)
    max_attendees: int = Field(default=settings.DEFAULT_MAX_ATTENDEES, gt=0)
    ticket_price: int = Field(default=0, ge=0)

    model_config = CamelModel.model_config | {
        'json_schema_extra': {
            'example': {
                'title': 'Summer Jazz Night',
                'description': 'Open air jazz by the river',
                'category': 'music',
                'eventDate': '2030-07-01',
                'eventTime': '19:30',
                'location': 'Riverside Park',
                'maxAttendees': 200,
                'ticketPrice': 25,
            }
        }
    }


class EventUpdateRequest(CamelModel):
    """Capacity, owner and attendance are not editable; unknown keys are rejected"""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[EventCategory] = None
    event_date: Optional[date] = None
    event_time: Optional[str] = Field(default=None, pattern=EVENT_TIME_PATTERN)
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)
    ticket_price: Optional[int] = Field(default=None, ge=0)
    status: Optional[EventStatus] = None

    model_config = ConfigDict(**CamelModel.model_config, extra='forbid')


# ============================ Responses ============================


class EventResponse(CamelModel):
    id: int
    title: str
    description: str
    category: EventCategory
    event_date: date
    event_time: str
    location: str
    max_attendees: int
    current_attendees: int
    ticket_price: int
    status: EventStatus
    owner_id: int
    attendees: List[int]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, event: EventEntity) -> 'EventResponse':
        return cls(
            id=event.id or 0,
            title=event.title,
            description=event.description,
            category=event.category,
            event_date=event.event_date,
            event_time=event.event_time,
            location=event.location,
            max_attendees=event.max_attendees,
            current_attendees=event.current_attendees,
            ticket_price=event.ticket_price,
            status=event.status,
            owner_id=event.owner_id,
            attendees=list(event.attendees),
            created_at=event.created_at,
            updated_at=event.updated_at,
        )


class EventDetailResponse(EventResponse):
    owner: Optional[UserSummaryResponse] = None
    attendee_details: List[UserSummaryResponse] = []

    @classmethod
    def from_detail(cls, detail: EventDetail) -> 'EventDetailResponse':
        return cls(
            **EventResponse.from_entity(detail.event).model_dump(),
            owner=UserSummaryResponse.from_summary(detail.owner) if detail.owner else None,
            attendee_details=[
                UserSummaryResponse.from_summary(attendee) for attendee in detail.attendees
            ],
        )


class AttendeeStatsResponse(CamelModel):
    current: int
    maximum: int
    available: int

    @classmethod
    def from_stats(cls, stats: AttendeeStats) -> 'AttendeeStatsResponse':
        return cls(**stats.to_dict())


class EventAttendeesResponse(CamelModel):
    attendees: List[UserSummaryResponse]
    stats: AttendeeStatsResponse

    @classmethod
    def from_dto(cls, event_attendees: EventAttendees) -> 'EventAttendeesResponse':
        return cls(
            attendees=[
                UserSummaryResponse.from_summary(attendee)
                for attendee in event_attendees.attendees
            ],
            stats=AttendeeStatsResponse.from_stats(event_attendees.stats),
        )


class DeleteEventResponse(CamelModel):
    message: str


# ============================ Owner dashboard ============================


class OwnerEventStatsResponse(CamelModel):
    total_attendees: int
    is_full: bool
    spots_left: int
    status: str


class OwnerEventResponse(EventDetailResponse):
    stats: OwnerEventStatsResponse

    @classmethod
    def from_view(cls, view: OwnerEventView) -> 'OwnerEventResponse':
        return cls(
            **EventDetailResponse.from_detail(view.detail).model_dump(),
            stats=OwnerEventStatsResponse(
                total_attendees=view.stats.total_attendees,
                is_full=view.stats.is_full,
                spots_left=view.stats.spots_left,
                status=view.stats.status,
            ),
        )


class OwnerEventGroupsResponse(CamelModel):
    upcoming: List[OwnerEventResponse]
    completed: List[OwnerEventResponse]


class OwnerDashboardStatsResponse(CamelModel):
    total: int
    upcoming: int
    completed: int
    total_attendees: int


class OwnerDashboardResponse(CamelModel):
    events: List[OwnerEventResponse]
    grouped: OwnerEventGroupsResponse
    stats: OwnerDashboardStatsResponse

    @classmethod
    def from_dashboard(cls, dashboard: OwnerDashboard) -> 'OwnerDashboardResponse':
        return cls(
            events=[OwnerEventResponse.from_view(view) for view in dashboard.events],
            grouped=OwnerEventGroupsResponse(
                upcoming=[OwnerEventResponse.from_view(view) for view in dashboard.upcoming],
                completed=[OwnerEventResponse.from_view(view) for view in dashboard.completed],
            ),
            stats=OwnerDashboardStatsResponse(
                total=len(dashboard.events),
                upcoming=len(dashboard.upcoming),
                completed=len(dashboard.completed),
                total_attendees=dashboard.total_attendees,
            ),
        )


class OwnerEventSummaryResponse(CamelModel):
    total_events: int
    upcoming_events: int
    past_events: int
    total_attendees: int
    average_attendees: int
    most_popular_category: Optional[str] = None

    @classmethod
    def from_summary(cls, summary: OwnerEventSummary) -> 'OwnerEventSummaryResponse':
        return cls(
            total_events=summary.total_events,
            upcoming_events=summary.upcoming_events,
            past_events=summary.past_events,
            total_attendees=summary.total_attendees,
            average_attendees=summary.average_attendees,
            most_popular_category=summary.most_popular_category,
        )
