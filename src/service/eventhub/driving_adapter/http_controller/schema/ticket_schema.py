"""
Ticket API Schemas
"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from src.service.eventhub.app.dto.ticket_detail import TicketDetail
from src.service.eventhub.domain.enum.ticket_status import TicketStatus
from src.service.eventhub.domain.value_object.summary import EventSummary
from src.service.eventhub.driving_adapter.http_controller.schema.camel_model import CamelModel
from src.service.eventhub.driving_adapter.http_controller.schema.user_schema import (
    UserSummaryResponse,
)


class BookTicketRequest(CamelModel):
    event_id: int = Field(..., gt=0)

    model_config = CamelModel.model_config | {'json_schema_extra': {'example': {'eventId': 1}}}


class EventSummaryResponse(CamelModel):
    id: int
    title: str
    event_date: date
    event_time: str
    location: str

    @classmethod
    def from_summary(cls, summary: EventSummary) -> 'EventSummaryResponse':
        return cls(
            id=summary.id,
            title=summary.title,
            event_date=summary.event_date,
            event_time=summary.event_time,
            location=summary.location,
        )


class TicketResponse(CamelModel):
    id: int
    ticket_number: str
    status: TicketStatus
    event_id: int
    user_id: int
    booked_at: Optional[datetime] = None
    event: Optional[EventSummaryResponse] = None
    user: Optional[UserSummaryResponse] = None

    @classmethod
    def from_detail(cls, detail: TicketDetail) -> 'TicketResponse':
        ticket = detail.ticket
        return cls(
            id=ticket.id or 0,
            ticket_number=ticket.ticket_number,
            status=ticket.status,
            event_id=ticket.event_id,
            user_id=ticket.user_id,
            booked_at=ticket.booked_at,
            event=EventSummaryResponse.from_summary(detail.event) if detail.event else None,
            user=UserSummaryResponse.from_summary(detail.user) if detail.user else None,
        )


class CancelTicketResponse(CamelModel):
    message: str
    ticket: TicketResponse
