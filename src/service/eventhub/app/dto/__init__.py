"""Application layer DTOs"""

from src.service.eventhub.app.dto.event_attendees import EventAttendees
from src.service.eventhub.app.dto.event_detail import EventDetail
from src.service.eventhub.app.dto.owner_dashboard import (
    OwnerDashboard,
    OwnerEventStats,
    OwnerEventSummary,
    OwnerEventView,
)
from src.service.eventhub.app.dto.ticket_detail import TicketDetail

__all__ = [
    'EventAttendees',
    'EventDetail',
    'OwnerDashboard',
    'OwnerEventStats',
    'OwnerEventSummary',
    'OwnerEventView',
    'TicketDetail',
]
