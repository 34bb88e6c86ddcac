"""EventHub Domain Enums"""

from src.service.eventhub.domain.enum.event_category import EventCategory
from src.service.eventhub.domain.enum.event_status import EventStatus
from src.service.eventhub.domain.enum.ticket_status import TicketStatus

__all__ = ['EventCategory', 'EventStatus', 'TicketStatus']
