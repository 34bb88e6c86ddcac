"""Ticket with the event and holder summaries shown in ticket lists."""

from typing import Optional

import attrs

from src.service.eventhub.domain.entity.ticket_entity import TicketEntity
from src.service.eventhub.domain.value_object.summary import EventSummary, UserSummary


@attrs.define(frozen=True)
class TicketDetail:
    ticket: TicketEntity
    event: Optional[EventSummary] = None  # None once the event has been deleted
    user: Optional[UserSummary] = None
