from enum import StrEnum


class TicketStatus(StrEnum):
    """Ticket lifecycle: ACTIVE -> CANCELLED | USED, both terminal"""

    ACTIVE = 'active'
    USED = 'used'
    CANCELLED = 'cancelled'
