from datetime import datetime, timezone
from typing import Optional

import attrs
from uuid_utils import uuid7

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.domain.enum.ticket_status import TicketStatus


TICKET_NUMBER_PREFIX = 'TKT-'


def generate_ticket_number() -> str:
    """TKT- followed by the 32 hex digits of a fresh UUIDv7 (time-ordered, never reused)"""
    return f'{TICKET_NUMBER_PREFIX}{uuid7().hex.upper()}'


@attrs.define
class TicketEntity:
    event_id: int
    user_id: int
    ticket_number: str
    status: TicketStatus = attrs.field(default=TicketStatus.ACTIVE, converter=TicketStatus)
    booked_at: Optional[datetime] = None
    id: Optional[int] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(cls, *, event_id: int, user_id: int) -> 'TicketEntity':
        now = datetime.now(timezone.utc)
        return cls(
            event_id=event_id,
            user_id=user_id,
            ticket_number=generate_ticket_number(),
            status=TicketStatus.ACTIVE,
            booked_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        return self.status == TicketStatus.ACTIVE

    def _validate_active(self, action: str) -> None:
        if self.status == TicketStatus.CANCELLED:
            raise DomainError(f'Cannot {action} a cancelled ticket')
        if self.status == TicketStatus.USED:
            raise DomainError(f'Cannot {action} a used ticket')

    @Logger.io
    def cancel(self) -> 'TicketEntity':
        self._validate_active('cancel')
        return attrs.evolve(
            self, status=TicketStatus.CANCELLED, updated_at=datetime.now(timezone.utc)
        )

    @Logger.io
    def mark_used(self) -> 'TicketEntity':
        self._validate_active('use')
        return attrs.evolve(self, status=TicketStatus.USED, updated_at=datetime.now(timezone.utc))
