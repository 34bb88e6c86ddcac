from abc import ABC, abstractmethod
from typing import Optional

from src.service.eventhub.domain.entity.ticket_entity import TicketEntity


class ITicketCommandRepo(ABC):
    """Ticket write operations, bound to a unit-of-work session"""

    @abstractmethod
    async def get_active_ticket(self, *, event_id: int, user_id: int) -> Optional[TicketEntity]:
        pass

    @abstractmethod
    async def get_active_by_id_for_user(
        self, *, ticket_id: int, user_id: int
    ) -> Optional[TicketEntity]:
        pass

    @abstractmethod
    async def create(self, *, ticket: TicketEntity) -> TicketEntity:
        """
        Raises:
            DuplicateBookingError: an active ticket for the same (event, user) exists
        """
        pass

    @abstractmethod
    async def update_status(self, *, ticket: TicketEntity) -> TicketEntity:
        pass
