from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.eventhub.domain.entity.ticket_entity import TicketEntity


class ITicketQueryRepo(ABC):
    @abstractmethod
    async def list_by_user(self, *, user_id: int) -> List[TicketEntity]:
        """Newest booking first"""
        pass

    @abstractmethod
    async def get_by_id_for_user(self, *, ticket_id: int, user_id: int) -> Optional[TicketEntity]:
        pass
