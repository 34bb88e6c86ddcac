from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from src.service.eventhub.domain.entity.event_entity import EventEntity
from src.service.eventhub.domain.value_object.summary import EventSummary


class IEventQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def list_events(
        self,
        *,
        category: Optional[str] = None,
        search: Optional[str] = None,
        sort: str = '-created_at',
    ) -> List[EventEntity]:
        pass

    @abstractmethod
    async def list_by_owner(self, *, owner_id: int) -> List[EventEntity]:
        pass

    @abstractmethod
    async def get_summaries(self, *, event_ids: List[int]) -> Dict[int, EventSummary]:
        pass
