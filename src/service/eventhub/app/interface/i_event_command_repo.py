from abc import ABC, abstractmethod
from typing import Optional

from src.service.eventhub.domain.entity.event_entity import EventEntity


class IEventCommandRepo(ABC):
    """Event write operations, bound to a unit-of-work session"""

    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def create(self, *, event: EventEntity) -> EventEntity:
        pass

    @abstractmethod
    async def update_attendees(self, *, event: EventEntity, expected_version: int) -> bool:
        """
        Persist the attendee set and its derived count if the stored version still
        equals expected_version; the version is incremented on success.

        Returns:
            False when another writer changed the event first
        """
        pass

    @abstractmethod
    async def update_details(self, *, event: EventEntity) -> EventEntity:
        pass

    @abstractmethod
    async def delete(self, *, event_id: int, expected_version: int) -> bool:
        pass
