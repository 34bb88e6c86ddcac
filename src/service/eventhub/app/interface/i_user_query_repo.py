from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from src.service.eventhub.domain.entity.user_entity import UserEntity
from src.service.eventhub.domain.value_object.summary import UserSummary


class IUserQueryRepo(ABC):
    """User Query Repository Abstract Interface - Handles read operations"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def verify_password(self, email: str, plain_password: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_summaries(self, user_ids: List[int]) -> Dict[int, UserSummary]:
        pass
