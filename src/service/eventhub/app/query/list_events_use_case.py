from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.eventhub.domain.entity.event_entity import EventEntity


class ListEventsUseCase:
    def __init__(self, *, event_query_repo: IEventQueryRepo) -> None:
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo)

    @Logger.io
    async def list_events(
        self,
        *,
        category: Optional[str] = None,
        search: Optional[str] = None,
        sort: str = '-created_at',
    ) -> List[EventEntity]:
        return await self.event_query_repo.list_events(category=category, search=search, sort=sort)

    @Logger.io
    async def list_by_owner(self, *, owner_id: int) -> List[EventEntity]:
        return await self.event_query_repo.list_by_owner(owner_id=owner_id)
