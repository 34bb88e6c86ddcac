from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.eventhub.domain.value_object.attendee_stats import AttendeeStats


class GetAttendeeStatsUseCase:
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
    async def execute(self, *, event_id: int) -> AttendeeStats:
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')

        return AttendeeStats(current=event.current_attendees, maximum=event.max_attendees)
