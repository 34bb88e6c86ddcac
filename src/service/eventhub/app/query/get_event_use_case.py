from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.dto.event_detail import EventDetail
from src.service.eventhub.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.eventhub.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.eventhub.domain.entity.event_entity import EventEntity


async def build_event_details(
    *, events: List[EventEntity], user_query_repo: IUserQueryRepo
) -> List[EventDetail]:
    """Resolve owner and attendee summaries for many events with one user lookup"""
    user_ids = {event.owner_id for event in events}
    for event in events:
        user_ids.update(event.attendees)
    summaries = await user_query_repo.get_summaries(sorted(user_ids))

    return [
        EventDetail(
            event=event,
            owner=summaries.get(event.owner_id),
            attendees=[summaries[user_id] for user_id in event.attendees if user_id in summaries],
        )
        for event in events
    ]


class GetEventUseCase:
    def __init__(
        self, *, event_query_repo: IEventQueryRepo, user_query_repo: IUserQueryRepo
    ) -> None:
        self.event_query_repo = event_query_repo
        self.user_query_repo = user_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo, user_query_repo=user_query_repo)

    @Logger.io
    async def get_event(self, *, event_id: int) -> EventDetail:
        Logger.base.info(f'🎫 [GET_EVENT] Loading event {event_id}')

        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            Logger.base.warning(f'⚠️ [GET_EVENT] Event {event_id} not found')
            raise NotFoundError('Event not found')

        [detail] = await build_event_details(events=[event], user_query_repo=self.user_query_repo)
        return detail
