from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.dto.event_attendees import EventAttendees
from src.service.eventhub.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.eventhub.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.eventhub.domain.value_object.attendee_stats import AttendeeStats


class ListEventAttendeesUseCase:
    """Attendee projection, recomputed from the stored event on every call"""

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
    async def execute(self, *, event_id: int) -> EventAttendees:
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')

        summaries = await self.user_query_repo.get_summaries(event.attendees)
        return EventAttendees(
            event_id=event_id,
            # Booking order; ids without a user row are skipped
            attendees=[summaries[user_id] for user_id in event.attendees if user_id in summaries],
            stats=AttendeeStats(current=event.current_attendees, maximum=event.max_attendees),
        )
