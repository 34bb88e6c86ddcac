"""
Owner dashboard queries: the caller's events with per-event stats, grouped by
upcoming/completed, plus an activity summary.
"""

from collections import Counter
from datetime import date
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.dto.event_detail import EventDetail
from src.service.eventhub.app.dto.owner_dashboard import (
    OwnerDashboard,
    OwnerEventStats,
    OwnerEventSummary,
    OwnerEventView,
)
from src.service.eventhub.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.eventhub.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.eventhub.app.query.get_event_use_case import build_event_details


def build_owner_event_view(*, detail: EventDetail, today: date) -> OwnerEventView:
    event = detail.event
    return OwnerEventView(
        detail=detail,
        stats=OwnerEventStats(
            total_attendees=event.current_attendees,
            is_full=event.is_full,
            spots_left=event.available,
            status=event.lifecycle_status(today=today),
        ),
    )


class GetOwnerDashboardUseCase:
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
    async def get_dashboard(self, *, owner_id: int, today: Optional[date] = None) -> OwnerDashboard:
        today = today or date.today()
        events = await self.event_query_repo.list_by_owner(owner_id=owner_id)
        details = await build_event_details(events=events, user_query_repo=self.user_query_repo)
        views = [build_owner_event_view(detail=detail, today=today) for detail in details]

        return OwnerDashboard(
            events=views,
            upcoming=[view for view in views if view.stats.status == 'upcoming'],
            completed=[view for view in views if view.stats.status == 'completed'],
        )

    @Logger.io
    async def get_summary(
        self, *, owner_id: int, today: Optional[date] = None
    ) -> OwnerEventSummary:
        today = today or date.today()
        events = await self.event_query_repo.list_by_owner(owner_id=owner_id)

        total_attendees = sum(event.current_attendees for event in events)
        past_events = sum(1 for event in events if event.event_date < today)
        category_counts = Counter(event.category.value for event in events)

        return OwnerEventSummary(
            total_events=len(events),
            upcoming_events=len(events) - past_events,
            past_events=past_events,
            total_attendees=total_attendees,
            average_attendees=round(total_attendees / len(events)) if events else 0,
            most_popular_category=(
                category_counts.most_common(1)[0][0] if category_counts else None
            ),
        )

    @Logger.io
    async def get_event(
        self, *, owner_id: int, event_id: int, today: Optional[date] = None
    ) -> OwnerEventView:
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event or not event.is_owned_by(owner_id):
            raise NotFoundError('Event not found')

        [detail] = await build_event_details(events=[event], user_query_repo=self.user_query_repo)
        return build_owner_event_view(detail=detail, today=today or date.today())
