"""Unit tests for GetOwnerDashboardUseCase"""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import NotFoundError
from src.service.eventhub.app.query.get_owner_dashboard_use_case import (
    GetOwnerDashboardUseCase,
)
from src.service.eventhub.domain.entity.event_entity import EventEntity
from src.service.eventhub.domain.value_object.summary import UserSummary


pytestmark = pytest.mark.unit

OWNER_ID = 1
TODAY = date(2030, 6, 1)


def make_event(*, event_id: int, event_date: date, category: str, attendees) -> EventEntity:
    return EventEntity(
        title=f'Event {event_id}',
        description='Description',
        category=category,
        event_date=event_date,
        event_time='18:00',
        location='Hall',
        owner_id=OWNER_ID,
        max_attendees=2,
        attendees=list(attendees),
        id=event_id,
    )


class TestOwnerDashboard:
    def setup_method(self):
        self.event_query_repo = AsyncMock()
        self.user_query_repo = AsyncMock()
        self.user_query_repo.get_summaries.return_value = {
            OWNER_ID: UserSummary(id=OWNER_ID, name='Owner', email='owner@example.com'),
            10: UserSummary(id=10, name='Alice', email='alice@example.com'),
            11: UserSummary(id=11, name='Bob', email='bob@example.com'),
        }
        self.event_query_repo.list_by_owner.return_value = [
            make_event(event_id=1, event_date=date(2030, 7, 1), category='music', attendees=[10, 11]),
            make_event(event_id=2, event_date=date(2030, 5, 1), category='music', attendees=[10]),
            make_event(event_id=3, event_date=date(2030, 6, 1), category='sports', attendees=[]),
        ]
        self.use_case = GetOwnerDashboardUseCase(
            event_query_repo=self.event_query_repo, user_query_repo=self.user_query_repo
        )

    @pytest.mark.asyncio
    async def test_dashboard_groups_by_event_date(self):
        # When
        dashboard = await self.use_case.get_dashboard(owner_id=OWNER_ID, today=TODAY)

        # Then: Past events are completed, today and later are upcoming
        assert [v.detail.event.id for v in dashboard.upcoming] == [1, 3]
        assert [v.detail.event.id for v in dashboard.completed] == [2]
        assert dashboard.total_attendees == 3

    @pytest.mark.asyncio
    async def test_dashboard_event_stats(self):
        dashboard = await self.use_case.get_dashboard(owner_id=OWNER_ID, today=TODAY)

        full_event = dashboard.events[0]
        assert full_event.stats.total_attendees == 2
        assert full_event.stats.is_full is True
        assert full_event.stats.spots_left == 0
        assert [a.name for a in full_event.detail.attendees] == ['Alice', 'Bob']
        assert full_event.detail.owner.name == 'Owner'

    @pytest.mark.asyncio
    async def test_summary(self):
        summary = await self.use_case.get_summary(owner_id=OWNER_ID, today=TODAY)

        assert summary.total_events == 3
        assert summary.upcoming_events == 2
        assert summary.past_events == 1
        assert summary.total_attendees == 3
        assert summary.average_attendees == 1
        assert summary.most_popular_category == 'music'

    @pytest.mark.asyncio
    async def test_summary_without_events(self):
        self.event_query_repo.list_by_owner.return_value = []

        summary = await self.use_case.get_summary(owner_id=OWNER_ID, today=TODAY)

        assert summary.total_events == 0
        assert summary.average_attendees == 0
        assert summary.most_popular_category is None

    @pytest.mark.asyncio
    async def test_get_event_of_another_owner_raises_not_found(self):
        self.event_query_repo.get_by_id.return_value = make_event(
            event_id=9, event_date=TODAY, category='music', attendees=[]
        )

        with pytest.raises(NotFoundError):
            await self.use_case.get_event(owner_id=2, event_id=9, today=TODAY)
