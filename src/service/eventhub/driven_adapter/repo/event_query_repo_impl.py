"""
Event Query Repository Implementation - CQRS Read Side
"""

from typing import AsyncContextManager, Callable, Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.eventhub.domain.entity.event_entity import EventEntity
from src.service.eventhub.domain.value_object.summary import EventSummary
from src.service.eventhub.driven_adapter.model.event_model import EventModel
from src.service.eventhub.driven_adapter.repo.event_command_repo_impl import (
    event_model_to_entity,
)


SORTABLE_COLUMNS = {
    'created_at': EventModel.created_at,
    'date': EventModel.event_date,
    'title': EventModel.title,
}


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(EventModel).where(EventModel.id == event_id))
            db_event = result.scalar_one_or_none()

            if not db_event:
                return None

            return event_model_to_entity(db_event)

    @Logger.io
    async def list_events(
        self,
        *,
        category: Optional[str] = None,
        search: Optional[str] = None,
        sort: str = '-created_at',
    ) -> List[EventEntity]:
        descending = sort.startswith('-')
        column = SORTABLE_COLUMNS.get(sort.lstrip('-'))
        if column is None:
            raise DomainError(f'Unsupported sort field: {sort}')

        stmt = select(EventModel)
        if category and category != 'all':
            stmt = stmt.where(EventModel.category == category)
        if search:
            pattern = f'%{search}%'
            stmt = stmt.where(
                or_(EventModel.title.ilike(pattern), EventModel.description.ilike(pattern))
            )
        stmt = stmt.order_by(column.desc() if descending else column.asc(), EventModel.id.desc())

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [event_model_to_entity(db_event) for db_event in result.scalars().all()]

    @Logger.io
    async def list_by_owner(self, *, owner_id: int) -> List[EventEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(EventModel)
                .where(EventModel.owner_id == owner_id)
                .order_by(EventModel.created_at.desc(), EventModel.id.desc())
            )
            return [event_model_to_entity(db_event) for db_event in result.scalars().all()]

    @Logger.io
    async def get_summaries(self, *, event_ids: List[int]) -> Dict[int, EventSummary]:
        if not event_ids:
            return {}

        async with self.session_factory() as session:
            result = await session.execute(
                select(
                    EventModel.id,
                    EventModel.title,
                    EventModel.event_date,
                    EventModel.event_time,
                    EventModel.location,
                ).where(EventModel.id.in_(set(event_ids)))
            )
            return {
                row.id: EventSummary(
                    id=row.id,
                    title=row.title,
                    event_date=row.event_date,
                    event_time=row.event_time,
                    location=row.location,
                )
                for row in result.all()
            }
