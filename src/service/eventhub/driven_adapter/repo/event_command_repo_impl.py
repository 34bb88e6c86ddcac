from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.eventhub.domain.entity.event_entity import EDITABLE_FIELDS, EventEntity
from src.service.eventhub.driven_adapter.model.event_model import EventModel


def event_model_to_entity(db_event: EventModel) -> EventEntity:
    return EventEntity(
        id=db_event.id,
        title=db_event.title,
        description=db_event.description,
        category=db_event.category,
        event_date=db_event.event_date,
        event_time=db_event.event_time,
        location=db_event.location,
        owner_id=db_event.owner_id,
        max_attendees=db_event.max_attendees,
        ticket_price=db_event.ticket_price,
        status=db_event.status,
        attendees=list(db_event.attendees or []),
        version=db_event.version,
        created_at=db_event.created_at,
        updated_at=db_event.updated_at,
    )


class EventCommandRepoImpl(IEventCommandRepo):
    """Runs inside the unit-of-work session; the caller commits."""

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        result = await self.session.execute(select(EventModel).where(EventModel.id == event_id))
        db_event = result.scalar_one_or_none()
        return event_model_to_entity(db_event) if db_event else None

    @Logger.io
    async def create(self, *, event: EventEntity) -> EventEntity:
        db_event = EventModel(
            title=event.title,
            description=event.description,
            category=event.category.value,
            event_date=event.event_date,
            event_time=event.event_time,
            location=event.location,
            owner_id=event.owner_id,
            max_attendees=event.max_attendees,
            ticket_price=event.ticket_price,
            status=event.status.value,
            attendees=list(event.attendees),
            current_attendees=event.current_attendees,
            version=0,
        )
        self.session.add(db_event)
        await self.session.flush()
        await self.session.refresh(db_event)
        return event_model_to_entity(db_event)

    @Logger.io
    async def update_attendees(self, *, event: EventEntity, expected_version: int) -> bool:
        # Compare-and-set on version; the count is always written from the list
        result = await self.session.execute(
            update(EventModel)
            .where(EventModel.id == event.id, EventModel.version == expected_version)
            .values(
                attendees=list(event.attendees),
                current_attendees=event.current_attendees,
                version=EventModel.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @Logger.io
    async def update_details(self, *, event: EventEntity) -> EventEntity:
        values = {}
        for field in EDITABLE_FIELDS:
            value = getattr(event, field)
            values[field] = getattr(value, 'value', value)

        await self.session.execute(
            update(EventModel)
            .where(EventModel.id == event.id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.id == event.id)
            .execution_options(populate_existing=True)
        )
        return event_model_to_entity(result.scalar_one())

    @Logger.io
    async def delete(self, *, event_id: int, expected_version: int) -> bool:
        result = await self.session.execute(
            delete(EventModel)
            .where(EventModel.id == event_id, EventModel.version == expected_version)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
