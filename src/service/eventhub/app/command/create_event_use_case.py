from datetime import date
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.domain.entity.event_entity import EventEntity
from src.service.eventhub.domain.enum.event_category import EventCategory


class CreateEventUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_event(
        self,
        *,
        owner_id: int,
        title: str,
        description: str,
        category: EventCategory | str,
        event_date: date,
        event_time: str,
        location: str,
        max_attendees: int,
        ticket_price: int = 0,
    ) -> EventEntity:
        with self.tracer.start_as_current_span(
            'use_case.create_event', attributes={'user.id': owner_id}
        ):
            event = EventEntity.create(
                title=title,
                description=description,
                category=category,
                event_date=event_date,
                event_time=event_time,
                location=location,
                owner_id=owner_id,
                max_attendees=max_attendees,
                ticket_price=ticket_price,
            )

            async with self.uow:
                created_event = await self.uow.event_command_repo.create(event=event)
                await self.uow.commit()

            Logger.base.info(
                f'🎪 [CREATE-EVENT] Event {created_event.id} created by user {owner_id} '
                f'(capacity {created_event.max_attendees})'
            )
            return created_event
