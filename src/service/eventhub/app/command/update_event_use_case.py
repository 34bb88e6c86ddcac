from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.domain.entity.event_entity import EventEntity
from src.service.eventhub.domain.entity.user_entity import UserEntity


class UpdateEventUseCase:
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
    async def update_event(
        self, *, event_id: int, actor: UserEntity, changes: dict[str, Any]
    ) -> EventEntity:
        """
        Apply owner-editable changes; attendance and capacity are left untouched.

        Raises:
            NotFoundError: event does not exist
            ForbiddenError: actor is neither the owner nor an admin
            DomainError: a change names a non-editable field or fails validation
        """
        with self.tracer.start_as_current_span(
            'use_case.update_event', attributes={'event.id': event_id}
        ):
            async with self.uow:
                event = await self.uow.event_command_repo.get_by_id(event_id=event_id)
                if not event:
                    raise NotFoundError('Event not found')

                event.validate_can_be_managed_by(user_id=actor.id, is_admin=actor.is_admin)

                updated_event = await self.uow.event_command_repo.update_details(
                    event=event.update_details(**changes)
                )
                await self.uow.commit()

            Logger.base.info(f'✏️ [UPDATE-EVENT] Event {event_id} updated by user {actor.id}')
            return updated_event
