from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.state.event_lock import EventLockRegistry
from src.service.eventhub.domain.entity.user_entity import UserEntity


class DeleteEventUseCase:
    """
    Delete an event that nobody is attending.

    Runs under the event lock and deletes only the version that was checked, so a
    booking cannot slip in between the attendee check and the delete.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, event_lock_registry: EventLockRegistry) -> None:
        self.uow = uow
        self.event_lock_registry = event_lock_registry
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        event_lock_registry: EventLockRegistry = Depends(Provide[Container.event_lock_registry]),
    ) -> Self:
        return cls(uow=uow, event_lock_registry=event_lock_registry)

    @Logger.io
    async def delete_event(self, *, event_id: int, actor: UserEntity) -> None:
        with self.tracer.start_as_current_span(
            'use_case.delete_event', attributes={'event.id': event_id}
        ):
            async with self.event_lock_registry.hold(event_id=event_id):
                async with self.uow:
                    event = await self.uow.event_command_repo.get_by_id(event_id=event_id)
                    if not event:
                        raise NotFoundError('Event not found')

                    event.validate_can_be_managed_by(user_id=actor.id, is_admin=actor.is_admin)
                    event.validate_can_be_deleted()

                    if not await self.uow.event_command_repo.delete(
                        event_id=event_id, expected_version=event.version
                    ):
                        raise ConflictError('Event was updated concurrently, please retry')
                    await self.uow.commit()

            Logger.base.info(f'🗑️ [DELETE-EVENT] Event {event_id} deleted by user {actor.id}')
