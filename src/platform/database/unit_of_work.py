"""
Unit of Work Pattern - one database transaction shared by several repositories

Architecture:
- UoW owns the session lifecycle (opened on enter, closed on exit)
- UoW owns commit/rollback; anything not committed is rolled back on exit
- Command repositories receive the UoW session, so their writes commit together
- Use cases coordinate the event update and the ticket insert through one UoW
"""

from __future__ import annotations

import abc
from contextlib import AbstractAsyncContextManager, AsyncExitStack
from typing import TYPE_CHECKING, Callable

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.eventhub.app.interface.i_event_command_repo import IEventCommandRepo
    from src.service.eventhub.app.interface.i_ticket_command_repo import ITicketCommandRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            await uow.event_command_repo.update_attendees(...)
            await uow.ticket_command_repo.create(...)
            await uow.commit()
    """

    event_command_repo: IEventCommandRepo
    ticket_command_repo: ITicketCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    Reusable: every `async with` opens a fresh session, which lets the booking
    retry loop start each attempt from a clean transaction.
    """

    def __init__(
        self, session_factory: Callable[..., AbstractAsyncContextManager[AsyncSession]]
    ) -> None:
        self.session_factory = session_factory
        self._exit_stack: AsyncExitStack | None = None
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.eventhub.driven_adapter.repo.event_command_repo_impl import (
            EventCommandRepoImpl,
        )
        from src.service.eventhub.driven_adapter.repo.ticket_command_repo_impl import (
            TicketCommandRepoImpl,
        )

        self._exit_stack = AsyncExitStack()
        self.session = await self._exit_stack.enter_async_context(self.session_factory())

        # Repositories share the UoW session
        self.event_command_repo = EventCommandRepoImpl(session=self.session)
        self.ticket_command_repo = TicketCommandRepoImpl(session=self.session)

        await super().__aenter__()
        return self

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._exit_stack is not None:
                await self._exit_stack.aclose()
            self._exit_stack = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'UnitOfWork used outside `async with`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
