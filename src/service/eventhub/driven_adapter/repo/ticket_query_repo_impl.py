from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.eventhub.domain.entity.ticket_entity import TicketEntity
from src.service.eventhub.driven_adapter.model.ticket_model import TicketModel
from src.service.eventhub.driven_adapter.repo.ticket_command_repo_impl import (
    ticket_model_to_entity,
)


class TicketQueryRepoImpl(ITicketQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def list_by_user(self, *, user_id: int) -> List[TicketEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel)
                .where(TicketModel.user_id == user_id)
                .order_by(TicketModel.booked_at.desc(), TicketModel.id.desc())
            )
            return [ticket_model_to_entity(db_ticket) for db_ticket in result.scalars().all()]

    @Logger.io
    async def get_by_id_for_user(self, *, ticket_id: int, user_id: int) -> Optional[TicketEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel).where(
                    TicketModel.id == ticket_id, TicketModel.user_id == user_id
                )
            )
            db_ticket = result.scalar_one_or_none()

            if not db_ticket:
                return None

            return ticket_model_to_entity(db_ticket)
