from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import DuplicateBookingError
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.eventhub.domain.entity.ticket_entity import TicketEntity
from src.service.eventhub.domain.enum.ticket_status import TicketStatus
from src.service.eventhub.driven_adapter.model.ticket_model import TicketModel


def ticket_model_to_entity(db_ticket: TicketModel) -> TicketEntity:
    return TicketEntity(
        id=db_ticket.id,
        event_id=db_ticket.event_id,
        user_id=db_ticket.user_id,
        ticket_number=db_ticket.ticket_number,
        status=db_ticket.status,
        booked_at=db_ticket.booked_at,
        updated_at=db_ticket.updated_at,
    )


class TicketCommandRepoImpl(ITicketCommandRepo):
    """Runs inside the unit-of-work session; the caller commits."""

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_active_ticket(self, *, event_id: int, user_id: int) -> Optional[TicketEntity]:
        result = await self.session.execute(
            select(TicketModel).where(
                TicketModel.event_id == event_id,
                TicketModel.user_id == user_id,
                TicketModel.status == TicketStatus.ACTIVE.value,
            )
        )
        db_ticket = result.scalar_one_or_none()
        return ticket_model_to_entity(db_ticket) if db_ticket else None

    @Logger.io
    async def get_active_by_id_for_user(
        self, *, ticket_id: int, user_id: int
    ) -> Optional[TicketEntity]:
        result = await self.session.execute(
            select(TicketModel).where(
                TicketModel.id == ticket_id,
                TicketModel.user_id == user_id,
                TicketModel.status == TicketStatus.ACTIVE.value,
            )
        )
        db_ticket = result.scalar_one_or_none()
        return ticket_model_to_entity(db_ticket) if db_ticket else None

    @Logger.io
    async def create(self, *, ticket: TicketEntity) -> TicketEntity:
        db_ticket = TicketModel(
            event_id=ticket.event_id,
            user_id=ticket.user_id,
            ticket_number=ticket.ticket_number,
            status=ticket.status.value,
            booked_at=ticket.booked_at,
            updated_at=ticket.updated_at,
        )
        self.session.add(db_ticket)
        try:
            await self.session.flush()
        except IntegrityError as e:
            # uq_ticket_active_event_user rejected a second active ticket
            raise DuplicateBookingError() from e

        await self.session.refresh(db_ticket)
        return ticket_model_to_entity(db_ticket)

    @Logger.io
    async def update_status(self, *, ticket: TicketEntity) -> TicketEntity:
        await self.session.execute(
            update(TicketModel)
            .where(TicketModel.id == ticket.id)
            .values(status=ticket.status.value, updated_at=ticket.updated_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(
            select(TicketModel)
            .where(TicketModel.id == ticket.id)
            .execution_options(populate_existing=True)
        )
        return ticket_model_to_entity(result.scalar_one())
