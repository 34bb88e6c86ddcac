from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.dto.ticket_detail import TicketDetail
from src.service.eventhub.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.eventhub.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.eventhub.app.interface.i_user_query_repo import IUserQueryRepo


class GetTicketUseCase:
    def __init__(
        self,
        *,
        ticket_query_repo: ITicketQueryRepo,
        event_query_repo: IEventQueryRepo,
        user_query_repo: IUserQueryRepo,
    ) -> None:
        self.ticket_query_repo = ticket_query_repo
        self.event_query_repo = event_query_repo
        self.user_query_repo = user_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    ) -> Self:
        return cls(
            ticket_query_repo=ticket_query_repo,
            event_query_repo=event_query_repo,
            user_query_repo=user_query_repo,
        )

    @Logger.io
    async def execute(self, *, user_id: int, ticket_id: int) -> TicketDetail:
        ticket = await self.ticket_query_repo.get_by_id_for_user(
            ticket_id=ticket_id, user_id=user_id
        )
        if not ticket:
            raise NotFoundError('Ticket not found')

        event_summaries = await self.event_query_repo.get_summaries(event_ids=[ticket.event_id])
        user_summaries = await self.user_query_repo.get_summaries([user_id])
        return TicketDetail(
            ticket=ticket,
            event=event_summaries.get(ticket.event_id),
            user=user_summaries.get(user_id),
        )
