from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.dto.ticket_detail import TicketDetail
from src.service.eventhub.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.eventhub.app.interface.i_ticket_query_repo import ITicketQueryRepo


class ListMyTicketsUseCase:
    def __init__(
        self, *, ticket_query_repo: ITicketQueryRepo, event_query_repo: IEventQueryRepo
    ) -> None:
        self.ticket_query_repo = ticket_query_repo
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(ticket_query_repo=ticket_query_repo, event_query_repo=event_query_repo)

    @Logger.io
    async def execute(self, *, user_id: int) -> List[TicketDetail]:
        tickets = await self.ticket_query_repo.list_by_user(user_id=user_id)
        event_summaries = await self.event_query_repo.get_summaries(
            event_ids=[ticket.event_id for ticket in tickets]
        )

        return [
            TicketDetail(ticket=ticket, event=event_summaries.get(ticket.event_id))
            for ticket in tickets
        ]
