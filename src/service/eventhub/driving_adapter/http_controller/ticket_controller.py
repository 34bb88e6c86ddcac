from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.command.book_ticket_use_case import BookTicketUseCase
from src.service.eventhub.app.command.cancel_ticket_use_case import CancelTicketUseCase
from src.service.eventhub.app.query.get_ticket_use_case import GetTicketUseCase
from src.service.eventhub.app.query.list_my_tickets_use_case import ListMyTicketsUseCase
from src.service.eventhub.domain.entity.user_entity import UserEntity
from src.service.eventhub.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.eventhub.driving_adapter.http_controller.schema.ticket_schema import (
    BookTicketRequest,
    CancelTicketResponse,
    TicketResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def book_ticket(
    request: BookTicketRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: BookTicketUseCase = Depends(BookTicketUseCase.depends),
) -> TicketResponse:
    with tracer.start_as_current_span('controller.book_ticket') as span:
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('user_id', current_user.id or 0)

        detail = await use_case.execute(user_id=current_user.id or 0, event_id=request.event_id)
        return TicketResponse.from_detail(detail)


@router.get('')
@Logger.io
async def list_my_tickets(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListMyTicketsUseCase = Depends(ListMyTicketsUseCase.depends),
) -> List[TicketResponse]:
    details = await use_case.execute(user_id=current_user.id or 0)
    return [TicketResponse.from_detail(detail) for detail in details]


@router.get('/{ticket_id}')
@Logger.io
async def get_ticket(
    ticket_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetTicketUseCase = Depends(GetTicketUseCase.depends),
) -> TicketResponse:
    detail = await use_case.execute(user_id=current_user.id or 0, ticket_id=ticket_id)
    return TicketResponse.from_detail(detail)


@router.post('/{ticket_id}/cancel')
@Logger.io
async def cancel_ticket(
    ticket_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelTicketUseCase = Depends(CancelTicketUseCase.depends),
) -> CancelTicketResponse:
    detail = await use_case.execute(user_id=current_user.id or 0, ticket_id=ticket_id)
    return CancelTicketResponse(
        message='Ticket cancelled successfully', ticket=TicketResponse.from_detail(detail)
    )
