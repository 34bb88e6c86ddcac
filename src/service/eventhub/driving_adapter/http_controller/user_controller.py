from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.command.register_user_use_case import RegisterUserUseCase
from src.service.eventhub.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.eventhub.app.query.get_owner_dashboard_use_case import GetOwnerDashboardUseCase
from src.service.eventhub.domain.entity.user_entity import UserEntity
from src.service.eventhub.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.eventhub.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.eventhub.driving_adapter.http_controller.schema.event_schema import (
    OwnerDashboardResponse,
    OwnerEventResponse,
    OwnerEventSummaryResponse,
)
from src.service.eventhub.driving_adapter.http_controller.schema.user_schema import (
    LoginRequest,
    RegisterUserRequest,
    UserResponse,
)


router = APIRouter()


@router.post('/register', status_code=status.HTTP_201_CREATED)
@Logger.io
async def register(
    request: RegisterUserRequest,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.register(
        name=request.name,
        email=request.email,
        password=request.password.get_secret_value(),
    )
    return UserResponse.from_entity(user_entity)


@router.post('/login')
@Logger.io
@inject
async def login(
    response: Response,
    request: LoginRequest,
    user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserResponse:
    user_entity = await jwt_auth.authenticate_user(
        user_query_repo=user_query_repo,
        email=request.email,
        password=request.password.get_secret_value(),
    )

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=jwt_auth.create_jwt_token(user_entity),
        max_age=jwt_auth.max_age_seconds,
        httponly=True,
        samesite='lax',
        secure=settings.AUTH_COOKIE_SECURE,
    )

    return UserResponse.from_entity(user_entity)


@router.post('/logout')
@Logger.io
async def logout(response: Response) -> bool:
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, httponly=True, samesite='lax')
    return True


@router.get('/profile')
@Logger.io
async def get_profile(current_user: UserEntity = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_entity(current_user)


# ============================ Owner dashboard ============================


@router.get('/events')
@Logger.io
async def get_my_dashboard(
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetOwnerDashboardUseCase = Depends(GetOwnerDashboardUseCase.depends),
) -> OwnerDashboardResponse:
    dashboard = await use_case.get_dashboard(owner_id=current_user.id or 0)
    return OwnerDashboardResponse.from_dashboard(dashboard)


@router.get('/events/summary')
@Logger.io
async def get_my_events_summary(
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetOwnerDashboardUseCase = Depends(GetOwnerDashboardUseCase.depends),
) -> OwnerEventSummaryResponse:
    summary = await use_case.get_summary(owner_id=current_user.id or 0)
    return OwnerEventSummaryResponse.from_summary(summary)


@router.get('/events/{event_id}')
@Logger.io
async def get_my_event(
    event_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetOwnerDashboardUseCase = Depends(GetOwnerDashboardUseCase.depends),
) -> OwnerEventResponse:
    view = await use_case.get_event(owner_id=current_user.id or 0, event_id=event_id)
    return OwnerEventResponse.from_view(view)
