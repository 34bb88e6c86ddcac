from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.service.eventhub.domain.entity.user_entity import UserEntity
from src.service.eventhub.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
) -> UserEntity:
    """Current user from the auth cookie (stateless, no DB query)"""
    return jwt_auth.get_current_user_info_from_jwt(token)
