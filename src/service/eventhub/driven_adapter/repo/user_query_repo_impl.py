from typing import AsyncContextManager, Callable, Dict, List, Optional

from pydantic import SecretStr
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.eventhub.app.interface.i_password_hasher import IPasswordHasher
from src.service.eventhub.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.eventhub.domain.entity.user_entity import UserEntity, UserRole
from src.service.eventhub.domain.value_object.summary import UserSummary
from src.service.eventhub.driven_adapter.model.user_model import UserModel


def user_model_to_entity(user_model: UserModel) -> UserEntity:
    return UserEntity(
        id=user_model.id,
        email=user_model.email,
        name=user_model.name,
        hashed_password=user_model.hashed_password,
        role=UserRole(user_model.role),
        is_active=user_model.is_active,
        created_at=user_model.created_at,
    )


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        password_hasher: IPasswordHasher,
    ) -> None:
        self.session_factory = session_factory
        self.password_hasher = password_hasher

    @Logger.io
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email))
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return user_model_to_entity(user_model)

    @Logger.io
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id == user_id))
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return user_model_to_entity(user_model)

    @Logger.io
    async def exists_by_email(self, email: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel.id).where(UserModel.email == email))
            return result.scalar_one_or_none() is not None

    @Logger.io
    async def verify_password(self, email: str, plain_password: str) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email))
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            if not self.password_hasher.verify_password(
                plain_password=SecretStr(plain_password),
                hashed_password=user_model.hashed_password,
            ):
                return None

            return user_model_to_entity(user_model)

    @Logger.io
    async def get_summaries(self, user_ids: List[int]) -> Dict[int, UserSummary]:
        if not user_ids:
            return {}

        async with self.session_factory() as session:
            result = await session.execute(
                select(UserModel.id, UserModel.name, UserModel.email).where(
                    UserModel.id.in_(set(user_ids))
                )
            )
            return {
                row.id: UserSummary(id=row.id, name=row.name, email=row.email)
                for row in result.all()
            }
