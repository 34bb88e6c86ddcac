from datetime import datetime
from enum import StrEnum
from typing import Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import ForbiddenError, LoginError
from src.service.eventhub.app.interface.i_password_hasher import IPasswordHasher


class UserRole(StrEnum):
    USER = 'user'
    ADMIN = 'admin'
    GUEST = 'guest'


@attrs.define
class UserEntity:
    email: str = ''
    name: str = ''
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    created_at: Optional[datetime] = None

    def validate_active(self) -> None:
        if not self.is_active:
            raise ForbiddenError('User is inactive')

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise LoginError('LOGIN_BAD_CREDENTIALS')

        return user_entity

    def set_password(self, plain_password: str, password_hasher: IPasswordHasher) -> None:
        self.hashed_password = password_hasher.hash_password(
            plain_password=SecretStr(plain_password)
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
