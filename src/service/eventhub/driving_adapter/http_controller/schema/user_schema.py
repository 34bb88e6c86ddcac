"""
User API Schemas - Pydantic models for request/response
"""

from pydantic import EmailStr, Field, SecretStr

from src.service.eventhub.domain.entity.user_entity import UserEntity, UserRole
from src.service.eventhub.domain.value_object.summary import UserSummary
from src.service.eventhub.driving_adapter.http_controller.schema.camel_model import CamelModel


class RegisterUserRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=6,
        max_length=72,
        description='Password must be 6-72 characters (bcrypt limit)',
    )

    model_config = CamelModel.model_config | {
        'json_schema_extra': {
            'example': {'name': 'Jane Doe', 'email': 'jane@example.com', 'password': 'P@ssw0rd'}
        }
    }


class LoginRequest(CamelModel):
    email: EmailStr
    password: SecretStr = Field(
        ..., min_length=1, max_length=72, description='User password (max 72 chars)'
    )

    model_config = CamelModel.model_config | {
        'json_schema_extra': {'example': {'email': 'jane@example.com', 'password': 'P@ssw0rd'}}
    }


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    role: UserRole

    @classmethod
    def from_entity(cls, user: UserEntity) -> 'UserResponse':
        return cls(id=user.id or 0, name=user.name, email=user.email, role=user.role)


class UserSummaryResponse(CamelModel):
    id: int
    name: str
    email: str

    @classmethod
    def from_summary(cls, summary: UserSummary) -> 'UserSummaryResponse':
        return cls(id=summary.id, name=summary.name, email=summary.email)
