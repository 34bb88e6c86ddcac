"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings, settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
from src.platform.state.event_lock import EventLockRegistry
from src.service.eventhub.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.eventhub.driven_adapter.repo.ticket_query_repo_impl import TicketQueryRepoImpl
from src.service.eventhub.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.eventhub.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.eventhub.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.eventhub.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database
    database = providers.Singleton(Database)

    # Unit of Work (Factory: one per request, it holds the open session)
    unit_of_work = providers.Factory(SqlAlchemyUnitOfWork, session_factory=database.provided.session)

    # Security
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(JwtAuth)

    # Repositories (stateless - use session_factory per call)
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    ticket_query_repo = providers.Singleton(
        TicketQueryRepoImpl, session_factory=database.provided.session
    )
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl,
        session_factory=database.provided.session,
        password_hasher=password_hasher,
    )

    # Booking serialization (process-wide, keyed by event id)
    event_lock_registry = providers.Singleton(
        EventLockRegistry, timeout_seconds=settings.BOOKING_LOCK_TIMEOUT_SECONDS
    )

    # Live attendee updates for WebSocket / SSE viewers
    attendee_broadcaster = providers.Singleton(
        InMemoryEventBroadcasterImpl, buffer_size=settings.BROADCAST_BUFFER_SIZE
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
