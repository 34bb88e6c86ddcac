"""
Test Configuration and Fixtures

This module provides:
- Environment setup (temporary SQLite database, test log dir) before app imports
- Session-scoped TestClient running the app lifespan
- Table cleanup before every integration test
- User fixtures: registered and logged-in sessions

Architecture:
- Unit tests (@pytest.mark.unit): no app, no database
- Integration tests: real app + SQLite, cleaned before each test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path
import tempfile


_TEST_DB_PATH = Path(tempfile.gettempdir()) / f'eventhub_test_{os.getpid()}.db'


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    if _TEST_DB_PATH.exists():
        _TEST_DB_PATH.unlink()
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{_TEST_DB_PATH}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402

from test.shared.utils import create_user_session  # noqa: E402
from test.util_constant import (  # noqa: E402
    OWNER_EMAIL,
    OWNER_NAME,
    USER_A_EMAIL,
    USER_A_NAME,
    USER_B_EMAIL,
    USER_B_NAME,
    USER_C_EMAIL,
    USER_C_NAME,
)


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.fixturenames.append('clean_database')


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    if _TEST_DB_PATH.exists():
        _TEST_DB_PATH.unlink()


# =============================================================================
# Database Cleanup
# =============================================================================
def _clean_all_tables() -> None:
    # Sync engine on the same file: independent of the app's event loop
    from src.platform.database.orm_db_setting import Base
    import src.service.eventhub.driven_adapter.model  # noqa: F401

    engine = create_engine(f'sqlite:///{_TEST_DB_PATH}')
    try:
        with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                conn.execute(table.delete())
    finally:
        engine.dispose()


@pytest.fixture(scope='function')
def clean_database(client: TestClient) -> Generator[None, None, None]:
    _clean_all_tables()
    yield


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Skip for unit tests - they don't use the HTTP client
    if 'unit' in [m.name for m in request.node.iter_markers()]:
        yield
        return
    client = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()


# =============================================================================
# User Fixtures (function-scoped: tables are cleaned before each test)
# =============================================================================
@pytest.fixture
def owner(client: TestClient, clean_database: None) -> dict[str, Any]:
    return create_user_session(client, email=OWNER_EMAIL, name=OWNER_NAME)


@pytest.fixture
def user_a(client: TestClient, clean_database: None) -> dict[str, Any]:
    return create_user_session(client, email=USER_A_EMAIL, name=USER_A_NAME)


@pytest.fixture
def user_b(client: TestClient, clean_database: None) -> dict[str, Any]:
    return create_user_session(client, email=USER_B_EMAIL, name=USER_B_NAME)


@pytest.fixture
def user_c(client: TestClient, clean_database: None) -> dict[str, Any]:
    return create_user_session(client, email=USER_C_EMAIL, name=USER_C_NAME)
