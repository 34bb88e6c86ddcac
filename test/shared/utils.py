from typing import Any, Dict

from fastapi.testclient import TestClient
from httpx import Response

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import (
    EVENT_ATTENDEES,
    EVENT_CREATE,
    EVENT_GET,
    TICKET_BOOK,
    TICKET_CANCEL,
    USER_LOGIN,
    USER_REGISTER,
)
from test.util_constant import DEFAULT_EVENT_PAYLOAD, DEFAULT_PASSWORD


def assert_response_status(response: Response, expected_status: int, message: str | None = None):
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response.text}'
    )


def auth_headers(token: str) -> Dict[str, str]:
    """Explicit cookie header, so several users can share one TestClient"""
    return {'Cookie': f'{settings.AUTH_COOKIE_NAME}={token}'}


def register_user(
    client: TestClient, *, email: str, name: str, password: str = DEFAULT_PASSWORD
) -> Dict[str, Any]:
    response = client.post(
        USER_REGISTER, json={'name': name, 'email': email, 'password': password}
    )
    assert_response_status(response, 201, f'Failed to register {email}: {response.text}')
    return response.json()


def login_user(client: TestClient, *, email: str, password: str = DEFAULT_PASSWORD) -> str:
    response = client.post(USER_LOGIN, json={'email': email, 'password': password})
    assert_response_status(response, 200, f'Login failed: {response.text}')
    token = response.cookies.get(settings.AUTH_COOKIE_NAME)
    assert token, 'Login response did not set the auth cookie'
    # Keep the shared client anonymous; tests pass auth_headers() explicitly
    client.cookies.clear()
    return token


def create_user_session(client: TestClient, *, email: str, name: str) -> Dict[str, Any]:
    user = register_user(client, email=email, name=name)
    token = login_user(client, email=email)
    return {**user, 'token': token, 'headers': auth_headers(token)}


def create_event(
    client: TestClient, headers: Dict[str, str], **overrides: Any
) -> Dict[str, Any]:
    response = client.post(EVENT_CREATE, json={**DEFAULT_EVENT_PAYLOAD, **overrides}, headers=headers)
    assert_response_status(response, 201, f'Failed to create event: {response.text}')
    return response.json()


def get_event(client: TestClient, event_id: int) -> Dict[str, Any]:
    response = client.get(EVENT_GET.format(event_id=event_id))
    assert_response_status(response, 200)
    return response.json()


def get_attendees(client: TestClient, event_id: int) -> Dict[str, Any]:
    response = client.get(EVENT_ATTENDEES.format(event_id=event_id))
    assert_response_status(response, 200)
    return response.json()


def book_ticket(client: TestClient, headers: Dict[str, str], event_id: int) -> Response:
    return client.post(TICKET_BOOK, json={'eventId': event_id}, headers=headers)


def cancel_ticket(client: TestClient, headers: Dict[str, str], ticket_id: int) -> Response:
    return client.post(TICKET_CANCEL.format(ticket_id=ticket_id), headers=headers)
