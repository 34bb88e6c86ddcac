"""
Integration tests for registration, login, logout and profile
"""

from fastapi.testclient import TestClient

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import (
    USER_LOGIN,
    USER_LOGOUT,
    USER_PROFILE,
    USER_REGISTER,
)
from test.shared.utils import assert_response_status, auth_headers, login_user, register_user
from test.util_constant import DEFAULT_PASSWORD, USER_A_EMAIL, USER_A_NAME


class TestRegister:
    def test_register_user(self, client: TestClient):
        # When
        response = client.post(
            USER_REGISTER,
            json={'name': USER_A_NAME, 'email': USER_A_EMAIL, 'password': DEFAULT_PASSWORD},
        )

        # Then
        assert_response_status(response, 201)
        body = response.json()
        assert body['email'] == USER_A_EMAIL
        assert body['name'] == USER_A_NAME
        assert body['role'] == 'user'
        assert 'password' not in body
        assert 'hashedPassword' not in body

    def test_register_duplicate_email_returns_409(self, client: TestClient):
        register_user(client, email=USER_A_EMAIL, name=USER_A_NAME)

        response = client.post(
            USER_REGISTER,
            json={'name': 'Other', 'email': USER_A_EMAIL, 'password': DEFAULT_PASSWORD},
        )

        assert_response_status(response, 409)
        assert response.json()['detail'] == 'Email already registered'

    def test_register_invalid_email_returns_400(self, client: TestClient):
        response = client.post(
            USER_REGISTER,
            json={'name': 'Bad', 'email': 'not-an-email', 'password': DEFAULT_PASSWORD},
        )

        assert_response_status(response, 400)

    def test_register_short_password_returns_400(self, client: TestClient):
        response = client.post(
            USER_REGISTER, json={'name': 'Short', 'email': 'short@test.com', 'password': '123'}
        )

        assert_response_status(response, 400)


class TestLogin:
    def test_login_sets_auth_cookie(self, client: TestClient):
        # Given
        register_user(client, email=USER_A_EMAIL, name=USER_A_NAME)

        # When
        response = client.post(
            USER_LOGIN, json={'email': USER_A_EMAIL, 'password': DEFAULT_PASSWORD}
        )

        # Then
        assert_response_status(response, 200)
        assert response.json()['email'] == USER_A_EMAIL
        assert response.cookies.get(settings.AUTH_COOKIE_NAME)

    def test_login_wrong_password_returns_400(self, client: TestClient):
        register_user(client, email=USER_A_EMAIL, name=USER_A_NAME)

        response = client.post(USER_LOGIN, json={'email': USER_A_EMAIL, 'password': 'wrong-pw'})

        assert_response_status(response, 400)
        assert response.json()['detail'] == 'LOGIN_BAD_CREDENTIALS'

    def test_login_unknown_email_returns_400(self, client: TestClient):
        response = client.post(
            USER_LOGIN, json={'email': 'nobody@test.com', 'password': DEFAULT_PASSWORD}
        )

        assert_response_status(response, 400)
        assert response.json()['detail'] == 'LOGIN_BAD_CREDENTIALS'


class TestProfile:
    def test_profile_of_logged_in_user(self, client: TestClient, user_a):
        response = client.get(USER_PROFILE, headers=user_a['headers'])

        assert_response_status(response, 200)
        assert response.json() == {
            'id': user_a['id'],
            'name': USER_A_NAME,
            'email': USER_A_EMAIL,
            'role': 'user',
        }

    def test_profile_without_cookie_returns_401(self, client: TestClient):
        response = client.get(USER_PROFILE)

        assert_response_status(response, 401)
        assert response.json()['detail'] == 'Please authenticate'

    def test_login_cookie_authenticates_following_requests(self, client: TestClient):
        register_user(client, email=USER_A_EMAIL, name=USER_A_NAME)
        token = login_user(client, email=USER_A_EMAIL)

        response = client.get(USER_PROFILE, headers=auth_headers(token))

        assert_response_status(response, 200)
        assert response.json()['email'] == USER_A_EMAIL


class TestLogout:
    def test_logout_clears_cookie(self, client: TestClient, user_a):
        response = client.post(USER_LOGOUT, headers=user_a['headers'])

        assert_response_status(response, 200)
        assert response.json() is True
        set_cookie = response.headers.get('set-cookie', '')
        assert set_cookie.startswith(f'{settings.AUTH_COOKIE_NAME}=')
        assert 'Max-Age=0' in set_cookie
