"""Tests for account API endpoints."""

from collections.abc import Callable
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient

from dynasty_tracker.utils.security import (
    create_access_token,
    decode_access_token,
    verify_password,
)
from tests.factories import make_user


def result_with_one(value) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestRegister:
    """Tests for user registration endpoint."""

    async def test_register_success(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        """Test successful user registration."""
        mock_db_session.execute = AsyncMock(side_effect=[result_with_one(None), result_with_one(None)])

        async def mock_refresh(user):
            user.id = 1
            user.created_at = datetime(2025, 1, 1, 12, 0, 0)

        mock_db_session.refresh = mock_refresh
        override_dependencies()

        response = await client.post(
            "/api/auth/register",
            json={
                "username": "NewUser",
                "email": "newuser@example.com",
                "password": "securepassword123",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "newuser"  # Normalized to lowercase
        assert data["email"] == "newuser@example.com"
        assert data["favorite_team"] == ""
        assert data["is_active"] is True
        assert "password" not in data
        assert "hashed_password" not in data

        created = mock_db_session.add.call_args.args[0]
        assert verify_password("securepassword123", created.hashed_password)

    async def test_register_username_already_exists(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        """Test registration with existing username."""
        mock_db_session.execute = AsyncMock(return_value=result_with_one(make_user()))
        override_dependencies()

        response = await client.post(
            "/api/auth/register",
            json={
                "username": "testuser",
                "email": "new@example.com",
                "password": "securepassword123",
            },
        )

        assert response.status_code == 409
        assert "Username already registered" in response.json()["detail"]

    async def test_register_email_already_exists(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        """Test registration with existing email."""
        mock_db_session.execute = AsyncMock(
            side_effect=[result_with_one(None), result_with_one(make_user())]
        )
        override_dependencies()

        response = await client.post(
            "/api/auth/register",
            json={
                "username": "newuser",
                "email": "test@example.com",
                "password": "securepassword123",
            },
        )

        assert response.status_code == 409
        assert "Email already registered" in response.json()["detail"]

    async def test_register_validation(
        self, client: AsyncClient, override_dependencies: Callable
    ) -> None:
        """Test registration rejects bad email, short password and bad username."""
        override_dependencies()

        for payload in (
            {"username": "newuser", "email": "not-an-email", "password": "securepassword123"},
            {"username": "newuser", "email": "new@example.com", "password": "short"},
            {"username": "ab", "email": "new@example.com", "password": "securepassword123"},
            {"username": "user@name", "email": "new@example.com", "password": "securepassword123"},
        ):
            response = await client.post("/api/auth/register", json=payload)
            assert response.status_code == 422


class TestLogin:
    """Tests for user login endpoint."""

    async def test_login_success(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        """Test successful login returns a token for the user."""
        user = make_user(id=42)
        mock_db_session.execute = AsyncMock(return_value=result_with_one(user))
        override_dependencies()

        response = await client.post(
            "/api/auth/login",
            json={"username": "Test@Example.com", "password": "securepassword123"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        payload = decode_access_token(data["access_token"])
        assert payload is not None
        assert payload["sub"] == "42"

    async def test_login_invalid_password(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        """Test login with incorrect password."""
        mock_db_session.execute = AsyncMock(return_value=result_with_one(make_user()))
        override_dependencies()

        response = await client.post(
            "/api/auth/login",
            json={"username": "testuser", "password": "wrongpassword"},
        )

        assert response.status_code == 401
        assert "Invalid username or password" in response.json()["detail"]

    async def test_login_user_not_found(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        """Test login with non-existent user."""
        mock_db_session.execute = AsyncMock(return_value=result_with_one(None))
        override_dependencies()

        response = await client.post(
            "/api/auth/login",
            json={"username": "nonexistent", "password": "securepassword123"},
        )

        assert response.status_code == 401

    async def test_login_inactive_user(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        """Test login with inactive user account."""
        mock_db_session.execute = AsyncMock(return_value=result_with_one(make_user(is_active=False)))
        override_dependencies()

        response = await client.post(
            "/api/auth/login",
            json={"username": "testuser", "password": "securepassword123"},
        )

        assert response.status_code == 403
        assert "User account is inactive" in response.json()["detail"]


class TestCurrentUser:
    """Tests for token-protected account endpoints."""

    async def test_me_without_token(self, client: AsyncClient) -> None:
        """Test that protected routes require a bearer token."""
        response = await client.get("/api/auth/me")
        assert response.status_code == 401

    async def test_me_with_token(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        """Test resolving a real bearer token to the current user."""
        user = make_user(id=5, favorite_team="Florida")
        mock_db_session.execute = AsyncMock(return_value=result_with_one(user))
        override_dependencies()

        response = await client.get(
            "/api/auth/me",
            headers={"Authorization": f"Bearer {create_access_token(5)}"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 5
        assert data["favorite_team"] == "Florida"

    async def test_me_with_invalid_token(
        self, client: AsyncClient, override_dependencies: Callable
    ) -> None:
        """Test that a garbage token is rejected."""
        override_dependencies()

        response = await client.get(
            "/api/auth/me", headers={"Authorization": "Bearer invalid.token.here"}
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_me_with_unknown_user(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        """Test that a valid token for a deleted user is rejected."""
        mock_db_session.execute = AsyncMock(return_value=result_with_one(None))
        override_dependencies()

        response = await client.get(
            "/api/auth/me",
            headers={"Authorization": f"Bearer {create_access_token(99)}"},
        )

        assert response.status_code == 401


class TestFavoriteTeam:
    """Tests for the favorite team preference."""

    async def test_get_favorite_team(
        self, client: AsyncClient, override_dependencies: Callable
    ) -> None:
        override_dependencies(make_user(favorite_team="Oregon"))

        response = await client.get("/api/auth/favorite-team")

        assert response.status_code == 200
        assert response.json() == {"favorite_team": "Oregon"}

    async def test_update_favorite_team(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        user = make_user()
        override_dependencies(user)

        response = await client.put(
            "/api/auth/favorite-team", json={"favorite_team": "  Georgia "}
        )

        assert response.status_code == 200
        assert response.json() == {"favorite_team": "Georgia"}
        assert user.favorite_team == "Georgia"
        mock_db_session.flush.assert_awaited()


class TestUpdateUsername:
    """Tests for changing the username."""

    async def test_update_username(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        user = make_user()
        mock_db_session.execute = AsyncMock(return_value=result_with_one(None))
        override_dependencies(user)

        response = await client.put("/api/auth/username", json={"new_username": "BigGameBob"})

        assert response.status_code == 200
        assert response.json()["username"] == "biggamebob"
        assert user.username == "biggamebob"

    async def test_update_username_taken(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        override_dependencies: Callable,
    ) -> None:
        user = make_user(id=1)
        other = make_user(id=2, username="taken", email="taken@example.com")
        mock_db_session.execute = AsyncMock(return_value=result_with_one(other))
        override_dependencies(user)

        response = await client.put("/api/auth/username", json={"new_username": "taken"})

        assert response.status_code == 409
        assert user.username == "testuser"


class TestUpdatePassword:
    """Tests for changing the password."""

    async def test_update_password(
        self, client: AsyncClient, override_dependencies: Callable
    ) -> None:
        user = make_user(password="securepassword123")
        override_dependencies(user)

        response = await client.put(
            "/api/auth/password",
            json={"old_password": "securepassword123", "new_password": "evenmoresecure456"},
        )

        assert response.status_code == 200
        assert verify_password("evenmoresecure456", user.hashed_password)

    async def test_update_password_wrong_old_password(
        self, client: AsyncClient, override_dependencies: Callable
    ) -> None:
        user = make_user(password="securepassword123")
        override_dependencies(user)

        response = await client.put(
            "/api/auth/password",
            json={"old_password": "nottheone", "new_password": "evenmoresecure456"},
        )

        assert response.status_code == 401
        assert verify_password("securepassword123", user.hashed_password)


class TestJWT:
    """Tests for JWT token generation and validation."""

    def test_round_trip(self) -> None:
        payload = decode_access_token(create_access_token(123))

        assert payload is not None
        assert payload["sub"] == "123"
        assert "exp" in payload

    def test_expired_token(self) -> None:
        token = create_access_token(1, expires_delta=timedelta(seconds=-1))
        assert decode_access_token(token) is None

    def test_tampered_token(self) -> None:
        token = create_access_token(1)
        assert decode_access_token(token[:-5] + "xxxxx") is None
