"""
Unit tests for the chat history route.

Authentication is patched; the chat service runs against an in-memory
store.
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest
from quart import Quart

from application.routes.history import history_bp
from common.exception import ChatHistoryError
from common.utils.jwt_utils import TokenExpiredError, TokenValidationError
from tests.fixtures.chat_fixtures import create_chat_history, create_test_chat, seed_store


@pytest.fixture
def app():
    """Create test Quart application."""
    app = Quart(__name__)
    app.register_blueprint(history_bp, url_prefix="/api/v1/history")
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def mock_auth():
    """Authenticate every request as alice."""
    with patch(
        "application.routes.history.get_authenticated_user",
        new=AsyncMock(return_value="alice"),
    ) as mock:
        yield mock


@pytest.fixture
def use_service(chat_service):
    """Serve requests with the in-memory chat service."""
    with patch("application.routes.history.get_chat_service", return_value=chat_service):
        yield chat_service


class TestGetHistory:
    """Test GET /api/v1/history."""

    @pytest.mark.asyncio
    async def test_first_page(self, client, mock_auth, use_service, chat_store):
        # Arrange
        await seed_store(chat_store, create_chat_history("alice", 25))

        # Act
        response = await client.get("/api/v1/history")
        data = await response.get_json()

        # Assert
        assert response.status_code == 200
        assert data["hasMore"] is True
        assert len(data["chats"]) == 10
        assert data["chats"][0]["id"] == "chat-024"
        assert set(data["chats"][0]) == {"id", "userId", "title", "visibility", "createdAt"}

    @pytest.mark.asyncio
    async def test_starting_after(self, client, mock_auth, use_service, chat_store):
        await seed_store(chat_store, create_chat_history("alice", 25))

        response = await client.get("/api/v1/history?limit=10&starting_after=chat-005")
        data = await response.get_json()

        assert response.status_code == 200
        assert [chat["id"] for chat in data["chats"]] == [
            "chat-004", "chat-003", "chat-002", "chat-001", "chat-000"
        ]
        assert data["hasMore"] is False

    @pytest.mark.asyncio
    async def test_empty_history(self, client, mock_auth, use_service):
        response = await client.get("/api/v1/history")

        assert response.status_code == 200
        assert await response.get_json() == {"chats": [], "hasMore": False}

    @pytest.mark.asyncio
    async def test_both_cursors_is_400(self, client, mock_auth, use_service):
        response = await client.get("/api/v1/history?starting_after=a&ending_before=b")
        data = await response.get_json()

        assert response.status_code == 400
        assert data["error_code"] == "bad_request:api"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", ["0", "-1", "ten"])
    async def test_bad_limit_is_400(self, client, mock_auth, use_service, limit):
        response = await client.get(f"/api/v1/history?limit={limit}")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_foreign_cursor_is_404(self, client, mock_auth, use_service, chat_store):
        """Test a cursor naming another user's chat is reported as not found."""
        await seed_store(chat_store, [create_test_chat(chat_id="bob-1", user_id="bob")])

        response = await client.get("/api/v1/history?ending_before=bob-1")
        data = await response.get_json()

        assert response.status_code == 404
        assert data["error_code"] == "not_found:history"

    @pytest.mark.asyncio
    async def test_owner_comes_from_token(self, client, mock_auth, chat_store):
        """Test a query parameter cannot select another user's history."""
        # Arrange
        service = Mock()
        service.list_chats = AsyncMock(side_effect=ChatHistoryError("history", "stop"))

        # Act
        with patch("application.routes.history.get_chat_service", return_value=service):
            await client.get("/api/v1/history?user_id=bob&owner_id=bob")

        # Assert
        assert service.list_chats.await_args.args[0] == "alice"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_500(self, client, mock_auth):
        service = Mock()
        service.list_chats = AsyncMock(side_effect=RuntimeError("store offline"))

        with patch("application.routes.history.get_chat_service", return_value=service):
            response = await client.get("/api/v1/history")

        assert response.status_code == 500


class TestGetHistoryAuth:
    """Test authentication failures."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error", [TokenValidationError("Missing Authorization header"), TokenExpiredError("expired")]
    )
    async def test_unauthenticated_is_401(self, client, use_service, error):
        with patch(
            "application.routes.history.get_authenticated_user",
            new=AsyncMock(side_effect=error),
        ):
            response = await client.get("/api/v1/history")

        data = await response.get_json()
        assert response.status_code == 401
        assert data["error_code"] == "unauthorized:auth"

    @pytest.mark.asyncio
    async def test_both_cursors_without_token_is_400(self, client, use_service):
        """Test conflicting cursors are rejected before authentication runs."""
        response = await client.get("/api/v1/history?starting_after=a&ending_before=b")
        data = await response.get_json()

        assert response.status_code == 400
        assert data["error_code"] == "bad_request:api"

    @pytest.mark.asyncio
    async def test_blank_and_set_cursor_is_400(self, client, mock_auth, use_service):
        response = await client.get("/api/v1/history?starting_after=&ending_before=x")

        assert response.status_code == 400
