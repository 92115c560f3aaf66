"""
Unit tests for AuthService
"""

import pytest
from urllib.parse import parse_qs, urlparse
from unittest.mock import patch

from app.core.security import DiscordAuthError, decode_session_token
from app.services.auth_service import AuthService, AuthServiceError, InvalidOAuthStateError


class TestAuthService:
    """Test suite for AuthService Discord login logic."""

    def test_start_login_builds_authorize_url(self):
        url, state = AuthService().start_login()

        query = parse_qs(urlparse(url).query)
        assert url.startswith("https://discord.com/oauth2/authorize?")
        assert query["client_id"] == ["test-discord-client-id"]
        assert query["response_type"] == ["code"]
        assert query["scope"] == ["identify"]
        assert query["state"] == [state]

    def test_start_login_state_is_random(self):
        _, first = AuthService().start_login()
        _, second = AuthService().start_login()

        assert first != second

    @pytest.mark.asyncio
    async def test_complete_login_success(self, sample_identity):
        """A valid callback returns the identity and a session for it."""
        with patch('app.services.auth_service.fetch_discord_identity') as mock_fetch:
            mock_fetch.return_value = sample_identity

            identity, token = await AuthService().complete_login("code123", "state123", "state123")

        mock_fetch.assert_awaited_once_with("code123")
        assert identity == sample_identity
        assert decode_session_token(token) == sample_identity

    @pytest.mark.asyncio
    @pytest.mark.parametrize("expected_state", [None, "", "other-state"])
    async def test_complete_login_state_mismatch(self, expected_state):
        with patch('app.services.auth_service.fetch_discord_identity') as mock_fetch:
            with pytest.raises(InvalidOAuthStateError):
                await AuthService().complete_login("code123", "state123", expected_state)

        mock_fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_complete_login_discord_failure(self):
        with patch('app.services.auth_service.fetch_discord_identity') as mock_fetch:
            mock_fetch.side_effect = DiscordAuthError("Invalid code")

            with pytest.raises(AuthServiceError):
                await AuthService().complete_login("bad", "state123", "state123")
