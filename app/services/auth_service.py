"""
AuthService - Discord OAuth authentication logic.
"""

from app.core.security import (
    DiscordAuthError,
    build_discord_authorize_url,
    create_session_token,
    fetch_discord_identity,
    generate_oauth_state,
)
from app.models.user import Identity


class AuthServiceError(Exception):
    """Base exception for auth service errors."""
    pass


class InvalidOAuthStateError(AuthServiceError):
    """Raised when the callback state does not match the one issued at /login."""
    pass


class AuthService:
    def start_login(self) -> tuple[str, str]:
        """
        Begin the Discord login.

        Returns: (authorize_url, state). The caller must remember the state
        (cookie) and hand it back to complete_login.
        """
        state = generate_oauth_state()
        return build_discord_authorize_url(state), state

    async def complete_login(
        self,
        code: str,
        state: str,
        expected_state: str | None
    ) -> tuple[Identity, str]:
        """
        Finish the Discord login from the OAuth callback.

        1. Checks the state against the one issued at /login
        2. Exchanges the code and reads the Discord user
        3. Returns identity and session token

        Returns: (identity, session_token)
        Raises: AuthServiceError on failure
        """
        if not expected_state or state != expected_state:
            raise InvalidOAuthStateError("OAuth state mismatch")

        try:
            identity = await fetch_discord_identity(code)
        except DiscordAuthError as e:
            raise AuthServiceError(str(e))

        return identity, create_session_token(identity)
