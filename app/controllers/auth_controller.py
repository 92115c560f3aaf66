"""
Controlador de autenticación - Login con Discord y sesión del usuario
"""

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Query
from fastapi.responses import RedirectResponse

from app.core.config import get_settings
from app.core.dependencies import OptionalUser
from app.models.user import SessionResponse, UserResponse
from app.services.auth_service import AuthService, AuthServiceError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

# Cookie de corta duración con el `state` emitido en /login
OAUTH_STATE_COOKIE = "oauth_state"
OAUTH_STATE_MAX_AGE = 60 * 10


@router.get("/login")
async def login():
    """
    Inicia el login con Discord.

    Redirige al usuario a la pantalla de autorización de Discord.
    """
    authorize_url, state = AuthService().start_login()

    response = RedirectResponse(authorize_url)
    response.set_cookie(
        OAUTH_STATE_COOKIE,
        state,
        max_age=OAUTH_STATE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )
    return response


@router.get("/auth/discord/callback")
async def discord_callback(
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    oauth_state: Optional[str] = Cookie(None),
):
    """
    Callback de Discord.

    Si el login sale bien crea la sesión; si no, vuelve al inicio sin sesión.
    """
    settings = get_settings()
    response = RedirectResponse(settings.frontend_url)
    response.delete_cookie(OAUTH_STATE_COOKIE)

    if not code or not state:
        return response

    try:
        identity, token = await AuthService().complete_login(code, state, oauth_state)
    except AuthServiceError as e:
        logger.warning(f"Login con Discord fallido: {e}")
        return response

    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.app_env == "production",
    )
    logger.info(f"✅ Sesión iniciada: {identity.username} ({identity.id})")
    return response


@router.get("/logout")
async def logout():
    """Cierra la sesión borrando la cookie."""
    settings = get_settings()
    response = RedirectResponse(settings.frontend_url)
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.get("/api/user", response_model=SessionResponse, response_model_exclude_none=True)
async def get_session_user(identity: OptionalUser):
    """
    Devuelve el usuario de la sesión actual.

    Nunca falla: sin sesión responde `{"loggedIn": false}`.
    """
    if identity is None:
        return SessionResponse(logged_in=False)

    return SessionResponse(
        logged_in=True,
        user=UserResponse(
            id=identity.id,
            username=identity.username,
            avatar=identity.avatar,
            avatar_url=identity.avatar_url,
        )
    )
