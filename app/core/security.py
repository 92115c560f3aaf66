"""
Seguridad: tokens de sesión (JWT) y login con Discord OAuth2
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import urlencode

import httpx
from jose import JWTError, jwt

from app.core.config import get_settings
from app.models.user import Identity

logger = logging.getLogger(__name__)

# Endpoints de Discord
DISCORD_AUTHORIZE_URL = "https://discord.com/oauth2/authorize"
DISCORD_TOKEN_URL = "https://discord.com/api/oauth2/token"
DISCORD_USER_URL = "https://discord.com/api/users/@me"

# Solo necesitamos saber quién es el usuario
DISCORD_SCOPES = ["identify"]

DISCORD_TIMEOUT_SECONDS = 10.0


class DiscordAuthError(Exception):
    """Se lanza cuando falla el intercambio del code o la lectura del usuario en Discord"""
    pass


def generate_oauth_state() -> str:
    """Valor aleatorio para el parámetro `state` (protección CSRF del flujo OAuth)"""
    return secrets.token_urlsafe(24)


def build_discord_authorize_url(state: str) -> str:
    """URL a la que se redirige al usuario para que autorice la app en Discord"""
    settings = get_settings()
    params = {
        "client_id": settings.discord_client_id,
        "redirect_uri": settings.discord_redirect_uri,
        "response_type": "code",
        "scope": " ".join(DISCORD_SCOPES),
        "state": state,
        "prompt": "none",
    }
    return f"{DISCORD_AUTHORIZE_URL}?{urlencode(params)}"


async def fetch_discord_identity(
    code: str,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> Identity:
    """
    Cambia el `code` del callback por un access token y pide el perfil del usuario

    Lo que retorna: Identity(id, username, avatar)

    Lanza DiscordAuthError si algo está mal
    """
    settings = get_settings()

    async with httpx.AsyncClient(timeout=DISCORD_TIMEOUT_SECONDS, transport=transport) as client:
        try:
            token_response = await client.post(
                DISCORD_TOKEN_URL,
                data={
                    "client_id": settings.discord_client_id,
                    "client_secret": settings.discord_client_secret,
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": settings.discord_redirect_uri,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.HTTPError as e:
            logger.error(f"❌ No se pudo contactar a Discord: {e!r}")
            raise DiscordAuthError("Discord no responde") from e

        if token_response.status_code != 200:
            error_msg = f"Code de Discord inválido. Status: {token_response.status_code}, Response: {token_response.text}"
            logger.error(f"❌ {error_msg}")
            raise DiscordAuthError(error_msg)

        try:
            access_token = token_response.json().get("access_token")
        except (ValueError, AttributeError) as e:
            logger.error(f"❌ Respuesta de token de Discord no es JSON válido: {token_response.text[:200]}")
            raise DiscordAuthError("Respuesta de Discord inválida") from e

        if not access_token:
            raise DiscordAuthError("Discord no devolvió access_token")

        try:
            user_response = await client.get(
                DISCORD_USER_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"❌ No se pudo leer el usuario de Discord: {e!r}")
            raise DiscordAuthError("Discord no responde") from e

        if user_response.status_code != 200:
            error_msg = f"No se pudo leer el usuario. Status: {user_response.status_code}"
            logger.error(f"❌ {error_msg}")
            raise DiscordAuthError(error_msg)

        try:
            data = user_response.json()
        except ValueError as e:
            logger.error(f"❌ Respuesta de usuario de Discord no es JSON válido: {user_response.text[:200]}")
            raise DiscordAuthError("Respuesta de Discord inválida") from e

    if not isinstance(data, dict):
        raise DiscordAuthError("Respuesta de Discord inválida")

    if not data.get("id") or not data.get("username"):
        raise DiscordAuthError("Respuesta de Discord sin id o username")

    logger.info(f"✅ Usuario de Discord verificado: {data['username']} ({data['id']})")
    return Identity(
        id=str(data["id"]),
        username=data.get("global_name") or data["username"],
        avatar=data.get("avatar"),
    )


def create_session_token(identity: Identity) -> str:
    """
    Crea el JWT de sesión que se guarda en la cookie

    Lleva la identidad completa para no tener que guardar sesiones en el servidor
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)

    payload = {
        "sub": identity.id,             # Subject: el usuario de Discord
        "username": identity.username,
        "avatar": identity.avatar,
        "exp": now + timedelta(minutes=settings.session_expire_minutes),
        "iat": now,                     # Issued at
    }

    return jwt.encode(payload, settings.session_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> Optional[Identity]:
    """
    Decodifica y valida el JWT de sesión

    Retorna la identidad si es válido, None si está expirado o corrupto
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.session_secret,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None

    if not payload.get("sub") or not payload.get("username"):
        return None

    return Identity(
        id=payload["sub"],
        username=payload["username"],
        avatar=payload.get("avatar"),
    )
