"""
Dependencies de FastAPI para autenticacion e inyeccion del store
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import get_settings
from app.core.security import decode_session_token
from app.database import get_store
from app.models.user import Identity
from app.stores.base import KeyValueStore

# La sesión viaja en una cookie; el header "Authorization: Bearer <token>"
# queda como alternativa para clientes que no usan cookies
security = HTTPBearer(auto_error=False)


async def get_optional_identity(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)]
) -> Optional[Identity]:
    """
    Dependency que resuelve la identidad del request, si hay sesión.

    Retorna None cuando no hay token o ningún token es valido.
    Una cookie expirada no tapa un header Bearer valido.
    """
    cookie_token = request.cookies.get(get_settings().session_cookie_name)
    if cookie_token:
        identity = decode_session_token(cookie_token)
        if identity is not None:
            return identity

    if credentials is not None and credentials.credentials:
        return decode_session_token(credentials.credentials)

    return None


async def get_current_identity(
    identity: Annotated[Optional[Identity], Depends(get_optional_identity)]
) -> Identity:
    """
    Dependency que exige una sesión valida.

    Se usa en los endpoints que requieren autenticacion.
    """
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


# Alias de tipos para que se vea mas limpio en los endpoints
CurrentUser = Annotated[Identity, Depends(get_current_identity)]
OptionalUser = Annotated[Optional[Identity], Depends(get_optional_identity)]
Store = Annotated[KeyValueStore, Depends(get_store)]
