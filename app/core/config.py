"""
Configuración de la app cargada desde variables de entorno (.env)

Todo lo que varía entre desarrollo/producción va aquí
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ==================== Key-value store ====================
    # Backend donde vive el leaderboard
    # - "rest": Vercel KV / Upstash via REST (producción)
    # - "mongo": colección key-value en MongoDB
    # - "memory": diccionario en memoria (desarrollo/testing, se pierde al reiniciar)
    kv_backend: str = "rest"

    # Vercel KV / Upstash - las mismas variables que inyecta Vercel
    kv_rest_api_url: str | None = None
    kv_rest_api_token: str | None = None

    # MongoDB - solo necesario cuando kv_backend="mongo"
    mongodb_uri: str | None = None
    mongodb_db_name: str = "discord_leaderboard"
    kv_collection: str = "kv"

    # Ninguna llamada al store puede colgar el request
    store_timeout_seconds: float = 5.0

    # ==================== Leaderboard ====================
    leaderboard_key: str = "leaderboard"  # Key única donde se guarda la lista completa
    leaderboard_default_limit: int = 10
    leaderboard_max_limit: int = 100

    # ==================== Discord OAuth ====================
    # Datos de la aplicación en el Discord Developer Portal
    discord_client_id: str | None = None
    discord_client_secret: str | None = None
    discord_redirect_uri: str = "http://localhost:3000/auth/discord/callback"

    # ==================== Sesión ====================
    # JWT firmado que se guarda en una cookie httponly
    session_secret: str  # Una cadena larga y aleatoria
    jwt_algorithm: str = "HS256"
    session_expire_minutes: int = 60 * 24 * 7  # La sesión expira en 7 días
    session_cookie_name: str = "session"

    # A dónde se redirige después del login/logout
    frontend_url: str = "/"

    # App
    app_env: str = "development"  # o "production"
    debug: bool = False

    # CORS - de dónde pueden venir los requests
    cors_origins: str = "http://localhost:3000"  # URLs separadas por coma

    class Config:
        env_file = ".env"  # Lee desde el archivo .env
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignora campos extras del .env que no estén en el modelo


@lru_cache()
def get_settings() -> Settings:
    """Retorna la instancia de configuración (cacheada para no releerla)"""
    return Settings()
