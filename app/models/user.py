from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

DISCORD_CDN_URL = "https://cdn.discordapp.com"


class Identity(BaseModel):
    """Usuario autenticado con Discord (viaja dentro del token de sesión)"""

    id: str  # Snowflake de Discord
    username: str
    avatar: Optional[str] = None  # Hash del avatar en el CDN de Discord

    @property
    def avatar_url(self) -> Optional[str]:
        if not self.avatar:
            return None
        return f"{DISCORD_CDN_URL}/avatars/{self.id}/{self.avatar}.png"


class UserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    avatar: Optional[str] = None
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")


class SessionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    logged_in: bool = Field(..., alias="loggedIn")
    user: Optional[UserResponse] = None
