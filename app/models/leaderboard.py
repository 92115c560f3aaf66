from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, StrictInt


class ScoreEntry(BaseModel):
    """Mejor puntuación registrada de un usuario"""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)  # ID de Discord, clave única
    username: str = Field(..., min_length=1)  # Nombre a mostrar, puede quedar desactualizado
    score: int = Field(..., ge=0)


class ScoreSubmission(BaseModel):
    """Body del POST /api/leaderboard"""

    model_config = ConfigDict(populate_by_name=True)

    score: StrictInt  # 10.0, "10" o true no son puntuaciones válidas
    # Compatibilidad con el cliente viejo que mandaba la identidad en el body
    user_id: Optional[str] = Field(None, alias="userId")
    username: Optional[str] = None


class SubmitResult(BaseModel):
    previous_score: Optional[int] = None
    best_score: int
    improved: bool


class SubmitResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    improved: bool
    previous_score: Optional[int] = Field(None, alias="previousScore")
    best_score: int = Field(..., alias="bestScore")
