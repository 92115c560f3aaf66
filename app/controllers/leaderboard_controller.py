"""
Controlador de leaderboard - Endpoints de clasificación

La lista completa vive en una sola key del store. Leer es público;
enviar una puntuación requiere sesión de Discord.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from app.core.dependencies import CurrentUser, Store
from app.models.leaderboard import ScoreEntry, ScoreSubmission, SubmitResponse
from app.services.leaderboard_service import LeaderboardService, InvalidScoreError
from app.stores.base import StoreUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])


class UserRankResponse(BaseModel):
    """Posición del usuario actual (rank None si todavía no tiene puntuación)."""
    rank: Optional[int] = None
    entry: Optional[ScoreEntry] = None


def _store_unavailable(e: StoreUnavailableError) -> HTTPException:
    logger.error(f"❌ Store no disponible: {e}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Leaderboard temporarily unavailable, try again"
    )


@router.get("", response_model=list[ScoreEntry])
async def get_leaderboard(
    store: Store,
    limit: Optional[int] = Query(None, ge=0, description="Max entries (default 10, capped at 100)")
):
    """
    Obtener las mejores puntuaciones, de mayor a menor.

    No requiere autenticación.
    """
    leaderboard_service = LeaderboardService(store)

    try:
        return await leaderboard_service.get_top(limit)
    except InvalidScoreError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.post("", response_model=SubmitResponse)
async def submit_score(
    submission: ScoreSubmission,
    user: CurrentUser,
    store: Store
):
    """
    Enviar una puntuación.

    Solo se guarda si supera la mejor puntuación del usuario; si no, la
    respuesta sigue siendo exitosa y el leaderboard no cambia.
    """
    if submission.user_id is not None and submission.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="userId does not match the logged in user"
        )

    leaderboard_service = LeaderboardService(store)

    try:
        result = await leaderboard_service.submit_score(user, submission.score)
    except InvalidScoreError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except StoreUnavailableError as e:
        raise _store_unavailable(e)

    return SubmitResponse(
        improved=result.improved,
        previous_score=result.previous_score,
        best_score=result.best_score
    )


@router.get("/me", response_model=UserRankResponse)
async def get_my_leaderboard_position(user: CurrentUser, store: Store):
    """
    Obtener la posición del usuario actual en el leaderboard.
    """
    leaderboard_service = LeaderboardService(store)

    try:
        result = await leaderboard_service.get_user_rank(user.id)
    except StoreUnavailableError as e:
        raise _store_unavailable(e)

    if not result:
        return UserRankResponse()

    return UserRankResponse(rank=result["rank"], entry=result["entry"])
