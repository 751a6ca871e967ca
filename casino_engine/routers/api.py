from fastapi import APIRouter, Request, HTTPException
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Optional
from slowapi import Limiter
from slowapi.util import get_remote_address

from casino_engine.config import settings
from casino_engine.core.engine import engine
from casino_engine.core.logger import get_logger

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit.enabled)

logger = get_logger("api")

router = APIRouter()

# ==================== Request Models ====================


class PlayRequest(BaseModel):
    game_type: str
    bet_amount: float = 0.0
    game_data: Optional[Dict[str, Any]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ==================== Helpers ====================


def get_user_id(request: Request) -> str:
    """Caller identity, set as a cookie by the auth collaborator."""
    user_id = request.cookies.get("user_id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Not logged in")
    return user_id


def get_rate_limit() -> str:
    """Get rate limit string from config."""
    return settings.rate_limit.game_requests


# ==================== Game Endpoints ====================


@router.get("/games")
async def list_games():
    games = []
    for game_type in engine.dispatcher.game_types:
        game = engine.dispatcher.get_game(game_type)
        game_config = engine.config.get_game_config(game.game_type)
        games.append(
            {
                "type": game.game_type,
                "name": game.display_name,
                "multiStep": game.stateful,
                "isActive": game_config.enabled,
                "minBet": game_config.min_bet,
                "maxBet": game_config.max_bet,
            }
        )
    return games


@router.post("/games/play")
@limiter.limit(get_rate_limit)
async def play_game(request: Request, data: PlayRequest):
    user_id = get_user_id(request)
    logger.debug(f"Play request from {user_id}: {data.game_type}")

    result = engine.play(user_id, data.game_type, data.bet_amount, data.game_data)
    return result.to_dict()


# ==================== User Endpoints ====================


@router.get("/user/balance")
async def get_balance(request: Request):
    user_id = get_user_id(request)
    return {
        "balance": engine.wallet.get_balance(user_id),
        "available": engine.wallet.get_available(user_id),
    }


@router.get("/user/transactions")
async def get_transactions(request: Request):
    user_id = get_user_id(request)
    return engine.wallet.get_transactions(user_id)


@router.get("/user/game-history")
async def get_game_history(request: Request):
    user_id = get_user_id(request)
    return [record.to_dict() for record in engine.history.get_user_history(user_id)]


# ==================== Leaderboard ====================


@router.get("/leaderboard")
async def get_leaderboard():
    return engine.history.get_leaderboard(limit=10)
