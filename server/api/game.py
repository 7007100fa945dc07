import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from database.errors import (
    ConsistencyError,
    GameFullError,
    InsufficientBalanceError,
    InvalidAmountError,
    NotFoundError,
)
from database.game import list_games
from database.lobby import can_join_game, join_game
from helper.store_helper import Store, get_store
from helper.user_helper import get_user
from schema.api import AvailabilityOut, GameOut, JoinOut, JoinReq

logger = logging.getLogger(__name__)

game_router = APIRouter()


@game_router.get("", response_model=list[GameOut])
async def handle_list_games(
    store: Annotated[Store, Depends(get_store)],
) -> list[GameOut]:
    return [GameOut.model_validate(g) for g in await list_games(store)]


@game_router.post("/join", response_model=JoinOut)
async def handle_join_game(
    store: Annotated[Store, Depends(get_store)],
    user_id: Annotated[str, Depends(get_user)],
    join_req: JoinReq,
) -> JoinOut:
    try:
        result = await join_game(store, user_id, join_req.game_id)
    except NotFoundError as exc:
        raise HTTPException(404, exc.message)
    except (GameFullError, InsufficientBalanceError) as exc:
        raise HTTPException(400, exc.message)
    except (ConsistencyError, InvalidAmountError) as exc:
        logger.error("Join of %s by %s failed: %s", join_req.game_id, user_id, exc.message)
        raise HTTPException(500, exc.message)
    return JoinOut.model_validate(result)


@game_router.get(
    "/{game_id}/availability",
    response_model=AvailabilityOut,
    response_model_exclude_none=True,
)
async def handle_game_availability(
    store: Annotated[Store, Depends(get_store)],
    user_id: Annotated[str, Depends(get_user)],
    game_id: str,
) -> AvailabilityOut:
    return AvailabilityOut.model_validate(await can_join_game(store, user_id, game_id))
