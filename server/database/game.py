import logging
from dataclasses import replace

from helper.store_helper import Store, game_key
from schema.db import Game

from .errors import GameNotFoundError

logger = logging.getLogger(__name__)


async def list_games(store: Store) -> list[Game]:
    # Records are frozen, so handing them out can't leak write access.
    return list(store.games.values())


async def get_game(store: Store, game_id: str) -> Game:
    game = store.games.get(game_id)
    if game is None:
        raise GameNotFoundError()
    return game


async def increment_player_count(store: Store, game_id: str) -> Game:
    """
    Add one player to the game. The max_players cap is checked by the caller
    (see database.lobby.join_game), not here.
    """
    async with store.transaction(game_key(game_id)):
        game = await get_game(store, game_id)
        updated = store.put_game(replace(game, current_players=game.current_players + 1))
    logger.debug(
        "Game %s now has %d/%d players",
        game_id,
        updated.current_players,
        updated.max_players,
    )
    return updated
