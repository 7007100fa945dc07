import logging
import uuid

from helper.store_helper import Store, game_key, wallet_key
from schema.db import GameSession, JoinAvailability, JoinResult

from .errors import (
    ConsistencyError,
    GameFullError,
    InsufficientBalanceError,
    LedgerError,
    NotFoundError,
)
from .game import get_game, increment_player_count
from .wallet import debit, has_sufficient_balance

logger = logging.getLogger(__name__)


async def join_game(store: Store, user_id: str, game_id: str) -> JoinResult:
    """
    Charge the entry cost and take a seat in the game.

    Runs as one store transaction over the wallet and the game: the checks
    happen before any write, and if the seat can't be taken after the debit
    the whole thing is rolled back and reported as a ConsistencyError.
    """
    async with store.transaction(wallet_key(user_id), game_key(game_id)):
        game = await get_game(store, game_id)

        if game.current_players >= game.max_players:
            raise GameFullError()

        if not await has_sufficient_balance(store, user_id, game.entry_cost):
            raise InsufficientBalanceError("Insufficient coins to join this game")

        wallet = await debit(store, user_id, game.entry_cost, f"Joined {game.name}")

        try:
            _ = await increment_player_count(store, game_id)
        except LedgerError as exc:
            logger.error(
                "Debited %s for %s but could not reserve a seat; rolling back",
                user_id,
                game_id,
                exc_info=True,
            )
            raise ConsistencyError("Failed to update game state") from exc

    session = GameSession(
        session_id=str(uuid.uuid4()), game_id=game.id, game_name=game.name
    )
    logger.info("%s joined %s (session %s)", user_id, game.id, session.session_id)
    return JoinResult(
        success=True,
        message=f"Successfully joined {game.name}",
        new_balance=wallet.total_coins,
        transaction=wallet.transactions[0],
        game_session=session,
    )


async def can_join_game(store: Store, user_id: str, game_id: str) -> JoinAvailability:
    try:
        game = await get_game(store, game_id)
    except NotFoundError:
        return JoinAvailability(False, "Game not available")

    if game.current_players >= game.max_players:
        return JoinAvailability(False, "Game is full")

    if not await has_sufficient_balance(store, user_id, game.entry_cost):
        return JoinAvailability(False, "Insufficient coins")

    return JoinAvailability(True)
