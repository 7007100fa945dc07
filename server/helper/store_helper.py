import logging
import uuid
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime, timezone
from typing import Final

from fastapi import Request
from fastapi.applications import FastAPI

from crypto.ledger_hash import GENESIS_LINK, chain_link
from helper.lock_helper import KeyedLock, LockKey
from schema.db import CoinPack, Game, Transaction, Wallet

logger = logging.getLogger(__name__)

DEMO_USER_ID: Final[str] = "user-123"

SEED_GAMES: Final[tuple[Game, ...]] = (
    Game(
        id="challenge-connect",
        name="Challenge & Connect",
        entry_cost=10,
        current_players=24,
        max_players=100,
        description="Test your skills and connect with friends",
        icon="target",
    ),
    Game(
        id="snake-ladder",
        name="Snake & Ladder",
        entry_cost=15,
        current_players=18,
        max_players=50,
        description="Classic board game with a digital twist",
        icon="gamepad",
    ),
)

SEED_COIN_PACKS: Final[tuple[CoinPack, ...]] = (
    CoinPack(id=1, coins=50, price=0.99, bonus=0),
    CoinPack(id=2, coins=100, price=1.99, bonus=10),
    CoinPack(id=3, coins=250, price=4.99, bonus=50),
    CoinPack(id=4, coins=500, price=9.99, bonus=150),
)

# Oldest first; the ledger prepends, so the wallet ends up newest-first.
SEED_CREDITS: Final[tuple[tuple[int, str, datetime], ...]] = (
    (50, "Welcome bonus", datetime(2025, 6, 25, tzinfo=timezone.utc)),
    (50, "Daily reward", datetime(2025, 6, 26, tzinfo=timezone.utc)),
)


def wallet_key(user_id: str) -> LockKey:
    return ("wallet", user_id)


def game_key(game_id: str) -> LockKey:
    return ("game", game_id)


type Snapshot = dict[LockKey, tuple[object, ...]]


class Store:
    """Process-memory tables for wallets, games and coin packs.

    Records are frozen dataclasses; a write swaps the whole record, so readers
    never see half-applied changes. Writers go through `transaction()`.
    """

    def __init__(self, coin_packs: Iterable[CoinPack] = ()):
        self.wallets: dict[str, Wallet] = {}
        self.wallet_links: dict[str, tuple[str, ...]] = {}
        self.games: dict[str, Game] = {}
        self.coin_packs: tuple[CoinPack, ...] = tuple(coin_packs)
        self._locks: Final[KeyedLock] = KeyedLock()

    @asynccontextmanager
    async def transaction(self, *keys: LockKey) -> AsyncIterator["Store"]:
        async with self._locks.acquire(keys):
            journal = self._snapshot(keys)
            try:
                yield self
            except BaseException:
                self._restore(journal)
                logger.debug("Rolled back store transaction on %s", keys)
                raise

    def _snapshot(self, keys: Iterable[LockKey]) -> Snapshot:
        journal: Snapshot = {}
        for key in keys:
            kind, ident = key
            if kind == "wallet":
                journal[key] = (self.wallets.get(ident), self.wallet_links.get(ident))
            elif kind == "game":
                journal[key] = (self.games.get(ident),)
            else:
                raise ValueError(f"Unknown store key kind {kind!r}")
        return journal

    def _restore(self, journal: Snapshot) -> None:
        for (kind, ident), saved in journal.items():
            if kind == "wallet":
                wallet, links = saved
                _restore_entry(self.wallets, ident, wallet)
                _restore_entry(self.wallet_links, ident, links)
            else:
                _restore_entry(self.games, ident, saved[0])

    def open_wallet(self, user_id: str) -> Wallet:
        wallet = self.wallets.get(user_id)
        if wallet is None:
            wallet = Wallet(user_id=user_id, total_coins=0, transactions=())
            self.wallets[user_id] = wallet
            self.wallet_links[user_id] = ()
        return wallet

    def put_transaction(self, user_id: str, transaction: Transaction) -> Wallet:
        """Apply a transaction without any balance checks. Callers validate first."""
        wallet = self.wallets[user_id]
        links = self.wallet_links.get(user_id, ())
        signed = transaction.amount if transaction.type == "credit" else -transaction.amount
        link = chain_link(links[0] if links else GENESIS_LINK, transaction)
        updated = replace(
            wallet,
            total_coins=wallet.total_coins + signed,
            transactions=(transaction, *wallet.transactions),
        )
        self.wallets[user_id] = updated
        self.wallet_links[user_id] = (link, *links)
        return updated

    def put_game(self, game: Game) -> Game:
        self.games[game.id] = game
        return game


def _restore_entry[T](table: dict[str, T], ident: str, value: T | None) -> None:
    if value is None:
        _ = table.pop(ident, None)
    else:
        table[ident] = value


def create_store(demo_user_id: str = DEMO_USER_ID) -> Store:
    store = Store(SEED_COIN_PACKS)
    for game in SEED_GAMES:
        _ = store.put_game(game)
    _ = store.open_wallet(demo_user_id)
    for amount, description, timestamp in SEED_CREDITS:
        _ = store.put_transaction(
            demo_user_id,
            Transaction(str(uuid.uuid4()), "credit", amount, description, timestamp),
        )
    logger.info(
        "Seeded store: %d games, %d coin packs, wallet %s",
        len(store.games),
        len(store.coin_packs),
        demo_user_id,
    )
    return store


async def init_store(app: FastAPI, demo_user_id: str = DEMO_USER_ID):
    app.state.store = create_store(demo_user_id)


async def close_store(app: FastAPI):
    store: Store | None = getattr(app.state, "store", None)
    if store:
        logger.info("Dropping in-memory store (%d wallets)", len(store.wallets))
        app.state.store = None


async def get_store(request: Request) -> Store:
    return request.app.state.store  # pyright: ignore[reportAny]
