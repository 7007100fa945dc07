from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional


type TransactionType = Literal["credit", "debit"]


@dataclass(frozen=True)
class Transaction:
    id: str
    type: TransactionType
    amount: int
    description: str
    timestamp: datetime


@dataclass(frozen=True)
class Wallet:
    user_id: str
    total_coins: int
    transactions: tuple[Transaction, ...]


@dataclass(frozen=True)
class Game:
    id: str
    name: str
    entry_cost: int
    current_players: int
    max_players: int
    description: str
    icon: str


@dataclass(frozen=True)
class CoinPack:
    id: int
    coins: int
    price: float
    bonus: int


@dataclass(frozen=True)
class GameSession:
    session_id: str
    game_id: str
    game_name: str


@dataclass(frozen=True)
class RechargeResult:
    success: bool
    new_balance: int
    transaction: Transaction


@dataclass(frozen=True)
class JoinResult:
    success: bool
    message: str
    new_balance: int
    transaction: Transaction
    game_session: GameSession


@dataclass(frozen=True)
class JoinAvailability:
    can_join: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class WalletAudit:
    user_id: str
    total_coins: int
    computed_coins: int
    chain_head: str
    consistent: bool
