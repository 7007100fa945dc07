from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class TransactionOut(CamelModel):
    id: str
    type: Literal["credit", "debit"]
    amount: int
    description: str
    timestamp: datetime


class WalletOut(CamelModel):
    user_id: str
    total_coins: int
    transactions: list[TransactionOut]


class GameOut(CamelModel):
    id: str
    name: str
    entry_cost: int
    current_players: int
    max_players: int
    description: str
    icon: str


class CoinPackOut(CamelModel):
    id: int
    coins: int
    price: float
    bonus: int


class GameSessionOut(CamelModel):
    session_id: str
    game_id: str
    game_name: str


class RechargeOut(CamelModel):
    success: bool
    new_balance: int
    transaction: TransactionOut


class JoinOut(CamelModel):
    success: bool
    message: str
    new_balance: int
    transaction: TransactionOut
    game_session: GameSessionOut


class AvailabilityOut(CamelModel):
    can_join: bool
    reason: Optional[str] = None


class WalletAuditOut(CamelModel):
    user_id: str
    total_coins: int
    computed_coins: int
    chain_head: str
    consistent: bool


class RechargeReq(CamelModel):
    pack_id: StrictInt


class JoinReq(CamelModel):
    game_id: StrictStr = Field(min_length=1)
