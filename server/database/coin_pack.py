from helper.store_helper import Store
from schema.db import CoinPack

from .errors import CoinPackNotFoundError


async def list_coin_packs(store: Store) -> list[CoinPack]:
    return list(store.coin_packs)


async def get_coin_pack(store: Store, pack_id: int) -> CoinPack:
    for pack in store.coin_packs:
        if pack.id == pack_id:
            return pack
    raise CoinPackNotFoundError()


def total_coins(pack: CoinPack) -> int:
    return pack.coins + pack.bonus


def pack_description(pack: CoinPack) -> str:
    if pack.bonus > 0:
        return f"Recharge: {pack.coins} coins + {pack.bonus} bonus"
    return f"Recharge: {pack.coins} coins"


def pack_value(pack: CoinPack) -> float | None:
    # coins per unit of price
    if pack.price <= 0:
        return None
    return total_coins(pack) / pack.price


async def best_value_pack(store: Store) -> CoinPack:
    packs = await list_coin_packs(store)
    if not packs:
        raise CoinPackNotFoundError("No coin packs available")
    best = packs[0]
    best_value = 0.0
    for pack in packs:
        value = pack_value(pack)
        if value is not None and value > best_value:
            best, best_value = pack, value
    return best
