from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from database.coin_pack import best_value_pack, list_coin_packs
from database.errors import CoinPackNotFoundError
from helper.store_helper import Store, get_store
from schema.api import CoinPackOut

coin_pack_router = APIRouter()


@coin_pack_router.get("", response_model=list[CoinPackOut])
async def handle_list_coin_packs(
    store: Annotated[Store, Depends(get_store)],
) -> list[CoinPackOut]:
    return [CoinPackOut.model_validate(p) for p in await list_coin_packs(store)]


@coin_pack_router.get("/best-value", response_model=CoinPackOut)
async def handle_best_value_pack(
    store: Annotated[Store, Depends(get_store)],
) -> CoinPackOut:
    try:
        pack = await best_value_pack(store)
    except CoinPackNotFoundError as exc:
        raise HTTPException(404, exc.message)
    return CoinPackOut.model_validate(pack)
