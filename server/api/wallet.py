from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from database.errors import CoinPackNotFoundError, InvalidAmountError, WalletNotFoundError
from database.recharge import process_recharge
from database.wallet import get_wallet, recent_transactions, verify_wallet
from helper.store_helper import Store, get_store
from helper.user_helper import get_user
from schema.api import RechargeOut, RechargeReq, TransactionOut, WalletAuditOut, WalletOut

wallet_router = APIRouter()


@wallet_router.get("", response_model=WalletOut)
async def handle_get_wallet(
    store: Annotated[Store, Depends(get_store)],
    user_id: Annotated[str, Depends(get_user)],
) -> WalletOut:
    try:
        wallet = await get_wallet(store, user_id)
    except WalletNotFoundError as exc:
        raise HTTPException(404, exc.message)
    return WalletOut.model_validate(wallet)


@wallet_router.get("/transactions", response_model=list[TransactionOut])
async def handle_recent_transactions(
    store: Annotated[Store, Depends(get_store)],
    user_id: Annotated[str, Depends(get_user)],
    limit: Annotated[int, Query(ge=0, le=100)] = 10,
) -> list[TransactionOut]:
    try:
        transactions = await recent_transactions(store, user_id, limit)
    except WalletNotFoundError as exc:
        raise HTTPException(404, exc.message)
    return [TransactionOut.model_validate(t) for t in transactions]


@wallet_router.get("/audit", response_model=WalletAuditOut)
async def handle_audit_wallet(
    store: Annotated[Store, Depends(get_store)],
    user_id: Annotated[str, Depends(get_user)],
) -> WalletAuditOut:
    try:
        audit = await verify_wallet(store, user_id)
    except WalletNotFoundError as exc:
        raise HTTPException(404, exc.message)
    return WalletAuditOut.model_validate(audit)


@wallet_router.post("/recharge", response_model=RechargeOut)
async def handle_recharge(
    store: Annotated[Store, Depends(get_store)],
    user_id: Annotated[str, Depends(get_user)],
    recharge_req: RechargeReq,
) -> RechargeOut:
    try:
        result = await process_recharge(store, user_id, recharge_req.pack_id)
    except (CoinPackNotFoundError, InvalidAmountError, WalletNotFoundError) as exc:
        raise HTTPException(400, exc.message)
    return RechargeOut.model_validate(result)
