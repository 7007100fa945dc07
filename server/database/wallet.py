import logging
import uuid
from datetime import datetime, timezone

from crypto.ledger_hash import GENESIS_LINK, replay_chain
from helper.store_helper import Store, wallet_key
from schema.db import Transaction, TransactionType, Wallet, WalletAudit

from .errors import InsufficientBalanceError, InvalidAmountError, WalletNotFoundError

logger = logging.getLogger(__name__)


def _check_amount(amount: int, verb: str) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(f"{verb} amount must be a whole number of coins")
    if amount <= 0:
        raise InvalidAmountError(f"{verb} amount must be positive")


def _new_transaction(type_: TransactionType, amount: int, description: str) -> Transaction:
    return Transaction(
        id=str(uuid.uuid4()),
        type=type_,
        amount=amount,
        description=description,
        timestamp=datetime.now(timezone.utc),
    )


async def get_wallet(store: Store, user_id: str) -> Wallet:
    wallet = store.wallets.get(user_id)
    if wallet is None:
        raise WalletNotFoundError()
    return wallet


async def credit(store: Store, user_id: str, amount: int, description: str) -> Wallet:
    _check_amount(amount, "Credit")
    async with store.transaction(wallet_key(user_id)):
        _ = await get_wallet(store, user_id)
        wallet = store.put_transaction(
            user_id, _new_transaction("credit", amount, description)
        )
    logger.info("Credited %d to %s (%s)", amount, user_id, description)
    return wallet


async def debit(store: Store, user_id: str, amount: int, description: str) -> Wallet:
    _check_amount(amount, "Debit")
    async with store.transaction(wallet_key(user_id)):
        current = await get_wallet(store, user_id)
        if current.total_coins < amount:
            raise InsufficientBalanceError()
        wallet = store.put_transaction(
            user_id, _new_transaction("debit", amount, description)
        )
    logger.info("Debited %d from %s (%s)", amount, user_id, description)
    return wallet


async def has_sufficient_balance(store: Store, user_id: str, amount: int) -> bool:
    try:
        wallet = await get_wallet(store, user_id)
    except WalletNotFoundError:
        return False
    return wallet.total_coins >= amount


async def recent_transactions(
    store: Store, user_id: str, limit: int = 10
) -> list[Transaction]:
    if limit < 0:
        raise InvalidAmountError("limit must be >= 0")
    wallet = await get_wallet(store, user_id)
    return list(wallet.transactions[:limit])


async def verify_wallet(store: Store, user_id: str) -> WalletAudit:
    """
    Recompute the wallet's balance from its history and replay its hash chain.
    The audit is consistent when both match what the store holds and the
    balance is non-negative.
    """
    wallet = await get_wallet(store, user_id)
    computed = sum(
        t.amount if t.type == "credit" else -t.amount for t in wallet.transactions
    )
    links = store.wallet_links.get(user_id, ())
    head = links[0] if links else GENESIS_LINK
    replayed = replay_chain(list(reversed(wallet.transactions)))
    consistent = (
        computed == wallet.total_coins
        and wallet.total_coins >= 0
        and replayed == head
        and len(links) == len(wallet.transactions)
    )
    if not consistent:
        logger.error(
            "Wallet %s failed audit: stored=%d computed=%d chain_ok=%s",
            user_id,
            wallet.total_coins,
            computed,
            replayed == head,
        )
    return WalletAudit(
        user_id=user_id,
        total_coins=wallet.total_coins,
        computed_coins=computed,
        chain_head=head,
        consistent=consistent,
    )
