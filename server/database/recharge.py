import logging

from helper.store_helper import Store
from schema.db import RechargeResult

from .coin_pack import get_coin_pack, pack_description, total_coins
from .wallet import credit

logger = logging.getLogger(__name__)


async def process_recharge(store: Store, user_id: str, pack_id: int) -> RechargeResult:
    pack = await get_coin_pack(store, pack_id)

    # No payment gateway: the purchase always settles.
    wallet = await credit(store, user_id, total_coins(pack), pack_description(pack))
    logger.info("Recharge of pack %d for %s settled", pack.id, user_id)
    return RechargeResult(
        success=True,
        new_balance=wallet.total_coins,
        transaction=wallet.transactions[0],
    )
