from typing import Final

from cryptography.hazmat.primitives.hashes import Hash, SHA3_512

from schema.db import Transaction

GENESIS_LINK: Final[str] = "0" * 128


def sha3_512_hex(data: str) -> str:
    h = Hash(SHA3_512())
    h.update(data.encode())
    return h.finalize().hex()


def transaction_data(transaction: Transaction) -> str:
    return "::".join(
        (
            transaction.id,
            transaction.type,
            str(transaction.amount),
            transaction.description,
            transaction.timestamp.isoformat(),
        )
    )


def chain_link(previous_link: str, transaction: Transaction) -> str:
    """Fold a transaction into the wallet's hash chain: H(prev :: H(data))."""
    self_hash = sha3_512_hex(transaction_data(transaction))
    return sha3_512_hex(f"{previous_link}::{self_hash}")


def replay_chain(oldest_first: list[Transaction]) -> str:
    link = GENESIS_LINK
    for transaction in oldest_first:
        link = chain_link(link, transaction)
    return link
