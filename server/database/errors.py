class LedgerError(Exception):
    """Base class for wallet and lobby failures that carry a user-facing message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message: str = message


class NotFoundError(LedgerError, LookupError): ...


class WalletNotFoundError(NotFoundError):
    def __init__(self, message: str = "Wallet not found for user"):
        super().__init__(message)


class GameNotFoundError(NotFoundError):
    def __init__(self, message: str = "Game not found"):
        super().__init__(message)


class CoinPackNotFoundError(NotFoundError):
    def __init__(self, message: str = "Invalid coin pack selected"):
        super().__init__(message)


class InvalidAmountError(LedgerError, ValueError): ...


class InsufficientBalanceError(LedgerError, ValueError):
    def __init__(self, message: str = "Insufficient balance"):
        super().__init__(message)


class GameFullError(LedgerError):
    def __init__(self, message: str = "Game is full"):
        super().__init__(message)


class ConsistencyError(LedgerError):
    """Raised when a join debited the wallet but could not reserve the game slot."""
