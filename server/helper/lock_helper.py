import asyncio
from collections.abc import AsyncIterator, Hashable, Iterable
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Final

type LockKey = tuple[str, str]

# Keys held by the current task, so nested scopes don't wait on themselves.
_held_keys: ContextVar[frozenset[Hashable]] = ContextVar("held_keys", default=frozenset())


class KeyedLock:
    """
    One asyncio.Lock per key, acquired in sorted order for multi-key scopes.
    A key's lock only lives while some task holds it or waits on it.
    """

    def __init__(self):
        self._locks: Final[dict[Hashable, asyncio.Lock]] = {}
        self._users: Final[dict[Hashable, int]] = {}

    def _checkout(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._users[key] = self._users.get(key, 0) + 1
        return lock

    def _checkin(self, key: Hashable) -> None:
        remaining = self._users[key] - 1
        if remaining:
            self._users[key] = remaining
        else:
            del self._users[key]
            del self._locks[key]

    @asynccontextmanager
    async def acquire(self, keys: Iterable[LockKey]) -> AsyncIterator[None]:
        held = _held_keys.get()
        wanted = sorted(set(keys) - held)
        checked_out: list[LockKey] = []
        acquired: list[asyncio.Lock] = []
        try:
            for key in wanted:
                lock = self._checkout(key)
                checked_out.append(key)
                await lock.acquire()
                acquired.append(lock)
            token = _held_keys.set(held | frozenset(wanted))
            try:
                yield
            finally:
                _held_keys.reset(token)
        finally:
            for lock in reversed(acquired):
                lock.release()
            for key in checked_out:
                self._checkin(key)
