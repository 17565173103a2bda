"""Advisory, in-process named locks used to serialize certificate issuance.

One caller claims a name (typically a domain); everyone else gets a
Waiter they can block on until the owner unlocks. Claims are not shared
between processes: two hosts on the same bucket can still issue for the
same domain concurrently.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum

from acmevault.errors import LockError

logger = logging.getLogger(__name__)


class LockState(Enum):
    UNCLAIMED = "unclaimed"
    CLAIMED = "claimed"


@dataclass
class _LockEntry:
    """Table entry; a name is claimed exactly while its entry is in the table.

    ``released`` wakes blocked threads, ``futures`` wake waiting tasks on
    their own event loops.
    """

    released: threading.Event = field(default_factory=threading.Event)
    futures: list[asyncio.Future[None]] = field(default_factory=list)


def _wake(fut: asyncio.Future[None]) -> None:
    # Cancelled or timed-out waiters leave done futures behind
    if not fut.done():
        fut.set_result(None)


class Waiter:
    """Handle on somebody else's claim.

    Waiting does not acquire the lock; call ``try_lock`` again afterwards.
    """

    def __init__(self, name: str, entry: _LockEntry, mu: threading.Lock) -> None:
        self.name = name
        self._entry = entry
        self._mu = mu

    @property
    def released(self) -> bool:
        return self._entry.released.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block the calling thread until release. False on timeout."""
        return self._entry.released.wait(timeout)

    async def wait_async(self, timeout: float | None = None) -> bool:
        """Suspend the calling task until release. False on timeout.

        Occupies no executor thread while suspended.
        """
        loop = asyncio.get_running_loop()
        with self._mu:
            if self._entry.released.is_set():
                return True
            fut: asyncio.Future[None] = loop.create_future()
            self._entry.futures.append(fut)
        try:
            await asyncio.wait_for(fut, timeout)
        except asyncio.TimeoutError:
            return False
        finally:
            with self._mu:
                if fut in self._entry.futures:
                    self._entry.futures.remove(fut)
        return True

    def __repr__(self) -> str:
        return f"Waiter(name={self.name!r}, released={self.released})"


class NameLocks:
    """Table of claimed names guarded by a single mutex.

    The mutex is held only while the table is read or changed, never
    while a caller waits.
    """

    def __init__(self) -> None:
        self._mu = threading.Lock()
        self._entries: dict[str, _LockEntry] = {}

    def try_lock(self, name: str) -> Waiter | None:
        """Claim ``name``. Returns None on success, else a Waiter. Never blocks."""
        with self._mu:
            entry = self._entries.get(name)
            if entry is not None:
                return Waiter(name, entry, self._mu)
            self._entries[name] = _LockEntry()
        logger.debug("Claimed lock %s", name)
        return None

    def unlock(self, name: str) -> None:
        """Release ``name`` and wake its waiters. LockError if not claimed.

        Safe to call from any thread; waiting tasks resume on their own loop.
        """
        with self._mu:
            entry = self._entries.pop(name, None)
            if entry is None:
                raise LockError(name)
            entry.released.set()
            for fut in entry.futures:
                loop = fut.get_loop()
                if not loop.is_closed():
                    loop.call_soon_threadsafe(_wake, fut)
            entry.futures.clear()
        logger.debug("Released lock %s", name)

    def state(self, name: str) -> LockState:
        with self._mu:
            return LockState.CLAIMED if name in self._entries else LockState.UNCLAIMED

    def claimed(self) -> list[str]:
        with self._mu:
            return sorted(self._entries)

    def __len__(self) -> int:
        with self._mu:
            return len(self._entries)
