"""
Keyed response cache with optimistic updates.

A mutation first applies its expected effect to the cached value and
keeps a snapshot of the previous one; the snapshot is restored if the
request fails and dropped once the server confirms.

Dependencies: None
System role: Client-side state for EcoCycleClient
"""

import copy
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator


@dataclass(frozen=True)
class _Snapshot:
    key: str
    value: Any


class OptimisticCache:
    """Thread-safe dict of cached responses plus pending snapshots."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._snapshots: dict[str, _Snapshot] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            if key not in self._data:
                return default
            return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def apply_optimistic(self, key: str, updater: Callable[[Any], Any]) -> str | None:
        """
        Replace the cached value with ``updater(value)``.

        Args:
            key: Cache key
            updater: Receives a copy of the current value, returns the new one

        Returns:
            str | None: Token for rollback/commit, or None when nothing is
            cached under ``key`` (there is nothing to update)
        """
        with self._lock:
            if key not in self._data:
                return None
            previous = self._data[key]
            self._data[key] = updater(copy.deepcopy(previous))
            token = uuid.uuid4().hex
            self._snapshots[token] = _Snapshot(key=key, value=previous)
            return token

    def rollback(self, token: str | None) -> bool:
        """Restore the value captured by ``token``. Returns False for unknown tokens."""
        if token is None:
            return False
        with self._lock:
            snapshot = self._snapshots.pop(token, None)
            if snapshot is None:
                return False
            self._data[snapshot.key] = snapshot.value
            return True

    def commit(self, token: str | None) -> None:
        if token is None:
            return
        with self._lock:
            self._snapshots.pop(token, None)

    @contextmanager
    def optimistic(self, key: str, updater: Callable[[Any], Any]) -> Iterator[str | None]:
        """
        Apply ``updater`` for the duration of a block.

        Any exception leaving the block rolls the value back, cancellation
        included; a clean exit commits.

        Usage:
            with cache.optimistic("profile", credit):
                await send_request()
        """
        token = self.apply_optimistic(key, updater)
        try:
            yield token
        except BaseException:
            self.rollback(token)
            raise
        self.commit(token)

    @property
    def pending(self) -> int:
        """Snapshots still waiting for commit or rollback."""
        with self._lock:
            return len(self._snapshots)

    def invalidate(self, prefix: str = "") -> int:
        """
        Drop every key starting with ``prefix`` (everything when empty).

        Pending snapshots for dropped keys are discarded too, so a later
        rollback cannot resurrect a stale value.

        Returns:
            int: Number of keys removed
        """
        with self._lock:
            doomed = [key for key in self._data if key.startswith(prefix)]
            for key in doomed:
                del self._data[key]
            for token in [t for t, s in self._snapshots.items() if s.key.startswith(prefix)]:
                del self._snapshots[token]
            return len(doomed)
