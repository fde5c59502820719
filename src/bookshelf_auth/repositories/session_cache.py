"""Abstract interface for the session cache.

The cache is a flat key/value store with per-key expiry. The session
manager keeps exactly one refresh token per user in it.
"""

from abc import ABC, abstractmethod


class SessionCache(ABC):
    """Key/value store with expiry.

    Every method raises ``SessionCacheError`` when the backend is
    unreachable or rejects the command.
    """

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Parameters
        ----------
        key
            Cache key (implementations may prefix it)
        value
            Value to store
        ttl_seconds
            Seconds until the entry expires, must be positive
        """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if absent or expired."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``. Removing a missing key is not an error."""

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the backend is reachable."""

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the cache."""
