"""Per-client request limits.

Every endpoint belongs to one bucket. A bucket counts requests per client
address across all of its routes in a fixed window:

- ``auth``: signup, activation, signin, refresh and signout
- ``database``: catalog and account writes
- ``common``: catalog and profile reads

Counting is done by the ``limits`` library. The default storage lives in
the process; a shared storage URL (e.g. ``async+redis://``) needs the
matching ``limits`` extra installed.
"""

from __future__ import annotations

import logging
import math
import time
from enum import Enum
from typing import TYPE_CHECKING

from limits import RateLimitItem, parse
from limits.aio.strategies import FixedWindowRateLimiter
from limits.storage import storage_from_string

from bookshelf.domain.shared.exceptions import TooManyRequestsError

if TYPE_CHECKING:
    from bookshelf_config.settings import Settings

logger = logging.getLogger(__name__)


class RateLimitBucket(str, Enum):
    AUTH = "auth"
    DATABASE = "database"
    COMMON = "common"


_BUCKET_SUBJECTS = {
    RateLimitBucket.AUTH: "authentication requests",
    RateLimitBucket.DATABASE: "database operations",
    RateLimitBucket.COMMON: "requests",
}


def describe_window(item: RateLimitItem) -> str:
    """Render the window of a limit, e.g. ``15 minutes`` or ``1 hour``."""
    unit = item.GRANULARITY.name
    if item.multiples != 1:
        unit += "s"
    return f"{item.multiples} {unit}"


class RequestRateLimiter:
    """Fixed-window request counter keyed by bucket and client address."""

    def __init__(
        self,
        limits: dict[RateLimitBucket, RateLimitItem],
        storage_url: str = "async+memory://",
        enabled: bool = True,
    ):
        missing = set(RateLimitBucket) - set(limits)
        if missing:
            msg = f"No limit configured for: {sorted(b.value for b in missing)}"
            raise ValueError(msg)
        self._limits = limits
        self._enabled = enabled
        self._storage = storage_from_string(storage_url)
        self._strategy = FixedWindowRateLimiter(self._storage)

    @classmethod
    def from_settings(cls, settings: Settings) -> RequestRateLimiter:
        return cls(
            limits={
                RateLimitBucket.AUTH: parse(settings.rate_limit_auth),
                RateLimitBucket.DATABASE: parse(settings.rate_limit_database),
                RateLimitBucket.COMMON: parse(settings.rate_limit_common),
            },
            storage_url=settings.rate_limit_storage_url,
            enabled=settings.rate_limit_enabled,
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    def limit_for(self, bucket: RateLimitBucket) -> RateLimitItem:
        return self._limits[bucket]

    async def hit(self, bucket: RateLimitBucket, client_id: str) -> None:
        """
        Count one request of ``client_id`` against ``bucket``.

        Raises
        ------
        TooManyRequestsError
            When the client has used up the bucket for the current window
        """
        if not self._enabled:
            return

        item = self._limits[bucket]
        if await self._strategy.hit(item, bucket.value, client_id):
            return

        stats = await self._strategy.get_window_stats(item, bucket.value, client_id)
        retry_after = max(0, math.ceil(stats.reset_time - time.time()))
        logger.warning("Rate limit %s exceeded by %s", bucket.value, client_id)
        raise TooManyRequestsError(
            f"Too many {_BUCKET_SUBJECTS[bucket]} from this IP, "
            f"please try again after {describe_window(item)}.",
            details={"retry_after": retry_after, "bucket": bucket.value},
        )

    async def reset(self) -> None:
        await self._storage.reset()
