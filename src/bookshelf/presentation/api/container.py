"""Process-wide collaborators built once per application.

The container is created in the lifespan and stored on ``app.state`` so
every request shares one engine, one session cache client, one token
codec and one request counter.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from bookshelf.infrastructure.persistence.sqlalchemy.database import (
    create_engine,
    create_session_maker,
)
from bookshelf.presentation.api.rate_limit import RequestRateLimiter
from bookshelf_auth import PasswordHashingService, SessionCache, TokenCodec, TokenPolicy
from bookshelf_auth.persistence import InMemorySessionCache, RedisSessionCache
from bookshelf_config.settings import TOKEN_ISSUER, Settings

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    settings: Settings
    engine: AsyncEngine
    session_maker: async_sessionmaker[AsyncSession]
    session_cache: SessionCache
    token_codec: TokenCodec
    password_service: PasswordHashingService
    rate_limiter: RequestRateLimiter

    async def close(self) -> None:
        await self.session_cache.close()
        await self.engine.dispose()
        logger.info("Database connections and session cache closed")


def build_session_cache(settings: Settings) -> SessionCache:
    if settings.session_cache_backend == "memory":
        logger.warning("Using in-process session cache (not shared between workers)")
        return InMemorySessionCache()

    return RedisSessionCache(
        settings.redis_url,
        socket_timeout=settings.redis_socket_timeout,
    )


def build_token_codec(settings: Settings) -> TokenCodec:
    return TokenCodec(
        access_policy=TokenPolicy.from_config(
            settings.access_token_secret.get_secret_value(),
            settings.access_token_expiration,
        ),
        refresh_policy=TokenPolicy.from_config(
            settings.refresh_token_secret.get_secret_value(),
            settings.refresh_token_expiration,
        ),
        issuer=TOKEN_ISSUER,
    )


def build_container(settings: Settings) -> AppContainer:
    engine = create_engine(settings.database_url, echo=settings.debug)
    return AppContainer(
        settings=settings,
        engine=engine,
        session_maker=create_session_maker(engine),
        session_cache=build_session_cache(settings),
        token_codec=build_token_codec(settings),
        password_service=PasswordHashingService(rounds=settings.password_hash_rounds),
        rate_limiter=RequestRateLimiter.from_settings(settings),
    )
