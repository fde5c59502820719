"""SQLAlchemy implementation of AuthorRepository."""

import logging
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.domain.catalog import Author, AuthorRepository
from bookshelf.domain.shared.time import ensure_tz_aware
from bookshelf.infrastructure.persistence.sqlalchemy.models import AuthorModel

logger = logging.getLogger(__name__)


class AuthorRepositorySQLAlchemy(AuthorRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, author_id: int) -> Optional[Author]:
        model = await self._session.get(AuthorModel, author_id)
        return self._map_to_domain(model) if model is not None else None

    async def find_page(self, offset: int, limit: int) -> list[Author]:
        stmt = select(AuthorModel).order_by(AuthorModel.id).offset(offset).limit(limit)
        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(AuthorModel.id)))
        return result.scalar_one()

    async def save(self, author: Author) -> Author:
        model = None
        if author.id is not None:
            model = await self._session.get(AuthorModel, author.id)

        if model is None:
            model = AuthorModel(
                name=author.name,
                country=author.country,
                created_at=author.created_at,
                updated_at=author.updated_at,
            )
            self._session.add(model)
        else:
            model.name = author.name
            model.country = author.country
            model.updated_at = author.updated_at

        await self._session.flush()
        return self._map_to_domain(model)

    async def delete(self, author_id: int) -> None:
        await self._session.execute(
            delete(AuthorModel).where(AuthorModel.id == author_id),
        )
        await self._session.flush()
        logger.debug("Deleted author: %s", author_id)

    @staticmethod
    def _map_to_domain(model: AuthorModel) -> Author:
        return Author(
            id=model.id,
            name=model.name,
            country=model.country,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )
