"""SQLAlchemy implementation of PublisherRepository."""

import logging
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.domain.catalog import Publisher, PublisherRepository
from bookshelf.domain.shared.time import ensure_tz_aware
from bookshelf.infrastructure.persistence.sqlalchemy.models import PublisherModel

logger = logging.getLogger(__name__)


class PublisherRepositorySQLAlchemy(PublisherRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, publisher_id: int) -> Optional[Publisher]:
        model = await self._session.get(PublisherModel, publisher_id)
        return self._map_to_domain(model) if model is not None else None

    async def find_page(self, offset: int, limit: int) -> list[Publisher]:
        stmt = (
            select(PublisherModel)
            .order_by(PublisherModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(PublisherModel.id)))
        return result.scalar_one()

    async def save(self, publisher: Publisher) -> Publisher:
        model = None
        if publisher.id is not None:
            model = await self._session.get(PublisherModel, publisher.id)

        if model is None:
            model = PublisherModel(
                name=publisher.name,
                country=publisher.country,
                created_at=publisher.created_at,
                updated_at=publisher.updated_at,
            )
            self._session.add(model)
        else:
            model.name = publisher.name
            model.country = publisher.country
            model.updated_at = publisher.updated_at

        await self._session.flush()
        return self._map_to_domain(model)

    async def delete(self, publisher_id: int) -> None:
        await self._session.execute(
            delete(PublisherModel).where(PublisherModel.id == publisher_id),
        )
        await self._session.flush()
        logger.debug("Deleted publisher: %s", publisher_id)

    @staticmethod
    def _map_to_domain(model: PublisherModel) -> Publisher:
        return Publisher(
            id=model.id,
            name=model.name,
            country=model.country,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )
