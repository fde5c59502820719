"""Publisher management."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from bookshelf.application.dtos.pagination import Page, PageRequest
from bookshelf.domain.catalog import (
    HasDependentBooksError,
    Publisher,
    PublisherNotFoundError,
)

if TYPE_CHECKING:
    from bookshelf.domain.catalog import BookRepository, PublisherRepository

logger = logging.getLogger(__name__)


class PublisherService:
    def __init__(
        self,
        publisher_repository: PublisherRepository,
        book_repository: BookRepository,
    ):
        self._publisher_repo = publisher_repository
        self._book_repo = book_repository

    async def create(self, name: str, country: str) -> Publisher:
        publisher = await self._publisher_repo.save(
            Publisher(name=name, country=country),
        )
        logger.info("Publisher created: %s", publisher.id)
        return publisher

    async def list_page(self, request: PageRequest) -> Page[Publisher]:
        total = await self._publisher_repo.count()
        publishers = await self._publisher_repo.find_page(request.offset, request.limit)
        return Page.of(publishers, total, request)

    async def get(self, publisher_id: int) -> Publisher:
        publisher = await self._publisher_repo.find_by_id(publisher_id)
        if publisher is None:
            raise PublisherNotFoundError(publisher_id)
        return publisher

    async def update(
        self,
        publisher_id: int,
        name: Optional[str] = None,
        country: Optional[str] = None,
    ) -> Publisher:
        publisher = await self.get(publisher_id)
        publisher.update(name=name, country=country)
        return await self._publisher_repo.save(publisher)

    async def delete(self, publisher_id: int) -> None:
        """Delete a publisher that no book references."""
        publisher = await self.get(publisher_id)
        if await self._book_repo.count_by_publisher(publisher_id) > 0:
            raise HasDependentBooksError("Publisher", publisher_id)
        await self._publisher_repo.delete(publisher_id)
        logger.info("Publisher deleted: %s", publisher.id)
