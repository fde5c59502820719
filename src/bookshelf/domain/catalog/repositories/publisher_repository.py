"""Publisher repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from bookshelf.domain.catalog.entities.publisher import Publisher


class PublisherRepository(ABC):
    @abstractmethod
    async def find_by_id(self, publisher_id: int) -> Optional[Publisher]:
        pass

    @abstractmethod
    async def find_page(self, offset: int, limit: int) -> list[Publisher]:
        """Return publishers ordered by id, skipping ``offset`` rows."""

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def save(self, publisher: Publisher) -> Publisher:
        """
        Insert or update a publisher.

        Returns
        -------
        The stored publisher, with its id assigned on insert
        """

    @abstractmethod
    async def delete(self, publisher_id: int) -> None:
        pass
