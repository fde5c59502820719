"""Author repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from bookshelf.domain.catalog.entities.author import Author


class AuthorRepository(ABC):
    @abstractmethod
    async def find_by_id(self, author_id: int) -> Optional[Author]:
        pass

    @abstractmethod
    async def find_page(self, offset: int, limit: int) -> list[Author]:
        """Return authors ordered by id, skipping ``offset`` rows."""

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def save(self, author: Author) -> Author:
        """
        Insert or update an author.

        Returns
        -------
        The stored author, with its id assigned on insert
        """

    @abstractmethod
    async def delete(self, author_id: int) -> None:
        pass
