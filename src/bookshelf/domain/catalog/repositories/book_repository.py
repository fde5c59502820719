"""Book repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from bookshelf.domain.catalog.entities.book import Book, BookWithRelations


class BookRepository(ABC):
    @abstractmethod
    async def find_by_id(self, book_id: UUID) -> Optional[Book]:
        pass

    @abstractmethod
    async def find_by_isbn10(self, isbn10: str) -> Optional[BookWithRelations]:
        pass

    @abstractmethod
    async def find_by_isbn13(self, isbn13: str) -> Optional[BookWithRelations]:
        pass

    @abstractmethod
    async def find_page(self, offset: int, limit: int) -> list[BookWithRelations]:
        """
        Return a page of books with their author and publisher.

        Parameters
        ----------
        offset
            Number of books to skip (ordered by title, then id)
        limit
            Maximum number of books to return
        """

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def count_by_author(self, author_id: int) -> int:
        pass

    @abstractmethod
    async def count_by_publisher(self, publisher_id: int) -> int:
        pass

    @abstractmethod
    async def save(self, book: Book) -> None:
        """
        Insert or update a book.

        Raises
        ------
        DuplicateIsbnError
            If the store rejects a duplicate ISBN
        """

    @abstractmethod
    async def delete(self, book_id: UUID) -> None:
        pass
