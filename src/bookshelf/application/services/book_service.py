"""Book management and ISBN search."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from bookshelf.application.dtos.pagination import Page, PageRequest
from bookshelf.domain.catalog import (
    AuthorNotFoundError,
    Book,
    BookNotFoundError,
    BookWithRelations,
    DuplicateIsbnError,
    PublisherNotFoundError,
)

if TYPE_CHECKING:
    from bookshelf.domain.catalog import (
        AuthorRepository,
        BookRepository,
        PublisherRepository,
    )

logger = logging.getLogger(__name__)


class BookService:
    """
    Application service for books.

    Enforces the catalog rules the database cannot express as nicely:
    - ISBN-10 and ISBN-13 are unique (409 with a readable message)
    - the referenced author and publisher exist (404)
    """

    def __init__(
        self,
        book_repository: BookRepository,
        author_repository: AuthorRepository,
        publisher_repository: PublisherRepository,
    ):
        self._book_repo = book_repository
        self._author_repo = author_repository
        self._publisher_repo = publisher_repository

    async def create(  # NOQA: PLR0913
        self,
        title: str,
        author_id: int,
        publisher_id: int,
        image: str,
        published: date,
        isbn13: str,
        isbn10: str,
        status: str,
    ) -> Book:
        await self._ensure_isbn10_free(isbn10)
        await self._ensure_isbn13_free(isbn13)
        await self._ensure_author_exists(author_id)
        await self._ensure_publisher_exists(publisher_id)

        book = Book(
            title=title,
            author_id=author_id,
            publisher_id=publisher_id,
            image=image,
            published=published,
            isbn13=isbn13,
            isbn10=isbn10,
            status=status,
        )
        await self._book_repo.save(book)

        logger.info("Book created: %s", book.id)
        return book

    async def list_page(self, request: PageRequest) -> Page[BookWithRelations]:
        total = await self._book_repo.count()
        books = await self._book_repo.find_page(request.offset, request.limit)
        return Page.of(books, total, request)

    async def get(self, book_id: UUID) -> Book:
        book = await self._book_repo.find_by_id(book_id)
        if book is None:
            raise BookNotFoundError(book_id=str(book_id))
        return book

    async def search_by_isbn(self, isbn: str) -> BookWithRelations:
        """Find a book by ISBN. Ten characters means ISBN-10, anything else ISBN-13."""
        isbn = isbn.strip()
        if Book.is_isbn10(isbn):
            found = await self._book_repo.find_by_isbn10(isbn)
        else:
            found = await self._book_repo.find_by_isbn13(isbn)

        if found is None:
            raise BookNotFoundError("Book not found.", isbn=isbn)
        return found

    async def update(  # NOQA: PLR0913
        self,
        book_id: UUID,
        title: Optional[str] = None,
        author_id: Optional[int] = None,
        publisher_id: Optional[int] = None,
        image: Optional[str] = None,
        published: Optional[date] = None,
        isbn13: Optional[str] = None,
        isbn10: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Book:
        book = await self.get(book_id)

        if isbn10 is not None and isbn10 != book.isbn10:
            await self._ensure_isbn10_free(isbn10)
        if isbn13 is not None and isbn13 != book.isbn13:
            await self._ensure_isbn13_free(isbn13)
        if author_id is not None and author_id != book.author_id:
            await self._ensure_author_exists(author_id)
        if publisher_id is not None and publisher_id != book.publisher_id:
            await self._ensure_publisher_exists(publisher_id)

        book.update(
            title=title,
            author_id=author_id,
            publisher_id=publisher_id,
            image=image,
            published=published,
            isbn13=isbn13,
            isbn10=isbn10,
            status=status,
        )
        await self._book_repo.save(book)
        return book

    async def delete(self, book_id: UUID) -> None:
        book = await self.get(book_id)
        await self._book_repo.delete(book.id)
        logger.info("Book deleted: %s", book.id)

    async def _ensure_isbn10_free(self, isbn10: str) -> None:
        if await self._book_repo.find_by_isbn10(isbn10) is not None:
            raise DuplicateIsbnError("ISBN-10", isbn10)

    async def _ensure_isbn13_free(self, isbn13: str) -> None:
        if await self._book_repo.find_by_isbn13(isbn13) is not None:
            raise DuplicateIsbnError("ISBN-13", isbn13)

    async def _ensure_author_exists(self, author_id: int) -> None:
        if await self._author_repo.find_by_id(author_id) is None:
            raise AuthorNotFoundError(author_id)

    async def _ensure_publisher_exists(self, publisher_id: int) -> None:
        if await self._publisher_repo.find_by_id(publisher_id) is None:
            raise PublisherNotFoundError(publisher_id)
