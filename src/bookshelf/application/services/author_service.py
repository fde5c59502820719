"""Author management."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from bookshelf.application.dtos.pagination import Page, PageRequest
from bookshelf.domain.catalog import (
    Author,
    AuthorNotFoundError,
    HasDependentBooksError,
)

if TYPE_CHECKING:
    from bookshelf.domain.catalog import AuthorRepository, BookRepository

logger = logging.getLogger(__name__)


class AuthorService:
    def __init__(
        self,
        author_repository: AuthorRepository,
        book_repository: BookRepository,
    ):
        self._author_repo = author_repository
        self._book_repo = book_repository

    async def create(self, name: str, country: str) -> Author:
        author = await self._author_repo.save(Author(name=name, country=country))
        logger.info("Author created: %s", author.id)
        return author

    async def list_page(self, request: PageRequest) -> Page[Author]:
        total = await self._author_repo.count()
        authors = await self._author_repo.find_page(request.offset, request.limit)
        return Page.of(authors, total, request)

    async def get(self, author_id: int) -> Author:
        author = await self._author_repo.find_by_id(author_id)
        if author is None:
            raise AuthorNotFoundError(author_id)
        return author

    async def update(
        self,
        author_id: int,
        name: Optional[str] = None,
        country: Optional[str] = None,
    ) -> Author:
        author = await self.get(author_id)
        author.update(name=name, country=country)
        return await self._author_repo.save(author)

    async def delete(self, author_id: int) -> None:
        """Delete an author that no book references."""
        author = await self.get(author_id)
        if await self._book_repo.count_by_author(author_id) > 0:
            raise HasDependentBooksError("Author", author_id)
        await self._author_repo.delete(author_id)
        logger.info("Author deleted: %s", author.id)
