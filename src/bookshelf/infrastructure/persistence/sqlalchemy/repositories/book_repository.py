"""SQLAlchemy implementation of BookRepository."""

import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.domain.catalog import (
    Author,
    Book,
    BookRepository,
    BookWithRelations,
    DuplicateIsbnError,
    Publisher,
)
from bookshelf.domain.shared.time import ensure_tz_aware
from bookshelf.infrastructure.persistence.sqlalchemy.models import (
    AuthorModel,
    BookModel,
    PublisherModel,
)
from bookshelf.infrastructure.persistence.sqlalchemy.repositories._utils import (
    is_unique_violation,
)

logger = logging.getLogger(__name__)


class BookRepositorySQLAlchemy(BookRepository):
    """Books are read together with their author and publisher in one query."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, book_id: UUID) -> Optional[Book]:
        model = await self._session.get(BookModel, book_id)
        return self._map_book(model) if model is not None else None

    async def find_by_isbn10(self, isbn10: str) -> Optional[BookWithRelations]:
        stmt = self._with_relations().where(BookModel.isbn10 == isbn10)
        return await self._find_one(stmt)

    async def find_by_isbn13(self, isbn13: str) -> Optional[BookWithRelations]:
        stmt = self._with_relations().where(BookModel.isbn13 == isbn13)
        return await self._find_one(stmt)

    async def find_page(self, offset: int, limit: int) -> list[BookWithRelations]:
        stmt = (
            self._with_relations()
            .order_by(BookModel.title, BookModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._map_row(row) for row in result.all()]

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(BookModel.id)))
        return result.scalar_one()

    async def count_by_author(self, author_id: int) -> int:
        stmt = select(func.count(BookModel.id)).where(BookModel.author_id == author_id)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def count_by_publisher(self, publisher_id: int) -> int:
        stmt = select(func.count(BookModel.id)).where(
            BookModel.publisher_id == publisher_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def save(self, book: Book) -> None:
        model = await self._session.get(BookModel, book.id)

        try:
            if model is None:
                self._session.add(self._map_to_model(book))
                logger.debug("Created book: %s", book.id)
            else:
                self._update_model(model, book)
                logger.debug("Updated book: %s", book.id)

            await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(e, "isbn10"):
                raise DuplicateIsbnError("ISBN-10", book.isbn10) from e
            if is_unique_violation(e, "isbn13"):
                raise DuplicateIsbnError("ISBN-13", book.isbn13) from e
            raise

    async def delete(self, book_id: UUID) -> None:
        await self._session.execute(delete(BookModel).where(BookModel.id == book_id))
        await self._session.flush()
        logger.debug("Deleted book: %s", book_id)

    @staticmethod
    def _with_relations() -> Select[Any]:
        return (
            select(BookModel, AuthorModel, PublisherModel)
            .join(AuthorModel, BookModel.author_id == AuthorModel.id)
            .join(PublisherModel, BookModel.publisher_id == PublisherModel.id)
        )

    async def _find_one(self, stmt: Select[Any]) -> Optional[BookWithRelations]:
        result = await self._session.execute(stmt.limit(1))
        row = result.first()
        return self._map_row(row) if row is not None else None

    def _map_row(self, row: Any) -> BookWithRelations:
        book_model, author_model, publisher_model = row
        return BookWithRelations(
            book=self._map_book(book_model),
            author=Author(
                id=author_model.id,
                name=author_model.name,
                country=author_model.country,
                created_at=ensure_tz_aware(author_model.created_at),
                updated_at=ensure_tz_aware(author_model.updated_at),
            ),
            publisher=Publisher(
                id=publisher_model.id,
                name=publisher_model.name,
                country=publisher_model.country,
                created_at=ensure_tz_aware(publisher_model.created_at),
                updated_at=ensure_tz_aware(publisher_model.updated_at),
            ),
        )

    @staticmethod
    def _map_book(model: BookModel) -> Book:
        return Book(
            id=model.id,
            title=model.title,
            author_id=model.author_id,
            publisher_id=model.publisher_id,
            image=model.image,
            published=model.published,
            isbn13=model.isbn13,
            isbn10=model.isbn10,
            status=model.status,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    @staticmethod
    def _map_to_model(book: Book) -> BookModel:
        return BookModel(
            id=book.id,
            title=book.title,
            author_id=book.author_id,
            publisher_id=book.publisher_id,
            image=book.image,
            published=book.published,
            isbn13=book.isbn13,
            isbn10=book.isbn10,
            status=book.status,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )

    @staticmethod
    def _update_model(model: BookModel, book: Book) -> None:
        model.title = book.title
        model.author_id = book.author_id
        model.publisher_id = book.publisher_id
        model.image = book.image
        model.published = book.published
        model.isbn13 = book.isbn13
        model.isbn10 = book.isbn10
        model.status = book.status
        model.updated_at = book.updated_at
