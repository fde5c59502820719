"""SQLAlchemy models for the catalog (authors, publishers, books)."""

from datetime import date
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class AuthorModel(Base, TimestampMixin):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<AuthorModel(id={self.id}, name={self.name})>"


class PublisherModel(Base, TimestampMixin):
    __tablename__ = "publishers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<PublisherModel(id={self.id}, name={self.name})>"


class BookModel(Base, TimestampMixin):
    """
    Book row. Author and publisher deletes are restricted while books
    reference them.

    Table: books
    """

    __tablename__ = "books"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    publisher_id: Mapped[int] = mapped_column(
        ForeignKey("publishers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    image: Mapped[str] = mapped_column(String(2048), nullable=False)
    published: Mapped[date] = mapped_column(Date, nullable=False)
    isbn13: Mapped[str] = mapped_column(String(13), unique=True, nullable=False)
    isbn10: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<BookModel(id={self.id}, title={self.title})>"
