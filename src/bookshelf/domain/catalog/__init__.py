"""Catalog domain - authors, publishers and books."""

from bookshelf.domain.catalog.entities import (
    Author,
    Book,
    BookWithRelations,
    Publisher,
)
from bookshelf.domain.catalog.exceptions import (
    AuthorNotFoundError,
    BookNotFoundError,
    DuplicateIsbnError,
    HasDependentBooksError,
    PublisherNotFoundError,
)
from bookshelf.domain.catalog.repositories import (
    AuthorRepository,
    BookRepository,
    PublisherRepository,
)

__all__ = [
    "Author",
    "AuthorNotFoundError",
    "AuthorRepository",
    "Book",
    "BookNotFoundError",
    "BookRepository",
    "BookWithRelations",
    "DuplicateIsbnError",
    "HasDependentBooksError",
    "Publisher",
    "PublisherNotFoundError",
    "PublisherRepository",
]
