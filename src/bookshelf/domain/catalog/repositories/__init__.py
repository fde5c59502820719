from bookshelf.domain.catalog.repositories.author_repository import AuthorRepository
from bookshelf.domain.catalog.repositories.book_repository import BookRepository
from bookshelf.domain.catalog.repositories.publisher_repository import (
    PublisherRepository,
)

__all__ = ["AuthorRepository", "BookRepository", "PublisherRepository"]
