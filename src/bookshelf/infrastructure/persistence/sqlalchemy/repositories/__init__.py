"""SQLAlchemy repository implementations."""

from bookshelf.infrastructure.persistence.sqlalchemy.repositories.author_repository import (  # noqa: E501
    AuthorRepositorySQLAlchemy,
)
from bookshelf.infrastructure.persistence.sqlalchemy.repositories.book_repository import (  # noqa: E501
    BookRepositorySQLAlchemy,
)
from bookshelf.infrastructure.persistence.sqlalchemy.repositories.publisher_repository import (  # noqa: E501
    PublisherRepositorySQLAlchemy,
)
from bookshelf.infrastructure.persistence.sqlalchemy.repositories.user_repository import (  # noqa: E501
    UserRepositorySQLAlchemy,
)

__all__ = [
    "AuthorRepositorySQLAlchemy",
    "BookRepositorySQLAlchemy",
    "PublisherRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
