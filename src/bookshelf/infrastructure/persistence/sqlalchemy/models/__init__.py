"""SQLAlchemy models. Importing this package registers every table."""

from bookshelf.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from bookshelf.infrastructure.persistence.sqlalchemy.models.catalog_models import (
    AuthorModel,
    BookModel,
    PublisherModel,
)
from bookshelf.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

__all__ = [
    "AuthorModel",
    "Base",
    "BookModel",
    "PublisherModel",
    "TimestampMixin",
    "UserModel",
]
