from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from bookshelf.domain.catalog.entities.author import Author
from bookshelf.domain.catalog.entities.publisher import Publisher
from bookshelf.domain.shared.time import utc_now

ISBN10_LENGTH = 10


class Book:
    """
    Book in the catalog.

    Both ISBNs are unique across the catalog. The author and publisher are
    referenced by id and must exist when the book is saved.
    """

    def __init__(  # NOQA: PLR0913
        self,
        title: str,
        author_id: int,
        publisher_id: int,
        image: str,
        published: date,
        isbn13: str,
        isbn10: str,
        status: str,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = id if id is not None else uuid4()
        self._title = title
        self._author_id = author_id
        self._publisher_id = publisher_id
        self._image = image
        self._published = published
        self._isbn13 = isbn13
        self._isbn10 = isbn10
        self._status = status
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def author_id(self) -> int:
        return self._author_id

    @property
    def publisher_id(self) -> int:
        return self._publisher_id

    @property
    def image(self) -> str:
        return self._image

    @property
    def published(self) -> date:
        return self._published

    @property
    def isbn13(self) -> str:
        return self._isbn13

    @property
    def isbn10(self) -> str:
        return self._isbn10

    @property
    def status(self) -> str:
        return self._status

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def update(self, **changes: Any) -> None:
        """Apply the given field changes. ``None`` values are ignored."""
        for field in (
            "title",
            "author_id",
            "publisher_id",
            "image",
            "published",
            "isbn13",
            "isbn10",
            "status",
        ):
            value = changes.pop(field, None)
            if value is not None:
                setattr(self, f"_{field}", value)
        if changes:
            msg = f"Unknown book fields: {sorted(changes)}"
            raise TypeError(msg)
        self._updated_at = utc_now()

    @staticmethod
    def is_isbn10(isbn: str) -> bool:
        return len(isbn) == ISBN10_LENGTH

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Book(id={self._id}, title={self._title!r})"


@dataclass(frozen=True)
class BookWithRelations:
    """A book together with its author and publisher."""

    book: Book
    author: Author
    publisher: Publisher
