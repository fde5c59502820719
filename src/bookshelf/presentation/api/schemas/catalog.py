"""Schemas for authors, publishers and books."""

from datetime import date
from typing import Annotated, Optional
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, HttpUrl

from bookshelf.domain.catalog import Author, Book, BookWithRelations, Publisher
from bookshelf.domain.catalog.isbn import (
    is_valid_isbn10,
    is_valid_isbn13,
    normalize_isbn,
)
from bookshelf.presentation.api.schemas.common import NonEmptyStr, PaginatedResponse

# -----------------------------------------------------------------------------
# Authors & Publishers
# -----------------------------------------------------------------------------


class AuthorRequest(BaseModel):
    name: NonEmptyStr
    country: NonEmptyStr

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "Ursula K. Le Guin", "country": "US"}},
    )


class AuthorUpdateRequest(BaseModel):
    name: Optional[NonEmptyStr] = None
    country: Optional[NonEmptyStr] = None


class AuthorResponse(BaseModel):
    id: int
    name: str
    country: str

    @classmethod
    def from_domain(cls, author: Author) -> "AuthorResponse":
        return cls(id=author.id, name=author.name, country=author.country)


class AuthorListResponse(PaginatedResponse):
    authors: list[AuthorResponse]
    count_authors: int = Field(..., alias="countAuthors")


class PublisherRequest(BaseModel):
    name: NonEmptyStr
    country: NonEmptyStr


class PublisherUpdateRequest(BaseModel):
    name: Optional[NonEmptyStr] = None
    country: Optional[NonEmptyStr] = None


class PublisherResponse(BaseModel):
    id: int
    name: str
    country: str

    @classmethod
    def from_domain(cls, publisher: Publisher) -> "PublisherResponse":
        return cls(id=publisher.id, name=publisher.name, country=publisher.country)


class PublisherListResponse(PaginatedResponse):
    publishers: list[PublisherResponse]
    count_publishers: int = Field(..., alias="countPublishers")


# -----------------------------------------------------------------------------
# Books
# -----------------------------------------------------------------------------


def _check_isbn10(value: str) -> str:
    normalized = normalize_isbn(value)
    if not is_valid_isbn10(normalized):
        msg = "ISBN-10 must be a valid ISBN-10 number."
        raise ValueError(msg)
    return normalized


def _check_isbn13(value: str) -> str:
    normalized = normalize_isbn(value)
    if not is_valid_isbn13(normalized):
        msg = "ISBN-13 must be a valid ISBN-13 number."
        raise ValueError(msg)
    return normalized


Isbn10 = Annotated[str, AfterValidator(_check_isbn10)]
Isbn13 = Annotated[str, AfterValidator(_check_isbn13)]


class BookCreateRequest(BaseModel):
    title: NonEmptyStr
    author_id: int = Field(..., alias="authorID")
    image: HttpUrl
    publisher_id: int = Field(..., alias="publisherID")
    published: date
    isbn13: Isbn13
    isbn10: Isbn10
    status: NonEmptyStr

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "The Dispossessed",
                "authorID": 1,
                "image": "https://example.com/covers/dispossessed.jpg",
                "publisherID": 1,
                "published": "1974-05-01",
                "isbn13": "9780306406157",
                "isbn10": "0306406152",
                "status": "available",
            },
        },
    )


class BookUpdateRequest(BaseModel):
    title: Optional[NonEmptyStr] = None
    author_id: Optional[int] = Field(None, alias="authorID")
    image: Optional[HttpUrl] = None
    publisher_id: Optional[int] = Field(None, alias="publisherID")
    published: Optional[date] = None
    isbn13: Optional[Isbn13] = None
    isbn10: Optional[Isbn10] = None
    status: Optional[NonEmptyStr] = None

    model_config = ConfigDict(populate_by_name=True)


class BookResponse(BaseModel):
    id: UUID
    title: str
    author_id: int = Field(..., alias="authorID")
    image: str
    publisher_id: int = Field(..., alias="publisherID")
    published: date
    isbn13: str
    isbn10: str
    status: str

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, book: Book) -> "BookResponse":
        return cls(
            id=book.id,
            title=book.title,
            author_id=book.author_id,
            image=book.image,
            publisher_id=book.publisher_id,
            published=book.published,
            isbn13=book.isbn13,
            isbn10=book.isbn10,
            status=book.status,
        )


class BookListItem(BaseModel):
    """A book with its author and publisher embedded."""

    id: UUID
    title: str
    author: AuthorResponse
    image: str
    publisher: PublisherResponse
    published: date
    isbn13: str
    isbn10: str
    status: str

    @classmethod
    def from_domain(cls, item: BookWithRelations) -> "BookListItem":
        book = item.book
        return cls(
            id=book.id,
            title=book.title,
            author=AuthorResponse.from_domain(item.author),
            image=book.image,
            publisher=PublisherResponse.from_domain(item.publisher),
            published=book.published,
            isbn13=book.isbn13,
            isbn10=book.isbn10,
            status=book.status,
        )


class BookListResponse(PaginatedResponse):
    books: list[BookListItem]
    count_books: int = Field(..., alias="countBooks")


class BookSearchResponse(BaseModel):
    """Flattened view returned by the public ISBN search."""

    id: UUID
    title: str
    author: str
    image: str
    publisher: str
    published: date
    isbn13: str
    isbn10: str

    @classmethod
    def from_domain(cls, item: BookWithRelations) -> "BookSearchResponse":
        book = item.book
        return cls(
            id=book.id,
            title=book.title,
            author=item.author.name,
            image=book.image,
            publisher=item.publisher.name,
            published=book.published,
            isbn13=book.isbn13,
            isbn10=book.isbn10,
        )
