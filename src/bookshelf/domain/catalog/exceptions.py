"""Catalog domain exceptions."""

from bookshelf.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
)


class AuthorNotFoundError(EntityNotFoundError):
    def __init__(self, author_id: int) -> None:
        self.author_id = author_id
        super().__init__(
            "Author does not exist, please check the author ID.",
            code=ErrorCode.AUTHOR_NOT_FOUND,
            details={"author_id": author_id},
        )


class PublisherNotFoundError(EntityNotFoundError):
    def __init__(self, publisher_id: int) -> None:
        self.publisher_id = publisher_id
        super().__init__(
            "Publisher does not exist, please check the publisher ID.",
            code=ErrorCode.PUBLISHER_NOT_FOUND,
            details={"publisher_id": publisher_id},
        )


class BookNotFoundError(EntityNotFoundError):
    """Raised for a missing book id, or an ISBN that matches nothing."""

    def __init__(
        self,
        message: str = "Book does not exist, please check the book ID.",
        **details: object,
    ) -> None:
        super().__init__(message, code=ErrorCode.BOOK_NOT_FOUND, details=details)


class DuplicateIsbnError(ConflictError):
    """ISBN-10 or ISBN-13 already used by another book."""

    def __init__(self, kind: str, isbn: str) -> None:
        self.kind = kind
        self.isbn = isbn
        super().__init__(
            f"{kind} already exists.",
            code=ErrorCode.DUPLICATE_ISBN,
            details={"isbn": isbn},
        )


class HasDependentBooksError(ConflictError):
    """Author or publisher still referenced by books."""

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(
            f"{entity} has books associated with them and cannot be deleted.",
            code=ErrorCode.HAS_DEPENDENT_BOOKS,
            details={"entity": entity.lower(), "id": entity_id},
        )
