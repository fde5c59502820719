"""Books router.

``GET /search/{isbn}`` is public. Other reads need a signed-in user and
changes need an admin.
"""

from uuid import UUID

from fastapi import APIRouter, Response, status

from bookshelf.presentation.api.dependencies import (
    AdminIdentity,
    BookServiceDep,
    CommonRateLimit,
    CurrentIdentity,
    DatabaseRateLimit,
    DBSession,
    PageRequestDep,
)
from bookshelf.presentation.api.schemas.catalog import (
    BookCreateRequest,
    BookListItem,
    BookListResponse,
    BookResponse,
    BookSearchResponse,
    BookUpdateRequest,
)
from bookshelf.presentation.api.schemas.common import ErrorResponse

router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Book not found"}}
_WRITE_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Author or publisher not found"},
    409: {"model": ErrorResponse, "description": "ISBN already exists"},
}


# Declared before "/{book_id}" so "search" is not parsed as an id
@router.get(
    "/search/{isbn}",
    summary="Find a book by ISBN",
    responses=_NOT_FOUND,
    dependencies=[CommonRateLimit],
)
async def search_book(isbn: str, book_service: BookServiceDep) -> BookSearchResponse:
    """
    Look a book up by ISBN-10 (10 characters) or ISBN-13 (anything else).

    No sign-in required.
    """
    found = await book_service.search_by_isbn(isbn)
    return BookSearchResponse.from_domain(found)


@router.get(
    "",
    summary="List books",
    dependencies=[CommonRateLimit],
)
async def list_books(
    _: CurrentIdentity,
    page_request: PageRequestDep,
    book_service: BookServiceDep,
) -> BookListResponse:
    page = await book_service.list_page(page_request)
    return BookListResponse(
        books=[BookListItem.from_domain(item) for item in page.items],
        count_books=page.total,
        current_page=page.current_page,
        per_page=page.per_page,
        total_pages=page.total_pages,
    )


@router.get(
    "/{book_id}",
    summary="Get a book",
    responses=_NOT_FOUND,
    dependencies=[CommonRateLimit],
)
async def get_book(
    book_id: UUID,
    _: CurrentIdentity,
    book_service: BookServiceDep,
) -> BookResponse:
    return BookResponse.from_domain(await book_service.get(book_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a book",
    responses=_WRITE_RESPONSES,
    dependencies=[DatabaseRateLimit],
)
async def create_book(
    request: BookCreateRequest,
    _: AdminIdentity,
    book_service: BookServiceDep,
    session: DBSession,
) -> BookResponse:
    book = await book_service.create(
        title=request.title,
        author_id=request.author_id,
        publisher_id=request.publisher_id,
        image=str(request.image),
        published=request.published,
        isbn13=request.isbn13,
        isbn10=request.isbn10,
        status=request.status,
    )
    await session.commit()
    return BookResponse.from_domain(book)


@router.put(
    "/{book_id}",
    summary="Update a book",
    responses=_WRITE_RESPONSES,
    dependencies=[DatabaseRateLimit],
)
async def update_book(
    book_id: UUID,
    request: BookUpdateRequest,
    _: AdminIdentity,
    book_service: BookServiceDep,
    session: DBSession,
) -> BookResponse:
    book = await book_service.update(
        book_id,
        title=request.title,
        author_id=request.author_id,
        publisher_id=request.publisher_id,
        image=str(request.image) if request.image is not None else None,
        published=request.published,
        isbn13=request.isbn13,
        isbn10=request.isbn10,
        status=request.status,
    )
    await session.commit()
    return BookResponse.from_domain(book)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
    responses=_NOT_FOUND,
    dependencies=[DatabaseRateLimit],
)
async def delete_book(
    book_id: UUID,
    _: AdminIdentity,
    book_service: BookServiceDep,
    session: DBSession,
) -> Response:
    await book_service.delete(book_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
