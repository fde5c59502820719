"""Authors router. Reads need a signed-in user, changes need an admin."""

from fastapi import APIRouter, Response, status

from bookshelf.presentation.api.dependencies import (
    AdminIdentity,
    AuthorServiceDep,
    CommonRateLimit,
    CurrentIdentity,
    DatabaseRateLimit,
    DBSession,
    PageRequestDep,
)
from bookshelf.presentation.api.schemas.catalog import (
    AuthorListResponse,
    AuthorRequest,
    AuthorResponse,
    AuthorUpdateRequest,
)
from bookshelf.presentation.api.schemas.common import ErrorResponse

router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Author not found"}}


@router.get(
    "",
    summary="List authors",
    dependencies=[CommonRateLimit],
)
async def list_authors(
    _: CurrentIdentity,
    page_request: PageRequestDep,
    author_service: AuthorServiceDep,
) -> AuthorListResponse:
    page = await author_service.list_page(page_request)
    return AuthorListResponse(
        authors=[AuthorResponse.from_domain(a) for a in page.items],
        count_authors=page.total,
        current_page=page.current_page,
        per_page=page.per_page,
        total_pages=page.total_pages,
    )


@router.get(
    "/{author_id}",
    summary="Get an author",
    responses=_NOT_FOUND,
    dependencies=[CommonRateLimit],
)
async def get_author(
    author_id: int,
    _: CurrentIdentity,
    author_service: AuthorServiceDep,
) -> AuthorResponse:
    return AuthorResponse.from_domain(await author_service.get(author_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create an author",
    dependencies=[DatabaseRateLimit],
)
async def create_author(
    request: AuthorRequest,
    _: AdminIdentity,
    author_service: AuthorServiceDep,
    session: DBSession,
) -> AuthorResponse:
    author = await author_service.create(request.name, request.country)
    await session.commit()
    return AuthorResponse.from_domain(author)


@router.put(
    "/{author_id}",
    summary="Update an author",
    responses=_NOT_FOUND,
    dependencies=[DatabaseRateLimit],
)
async def update_author(
    author_id: int,
    request: AuthorUpdateRequest,
    _: AdminIdentity,
    author_service: AuthorServiceDep,
    session: DBSession,
) -> AuthorResponse:
    author = await author_service.update(
        author_id,
        name=request.name,
        country=request.country,
    )
    await session.commit()
    return AuthorResponse.from_domain(author)


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author",
    responses={
        **_NOT_FOUND,
        409: {"model": ErrorResponse, "description": "Author still has books"},
    },
    dependencies=[DatabaseRateLimit],
)
async def delete_author(
    author_id: int,
    _: AdminIdentity,
    author_service: AuthorServiceDep,
    session: DBSession,
) -> Response:
    await author_service.delete(author_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
