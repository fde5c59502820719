"""Publishers router. Reads need a signed-in user, changes need an admin."""

from fastapi import APIRouter, Response, status

from bookshelf.presentation.api.dependencies import (
    AdminIdentity,
    CommonRateLimit,
    CurrentIdentity,
    DatabaseRateLimit,
    DBSession,
    PageRequestDep,
    PublisherServiceDep,
)
from bookshelf.presentation.api.schemas.catalog import (
    PublisherListResponse,
    PublisherRequest,
    PublisherResponse,
    PublisherUpdateRequest,
)
from bookshelf.presentation.api.schemas.common import ErrorResponse

router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Publisher not found"}}


@router.get(
    "",
    summary="List publishers",
    dependencies=[CommonRateLimit],
)
async def list_publishers(
    _: CurrentIdentity,
    page_request: PageRequestDep,
    publisher_service: PublisherServiceDep,
) -> PublisherListResponse:
    page = await publisher_service.list_page(page_request)
    return PublisherListResponse(
        publishers=[PublisherResponse.from_domain(p) for p in page.items],
        count_publishers=page.total,
        current_page=page.current_page,
        per_page=page.per_page,
        total_pages=page.total_pages,
    )


@router.get(
    "/{publisher_id}",
    summary="Get a publisher",
    responses=_NOT_FOUND,
    dependencies=[CommonRateLimit],
)
async def get_publisher(
    publisher_id: int,
    _: CurrentIdentity,
    publisher_service: PublisherServiceDep,
) -> PublisherResponse:
    return PublisherResponse.from_domain(await publisher_service.get(publisher_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a publisher",
    dependencies=[DatabaseRateLimit],
)
async def create_publisher(
    request: PublisherRequest,
    _: AdminIdentity,
    publisher_service: PublisherServiceDep,
    session: DBSession,
) -> PublisherResponse:
    publisher = await publisher_service.create(request.name, request.country)
    await session.commit()
    return PublisherResponse.from_domain(publisher)


@router.put(
    "/{publisher_id}",
    summary="Update a publisher",
    responses=_NOT_FOUND,
    dependencies=[DatabaseRateLimit],
)
async def update_publisher(
    publisher_id: int,
    request: PublisherUpdateRequest,
    _: AdminIdentity,
    publisher_service: PublisherServiceDep,
    session: DBSession,
) -> PublisherResponse:
    publisher = await publisher_service.update(
        publisher_id,
        name=request.name,
        country=request.country,
    )
    await session.commit()
    return PublisherResponse.from_domain(publisher)


@router.delete(
    "/{publisher_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a publisher",
    responses={
        **_NOT_FOUND,
        409: {"model": ErrorResponse, "description": "Publisher still has books"},
    },
    dependencies=[DatabaseRateLimit],
)
async def delete_publisher(
    publisher_id: int,
    _: AdminIdentity,
    publisher_service: PublisherServiceDep,
    session: DBSession,
) -> Response:
    await publisher_service.delete(publisher_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
