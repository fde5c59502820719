"""API routers."""

from bookshelf.presentation.api.routers.auth import router as auth_router
from bookshelf.presentation.api.routers.authors import router as authors_router
from bookshelf.presentation.api.routers.books import router as books_router
from bookshelf.presentation.api.routers.index import router as index_router
from bookshelf.presentation.api.routers.publishers import router as publishers_router
from bookshelf.presentation.api.routers.users import router as users_router

__all__ = [
    "auth_router",
    "authors_router",
    "books_router",
    "index_router",
    "publishers_router",
    "users_router",
]
