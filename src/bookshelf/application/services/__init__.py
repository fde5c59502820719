"""Application services."""

from bookshelf.application.services.author_service import AuthorService
from bookshelf.application.services.book_service import BookService
from bookshelf.application.services.identity_service import IdentityService
from bookshelf.application.services.publisher_service import PublisherService
from bookshelf.application.services.session_service import SessionManager
from bookshelf.application.services.user_service import UserService

__all__ = [
    "AuthorService",
    "BookService",
    "IdentityService",
    "PublisherService",
    "SessionManager",
    "UserService",
]
