from bookshelf.application.dtos.auth import SignupCommand, SignupResult, TokenPair
from bookshelf.application.dtos.pagination import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    Page,
    PageRequest,
)

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PER_PAGE",
    "Page",
    "PageRequest",
    "SignupCommand",
    "SignupResult",
    "TokenPair",
]
