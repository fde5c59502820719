"""Data classes shared by the auth services."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TokenKind(str, Enum):
    """Token classes. Each kind is signed with its own secret."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenPayload:
    """Verified claims of a token."""

    subject: str
    issuer: str
    issued_at: datetime
    expires_at: datetime
    kind: TokenKind
    token_id: str | None = None
