"""DTOs for the identity lifecycle."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class SignupCommand:
    name: str
    surname: str
    email: str
    password: str

    def __repr__(self) -> str:
        # Keep the password out of logs and tracebacks
        return (
            f"SignupCommand(name={self.name!r}, surname={self.surname!r}, "
            f"email={self.email!r})"
        )


@dataclass(frozen=True)
class SignupResult:
    user_id: UUID
    email: str


@dataclass(frozen=True)
class TokenPair:
    """Result of signin and refresh."""

    user_id: UUID
    access_token: str
    refresh_token: str
