from datetime import datetime
from typing import Optional, Union
from uuid import UUID, uuid4

from bookshelf.domain.shared.exceptions import ErrorCode
from bookshelf.domain.shared.time import utc_now
from bookshelf.domain.user.exceptions import InvalidStatusTransitionError
from bookshelf.domain.user.value_objects import Email, UserRole, UserStatus

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


class User:
    """
    User aggregate root.

    Holds identity, profile and the account status. Each user is uniquely
    identified by a random UUID generated at creation time. The password is
    only ever held as a one-way hash.

    Status transitions: ``pending -> active -> inactive``. Nothing leads
    back, and users are never deleted here.
    """

    def __init__(  # NOQA: PLR0913
        self,
        name: str,
        surname: str,
        email: Union[str, Email],
        password_hash: str,
        role: Union[str, UserRole] = UserRole.USER,
        status: Union[str, UserStatus] = UserStatus.PENDING,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = id if id is not None else uuid4()
        self._name = name
        self._surname = surname
        self._email = email if isinstance(email, Email) else Email(email)
        self._password_hash = password_hash
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._status = status if isinstance(status, UserStatus) else UserStatus(status)
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def surname(self) -> str:
        return self._surname

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    @property
    def status(self) -> UserStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == UserStatus.ACTIVE

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def activate(self) -> None:
        if self._status == UserStatus.ACTIVE:
            raise InvalidStatusTransitionError(
                "User is already active.",
                code=ErrorCode.ACCOUNT_ALREADY_ACTIVE,
            )
        if self._status == UserStatus.INACTIVE:
            raise InvalidStatusTransitionError(
                INVALID_CREDENTIALS_MESSAGE,
                code=ErrorCode.INVALID_CREDENTIALS,
            )
        self._status = UserStatus.ACTIVE
        self._updated_at = utc_now()

    def deactivate(self) -> None:
        if self._status != UserStatus.ACTIVE:
            raise InvalidStatusTransitionError(
                "User is not active.",
                code=ErrorCode.ACCOUNT_NOT_ACTIVE,
            )
        self._status = UserStatus.INACTIVE
        self._updated_at = utc_now()

    def ensure_can_sign_in(self) -> None:
        """Status gate for signin. Only ``active`` users pass."""
        if self._status == UserStatus.PENDING:
            raise InvalidStatusTransitionError(
                "Please activate your account.",
                code=ErrorCode.ACCOUNT_NOT_ACTIVE,
            )
        if self._status != UserStatus.ACTIVE:
            # Same answer as a wrong password
            raise InvalidStatusTransitionError(
                INVALID_CREDENTIALS_MESSAGE,
                code=ErrorCode.INVALID_CREDENTIALS,
            )

    def update_profile(
        self,
        name: Optional[str] = None,
        surname: Optional[str] = None,
    ) -> None:
        # Only provided (non-None) values are updated; others are preserved.
        if name is not None:
            self._name = name
        if surname is not None:
            self._surname = surname
        self._updated_at = utc_now()

    def change_email(self, email: Union[str, Email]) -> None:
        self._email = email if isinstance(email, Email) else Email(email)
        self._updated_at = utc_now()

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._updated_at = utc_now()

    def promote_to_admin(self) -> None:
        self._role = UserRole.ADMIN
        self._updated_at = utc_now()

    def demote_to_user(self) -> None:
        self._role = UserRole.USER
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        name: str,
        surname: str,
        email: Union[str, Email],
        password_hash: str,
        role: UserRole = UserRole.USER,
    ) -> "User":
        return cls(
            name=name,
            surname=surname,
            email=email,
            password_hash=password_hash,
            role=role,
            status=UserStatus.PENDING,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        name: str,
        surname: str,
        email: Union[str, Email],
        password_hash: str,
        role: Union[str, UserRole],
        status: Union[str, UserStatus],
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            name=name,
            surname=surname,
            email=email,
            password_hash=password_hash,
            role=role,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value}, status={self._status.value})"
