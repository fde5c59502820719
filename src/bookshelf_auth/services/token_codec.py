"""Token codec.

Signs and verifies compact, expiring JWTs for the two token classes
(access and refresh). Each class has its own secret and lifetime, so a
token of one class never verifies as the other.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Union
from uuid import UUID, uuid4

import jwt

from bookshelf_auth.exceptions import InvalidTokenError
from bookshelf_auth.schemas import TokenKind, TokenPayload

_DURATION_PATTERN = re.compile(
    r"^\s*(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>[a-z]*)\s*$",
    re.IGNORECASE,
)

_UNIT_SECONDS: dict[str, float] = {
    "ms": 0.001,
    "msec": 0.001,
    "msecs": 0.001,
    "millisecond": 0.001,
    "milliseconds": 0.001,
    "": 1,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "week": 604800,
    "weeks": 604800,
    "y": 31557600,
    "yr": 31557600,
    "yrs": 31557600,
    "year": 31557600,
    "years": 31557600,
}


def parse_expiration(value: Union[int, float, str, timedelta]) -> timedelta:
    """Parse a token lifetime.

    Accepts a ``timedelta``, a number of seconds, or a human readable
    string such as ``"15m"``, ``"1d"``, ``"12 hours"`` or ``"86400"``.
    A string without a unit is read as seconds.

    Raises
    ------
    ValueError
        If the value is malformed, uses an unknown unit, or is not positive
    """
    if isinstance(value, timedelta):
        delta = value
    elif isinstance(value, bool):
        msg = f"Invalid token expiration: {value!r}"
        raise ValueError(msg)
    elif isinstance(value, (int, float)):
        delta = timedelta(seconds=value)
    elif isinstance(value, str):
        match = _DURATION_PATTERN.match(value)
        if match is None:
            msg = f"Invalid token expiration: {value!r}"
            raise ValueError(msg)
        unit = match.group("unit").lower()
        if unit not in _UNIT_SECONDS:
            msg = f"Unknown time unit in token expiration: {value!r}"
            raise ValueError(msg)
        delta = timedelta(seconds=float(match.group("value")) * _UNIT_SECONDS[unit])
    else:
        msg = f"Invalid token expiration: {value!r}"
        raise ValueError(msg)

    if delta <= timedelta(0):
        msg = f"Token expiration must be positive: {value!r}"
        raise ValueError(msg)
    return delta


@dataclass(frozen=True)
class TokenPolicy:
    """Secret and lifetime for one token class."""

    secret: str
    expires_in: timedelta

    def __post_init__(self) -> None:
        if not self.secret:
            msg = "Token secret cannot be empty"
            raise ValueError(msg)
        if self.expires_in <= timedelta(0):
            msg = "Token lifetime must be positive"
            raise ValueError(msg)

    @classmethod
    def from_config(
        cls,
        secret: str,
        expires_in: Union[int, float, str, timedelta],
    ) -> "TokenPolicy":
        return cls(secret=secret, expires_in=parse_expiration(expires_in))


class TokenCodec:
    """Issue and verify access and refresh tokens.

    Claims: ``iss`` (fixed issuer), ``aud`` (the subject id as a string),
    ``iat``, ``exp``, ``jti`` (random, so two tokens issued in the same
    second still differ) and ``typ`` (token kind).

    Examples
    --------
    >>> codec = TokenCodec(
    ...     access_policy=TokenPolicy.from_config("access-secret", "15m"),
    ...     refresh_policy=TokenPolicy.from_config("refresh-secret", "1d"),
    ...     issuer="bookshelf.api",
    ... )
    >>> token = codec.issue(TokenKind.ACCESS, user_id)
    >>> codec.verify(TokenKind.ACCESS, token).subject == str(user_id)
    True
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        access_policy: TokenPolicy,
        refresh_policy: TokenPolicy,
        issuer: str,
    ):
        if not issuer:
            msg = "Token issuer cannot be empty"
            raise ValueError(msg)
        if access_policy.secret == refresh_policy.secret:
            msg = "Access and refresh token secrets must differ"
            raise ValueError(msg)

        self._policies = {
            TokenKind.ACCESS: access_policy,
            TokenKind.REFRESH: refresh_policy,
        }
        self._issuer = issuer

    @property
    def issuer(self) -> str:
        return self._issuer

    def lifetime(self, kind: TokenKind) -> timedelta:
        return self._policies[kind].expires_in

    def issue(
        self,
        kind: TokenKind,
        subject_id: Union[UUID, str],
        *,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed token for ``subject_id``.

        Parameters
        ----------
        kind
            Selects the secret and default lifetime
        subject_id
            The user id the token is granted to (stored in ``aud``)
        expires_delta
            Custom lifetime (optional, mainly for tests)

        Returns
        -------
        The encoded JWT string
        """
        policy = self._policies[kind]
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else policy.expires_in)

        payload: dict[str, Any] = {
            "iss": self._issuer,
            "aud": str(subject_id),
            "iat": now,
            "exp": expire,
            "jti": uuid4().hex,
            "typ": kind.value,
        }

        return jwt.encode(payload, policy.secret, algorithm=self.ALGORITHM)

    def verify(self, kind: TokenKind, token: str) -> TokenPayload:
        """Verify signature, issuer and expiry of a token of the given kind.

        Raises
        ------
        InvalidTokenError
            For any failure. Expired and forged tokens are not distinguished.
        """
        policy = self._policies[kind]
        try:
            payload = jwt.decode(
                token,
                policy.secret,
                algorithms=[self.ALGORITHM],
                issuer=self._issuer,
                options={
                    # aud carries the subject, it is read below instead
                    "verify_aud": False,
                    "require": ["iss", "aud", "iat", "exp"],
                },
            )

            subject = payload["aud"]
            if not isinstance(subject, str) or not subject:
                raise InvalidTokenError

            if payload.get("typ", kind.value) != kind.value:
                raise InvalidTokenError

            return TokenPayload(
                subject=subject,
                issuer=payload["iss"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                kind=kind,
                token_id=payload.get("jti"),
            )

        except jwt.PyJWTError as e:
            raise InvalidTokenError from e
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError from e
