"""Email value object.

Provides validated, normalized email addresses for user identification.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from bookshelf.domain.user.exceptions import InvalidEmailError


@dataclass(frozen=True)
class Email:
    """Value object representing a validated email address.

    Uses the same rules as the ``EmailStr`` request fields, so every address
    accepted at the API boundary is accepted here as well.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)

        try:
            validated = validate_email(
                self.value.strip(),
                check_deliverability=False,
            )
        except EmailNotValidError as e:
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg) from e

        # Replace value with normalized version (frozen dataclass workaround)
        object.__setattr__(self, "value", validated.normalized.lower())

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
