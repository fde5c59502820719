"""Password hashing service using bcrypt."""

import bcrypt

from bookshelf_auth.exceptions import WeakPasswordError


class PasswordHashingService:
    """Hash and verify passwords with bcrypt.

    bcrypt only looks at the first 72 bytes of its input, so longer
    passwords are rejected instead of silently truncated.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hashed = service.hash("secret-pass")
    >>> service.verify("secret-pass", hashed)
    True
    """

    MIN_LENGTH = 6
    MAX_BYTES = 72

    def __init__(self, rounds: int = 10):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations)
        """
        if not 4 <= rounds <= 31:
            msg = "bcrypt rounds must be between 4 and 31"
            raise ValueError(msg)
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend one bcrypt check on a throwaway hash and return False.

        Used when no stored hash exists, so a lookup miss costs the same
        as a wrong password.
        """
        if self._dummy_hash is None:
            salt = bcrypt.gensalt(rounds=self._rounds)
            self._dummy_hash = bcrypt.hashpw(b"dummy-password", salt)
        bcrypt.checkpw(password.encode("utf-8")[: self.MAX_BYTES], self._dummy_hash)
        return False

    def validate_strength(self, password: str) -> None:
        """Validate password length.

        Raises
        ------
        WeakPasswordError
            If password is empty, shorter than 6 characters or longer
            than 72 bytes
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check whether a hash was produced with a different work factor."""
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                return int(parts[2]) != self._rounds
        except (ValueError, IndexError):
            pass
        return True
