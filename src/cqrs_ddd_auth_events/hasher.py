"""Password hashing for the in-memory user store (bcrypt)."""

from __future__ import annotations

import bcrypt


class PasswordHasher:
    """bcrypt password hasher.

    Example:
        ```python
        hasher = PasswordHasher(rounds=12)
        hashed = hasher.hash("shakur")
        assert hasher.verify(hashed, "shakur")
        ```
    """

    def __init__(self, *, rounds: int = 12) -> None:
        """Initialize the hasher.

        Args:
            rounds: bcrypt cost factor (4-31, default 12).
        """
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode(), salt).decode()

    def verify(self, hashed_password: str, password: str) -> bool:
        """Check *password* against *hashed_password*; malformed hashes never match."""
        try:
            return bool(bcrypt.checkpw(password.encode(), hashed_password.encode()))
        except ValueError:
            return False

    def needs_rehash(self, hashed_password: str) -> bool:
        """``True`` if the hash was made with fewer rounds than configured."""
        # bcrypt format: $2b$12$...
        parts = hashed_password.split("$")
        if len(parts) >= 3:
            try:
                return int(parts[2]) < self.rounds
            except ValueError:
                pass
        return False


__all__: list[str] = ["PasswordHasher"]
