"""Single field values with optional absolute expiration."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Cell:
    """A stored value and the time at which it stops being readable.

    ``expires_at`` is ``None`` for permanent cells. Times are caller-supplied
    integers; a cell is expired once ``now`` reaches ``expires_at``.
    """

    value: str
    expires_at: int | None = None

    @classmethod
    def permanent(cls, value: str) -> "Cell":
        """Create a cell that never expires."""
        return cls(value=value)

    @classmethod
    def expiring(cls, value: str, now: int, ttl: int) -> "Cell":
        """Create a cell living ``ttl`` time units from ``now``.

        Zero or negative TTLs are accepted and yield an already expired cell.
        """
        return cls(value=value, expires_at=now + ttl)

    @property
    def is_permanent(self) -> bool:
        return self.expires_at is None

    def is_expired(self, now: int) -> bool:
        """Check if this cell has expired as of ``now``."""
        if self.expires_at is None:
            return False
        return self.expires_at <= now

    def ttl_remaining(self, now: int) -> int | None:
        """Get time left before expiry, or None for permanent cells."""
        if self.expires_at is None:
            return None
        return self.expires_at - now

    def rebase(self, backup_time: int, current_time: int) -> "Cell":
        """Shift expiry so the TTL left at ``backup_time`` starts at ``current_time``."""
        if self.expires_at is None:
            return Cell(value=self.value)
        return Cell(
            value=self.value,
            expires_at=self.expires_at - backup_time + current_time,
        )
