"""Tests for Cell."""

import dataclasses

import pytest

from fieldstore.cell import Cell


class TestCell:
    """Tests for Cell expiry and re-basing."""

    def test_permanent_never_expires(self) -> None:
        """Permanent cells are live at any time."""
        cell = Cell.permanent("v")
        assert cell.is_permanent
        assert not cell.is_expired(10**12)

    def test_expiring_sets_absolute_time(self) -> None:
        """Expiring cells store now + ttl."""
        cell = Cell.expiring("v", 100, 50)
        assert cell.expires_at == 150
        assert not cell.is_permanent

    def test_live_before_expiry(self) -> None:
        """Cell is live strictly before expires_at."""
        cell = Cell.expiring("v", 100, 50)
        assert not cell.is_expired(149)

    def test_expired_at_boundary(self) -> None:
        """Cell is expired once now reaches expires_at."""
        cell = Cell.expiring("v", 100, 50)
        assert cell.is_expired(150)
        assert cell.is_expired(151)

    def test_non_positive_ttl_is_expired_immediately(self) -> None:
        """Zero and negative TTLs are accepted and expire at once."""
        assert Cell.expiring("v", 100, 0).is_expired(100)
        assert Cell.expiring("v", 100, -5).expires_at == 95

    def test_ttl_remaining(self) -> None:
        """TTL remaining is expires_at - now, None when permanent."""
        assert Cell.expiring("v", 100, 50).ttl_remaining(120) == 30
        assert Cell.permanent("v").ttl_remaining(120) is None

    def test_rebase_preserves_remaining_ttl(self) -> None:
        """Re-basing keeps the TTL left at backup time."""
        cell = Cell(value="v", expires_at=150)
        rebased = cell.rebase(100, 500)
        assert rebased.expires_at == 550
        assert rebased.value == "v"

    def test_rebase_permanent_stays_permanent(self) -> None:
        """Permanent cells stay permanent after re-basing."""
        assert Cell.permanent("v").rebase(100, 500).expires_at is None

    def test_rebase_into_the_past(self) -> None:
        """Current time before backup time yields an earlier expiry."""
        cell = Cell(value="v", expires_at=150)
        assert cell.rebase(100, 20).expires_at == 70

    def test_is_immutable(self) -> None:
        """Cells cannot be modified in place."""
        cell = Cell.permanent("v")
        with pytest.raises(dataclasses.FrozenInstanceError):
            cell.value = "other"  # type: ignore[misc]
