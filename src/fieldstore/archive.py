"""Point-in-time snapshots of a RecordStore.

A snapshot is an expiration-filtered copy of the store taken at a backup
time. Restoring picks the latest snapshot at or before the requested time
and re-bases every expiry onto the caller's current time, so each cell keeps
the TTL it had left when the backup was taken.
"""

from bisect import bisect_right, insort
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from fieldstore.cell import Cell
from fieldstore.exceptions import NoBackupAvailableError
from fieldstore.store import RecordStore


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of the live records at ``taken_at``.

    Cells are duplicated on capture, so no cell object is shared with the
    store the snapshot was taken from.
    """

    taken_at: int
    records: Mapping[str, Mapping[str, Cell]] = field(default_factory=dict)

    @classmethod
    def capture(cls, store: RecordStore, now: int) -> "Snapshot":
        """Copy every cell of ``store`` still live at ``now``.

        Records with no live cells are left out.
        """
        records: dict[str, dict[str, Cell]] = {}
        for key, field_name, cell in store.live_items(now):
            records.setdefault(key, {})[field_name] = Cell(cell.value, cell.expires_at)

        frozen = {key: MappingProxyType(record) for key, record in records.items()}
        return cls(taken_at=now, records=MappingProxyType(frozen))

    @property
    def record_count(self) -> int:
        return len(self.records)

    def rebased(self, current_time: int) -> dict[str, dict[str, Cell]]:
        """Build fresh records with expiries shifted to ``current_time``."""
        return {
            key: {
                field_name: cell.rebase(self.taken_at, current_time)
                for field_name, cell in record.items()
            }
            for key, record in self.records.items()
        }


class SnapshotArchive:
    """Snapshots ordered by backup time.

    Timestamps are kept sorted so restore can find the greatest backup time
    not after the requested one. Backups may arrive in any order; a backup
    at an existing timestamp replaces the earlier snapshot.
    """

    def __init__(self) -> None:
        self._snapshots: dict[int, Snapshot] = {}
        self._timestamps: list[int] = []

    def backup(self, store: RecordStore, now: int) -> int:
        """Snapshot ``store`` as of ``now``.

        Returns:
            Number of non-empty records captured
        """
        snapshot = Snapshot.capture(store, now)
        if now not in self._snapshots:
            insort(self._timestamps, now)
        self._snapshots[now] = snapshot
        return snapshot.record_count

    def floor(self, timestamp: int) -> Snapshot | None:
        """Get the latest snapshot taken at or before ``timestamp``."""
        index = bisect_right(self._timestamps, timestamp)
        if index == 0:
            return None
        return self._snapshots[self._timestamps[index - 1]]

    def restore(self, store: RecordStore, current_time: int, restore_time: int) -> int:
        """Replace ``store`` with the snapshot in effect at ``restore_time``.

        Expiries are re-based from the snapshot's backup time to
        ``current_time``. Calling again with a later ``current_time`` pushes
        expiries further out.

        Returns:
            Backup time of the snapshot that was restored

        Raises:
            NoBackupAvailableError: If no snapshot was taken at or before
                ``restore_time``. The store is left untouched.
        """
        snapshot = self.floor(restore_time)
        if snapshot is None:
            raise NoBackupAvailableError(
                f"No backup available at or before {restore_time}"
            )

        store.replace(snapshot.rebased(current_time))
        return snapshot.taken_at

    def timestamps(self) -> list[int]:
        """List backup times in ascending order."""
        return list(self._timestamps)

    def __len__(self) -> int:
        return len(self._snapshots)

    def __contains__(self, timestamp: object) -> bool:
        return timestamp in self._snapshots
