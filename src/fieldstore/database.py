"""Timestamped record database with backup and restore."""

from fieldstore.archive import SnapshotArchive
from fieldstore.config import Config
from fieldstore.exceptions import NoBackupAvailableError
from fieldstore.observability import Timer, configure_logging, get_logger
from fieldstore.store import RecordStore

class InMemoryDB:
    """Record store plus its snapshot archive.

    Each instance owns its data; create as many as needed and drop them
    when done. All times are supplied by the caller.

    Example:
        db = InMemoryDB()
        db.set_at_with_ttl("u1", "name", "Alice", 100, 50)
        db.backup(120)
        db.set_at("u1", "name", "Bob", 130)
        db.restore(200, 120)
        db.get_at("u1", "name", 200)  # "Alice", now expiring at 230
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._store = RecordStore()
        self._archive = SnapshotArchive()
        self._log = get_logger(__name__, db=name)

    @classmethod
    def from_config(cls, config: Config) -> "InMemoryDB":
        """Create a database and apply its logging settings."""
        if config.logging.configure:
            configure_logging(config.logging.level, config.logging.format)
        return cls(name=config.name)

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def archive(self) -> SnapshotArchive:
        return self._archive

    def set_at(self, key: str, field: str, value: str, timestamp: int) -> None:
        """Set a permanent field value."""
        self._store.set(key, field, value, timestamp)
        self._log.debug("Field set", key=key, field=field, timestamp=timestamp)

    def set_at_with_ttl(
        self,
        key: str,
        field: str,
        value: str,
        timestamp: int,
        ttl: int,
    ) -> None:
        """Set a field value expiring ``ttl`` units after ``timestamp``."""
        self._store.set_with_ttl(key, field, value, timestamp, ttl)
        self._log.debug(
            "Field set with TTL", key=key, field=field, timestamp=timestamp, ttl=ttl
        )

    def get_at(self, key: str, field: str, timestamp: int) -> str | None:
        return self._store.get(key, field, timestamp)

    def delete_at(self, key: str, field: str, timestamp: int) -> bool:
        deleted = self._store.delete(key, field, timestamp)
        if deleted:
            self._log.debug("Field deleted", key=key, field=field, timestamp=timestamp)
        return deleted

    def scan_at(self, key: str, timestamp: int) -> list[str]:
        return self._store.scan(key, timestamp)

    def scan_by_prefix_at(self, key: str, prefix: str, timestamp: int) -> list[str]:
        return self._store.scan_by_prefix(key, prefix, timestamp)

    def backup(self, timestamp: int) -> int:
        """Snapshot live data as of ``timestamp``.

        Returns:
            Number of non-empty records in the snapshot
        """
        with Timer() as t:
            count = self._archive.backup(self._store, timestamp)

        self._log.info(
            "Backup taken", duration_ms=t.duration_ms, timestamp=timestamp, records=count
        )
        return count

    def restore(self, timestamp: int, timestamp_to_restore: int) -> None:
        """Roll live data back to the latest backup at or before ``timestamp_to_restore``.

        Remaining TTLs are measured from the backup time and re-anchored at
        ``timestamp``. Restoring again with a later ``timestamp`` moves
        expiries forward accordingly.

        Raises:
            NoBackupAvailableError: If every backup is newer than
                ``timestamp_to_restore``
        """
        try:
            with Timer() as t:
                backup_time = self._archive.restore(
                    self._store, timestamp, timestamp_to_restore
                )
        except NoBackupAvailableError as e:
            self._log.warning(
                "Restore failed",
                error=e,
                timestamp=timestamp,
                restore_to=timestamp_to_restore,
                backups=len(self._archive),
            )
            raise

        self._log.info(
            "Backup restored",
            duration_ms=t.duration_ms,
            timestamp=timestamp,
            restore_to=timestamp_to_restore,
            backup_time=backup_time,
            records=len(self._store),
        )
