"""In-memory two-level record storage with per-field expiration."""

from collections.abc import Iterator, Mapping

from fieldstore.cell import Cell
from fieldstore.exceptions import InvalidArgumentError

Record = dict[str, Cell]

SCAN_SEPARATOR = " : "


def _require(key: str | None, field: str | None) -> None:
    if key is None or field is None:
        raise InvalidArgumentError("Key and field cannot be None")


class RecordStore:
    """Mapping of key -> field -> Cell.

    Every operation takes the caller's notion of the current time. Reads
    treat expired cells as absent but never evict them; only ``delete`` and
    ``replace`` change what is physically stored.

    Not thread-safe. Callers sharing an instance must serialize access.
    """

    def __init__(self) -> None:
        self._data: dict[str, Record] = {}

    def set(self, key: str, field: str, value: str, now: int) -> None:
        """Store a permanent value, overwriting any existing cell."""
        _require(key, field)
        self._put(key, field, Cell.permanent(value))

    def set_with_ttl(self, key: str, field: str, value: str, now: int, ttl: int) -> None:
        """Store a value that expires ``ttl`` time units after ``now``."""
        _require(key, field)
        self._put(key, field, Cell.expiring(value, now, ttl))

    def _put(self, key: str, field: str, cell: Cell) -> None:
        self._data.setdefault(key, {})[field] = cell

    def get(self, key: str | None, field: str | None, now: int) -> str | None:
        """Get a field's value. Returns None if missing or expired."""
        cell = self._live_cell(key, field, now)
        if cell is None:
            return None
        return cell.value

    def delete(self, key: str | None, field: str | None, now: int) -> bool:
        """Delete a live field.

        Returns True if a live field was removed. Expired fields count as
        absent and are left in place.
        """
        if self._live_cell(key, field, now) is None:
            return False

        record = self._data[key]
        del record[field]
        if not record:
            del self._data[key]
        return True

    def scan(self, key: str | None, now: int) -> list[str]:
        """List live ``"field : value"`` pairs for a key, sorted by field."""
        return self.scan_by_prefix(key, "", now)

    def scan_by_prefix(self, key: str | None, prefix: str | None, now: int) -> list[str]:
        """List live pairs for fields starting with ``prefix``, sorted by field."""
        if key is None or prefix is None:
            return []
        record = self._data.get(key)
        if record is None:
            return []

        return [
            f"{field}{SCAN_SEPARATOR}{cell.value}"
            for field, cell in sorted(record.items())
            if field.startswith(prefix) and not cell.is_expired(now)
        ]

    def _live_cell(self, key: str | None, field: str | None, now: int) -> Cell | None:
        if key is None or field is None:
            return None
        record = self._data.get(key)
        if record is None:
            return None
        cell = record.get(field)
        if cell is None or cell.is_expired(now):
            return None
        return cell

    def live_items(self, now: int) -> Iterator[tuple[str, str, Cell]]:
        """Iterate ``(key, field, cell)`` for every cell live as of ``now``."""
        for key, record in self._data.items():
            for field, cell in record.items():
                if not cell.is_expired(now):
                    yield key, field, cell

    def replace(self, records: Mapping[str, Mapping[str, Cell]]) -> None:
        """Replace the whole store with copies of ``records``.

        Empty records are dropped.
        """
        self._data = {
            key: dict(record)
            for key, record in records.items()
            if record
        }

    def keys(self) -> list[str]:
        """List stored keys, including keys whose cells have all expired."""
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data
