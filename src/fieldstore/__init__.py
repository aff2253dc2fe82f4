"""fieldstore - In-memory key/field records with TTLs and point-in-time restore."""

from fieldstore.archive import Snapshot, SnapshotArchive
from fieldstore.cell import Cell
from fieldstore.config import Config, LoggingConfig
from fieldstore.database import InMemoryDB
from fieldstore.exceptions import (
    ConfigError,
    FieldStoreError,
    InvalidArgumentError,
    NoBackupAvailableError,
)
from fieldstore.observability import (
    LogLevel,
    StructuredLogger,
    Timer,
    configure_logging,
    get_logger,
)
from fieldstore.store import RecordStore

__version__ = "0.1.0"
__all__ = [
    # Core
    "Cell",
    "InMemoryDB",
    "RecordStore",
    "Snapshot",
    "SnapshotArchive",
    # Configuration
    "Config",
    "LoggingConfig",
    # Errors
    "ConfigError",
    "FieldStoreError",
    "InvalidArgumentError",
    "NoBackupAvailableError",
    # Observability
    "LogLevel",
    "StructuredLogger",
    "Timer",
    "configure_logging",
    "get_logger",
]
