"""
Catalog Store for the Channel Catalog Pipeline
Load, merge and persist the canonical JSON catalog
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Set

from filelock import FileLock, Timeout

from catalog_pipeline.core.codecs import StructuredCodec
from catalog_pipeline.core.errors import CatalogBusyError, DuplicateError, InputNotFound
from catalog_pipeline.core.records import ChannelRecord, sort_records
from .atomic_write import write_bytes_atomic

logger = logging.getLogger(__name__)

ADDED = "added"
SKIPPED = "skipped"


@dataclass(frozen=True)
class ImportEntry:
    """Outcome of one candidate record during a bulk import."""
    outcome: str
    name: str
    url: str
    reason: str = ""

    def __str__(self) -> str:
        if self.outcome == ADDED:
            return f"ADDED: {self.name}"
        return f"SKIPPED: {self.name} - {self.reason}"


@dataclass
class ImportLog:
    """Ordered record of every bulk-import decision."""
    entries: List[ImportEntry] = field(default_factory=list)

    @property
    def added(self) -> int:
        return sum(1 for e in self.entries if e.outcome == ADDED)

    @property
    def skipped(self) -> int:
        return sum(1 for e in self.entries if e.outcome == SKIPPED)

    def record_added(self, record: ChannelRecord) -> None:
        self.entries.append(ImportEntry(ADDED, record.name, record.url))

    def record_skipped(self, record: ChannelRecord, reason: str) -> None:
        self.entries.append(ImportEntry(SKIPPED, record.name, record.url, reason))

    def format_lines(self) -> List[str]:
        return [str(e) for e in self.entries]

    def write(self, log_path: Path) -> Path:
        """Persist the log, one entry per line."""
        text = "".join(line + "\n" for line in self.format_lines())
        return write_bytes_atomic(log_path, text.encode("utf-8"))


class CatalogStore:
    """
    Service responsible for the canonical channel catalog file.

    Responsibilities:
    - Load the JSON catalog into memory.
    - Reject records whose url is already present.
    - Re-sort by (group, name) and atomically persist on save.
    - Hold a file lock for the store's lifetime when used as a context manager.
    """

    def __init__(self, catalog_path, lock_timeout: float = 10.0):
        """
        Initialize the CatalogStore.

        Args:
            catalog_path: Path to the canonical JSON catalog.
            lock_timeout: Seconds to wait for the catalog lock.
        """
        self._path = Path(catalog_path).expanduser()
        self._codec = StructuredCodec()
        self._lock = FileLock(f"{self._path}.lock", timeout=lock_timeout)
        self._records: List[ChannelRecord] = []
        self._urls: Set[str] = set()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def records(self) -> List[ChannelRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __enter__(self) -> "CatalogStore":
        try:
            self._lock.acquire()
        except Timeout:
            raise CatalogBusyError(
                f"Catalog {self._path} is locked by another process (waited {self._lock.timeout}s)"
            )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._lock.release()

    def load(self) -> List[ChannelRecord]:
        """
        Read the catalog file into memory, replacing any held records.

        Raises:
            InputNotFound: If the catalog file does not exist.
            ParseError: If the file is not a valid JSON catalog.
        """
        if not self._path.exists():
            raise InputNotFound(self._path)

        records = self._codec.decode(self._path.read_bytes())
        self._records = list(records)
        self._urls = {r.identity for r in records}
        if len(self._urls) != len(self._records):
            logger.warning(f"Catalog {self._path.name} already holds duplicate URLs")

        logger.info(f"Loaded {len(self._records)} channels from {self._path}")
        return list(self._records)

    def insert(self, record: ChannelRecord) -> None:
        """
        Append a record in memory.

        Raises:
            DuplicateError: If a record with the same url is already held.
        """
        if record.identity in self._urls:
            raise DuplicateError(record.url, record.name)
        self._records.append(record)
        self._urls.add(record.identity)
        logger.debug(f"Channel queued: {record.name}")

    def bulk_insert(self, records: Iterable[ChannelRecord]) -> ImportLog:
        """
        Insert each record, skipping duplicates instead of aborting.

        Returns:
            ImportLog: One entry per candidate, in input order.
        """
        log = ImportLog()
        for record in records:
            try:
                self.insert(record)
            except DuplicateError:
                log.record_skipped(record, "URL already exists")
                logger.warning(f"SKIPPED: {record.name} - URL already exists")
            else:
                log.record_added(record)
                logger.info(f"ADDED: {record.name}")
        return log

    def save(self) -> Path:
        """Sort held records by (group, name) and atomically write the catalog."""
        self._records = sort_records(self._records)
        target = write_bytes_atomic(self._path, self._codec.encode(self._records))
        logger.info(f"✓ Catalog saved: {target} ({len(self._records)} channels)")
        return target

    def __repr__(self):
        return f"CatalogStore(path={self._path}, channels={len(self._records)})"
