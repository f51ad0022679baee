"""
JSON-file record store.

Every collection lives in ``<DATA_DIR>/<name>.json`` as a pretty-printed JSON
array. Reads go through a ``TTLCache`` owned by the store; writes replace the
cached snapshot with what was written to disk.

Request handlers work through a ``StoreSession`` (unit of work): collections
are loaded once per session, mutated in memory by the repositories and
written together on ``commit()``. Each collection carries a version counter so
a commit based on a snapshot another request has since overwritten fails with
``ConcurrentModificationException`` instead of silently losing that write.
"""
import copy
import json
import logging
import os
import tempfile
import threading
import time
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from stockkeeper.config import settings
from stockkeeper.core.exceptions import ConcurrentModificationException, StorageException

logger = logging.getLogger(__name__)

COLLECTIONS = ("products", "warehouses", "stock", "transfers", "alerts", "order_history")


class TTLCache:
    """Read-through snapshot cache with a fixed time-to-live.

    ``clock`` must return seconds as a float and defaults to
    ``time.monotonic``; tests pass a fake clock to step over the TTL window.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def put(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonFileStore:

    def __init__(
        self,
        data_dir: Path,
        cache: Optional[TTLCache] = None,
        collections: Tuple[str, ...] = COLLECTIONS,
    ):
        self.data_dir = Path(data_dir)
        self.cache = cache if cache is not None else TTLCache(0)
        self._versions: Dict[str, int] = {name: 0 for name in collections}
        self._lock = threading.RLock()

    @property
    def collections(self) -> Tuple[str, ...]:
        return tuple(self._versions)

    def path_for(self, name: str) -> Path:
        if name not in self._versions:
            raise ValueError(f"Unknown collection '{name}'")
        return self.data_dir / f"{name}.json"

    def version(self, name: str) -> int:
        self.path_for(name)
        return self._versions[name]

    def ensure_files(self) -> None:
        """Create the data directory and an empty array file per missing collection."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            for name in self._versions:
                path = self.path_for(name)
                if not path.exists():
                    path.write_text("[]", encoding="utf-8")
                    logger.info("collection_file_created", extra={"collection": name, "path": str(path)})
        except OSError as exc:
            raise StorageException(str(self.data_dir), str(exc)) from exc

    # ── Reads ────────────────────────────────────────────────────────────────

    def load_all(self, name: str) -> List[dict]:
        return self.read(name)[1]

    def read(self, name: str) -> Tuple[int, List[dict]]:
        """Return ``(version, records)``; the records are a private deep copy."""
        with self._lock:
            cached = self.cache.get(name)
            if cached is not None:
                logger.debug("cache_hit", extra={"collection": name})
                return self._versions[name], copy.deepcopy(cached)

            records = self._read_file(name)
            self.cache.put(name, records)
            logger.debug("cache_refreshed", extra={"collection": name, "records": len(records)})
            return self._versions[name], copy.deepcopy(records)

    def _read_file(self, name: str) -> List[dict]:
        path = self.path_for(name)
        if not path.exists():
            return []
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageException(name, str(exc)) from exc
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageException(name, f"malformed JSON ({exc.msg} at line {exc.lineno})") from exc
        if not isinstance(data, list):
            raise StorageException(name, "expected a JSON array")
        return data

    # ── Writes ───────────────────────────────────────────────────────────────

    def save_all(self, name: str, records: List[dict]) -> None:
        self.write_many({name: records})

    def write_many(
        self,
        changes: Dict[str, List[dict]],
        expected_versions: Optional[Dict[str, int]] = None,
    ) -> Dict[str, int]:
        """Write several collections as one unit.

        All payloads are serialized and written to temp files first, then
        renamed into place. The previous contents of every target file are
        kept in memory until all renames succeed; if one fails, the files
        already replaced are restored and their cache entries dropped.
        Returns the new version of each written collection.
        """
        with self._lock:
            if expected_versions:
                stale = sorted(
                    name for name, version in expected_versions.items()
                    if self.version(name) != version
                )
                if stale:
                    raise ConcurrentModificationException(stale)

            staged: List[Tuple[str, str, Path, str]] = []
            current = ""
            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
                for current, records in changes.items():
                    path = self.path_for(current)
                    payload = json.dumps(records, indent=2, default=_json_default, ensure_ascii=False)
                    fd, tmp_path = tempfile.mkstemp(prefix=f".{current}.", suffix=".tmp", dir=self.data_dir)
                    staged.append((current, tmp_path, path, payload))
                    with os.fdopen(fd, "w", encoding="utf-8") as handle:
                        handle.write(payload)
                originals = {
                    name: path.read_text(encoding="utf-8") if path.exists() else None
                    for name, _, path, _ in staged
                }
            except (OSError, TypeError, ValueError) as exc:
                self._discard_staged(staged)
                raise StorageException(current or "unknown", str(exc)) from exc

            replaced: List[Tuple[str, Path]] = []
            try:
                for current, tmp_path, path, _ in staged:
                    os.replace(tmp_path, path)
                    replaced.append((current, path))
            except OSError as exc:
                self._discard_staged(staged)
                self._restore(replaced, originals)
                raise StorageException(current, str(exc)) from exc

            new_versions = {}
            for name, _, _, payload in staged:
                self._versions[name] += 1
                new_versions[name] = self._versions[name]
                written = json.loads(payload)
                self.cache.put(name, written)
                logger.info(
                    "collection_written",
                    extra={"collection": name, "records": len(written), "version": self._versions[name]},
                )
            return new_versions

    def _discard_staged(self, staged: List[Tuple[str, str, Path, str]]) -> None:
        for _, tmp_path, _, _ in staged:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def _restore(self, replaced: List[Tuple[str, Path]], originals: Dict[str, Optional[str]]) -> None:
        for name, path in replaced:
            original = originals[name]
            if original is None:
                path.unlink(missing_ok=True)
            else:
                path.write_text(original, encoding="utf-8")
            self.cache.invalidate(name)
            logger.warning("collection_restored", extra={"collection": name})

    def check_health(self) -> Tuple[bool, Optional[str]]:
        try:
            if not self.data_dir.is_dir():
                return False, f"data directory {self.data_dir} does not exist"
            if not os.access(self.data_dir, os.W_OK):
                return False, f"data directory {self.data_dir} is not writable"
            for name in self._versions:
                self._read_file(name)
        except StorageException as exc:
            return False, exc.message
        return True, None


class StoreSession:
    """Unit of work over a ``JsonFileStore``."""

    def __init__(self, store: JsonFileStore):
        self.store = store
        self._records: Dict[str, List[dict]] = {}
        self._versions: Dict[str, int] = {}
        self._dirty: set = set()

    def records(self, name: str) -> List[dict]:
        if name not in self._records:
            version, rows = self.store.read(name)
            self._records[name] = rows
            self._versions[name] = version
        return self._records[name]

    def mark_dirty(self, name: str) -> None:
        self.records(name)
        self._dirty.add(name)

    @property
    def dirty(self) -> frozenset:
        return frozenset(self._dirty)

    def commit(self) -> None:
        if not self._dirty:
            return
        changes = {name: self._records[name] for name in sorted(self._dirty)}
        expected = {name: self._versions[name] for name in changes}
        self._versions.update(self.store.write_many(changes, expected_versions=expected))
        self._dirty.clear()

    def rollback(self) -> None:
        self._records.clear()
        self._versions.clear()
        self._dirty.clear()

    def close(self) -> None:
        self.rollback()


@lru_cache(maxsize=1)
def get_store() -> JsonFileStore:
    return JsonFileStore(settings.data_path, cache=TTLCache(settings.CACHE_TTL_SECONDS))


def get_db() -> Iterator[StoreSession]:
    db = StoreSession(get_store())
    try:
        yield db
    finally:
        db.close()


def init_storage() -> None:
    get_store().ensure_files()
