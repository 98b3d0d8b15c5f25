"""Local cache tier — last resort and offline mode.

Each slot is one JSON file under the cache directory. Writes go to a
temporary file in the same directory and are moved into place with
os.replace, so a reader never sees a half-written slot.

Failures here mean the host environment is broken (disk full, permissions,
corrupted file); they surface as LocalCacheError.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Generic, TypeVar

from src.bb_common.enums import StorageTier
from src.bb_common.errors import LocalCacheError
from src.bb_persistence.domain.backend import DocumentCodec

T = TypeVar("T")


class LocalCache:
    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def _path(self, slot: str) -> Path:
        return self._directory / f"{slot}.json"

    def read(self, slot: str) -> Any | None:
        path = self._path(slot)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise LocalCacheError(slot, str(exc)) from exc
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise LocalCacheError(slot, f"corrupted JSON: {exc}") from exc

    def write(self, slot: str, value: Any) -> None:
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise LocalCacheError(slot, f"not serializable: {exc}") from exc
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{slot}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self._path(slot))
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise LocalCacheError(slot, str(exc)) from exc

    def clear(self, slot: str) -> None:
        self._path(slot).unlink(missing_ok=True)


class LocalCacheBackend(Generic[T]):
    tier = StorageTier.LOCAL

    def __init__(self, cache: LocalCache, slot: str, codec: DocumentCodec[T]) -> None:
        self._cache = cache
        self._slot = slot
        self._codec = codec

    async def read(self) -> T | None:
        document = self._cache.read(self._slot)
        if document is None:
            return None
        try:
            return self._codec.from_document(document)
        except (KeyError, TypeError, ValueError) as exc:
            raise LocalCacheError(self._slot, f"malformed document: {exc}") from exc

    async def write_full(self, value: T) -> None:
        self._cache.write(self._slot, self._codec.to_document(value))

    async def ping(self) -> bool:
        return True
