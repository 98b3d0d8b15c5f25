"""Backend Protocol and result types for tiered persistence.

Every storage tier implements the same two-call interface so the coordinator
can treat the tiers as an ordered strategy list:

    read()            -> aggregate or None (empty tier)
    write_full(value) -> None, raises on failure

Remote backends raise RemoteUnavailableError; the local backend raises
LocalCacheError. Nothing else is expected to escape a backend.
"""

from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from src.bb_common.enums import StorageTier
from src.bb_common.errors import PersistencePartialFailure

T = TypeVar("T")


class PersistenceBackend(Protocol[T]):
    tier: StorageTier

    async def read(self) -> T | None: ...

    async def write_full(self, value: T) -> None: ...

    async def ping(self) -> bool: ...


class DocumentCodec(Protocol[T]):
    """Whole-aggregate JSON document mapping, shared by the KV and local tiers."""

    def to_document(self, value: T) -> Any: ...

    def from_document(self, document: Any) -> T: ...


@dataclass
class ReadResult(Generic[T]):
    value: T | None
    source: StorageTier | None


@dataclass
class SaveResult:
    """Outcome of a coordinated write.

    success is True when a remote tier accepted the write. A local-only save
    has success=False, source=LOCAL and a PersistencePartialFailure warning;
    the data is still durable on this host.
    """

    success: bool
    source: StorageTier
    message: str
    warning: PersistencePartialFailure | None = None

    @property
    def saved_locally_only(self) -> bool:
        return self.source == StorageTier.LOCAL


@dataclass
class SyncResult:
    success: bool
    message: str
