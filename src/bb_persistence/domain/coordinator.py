"""PersistenceCoordinator — read-through / write-through across storage tiers.

Read policy:
  remote tiers in order (relational, then key-value); the first non-empty
  answer wins and is copied into the local cache. If every remote tier is
  empty or unavailable, the local cache answers (possibly None).

Write policy:
  local cache first, unconditionally. Then remote tiers in order until one
  accepts the write. If none does, the save is reported as local-only.

There is no version token: concurrent writers race and the last successful
relational replace wins.
"""

import logging
from collections.abc import Sequence
from typing import Generic, TypeVar

from src.bb_common.enums import StorageTier
from src.bb_common.errors import (
    LocalCacheError,
    PersistencePartialFailure,
    RemoteUnavailableError,
)
from src.bb_persistence.domain.backend import (
    PersistenceBackend,
    ReadResult,
    SaveResult,
    SyncResult,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PersistenceCoordinator(Generic[T]):
    def __init__(
        self,
        aggregate: str,
        remotes: Sequence[PersistenceBackend[T]],
        local: PersistenceBackend[T],
    ) -> None:
        self.aggregate = aggregate
        self._remotes = list(remotes)
        self._local = local

    @property
    def tiers(self) -> list[StorageTier]:
        return [b.tier for b in self._remotes] + [self._local.tier]

    async def read(self) -> ReadResult[T]:
        for backend in self._remotes:
            try:
                value = await backend.read()
            except RemoteUnavailableError as exc:
                logger.warning("%s read fell through: %s", self.aggregate, exc.message)
                continue
            if value is None:
                logger.debug("%s: %s tier empty", self.aggregate, backend.tier.value)
                continue
            await self._refresh_local(value)
            return ReadResult(value=value, source=backend.tier)

        try:
            value = await self._local.read()
        except LocalCacheError:
            logger.exception("%s: local cache unreadable", self.aggregate)
            return ReadResult(value=None, source=None)
        if value is None:
            return ReadResult(value=None, source=None)
        return ReadResult(value=value, source=self._local.tier)

    async def save(self, value: T) -> SaveResult:
        try:
            await self._local.write_full(value)
        except LocalCacheError:
            logger.exception("%s: local cache write failed", self.aggregate)
            raise

        for backend in self._remotes:
            try:
                await backend.write_full(value)
            except RemoteUnavailableError as exc:
                logger.warning("%s write fell through: %s", self.aggregate, exc.message)
                continue
            logger.info("%s saved to %s tier", self.aggregate, backend.tier.value)
            return SaveResult(
                success=True,
                source=backend.tier,
                message=f"{self.aggregate} saved to {backend.tier.value} storage",
            )

        warning = PersistencePartialFailure(self.aggregate)
        logger.warning(warning.message)
        return SaveResult(
            success=False,
            source=self._local.tier,
            message=warning.message,
            warning=warning,
        )

    async def check_connection(self) -> dict[StorageTier, bool]:
        status: dict[StorageTier, bool] = {}
        for backend in self._remotes:
            status[backend.tier] = await backend.ping()
        return status

    async def sync_from_remote(self) -> SyncResult:
        """Refresh the local cache from the first remote tier that has data."""
        for backend in self._remotes:
            try:
                value = await backend.read()
            except RemoteUnavailableError as exc:
                logger.warning("%s sync fell through: %s", self.aggregate, exc.message)
                continue
            if value is None:
                continue
            await self._refresh_local(value)
            return SyncResult(
                success=True,
                message=f"{self.aggregate} refreshed from {backend.tier.value} storage",
            )
        return SyncResult(success=False, message=f"No remote copy of {self.aggregate}")

    async def force_sync_to_remote(self, value: T) -> SyncResult:
        result = await self.save(value)
        return SyncResult(success=result.success, message=result.message)

    async def _refresh_local(self, value: T) -> None:
        # Write-back failures must not fail a successful remote read.
        try:
            await self._local.write_full(value)
        except LocalCacheError:
            logger.exception("%s: write-back to local cache failed", self.aggregate)
