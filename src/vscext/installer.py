"""Concurrency-limited installation of manifest entries.

Entries are split into consecutive chunks of ``concurrency`` items. Chunks run
one after another, the entries of a chunk run together, and the next chunk
starts only once every entry of the current one has settled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from vscext.internal_config import DEFAULT_CONCURRENCY
from vscext.models import ExtensionRecord

logger: logging.Logger = logging.getLogger(__name__)


class ExtensionInstaller(Protocol):
    async def install_extension(self, spec: str) -> None: ...

    async def disable_extension(self, extension_id: str) -> None: ...


def chunked(
    records: list[ExtensionRecord], size: int
) -> list[list[ExtensionRecord]]:
    if size < 1:
        raise ValueError(f"Chunk size must be at least 1, got {size}")
    return [records[start : start + size] for start in range(0, len(records), size)]


class BatchInstaller(object):
    """Install extension records against the editor CLI, N at a time."""

    def __init__(
        self,
        code_cli: ExtensionInstaller,
        concurrency: int = DEFAULT_CONCURRENCY,
        dry_run: bool = False,
        quiet: bool = False,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"Concurrency must be at least 1, got {concurrency}")
        self.code_cli = code_cli
        self.concurrency = concurrency
        self.dry_run = dry_run
        self.quiet = quiet
        self._dispatched = 0

    def _report(self, message: str) -> None:
        logger.log(logging.DEBUG if self.quiet else logging.INFO, message)

    async def install_all(self, records: list[ExtensionRecord]) -> None:
        """Install every record; individual failures are logged, never raised."""
        total = len(records)
        self._dispatched = 0
        self._report(f"Importing {total} extensions...")

        for chunk in chunked(records, self.concurrency):
            await asyncio.gather(
                *(self.install_record(record, total) for record in chunk)
            )

    async def install_record(self, record: ExtensionRecord, total: int) -> None:
        # counts dispatched entries, not finished ones
        self._dispatched += 1
        self._report(f"[{self._dispatched}/{total}] Processing {record.spec}...")

        if self.dry_run:
            self._report(f"[DRY RUN] Would install {record.spec}")
            if record.disabled:
                self._report(f"[DRY RUN] Would disable {record.extension_id}")
            return

        action = "install"
        try:
            self._report(f"Installing {record.spec}...")
            await self.code_cli.install_extension(record.spec)
            if record.disabled:
                action = "disable"
                self._report(f"Disabling {record.extension_id}...")
                await self.code_cli.disable_extension(record.extension_id)
        except Exception as exc:
            logger.warning(f"Failed to {action} {record.spec}: {exc}")
