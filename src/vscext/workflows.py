"""Export, import and list workflows.

Each workflow raises a ``VscextError`` subclass on failure and leaves the
choice of exit code to the command line layer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Awaitable, Callable

from vscext import manifest
from vscext.code_cli import CodeCli
from vscext.exceptions import OperationCancelledError
from vscext.installer import BatchInstaller
from vscext.internal_config import DEFAULT_CONCURRENCY
from vscext.models import ExportMode, ExtensionRecord
from vscext.prompt import confirm
from vscext.storage import ManifestStore

logger: logging.Logger = logging.getLogger(__name__)

ConfirmFunc = Callable[[str], Awaitable[bool]]


def _report(message: str, quiet: bool) -> None:
    logger.log(logging.DEBUG if quiet else logging.INFO, message)


def collect_extensions(code_cli: CodeCli, exact: bool = False) -> list[ExtensionRecord]:
    """List installed extensions, marking disabled ones when *exact* is set."""
    records = code_cli.list_extensions(show_versions=True)
    if not exact:
        return records

    disabled_ids = {
        record.extension_id.lower()
        for record in code_cli.list_extensions(disabled=True)
    }
    return [
        ExtensionRecord(
            extension_id=record.extension_id,
            version=record.version,
            disabled=record.extension_id.lower() in disabled_ids,
        )
        for record in records
    ]


async def export_extensions(
    filename: str,
    store: ManifestStore,
    code_cli: CodeCli,
    exact: bool = False,
    include_versions: bool = True,
    quiet: bool = False,
    dry_run: bool = False,
    confirm_overwrite: ConfirmFunc = confirm,
) -> Path:
    """Write the installed extensions to *filename* inside the output directory."""
    file_path = store.resolve(filename)

    if not store.output_dir_exists():
        if dry_run:
            _report(f"[DRY RUN] Would create directory: {store.output_dir}", quiet)
        else:
            store.create_output_dir()

    if not dry_run and store.exists(filename):
        if not await confirm_overwrite(f"{filename} already exists. Overwrite?"):
            raise OperationCancelledError("Export canceled.")

    records = collect_extensions(code_cli, exact=exact)
    mode = ExportMode.EXACT if exact else ExportMode.IDENTIFIERS

    if dry_run:
        _report(
            f"[DRY RUN] Would export {len(records)} extensions to {file_path}", quiet
        )
        return file_path

    store.write_manifest(
        filename, manifest.encode(records, mode, include_versions=include_versions)
    )
    _report(f"Exported {len(records)} extensions to {file_path}", quiet)
    return file_path


async def import_extensions(
    filename: str,
    store: ManifestStore,
    code_cli: CodeCli,
    concurrency: int = DEFAULT_CONCURRENCY,
    quiet: bool = False,
    dry_run: bool = False,
) -> list[ExtensionRecord]:
    """Install every extension listed in *filename*."""
    records = manifest.decode(store.read_manifest(filename))

    installer = BatchInstaller(
        code_cli,
        concurrency=concurrency,
        dry_run=dry_run,
        quiet=quiet,
    )
    await installer.install_all(records)
    _report("Import complete", quiet)
    return records


def list_extensions(
    code_cli: CodeCli, show_versions: bool = True, quiet: bool = False
) -> list[ExtensionRecord]:
    records = code_cli.list_extensions(show_versions=show_versions)
    _report("Installed extensions:", quiet)
    for record in records:
        _report(f"- {record.spec}", quiet)
    _report(f"Total: {len(records)} extensions", quiet)
    return records


__all__ = [
    "collect_extensions",
    "export_extensions",
    "import_extensions",
    "list_extensions",
]
