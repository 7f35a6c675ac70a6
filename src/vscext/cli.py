#! /bin/env python3
from __future__ import annotations

import asyncio
import logging

import click
import typer
from typer.core import TyperGroup

from vscext import workflows
from vscext.code_cli import CodeCli
from vscext.config import UserConfig, load_user_config
from vscext.exceptions import OperationCancelledError, VscextError
from vscext.internal_config import (
    DEFAULT_CODE_BINARY,
    DEFAULT_CONCURRENCY,
    LOG_FORMAT,
    VSCEXT_VERSION,
)
from vscext.storage import ManifestStore, default_export_filename, validate_filename

logger: logging.Logger = logging.getLogger(__name__)


class _HelpOnUnknownCommand(TyperGroup):
    """Print the help text and exit 1 for an unrecognized verb."""

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        if (
            args
            and not args[0].startswith("-")
            and self.get_command(ctx, args[0]) is None
            and not ctx.resilient_parsing
        ):
            typer.echo(f"Unknown command: {args[0]}\n", err=True)
            typer.echo(ctx.get_help())
            ctx.exit(1)
        return super().resolve_command(ctx, args)


app: typer.Typer = typer.Typer(
    cls=_HelpOnUnknownCommand,
    help="Export, import and list VS Code extensions.",
    rich_markup_mode=None,
)


def _configure_logging(log_level: str) -> None:
    _log_level = getattr(logging, log_level.upper(), None)
    if not isinstance(_log_level, int):
        raise ValueError(f"Invalid log level: {log_level!r}")
    logging.basicConfig(level=_log_level, format=LOG_FORMAT)


def _code_cli(code_path: str, config: UserConfig, timeout: float = 0) -> CodeCli:
    return CodeCli(
        code_binary=code_path or config.code_path or DEFAULT_CODE_BINARY,
        timeout=timeout if timeout > 0 else None,
    )


def _store(output_dir: str, config: UserConfig) -> ManifestStore:
    return ManifestStore(output_dir or config.output_dir or None)


def _exit_on_error(exc: Exception, quiet: bool = False) -> None:
    if isinstance(exc, OperationCancelledError):
        logger.log(logging.DEBUG if quiet else logging.INFO, f"{exc}")
    else:
        logger.error(f"{exc}")
    raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", is_eager=True, help="Show the version and exit."
    ),
) -> None:
    if version:
        typer.echo(f"vscext {VSCEXT_VERSION}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=1)


@app.command("export")
def export_command(
    filename: str = typer.Argument(
        "", help="Manifest file name, defaults to a timestamped name."
    ),
    exact: bool = typer.Option(
        False, help="Write records with version and disabled state."
    ),
    versions: bool = typer.Option(
        True, help="Append @version to identifiers (ignored with --exact)."
    ),
    quiet: bool = typer.Option(False, help="Reduce output verbosity."),
    dry_run: bool = typer.Option(
        False, help="Show what would be done without making changes."
    ),
    output_dir: str = typer.Option("", help="Directory holding manifest files."),
    code_path: str = typer.Option("", help="Path to the VS Code CLI."),
    log_level: str = typer.Option("info", help="Logging level."),
) -> None:
    """Export installed extensions to a JSON manifest."""
    try:
        _configure_logging(log_level)
        config = load_user_config()
        quiet = quiet or config.quiet
        name = validate_filename(filename or default_export_filename())
        asyncio.run(
            workflows.export_extensions(
                name,
                store=_store(output_dir, config),
                code_cli=_code_cli(code_path, config),
                exact=exact or config.exact,
                include_versions=versions,
                quiet=quiet,
                dry_run=dry_run or config.dry_run,
            )
        )
    except (VscextError, ValueError, OSError) as exc:
        _exit_on_error(exc, quiet)


@app.command("import")
def import_command(
    filename: str = typer.Argument("", help="Manifest file name to import."),
    concurrency: int = typer.Option(
        DEFAULT_CONCURRENCY, min=1, help="Number of parallel installs."
    ),
    timeout: float = typer.Option(
        0,
        min=0,
        help="Seconds before a single CLI call is abandoned, 0 waits forever.",
    ),
    quiet: bool = typer.Option(False, help="Reduce output verbosity."),
    dry_run: bool = typer.Option(
        False, help="Show what would be done without making changes."
    ),
    output_dir: str = typer.Option("", help="Directory holding manifest files."),
    code_path: str = typer.Option("", help="Path to the VS Code CLI."),
    log_level: str = typer.Option("info", help="Logging level."),
) -> None:
    """Install extensions from a JSON manifest."""
    try:
        _configure_logging(log_level)
        config = load_user_config()
        quiet = quiet or config.quiet
        if not filename:
            raise ValueError(
                "You must specify a file to import (e.g. vscext import my.json)"
            )
        asyncio.run(
            workflows.import_extensions(
                validate_filename(filename),
                store=_store(output_dir, config),
                code_cli=_code_cli(code_path, config, timeout),
                concurrency=concurrency,
                quiet=quiet,
                dry_run=dry_run or config.dry_run,
            )
        )
    except (VscextError, ValueError, OSError) as exc:
        _exit_on_error(exc, quiet)


@app.command("list")
def list_command(
    versions: bool = typer.Option(True, help="Show installed versions."),
    quiet: bool = typer.Option(False, help="Reduce output verbosity."),
    code_path: str = typer.Option("", help="Path to the VS Code CLI."),
    log_level: str = typer.Option("info", help="Logging level."),
) -> None:
    """List currently installed extensions."""
    try:
        _configure_logging(log_level)
        config = load_user_config()
        quiet = quiet or config.quiet
        workflows.list_extensions(
            _code_cli(code_path, config), show_versions=versions, quiet=quiet
        )
    except (VscextError, ValueError, OSError) as exc:
        _exit_on_error(exc, quiet)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
