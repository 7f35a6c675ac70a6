from __future__ import annotations

import asyncio
import logging
import subprocess
from typing import Callable

from vscext.exceptions import ExtensionListingError
from vscext.internal_config import DEFAULT_CODE_BINARY
from vscext.manifest import parse_listing
from vscext.models import ExtensionRecord

RunCommand = Callable[..., subprocess.CompletedProcess[str]]

logger: logging.Logger = logging.getLogger(__name__)


class CodeCli(object):
    """Thin wrapper around the ``code`` command line interface."""

    code_binary: str
    timeout: float | None

    def __init__(
        self,
        code_binary: str = DEFAULT_CODE_BINARY,
        timeout: float | None = None,
        run_command: RunCommand = subprocess.run,
    ) -> None:
        self.code_binary = code_binary
        self.timeout = timeout
        self._run_command = run_command

    def _run(self, args: list[str]) -> str:
        cmd = [self.code_binary, *args]
        logger.debug(f"Running {' '.join(cmd)}")
        process = self._run_command(
            cmd,
            capture_output=True,
            check=False,
            text=True,
            timeout=self.timeout,
        )
        if process.returncode != 0:
            raise subprocess.CalledProcessError(
                process.returncode,
                cmd,
                process.stdout,
                process.stderr,
            )
        return process.stdout or ""

    def list_extensions(
        self, show_versions: bool = False, disabled: bool = False
    ) -> list[ExtensionRecord]:
        """Return the installed (or only the disabled) extensions."""
        args = ["--list-extensions"]
        if show_versions:
            args.append("--show-versions")
        if disabled:
            args.append("--disabled")

        try:
            output = self._run(args)
        except (subprocess.SubprocessError, OSError) as exc:
            raise ExtensionListingError(
                "Failed to list extensions. Is VS Code installed and in your PATH? "
                f"({exc})"
            ) from exc
        return parse_listing(output)

    async def install_extension(self, spec: str) -> None:
        await asyncio.to_thread(self._run, ["--install-extension", spec])

    async def disable_extension(self, extension_id: str) -> None:
        await asyncio.to_thread(self._run, ["--disable-extension", extension_id])
