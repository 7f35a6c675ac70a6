from __future__ import annotations

import logging
import time
from pathlib import Path

from vscext.exceptions import (
    InvalidFilenameError,
    InvalidManifestError,
    ManifestNotFoundError,
)
from vscext.internal_config import DEFAULT_EXPORT_PREFIX, DEFAULT_OUTPUT_DIRNAME

logger: logging.Logger = logging.getLogger(__name__)


def validate_filename(filename: str) -> str:
    """Return *filename* unchanged if it stays inside the output directory."""
    if not filename.strip():
        raise InvalidFilenameError("Manifest filename must not be empty")
    if ".." in filename or "/" in filename or "\\" in filename:
        raise InvalidFilenameError(f'Invalid filename or path "{filename}"')
    return filename


def default_export_filename(now: float | None = None) -> str:
    timestamp = time.time() if now is None else now
    return f"{DEFAULT_EXPORT_PREFIX}-{int(timestamp * 1000)}.json"


def default_output_dir() -> Path:
    return Path.cwd().joinpath(DEFAULT_OUTPUT_DIRNAME).absolute()


class ManifestStore(object):
    """Read and write manifest files inside a single output directory."""

    output_dir: Path

    def __init__(self, output_dir: Path | str | None = None) -> None:
        self.output_dir = (
            Path(output_dir).expanduser().absolute()
            if output_dir
            else default_output_dir()
        )

    def resolve(self, filename: str) -> Path:
        path = self.output_dir.joinpath(validate_filename(filename))
        # the resolved path must stay inside output_dir
        try:
            path.resolve().relative_to(self.output_dir.resolve())
        except ValueError as exc:
            raise InvalidFilenameError(
                f'Filename "{filename}" escapes the output directory'
            ) from exc
        return path

    def exists(self, filename: str) -> bool:
        return self.resolve(filename).is_file()

    def output_dir_exists(self) -> bool:
        return self.output_dir.is_dir()

    def create_output_dir(self) -> None:
        logger.debug(f"Creating output directory {self.output_dir}")
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def read_manifest(self, filename: str) -> str:
        path = self.resolve(filename)
        if not path.is_file():
            raise ManifestNotFoundError(f"File not found: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidManifestError(f"{path} is not valid UTF-8") from exc

    def write_manifest(self, filename: str, contents: str) -> Path:
        path = self.resolve(filename)
        path.write_text(contents, encoding="utf-8")
        return path
