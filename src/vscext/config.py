from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

# the config file may contain comments
import json5

from vscext.internal_config import CONFIG_FILENAME, CONFIG_PATH_ENV

logger: logging.Logger = logging.getLogger(__name__)

_BOOLEAN_KEYS = {"quiet": "quiet", "dryRun": "dry_run", "exact": "exact"}
_STRING_KEYS = {"outputDir": "output_dir", "codePath": "code_path"}


@dataclass(frozen=True)
class UserConfig:
    quiet: bool = False
    dry_run: bool = False
    exact: bool = False
    output_dir: str = ""
    code_path: str = ""


def default_config_path() -> Path:
    explicit_path = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if explicit_path:
        return Path(explicit_path).expanduser()
    return Path.home().joinpath(CONFIG_FILENAME)


def load_user_config(path: Path | None = None) -> UserConfig:
    """Read per-user defaults; anything unreadable falls back to defaults."""
    config_path = path if path is not None else default_config_path()
    if not config_path.is_file():
        return UserConfig()

    try:
        data = json5.loads(config_path.read_text(encoding="utf-8"))
    except (ValueError, OSError) as exc:
        logger.warning(f"Invalid config file {config_path}, using defaults: {exc}")
        return UserConfig()

    if not isinstance(data, dict):
        logger.warning(
            f"Invalid config file {config_path}, expected an object, using defaults"
        )
        return UserConfig()

    values: dict[str, object] = {}
    for key, field in _BOOLEAN_KEYS.items():
        if key not in data:
            continue
        if isinstance(data[key], bool):
            values[field] = data[key]
        else:
            logger.warning(f"Ignoring config key {key!r}: expected true or false")

    for key, field in _STRING_KEYS.items():
        if key not in data:
            continue
        if isinstance(data[key], str):
            values[field] = data[key]
        else:
            logger.warning(f"Ignoring config key {key!r}: expected a string")

    return UserConfig(**values)
