from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ExportMode(str, Enum):
    IDENTIFIERS = "identifiers"
    EXACT = "exact"


@dataclass(frozen=True)
class ExtensionRecord:
    extension_id: str
    version: str = ""
    disabled: bool = False

    @property
    def spec(self) -> str:
        """Return the ``id@version`` argument understood by the editor CLI."""
        if self.version:
            return f"{self.extension_id}@{self.version}"
        return self.extension_id
