from __future__ import annotations

import json
from typing import cast

from vscext.exceptions import InvalidManifestError
from vscext.models import ExportMode, ExtensionRecord

JsonMap = dict[str, object]


def parse_extension_spec(value: str) -> tuple[str, str]:
    """Split ``publisher.name@1.2.3`` into identifier and version."""
    spec = value.strip()
    if not spec:
        return "", ""

    extension_id, separator, version = spec.rpartition("@")
    if not separator or not extension_id or not version:
        return spec, ""
    return extension_id, version


def parse_listing(output: str) -> list[ExtensionRecord]:
    """Turn ``code --list-extensions`` output into records, keeping its order."""
    records: list[ExtensionRecord] = []
    for line in output.splitlines():
        extension_id, version = parse_extension_spec(line)
        if extension_id:
            records.append(ExtensionRecord(extension_id=extension_id, version=version))
    return records


def _record_to_map(record: ExtensionRecord) -> JsonMap:
    entry: JsonMap = {"id": record.extension_id}
    if record.version:
        entry["version"] = record.version
    entry["disabled"] = record.disabled
    return entry


def encode(
    records: list[ExtensionRecord],
    mode: ExportMode = ExportMode.IDENTIFIERS,
    include_versions: bool = True,
) -> str:
    """Serialize *records* as a manifest document."""
    payload: list[object]
    if mode is ExportMode.EXACT:
        payload = [_record_to_map(record) for record in records]
    elif include_versions:
        payload = [record.spec for record in records]
    else:
        payload = [record.extension_id for record in records]
    return json.dumps(payload, indent=2) + "\n"


def _record_from_string(value: str, index: int) -> ExtensionRecord:
    extension_id, version = parse_extension_spec(value)
    if not extension_id:
        raise InvalidManifestError(f"Manifest entry {index} is an empty identifier")
    return ExtensionRecord(extension_id=extension_id, version=version)


def _record_from_map(value: JsonMap, index: int) -> ExtensionRecord:
    extension_id = value.get("id")
    if not isinstance(extension_id, str) or not extension_id.strip():
        raise InvalidManifestError(f"Manifest entry {index} has no extension id")

    version = value.get("version")
    if version is None:
        version = ""
    if not isinstance(version, str):
        raise InvalidManifestError(
            f"Manifest entry {index} has a non-string version: {version!r}"
        )

    disabled = value.get("disabled", False)
    if not isinstance(disabled, bool):
        raise InvalidManifestError(
            f"Manifest entry {index} has a non-boolean disabled flag: {disabled!r}"
        )

    return ExtensionRecord(
        extension_id=extension_id.strip(),
        version=version.strip(),
        disabled=disabled,
    )


def decode(text: str) -> list[ExtensionRecord]:
    """Parse a manifest document in either the identifier or the exact shape."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidManifestError(f"Invalid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise InvalidManifestError(
            f"Manifest must be a JSON array, got {type(payload).__name__}"
        )

    records: list[ExtensionRecord] = []
    for index, item in enumerate(payload):
        if isinstance(item, str):
            records.append(_record_from_string(item, index))
        elif isinstance(item, dict):
            records.append(_record_from_map(cast(JsonMap, item), index))
        else:
            raise InvalidManifestError(
                f"Manifest entry {index} must be a string or an object"
            )
    return records
