"""
patchpanel - Patch Loader
Reads a patcher export (JSON) and turns it into parameter specs, presets
and a ready Device.
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from device import Device
from logging_utils import log_event
from parameter_model import ParameterSpec

_DEBUG_VERSION = re.compile(r"^\d+\.\d+\.\d+-dev$")


class PatchLoadError(Exception):
    """Export missing, unreadable or not shaped like a patcher export."""

    def __init__(self, message: str, *, path: Optional[Path] = None, header: Optional[str] = None):
        super().__init__(message)
        self.path = path
        self.header = header or "Couldn't load patcher export bundle"

    @property
    def description(self) -> str:
        if self.path is None:
            return str(self)
        return (
            f"{self} Currently trying to load \"{self.path}\". If that doesn't match the name "
            "of the file you exported, pass the right path on the command line."
        )


class PatchVersionError(PatchLoadError):
    """Export produced by a debug build of the runtime."""


@dataclass(frozen=True)
class Preset:
    name: str
    values: dict


@dataclass
class PatchExport:
    version: str
    filename: Optional[str] = None
    parameters: list[ParameterSpec] = field(default_factory=list)
    presets: list[Preset] = field(default_factory=list)
    source_path: Optional[Path] = None


def check_runtime_version(version: str) -> None:
    if _DEBUG_VERSION.match(str(version)):
        raise PatchVersionError(
            f"Patcher exported with a debug version ({version}). Re-export it with a release build.",
            header="Unsupported patcher version",
        )


def patch_title(export: PatchExport, fallback: str = "Unnamed Patcher") -> str:
    return f"{export.filename or fallback} (v{export.version})"


def _number(value, default: float) -> float:
    if value is None:
        return default
    return float(value)


def parse_parameter(entry) -> Optional[ParameterSpec]:
    """Build a ParameterSpec from one export entry, or None if the entry is unusable."""
    if not isinstance(entry, dict):
        return None
    parameter_id = entry.get("paramId", entry.get("id"))
    if not parameter_id:
        return None

    try:
        min_value = _number(entry.get("minimum"), 0.0)
        max_value = _number(entry.get("maximum"), 1.0)
        steps = int(entry.get("steps") or 1)
        initial = _number(entry.get("initialValue"), min_value)
    except (TypeError, ValueError):
        return None

    labels = entry.get("enumValues")
    if isinstance(labels, list) and labels:
        labels = tuple(str(label) for label in labels)
    else:
        labels = None

    return ParameterSpec(
        id=str(parameter_id),
        name=entry.get("name") or entry.get("displayName") or None,
        min=min_value,
        max=max_value,
        steps=max(1, steps),
        initial_value=initial,
        labels=labels,
    )


def _preset_values(payload: dict) -> dict:
    values = {}
    for key, raw in payload.items():
        if key.startswith("__"):
            continue
        if isinstance(raw, dict):
            raw = raw.get("value")
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            continue
        values[key] = float(raw)
    return values


def parse_presets(raw) -> list[Preset]:
    presets = []
    if not isinstance(raw, list):
        return presets
    for index, item in enumerate(raw):
        if not isinstance(item, dict) or not isinstance(item.get("preset"), dict):
            log_event("WARNING", "Preset", "Skipping malformed preset", index=index)
            continue
        presets.append(Preset(name=str(item.get("name") or f"Preset {index + 1}"), values=_preset_values(item["preset"])))
    return presets


def parse_patch_export(data, source_path: Optional[Path] = None) -> PatchExport:
    """Convert decoded export JSON into a PatchExport."""
    desc = data.get("desc") if isinstance(data, dict) else None
    if not isinstance(desc, dict) or not isinstance(desc.get("parameters"), list):
        raise PatchLoadError("Export has no parameter description.", path=source_path)

    meta = desc.get("meta") if isinstance(desc.get("meta"), dict) else {}
    version = str(meta.get("rnboversion") or "unknown")
    check_runtime_version(version)

    parameters = []
    for index, entry in enumerate(desc["parameters"]):
        spec = parse_parameter(entry)
        if spec is None:
            log_event("WARNING", "Patch", "Skipping malformed parameter entry", index=index)
            continue
        parameters.append(spec)

    return PatchExport(
        version=version,
        filename=meta.get("filename") or None,
        parameters=parameters,
        presets=parse_presets(data.get("presets")),
        source_path=source_path,
    )


def load_patch_export(path) -> PatchExport:
    """Read and parse an export file."""
    patch_path = Path(path)
    try:
        with open(patch_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise PatchLoadError(f"Could not read export: {e.strerror or e}.", path=patch_path) from e
    except ValueError as e:
        raise PatchLoadError(f"Export is not valid JSON: {e}.", path=patch_path) from e

    export = parse_patch_export(data, source_path=patch_path)
    log_event(
        "INFO", "Patch", "Loaded patcher export",
        path=patch_path, version=export.version,
        parameters=len(export.parameters), presets=len(export.presets),
    )
    return export


def create_device(export: PatchExport) -> Device:
    return Device(export.parameters, name=export.filename or "device")
