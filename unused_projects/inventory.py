"""Extension inventory - builds extension records from disk.

Two sources:
- a site tree: directories holding ``<name>.info.yml`` metadata files, with
  enabled state taken from a ``core.extension.yml`` config export
- a manifest: a YAML or JSON file listing extensions explicitly

Both return records keyed by machine name. Nothing here writes to disk.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import ExtensionRecord

logger = logging.getLogger(__name__)

INFO_SUFFIX = ".info.yml"
SKIPPED_DIRS = {"node_modules"}


class InventoryError(Exception):
    """Raised when extension metadata cannot be read."""


def _read_yaml(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except OSError as e:
        raise InventoryError(f"Cannot read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise InventoryError(f"Cannot decode {path}: {e}") from e
    except yaml.YAMLError as e:
        raise InventoryError(f"Invalid YAML in {path}: {e}") from e


def load_enabled_extensions(config_path: Path) -> set[str]:
    """Read names of enabled extensions from a ``core.extension.yml`` export."""
    data = _read_yaml(config_path) or {}
    if not isinstance(data, dict):
        raise InventoryError(f"Expected a mapping in {config_path}")

    enabled: set[str] = set()
    for section in ("module", "theme"):
        entries = data.get(section) or {}
        if not isinstance(entries, dict):
            raise InventoryError(f"Expected '{section}' to be a mapping in {config_path}")
        enabled.update(entries)
    logger.info(f"Loaded {len(enabled)} enabled extensions from {config_path}")
    return enabled


def _iter_info_files(root: Path):
    for path in sorted(root.rglob(f"*{INFO_SUFFIX}")):
        relative = path.relative_to(root)
        if any(part.startswith(".") or part in SKIPPED_DIRS for part in relative.parts[:-1]):
            continue
        yield path


def _origin_for(subpath: str) -> str:
    return "core" if subpath == "core" or subpath.startswith("core/") else "extension"


def scan_site(root: Path, enabled_config: Path | None = None) -> dict[str, ExtensionRecord]:
    """Discover extensions below ``root`` from their ``.info.yml`` files.

    Args:
        root: Site root directory
        enabled_config: Optional ``core.extension.yml`` listing enabled extensions.
            Without it every extension is reported as disabled.

    Returns:
        Records keyed by machine name, ordered by path
    """
    if not root.is_dir():
        raise InventoryError(f"Site root not found: {root}")

    enabled = load_enabled_extensions(enabled_config) if enabled_config else set()

    records: dict[str, ExtensionRecord] = {}
    for info_file in _iter_info_files(root):
        info = _read_yaml(info_file) or {}
        if not isinstance(info, dict):
            raise InventoryError(f"Expected a mapping in {info_file}")

        name = info_file.name[: -len(INFO_SUFFIX)]
        subpath = info_file.parent.relative_to(root).as_posix()
        if subpath == ".":
            subpath = ""

        if name in records:
            logger.warning(f"Extension '{name}' found again at '{subpath}'; using the later one")

        records[name] = ExtensionRecord(
            name=name,
            subpath=subpath,
            declared_project=_optional_str(info.get("project")),
            display_name=str(info.get("name") or name),
            version=_version(info.get("version"), info_file),
            enabled=name in enabled,
            origin=_origin_for(subpath),
            kind=str(info.get("type") or "module"),
        )

    logger.info(f"Discovered {len(records)} extensions under {root}")
    return records


def load_manifest(path: Path) -> dict[str, ExtensionRecord]:
    """Load extensions from a YAML or JSON manifest.

    Format::

        extensions:
          webform:
            path: modules/contrib/webform
            name: Webform
            project: webform
            version: 6.2.0
            status: enabled
    """
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise InventoryError(f"Cannot read {path}: {e.strerror or e}") from e
        except UnicodeDecodeError as e:
            raise InventoryError(f"Cannot decode {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise InventoryError(f"Invalid JSON in {path}: {e}") from e
    else:
        data = _read_yaml(path)

    if not isinstance(data, dict) or not isinstance(data.get("extensions"), dict):
        raise InventoryError(f"Manifest {path} must contain an 'extensions' mapping")

    records: dict[str, ExtensionRecord] = {}
    for name, entry in data["extensions"].items():
        entry = entry or {}
        if not isinstance(entry, dict):
            raise InventoryError(f"Extension '{name}' in {path} must be a mapping")
        try:
            records[str(name)] = _record_from_manifest(str(name), entry)
        except ValidationError as e:
            raise InventoryError(f"Invalid extension '{name}' in {path}: {e}") from e

    logger.info(f"Loaded {len(records)} extensions from {path}")
    return records


def _record_from_manifest(name: str, entry: dict[str, Any]) -> ExtensionRecord:
    status = entry.get("enabled", entry.get("status", False))
    if isinstance(status, str):
        enabled = status.strip().lower() in ("enabled", "1", "true", "yes")
    else:
        enabled = bool(status)

    return ExtensionRecord(
        name=name,
        subpath=str(entry.get("subpath", entry.get("path", "")) or ""),
        declared_project=_optional_str(entry.get("project")),
        display_name=str(entry.get("name") or name),
        version=_version(entry.get("version"), f"{name} in manifest"),
        enabled=enabled,
        origin=str(entry.get("origin") or "extension"),
        kind=str(entry.get("kind", entry.get("type")) or "module"),
    )


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _version(value: Any, source: object) -> str | None:
    """Version as a string; unquoted YAML numbers lose trailing zeros (2.10 -> 2.1)."""
    if value is not None and not isinstance(value, str):
        logger.warning(f"Version {value!r} for {source} is not a string; quote it to keep it exact")
    return _optional_str(value)
