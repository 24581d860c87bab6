"""Load and save Construction File documents."""
from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Mapping

import yaml

from cfsim.errors import ConfigError

from .model import ConstructionFile
from .parser import parse_cf

_STRUCTURED_SUFFIXES = {".json", ".yaml", ".yml"}
_TABLE_SUFFIXES = {".tsv": "\t", ".csv": ","}


def _from_payload(payload: Any, path: Path) -> ConstructionFile:
    if not isinstance(payload, Mapping):
        raise ConfigError(f"{path}: expected a mapping with 'steps' and 'sequences'.")
    return ConstructionFile.from_record(payload)


def load_cf(path: str | Path) -> ConstructionFile:
    """
    Read a construction file.

    ``.json``/``.yaml``/``.yml`` hold the ``{steps, sequences}`` record;
    ``.tsv``/``.csv`` are spreadsheet exports and anything else is free text,
    both handed to :func:`parse_cf`.
    """

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Construction file '{path}' not found.")
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".json":
        try:
            return _from_payload(json.loads(text), path)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{path}: invalid JSON ({exc})") from exc
    if suffix in {".yaml", ".yml"}:
        try:
            return _from_payload(yaml.safe_load(text), path)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: invalid YAML ({exc})") from exc
    delimiter = _TABLE_SUFFIXES.get(suffix)
    if delimiter is not None:
        rows = [row for row in csv.reader(text.splitlines(), delimiter=delimiter) if row]
        return parse_cf(rows)
    return parse_cf(text)


def dump_cf(cf: ConstructionFile, path: str | Path) -> None:
    """Write ``cf`` as JSON or YAML, chosen by the file suffix."""

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in _STRUCTURED_SUFFIXES:
        raise ConfigError(f"Cannot write construction file as '{suffix or path.name}'; use .json, .yaml or .yml.")
    payload = cf.to_record()
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".json":
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")


__all__ = ["load_cf", "dump_cf"]
