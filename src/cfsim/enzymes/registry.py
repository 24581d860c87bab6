"""Restriction enzyme cut geometries."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional

import yaml

from cfsim.config import resolve_enzyme_table_path
from cfsim.errors import ConfigError, UnknownEnzymeError
from cfsim.seq.alphabet import resolve_to_sequence, reverse_complement

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestrictionEnzyme:
    """
    Recognition site plus staggered cut offsets.

    ``cut5``/``cut3`` are measured from the end of the recognition site on the
    strand where the site was found; negative values fall inside the site.
    """

    name: str
    recognition_sequence: str
    cut5: int
    cut3: int
    recognition_sequence_rc: str = field(init=False)
    is_five_prime: bool = field(init=False)

    def __post_init__(self) -> None:
        site = resolve_to_sequence(self.recognition_sequence)
        object.__setattr__(self, "recognition_sequence", site)
        object.__setattr__(self, "recognition_sequence_rc", reverse_complement(site))
        object.__setattr__(self, "is_five_prime", self.cut5 < self.cut3)

    @classmethod
    def from_entry(cls, entry: Mapping[str, Any]) -> "RestrictionEnzyme":
        try:
            return cls(
                name=str(entry["name"]),
                recognition_sequence=str(entry.get("recognitionSequence") or entry["recognition_sequence"]),
                cut5=int(entry["cut5"]),
                cut3=int(entry["cut3"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid enzyme entry {dict(entry)!r}: {exc}") from exc

    def to_entry(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "recognitionSequence": self.recognition_sequence,
            "cut5": self.cut5,
            "cut3": self.cut3,
        }


BUILTIN_ENZYMES = (
    {"name": "AarI", "recognitionSequence": "CACCTGC", "cut5": 4, "cut3": 8},
    {"name": "BbsI", "recognitionSequence": "GAAGAC", "cut5": 2, "cut3": 6},
    {"name": "BsaI", "recognitionSequence": "GGTCTC", "cut5": 1, "cut3": 5},
    {"name": "BsmBI", "recognitionSequence": "CGTCTC", "cut5": 1, "cut3": 5},
    {"name": "SapI", "recognitionSequence": "GCTCTTC", "cut5": 1, "cut3": 4},
    {"name": "BseRI", "recognitionSequence": "GAGGAG", "cut5": 10, "cut3": 8},
    {"name": "BamHI", "recognitionSequence": "GGATCC", "cut5": -5, "cut3": -1},
    {"name": "BglII", "recognitionSequence": "AGATCT", "cut5": -5, "cut3": -1},
    {"name": "EcoRI", "recognitionSequence": "GAATTC", "cut5": -5, "cut3": -1},
    {"name": "XhoI", "recognitionSequence": "CTCGAG", "cut5": -5, "cut3": -1},
    {"name": "SpeI", "recognitionSequence": "ACTAGT", "cut5": -5, "cut3": -1},
    {"name": "XbaI", "recognitionSequence": "TCTAGA", "cut5": -5, "cut3": -1},
    {"name": "PstI", "recognitionSequence": "CTGCAG", "cut5": -1, "cut3": -5},
)


class EnzymeRegistry(Mapping[str, RestrictionEnzyme]):
    """Read-only snapshot of enzymes keyed by name (lookups ignore case)."""

    def __init__(self, enzymes: Iterable[RestrictionEnzyme]):
        table: Dict[str, RestrictionEnzyme] = {}
        for enzyme in enzymes:
            table[enzyme.name] = enzyme
        self._table = MappingProxyType(table)
        self._folded = MappingProxyType({name.lower(): enzyme for name, enzyme in table.items()})

    @classmethod
    def from_entries(cls, entries: Iterable[Mapping[str, Any]]) -> "EnzymeRegistry":
        return cls(RestrictionEnzyme.from_entry(entry) for entry in entries)

    def __getitem__(self, name: str) -> RestrictionEnzyme:
        enzyme = self.find(name)
        if enzyme is None:
            raise UnknownEnzymeError(f'Enzyme "{name}" not found.')
        return enzyme

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def get(self, name: str, default: Optional[RestrictionEnzyme] = None) -> Optional[RestrictionEnzyme]:
        enzyme = self.find(name)
        return default if enzyme is None else enzyme

    def find(self, name: str) -> Optional[RestrictionEnzyme]:
        key = str(name).strip()
        return self._table.get(key) or self._folded.get(key.lower())

    def extended(self, enzymes: Iterable[RestrictionEnzyme]) -> "EnzymeRegistry":
        """Return a new registry with ``enzymes`` added (same names replaced)."""

        return EnzymeRegistry([*self._table.values(), *enzymes])


def load_enzyme_table(path: str | Path) -> list[RestrictionEnzyme]:
    """Read a YAML list (or ``{enzymes: [...]}``) of enzyme entries."""

    table_path = Path(path)
    if not table_path.exists():
        raise ConfigError(f"Enzyme table '{table_path}' not found.")
    data = yaml.safe_load(table_path.read_text(encoding="utf-8"))
    if isinstance(data, Mapping):
        data = data.get("enzymes", [])
    if not isinstance(data, list):
        raise ConfigError("Enzyme table must be a YAML list of enzyme entries.")
    enzymes = []
    for entry in data:
        if not isinstance(entry, Mapping):
            raise ConfigError(f"Enzyme entry must be a mapping, got {entry!r}.")
        enzymes.append(RestrictionEnzyme.from_entry(entry))
    LOGGER.debug("load_enzyme_table path=%s count=%d", table_path, len(enzymes))
    return enzymes


def load_registry(path: str | Path | None = None) -> EnzymeRegistry:
    """Build a registry from the built-in table plus an optional YAML table."""

    registry = EnzymeRegistry.from_entries(BUILTIN_ENZYMES)
    table_path = resolve_enzyme_table_path(path)
    if table_path is not None:
        registry = registry.extended(load_enzyme_table(table_path))
    return registry


@lru_cache(maxsize=1)
def default_registry() -> EnzymeRegistry:
    return load_registry()


def resolve_registry(registry: EnzymeRegistry | None) -> EnzymeRegistry:
    return registry if registry is not None else default_registry()


__all__ = [
    "RestrictionEnzyme",
    "EnzymeRegistry",
    "BUILTIN_ENZYMES",
    "load_enzyme_table",
    "load_registry",
    "default_registry",
    "resolve_registry",
]
