"""Boundary resolution of raw inputs into molecules."""
from __future__ import annotations

import json
from typing import Any, Mapping, Union

from cfsim.errors import InvalidSequenceError, ResolutionError

from .alphabet import resolve_to_sequence
from .model import Polynucleotide, ds_dna

MoleculeInput = Union[str, Mapping[str, Any], Polynucleotide]


def resolve_to_polynucleotide(value: MoleculeInput) -> Polynucleotide:
    """
    Turn a molecule-like input into a Polynucleotide.

    The input kind is decided once here:

    * ``Polynucleotide`` - returned unchanged
    * mapping - parsed as a molecule record
    * string starting with ``{`` - parsed as a JSON molecule record
    * any other string - a blunt, hydroxyl-terminated linear dsDNA
    """

    if isinstance(value, Polynucleotide):
        return value
    if isinstance(value, Mapping):
        return Polynucleotide.from_record(value)
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("{"):
            try:
                record = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ResolutionError(f"Cannot resolve {value!r}: {exc}") from exc
            if not isinstance(record, Mapping):
                raise ResolutionError(f"Cannot resolve {value!r}")
            return Polynucleotide.from_record(record)
        try:
            return ds_dna(resolve_to_sequence(text))
        except InvalidSequenceError as exc:
            raise ResolutionError(f"Cannot resolve {value!r}") from exc
    raise ResolutionError(f"Cannot resolve {value!r}")


__all__ = ["MoleculeInput", "resolve_to_polynucleotide"]
