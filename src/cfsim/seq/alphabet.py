"""IUPAC nucleotide alphabet helpers: validation, cleanup, complements."""
from __future__ import annotations

import re

from cfsim.errors import InvalidCharacterError, InvalidSequenceError

IUPAC_BASES = "ACGTURYSWKMBDHVN"

_SEQUENCE_RE = re.compile(rf"^[{IUPAC_BASES}{IUPAC_BASES.lower()}]+$")
_NOISE_RE = re.compile(r"[\s\d]+")

_DNA_COMPLEMENT = {
    "A": "T", "T": "A", "C": "G", "G": "C",
    "R": "Y", "Y": "R", "S": "S", "W": "W",
    "K": "M", "M": "K", "B": "V", "V": "B",
    "D": "H", "H": "D", "N": "N",
}
_DNA_COMPLEMENT.update({base.lower(): comp.lower() for base, comp in list(_DNA_COMPLEMENT.items())})

_RNA_COMPLEMENT = dict(_DNA_COMPLEMENT)
_RNA_COMPLEMENT.update({"A": "U", "U": "A", "a": "u", "u": "a"})
del _RNA_COMPLEMENT["T"], _RNA_COMPLEMENT["t"]


def is_sequence(text: str) -> bool:
    """Return True when ``text`` is a non-empty IUPAC nucleotide string."""

    return bool(_SEQUENCE_RE.match(text))


def resolve_to_sequence(value: object) -> str:
    """
    Validate ``value`` against the IUPAC alphabet and return it uppercased.

    Molecules (anything exposing a string ``sequence`` attribute) resolve to
    their top-strand sequence.
    """

    sequence = getattr(value, "sequence", value)
    if not isinstance(sequence, str):
        raise InvalidSequenceError(f"Unrecognizable as sequence: {value!r}")
    text = sequence.strip()
    if not is_sequence(text):
        raise InvalidSequenceError(f"Unrecognizable as sequence: {sequence!r}")
    return text.upper()


def cleanup_sequence(text: str) -> str:
    """Strip whitespace and position numbers from pasted text, then validate."""

    return resolve_to_sequence(_NOISE_RE.sub("", str(text)))


def reverse_complement(sequence: str, *, rna: bool = False) -> str:
    """
    Reverse complement a nucleotide string, ambiguity codes included.

    Case is preserved. Raises InvalidCharacterError for symbols without a
    complement (``T`` in RNA mode, ``U`` in DNA mode).
    """

    table = _RNA_COMPLEMENT if rna else _DNA_COMPLEMENT
    out = []
    for base in reversed(sequence):
        comp = table.get(base)
        if comp is None:
            raise InvalidCharacterError(f"Invalid base '{base}'")
        out.append(comp)
    return "".join(out)


def is_palindromic(sequence: str) -> bool:
    return sequence == reverse_complement(sequence)


__all__ = [
    "IUPAC_BASES",
    "is_sequence",
    "resolve_to_sequence",
    "cleanup_sequence",
    "reverse_complement",
    "is_palindromic",
]
