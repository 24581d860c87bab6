"""Sequence alphabet and molecule model."""
from __future__ import annotations

from .alphabet import cleanup_sequence, is_palindromic, is_sequence, resolve_to_sequence, reverse_complement
from .metrics import base_balance, gc_content, max_repeat
from .model import Polynucleotide, ds_dna, oligo, plasmid, polynucleotide
from .resolve import MoleculeInput, resolve_to_polynucleotide

__all__ = [
    "cleanup_sequence",
    "is_palindromic",
    "is_sequence",
    "resolve_to_sequence",
    "reverse_complement",
    "base_balance",
    "gc_content",
    "max_repeat",
    "Polynucleotide",
    "ds_dna",
    "oligo",
    "plasmid",
    "polynucleotide",
    "MoleculeInput",
    "resolve_to_polynucleotide",
]
