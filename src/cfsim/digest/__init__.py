"""Restriction cutting and digestion."""
from __future__ import annotations

from .cutter import CutSite, cut_at, cut_once, find_cut_site
from .simulator import digest, digest_fragments, parse_enzyme_list

__all__ = [
    "CutSite",
    "cut_at",
    "cut_once",
    "find_cut_site",
    "digest",
    "digest_fragments",
    "parse_enzyme_list",
]
