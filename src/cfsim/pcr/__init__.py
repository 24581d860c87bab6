"""PCR simulation helpers for cfsim."""
from __future__ import annotations

from .model import ANNEAL_LENGTH, AnnealSites
from .simulator import find_anneal_sites, pcr

__all__ = [
    "ANNEAL_LENGTH",
    "AnnealSites",
    "find_anneal_sites",
    "pcr",
]
