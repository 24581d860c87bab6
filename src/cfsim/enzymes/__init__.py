"""Restriction enzyme registry."""
from __future__ import annotations

from .registry import (
    BUILTIN_ENZYMES,
    EnzymeRegistry,
    RestrictionEnzyme,
    default_registry,
    load_enzyme_table,
    load_registry,
    resolve_registry,
)

__all__ = [
    "BUILTIN_ENZYMES",
    "EnzymeRegistry",
    "RestrictionEnzyme",
    "default_registry",
    "load_enzyme_table",
    "load_registry",
    "resolve_registry",
]
