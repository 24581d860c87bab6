"""Construction File model, parser, executor and I/O."""
from __future__ import annotations

from .executor import ConstructionRun, Product, execute, simulate_cf
from .io import dump_cf, load_cf
from .model import MOLECULE_TYPES, ConstructionFile, ConstructionStep, Operation
from .parser import OPERATION_KEYWORDS, parse_cf, tokenize

__all__ = [
    "ConstructionRun",
    "Product",
    "execute",
    "simulate_cf",
    "dump_cf",
    "load_cf",
    "MOLECULE_TYPES",
    "ConstructionFile",
    "ConstructionStep",
    "Operation",
    "OPERATION_KEYWORDS",
    "parse_cf",
    "tokenize",
]
