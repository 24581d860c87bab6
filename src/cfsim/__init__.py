"""cfsim: Construction File simulation for recombinant-DNA workflows."""

from importlib import metadata

from . import assembly, cf, digest, enzymes, pcr, seq
from .assembly import assemble, blunt, gibson, golden_gate, ligate
from .cf import ConstructionFile, ConstructionStep, Operation, Product, execute, load_cf, parse_cf, simulate_cf
from .digest import cut_once, digest_fragments
from .digest import digest as digest_molecule
from .enzymes import EnzymeRegistry, RestrictionEnzyme, default_registry, load_registry
from .errors import CFSimError
from .pcr import pcr as simulate_pcr
from .seq import (
    Polynucleotide,
    ds_dna,
    is_palindromic,
    oligo,
    plasmid,
    polynucleotide,
    resolve_to_polynucleotide,
    resolve_to_sequence,
    reverse_complement,
)

try:  # pragma: no cover - metadata only at runtime
    __version__ = metadata.version("cfsim")
except metadata.PackageNotFoundError:  # pragma: no cover - source tree / editable installs
    __version__ = "0.0.0"

__all__ = [
    "assembly",
    "cf",
    "digest",
    "enzymes",
    "pcr",
    "seq",
    "assemble",
    "blunt",
    "gibson",
    "golden_gate",
    "ligate",
    "ConstructionFile",
    "ConstructionStep",
    "Operation",
    "Product",
    "execute",
    "load_cf",
    "parse_cf",
    "simulate_cf",
    "cut_once",
    "digest_fragments",
    "digest_molecule",
    "EnzymeRegistry",
    "RestrictionEnzyme",
    "default_registry",
    "load_registry",
    "CFSimError",
    "simulate_pcr",
    "Polynucleotide",
    "ds_dna",
    "is_palindromic",
    "oligo",
    "plasmid",
    "polynucleotide",
    "resolve_to_polynucleotide",
    "resolve_to_sequence",
    "reverse_complement",
    "__version__",
]
