"""Error taxonomy for construction file simulation."""

from __future__ import annotations


class CFSimError(ValueError):
    """Base error for every simulation failure."""


class InvalidSequenceError(CFSimError):
    """Raised when text is not a valid nucleotide sequence."""


class InvalidCharacterError(CFSimError):
    """Raised when a symbol has no defined complement."""


class ResolutionError(CFSimError):
    """Raised when an input cannot be resolved to a molecule."""


class TopologyError(CFSimError):
    """Raised when a molecule's fields contradict its topology."""


class UnknownEnzymeError(CFSimError):
    """Raised when an enzyme name is not in the registry."""


class NoAnnealError(CFSimError):
    """Raised when a primer anchor is not found on the template."""


class InvalidFragmentIndexError(CFSimError):
    """Raised when a digest fragment selection is out of range."""


class AssemblyError(CFSimError):
    """Base error for assembly and ligation failures."""


class AssemblySiteError(AssemblyError):
    """Raised when a Golden Gate part lacks exactly one site per strand."""


class PalindromicEndError(AssemblyError):
    """Raised when a sticky end is its own reverse complement."""


class AmbiguousAssemblyError(AssemblyError):
    """Raised when more than one joining partner exists for an end."""


class NonClosingAssemblyError(AssemblyError):
    """Raised when fragments do not converge to the expected product."""


class IncompatibleEndsError(AssemblyError):
    """Raised when adjacent ends cannot be ligated."""


class MissingSequenceError(CFSimError):
    """Raised when a construction step references an unknown name."""


class ConfigError(CFSimError):
    """Raised when configuration or an input document is invalid."""


__all__ = [
    "CFSimError",
    "InvalidSequenceError",
    "InvalidCharacterError",
    "ResolutionError",
    "TopologyError",
    "UnknownEnzymeError",
    "NoAnnealError",
    "InvalidFragmentIndexError",
    "AssemblyError",
    "AssemblySiteError",
    "PalindromicEndError",
    "AmbiguousAssemblyError",
    "NonClosingAssemblyError",
    "IncompatibleEndsError",
    "MissingSequenceError",
    "ConfigError",
]
