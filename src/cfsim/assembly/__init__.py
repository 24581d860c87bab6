"""Multi-fragment assembly: Golden Gate, Gibson and ligation."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from cfsim.config import resolve_require_circular
from cfsim.enzymes.registry import EnzymeRegistry, resolve_registry
from cfsim.errors import NonClosingAssemblyError
from cfsim.seq.alphabet import resolve_to_sequence
from cfsim.seq.model import Polynucleotide, ds_dna, plasmid

from .gibson import HOMOLOGY_LENGTH, gibson, join_fragments
from .golden_gate import GoldenGatePart, excise_part, golden_gate, order_parts
from .ligation import blunt, ligate

LOGGER = logging.getLogger(__name__)

GIBSON = "gibson"

DnaInput = Union[str, Polynucleotide]


def _flatten(dnas: Iterable[Union[DnaInput, Iterable[DnaInput]]]) -> List[str]:
    sequences: List[str] = []
    for item in dnas:
        if isinstance(item, (str, Polynucleotide)):
            sequences.append(resolve_to_sequence(item))
        else:
            sequences.extend(resolve_to_sequence(sub) for sub in item)
    return sequences


def assemble_molecule(
    dnas: Iterable[Union[DnaInput, Iterable[DnaInput]]],
    enzyme: str,
    *,
    registry: EnzymeRegistry | None = None,
    require_circular: Optional[bool] = None,
) -> Polynucleotide:
    """Like :func:`assemble` but returns the product with its topology."""

    sequences = _flatten(dnas)
    enz = resolve_registry(registry).find(enzyme)
    if enz is not None:
        LOGGER.debug("assemble method=golden_gate enzyme=%s fragments=%d", enz.name, len(sequences))
        return plasmid(golden_gate(sequences, enz))

    LOGGER.debug("assemble method=gibson marker=%s fragments=%d", enzyme, len(sequences))
    product, is_circular = join_fragments(sequences)
    if is_circular:
        return plasmid(product)
    if resolve_require_circular(require_circular):
        raise NonClosingAssemblyError(
            "Products do not assemble into a circular product. "
            "Set CFSIM_GIBSON_REQUIRE_CIRCULAR=0 to accept linear products."
        )
    return ds_dna(product)


def assemble(
    dnas: Iterable[Union[DnaInput, Iterable[DnaInput]]],
    enzyme: str,
    *,
    registry: EnzymeRegistry | None = None,
    require_circular: Optional[bool] = None,
) -> str:
    """
    Assemble ``dnas`` by Golden Gate when ``enzyme`` is a registered enzyme,
    otherwise (``"gibson"`` or any other marker) by homology overlap.
    """

    return assemble_molecule(dnas, enzyme, registry=registry, require_circular=require_circular).sequence


__all__ = [
    "GIBSON",
    "HOMOLOGY_LENGTH",
    "GoldenGatePart",
    "assemble",
    "assemble_molecule",
    "blunt",
    "excise_part",
    "gibson",
    "golden_gate",
    "join_fragments",
    "ligate",
    "order_parts",
]
