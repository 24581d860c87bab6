"""
Run the steps of a Construction File in order.

Each step reads its inputs from a working table seeded with the declared
sequences; its output is stored under the step's output name, shadowing any
earlier entry for later steps. Errors propagate unchanged and no partial
products are returned.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional

from cfsim.assembly import assemble_molecule, blunt, ligate
from cfsim.digest.simulator import digest
from cfsim.enzymes.registry import EnzymeRegistry, resolve_registry
from cfsim.errors import MissingSequenceError
from cfsim.pcr.simulator import pcr
from cfsim.seq.model import Polynucleotide, ds_dna, oligo, plasmid

from .model import ConstructionFile, ConstructionStep, Operation

LOGGER = logging.getLogger(__name__)


class Product(NamedTuple):
    name: str
    sequence: str


@dataclass(frozen=True)
class ConstructionRun:
    """Products in step order, the molecule each step made, and the final working table."""

    products: List[Product]
    molecules: Mapping[str, Polynucleotide]
    outputs: List[Polynucleotide] = field(default_factory=list)


_DECLARED_TYPES: Dict[str, Callable[[str], Polynucleotide]] = {
    "oligo": oligo,
    "plasmid": plasmid,
    "dsdna": ds_dna,
}


def _seed(cf: ConstructionFile) -> Dict[str, Polynucleotide]:
    table: Dict[str, Polynucleotide] = {}
    for name, sequence in cf.sequences.items():
        factory = _DECLARED_TYPES.get(cf.types.get(name, "dsdna"), ds_dna)
        table[name] = factory(sequence)
    return table


class _Run:
    def __init__(self, cf: ConstructionFile, registry: EnzymeRegistry, require_circular: Optional[bool]):
        self.registry = registry
        self.require_circular = require_circular
        self.table = _seed(cf)

    def lookup(self, name: Optional[str], step: ConstructionStep) -> Polynucleotide:
        if name is None or name not in self.table:
            raise MissingSequenceError(f"Missing sequence for key: {name} (step {step.operation.value} -> {step.output})")
        return self.table[name]

    def run(self, step: ConstructionStep) -> Polynucleotide:
        if step.operation is Operation.PCR:
            product = ds_dna(
                pcr(
                    self.lookup(step.forward_oligo, step),
                    self.lookup(step.reverse_oligo, step),
                    self.lookup(step.template, step),
                )
            )
            if step.product_size is not None and step.product_size != len(product):
                LOGGER.warning(
                    "PCR %s: expected %d bp, simulated %d bp", step.output, step.product_size, len(product)
                )
            return product
        if step.operation is Operation.ASSEMBLE:
            dnas = [self.lookup(name, step) for name in step.dnas]
            return assemble_molecule(
                dnas, step.enzyme or "gibson", registry=self.registry, require_circular=self.require_circular
            )
        if step.operation is Operation.DIGEST:
            return digest(self.lookup(step.dna, step), list(step.enzymes), step.fragselect, registry=self.registry)
        if step.operation is Operation.LIGATE:
            return ligate([self.lookup(name, step) for name in step.dnas])
        if step.operation is Operation.BLUNT:
            return blunt(self.lookup(step.dna, step))
        # Transform has no chemical simulation; the plasmid passes through.
        return self.lookup(step.dna, step)


def execute(
    cf: ConstructionFile,
    registry: EnzymeRegistry | None = None,
    *,
    require_circular: Optional[bool] = None,
) -> ConstructionRun:
    """Simulate every step of ``cf`` and return the products and final molecules."""

    run = _Run(cf, resolve_registry(registry), require_circular)
    products: List[Product] = []
    outputs: List[Polynucleotide] = []
    for index, step in enumerate(cf.steps):
        molecule = run.run(step)
        LOGGER.debug("step %d %s -> %s (%d bp)", index, step.operation.value, step.output, len(molecule))
        run.table[step.output] = molecule
        products.append(Product(step.output, molecule.sequence))
        outputs.append(molecule)
    return ConstructionRun(products=products, molecules=dict(run.table), outputs=outputs)


def simulate_cf(cf: ConstructionFile, registry: EnzymeRegistry | None = None) -> List[Product]:
    """Ordered ``(name, sequence)`` products of ``cf``."""

    return execute(cf, registry).products


__all__ = ["Product", "ConstructionRun", "execute", "simulate_cf"]
