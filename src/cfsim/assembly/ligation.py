"""Sticky/blunt end ligation and end blunting."""
from __future__ import annotations

import logging
from typing import List, Sequence

from cfsim.errors import IncompatibleEndsError
from cfsim.seq.model import PHOSPHATE_5, THREE_PRIME_MARK, Polynucleotide
from cfsim.seq.resolve import MoleculeInput, resolve_to_polynucleotide

LOGGER = logging.getLogger(__name__)


def _duplex_letters(overhang: str) -> str:
    return overhang[len(THREE_PRIME_MARK):] if overhang.startswith(THREE_PRIME_MARK) else overhang


def _orient(left: Polynucleotide, right: Polynucleotide) -> Polynucleotide:
    if right.ext5 == left.ext3:
        return right
    flipped = right.reverse_complement()
    if flipped.ext5 == left.ext3:
        return flipped
    raise IncompatibleEndsError(
        f"End {left.ext3 or '(blunt)'} cannot ligate to {right.ext5 or '(blunt)'} "
        f"or {flipped.ext5 or '(blunt)'}"
    )


def _closes(product: Polynucleotide) -> bool:
    if product.ext5 != product.ext3:
        return False
    return bool(product.ext5) or PHOSPHATE_5 in (product.mod_ext5, product.mod_ext3)


def ligate(molecules: Sequence[MoleculeInput]) -> Polynucleotide:
    """
    Ligate linear molecules in the given order.

    Each junction needs identical ends (sticky with matching sticky, blunt
    with blunt); a fragment is flipped when only its reverse complement
    fits. The product circularizes when its outermost ends are matching
    sticky ends, or blunt ends with at least one 5' phosphate.
    """

    if not molecules:
        raise IncompatibleEndsError("Ligation needs at least one molecule.")
    polys: List[Polynucleotide] = [resolve_to_polynucleotide(item) for item in molecules]
    for poly in polys:
        if poly.is_circular:
            raise IncompatibleEndsError("Circular molecules have no free ends to ligate.")

    product = polys[0]
    for right in polys[1:]:
        right = _orient(product, right)
        product = Polynucleotide(
            sequence=product.sequence + _duplex_letters(product.ext3) + right.sequence,
            ext5=product.ext5,
            ext3=right.ext3,
            is_double_stranded=product.is_double_stranded,
            is_rna=product.is_rna,
            is_circular=False,
            mod_ext5=product.mod_ext5,
            mod_ext3=right.mod_ext3,
        )

    if _closes(product):
        LOGGER.debug("ligate circularized length=%d", len(product.sequence))
        return Polynucleotide(
            sequence=product.sequence + _duplex_letters(product.ext3),
            is_double_stranded=product.is_double_stranded,
            is_rna=product.is_rna,
            is_circular=True,
        )
    return product


def blunt(molecule: MoleculeInput) -> Polynucleotide:
    """Fill in 5' overhangs and trim 3' overhangs, leaving blunt ends."""

    poly = resolve_to_polynucleotide(molecule)
    if poly.is_circular:
        return poly
    left = "" if poly.ext5.startswith(THREE_PRIME_MARK) else poly.ext5
    right = "" if poly.ext3.startswith(THREE_PRIME_MARK) else poly.ext3
    return Polynucleotide(
        sequence=left + poly.sequence + right,
        is_double_stranded=poly.is_double_stranded,
        is_rna=poly.is_rna,
        is_circular=False,
        mod_ext5=poly.mod_ext5,
        mod_ext3=poly.mod_ext3,
    )


__all__ = ["ligate", "blunt"]
