"""Single-site restriction cutting."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from cfsim.enzymes.registry import EnzymeRegistry, RestrictionEnzyme, resolve_registry
from cfsim.seq.model import PHOSPHATE_5, THREE_PRIME_MARK, Polynucleotide
from cfsim.seq.resolve import MoleculeInput, resolve_to_polynucleotide

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CutSite:
    """
    A located, cuttable recognition site.

    ``start``/``end`` bound the single-stranded span in top-strand
    coordinates; on circular molecules they may fall outside
    ``[0, len(sequence)]`` when the span crosses the origin.
    """

    enzyme: RestrictionEnzyme
    site_index: int
    top_strand: bool
    start: int
    end: int
    overhang: str


def _occurrences(haystack: str, needle: str, limit: int) -> Iterator[int]:
    index = haystack.find(needle)
    while index != -1 and index < limit:
        yield index
        index = haystack.find(needle, index + 1)


def _span(enzyme: RestrictionEnzyme, index: int, top_strand: bool) -> tuple[int, int]:
    low, high = sorted((enzyme.cut5, enzyme.cut3))
    if top_strand:
        end_of_site = index + len(enzyme.recognition_sequence)
        return end_of_site + low, end_of_site + high
    return index - high, index - low


def _cuttable(molecule: Polynucleotide, start: int, end: int) -> bool:
    length = len(molecule.sequence)
    if molecule.is_circular:
        return -length <= start and end <= 2 * length and end - start < length
    # both products must keep some duplex
    return 0 < start and end < length


def find_cut_site(molecule: Polynucleotide, enzyme: RestrictionEnzyme) -> Optional[CutSite]:
    """
    Locate the first cuttable site, top strand before bottom strand.

    Circular molecules are searched across the origin.
    """

    seq = molecule.sequence
    length = len(seq)
    site_length = len(enzyme.recognition_sequence)
    haystack = seq + seq[: site_length - 1] if molecule.is_circular else seq
    for top_strand, needle in ((True, enzyme.recognition_sequence), (False, enzyme.recognition_sequence_rc)):
        for index in _occurrences(haystack, needle, length):
            start, end = _span(enzyme, index, top_strand)
            if not _cuttable(molecule, start, end):
                LOGGER.debug("find_cut_site enzyme=%s index=%d top=%s skipped (span out of range)", enzyme.name, index, top_strand)
                continue
            if molecule.is_circular:
                tripled = seq * 3
                single_strand = tripled[start + length : end + length]
            else:
                single_strand = seq[start:end]
            mark = THREE_PRIME_MARK if enzyme.cut5 > enzyme.cut3 else ""
            return CutSite(
                enzyme=enzyme,
                site_index=index,
                top_strand=top_strand,
                start=start,
                end=end,
                overhang=mark + single_strand,
            )
    return None


def cut_at(molecule: Polynucleotide, site: CutSite) -> List[Polynucleotide]:
    """Cut ``molecule`` at a site previously returned by :func:`find_cut_site`."""

    seq = molecule.sequence
    if molecule.is_circular:
        length = len(seq)
        tripled = seq * 3
        opened = tripled[site.end + length : site.start + 2 * length]
        return [
            Polynucleotide(
                sequence=opened,
                ext5=site.overhang,
                ext3=site.overhang,
                is_double_stranded=molecule.is_double_stranded,
                is_rna=molecule.is_rna,
                is_circular=False,
                mod_ext5=PHOSPHATE_5,
                mod_ext3=PHOSPHATE_5,
            )
        ]
    left = Polynucleotide(
        sequence=seq[: site.start],
        ext5=molecule.ext5,
        ext3=site.overhang,
        is_double_stranded=molecule.is_double_stranded,
        is_rna=molecule.is_rna,
        is_circular=False,
        mod_ext5=molecule.mod_ext5,
        mod_ext3=PHOSPHATE_5,
    )
    right = Polynucleotide(
        sequence=seq[site.end :],
        ext5=site.overhang,
        ext3=molecule.ext3,
        is_double_stranded=molecule.is_double_stranded,
        is_rna=molecule.is_rna,
        is_circular=False,
        mod_ext5=PHOSPHATE_5,
        mod_ext3=molecule.mod_ext3,
    )
    return [left, right]


def cut_once(
    molecule: MoleculeInput,
    enzyme: Union[str, RestrictionEnzyme],
    *,
    registry: EnzymeRegistry | None = None,
) -> Optional[List[Polynucleotide]]:
    """
    Cut ``molecule`` once with ``enzyme``.

    Returns one linear molecule for a circular input, left and right
    fragments for a linear input, or ``None`` when there is no cuttable site.
    """

    poly = resolve_to_polynucleotide(molecule)
    enz = enzyme if isinstance(enzyme, RestrictionEnzyme) else resolve_registry(registry)[enzyme]
    site = find_cut_site(poly, enz)
    if site is None:
        return None
    return cut_at(poly, site)


__all__ = ["CutSite", "find_cut_site", "cut_at", "cut_once"]
