from __future__ import annotations

import pytest

from cfsim.assembly import GoldenGatePart, assemble, excise_part, golden_gate, order_parts
from cfsim.enzymes import default_registry
from cfsim.errors import (
    AmbiguousAssemblyError,
    AssemblySiteError,
    NonClosingAssemblyError,
    PalindromicEndError,
)
from cfsim.seq import plasmid

FRAG1 = "ccaaaGGTCTCAGCTTTGATCGATTCAACCTACTTCCCCTTCATAATCGGTACTAGAGACCacgac"
FRAG2 = "GGTCTCATACTCAAAATTTACTGACTGGACATGGTCACCACTTAAGTAAGCTTTGAGACC"
PRODUCT = "GCTTTGATCGATTCAACCTACTTCCCCTTCATAATCGGTACTCAAAATTTACTGACTGGACATGGTCACCACTTAAGTAA"


def _bsai():
    return default_registry()["BsaI"]


def _part(sticky5: str, body: str, sticky3: str) -> str:
    """Build a BsaI part: site, 1 nt spacer, sticky end, body, sticky end, 1 nt, reverse site."""

    return "GGTCTCA" + sticky5 + body + sticky3 + "T" + "GAGACC"


def test_assemble_golden_gate() -> None:
    assert assemble([FRAG1, FRAG2], "BsaI") == PRODUCT


def test_assemble_is_order_independent() -> None:
    assert assemble([FRAG2, FRAG1], "bsai") == PRODUCT
    assert plasmid(assemble([FRAG2, FRAG1], "BsaI")) == plasmid(PRODUCT)


def test_excise_part_geometry() -> None:
    part = excise_part(FRAG1.upper(), _bsai())
    assert part == GoldenGatePart(
        sticky5="GCTT",
        body="TGATCGATTCAACCTACTTCCCCTTCATAATCGG",
        sticky3="TACT",
    )


def test_excise_part_requires_one_site_per_strand() -> None:
    with pytest.raises(AssemblySiteError):
        excise_part("AAAAGGTCTCAAAAAAAAAAAAAA", _bsai())
    with pytest.raises(AssemblySiteError):
        excise_part("AAAAAAAAAAAAAAGAGACCAAAA", _bsai())
    with pytest.raises(AssemblySiteError):
        excise_part(_part("GCTT", "CCCCCCCC", "TACT") + "GGTCTC", _bsai())
    with pytest.raises(AssemblySiteError):
        excise_part("GAGACCAAAAAAAAAAAAGGTCTC", _bsai())


def test_three_part_assembly_follows_sticky_ends() -> None:
    parts = [
        _part("CCCT", "AAAAAAAAAA", "GGAG"),
        _part("AATG", "CCCCCCCCCC", "CCCT"),
        _part("GGAG", "GGGGGGGGGG", "AATG"),
    ]
    product = golden_gate([p for p in parts], _bsai())
    assert product == "AATG" + "C" * 10 + "CCCT" + "A" * 10 + "GGAG" + "G" * 10


def test_palindromic_sticky_end_is_rejected() -> None:
    with pytest.raises(PalindromicEndError):
        golden_gate([_part("GATC", "AAAAAAAAAA", "GATC")], _bsai())


def test_shared_sticky_ends_are_ambiguous() -> None:
    parts = [
        _part("AATG", "AAAAAAAAAA", "GCTT"),
        _part("AATG", "CCCCCCCCCC", "GCTT"),
    ]
    with pytest.raises(AmbiguousAssemblyError):
        golden_gate(parts, _bsai())


def test_open_chain_does_not_close() -> None:
    parts = [
        _part("AATG", "AAAAAAAAAA", "GCTT"),
        _part("GCTT", "CCCCCCCCCC", "TACT"),
    ]
    with pytest.raises(NonClosingAssemblyError):
        golden_gate(parts, _bsai())


def test_order_parts_detects_short_ring() -> None:
    parts = [
        GoldenGatePart("AATG", "A", "GCTT"),
        GoldenGatePart("GCTT", "C", "AATG"),
        GoldenGatePart("TACT", "G", "CGAA"),
    ]
    with pytest.raises(NonClosingAssemblyError):
        order_parts(parts)
