from __future__ import annotations

import pytest

from cfsim.assembly import excise_part
from cfsim.digest import cut_once, digest, digest_fragments, find_cut_site, parse_enzyme_list
from cfsim.enzymes import default_registry
from cfsim.errors import InvalidFragmentIndexError, UnknownEnzymeError
from cfsim.seq import Polynucleotide, plasmid
from cfsim.seq.model import HYDROXYL, PHOSPHATE_5

LINEAR_BAMHI = {
    "sequence": "ACAACCCCAAGGACCGGATCCGAGACCCTGCAGTGATCGTGG",
    "ext5": "",
    "ext3": "",
    "isDoubleStranded": True,
    "isRNA": False,
    "isCircular": False,
    "mod_ext5": "hydroxyl",
    "mod_ext3": "hydroxyl",
}
PLASMID = plasmid("AAAAAGAATTCTTTTTTTTTTTTTTTTTTTTTTTTTTTTGGATCCGGGGG")
GOLDEN_GATE_PART = "ccaaaGGTCTCAGCTTTGATCGATTCAACCTACTTCCCCTTCATAATCGGTACTAGAGACCacgac"


def test_cut_once_linear_bamhi() -> None:
    left, right = cut_once(LINEAR_BAMHI, "BamHI")
    assert left.ext3 == "GATC"
    assert right.ext5 == "GATC"
    assert left.sequence == "ACAACCCCAAGGACCG"
    assert right.sequence == "CGAGACCCTGCAGTGATCGTGG"
    assert (left.mod_ext5, left.mod_ext3) == (HYDROXYL, PHOSPHATE_5)
    assert (right.mod_ext5, right.mod_ext3) == (PHOSPHATE_5, HYDROXYL)


def test_cut_once_without_site_returns_none() -> None:
    assert cut_once("AAAAAAAAAAAAAAAA", "EcoRI") is None


def test_cut_once_marks_three_prime_overhangs() -> None:
    left, right = cut_once("AAAACTGCAGTTTT", "PstI")
    assert left.sequence == "AAAAC"
    assert left.ext3 == "-TGCA"
    assert right.sequence == "GTTTT"
    assert right.ext5 == "-TGCA"


def test_cut_once_opens_circle_at_site_spanning_origin() -> None:
    (opened,) = cut_once(plasmid("ATTCAAAAAAAAAAGA"), "EcoRI")
    assert not opened.is_circular
    assert opened.sequence == "CAAAAAAAAAAG"
    assert opened.ext5 == opened.ext3 == "AATT"


def test_find_cut_site_prefers_top_strand() -> None:
    site = find_cut_site(Polynucleotide(GOLDEN_GATE_PART), default_registry()["BsaI"])
    assert site is not None
    assert site.top_strand
    assert site.overhang == "GCTT"


def test_digest_plasmid_to_completion() -> None:
    fragment = digest(PLASMID, "EcoRI,BamHI", 1)
    assert fragment.sequence == "CTTTTTTTTTTTTTTTTTTTTTTTTTTTTG"
    assert fragment.ext5 == "AATT"
    assert fragment.ext3 == "GATC"


def test_digest_numbers_origin_fragment_first() -> None:
    fragments = digest_fragments(PLASMID.to_record(), ["EcoRI", "BamHI"])
    assert len(fragments) == 2
    origin = fragments[0]
    assert origin.sequence == "CGGGGGAAAAAG"
    assert origin.ext5 == "GATC"
    assert origin.ext3 == "AATT"


def test_digest_type_iis_terminates_on_linear_part() -> None:
    fragments = digest_fragments(GOLDEN_GATE_PART, "BsaI")
    assert len(fragments) == 3
    part = excise_part(GOLDEN_GATE_PART.upper(), default_registry()["BsaI"])
    middle = fragments[1]
    assert middle.sequence == part.body
    assert middle.ext5 == part.sticky5
    assert middle.ext3 == part.sticky3


def test_digest_single_site_plasmid_gives_one_fragment() -> None:
    fragments = digest_fragments(PLASMID, "EcoRI")
    assert len(fragments) == 1
    assert len(fragments[0]) == len(PLASMID) - 4


def test_digest_errors() -> None:
    with pytest.raises(UnknownEnzymeError):
        digest(PLASMID, "EcoRI,NotAnEnzyme", 0)
    with pytest.raises(InvalidFragmentIndexError):
        digest(PLASMID, "EcoRI,BamHI", 2)
    with pytest.raises(InvalidFragmentIndexError):
        digest(PLASMID, "EcoRI,BamHI", -1)


def test_parse_enzyme_list() -> None:
    assert parse_enzyme_list("EcoRI, BamHI/XbaI") == ["EcoRI", "BamHI", "XbaI"]
    assert parse_enzyme_list(["EcoRI", " SpeI "]) == ["EcoRI", "SpeI"]
