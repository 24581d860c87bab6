from __future__ import annotations

import pytest

from cfsim.errors import InvalidSequenceError, NoAnnealError
from cfsim.pcr import ANNEAL_LENGTH, find_anneal_sites, pcr
from cfsim.seq import plasmid, reverse_complement

FORWARD = "gacttGAATTCgcggccgctTCTAGAgTCCCTATCAGTGATAGAG"
REVERSE = "catcaACTAGTaGTGCTCAGTATCTCTATCAC"
TEMPLATE = "tccctatcagtgatagagattgacatccctatcagtgatagagatactgagcac"
PRODUCT = "GACTTGAATTCGCGGCCGCTTCTAGAGTCCCTATCAGTGATAGAGATTGACATCCCTATCAGTGATAGAGATACTGAGCACTACTAGTTGATG"


def test_pcr_predicts_tailed_amplicon() -> None:
    assert pcr(FORWARD, REVERSE, TEMPLATE) == PRODUCT


def test_pcr_accepts_molecules_and_flipped_template() -> None:
    assert pcr(FORWARD, REVERSE, plasmid(TEMPLATE)) == PRODUCT
    assert pcr(FORWARD, REVERSE, reverse_complement(TEMPLATE.upper())) == PRODUCT


def test_pcr_wraps_around_circular_template() -> None:
    template = TEMPLATE.upper()
    rotated = template[30:] + template[:30]
    assert pcr(FORWARD, REVERSE, rotated) == PRODUCT


def test_anneal_sites_report_positions() -> None:
    sites = find_anneal_sites(FORWARD.upper(), REVERSE.upper(), TEMPLATE.upper())
    assert sites.forward_index == 0
    assert not sites.template_flipped
    assert sites.rotated_template == TEMPLATE.upper()
    assert sites.reverse_index == 34


def test_pcr_fails_without_annealing() -> None:
    with pytest.raises(NoAnnealError):
        pcr("A" * 25, REVERSE, TEMPLATE)
    with pytest.raises(NoAnnealError):
        pcr(FORWARD, "C" * 25, TEMPLATE)


def test_pcr_rejects_non_sequences() -> None:
    with pytest.raises(InvalidSequenceError, match="forward primer"):
        pcr("not-a-primer", REVERSE, TEMPLATE)


def test_overlapping_anchors_keep_both_primers_whole() -> None:
    template = "ACGTTGCATGCAAGCTTGGCACTGGCCGTA"
    forward = template[:ANNEAL_LENGTH]
    reverse = reverse_complement(template[10:28])
    assert find_anneal_sites(forward, reverse, template).reverse_index == 10
    product = pcr(forward, reverse, template)
    assert product == "ACGTTGCATGCAAGCTTGCAAGCTTGGCACTGGCCG"
    assert len(product) == 36
