from __future__ import annotations

import logging

import pytest

from cfsim.cf import ConstructionFile, ConstructionStep, Operation, parse_cf, tokenize
from cfsim.errors import ConfigError


def test_parse_rows_into_steps() -> None:
    cf = parse_cf(
        [
            ["PCR", "P6libF", "P6libR", "on", "pTP1", "P6"],
            ["Assemble", "P6", "BsaI", "pP6"],
        ]
    )
    assert [step.operation for step in cf.steps] == [Operation.PCR, Operation.ASSEMBLE]
    pcr_step, assemble_step = cf.steps
    assert pcr_step.to_record() == {
        "operation": "PCR",
        "output": "P6",
        "forward_oligo": "P6libF",
        "reverse_oligo": "P6libR",
        "template": "pTP1",
    }
    assert assemble_step.dnas == ("P6",)
    assert assemble_step.enzyme == "BsaI"
    assert assemble_step.output == "pP6"
    assert assemble_step.method == "assemble"


def test_parse_free_text_with_punctuation_and_fillers() -> None:
    cf = parse_cf("PCR P6libF P6libR on pTP1, P6\nDigest pTP1 with (EcoRI/BamHI) 1 frag")
    assert cf.steps[0].template == "pTP1"
    digest = cf.steps[1]
    assert digest.operation is Operation.DIGEST
    assert digest.dna == "pTP1"
    assert digest.enzymes == ("EcoRI", "BamHI")
    assert digest.fragselect == 1
    assert digest.output == "frag"


def test_tokenize_drops_separators_and_fillers() -> None:
    assert tokenize("PCR a,b/(c) on d With e") == ["PCR", "a", "b", "c", "d", "e"]
    assert tokenize("   ") == []


def test_assembly_keywords_record_method() -> None:
    cf = parse_cf(
        "Gibson frag1 frag2 frag3 pGib\n"
        "GoldenGate partA partB BsmBI pGG\n"
        "ASSEMBLE a b gibson pAsm"
    )
    gibson, golden_gate, generic = cf.steps
    assert gibson.operation is Operation.ASSEMBLE
    assert gibson.dnas == ("frag1", "frag2", "frag3")
    assert gibson.enzyme == "gibson" and gibson.method == "gibson"
    assert golden_gate.dnas == ("partA", "partB")
    assert golden_gate.enzyme == "BsmBI" and golden_gate.method == "goldengate"
    assert generic.enzyme == "gibson" and generic.method == "assemble"


def test_other_operation_layouts() -> None:
    cf = parse_cf(
        "Ligate frag vec pLig\n"
        "Transform pLig Mach1 Amp pLig 37\n"
        "Blunt frag fragBlunt\n"
        "PCR f r t amp 1500"
    )
    ligate, transform, blunt, pcr = cf.steps
    assert ligate.dnas == ("frag", "vec") and ligate.output == "pLig"
    assert transform.to_record() == {
        "operation": "Transform",
        "output": "pLig",
        "dna": "pLig",
        "strain": "Mach1",
        "antibiotics": "Amp",
        "temperature": 37.0,
    }
    assert blunt.dna == "frag" and blunt.output == "fragBlunt"
    assert pcr.product_size == 1500


def test_sequence_declarations_with_and_without_types() -> None:
    cf = parse_cf(
        [
            ["oligo", "P6libF", "ccataCGTCTCa"],
            ["plasmid", "pTP1", "ACGT", "ACGT"],
            ["tmpl", "gattaca"],
            ["Name", "Sequence"],
            ["note", "this row is not a sequence"],
        ]
    )
    assert cf.sequences == {"P6libF": "CCATACGTCTCA", "pTP1": "ACGTACGT", "tmpl": "GATTACA"}
    assert cf.types == {"P6libF": "oligo", "pTP1": "plasmid"}


def test_malformed_rows_are_dropped() -> None:
    cf = parse_cf("PCR onlyone\nDigest pTP1 EcoRI notanumber out\nBlunt x\n\nrandom header row")
    assert cf.steps == ()
    assert cf.sequences == {}


def test_starred_declarations_are_dropped_with_a_warning(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="cfsim"):
        cf = parse_cf("orf ATGAAATAA*\nnote just some words")
    assert cf.sequences == {}
    assert "orf" in caplog.text
    assert "note" not in caplog.text


def test_multiple_blobs_concatenate_in_order() -> None:
    cf = parse_cf("PCR f r t p1", ["Ligate", "p1", "p2"], [["Blunt", "p2", "p3"]], "f ACGT")
    assert [step.output for step in cf.steps] == ["p1", "p2", "p3"]
    assert cf.sequences == {"f": "ACGT"}


def test_numbers_in_rows_are_stringified() -> None:
    cf = parse_cf(["Digest", "pTP1", "EcoRI", 0, "frag"])
    assert cf.steps[0].fragselect == 0


def test_unsupported_input_raises_type_error() -> None:
    with pytest.raises(TypeError):
        parse_cf(["PCR", ["nested"], "mixed"])
    with pytest.raises(TypeError):
        parse_cf({"steps": []})


def test_step_and_file_records_round_trip() -> None:
    cf = parse_cf("oligo f ACGTACGT\nDigest pTP1 EcoRI BamHI 1 frag\nGibson a b pG")
    restored = ConstructionFile.from_record(cf.to_record())
    assert restored == cf
    step = ConstructionStep.from_record({"operation": "digest", "output": "x", "dna": "y", "enzymes": "EcoRI", "fragSelect": "2"})
    assert step.enzymes == ("EcoRI",) and step.fragselect == 2


def test_bad_records_raise_config_error() -> None:
    with pytest.raises(ConfigError):
        ConstructionStep.from_record({"operation": "Sequence", "output": "x"})
    with pytest.raises(ConfigError):
        ConstructionStep.from_record({"operation": "PCR"})
    with pytest.raises(ConfigError):
        ConstructionFile.from_record({"steps": [], "sequences": {}, "types": {"x": "virus"}})
