from __future__ import annotations

import json

import pytest
import yaml

from cfsim.cf import Operation, dump_cf, load_cf, parse_cf
from cfsim.errors import ConfigError

CF_TEXT = "oligo fwd ACGTACGTACGT\nPCR fwd rev on tmpl, amp\nDigest amp EcoRI 0 cut\n"


def test_load_text_file(tmp_path) -> None:
    path = tmp_path / "build.txt"
    path.write_text(CF_TEXT, encoding="utf-8")
    cf = load_cf(path)
    assert [step.operation for step in cf.steps] == [Operation.PCR, Operation.DIGEST]
    assert cf.types == {"fwd": "oligo"}


def test_load_tsv_and_csv_tables(tmp_path) -> None:
    tsv = tmp_path / "build.tsv"
    tsv.write_text("PCR\tfwd\trev\ton\ttmpl\tamp\nfwd\tACGTACGT\n", encoding="utf-8")
    csv_path = tmp_path / "build.csv"
    csv_path.write_text('"Digest","amp","EcoRI,BamHI",1,"cut"\n', encoding="utf-8")
    assert load_cf(tsv).steps[0].template == "tmpl"
    assert load_cf(tsv).sequences == {"fwd": "ACGTACGT"}
    digest = load_cf(csv_path).steps[0]
    assert digest.enzymes == ("EcoRI", "BamHI")
    assert digest.fragselect == 1


def test_json_and_yaml_round_trip(tmp_path) -> None:
    cf = parse_cf(CF_TEXT)
    json_path = tmp_path / "out" / "build.json"
    yaml_path = tmp_path / "build.yaml"
    dump_cf(cf, json_path)
    dump_cf(cf, yaml_path)
    assert json.loads(json_path.read_text(encoding="utf-8"))["steps"][0]["operation"] == "PCR"
    assert yaml.safe_load(yaml_path.read_text(encoding="utf-8"))["sequences"] == {"fwd": "ACGTACGTACGT"}
    assert load_cf(json_path) == cf
    assert load_cf(yaml_path) == cf


def test_load_errors(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_cf(tmp_path / "missing.json")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_cf(broken)
    listing = tmp_path / "list.yaml"
    listing.write_text("- PCR\n- Digest\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_cf(listing)
    with pytest.raises(ConfigError):
        dump_cf(parse_cf(CF_TEXT), tmp_path / "build.tsv")
