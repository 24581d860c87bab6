"""cfsim command line interface."""
from __future__ import annotations

import argparse
import hashlib
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from . import __version__
from .assembly import GIBSON, assemble_molecule
from .cf import ConstructionFile, execute, load_cf, parse_cf
from .config import configure_logging
from .digest import digest_fragments
from .enzymes import EnzymeRegistry, load_registry
from .pcr import pcr
from .seq import Polynucleotide, cleanup_sequence, ds_dna, is_palindromic, plasmid, reverse_complement
from .seq.metrics import summarize

SIMULATION_NOTICE = (
    "Simulation only: cfsim predicts sequences in silico and does not "
    "prescribe wet-lab procedures."
)


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _sequence_sha256(sequence: str) -> str:
    return hashlib.sha256(sequence.encode("utf-8")).hexdigest()


def _clean_sequence_text(text: str) -> str:
    lines = [line for line in text.splitlines() if not line.startswith(">")]
    return cleanup_sequence("".join(lines))


def _load_sequence_arg(sequence: str | None, path: Path | None, *, role: str = "sequence") -> str:
    if sequence and path:
        raise ValueError(f"Provide either an inline {role} or a file path, not both.")
    if path:
        return _clean_sequence_text(_read_text(path))
    if sequence:
        return _clean_sequence_text(sequence)
    raise ValueError(f"Missing {role}; provide it inline or as a file.")


def _write_json_output(payload: Dict[str, Any], output_path: Optional[Path]) -> None:
    text = json.dumps(payload, indent=2)
    if output_path:
        out_path = Path(output_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def _registry_from_args(args: argparse.Namespace) -> EnzymeRegistry:
    return load_registry(args.enzyme_table)


def _product_payload(name: Optional[str], molecule: Polynucleotide) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "length": len(molecule.sequence),
        "sha256": _sequence_sha256(molecule.sequence),
        "molecule": molecule.to_record(),
    }
    if name is not None:
        payload = {"name": name, **payload}
    return payload


def _load_cf_inputs(paths: Sequence[Path], text: Optional[str]) -> ConstructionFile:
    if text is not None and paths:
        raise ValueError("Provide either construction file paths or --text, not both.")
    if text is not None:
        return parse_cf(text)
    if not paths:
        raise ValueError("Provide at least one construction file.")
    if len(paths) == 1:
        return load_cf(paths[0])
    # Several files: steps concatenate in order, later declarations win.
    loaded = [load_cf(path) for path in paths]
    sequences: Dict[str, str] = {}
    types: Dict[str, str] = {}
    for cf in loaded:
        sequences.update(cf.sequences)
        types.update(cf.types)
    return ConstructionFile(
        steps=tuple(step for cf in loaded for step in cf.steps),
        sequences=sequences,
        types=types,
    )


def command_parse(args: argparse.Namespace) -> None:
    cf = _load_cf_inputs(args.inputs, args.text)
    _write_json_output(cf.to_record(), args.out)


def command_simulate(args: argparse.Namespace) -> None:
    cf = _load_cf_inputs(args.inputs, args.text)
    run = execute(
        cf,
        _registry_from_args(args),
        require_circular=False if args.allow_linear else None,
    )
    payload = {
        "cfsim_version": __version__,
        "steps": len(cf.steps),
        "products": [_product_payload(product.name, molecule) for product, molecule in zip(run.products, run.outputs)],
    }
    _write_json_output(payload, args.out)


def command_pcr(args: argparse.Namespace) -> None:
    forward = _load_sequence_arg(args.forward, None, role="forward primer")
    reverse = _load_sequence_arg(args.reverse, None, role="reverse primer")
    template = _load_sequence_arg(args.template, args.template_file, role="template")
    product = pcr(forward, reverse, template)
    payload = {
        "input_sha256": _sequence_sha256(template),
        "forward": forward,
        "reverse": reverse,
        "product": product,
        "length": len(product),
        "sha256": _sequence_sha256(product),
    }
    _write_json_output(payload, args.out)


def command_digest(args: argparse.Namespace) -> None:
    sequence = _load_sequence_arg(args.sequence, args.input)
    molecule = plasmid(sequence) if args.circular else ds_dna(sequence)
    fragments = digest_fragments(molecule, args.enzymes, registry=_registry_from_args(args))
    indexed: List[Dict[str, Any]] = [
        {"index": index, **_product_payload(None, fragment)} for index, fragment in enumerate(fragments)
    ]
    if args.fragment is not None:
        if not 0 <= args.fragment < len(fragments):
            raise ValueError(f"Invalid fragment {args.fragment}; digest produced {len(fragments)} fragment(s).")
        indexed = [indexed[args.fragment]]
    payload = {
        "input_sha256": _sequence_sha256(sequence),
        "topology": "circular" if args.circular else "linear",
        "enzymes": args.enzymes,
        "fragment_count": len(fragments),
        "fragments": indexed,
    }
    _write_json_output(payload, args.out)


def command_assemble(args: argparse.Namespace) -> None:
    fragments = [_clean_sequence_text(item) for item in args.fragments or []]
    fragments.extend(_clean_sequence_text(_read_text(path)) for path in args.inputs or [])
    if not fragments:
        raise ValueError("Provide at least one fragment inline or with --input.")
    product = assemble_molecule(
        fragments,
        args.enzyme,
        registry=_registry_from_args(args),
        require_circular=False if args.allow_linear else None,
    )
    payload = {
        "enzyme": args.enzyme,
        "fragments": len(fragments),
        **_product_payload(None, product),
    }
    _write_json_output(payload, args.out)


def command_enzymes(args: argparse.Namespace) -> None:
    registry = _registry_from_args(args)
    entries = [registry[name].to_entry() for name in sorted(registry, key=str.lower)]
    _write_json_output({"count": len(entries), "enzymes": entries}, args.out)


def command_seq(args: argparse.Namespace) -> None:
    sequence = _load_sequence_arg(args.sequence, args.input)
    payload: Dict[str, Any] = {
        "sha256": _sequence_sha256(sequence),
        "palindromic": is_palindromic(sequence),
        **summarize(sequence),
    }
    if args.revcomp:
        payload["reverse_complement"] = reverse_complement(sequence)
    _write_json_output(payload, args.out)


def _add_output_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--out", type=Path, help="Write JSON here instead of stdout.")


def build_parser() -> argparse.ArgumentParser:
    description = "cfsim: simulate Construction Files (PCR, digestion, ligation, assembly).\n\n" + SIMULATION_NOTICE
    parser = argparse.ArgumentParser(
        prog="cfsim",
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Logging level (default: $CFSIM_LOG_LEVEL or WARNING).")
    parser.add_argument(
        "--enzyme-table",
        type=Path,
        help="YAML table of extra enzymes (default: $CFSIM_ENZYME_TABLE).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse = subparsers.add_parser("parse", help="Parse construction files into step/sequence JSON.")
    parse.add_argument("inputs", nargs="*", type=Path, help="CF files (.json, .yaml, .tsv, .csv or text).")
    parse.add_argument("--text", help="Inline CF text instead of files.")
    _add_output_arg(parse)
    parse.set_defaults(func=command_parse)

    simulate = subparsers.add_parser("simulate", help="Run every step of a construction file.")
    simulate.add_argument("inputs", nargs="*", type=Path, help="CF files (.json, .yaml, .tsv, .csv or text).")
    simulate.add_argument("--text", help="Inline CF text instead of files.")
    simulate.add_argument("--allow-linear", action="store_true", help="Accept linear Gibson products.")
    _add_output_arg(simulate)
    simulate.set_defaults(func=command_simulate)

    pcr_cmd = subparsers.add_parser("pcr", help="Predict a PCR product.")
    pcr_cmd.add_argument("--forward", required=True, help="Forward primer sequence.")
    pcr_cmd.add_argument("--reverse", required=True, help="Reverse primer sequence.")
    pcr_cmd.add_argument("--template", help="Inline template sequence.")
    pcr_cmd.add_argument("--template-file", type=Path, help="FASTA/text file with the template.")
    _add_output_arg(pcr_cmd)
    pcr_cmd.set_defaults(func=command_pcr)

    digest_cmd = subparsers.add_parser("digest", help="Digest a sequence to completion.")
    digest_cmd.add_argument("--sequence", help="Inline DNA sequence.")
    digest_cmd.add_argument("--input", type=Path, help="FASTA/text file with the sequence.")
    digest_cmd.add_argument("--enzymes", required=True, help="Enzyme names, e.g. 'EcoRI,BamHI'.")
    digest_cmd.add_argument("--circular", action="store_true", help="Treat the sequence as a plasmid.")
    digest_cmd.add_argument("--fragment", type=int, help="Only report this fragment index.")
    _add_output_arg(digest_cmd)
    digest_cmd.set_defaults(func=command_digest)

    assemble_cmd = subparsers.add_parser("assemble", help="Golden Gate or Gibson assembly of fragments.")
    assemble_cmd.add_argument("fragments", nargs="*", help="Inline fragment sequences.")
    assemble_cmd.add_argument("--input", dest="inputs", action="append", type=Path, help="Fragment file (repeatable).")
    assemble_cmd.add_argument("--enzyme", default=GIBSON, help="Type IIS enzyme, or 'gibson' (default).")
    assemble_cmd.add_argument("--allow-linear", action="store_true", help="Accept linear Gibson products.")
    _add_output_arg(assemble_cmd)
    assemble_cmd.set_defaults(func=command_assemble)

    enzymes_cmd = subparsers.add_parser("enzymes", help="List the enzyme registry.")
    _add_output_arg(enzymes_cmd)
    enzymes_cmd.set_defaults(func=command_enzymes)

    seq_cmd = subparsers.add_parser("seq", help="Sequence composition metrics.")
    seq_cmd.add_argument("sequence", nargs="?", help="Inline sequence.")
    seq_cmd.add_argument("--input", type=Path, help="FASTA/text file with the sequence.")
    seq_cmd.add_argument("--revcomp", action="store_true", help="Include the reverse complement.")
    _add_output_arg(seq_cmd)
    seq_cmd.set_defaults(func=command_seq)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        configure_logging(args.log_level)
        args.func(args)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":  # pragma: no cover - manual invocation path
    main()
