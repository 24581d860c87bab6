"""
Best-effort Construction File parser.

Accepts free text, spreadsheet rows and tables. Rows are tokenized on
whitespace, commas, slashes and parentheses; the filler words ``on`` and
``with`` are dropped. The first token picks an operation (see
``OPERATION_KEYWORDS``); any other row is a sequence declaration, kept only
when its payload is a nucleotide sequence. Rows that fit no layout are
skipped.
"""
from __future__ import annotations

import logging
import re
from numbers import Number
from typing import Callable, Dict, List, Optional, Sequence, Union

from .model import MOLECULE_TYPES, ConstructionFile, ConstructionStep, Operation

LOGGER = logging.getLogger(__name__)

Blob = Union[str, Sequence[Union[str, Number]], Sequence[Sequence[Union[str, Number]]]]

OPERATION_KEYWORDS: Dict[str, Operation] = {
    "pcr": Operation.PCR,
    "digest": Operation.DIGEST,
    "ligate": Operation.LIGATE,
    "assemble": Operation.ASSEMBLE,
    "gibson": Operation.ASSEMBLE,
    "goldengate": Operation.ASSEMBLE,
    "blunt": Operation.BLUNT,
    "transform": Operation.TRANSFORM,
}

FILLER_WORDS = frozenset({"on", "with"})

_TOKEN_SPLIT_RE = re.compile(r"[\s,/()]+")
_SEQUENCE_RE = re.compile(r"^[ACGTURYSWKMBDHVN]+$", re.IGNORECASE)
# Declarations written with stop-codon stars; kept out of the sequence table.
_STARRED_RE = re.compile(r"^[ACGTURYSWKMBDHVN*]+$", re.IGNORECASE)


def _flatten_blob(blob: Blob) -> str:
    if isinstance(blob, str):
        return blob
    if isinstance(blob, Number):
        return str(blob)
    if isinstance(blob, (list, tuple)):
        if all(isinstance(item, (list, tuple)) for item in blob):
            return "\n".join("\t".join(str(cell) for cell in row) for row in blob)
        if all(isinstance(item, (str, Number)) for item in blob):
            return "\t".join(str(cell) for cell in blob)
    raise TypeError(f"Unsupported construction file input: {type(blob).__name__}")


def tokenize(line: str) -> List[str]:
    """Split one row into tokens, dropping punctuation and filler words."""

    return [token for token in _TOKEN_SPLIT_RE.split(line) if token and token.lower() not in FILLER_WORDS]


def _to_int(token: str) -> Optional[int]:
    try:
        return int(token)
    except ValueError:
        return None


def _to_float(token: str) -> Optional[float]:
    try:
        return float(token)
    except ValueError:
        return None


def _pcr(tokens: List[str], keyword: str) -> Optional[ConstructionStep]:
    if len(tokens) < 5:
        return None
    product_size = _to_int(tokens[5]) if len(tokens) > 5 else None
    return ConstructionStep(
        Operation.PCR,
        output=tokens[4],
        forward_oligo=tokens[1],
        reverse_oligo=tokens[2],
        template=tokens[3],
        product_size=product_size,
    )


def _assemble(tokens: List[str], keyword: str) -> Optional[ConstructionStep]:
    if keyword == "gibson":
        if len(tokens) < 3:
            return None
        return ConstructionStep(
            Operation.ASSEMBLE, output=tokens[-1], dnas=tuple(tokens[1:-1]), enzyme="gibson", method=keyword
        )
    if len(tokens) < 4:
        return None
    return ConstructionStep(
        Operation.ASSEMBLE, output=tokens[-1], dnas=tuple(tokens[1:-2]), enzyme=tokens[-2], method=keyword
    )


def _digest(tokens: List[str], keyword: str) -> Optional[ConstructionStep]:
    if len(tokens) < 5:
        return None
    fragselect = _to_int(tokens[-2])
    if fragselect is None:
        return None
    return ConstructionStep(
        Operation.DIGEST, output=tokens[-1], dna=tokens[1], enzymes=tuple(tokens[2:-2]), fragselect=fragselect
    )


def _ligate(tokens: List[str], keyword: str) -> Optional[ConstructionStep]:
    if len(tokens) < 3:
        return None
    return ConstructionStep(Operation.LIGATE, output=tokens[-1], dnas=tuple(tokens[1:-1]))


def _transform(tokens: List[str], keyword: str) -> Optional[ConstructionStep]:
    if len(tokens) < 5:
        return None
    temperature = _to_float(tokens[5]) if len(tokens) > 5 else None
    return ConstructionStep(
        Operation.TRANSFORM,
        output=tokens[4],
        dna=tokens[1],
        strain=tokens[2],
        antibiotics=tokens[3],
        temperature=temperature,
    )


def _blunt(tokens: List[str], keyword: str) -> Optional[ConstructionStep]:
    if len(tokens) < 3:
        return None
    return ConstructionStep(Operation.BLUNT, output=tokens[-1], dna=tokens[1])


_LAYOUTS: Dict[Operation, Callable[[List[str], str], Optional[ConstructionStep]]] = {
    Operation.PCR: _pcr,
    Operation.ASSEMBLE: _assemble,
    Operation.DIGEST: _digest,
    Operation.LIGATE: _ligate,
    Operation.TRANSFORM: _transform,
    Operation.BLUNT: _blunt,
}


def parse_cf(*blobs: Blob) -> ConstructionFile:
    """Parse text, rows or tables into a :class:`ConstructionFile`."""

    text = "\n".join(_flatten_blob(blob) for blob in blobs)
    steps: List[ConstructionStep] = []
    sequences: Dict[str, str] = {}
    types: Dict[str, str] = {}

    for line in text.strip().splitlines():
        tokens = tokenize(line)
        if not tokens:
            continue
        keyword = tokens[0].lower()
        operation = OPERATION_KEYWORDS.get(keyword)
        if operation is not None:
            step = _LAYOUTS[operation](tokens, keyword)
            if step is None:
                LOGGER.debug("parse_cf skipped malformed %s row: %s", operation.value, tokens)
                continue
            steps.append(step)
            continue

        if keyword in MOLECULE_TYPES:
            if len(tokens) < 3:
                LOGGER.debug("parse_cf skipped empty declaration: %s", tokens)
                continue
            name, payload, kind = tokens[1], "".join(tokens[2:]), keyword
        else:
            name, payload, kind = tokens[0], "".join(tokens[1:]), None
        if not _SEQUENCE_RE.match(payload):
            if _STARRED_RE.match(payload):
                LOGGER.warning("parse_cf dropped declaration '%s': '*' is not a nucleotide", name)
            else:
                LOGGER.debug("parse_cf skipped row: %s", tokens)
            continue
        sequences[name] = payload.upper()
        if kind is not None:
            types[name] = kind
        else:
            types.pop(name, None)

    LOGGER.debug("parse_cf steps=%d sequences=%d", len(steps), len(sequences))
    return ConstructionFile(steps=tuple(steps), sequences=sequences, types=types)


__all__ = ["Blob", "FILLER_WORDS", "OPERATION_KEYWORDS", "parse_cf", "tokenize"]
