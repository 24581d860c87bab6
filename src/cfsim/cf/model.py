"""Construction File data model."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from cfsim.errors import ConfigError

MOLECULE_TYPES = ("oligo", "plasmid", "dsdna")


class Operation(str, Enum):
    """Canonical step operations."""

    PCR = "PCR"
    ASSEMBLE = "Assemble"
    DIGEST = "Digest"
    LIGATE = "Ligate"
    TRANSFORM = "Transform"
    BLUNT = "Blunt"

    @classmethod
    def from_token(cls, value: str | "Operation") -> "Operation":
        if isinstance(value, cls):
            return value
        token = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == token:
                return member
        raise ConfigError(f"Unknown construction operation '{value}'.")


# Record keys emitted per operation, in record order.
_STEP_FIELDS: Dict[Operation, Tuple[str, ...]] = {
    Operation.PCR: ("forward_oligo", "reverse_oligo", "template", "product_size"),
    Operation.ASSEMBLE: ("dnas", "enzyme", "method"),
    Operation.DIGEST: ("dna", "enzymes", "fragselect"),
    Operation.LIGATE: ("dnas",),
    Operation.TRANSFORM: ("dna", "strain", "antibiotics", "temperature"),
    Operation.BLUNT: ("dna",),
}


@dataclass(frozen=True)
class ConstructionStep:
    """One step of a construction file; unused fields stay at their defaults."""

    operation: Operation
    output: str
    forward_oligo: Optional[str] = None
    reverse_oligo: Optional[str] = None
    template: Optional[str] = None
    product_size: Optional[int] = None
    dnas: Tuple[str, ...] = ()
    enzyme: Optional[str] = None
    method: Optional[str] = None
    dna: Optional[str] = None
    enzymes: Tuple[str, ...] = ()
    fragselect: Optional[int] = None
    strain: Optional[str] = None
    antibiotics: Optional[str] = None
    temperature: Optional[float] = None

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"operation": self.operation.value, "output": self.output}
        for name in _STEP_FIELDS[self.operation]:
            value = getattr(self, name)
            if value is None:
                continue
            record[name] = list(value) if isinstance(value, tuple) else value
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ConstructionStep":
        if "operation" not in record or "output" not in record:
            raise ConfigError(f"Step record needs 'operation' and 'output': {dict(record)}")
        operation = Operation.from_token(record["operation"])
        enzymes = record.get("enzymes") or ()
        if isinstance(enzymes, str):
            enzymes = [enzymes]
        fragselect = record.get("fragselect", record.get("fragSelect"))
        product_size = record.get("product_size")
        temperature = record.get("temperature")
        return cls(
            operation=operation,
            output=str(record["output"]),
            forward_oligo=record.get("forward_oligo"),
            reverse_oligo=record.get("reverse_oligo"),
            template=record.get("template"),
            product_size=int(product_size) if product_size is not None else None,
            dnas=tuple(str(name) for name in record.get("dnas") or ()),
            enzyme=record.get("enzyme"),
            method=record.get("method"),
            dna=record.get("dna"),
            enzymes=tuple(str(name) for name in enzymes),
            fragselect=int(fragselect) if fragselect is not None else None,
            strain=record.get("strain"),
            antibiotics=record.get("antibiotics"),
            temperature=float(temperature) if temperature is not None else None,
        )


@dataclass(frozen=True)
class ConstructionFile:
    """Ordered steps plus the declared name → sequence (and type) tables."""

    steps: Tuple[ConstructionStep, ...] = ()
    sequences: Mapping[str, str] = field(default_factory=dict)
    types: Mapping[str, str] = field(default_factory=dict)

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "steps": [step.to_record() for step in self.steps],
            "sequences": dict(self.sequences),
        }
        if self.types:
            record["types"] = dict(self.types)
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ConstructionFile":
        steps = record.get("steps") or []
        sequences = record.get("sequences") or {}
        types = record.get("types") or {}
        if not isinstance(steps, list) or not isinstance(sequences, Mapping) or not isinstance(types, Mapping):
            raise ConfigError("Construction file needs a 'steps' list and a 'sequences' mapping.")
        for name, kind in types.items():
            if kind not in MOLECULE_TYPES:
                raise ConfigError(f"Unknown molecule type '{kind}' for '{name}'.")
        return cls(
            steps=tuple(ConstructionStep.from_record(step) for step in steps),
            sequences={str(name): str(seq).upper() for name, seq in sequences.items()},
            types={str(name): str(kind) for name, kind in types.items()},
        )


__all__ = ["MOLECULE_TYPES", "Operation", "ConstructionStep", "ConstructionFile"]
