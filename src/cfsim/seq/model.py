"""Polynucleotide data model."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from cfsim.errors import InvalidCharacterError, InvalidSequenceError, ResolutionError, TopologyError

from .alphabet import resolve_to_sequence, reverse_complement

HYDROXYL = "hydroxyl"
PHOSPHATE_5 = "phos5"

# Leading marker on an overhang produced by a 3'-extension cut.
THREE_PRIME_MARK = "-"


def _least_rotation(text: str) -> str:
    """Lexicographically least rotation of ``text`` (Booth's algorithm)."""

    if not text:
        return text
    doubled = text + text
    failure = [-1] * len(doubled)
    k = 0
    for j in range(1, len(doubled)):
        char = doubled[j]
        i = failure[j - k - 1]
        while i != -1 and char != doubled[k + i + 1]:
            if char < doubled[k + i + 1]:
                k = j - i - 1
            i = failure[i]
        if char != doubled[k + i + 1]:
            if char < doubled[k]:
                k = j
            failure[j - k] = -1
        else:
            failure[j - k] = i + 1
    return doubled[k : k + len(text)]


def flip_overhang(overhang: str, *, rna: bool = False) -> str:
    """Rewrite an overhang for the opposite orientation, keeping its 3' marker."""

    if overhang.startswith(THREE_PRIME_MARK):
        return THREE_PRIME_MARK + reverse_complement(overhang[1:], rna=rna)
    return reverse_complement(overhang, rna=rna)


@dataclass(frozen=True, eq=False)
class Polynucleotide:
    """
    Immutable DNA/RNA molecule.

    ``ext5``/``ext3`` hold the single-stranded overhangs written as top-strand
    letters; a leading ``-`` marks a 3' extension. Overhangs are empty for
    blunt ends and always empty for circular molecules.
    """

    sequence: str
    ext5: str = ""
    ext3: str = ""
    is_double_stranded: bool = True
    is_rna: bool = False
    is_circular: bool = False
    mod_ext5: str = ""
    mod_ext3: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "sequence", self.sequence.upper())
        object.__setattr__(self, "ext5", (self.ext5 or "").upper())
        object.__setattr__(self, "ext3", (self.ext3 or "").upper())
        object.__setattr__(self, "mod_ext5", self.mod_ext5 or "")
        object.__setattr__(self, "mod_ext3", self.mod_ext3 or "")
        if self.is_circular and (self.ext5 or self.ext3):
            raise TopologyError("Circular molecules cannot carry overhangs.")

    def __len__(self) -> int:
        return len(self.sequence)

    def reverse_complement(self) -> "Polynucleotide":
        """Return the same molecule read from the other strand."""

        rna = self.is_rna
        return Polynucleotide(
            sequence=reverse_complement(self.sequence, rna=rna),
            ext5=flip_overhang(self.ext3, rna=rna),
            ext3=flip_overhang(self.ext5, rna=rna),
            is_double_stranded=self.is_double_stranded,
            is_rna=self.is_rna,
            is_circular=self.is_circular,
            mod_ext5=self.mod_ext3,
            mod_ext3=self.mod_ext5,
        )

    def _oriented_key(self) -> Tuple[str, ...]:
        return (self.sequence, self.ext5, self.ext3, self.mod_ext5, self.mod_ext3)

    def canonical_key(self) -> Tuple[Any, ...]:
        """
        Orientation- and rotation-independent identity of the molecule.

        Two molecules are equal exactly when their canonical keys are equal;
        the key also gives a total order for sorting and deduplication.
        """

        flags = (self.is_circular, self.is_double_stranded, self.is_rna)
        try:
            flipped = self.reverse_complement()
        except InvalidCharacterError:
            # no complement (U in DNA, T in RNA); only the given strand counts
            flipped = self
        if self.is_circular:
            return flags + (min(_least_rotation(self.sequence), _least_rotation(flipped.sequence)),)
        return flags + min(self._oriented_key(), flipped._oriented_key())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynucleotide):
            return NotImplemented
        return self.canonical_key() == other.canonical_key()

    def __hash__(self) -> int:
        return hash(self.canonical_key())

    def __lt__(self, other: "Polynucleotide") -> bool:
        if not isinstance(other, Polynucleotide):
            return NotImplemented
        return self.canonical_key() < other.canonical_key()

    def to_record(self) -> Dict[str, Any]:
        return {
            "sequence": self.sequence,
            "ext5": self.ext5,
            "ext3": self.ext3,
            "isDoubleStranded": self.is_double_stranded,
            "isRNA": self.is_rna,
            "isCircular": self.is_circular,
            "mod_ext5": self.mod_ext5,
            "mod_ext3": self.mod_ext3,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Polynucleotide":
        """Build a molecule from the camelCase record shape (snake_case also accepted)."""

        def _field(camel: str, snake: str, default: Any) -> Any:
            if camel in record:
                return record[camel]
            return record.get(snake, default)

        sequence = record.get("sequence")
        if not isinstance(sequence, str) or not sequence:
            raise ResolutionError("Molecule record requires a non-empty 'sequence' field.")
        try:
            sequence = resolve_to_sequence(sequence)
        except InvalidSequenceError as exc:
            raise ResolutionError(f"Molecule record sequence is not IUPAC: {sequence!r}") from exc
        return cls(
            sequence=sequence,
            ext5=record.get("ext5") or "",
            ext3=record.get("ext3") or "",
            is_double_stranded=bool(_field("isDoubleStranded", "is_double_stranded", True)),
            is_rna=bool(_field("isRNA", "is_rna", False)),
            is_circular=bool(_field("isCircular", "is_circular", False)),
            mod_ext5=record.get("mod_ext5") or "",
            mod_ext3=record.get("mod_ext3") or "",
        )


def ds_dna(sequence: str) -> Polynucleotide:
    """Blunt, hydroxyl-terminated linear double-stranded DNA (e.g. a PCR product)."""

    return Polynucleotide(sequence, "", "", True, False, False, HYDROXYL, HYDROXYL)


def oligo(sequence: str) -> Polynucleotide:
    return Polynucleotide(sequence, "", "", False, False, False, HYDROXYL, "")


def plasmid(sequence: str) -> Polynucleotide:
    return Polynucleotide(sequence, "", "", True, False, True, "", "")


def polynucleotide(
    sequence: str,
    ext5: Optional[str] = None,
    ext3: Optional[str] = None,
    is_double_stranded: bool = True,
    is_rna: bool = False,
    is_circular: bool = False,
    mod_ext5: str = "",
    mod_ext3: str = "",
) -> Polynucleotide:
    return Polynucleotide(sequence, ext5 or "", ext3 or "", is_double_stranded, is_rna, is_circular, mod_ext5, mod_ext3)


__all__ = [
    "HYDROXYL",
    "PHOSPHATE_5",
    "THREE_PRIME_MARK",
    "Polynucleotide",
    "flip_overhang",
    "ds_dna",
    "oligo",
    "plasmid",
    "polynucleotide",
]
