"""PCR data models."""
from __future__ import annotations

from dataclasses import dataclass

# Length of the 3' primer region assumed to match the template exactly.
ANNEAL_LENGTH = 18


@dataclass(frozen=True)
class AnnealSites:
    """
    Where a primer pair lands on the template.

    ``rotated_template`` is the template (reverse complemented when the
    forward anchor only matched the bottom strand) rotated to begin at the
    forward anchor; ``reverse_index`` is the reverse anchor's offset in it.
    """

    forward_index: int
    template_flipped: bool
    rotated_template: str
    reverse_index: int
