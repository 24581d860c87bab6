"""
PCR product prediction.

The 3' most ANNEAL_LENGTH bases of each primer are assumed to match the
template exactly; 5' tails are carried into the product unchanged.
"""
from __future__ import annotations

import logging
from typing import Union

from cfsim.errors import InvalidSequenceError, NoAnnealError
from cfsim.seq.alphabet import resolve_to_sequence, reverse_complement
from cfsim.seq.model import Polynucleotide

from .model import ANNEAL_LENGTH, AnnealSites

LOGGER = logging.getLogger(__name__)

SequenceInput = Union[str, Polynucleotide]


def _resolve(value: SequenceInput, role: str) -> str:
    try:
        return resolve_to_sequence(value)
    except InvalidSequenceError as exc:
        raise InvalidSequenceError(f"PCR unable to parse {role} {value!r}") from exc


def find_anneal_sites(forward: str, reverse: str, template: str) -> AnnealSites:
    """Locate both primer anchors; sequences must already be canonical."""

    forward_anchor = forward[-ANNEAL_LENGTH:]
    flipped = False
    forward_index = template.find(forward_anchor)
    if forward_index == -1:
        template = reverse_complement(template)
        flipped = True
        forward_index = template.find(forward_anchor)
        if forward_index == -1:
            raise NoAnnealError("Forward oligo does not exactly anneal to the template")

    rotated = template[forward_index:] + template[:forward_index]
    reverse_anchor = reverse_complement(reverse)[:ANNEAL_LENGTH]
    reverse_index = rotated.find(reverse_anchor)
    if reverse_index == -1:
        raise NoAnnealError("Reverse oligo does not exactly anneal to the template")
    return AnnealSites(
        forward_index=forward_index,
        template_flipped=flipped,
        rotated_template=rotated,
        reverse_index=reverse_index,
    )


def pcr(forward: SequenceInput, reverse: SequenceInput, template: SequenceInput) -> str:
    """
    Predict the amplicon made by ``forward`` and ``reverse`` on ``template``.

    Product = full forward primer + template between the two anchors + full
    reverse complement of the reverse primer. Circular templates are handled
    by rotating the template to the forward anchor.
    """

    forward_seq = _resolve(forward, "forward primer")
    reverse_seq = _resolve(reverse, "reverse primer")
    template_seq = _resolve(template, "template sequence")

    sites = find_anneal_sites(forward_seq, reverse_seq, template_seq)
    reverse_rc = reverse_complement(reverse_seq)
    # overlapping anchors leave an empty span and both primers are kept whole
    product = forward_seq + sites.rotated_template[ANNEAL_LENGTH : sites.reverse_index] + reverse_rc
    LOGGER.debug(
        "pcr forward_index=%d flipped=%s reverse_index=%d product_length=%d",
        sites.forward_index,
        sites.template_flipped,
        sites.reverse_index,
        len(product),
    )
    return product


__all__ = ["pcr", "find_anneal_sites", "SequenceInput"]
