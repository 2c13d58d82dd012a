"""
Sequence reconstruction from genotype calls.

Each haplotype starts as the reference bases of the window and has the
sample's called alleles substituted in, left to right.
"""

from __future__ import annotations

from typing import List, Optional

from genoquery.models.data_classes import Location, Sequence, VariantCall

DEFAULT_PLOIDY = 2

# Alleles with no literal bases to substitute.
_SYMBOLIC_PREFIXES = ("<", "*", ".")


def _haplotype_allele(call: VariantCall, haplotype: int) -> Optional[int]:
    if not call.alleles:
        return None
    if haplotype < len(call.alleles):
        return call.alleles[haplotype]
    # Haploid call in a window that also has diploid calls.
    return call.alleles[-1]


def _substitution(call: VariantCall, haplotype: int) -> Optional[str]:
    """Bases replacing REF on this haplotype, or None to keep the reference."""
    index = _haplotype_allele(call, haplotype)
    if index is None:
        return "N" * len(call.ref)
    if index == 0:
        return None
    allele = call.allele(index)
    if allele is None or allele.startswith(_SYMBOLIC_PREFIXES):
        return None
    return allele


def reconstruct_haplotype(
    reference: str,
    location: Location,
    calls: List[VariantCall],
    haplotype: int,
) -> str:
    """
    Apply one haplotype's alleles to the reference window.

    Calls that stick out of the window, or that overlap a call already
    applied, are left out.
    """
    pieces: List[str] = []
    cursor = location.start

    for call in sorted(calls, key=lambda c: (c.start, c.end)):
        if call.start < cursor or call.end > location.end:
            continue
        bases = _substitution(call, haplotype)
        if bases is None:
            continue
        pieces.append(reference[cursor - location.start:call.start - location.start])
        pieces.append(bases)
        cursor = call.end

    pieces.append(reference[cursor - location.start:])
    return "".join(pieces)


def reconstruct_sequence(
    reference: str,
    location: Location,
    calls: List[VariantCall],
) -> Sequence:
    """Build every haplotype of the sample over ``location``."""
    ploidy = max((len(call.alleles) for call in calls), default=0) or DEFAULT_PLOIDY
    haplotypes = [
        reconstruct_haplotype(reference, location, calls, h)
        for h in range(ploidy)
    ]
    return Sequence(location=location, reference=reference, haplotypes=haplotypes)
