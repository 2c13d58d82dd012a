"""
Variant-call file access using pysam.

bgzipped files with a tabix/CSI index are queried by region; anything else is
scanned once per query.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence as SequenceType

import pysam

from genoquery.core.errors import StoreError
from genoquery.models.data_classes import Genotype, Location, VariantCall
from genoquery.models.enums import ErrorKind

logger = logging.getLogger(__name__)


def open_variant_file(file_path: str) -> pysam.VariantFile:
    """Open a VCF/BCF, turning I/O and format errors into StoreError."""
    try:
        return pysam.VariantFile(file_path)
    except (OSError, ValueError) as e:
        raise StoreError(
            f"Cannot open variant file {file_path}: {e}",
            kind=ErrorKind.INVALID_INPUT,
        ) from e


def read_sample_names(file_path: str) -> List[str]:
    """Sample column names from the VCF header, in column order."""
    with open_variant_file(file_path) as vcf:
        return list(vcf.header.samples)


def record_to_call(record: pysam.VariantRecord, sample_index: int) -> VariantCall:
    """One record as seen by the sample in column ``sample_index``."""
    sample = record.samples[sample_index]
    gt = sample.get("GT") or ()
    return VariantCall(
        chrom=record.chrom,
        pos=record.pos,
        id=record.id,
        ref=record.ref,
        alts=list(record.alts or ()),
        alleles=list(gt),
        phased=bool(gt) and sample.phased,
    )


def _fetch_indexed(
    vcf: pysam.VariantFile,
    location: Location,
) -> Iterable[pysam.VariantRecord]:
    try:
        return vcf.fetch(location.chrom, location.start, location.end)
    except ValueError:
        # Contig absent from the index: nothing called there.
        logger.debug("Contig %s not in index of %s", location.chrom, vcf.filename)
        return ()


def query_genotypes(
    file_path: str,
    sample_index: int,
    locations: SequenceType[Location],
) -> List[Genotype]:
    """
    Calls for one sample overlapping each location.

    Returns one Genotype per location, in input order.
    """
    with open_variant_file(file_path) as vcf:
        n_samples = len(vcf.header.samples)
        if not 0 <= sample_index < n_samples:
            raise StoreError(
                f"Sample index {sample_index} out of range for {file_path} "
                f"({n_samples} samples)",
                kind=ErrorKind.INVALID_INPUT,
            )

        calls: List[List[VariantCall]] = [[] for _ in locations]

        if vcf.index is not None:
            for i, location in enumerate(locations):
                for record in _fetch_indexed(vcf, location):
                    calls[i].append(record_to_call(record, sample_index))
        else:
            logger.debug("No index for %s, scanning whole file", file_path)
            for record in vcf:
                for i, location in enumerate(locations):
                    if location.overlaps(record.chrom, record.start, record.stop):
                        calls[i].append(record_to_call(record, sample_index))

    return [
        Genotype(location=location, calls=location_calls)
        for location, location_calls in zip(locations, calls)
    ]
