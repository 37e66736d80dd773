# Copyright © 2025 Phaethon Order LLC. All rights reserved. Provided solely for evaluation. See LICENSE.

"""Parsing of a termbase SOURCE field into structured citation records.

Example:
    "IEC 60050-151, 151-12-05" parses to a single record with reference
    "IEC 60050-151", clause "151-12-05" and an identical relationship.
"""

from __future__ import annotations

import asyncio
from typing import List

from svc.clause_extractor import extract_clause
from svc.reference_extractor import extract_reference
from svc.relationship_classifier import classify_relationship
from svc.source_models import CitationRecord, Relationship
from svc.source_normalizer import detect_relation_glyphs, normalize_segment
from svc.source_splitter import CitationSegment, split_source_field
from utils.cleaner import sanitize_source_field
from utils.logger import get_logger
from verifiers.reference_resolver import ReferenceLookupError, ReferenceResolver

logger = get_logger()


def _resolve_link(resolver: ReferenceResolver | None, reference: str) -> str | None:
    if resolver is None:
        return None
    try:
        item = resolver.resolve(reference)
    except ReferenceLookupError as exc:
        logger.warning("%s", exc)
        return None
    except Exception as exc:  # pragma: no cover - defensive safeguard
        logger.warning("Reference resolver failed for %s: %s", reference, exc)
        return None
    return item.url if item else None


def parse_segment(segment: CitationSegment, resolver: ReferenceResolver | None = None) -> CitationRecord:
    """Build the citation record of one segment; never raises."""
    raw_ref = segment.text
    try:
        # Normalization strips relation glyphs; record them first.
        glyphs = detect_relation_glyphs(raw_ref)
        relationship = classify_relationship(raw_ref, glyphs)
        clean_ref = normalize_segment(raw_ref)
        reference = extract_reference(clean_ref) if clean_ref.strip() else raw_ref
        clause = extract_clause(clean_ref)
        link = _resolve_link(resolver, reference)
        return CitationRecord(
            reference=reference,
            clause=clause,
            link=link,
            relationship=relationship,
            original=raw_ref,
        )
    except Exception as exc:
        logger.exception("Failed to parse source segment %r: %s", raw_ref, exc)
        return CitationRecord(reference=raw_ref, relationship=Relationship(), original=raw_ref)


def _prepare_segments(source: str) -> List[CitationSegment]:
    sanitized = sanitize_source_field(source)
    if not sanitized:
        raise ValueError("Source field cannot be empty")
    return split_source_field(sanitized)


def parse_source_field(source: str, resolver: ReferenceResolver | None = None) -> List[CitationRecord]:
    """Parse a SOURCE field into one record per citation segment, in field order."""
    return [parse_segment(segment, resolver) for segment in _prepare_segments(source)]


async def parse_source_field_async(
    source: str, resolver: ReferenceResolver | None = None
) -> List[CitationRecord]:
    """Like ``parse_source_field`` but parses segments concurrently off the event loop."""
    segments = _prepare_segments(source)
    tasks = [asyncio.to_thread(parse_segment, segment, resolver) for segment in segments]
    return list(await asyncio.gather(*tasks))


class SourceParser:
    """Parses the spreadsheet's SOURCE column.

    Example:
        SourceParser(cell_data_string).parsed_sources
    """

    def __init__(self, source: str, resolver: ReferenceResolver | None = None) -> None:
        self.raw_source = source
        self.sanitized_source = sanitize_source_field(source)
        if not self.sanitized_source:
            raise ValueError("Source field cannot be empty")
        self.segments = split_source_field(self.sanitized_source)
        self.parsed_sources = [parse_segment(segment, resolver) for segment in self.segments]

    def to_source_dicts(self) -> List[dict]:
        return [record.to_source_dict() for record in self.parsed_sources]


__all__ = [
    "SourceParser",
    "parse_segment",
    "parse_source_field",
    "parse_source_field_async",
]
