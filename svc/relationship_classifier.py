# Copyright © 2025 Phaethon Order LLC. All rights reserved. Provided solely for evaluation. See LICENSE.

"""Relationship between a termbase entry and the source it cites."""

from __future__ import annotations

import re
from typing import AbstractSet, Final, Pattern, Tuple

from svc.source_models import Relationship, RelationshipType
from svc.source_normalizer import detect_relation_glyphs

# Glyphs outrank every textual marker; ≠ outranks ≈.
_GLYPH_TYPES: Final[Tuple[Tuple[str, RelationshipType], ...]] = (
    ("≠", RelationshipType.NOT_EQUAL),
    ("≈", RelationshipType.SIMILAR),
)

# Checked top to bottom; the first hit decides the type.
_TYPE_RULES: Final[Tuple[Tuple[Pattern[str], RelationshipType], ...]] = (
    (re.compile(r"\A(?:[Ss]ee|[Vv]oir)"), RelationshipType.RELATED),
    (re.compile(r"MOD|ИЗМ"), RelationshipType.MODIFIED),
    (re.compile(r"modified|modifié"), RelationshipType.MODIFIED),
    (re.compile(r"\A(?:from|d'après)"), RelationshipType.IDENTICAL),
    (re.compile(r"\Adefinition .+ of|définition .+ de la"), RelationshipType.IDENTICAL),
)

# "MOD 702-01-02" names the modified entry, it is not a description.
_LEADING_MOD_IDENTIFIER: Final = re.compile(r"\AMOD [\d\-]")
_MODIFICATION: Final = re.compile(r"(modified|modifié|modifiée|modifiés|MOD)\s*[–—-]?\s+(.+)\Z")


def classify_type(raw_segment: str, glyphs: AbstractSet[str] | None = None) -> RelationshipType:
    if glyphs is None:
        glyphs = detect_relation_glyphs(raw_segment)
    for glyph, relationship_type in _GLYPH_TYPES:
        if glyph in glyphs:
            return relationship_type
    for pattern, relationship_type in _TYPE_RULES:
        if pattern.search(raw_segment):
            return relationship_type
    return RelationshipType.IDENTICAL


def extract_modification(raw_segment: str) -> str | None:
    if _LEADING_MOD_IDENTIFIER.search(raw_segment):
        return None
    match = _MODIFICATION.search(raw_segment)
    if match is None:
        return None
    return match.group(2).strip() or None


def classify_relationship(raw_segment: str, glyphs: AbstractSet[str] | None = None) -> Relationship:
    """Classify a segment from its raw text.

    ``glyphs`` are the relation glyphs recorded before normalization; when
    omitted they are detected on ``raw_segment``.
    """
    return Relationship(
        type=classify_type(raw_segment, glyphs),
        modification=extract_modification(raw_segment),
    )


__all__ = ["classify_relationship", "classify_type", "extract_modification"]
