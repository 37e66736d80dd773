# Copyright © 2025 Phaethon Order LLC. All rights reserved. Provided solely for evaluation. See LICENSE.

"""Canonicalization of abbreviation variants inside one citation segment."""

from __future__ import annotations

import re
from typing import Final, FrozenSet, Pattern, Tuple

RELATION_GLYPHS: Final = frozenset({"≈", "≠"})

_SUBSTITUTIONS: Final[Tuple[Tuple[Pattern[str], str], ...]] = (
    (re.compile(r"CEI"), "IEC"),
    (re.compile(r"Guide IEC"), "IEC Guide"),
    (re.compile(r"Guide ISO/IEC"), "ISO/IEC Guide"),
    (re.compile(r"VEI"), "IEV"),
    (re.compile(r"UIT"), "ITU"),
    (re.compile(r"IUT-R"), "ITU-R"),
    (re.compile(r"UTI-R"), "ITU-R"),
    (re.compile(r"Recomm[ea]ndation ITU-T"), "ITU-T Recommendation"),
    # ITU-T F.791:2015
    (re.compile(r"ITU-T (\w.\d{3}):(\d{4})"), r"ITU-T Recommendation \1 (\2)"),
    # ITU-R Rec. 431
    (re.compile(r"ITU-R Rec. (\d+)"), r"ITU-R Recommendation \1"),
    (re.compile(r"[≈≠]\s*"), ""),
    (re.compile(r"ИЗМ\Z"), "MOD"),
    # definition 3.54 of 62127-1 MOD
    # définition 3.54 de la CEI 62127-1 MOD
    (re.compile(r"definition ([\d.]+) of ([\d\-:]+) MOD"), r"IEC \2, \1, modified - "),
    (re.compile(r"definition ([\d.]+) of IEC ([\d\-:]+) MOD"), r"IEC \2, \1, modified - "),
    (re.compile(r"définition ([\d.]+) de la ([\d\-:]+) MOD"), r"IEC \2, \1, modified - "),
    (re.compile(r"définition ([\d.]+) de la IEC ([\d\-:]+) MOD"), r"IEC \2, \1, modified - "),
    # 221 04 03
    (re.compile(r"(\d{3}) (\d{2}) (\d{2})"), r"\1-\2-\3"),
)


def detect_relation_glyphs(segment: str) -> FrozenSet[str]:
    """Return the relation glyphs present before normalization strips them."""
    return frozenset(glyph for glyph in RELATION_GLYPHS if glyph in segment)


def normalize_segment(segment: str) -> str:
    """Rewrite French, transliterated and legacy tokens to the canonical vocabulary."""
    for pattern, replacement in _SUBSTITUTIONS:
        segment = pattern.sub(replacement, segment)
    return segment


__all__ = ["RELATION_GLYPHS", "detect_relation_glyphs", "normalize_segment"]
