# Copyright © 2025 Phaethon Order LLC. All rights reserved. Provided solely for evaluation. See LICENSE.

"""Splitting of compound SOURCE fields into individual citation segments.

A single SOURCE cell often lists several citations ("702-01-02 MOD,ITU-R Rec.
431 MOD"). Commas cannot be used as a generic separator because a single
citation legitimately contains them ("IEC 62047-22:2014, 3.1.1, modified"), so
specific separator contexts are rewritten into a split marker first and the
field is cut on that marker afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, List, Pattern, Tuple

from utils.logger import get_logger

logger = get_logger()

SPLIT_MARKER: Final = ";;"

# Applied one after the other; a later rule only sees the output of the
# earlier ones.
_SPLIT_RULES: Final[Tuple[Tuple[Pattern[str], str], ...]] = (
    # IEC 62303:2008, 3.1; IAEA 4
    (re.compile(r";\s?([A-Z][A-Z])"), r";; \1"),
    # 702-01-02 MOD,ITU-R Rec. 431 MOD
    # 161-06-01 MOD. ITU RR 139 MOD
    # 702-09-44 MOD, 723-07-47
    (re.compile(r"MOD[,.]"), "MOD;;"),
    # 702-09-44 MOD, 723-07-47, voir 723-10-91
    (re.compile(r",\s*see\s*(\d{3})"), r";;see \1"),
    (re.compile(r",\s*voir\s*(\d{3})"), r";;voir \1"),
    # IEC 62303:2008, 3.1, modified and IEC 62302:2007, 3.2
    # CEI 62303:2008, 3.1, modifiée et CEI 62302:2007, 3.2
    (re.compile(r"modified and ([ISOECUT])"), r"modified;; \1"),
    (re.compile(r"modifiée et ([ISOECUT])"), r"modifiée;; \1"),
    # 725-12-50, ITU RR 11
    (re.compile(r",\s+ITU"), ";; ITU"),
    # 705-02-01, 702-02-07
    (
        re.compile(r"(\d{2,3}-\d{2,3}-\d{2,3}),\s*(\d{2,3}-\d{2,3}-\d{2,3})"),
        r"\1;; \2",
    ),
)


@dataclass(frozen=True)
class CitationSegment:
    """One independently parseable citation of a SOURCE field.

    Attributes:
        text: The trimmed segment text.
        position: Order within the field (0-indexed).
    """

    text: str
    position: int

    @property
    def is_primary(self) -> bool:
        return self.position == 0


def mark_separators(source: str) -> str:
    """Rewrite every recognised separator context into ``SPLIT_MARKER``."""
    for pattern, replacement in _SPLIT_RULES:
        source = pattern.sub(replacement, source)
    return source


def split_source_field(source: str) -> List[CitationSegment]:
    """Split a sanitized SOURCE field into ordered citation segments.

    Args:
        source: Sanitized field text.

    Returns:
        At least one segment when ``source`` has any non-blank content.
    """
    parts = [part.strip() for part in mark_separators(source).split(SPLIT_MARKER)]
    parts = [part for part in parts if part]

    if not parts and source.strip():
        parts = [source.strip()]

    segments = [CitationSegment(text=part, position=i) for i, part in enumerate(parts)]

    if len(segments) > 1:
        logger.info("Split source field into %d segments: %s", len(segments), source)

    return segments


__all__ = [
    "CitationSegment",
    "SPLIT_MARKER",
    "mark_separators",
    "split_source_field",
]
