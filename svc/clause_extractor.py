# Copyright © 2025 Phaethon Order LLC. All rights reserved. Provided solely for evaluation. See LICENSE.

"""Pinpoint locator (clause, figure, item, appendix) extraction.

Unlike reference extraction this is not a first-match cascade: every locator
pattern is run over the whole segment, all hits are collected with their
offsets, and the earliest hit wins. Hits sharing an offset are ranked by the
length of the captured locator, longest first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, List, Pattern, Tuple

_MODIFICATION_TAIL: Final = re.compile(r"[, ]*modif.+\s[-–—].*\Z")
# see figure 466-6
# voir fig. 4.9
_LEADING_FIGURE_REFERENCES: Final = (
    re.compile(r"\A(see|voir) fig. [\d.]+"),
    re.compile(r"\A(see|voir) figure [\d.]+"),
)

# (pattern, template); the template receives the stripped first group.
CLAUSE_PATTERNS: Final[Tuple[Tuple[Pattern[str], str], ...]] = tuple(
    (re.compile(pattern), template)
    for pattern, template in (
        (r"RR (\d+)", "{}"),
        (r"VIM (.+)", "{}"),
        (r"item (\d\.[\d.]+)", "{}"),
        (r"d[eé]finition (\d[\d.]+)", "{}"),
        (r"figure ([\d.\-]+)", "figure {}"),
        (r"fig\. ([\d.\-]+)", "figure {}"),
        (r"IEV (\d{2,3}-\d{2,3}-\d{2,3})", "{}"),
        (r"(\d{2,3}-\d{2,3}-\d{2,3})", "{}"),
        # 221 04 03
        (r"(\d{3} \d{2} \d{2})", "{}"),
        # SI Brochure, 9th edition, 2019, 2.3.1,
        (r",\s?(\d+\.[\d.]+)", "{}"),
        # SI Brochure, 9th edition, 2019, Appendix 1, modified
        (r"\d{4}, (Appendix \d)", "{}"),
        (r"\d{4}, (Annexe \d)", "{}"),
        # International Telecommunication Union (ITU) Constitution (Ed. 2015), No. 1012 of the Annex,
        (r", (No. \d{4} of the Annex)", "{}"),
        (r", (N° \d{4} 1012 de l’Annexe)", "{}"),
        # ISO/IEC 2382:2015 (https://www.iso.org/obp/ui/#iso:std:iso-iec:2382:ed-1:v1:en), 2126371,
        (r"\), (\d{7}),", "{}"),
        (r"\s(\d+\.[\d.]+)\s?", "{}"),
        # ISO/IEC Guide 2 (14.1)
        (r"\((\d+\.[\d.]+)\)", "{}"),
        # ISO/IEC Guide 2 (14.5 MOD)
        (r"\((\d+\.[\d.]+) MOD\)", "{}"),
        # ISO 80000-10:2009, item 10-2.b,
        (r"\AISO 80000-10:2009, (item [\d.\-]+\w?)", "{}"),
        (r"\AISO 80000-10:2009, (point [\d.\-]+\w?)", "{}"),
        # IEC 80000-13:2008, 13-9,
        (r"\AIEC 80000-13:2008, ([\d.\-]+\w?),", "{}"),
        (r"\AIEC 80000-13:2008, ([\d.\-]+\w?)\Z", "{}"),
        # ISO 921:1997, définition 6,
        (r"\AISO [\d:]+, (d[ée]finition \d+)", "{}"),
        # ISO/IEC/IEEE 24765:2010, Systems and software engineering – Vocabulary, 3.234 (2)
        (r", ([\d.\w]+ \(\d+\))", "{}"),
    )
)


@dataclass(frozen=True)
class ClauseCandidate:
    index: int
    clause: str
    captured: str


def strip_clause_noise(segment: str) -> str:
    """Drop the modification explanation and leading figure cross-references."""
    segment = _MODIFICATION_TAIL.sub("", segment, count=1)
    for pattern in _LEADING_FIGURE_REFERENCES:
        segment = pattern.sub("", segment)
    return segment


def find_clause_candidates(segment: str) -> List[ClauseCandidate]:
    """Collect every locator match, ordered earliest first then longest first."""
    candidates: List[ClauseCandidate] = []
    for pattern, template in CLAUSE_PATTERNS:
        for match in pattern.finditer(segment):
            captured = match.group(1).strip()
            if captured:
                candidates.append(
                    ClauseCandidate(index=match.start(), clause=template.format(captured), captured=captured)
                )
    return sorted(candidates, key=lambda c: (c.index, -len(c.captured)))


def extract_clause(normalized: str) -> str | None:
    candidates = find_clause_candidates(strip_clause_noise(normalized))
    return candidates[0].clause if candidates else None


__all__ = [
    "CLAUSE_PATTERNS",
    "ClauseCandidate",
    "extract_clause",
    "find_clause_candidates",
    "strip_clause_noise",
]
