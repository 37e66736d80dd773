# Copyright © 2025 Phaethon Order LLC. All rights reserved. Provided solely for evaluation. See LICENSE.

"""Canonical reference identifiers for normalized citation segments.

Rules are evaluated strictly in the order of ``REFERENCE_RULES`` and the first
matching rule wins. Several patterns overlap (``ISO/IEC Guide 2`` would also
satisfy the generic ``ISO`` rule further down), so the order is part of the
grammar and must not be rearranged.
"""

from __future__ import annotations

import re
from typing import Callable, Final, Pattern, Tuple

from utils.logger import get_logger

logger = get_logger()

ReferenceBuilder = Callable[[re.Match], str]

SI_BROCHURE_REFERENCE: Final = "BIPM SI Brochure"
ITU_CONSTITUTION_REFERENCE: Final = "International Telecommunication Union (ITU) Constitution (Ed. 2015)"

_TRIPLET: Final = r"\d{2,3}-\d{2,3}-\d{2,3}"
_TRAILING_COLON: Final = re.compile(r":\Z")
_TRAILING_MODIFIED: Final = re.compile(r", modifi(?:ed|é)\Z")


def _rule(pattern: str, builder: ReferenceBuilder, flags: int = 0) -> Tuple[Pattern[str], ReferenceBuilder]:
    return re.compile(pattern, flags), builder


def _const(reference: str) -> ReferenceBuilder:
    return lambda _match: reference


REFERENCE_RULES: Final[Tuple[Tuple[Pattern[str], ReferenceBuilder], ...]] = (
    # SI Brochure, 9th edition, 2019, 2.3.1
    # Brochure sur le SI, 9e édition, 2019, Annexe 1
    _rule(r"SI Brochure|Brochure sur le SI", _const(SI_BROCHURE_REFERENCE)),
    _rule(r"VIM", _const("JCGM VIM")),
    # IEC 60050-121, 151-12-05
    _rule(rf"IEC 60050-(\d+), ({_TRIPLET})", lambda m: f"IEC 60050-{m[1]}"),
    _rule(rf"IEC 60050-(\d+):(\d+), ({_TRIPLET})", lambda m: f"IEC 60050-{m[1]}:{m[2]}"),
    _rule(r"(AIEA|IAEA) (\d+)", lambda m: f"IAEA {m[2]}"),
    _rule(r"IEC\sIEEE ([\d:\-]+)", lambda m: f"IEC/IEEE {m[1]}"),
    _rule(r"CISPR ([\d:\-]+)", lambda m: f"IEC CISPR {m[1]}"),
    _rule(r"RR (\d+)", _const("ITU RR")),
    # IEC 50(845); the first number is reused for the part, as in the source data.
    _rule(r"IEC (\d+)\((\d+)\)", lambda m: f"IEC 600{m[1]}-{m[1]}"),
    _rule(r"(ISO|IEC)[/ ](PAS|TR|TS) ([\d:\-]+)", lambda m: f"{m[1]}/{m[2]} {m[3]}"),
    _rule(r"ISO/IEC ([\d:\-]+)", lambda m: f"ISO/IEC {m[1]}"),
    _rule(r"ISO/IEC/IEEE ([\d:\-]+)", lambda m: f"ISO/IEC/IEEE {m[1]}"),
    # ISO 140/4
    _rule(r"ISO (\d+)/(\d+)", lambda m: f"ISO {m[1]}-{m[2]}"),
    _rule(r"Norme ISO (\d+)-(\d+)", lambda m: f"ISO {m[1]}:{m[2]}"),
    _rule(r"ISO/IEC Guide ([\d:\-]+)", lambda m: f"ISO/IEC Guide {m[1]}", re.IGNORECASE),
    _rule(r"(ISO|IEC) Guide ([\d:\-]+)", lambda m: f"{m[1]} Guide {m[2]}", re.IGNORECASE),
    # ITU-T Recommendation F.791 (11/2015)
    _rule(
        r"ITU-T Recommendation (\w.\d+) \((\d+/\d+)\)",
        lambda m: f"ITU-T Recommendation {m[1]} ({m[2]})",
        re.IGNORECASE,
    ),
    # ITU-T Recommendation F.791:2015
    _rule(
        r"ITU-T Recommendation (\w.\d+):(\d+)",
        lambda m: f"ITU-T Recommendation {m[1]} ({m[2]})",
        re.IGNORECASE,
    ),
    _rule(r"ITU-T Recommendation (\w\.\d+)", lambda m: f"ITU-T Recommendation {m[1]}", re.IGNORECASE),
    # ITU-R Recommendation 592 MOD
    _rule(r"ITU-R Recommendation (\d+)", lambda m: f"ITU-R Recommendation {m[1]}", re.IGNORECASE),
    # ISO 669: 2000 3.1.16
    _rule(r"ISO ([\d\-]+:\s?\d{4})", lambda m: f"ISO {m[1]}"),
    _rule(r"ISO ([\d:\-]+)", lambda m: f"ISO {m[1]}"),
    _rule(r"IEC ([\d:\-]+)", lambda m: f"IEC {m[1]}"),
    # definition 3.60 of 62127-1
    _rule(r"definition (\d\.[\d.]+) of ([\d\-:]+)", lambda m: f"IEC {m[2]}"),
    _rule(r"définition (\d\.[\d.]+) de la ([\d\-:]+)", lambda m: f"IEC {m[2]}"),
    # A bare IEV clause number refers to the vocabulary itself.
    _rule(rf"IEV ({_TRIPLET})|({_TRIPLET})", _const("IEV")),
    _rule(r"IEV part\s+(\d+)|partie\s+(\d+)\s+de l'IEV", lambda m: f"IEC 60050-{m[1] or m[2]}"),
    _rule(
        r"International Telecommunication Union \(ITU\) Constitution"
        r"|Constitution de l[’'] ?Union internationale des télécommunications \((?:UIT|ITU)\)",
        _const(ITU_CONSTITUTION_REFERENCE),
    ),
)


def match_reference(normalized: str) -> str | None:
    """Return the reference built by the first matching rule, or ``None``."""
    for pattern, builder in REFERENCE_RULES:
        match = pattern.search(normalized)
        if match is None:
            continue
        reference = _TRAILING_COLON.sub("", builder(match))
        return _TRAILING_MODIFIED.sub("", reference).strip()
    return None


def extract_reference(normalized: str) -> str:
    """Return the canonical reference of a normalized segment.

    Falls back to the segment text itself when no rule matches, so the caller
    always receives a non-empty identifier.
    """
    reference = match_reference(normalized)
    if reference:
        return reference

    logger.warning("[FAILED TO PARSE SOURCE] %s", normalized)
    fallback = _TRAILING_MODIFIED.sub("", normalized).strip()
    return fallback or normalized.strip() or normalized


__all__ = [
    "ITU_CONSTITUTION_REFERENCE",
    "REFERENCE_RULES",
    "SI_BROCHURE_REFERENCE",
    "extract_reference",
    "match_reference",
]
