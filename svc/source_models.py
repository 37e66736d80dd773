# Copyright © 2025 Phaethon Order LLC. All rights reserved. Provided solely for evaluation. See LICENSE.
from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, field_validator


class RelationshipType(str, Enum):
    IDENTICAL = "identical"
    MODIFIED = "modified"
    SIMILAR = "similar"
    NOT_EQUAL = "not_equal"
    RELATED = "related"


class Relationship(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: RelationshipType = RelationshipType.IDENTICAL
    modification: str | None = None

    def to_dict(self) -> Dict[str, str]:
        data = {"type": self.type.value}
        if self.modification:
            data["modification"] = self.modification
        return data


class CitationRecord(BaseModel):
    """One parsed citation of a SOURCE field."""

    model_config = ConfigDict(frozen=True)

    reference: str
    clause: str | None = None
    link: str | None = None
    relationship: Relationship = Relationship()
    original: str

    @field_validator("reference")
    @classmethod
    def _reference_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("reference must not be empty")
        return value

    @field_validator("clause")
    @classmethod
    def _blank_clause_is_absent(cls, value: str | None) -> str | None:
        return value if value and value.strip() else None

    def to_source_dict(self) -> Dict[str, Any]:
        """Serialize to the ``authoritative_source`` shape used by the termbase."""
        source: Dict[str, Any] = {"ref": self.reference}
        if self.clause:
            source["clause"] = self.clause
        if self.link:
            source["link"] = self.link
        source["relationship"] = self.relationship.to_dict()
        source["original"] = self.original
        return source
