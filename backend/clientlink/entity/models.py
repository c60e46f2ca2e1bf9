"""Record and candidate types for client record linkage.

SourceRecord is the input shape for both record sets. NormalizedRecord is
derived once per record per matching run and never cached. MatchCandidate is
a proposal for a human reviewer; it is never a confirmed link.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

Confidence = Literal["high", "medium", "low"]

CONFIDENCE_HIGH: Confidence = "high"
CONFIDENCE_MEDIUM: Confidence = "medium"
CONFIDENCE_LOW: Confidence = "low"

# Review order: most certain proposals first.
CONFIDENCE_ORDER: dict[str, int] = {
    CONFIDENCE_HIGH: 0,
    CONFIDENCE_MEDIUM: 1,
    CONFIDENCE_LOW: 2,
}


@dataclass(frozen=True)
class SourceRecord:
    """A record from either data source.

    Attributes
    ----------
    id : Any
        Opaque identifier (UUID, row id, tax identifier...).
    raw_name : str
        Company name exactly as stored by the source.
    metadata : Mapping[str, Any]
        Extra identifying fields carried through untouched. Never scored.
    """

    id: Any
    raw_name: str | None
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class NormalizedRecord:
    """A SourceRecord with its comparison keys precomputed."""

    id: Any
    raw_name: str | None
    normalized: str
    core: str
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class MatchCandidate:
    """A proposed link between one record of set A and one of set B.

    Attributes
    ----------
    source_id : Any
        Identifier of the set A record.
    source_name : str | None
        Raw name of the set A record, for display.
    target_id : Any
        Identifier of the proposed set B record.
    target_name : str | None
        Raw name of the proposed set B record.
    confidence : str
        One of 'high', 'medium', 'low'.
    reason : str
        Human readable explanation of why the pair was proposed.
    similarity_score : float | None
        Edit-distance similarity of the core names, for fuzzy tiers only.
    target_metadata : Mapping[str, Any]
        Pass-through metadata of the set B record (e.g. tax identifier).
    """

    source_id: Any
    source_name: str | None
    target_id: Any
    target_name: str | None
    confidence: Confidence
    reason: str
    similarity_score: float | None = None
    target_metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "source_id": self.source_id,
            "source_name": self.source_name,
            "target_id": self.target_id,
            "target_name": self.target_name,
            "confidence": self.confidence,
            "reason": self.reason,
            "similarity_score": self.similarity_score,
            "target_metadata": dict(self.target_metadata),
        }
