"""Entity resolution package for clientlink.

Normalization, suffix stripping, edit-distance similarity and the tiered
matcher that proposes links between client records of two sources.
"""

from clientlink.entity.matcher import MatcherConfig, propose_matches
from clientlink.entity.models import MatchCandidate, SourceRecord

__all__ = [
    "MatchCandidate",
    "MatcherConfig",
    "SourceRecord",
    "propose_matches",
]
