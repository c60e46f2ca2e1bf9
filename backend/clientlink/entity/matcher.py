"""Tiered client record matcher.

Proposes, for every record of set A (clients without a confirmed link), at
most one record of set B that likely refers to the same company.

Tiers, strictest first; the first success wins:
1. exact normalized name                -> high
2. exact core name (suffixes removed)   -> high
3. best core similarity >= 0.80         -> medium
4. best core similarity in [0.50, 0.80) -> low  (second pass, leftovers only)

The low tier runs only after every record had its chance at the stricter
tiers, so the O(|A| * |B|) scan is paid for leftovers only. Nothing here
writes a link; the result is a review queue ordered by confidence.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from clientlink.entity.index import MIN_CORE_KEY_LENGTH, MatchIndex, build_indexes
from clientlink.entity.models import (
    CONFIDENCE_HIGH,
    CONFIDENCE_LOW,
    CONFIDENCE_MEDIUM,
    CONFIDENCE_ORDER,
    MatchCandidate,
    NormalizedRecord,
    SourceRecord,
)
from clientlink.entity.normalize import (
    DEFAULT_CORPORATE_SUFFIXES,
    normalize_name,
    strip_suffixes,
)
from clientlink.entity.similarity import similarity

logger = logging.getLogger(__name__)

# -- Thresholds ---------------------------------------------------------------

THRESHOLD_MEDIUM = 0.80
THRESHOLD_LOW = 0.50

REASON_EXACT_NORMALIZED = "identical normalized name"
REASON_EXACT_CORE = "identical core name after suffix removal"


@dataclass(frozen=True)
class MatcherConfig:
    """Matcher configuration.

    Attributes
    ----------
    corporate_suffixes : frozenset[str]
        Normalized tokens removed from names to compute the core name.
    """

    corporate_suffixes: frozenset[str] = field(default=DEFAULT_CORPORATE_SUFFIXES)


def prepare_record(record: SourceRecord, config: MatcherConfig) -> NormalizedRecord:
    """Compute the normalized and core keys of one record."""
    normalized = normalize_name(record.raw_name)
    return NormalizedRecord(
        id=record.id,
        raw_name=record.raw_name,
        normalized=normalized,
        core=strip_suffixes(normalized, config.corporate_suffixes),
        metadata=record.metadata,
    )


def prepare_records(
    records: Iterable[SourceRecord],
    config: MatcherConfig,
) -> list[NormalizedRecord]:
    return [prepare_record(r, config) for r in records]


def _percent(score: float) -> int:
    """Round half up, e.g. 0.845 -> 85."""
    return int(math.floor(score * 100 + 0.5))


def _candidate(
    source: NormalizedRecord,
    target: NormalizedRecord,
    confidence: str,
    reason: str,
    score: float | None = None,
) -> MatchCandidate:
    return MatchCandidate(
        source_id=source.id,
        source_name=source.raw_name,
        target_id=target.id,
        target_name=target.raw_name,
        confidence=confidence,  # type: ignore[arg-type]
        reason=reason,
        similarity_score=score,
        target_metadata=target.metadata,
    )


def _best_fuzzy(
    source: NormalizedRecord,
    targets: Sequence[NormalizedRecord],
    lower: float,
    upper: float | None = None,
) -> tuple[NormalizedRecord | None, float]:
    """Best core similarity within [lower, upper); first target wins ties."""
    if not source.core:
        return None, 0.0

    best: NormalizedRecord | None = None
    best_score = 0.0
    for target in targets:
        if not target.core:
            continue
        score = similarity(source.core, target.core)
        if score < lower or (upper is not None and score >= upper):
            continue
        if best is None or score > best_score:
            best = target
            best_score = score
    return best, best_score


def _match_strict(
    source: NormalizedRecord,
    index: MatchIndex,
    targets: Sequence[NormalizedRecord],
) -> MatchCandidate | None:
    """Try the exact and high-similarity tiers for one source record."""
    if source.normalized:
        exact = index.by_normalized.get(source.normalized)
        if exact is not None:
            return _candidate(source, exact, CONFIDENCE_HIGH, REASON_EXACT_NORMALIZED)

    if len(source.core) >= MIN_CORE_KEY_LENGTH:
        core_hit = index.by_core.get(source.core)
        if core_hit is not None:
            return _candidate(source, core_hit, CONFIDENCE_HIGH, REASON_EXACT_CORE)

    best, score = _best_fuzzy(source, targets, THRESHOLD_MEDIUM)
    if best is not None:
        return _candidate(
            source, best, CONFIDENCE_MEDIUM,
            f"high similarity ({_percent(score)}%)", score,
        )
    return None


def match(
    sources: Sequence[NormalizedRecord],
    targets: Sequence[NormalizedRecord],
) -> list[MatchCandidate]:
    """Run both matching passes; candidates come back in discovery order."""
    if not sources or not targets:
        return []

    index = build_indexes(targets)
    candidates: list[MatchCandidate] = []
    unmatched: list[NormalizedRecord] = []

    for source in sources:
        candidate = _match_strict(source, index, targets)
        if candidate is None:
            unmatched.append(source)
        else:
            candidates.append(candidate)

    logger.debug(
        "Strict pass: %d matched, %d left for partial similarity",
        len(candidates), len(unmatched),
    )

    for source in unmatched:
        best, score = _best_fuzzy(source, targets, THRESHOLD_LOW, THRESHOLD_MEDIUM)
        if best is not None:
            candidates.append(_candidate(
                source, best, CONFIDENCE_LOW,
                f"partial similarity ({_percent(score)}%)", score,
            ))

    return candidates


def rank(candidates: Iterable[MatchCandidate]) -> list[MatchCandidate]:
    """Order by confidence tier only; sorted() is stable within a tier."""
    return sorted(candidates, key=lambda c: CONFIDENCE_ORDER[c.confidence])


def propose_matches(
    set_a: Iterable[SourceRecord],
    set_b: Iterable[SourceRecord],
    config: MatcherConfig | None = None,
) -> list[MatchCandidate]:
    """Propose links from unlinked records (set A) to target records (set B).

    Parameters
    ----------
    set_a : Iterable[SourceRecord]
        Records needing a link, already filtered to those without one.
    set_b : Iterable[SourceRecord]
        Candidate targets. Iteration order decides similarity ties.
    config : MatcherConfig | None
        Suffix configuration; the built-in list when omitted.

    Returns
    -------
    list[MatchCandidate]
        At most one candidate per set A record, high tier first.
    """
    config = config or MatcherConfig()
    sources = prepare_records(set_a, config)
    targets = prepare_records(set_b, config)

    ranked = rank(match(sources, targets))

    counts = {tier: 0 for tier in CONFIDENCE_ORDER}
    for candidate in ranked:
        counts[candidate.confidence] += 1
    logger.debug(
        "Match run: %d sources, %d targets, %d candidates (high=%d medium=%d low=%d)",
        len(sources), len(targets), len(ranked),
        counts[CONFIDENCE_HIGH], counts[CONFIDENCE_MEDIUM], counts[CONFIDENCE_LOW],
    )
    return ranked
