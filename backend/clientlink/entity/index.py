"""Exact-lookup indexes over the target record set.

Built once per matching run. Keys collide when two targets reduce to the same
normalized or core name; the last one wins. Every proposal goes through a
human reviewer, so the loss is accepted rather than kept as multi-valued
buckets.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import NamedTuple

from clientlink.entity.models import NormalizedRecord

logger = logging.getLogger(__name__)

# Shorter cores ("a", "xy") collide between unrelated companies.
MIN_CORE_KEY_LENGTH = 3


class MatchIndex(NamedTuple):
    by_normalized: dict[str, NormalizedRecord]
    by_core: dict[str, NormalizedRecord]


def build_indexes(records: Iterable[NormalizedRecord]) -> MatchIndex:
    """Index target records by normalized name and by core name."""
    by_normalized: dict[str, NormalizedRecord] = {}
    by_core: dict[str, NormalizedRecord] = {}
    collisions = 0

    for record in records:
        if record.normalized:
            if record.normalized in by_normalized:
                collisions += 1
            by_normalized[record.normalized] = record
        if len(record.core) >= MIN_CORE_KEY_LENGTH:
            by_core[record.core] = record

    if collisions:
        logger.debug("Index build: %d normalized-name collisions (last write wins)", collisions)

    return MatchIndex(by_normalized=by_normalized, by_core=by_core)
