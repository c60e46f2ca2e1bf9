"""Data security utilities for client data.

Client names and tax identifiers are business-confidential. These utilities
enforce restrictive file/directory permissions on the link store and build
log lines that carry counts and timing only, never names.
"""

import os
from pathlib import Path


def secure_directory(path: Path, mode: int = 0o700) -> None:
    """Create directory with restrictive permissions. Creates parent dirs if needed."""
    path.mkdir(parents=True, exist_ok=True)
    os.chmod(path, mode)


def secure_file(path: Path, mode: int = 0o600) -> None:
    """Set restrictive permissions on a file."""
    if path.exists():
        os.chmod(path, mode)


def sanitize_match_log(
    source_count: int,
    target_count: int,
    tier_counts: dict[str, int],
    duration_ms: float,
) -> str:
    """Create a sanitized log entry for a match run.

    Logs set sizes, per-tier candidate counts and timing but NOT the
    company names or identifiers involved.
    """
    tiers = " ".join(f"{tier}={count}" for tier, count in tier_counts.items())
    return f"[match] {source_count}x{target_count} {tiers} {duration_ms:.1f}ms"
