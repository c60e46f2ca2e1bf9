"""Company name canonicalization.

Two steps, both pure and total over any input:
1. normalize_name: lowercase, strip diacritics, keep only [a-z0-9 ], collapse
   whitespace.
2. strip_suffixes: drop whole-word corporate/legal/descriptive tokens to get
   the "core" identity of the company.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable
from functools import lru_cache

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")

DEFAULT_CORPORATE_SUFFIXES: frozenset[str] = frozenset({
    # Brazilian legal forms and boilerplate
    "ltda", "me", "mei", "eireli", "epp", "sa", "s a",
    "comercio", "comercial", "servicos", "solucoes", "industria",
    "brasil", "br", "do brasil", "grupo", "assessoria", "consultoria",
    "tecnologia", "agencia", "estudio",
    # English legal forms and boilerplate
    "ltd", "limited", "inc", "corp", "corporation", "llc", "plc", "co",
    "company", "group", "holding", "holdings", "consulting", "consultancy",
    "technology", "technologies", "agency", "services", "solutions",
    # Shared
    "digital", "marketing", "studio", "lab", "labs",
})


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_name(raw: str | None) -> str:
    """Canonicalize a raw company name into a comparable token string.

    >>> normalize_name("  Açaí & Cia. LTDA ")
    'acai cia ltda'
    """
    if not raw:
        return ""
    decomposed = unicodedata.normalize("NFD", str(raw).lower())
    without_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _collapse(_NON_ALNUM_RE.sub("", without_marks))


@lru_cache(maxsize=32)
def _suffix_pattern(suffixes: frozenset[str]) -> re.Pattern[str] | None:
    """Compile one whole-word alternation, longest token first.

    A single pass over one alternation makes the result independent of the
    iteration order of the suffix set, including for multi-word tokens
    ('do brasil' vs 'brasil').
    """
    tokens = sorted({s for s in suffixes if s}, key=lambda s: (-len(s), s))
    if not tokens:
        return None
    return re.compile(r"\b(?:" + "|".join(re.escape(t) for t in tokens) + r")\b")


def strip_suffixes(
    normalized: str,
    suffixes: Iterable[str] = DEFAULT_CORPORATE_SUFFIXES,
) -> str:
    """Remove corporate boilerplate tokens from an already-normalized name."""
    pattern = _suffix_pattern(frozenset(suffixes))
    if pattern is None:
        return _collapse(normalized)
    return _collapse(pattern.sub("", normalized))
