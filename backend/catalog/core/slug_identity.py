"""Slug Identity Rules — pure derivation of URL-safe product identifiers.

Invariants:
    - normalize_slug is total and idempotent; output matches ^[a-z0-9]+(-[a-z0-9]+)*$ or is ""
    - slug_candidates yields textually distinct candidates in trial order: base, base-2, base-3, ...
    - Every candidate fits SLUG_MAX_LENGTH; the root is cut before the suffix is added
    - A name conflict needs only one matching locale (OR across en, default, vi; not bundle equality)

Design Decisions:
    - Rules live here, IO lives in services/slug_identity_engine.py: the engine
      awaits the storage probe for each candidate this module proposes
    - Only U+0300–U+036F combining marks are stripped; letters without a
      decomposition (e.g. "đ") become separators rather than being transliterated
"""

import re
import unicodedata
from itertools import count
from typing import Iterator, Mapping

from catalog.core.domain_types import EN, SLUG_MAX_LENGTH, VI

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def normalize_slug(text: str | None) -> str:
    """Fold text to lowercase ASCII words joined by single hyphens."""
    folded = unicodedata.normalize("NFKD", str(text or ""))
    folded = _COMBINING_MARKS.sub("", folded).lower().strip()
    return _NON_SLUG_RUN.sub("-", folded).strip("-")


def _blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


def has_required_name(name: Mapping[str, str] | None) -> bool:
    """True when the bundle carries non-blank Vietnamese or English text."""
    return bool(name) and any(not _blank(name.get(code)) for code in (VI, EN))


def name_base(name: Mapping[str, str] | None, default_locale: str) -> str:
    """English name, then default-locale name, then Vietnamese name, else ""."""
    if not name:
        return ""
    for code in (EN, default_locale, VI):
        text = name.get(code)
        if not _blank(text):
            return text
    return ""


def derive_slug_base(
    name: Mapping[str, str] | None,
    explicit_slug: str | None,
    *,
    default_locale: str,
    fallback: str,
) -> str:
    """Raw (un-normalized) text the slug is derived from."""
    if not _blank(explicit_slug):
        return explicit_slug
    return name_base(name, default_locale) or fallback


def _fit(root: str, suffix: str = "") -> str:
    return root[:SLUG_MAX_LENGTH - len(suffix)].rstrip("-") + suffix


def slug_candidates(base: str, fallback: str) -> Iterator[str]:
    """Yield normalize(base), then -2, -3, ... suffixed variants, forever.

    Long roots are cut so that root plus suffix stays within SLUG_MAX_LENGTH.
    """
    root = normalize_slug(base) or normalize_slug(fallback) or fallback
    yield _fit(root)
    for n in count(2):
        yield _fit(root, f"-{n}")


def slug_needs_recompute(
    *,
    is_new: bool,
    explicit_slug: str | None,
    previous_name_base: str,
    new_name_base: str,
) -> bool:
    """Only new entities, explicit slug edits, or renames of the source name move the slug."""
    if is_new:
        return True
    if not _blank(explicit_slug):
        return True
    return bool(new_name_base) and new_name_base != previous_name_base


def conflict_name_terms(
    name: Mapping[str, str] | None, default_locale: str = VI,
) -> dict[str, str]:
    """Per-locale names (en, default locale, vi) that participate in the
    (category, name) invariant."""
    if not name:
        return {}
    terms: dict[str, str] = {}
    for code in (EN, default_locale, VI):
        if code not in terms and not _blank(name.get(code)):
            terms[code] = name[code]
    return terms
