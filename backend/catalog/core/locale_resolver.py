"""Locale Resolver — deterministic rendering of multi-locale content fields.

Invariants:
    - Never raises: missing data degrades to an unresolved field or a None meta field
    - detect_locale always returns a supported locale code (never None)
    - Priority chains contain no duplicates and no blank entries
    - Input documents are never mutated; every rendering returns a new dict

Design Decisions:
    - Plain dicts in, plain dicts out: ORM-to-document conversion belongs to storage
    - Defaults (default locale, supported set) passed at construction instead of
      module constants, so request handlers never read hidden global state
    - Fixed fallbacks "en" then "vi" bracket the configured default in every chain
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from catalog.core.domain_types import EN, VI, LocaleCode

I18N_SUFFIX = "_i18n"

_META_TITLE_SOURCES = ("seoTitle", "name", "title")
_META_DESCRIPTION_SOURCES = ("seoDescription", "shortDescription", "description")


def build_priority_chain(
    preferred: str | None, default_locale: str,
) -> list[str]:
    """[preferred, "en", default, "vi"] minus blanks, first occurrence wins."""
    chain: list[str] = []
    for code in (preferred, EN, default_locale, VI):
        if not isinstance(code, str) or not code.strip():
            continue
        if code not in chain:
            chain.append(code)
    return chain


def pick_localized_value(value: Any, chain: Sequence[str]) -> str | None:
    """Return the first non-blank text in `value` along `chain`.

    Already-resolved plain strings are returned unchanged.
    """
    if not value:
        return None
    if isinstance(value, str):
        return value
    if not isinstance(value, Mapping):
        return None

    for code in chain:
        text = value.get(code)
        if isinstance(text, str) and text.strip():
            return text
    return None


def _source_key(doc: Mapping[str, Any], field: str) -> str | None:
    """Locate `field` in a document, plain key first, then its _i18n bundle."""
    if field in doc:
        return field
    bundled = f"{field}{I18N_SUFFIX}"
    if bundled in doc:
        return bundled
    return None


def _first_resolved(
    doc: Mapping[str, Any], fields: Iterable[str], chain: Sequence[str],
) -> str | None:
    for field in fields:
        key = _source_key(doc, field)
        if key is None:
            continue
        text = pick_localized_value(doc[key], chain)
        if text:
            return text
    return None


@dataclass(frozen=True)
class RequestLocale:
    """Per-request locale decision handed from the HTTP shell to rendering."""
    locale: str
    should_localize: bool


class LocaleResolver:
    """Renders LocalizedString fields for one process-wide locale configuration."""

    def __init__(
        self, default_locale: str = VI, supported_locales: Iterable[str] = (VI, EN),
    ):
        self.default_locale = default_locale.strip().lower()
        self.supported_locales = tuple(
            code.strip().lower() for code in supported_locales if code and code.strip()
        )

    def detect_locale(self, header_value: str | None) -> LocaleCode:
        """Parse an Accept-Language style value into a supported locale code.

        Segments are taken in order of appearance; q-weights are ignored.
        Empty or malformed input yields the default locale.
        """
        if not isinstance(header_value, str) or not header_value.strip():
            return LocaleCode(self.default_locale)

        for segment in header_value.split(","):
            tag = segment.split(";", 1)[0].strip().lower()
            primary = tag.split("-", 1)[0].split("_", 1)[0]
            if primary in self.supported_locales:
                return LocaleCode(primary)
        return LocaleCode(self.default_locale)

    def resolve_request_locale(
        self, query_locale: str | None, accept_language: str | None,
    ) -> RequestLocale:
        """Explicit ?locale= override beats the header; blank both means no preference."""
        override = query_locale.strip().lower() if isinstance(query_locale, str) else ""
        header = accept_language.strip() if isinstance(accept_language, str) else ""
        locale = override or self.detect_locale(header)
        return RequestLocale(locale=locale, should_localize=bool(override or header))

    def build_priority_chain(self, preferred: str | None = None) -> list[str]:
        return build_priority_chain(preferred, self.default_locale)

    def pick_localized_value(self, value: Any, locale: str | None = None) -> str | None:
        return pick_localized_value(value, self.build_priority_chain(locale))

    def localize_doc(
        self, doc: Mapping[str, Any], locale: str | None, fields: Iterable[str],
    ) -> dict[str, Any]:
        """Replace each listed top-level field with its resolved string.

        A field "name" is read from "name" or, failing that, from "name_i18n";
        the result is always written to "name" and the consumed bundle dropped.
        Nested structures are left untouched.
        """
        chain = self.build_priority_chain(locale)
        out = dict(doc)
        for field in fields:
            key = _source_key(doc, field)
            if key is None:
                continue
            if key != field:
                out.pop(key)
            out[field] = pick_localized_value(doc[key], chain)
        return out

    def localize_list(
        self,
        docs: Iterable[Mapping[str, Any]],
        locale: str | None,
        fields: Iterable[str],
    ) -> list[dict[str, Any]]:
        fields = tuple(fields)
        return [self.localize_doc(doc, locale, fields) for doc in docs]

    def attach_meta_fields(
        self, doc: Mapping[str, Any], locale: str | None,
    ) -> dict[str, Any]:
        """Add plain-string metaTitle / metaDescription, leaving bundles intact."""
        chain = self.build_priority_chain(locale)
        return {
            **doc,
            "metaTitle": _first_resolved(doc, _META_TITLE_SOURCES, chain),
            "metaDescription": _first_resolved(doc, _META_DESCRIPTION_SOURCES, chain),
        }
