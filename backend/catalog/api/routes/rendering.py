"""Response Rendering — applies locale resolution to documents on their way out.

Invariants:
    - Vary on every response rendered here includes Accept-Language (merged, never replaced)
    - Product meta fields attached whenever a product is rendered, preference or not
    - Localization mode runs only when the request expressed a preference
      (?locale= or a non-blank Accept-Language); otherwise bundles are returned intact

Design Decisions:
    - Localized field lists declared here per resource, not discovered by reflection
"""

from fastapi import Response

from catalog.core.locale_resolver import LocaleResolver, RequestLocale

PRODUCT_LOCALIZED_FIELDS = (
    "name", "shortDescription", "description", "seoTitle", "seoDescription",
)
HOME_LOCALIZED_FIELDS = ("heroTitle", "heroSubtitle", "seoTitle", "seoDescription")

VARY_HEADER = "Accept-Language"


def _mark_locale_variant(response: Response) -> None:
    """Add Accept-Language to Vary, keeping values other layers already set."""
    current = [
        value.strip() for value in response.headers.get("Vary", "").split(",")
        if value.strip()
    ]
    if VARY_HEADER.lower() not in (value.lower() for value in current):
        current.append(VARY_HEADER)
    response.headers["Vary"] = ", ".join(current)


def render_products(
    docs: list[dict],
    request_locale: RequestLocale,
    resolver: LocaleResolver,
    response: Response,
) -> list[dict]:
    _mark_locale_variant(response)
    with_meta = [
        resolver.attach_meta_fields(doc, request_locale.locale) for doc in docs
    ]
    if not request_locale.should_localize:
        return with_meta
    return resolver.localize_list(
        with_meta, request_locale.locale, PRODUCT_LOCALIZED_FIELDS,
    )


def render_product(
    doc: dict,
    request_locale: RequestLocale,
    resolver: LocaleResolver,
    response: Response,
    localize: bool = True,
) -> dict:
    """Single product; write endpoints pass localize=False to echo bundles back."""
    _mark_locale_variant(response)
    with_meta = resolver.attach_meta_fields(doc, request_locale.locale)
    if not (localize and request_locale.should_localize):
        return with_meta
    return resolver.localize_doc(
        with_meta, request_locale.locale, PRODUCT_LOCALIZED_FIELDS,
    )


def render_home(
    doc: dict,
    request_locale: RequestLocale,
    resolver: LocaleResolver,
    response: Response,
) -> dict:
    _mark_locale_variant(response)
    if not request_locale.should_localize:
        return doc
    return resolver.localize_doc(doc, request_locale.locale, HOME_LOCALIZED_FIELDS)
