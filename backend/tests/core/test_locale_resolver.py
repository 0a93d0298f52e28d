"""Locale resolver tests — pure tests for chains, picking, and document rendering.

Tests cover:
    - Priority chain precedence, de-duplication, blank removal
    - pick_localized_value fall-through and verbatim return
    - detect_locale header parsing (case, whitespace, q-weights, fallback)
    - localize_doc / localize_list field replacement without mutation
    - attach_meta_fields precedence
    - resolve_request_locale override and should_localize
"""

from catalog.core.locale_resolver import (
    LocaleResolver, build_priority_chain, pick_localized_value,
)


resolver = LocaleResolver(default_locale="vi", supported_locales=("vi", "en"))


# --- Priority chain -----------------------------------------------------------

def test_chain_precedence_requested_en_default_vi():
    assert build_priority_chain("fr", "ja") == ["fr", "en", "ja", "vi"]


def test_chain_deduplicates_preserving_first_occurrence():
    assert build_priority_chain("fr", "en") == ["fr", "en", "vi"]


def test_chain_drops_blank_entries():
    assert build_priority_chain("   ", "vi") == ["en", "vi"]
    assert build_priority_chain(None, "") == ["en", "vi"]


def test_chain_never_duplicates_or_blanks():
    for preferred in (None, "", " ", "en", "vi", "fr"):
        for default in ("", "en", "vi", "de"):
            chain = build_priority_chain(preferred, default)
            assert len(chain) == len(set(chain))
            assert all(code.strip() for code in chain)


def test_resolver_chain_uses_configured_default():
    assert resolver.build_priority_chain() == ["en", "vi"]
    assert LocaleResolver("ko", ("ko", "en")).build_priority_chain("fr") == [
        "fr", "en", "ko", "vi",
    ]


# --- pick_localized_value -----------------------------------------------------

def test_pick_falls_through_to_vi():
    assert pick_localized_value({"vi": "Cà phê"}, ["en", "vi"]) == "Cà phê"


def test_pick_prefers_earlier_chain_entry():
    bundle = {"vi": "Trà", "en": "Tea"}
    assert pick_localized_value(bundle, ["vi", "en"]) == "Trà"
    assert pick_localized_value(bundle, ["en", "vi"]) == "Tea"


def test_pick_skips_whitespace_only_values():
    assert pick_localized_value({"en": "   ", "vi": "Bánh"}, ["en", "vi"]) == "Bánh"


def test_pick_returns_value_verbatim():
    assert pick_localized_value({"en": "  Latte "}, ["en"]) == "  Latte "


def test_pick_returns_plain_string_unchanged():
    assert pick_localized_value("Already resolved", ["en"]) == "Already resolved"


def test_pick_returns_none_for_empty_or_missing():
    assert pick_localized_value({}, ["en", "vi"]) is None
    assert pick_localized_value(None, ["en", "vi"]) is None
    assert pick_localized_value({"fr": "Café"}, ["en", "vi"]) is None


def test_pick_result_always_comes_from_chain_key():
    bundle = {"fr": "Café", "vi": "Cà phê", "en": ""}
    chain = ["en", "vi"]
    result = pick_localized_value(bundle, chain)
    assert result in [bundle[code] for code in chain if code in bundle]


# --- detect_locale ------------------------------------------------------------

def test_detect_first_supported_segment():
    assert resolver.detect_locale("en-US,en;q=0.9,vi;q=0.8") == "en"
    assert resolver.detect_locale("vi-VN,vi;q=0.9,en;q=0.8") == "vi"


def test_detect_skips_unsupported_segments():
    assert resolver.detect_locale("fr-FR, de;q=0.7, en;q=0.5") == "en"


def test_detect_tolerates_case_and_whitespace():
    assert resolver.detect_locale("  EN-gb ") == "en"


def test_detect_empty_or_malformed_returns_default():
    assert resolver.detect_locale("") == "vi"
    assert resolver.detect_locale(None) == "vi"
    assert resolver.detect_locale(";;;,,") == "vi"
    assert resolver.detect_locale("fr, de") == "vi"


# --- localize_doc / localize_list ---------------------------------------------

PRODUCT_FIELDS = ("name", "shortDescription", "description", "seoTitle", "seoDescription")


def _product_doc():
    return {
        "id": "p1",
        "slug": "caramel-macchiato",
        "name_i18n": {"en": "Caramel Macchiato", "vi": "Caramel Macchiato VN"},
        "description_i18n": {"vi": "Ngọt ngào"},
        "image": {"url": "/x.png", "alt_i18n": {"en": "alt"}},
        "price": 55000,
    }


def test_localize_doc_replaces_bundles_with_strings():
    doc = resolver.localize_doc(_product_doc(), "en", PRODUCT_FIELDS)
    assert doc["name"] == "Caramel Macchiato"
    assert doc["description"] == "Ngọt ngào"
    assert "name_i18n" not in doc
    assert "description_i18n" not in doc


def test_localize_doc_passes_other_fields_through():
    doc = resolver.localize_doc(_product_doc(), "en", PRODUCT_FIELDS)
    assert doc["slug"] == "caramel-macchiato"
    assert doc["price"] == 55000
    assert "shortDescription" not in doc
    # nested bundles are not recursed into
    assert doc["image"] == {"url": "/x.png", "alt_i18n": {"en": "alt"}}


def test_localize_doc_handles_plain_field_names():
    doc = resolver.localize_doc(
        {"title": {"vi": "Xin chào", "en": "Hello"}}, "vi", ["title"],
    )
    assert doc == {"title": "Xin chào"}


def test_localize_doc_does_not_mutate_input():
    original = _product_doc()
    resolver.localize_doc(original, "en", PRODUCT_FIELDS)
    assert original == _product_doc()


def test_localize_doc_fully_absent_bundle_yields_none():
    doc = resolver.localize_doc({"name_i18n": {}}, "en", ["name"])
    assert doc == {"name": None}


def test_localize_list_preserves_order():
    docs = [{"name_i18n": {"en": "A"}}, {"name_i18n": {"en": "B"}}]
    out = resolver.localize_list(docs, "en", ["name"])
    assert [d["name"] for d in out] == ["A", "B"]


def test_localize_list_empty_input():
    assert resolver.localize_list([], "en", ["name"]) == []


# --- attach_meta_fields -------------------------------------------------------

def test_meta_prefers_seo_fields():
    doc = {
        "name_i18n": {"en": "Latte"},
        "seoTitle_i18n": {"en": "Best Latte in Town"},
        "seoDescription_i18n": {"en": "Creamy."},
        "description_i18n": {"en": "Long description"},
    }
    out = resolver.attach_meta_fields(doc, "en")
    assert out["metaTitle"] == "Best Latte in Town"
    assert out["metaDescription"] == "Creamy."


def test_meta_falls_back_to_name_and_short_description():
    doc = {
        "name_i18n": {"vi": "Cà phê sữa"},
        "seoTitle_i18n": {"en": "  "},
        "shortDescription_i18n": {"vi": "Đậm đà"},
        "description_i18n": {"vi": "Dài"},
    }
    out = resolver.attach_meta_fields(doc, "en")
    assert out["metaTitle"] == "Cà phê sữa"
    assert out["metaDescription"] == "Đậm đà"


def test_meta_uses_title_when_no_name():
    out = resolver.attach_meta_fields({"title_i18n": {"en": "Story"}}, "en")
    assert out["metaTitle"] == "Story"


def test_meta_absent_when_nothing_resolves():
    out = resolver.attach_meta_fields({"price": 1}, "en")
    assert out["metaTitle"] is None
    assert out["metaDescription"] is None


def test_meta_keeps_bundles_intact():
    doc = {"name_i18n": {"en": "Latte", "vi": "La-tê"}}
    out = resolver.attach_meta_fields(doc, "vi")
    assert out["name_i18n"] == {"en": "Latte", "vi": "La-tê"}
    assert out["metaTitle"] == "La-tê"


# --- resolve_request_locale ---------------------------------------------------

def test_query_override_beats_header():
    decision = resolver.resolve_request_locale("EN ", "vi-VN")
    assert decision.locale == "en"
    assert decision.should_localize is True


def test_header_only_localizes():
    decision = resolver.resolve_request_locale(None, "en-US,en;q=0.9")
    assert decision.locale == "en"
    assert decision.should_localize is True


def test_no_preference_uses_default_and_skips_localization():
    decision = resolver.resolve_request_locale(None, "")
    assert decision.locale == "vi"
    assert decision.should_localize is False


def test_no_preference_still_attaches_meta_with_default_chain():
    decision = resolver.resolve_request_locale(None, "   ")
    doc = {"name_i18n": {"vi": "Cà phê", "en": "Coffee"}}
    out = resolver.attach_meta_fields(doc, decision.locale)
    assert out["metaTitle"] == "Cà phê"
