"""Slug identity rule tests — pure tests for normalization, derivation, recompute triggers."""

from itertools import islice

import pytest

from catalog.core.domain_types import SLUG_MAX_LENGTH
from catalog.core.slug_identity import (
    conflict_name_terms,
    derive_slug_base,
    has_required_name,
    name_base,
    normalize_slug,
    slug_candidates,
    slug_needs_recompute,
)


# --- normalize_slug -----------------------------------------------------------

def test_normalizes_plain_name():
    assert normalize_slug("Caramel Macchiato") == "caramel-macchiato"


def test_strips_vietnamese_diacritics():
    assert normalize_slug("Cà Phê Sữa Đá") == "ca-phe-sua-a"
    assert normalize_slug("Trà Sen Vàng") == "tra-sen-vang"


def test_collapses_symbol_runs_and_trims_hyphens():
    assert normalize_slug("  --Hot!!  Chocolate (Large)--  ") == "hot-chocolate-large"


def test_all_symbol_input_normalizes_to_empty():
    assert normalize_slug("!!! ### ???") == ""
    assert normalize_slug("") == ""
    assert normalize_slug(None) == ""


@pytest.mark.parametrize("text", [
    "Caramel Macchiato",
    "Cà Phê Sữa Đá",
    "  ÉSPRESSO   DOPPIO ",
    "İstanbul Çay",
    "ｆｕｌｌｗｉｄｔｈ Ｌａｔｔｅ",
    "a--b__c",
    "!!!",
])
def test_normalize_is_idempotent(text):
    once = normalize_slug(text)
    assert normalize_slug(once) == once


def test_normalize_output_is_url_safe():
    slug = normalize_slug("Matcha Latte – 16oz / Iced ☕")
    assert slug == "matcha-latte-16oz-iced"


# --- derive_slug_base ---------------------------------------------------------

def test_explicit_slug_wins():
    base = derive_slug_base(
        {"en": "Latte"}, "My Custom Slug", default_locale="vi", fallback="product",
    )
    assert base == "My Custom Slug"


def test_blank_explicit_slug_is_ignored():
    base = derive_slug_base(
        {"en": "Latte"}, "   ", default_locale="vi", fallback="product",
    )
    assert base == "Latte"


def test_name_order_en_then_default_then_vi():
    name = {"vi": "Cà phê", "ko": "커피", "en": "Coffee"}
    assert name_base(name, "ko") == "Coffee"
    assert name_base({"vi": "Cà phê", "ko": "커피"}, "ko") == "커피"
    assert name_base({"vi": "Cà phê"}, "ko") == "Cà phê"


def test_fallback_token_when_no_name():
    assert derive_slug_base({}, None, default_locale="vi", fallback="product") == "product"
    assert derive_slug_base(None, None, default_locale="vi", fallback="product") == "product"


def test_required_name_needs_vi_or_en_text():
    assert has_required_name({"vi": "Trà"})
    assert has_required_name({"en": "Tea", "vi": " "})
    assert not has_required_name({"fr": "Thé", "en": ""})
    assert not has_required_name(None)


# --- slug_candidates ----------------------------------------------------------

def test_candidates_suffix_from_two():
    assert list(islice(slug_candidates("Caramel Macchiato", "product"), 4)) == [
        "caramel-macchiato",
        "caramel-macchiato-2",
        "caramel-macchiato-3",
        "caramel-macchiato-4",
    ]


def test_candidates_use_fallback_when_base_normalizes_empty():
    assert list(islice(slug_candidates("☕☕", "product"), 2)) == [
        "product", "product-2",
    ]


def test_candidates_are_distinct():
    first = list(islice(slug_candidates("x", "product"), 50))
    assert len(first) == len(set(first))


def test_candidates_cap_long_names_at_slug_limit():
    candidates = list(islice(slug_candidates("Latte " * 40, "product"), 12))
    assert all(len(slug) <= SLUG_MAX_LENGTH for slug in candidates)
    assert not candidates[0].endswith("-")
    assert all("--" not in slug for slug in candidates)
    assert candidates[11].endswith("-12")


def test_suffix_trims_full_length_root():
    root = "a" * SLUG_MAX_LENGTH
    first, second = islice(slug_candidates(root, "product"), 2)
    assert first == root
    assert second == "a" * (SLUG_MAX_LENGTH - 2) + "-2"


# --- slug_needs_recompute -----------------------------------------------------

def test_new_entity_always_recomputes():
    assert slug_needs_recompute(
        is_new=True, explicit_slug=None,
        previous_name_base="", new_name_base="Latte",
    )


def test_explicit_slug_triggers_recompute():
    assert slug_needs_recompute(
        is_new=False, explicit_slug="new-slug",
        previous_name_base="Latte", new_name_base="Latte",
    )


def test_renamed_source_name_triggers_recompute():
    assert slug_needs_recompute(
        is_new=False, explicit_slug=None,
        previous_name_base="Latte", new_name_base="Iced Latte",
    )


def test_unrelated_edit_keeps_slug():
    assert not slug_needs_recompute(
        is_new=False, explicit_slug=None,
        previous_name_base="Latte", new_name_base="Latte",
    )
    assert not slug_needs_recompute(
        is_new=False, explicit_slug="  ",
        previous_name_base="Latte", new_name_base="Latte",
    )


# --- conflict_name_terms ------------------------------------------------------

def test_conflict_terms_include_configured_default_locale():
    assert conflict_name_terms({"en": "C", "ko": "B", "fr": "X"}, "ko") == {
        "en": "C", "ko": "B",
    }
    assert conflict_name_terms({"ko": "B", "vi": "V"}, "ko") == {"ko": "B", "vi": "V"}


def test_conflict_terms_keep_vi_and_en_only():
    assert conflict_name_terms({"vi": "Trà", "en": "Tea", "fr": "Thé"}) == {
        "vi": "Trà", "en": "Tea",
    }


def test_conflict_terms_drop_blank_values():
    assert conflict_name_terms({"vi": " ", "en": "Tea"}) == {"en": "Tea"}
    assert conflict_name_terms({}) == {}
    assert conflict_name_terms(None) == {}
