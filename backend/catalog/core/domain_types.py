"""Domain Types — rich types that replace bare primitives across the catalog.

Invariants:
    - ProductId wraps UUID — never use bare UUID in domain logic
    - LocalizedString is a plain mapping locale code -> text (open key set)
    - All closed value sets encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ProductId = NewType("ProductId", UUID)
LocaleCode = NewType("LocaleCode", str)


# ─── Value Types ─────────────────────────────────────────────────

LocalizedString = dict[str, str]

EN: LocaleCode = LocaleCode("en")
VI: LocaleCode = LocaleCode("vi")

HOME_PAGE_KEY = "home"

SLUG_MAX_LENGTH = 160


# ─── Enums ───────────────────────────────────────────────────────

class ProductCategory(str, Enum):
    """Menu categories — partition key for the product name invariant."""
    COFFEE = "coffee"
    TEA = "tea"
    CAKE = "cake"
    OTHER_DRINKS = "other drinks"
    ESPRESSO = "espresso"
    COLD_BREW = "cold brew"
    CHOCOLATE = "chocolate"
    GREEN_TEAS = "green teas"
    OTHER_TEAS = "other teas"
    MATCHA = "matcha"


DEFAULT_CATEGORY = ProductCategory.COFFEE


class TemperatureOption(str, Enum):
    HOT = "hot"
    ICED = "iced"
    BOTH = "both"
    WARM = "warm"


class ProductSort(str, Enum):
    """Sortable product columns. A leading '-' means descending."""
    NAME = "name"
    NAME_DESC = "-name"
    CREATED_AT = "createdAt"
    CREATED_AT_DESC = "-createdAt"
    BEST_SELLER_ORDER = "bestSellerOrder"
    BEST_SELLER_ORDER_DESC = "-bestSellerOrder"
    SIGNATURE_ORDER = "signatureOrder"
    SIGNATURE_ORDER_DESC = "-signatureOrder"

    @property
    def field(self) -> str:
        return self.value.lstrip("-")

    @property
    def descending(self) -> bool:
        return self.value.startswith("-")
