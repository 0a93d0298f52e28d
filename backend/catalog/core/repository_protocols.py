"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Documents returned are plain dicts with wire (camelCase) keys; `fields`
      passed in are keyed by snake_case attribute names

Design Decisions:
    - Protocol over ABC: structural subtyping, an in-memory fake satisfies it in tests
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that feed these protocols are never async themselves
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

from catalog.core.domain_types import ProductId, ProductSort


class SlugExistenceCheck(Protocol):
    """Answers whether a slug is held by any product other than `exclude_id`."""
    async def exists_slug(
        self, slug: str, exclude_id: ProductId | None = None,
    ) -> bool: ...


class NameConflictCheck(Protocol):
    """Answers whether another product in `category` shares any locale of `name`."""
    async def exists_name_conflict(
        self,
        category: str,
        name: Mapping[str, str],
        exclude_id: ProductId | None = None,
    ) -> bool: ...


@dataclass
class ProductListQuery:
    page: int = 1
    limit: int = 20
    q: str | None = None
    category: str | None = None
    published: bool | None = None
    is_best_seller: bool | None = None
    is_signature_lineup: bool | None = None
    sort: ProductSort | None = None


@dataclass
class ProductPage:
    items: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": self.items, "total": self.total,
            "page": self.page, "limit": self.limit,
        }


class ProductRepository(SlugExistenceCheck, NameConflictCheck, Protocol):
    """Contract for product persistence — implemented by shell."""
    async def get_by_id(self, product_id: ProductId) -> dict | None: ...
    async def get_by_slug(
        self, slug: str, published_only: bool = True,
    ) -> dict | None: ...
    async def add(self, fields: dict) -> dict: ...
    async def save(self, product_id: ProductId, fields: dict) -> dict: ...
    async def delete(self, product_id: ProductId) -> bool: ...
    async def list_products(self, query: ProductListQuery) -> ProductPage: ...
    async def list_featured(
        self, flag: str, limit: int, category: str | None = None,
    ) -> list[dict]: ...


class HomeContentRepository(Protocol):
    """Contract for the singleton home page document — implemented by shell."""
    async def get_home(self, populate_products: bool = True) -> dict | None: ...
    async def upsert_home(self, fields: dict) -> dict: ...
    async def delete_home(self) -> bool: ...
