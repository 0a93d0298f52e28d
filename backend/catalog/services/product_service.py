"""Product Service — the create/update write path and product reads.

Invariants:
    - Write order: name uniqueness (may reject) -> slug assignment (never rejects) -> save
    - DuplicateNameError raised before any mutation
    - A write that would leave no vi/en name fails with CatalogValidationError before any IO
    - Slug left untouched on update unless the explicit slug or its source name changed
    - A slug lost to a concurrent writer (SlugConflictError) is retried exactly once,
      re-running the whole assign-and-persist sequence; a second loss propagates
    - Storage failures propagate unchanged

Design Decisions:
    - Shape validation happens in Pydantic schemas before this layer is reached;
      the vi/en name rule the slug and conflict checks depend on is re-checked here
    - Update re-reads the stored product on retry: the failed commit rolled the session back
"""

import logging
from typing import Any, Awaitable, Callable, TypeVar

from catalog.core.domain_types import DEFAULT_CATEGORY, ProductId
from catalog.core.errors import (
    CatalogValidationError, ResourceNotFoundError, SlugConflictError,
)
from catalog.core.repository_protocols import (
    ProductListQuery, ProductPage, ProductRepository,
)
from catalog.core.slug_identity import (
    has_required_name, name_base, slug_needs_recompute,
)
from catalog.services.slug_identity_engine import SlugIdentityEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")

SLUG_RACE_RETRIES = 1
DEFAULT_FEATURED_LIMIT = 6
NAME_REQUIRED_MESSAGE = "At least one localized name (vi/en) is required"


def _require_name(name: Any) -> None:
    if not has_required_name(name):
        raise CatalogValidationError(NAME_REQUIRED_MESSAGE, "name_i18n")


class ProductService:
    """Orchestrates product writes around the SlugIdentityEngine."""

    def __init__(self, repo: ProductRepository, engine: SlugIdentityEngine):
        self._repo = repo
        self._engine = engine

    async def _with_slug_retry(self, write: Callable[[], Awaitable[T]]) -> T:
        attempt = 0
        while True:
            try:
                return await write()
            except SlugConflictError as e:
                if attempt >= SLUG_RACE_RETRIES:
                    raise
                attempt += 1
                logger.warning(
                    f"Retrying write after losing slug '{e.slug}' to a concurrent writer",
                    extra={"slug": e.slug, "attempt": attempt},
                )

    # ─── Writes ─────────────────────────────────────────────────

    async def create(self, fields: dict[str, Any]) -> dict:
        """Create a product; returns the stored document with its assigned slug."""
        _require_name(fields.get("name_i18n"))
        fields = dict(fields)
        fields["category"] = fields.get("category") or DEFAULT_CATEGORY.value
        explicit_slug = fields.pop("slug", None)

        await self._engine.enforce_name_uniqueness(
            fields["category"], fields.get("name_i18n"),
        )

        async def _write() -> dict:
            slug = await self._engine.assign_unique_slug(
                fields.get("name_i18n"), explicit_slug,
            )
            return await self._repo.add({**fields, "slug": slug})

        doc = await self._with_slug_retry(_write)
        logger.info(
            f"Product created with slug '{doc['slug']}'",
            extra={"product_id": doc["id"], "slug": doc["slug"]},
        )
        return doc

    async def update(self, product_id: ProductId, fields: dict[str, Any]) -> dict:
        """Apply a partial update; NOT_FOUND if the product does not exist."""
        if "name_i18n" in fields:
            _require_name(fields["name_i18n"])
        fields = dict(fields)
        explicit_slug = fields.pop("slug", None)

        current = await self._repo.get_by_id(product_id)
        if current is None:
            raise ResourceNotFoundError("Product", str(product_id))

        await self._engine.enforce_name_uniqueness(
            fields.get("category") or current["category"],
            fields.get("name_i18n") or current["name_i18n"],
            exclude_id=product_id,
        )

        async def _write() -> dict:
            stored = await self._repo.get_by_id(product_id)
            if stored is None:
                raise ResourceNotFoundError("Product", str(product_id))
            new_name = fields.get("name_i18n") or stored["name_i18n"]
            changes = dict(fields)
            if slug_needs_recompute(
                is_new=False,
                explicit_slug=explicit_slug,
                previous_name_base=name_base(
                    stored["name_i18n"], self._engine.default_locale,
                ),
                new_name_base=name_base(new_name, self._engine.default_locale),
            ):
                changes["slug"] = await self._engine.assign_unique_slug(
                    new_name, explicit_slug, exclude_id=product_id,
                )
            return await self._repo.save(product_id, changes)

        doc = await self._with_slug_retry(_write)
        logger.info(
            "Product updated",
            extra={"product_id": doc["id"], "slug": doc["slug"]},
        )
        return doc

    async def delete(self, product_id: ProductId) -> bool:
        deleted = await self._repo.delete(product_id)
        if deleted:
            logger.info("Product deleted", extra={"product_id": str(product_id)})
        return deleted

    # ─── Reads ──────────────────────────────────────────────────

    async def get_by_id(self, product_id: ProductId) -> dict:
        doc = await self._repo.get_by_id(product_id)
        if doc is None:
            raise ResourceNotFoundError("Product", str(product_id))
        return doc

    async def get_by_slug(self, slug: str) -> dict:
        """Published product by slug."""
        doc = await self._repo.get_by_slug(slug, published_only=True)
        if doc is None:
            raise ResourceNotFoundError("Product", slug)
        return doc

    async def list_products(self, query: ProductListQuery) -> ProductPage:
        return await self._repo.list_products(query)

    async def list_best_sellers(
        self, limit: int = DEFAULT_FEATURED_LIMIT, category: str | None = None,
    ) -> list[dict]:
        return await self._repo.list_featured("best_seller", limit, category)

    async def list_signature_lineup(
        self, limit: int = DEFAULT_FEATURED_LIMIT, category: str | None = None,
    ) -> list[dict]:
        return await self._repo.list_featured("signature_lineup", limit, category)
