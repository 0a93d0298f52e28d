"""Product Repository — SQLAlchemy implementation of the ProductRepository protocol.

Invariants:
    - Every returned product is a plain wire document (product_to_document)
    - exists_slug / exists_name_conflict never mutate; they exclude `exclude_id`
    - Name conflict is an OR of per-locale equality predicates within one category
    - A unique-index violation on slug at commit surfaces as SlugConflictError,
      with the session already rolled back

Design Decisions:
    - JSON path extraction (name_i18n -> 'en') works on PostgreSQL and SQLite alike
    - Commit per write: the service writes one product per request
    - Text search is a case-insensitive substring match over localized name and
      description fields and tags
"""

import logging
from typing import Any, Mapping

from sqlalchemy import String, and_, cast, exists, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.domain_types import EN, VI, ProductId, ProductSort
from catalog.core.errors import SlugConflictError, StorageError
from catalog.core.repository_protocols import ProductListQuery, ProductPage
from catalog.infrastructure.database import storage_errors
from catalog.models.product import Product

logger = logging.getLogger(__name__)

FEATURED_FLAGS = {
    "best_seller": (Product.is_best_seller, Product.best_seller_order),
    "signature_lineup": (Product.is_signature_lineup, Product.signature_order),
}

_SEARCH_BUNDLES = (
    Product.name_i18n, Product.short_description_i18n, Product.description_i18n,
)


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def product_to_document(product: Product) -> dict[str, Any]:
    """Flatten an ORM row into the wire document the core renders."""
    image = None
    if product.image_url or product.image_alt_i18n:
        image = {"url": product.image_url, "alt_i18n": product.image_alt_i18n}
    return {
        "id": str(product.id),
        "name_i18n": product.name_i18n,
        "shortDescription_i18n": product.short_description_i18n,
        "description_i18n": product.description_i18n,
        "slug": product.slug,
        "slug_i18n": product.slug_i18n,
        "seoTitle_i18n": product.seo_title_i18n,
        "seoDescription_i18n": product.seo_description_i18n,
        "category": product.category,
        "tags": list(product.tags or []),
        "price": product.price,
        "temperatureOptions": list(product.temperature_options or []),
        "image": image,
        "isBestSeller": product.is_best_seller,
        "bestSellerOrder": product.best_seller_order,
        "bestSellerStats": list(product.best_seller_stats or []),
        "isSignatureLineup": product.is_signature_lineup,
        "signatureOrder": product.signature_order,
        "isPublished": product.is_published,
        "createdAt": _iso(product.created_at),
        "updatedAt": _iso(product.updated_at),
    }


def _sort_columns(sort: ProductSort | None, query: ProductListQuery) -> list:
    if sort is None:
        if query.is_best_seller:
            return [Product.best_seller_order.asc(), Product.created_at.desc()]
        if query.is_signature_lineup:
            return [Product.signature_order.asc(), Product.created_at.desc()]
        return [Product.created_at.desc()]

    column = {
        "name": func.coalesce(
            Product.name_i18n[EN].as_string(), Product.name_i18n[VI].as_string(),
        ),
        "createdAt": Product.created_at,
        "bestSellerOrder": Product.best_seller_order,
        "signatureOrder": Product.signature_order,
    }[sort.field]
    return [column.desc() if sort.descending else column.asc()]


class SqlProductRepository:
    """Product persistence over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    # ─── Identity probes ────────────────────────────────────────

    async def exists_slug(
        self, slug: str, exclude_id: ProductId | None = None,
    ) -> bool:
        condition = Product.slug == slug
        if exclude_id is not None:
            condition = and_(condition, Product.id != exclude_id)
        async with storage_errors("exists_slug"):
            return bool(await self._db.scalar(select(exists().where(condition))))

    async def exists_name_conflict(
        self,
        category: str,
        name: Mapping[str, str],
        exclude_id: ProductId | None = None,
    ) -> bool:
        per_locale = [
            Product.name_i18n[code].as_string() == text
            for code, text in name.items()
        ]
        if not per_locale:
            return False
        condition = and_(Product.category == category, or_(*per_locale))
        if exclude_id is not None:
            condition = and_(condition, Product.id != exclude_id)
        async with storage_errors("exists_name_conflict"):
            return bool(await self._db.scalar(select(exists().where(condition))))

    # ─── Reads ──────────────────────────────────────────────────

    async def _get_row(self, product_id: ProductId) -> Product | None:
        async with storage_errors("get"):
            return await self._db.get(Product, product_id)

    async def get_by_id(self, product_id: ProductId) -> dict | None:
        product = await self._get_row(product_id)
        return product_to_document(product) if product else None

    async def get_by_slug(
        self, slug: str, published_only: bool = True,
    ) -> dict | None:
        query = select(Product).where(Product.slug == slug)
        if published_only:
            query = query.where(Product.is_published.is_(True))
        async with storage_errors("get_by_slug"):
            product = (await self._db.execute(query)).scalar_one_or_none()
        return product_to_document(product) if product else None

    async def list_products(self, query: ProductListQuery) -> ProductPage:
        conditions = []
        if query.published is not None:
            conditions.append(Product.is_published.is_(query.published))
        if query.category:
            conditions.append(Product.category == query.category)
        if query.is_best_seller is not None:
            conditions.append(Product.is_best_seller.is_(query.is_best_seller))
        if query.is_signature_lineup is not None:
            conditions.append(
                Product.is_signature_lineup.is_(query.is_signature_lineup),
            )
        if query.q and query.q.strip():
            pattern = f"%{query.q.strip()}%"
            terms = [
                bundle[code].as_string().ilike(pattern)
                for bundle in _SEARCH_BUNDLES
                for code in (VI, EN)
            ]
            terms.append(cast(Product.tags, String).ilike(pattern))
            conditions.append(or_(*terms))

        page = max(query.page, 1)
        limit = max(query.limit, 1)
        items_query = (
            select(Product)
            .where(*conditions)
            .order_by(*_sort_columns(query.sort, query))
            .offset((page - 1) * limit)
            .limit(limit)
        )
        total_query = select(func.count()).select_from(Product).where(*conditions)

        async with storage_errors("list"):
            rows = (await self._db.execute(items_query)).scalars().all()
            total = await self._db.scalar(total_query)
        return ProductPage(
            items=[product_to_document(p) for p in rows],
            total=total or 0, page=page, limit=limit,
        )

    async def list_featured(
        self, flag: str, limit: int, category: str | None = None,
    ) -> list[dict]:
        flag_column, order_column = FEATURED_FLAGS[flag]
        query = select(Product).where(
            Product.is_published.is_(True), flag_column.is_(True),
        )
        if category:
            query = query.where(Product.category == category)
        query = query.order_by(
            order_column.asc(), Product.created_at.desc(),
        ).limit(limit)
        async with storage_errors("list_featured"):
            rows = (await self._db.execute(query)).scalars().all()
        return [product_to_document(p) for p in rows]

    async def summaries_by_ids(self, product_ids: list[ProductId]) -> dict[str, dict]:
        """Slim product documents keyed by id string (home hero slides)."""
        if not product_ids:
            return {}
        async with storage_errors("summaries_by_ids"):
            rows = (await self._db.execute(
                select(Product).where(Product.id.in_(product_ids)),
            )).scalars().all()
        summaries = {}
        for product in rows:
            doc = product_to_document(product)
            summaries[doc["id"]] = {
                key: doc[key] for key in (
                    "id", "name_i18n", "slug", "image",
                    "isBestSeller", "isSignatureLineup", "category",
                )
            }
        return summaries

    # ─── Writes ─────────────────────────────────────────────────

    async def add(self, fields: dict) -> dict:
        product = Product(**fields)
        self._db.add(product)
        await self._commit(product.slug)
        return product_to_document(product)

    async def save(self, product_id: ProductId, fields: dict) -> dict:
        product = await self._get_row(product_id)
        if product is None:
            raise StorageError(f"product {product_id} vanished", "save")
        for key, value in fields.items():
            setattr(product, key, value)
        await self._commit(product.slug)
        return product_to_document(product)

    async def delete(self, product_id: ProductId) -> bool:
        product = await self._get_row(product_id)
        if product is None:
            return False
        async with storage_errors("delete"):
            await self._db.delete(product)
            await self._db.commit()
        return True

    async def _commit(self, slug: str) -> None:
        try:
            async with storage_errors("commit"):
                await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            if "slug" in str(e.orig).lower():
                logger.warning(
                    f"Slug '{slug}' taken by a concurrent write",
                    extra={"slug": slug, "error_code": "STORAGE_ERROR"},
                )
                raise SlugConflictError(slug) from e
            logger.error(f"DB integrity error: {e}")
            raise StorageError("Integrity constraint violated", "commit") from e
