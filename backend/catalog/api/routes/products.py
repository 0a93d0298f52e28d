"""Product Routes — catalog CRUD, public feeds, and slug lookup.

Invariants:
    - Public listing defaults to published products; ?published=all lifts the filter
    - Admin listing defaults to every product
    - Fixed paths (/admin, /best-sellers, /signature-lineup) registered before /{slug}
    - DUPLICATE_NAME → 409, NOT_FOUND → 404 via global CatalogError handler
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from catalog.api.dependencies import (
    get_locale_resolver, get_product_service, get_request_locale,
)
from catalog.api.routes.rendering import render_product, render_products
from catalog.core.domain_types import ProductCategory, ProductId, ProductSort
from catalog.core.locale_resolver import LocaleResolver, RequestLocale
from catalog.core.repository_protocols import ProductListQuery
from catalog.schemas.product import ProductCreate, ProductUpdate
from catalog.services.product_service import DEFAULT_FEATURED_LIMIT, ProductService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/products", tags=["products"])


def _published_flag(raw: str | None, default: bool | None) -> bool | None:
    if raw == "true":
        return True
    if raw == "false":
        return False
    if raw == "all":
        return None
    return default


async def _list(
    service: ProductService,
    response: Response,
    request_locale: RequestLocale,
    resolver: LocaleResolver,
    *,
    page: int,
    limit: int,
    q: str | None,
    category: ProductCategory | None,
    published: bool | None,
    is_best_seller: bool | None,
    is_signature_lineup: bool | None,
    sort: ProductSort,
) -> dict:
    result = await service.list_products(ProductListQuery(
        page=page,
        limit=limit,
        q=q,
        category=category.value if category else None,
        published=published,
        is_best_seller=is_best_seller,
        is_signature_lineup=is_signature_lineup,
        sort=sort,
    ))
    body = result.to_dict()
    body["items"] = render_products(
        result.items, request_locale, resolver, response,
    )
    return body


@router.get("")
async def list_products(
    response: Response,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    q: str | None = Query(None, max_length=200),
    category: ProductCategory | None = None,
    published: str | None = Query(None, pattern="^(true|false|all)$"),
    is_best_seller: bool | None = Query(None, alias="isBestSeller"),
    is_signature_lineup: bool | None = Query(None, alias="isSignatureLineup"),
    sort: ProductSort = ProductSort.CREATED_AT_DESC,
    service: ProductService = Depends(get_product_service),
    request_locale: RequestLocale = Depends(get_request_locale),
    resolver: LocaleResolver = Depends(get_locale_resolver),
):
    """Public product listing."""
    return await _list(
        service, response, request_locale, resolver,
        page=page, limit=limit, q=q, category=category,
        published=_published_flag(published, default=True),
        is_best_seller=is_best_seller,
        is_signature_lineup=is_signature_lineup,
        sort=sort,
    )


@router.get("/admin")
async def list_products_admin(
    response: Response,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    q: str | None = Query(None, max_length=200),
    category: ProductCategory | None = None,
    published: str | None = Query(None, pattern="^(true|false|all)$"),
    is_best_seller: bool | None = Query(None, alias="isBestSeller"),
    is_signature_lineup: bool | None = Query(None, alias="isSignatureLineup"),
    sort: ProductSort = ProductSort.CREATED_AT_DESC,
    service: ProductService = Depends(get_product_service),
    request_locale: RequestLocale = Depends(get_request_locale),
    resolver: LocaleResolver = Depends(get_locale_resolver),
):
    """Back-office listing — unpublished products included unless filtered."""
    return await _list(
        service, response, request_locale, resolver,
        page=page, limit=limit, q=q, category=category,
        published=_published_flag(published, default=None),
        is_best_seller=is_best_seller,
        is_signature_lineup=is_signature_lineup,
        sort=sort,
    )


@router.get("/best-sellers")
async def list_best_sellers(
    response: Response,
    limit: int = Query(DEFAULT_FEATURED_LIMIT, ge=1, le=50),
    category: ProductCategory | None = None,
    service: ProductService = Depends(get_product_service),
    request_locale: RequestLocale = Depends(get_request_locale),
    resolver: LocaleResolver = Depends(get_locale_resolver),
):
    items = await service.list_best_sellers(
        limit, category.value if category else None,
    )
    return {"items": render_products(items, request_locale, resolver, response)}


@router.get("/signature-lineup")
async def list_signature_lineup(
    response: Response,
    limit: int = Query(DEFAULT_FEATURED_LIMIT, ge=1, le=50),
    category: ProductCategory | None = None,
    service: ProductService = Depends(get_product_service),
    request_locale: RequestLocale = Depends(get_request_locale),
    resolver: LocaleResolver = Depends(get_locale_resolver),
):
    items = await service.list_signature_lineup(
        limit, category.value if category else None,
    )
    return {"items": render_products(items, request_locale, resolver, response)}


@router.get("/{slug}")
async def get_product_by_slug(
    slug: str,
    response: Response,
    service: ProductService = Depends(get_product_service),
    request_locale: RequestLocale = Depends(get_request_locale),
    resolver: LocaleResolver = Depends(get_locale_resolver),
):
    """Published product by slug."""
    doc = await service.get_by_slug(slug)
    return render_product(doc, request_locale, resolver, response)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductCreate,
    response: Response,
    service: ProductService = Depends(get_product_service),
    request_locale: RequestLocale = Depends(get_request_locale),
    resolver: LocaleResolver = Depends(get_locale_resolver),
):
    """Create a product; the slug is derived and de-duplicated server-side."""
    doc = await service.create(body.to_fields())
    return render_product(
        doc, request_locale, resolver, response, localize=False,
    )


@router.put("/{product_id}")
async def update_product(
    product_id: UUID,
    body: ProductUpdate,
    response: Response,
    service: ProductService = Depends(get_product_service),
    request_locale: RequestLocale = Depends(get_request_locale),
    resolver: LocaleResolver = Depends(get_locale_resolver),
):
    """Partial update; the slug only moves when its source changes."""
    doc = await service.update(ProductId(product_id), body.to_fields())
    return render_product(
        doc, request_locale, resolver, response, localize=False,
    )


@router.delete("/{product_id}")
async def delete_product(
    product_id: UUID,
    service: ProductService = Depends(get_product_service),
):
    await service.delete(ProductId(product_id))
    return {"message": "Deleted successfully"}
