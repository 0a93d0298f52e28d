"""FastAPI Dependencies — wires settings, storage, and core components per request.

Invariants:
    - One LocaleResolver per process (pure, shareable across requests)
    - Services and repositories are per request (bound to the request DB session)
    - ?locale= query override beats the Accept-Language header
"""

from functools import lru_cache

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.config import get_settings
from catalog.core.locale_resolver import LocaleResolver, RequestLocale
from catalog.infrastructure.database import get_db
from catalog.infrastructure.home_content_repository import SqlHomeContentRepository
from catalog.infrastructure.product_repository import SqlProductRepository
from catalog.services.home_content_service import HomeContentService
from catalog.services.product_service import ProductService
from catalog.services.slug_identity_engine import SlugIdentityEngine


@lru_cache
def get_locale_resolver() -> LocaleResolver:
    settings = get_settings()
    return LocaleResolver(settings.default_locale, settings.supported_locales)


def get_request_locale(
    request: Request,
    locale: str | None = Query(None, max_length=16),
    resolver: LocaleResolver = Depends(get_locale_resolver),
) -> RequestLocale:
    return resolver.resolve_request_locale(
        locale, request.headers.get("accept-language"),
    )


def get_product_service(db: AsyncSession = Depends(get_db)) -> ProductService:
    settings = get_settings()
    repo = SqlProductRepository(db)
    engine = SlugIdentityEngine(
        slugs=repo,
        names=repo,
        default_locale=settings.default_locale,
        fallback_token=settings.slug_fallback_token,
    )
    return ProductService(repo, engine)


def get_home_content_service(
    db: AsyncSession = Depends(get_db),
) -> HomeContentService:
    return HomeContentService(SqlHomeContentRepository(db))
