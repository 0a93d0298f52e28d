"""Home Content Repository — SQLAlchemy implementation of HomeContentRepository.

Invariants:
    - At most one row, keyed by page_key "home"
    - upsert_home always forces page_key to "home"
    - Populated slides carry a product summary dict in place of the product id;
      dangling ids are replaced with None

Design Decisions:
    - Population reuses SqlProductRepository.summaries_by_ids: one IN query per read
"""

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.domain_types import HOME_PAGE_KEY
from catalog.infrastructure.database import storage_errors
from catalog.infrastructure.product_repository import SqlProductRepository
from catalog.models.home_content import HomeContent

_WIRE_KEYS = {
    "page_key": "pageKey",
    "hero_title_i18n": "heroTitle_i18n",
    "hero_subtitle_i18n": "heroSubtitle_i18n",
    "hero_body_i18n": "heroBody_i18n",
    "hero_background_image": "heroBackgroundImage",
    "hero_slides": "heroSlides",
    "counters": "counters",
    "story_section": "storySection",
    "signature_section": "signatureSection",
    "seo_title_i18n": "seoTitle_i18n",
    "seo_description_i18n": "seoDescription_i18n",
    "seo_image_url": "seoImageUrl",
}


def home_to_document(home: HomeContent) -> dict[str, Any]:
    doc: dict[str, Any] = {"id": str(home.id)}
    for attr, key in _WIRE_KEYS.items():
        doc[key] = getattr(home, attr)
    doc["heroSlides"] = [dict(slide) for slide in (home.hero_slides or [])]
    doc["createdAt"] = home.created_at.isoformat() if home.created_at else None
    doc["updatedAt"] = home.updated_at.isoformat() if home.updated_at else None
    return doc


def _slide_product_ids(slides: list[dict]) -> list[uuid.UUID]:
    ids = []
    for slide in slides:
        ref = slide.get("product")
        if not ref:
            continue
        try:
            ids.append(uuid.UUID(str(ref)))
        except ValueError:
            continue
    return ids


class SqlHomeContentRepository:
    """Singleton home page persistence over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db
        self._products = SqlProductRepository(db)

    async def _get_row(self) -> HomeContent | None:
        async with storage_errors("get_home"):
            return (await self._db.execute(
                select(HomeContent).where(HomeContent.page_key == HOME_PAGE_KEY),
            )).scalar_one_or_none()

    async def get_home(self, populate_products: bool = True) -> dict | None:
        home = await self._get_row()
        if home is None:
            return None
        doc = home_to_document(home)
        if populate_products:
            summaries = await self._products.summaries_by_ids(
                _slide_product_ids(doc["heroSlides"]),
            )
            for slide in doc["heroSlides"]:
                if slide.get("product"):
                    slide["product"] = summaries.get(str(slide["product"]))
        return doc

    async def upsert_home(self, fields: dict) -> dict:
        home = await self._get_row()
        async with storage_errors("upsert_home"):
            if home is None:
                home = HomeContent(**{**fields, "page_key": HOME_PAGE_KEY})
                self._db.add(home)
            else:
                for key, value in fields.items():
                    setattr(home, key, value)
                home.page_key = HOME_PAGE_KEY
            await self._db.commit()
        return home_to_document(home)

    async def delete_home(self) -> bool:
        home = await self._get_row()
        if home is None:
            return False
        async with storage_errors("delete_home"):
            await self._db.delete(home)
            await self._db.commit()
        return True
