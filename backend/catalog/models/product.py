"""Product ORM — persists one menu item with its localized content bundles.

Invariants:
    - slug is non-nullable, lowercase, at most 160 chars, and unique (final arbiter
      for concurrent slug assignment)
    - name_i18n is non-nullable; every *_i18n column holds a {locale: text} mapping
    - category defaults to "coffee"; price is non-negative (checked at the API boundary)

Design Decisions:
    - JSON columns for LocalizedString bundles: open locale key set, no join table
    - image_url / image_alt_i18n flattened from the nested image object
    - Composite (is_published, category, is_best_seller) index serves the public feeds
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, DateTime, Float, Index, Integer, JSON, String, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from catalog.core.domain_types import DEFAULT_CATEGORY, SLUG_MAX_LENGTH
from catalog.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """Menu product — slug and (category, name) carry the identity invariants."""
    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("slug", name="uq_products_slug"),
        Index(
            "ix_products_published_category_best_seller",
            "is_published", "category", "is_best_seller",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name_i18n: Mapped[dict] = mapped_column(JSON, nullable=False)
    short_description_i18n: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    description_i18n: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    slug: Mapped[str] = mapped_column(String(SLUG_MAX_LENGTH), nullable=False)
    slug_i18n: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    seo_title_i18n: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    seo_description_i18n: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    category: Mapped[str] = mapped_column(
        String(32), nullable=False, default=DEFAULT_CATEGORY.value,
    )
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    temperature_options: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )

    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    image_alt_i18n: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    is_best_seller: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    best_seller_order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    best_seller_stats: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )

    is_signature_lineup: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    signature_order: Mapped[int | None] = mapped_column(Integer, nullable=True)

    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
