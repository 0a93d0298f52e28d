"""HomeContent ORM — the singleton landing page document.

Invariants:
    - Exactly one row per page_key; page_key is always "home"
    - hero_title_i18n and signature_section are non-nullable
    - hero_slides[*].product holds a Product id (string), populated on read

Design Decisions:
    - Nested sections (slides, counters, story, signature) stored as JSON:
      they are only ever read and written as a whole page
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from catalog.core.domain_types import HOME_PAGE_KEY
from catalog.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HomeContent(Base):
    __tablename__ = "home_content"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    page_key: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True, default=HOME_PAGE_KEY,
    )

    hero_title_i18n: Mapped[dict] = mapped_column(JSON, nullable=False)
    hero_subtitle_i18n: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    hero_body_i18n: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    hero_background_image: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    hero_slides: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    counters: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    story_section: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    signature_section: Mapped[dict] = mapped_column(JSON, nullable=False)

    seo_title_i18n: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    seo_description_i18n: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    seo_image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
