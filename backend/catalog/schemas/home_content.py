"""Home Content Schemas — validation for the singleton landing page upsert.

Invariants:
    - heroTitle_i18n needs non-blank vi or en text
    - signatureSection.title_i18n needs non-blank vi or en text
    - Nested sections are stored with their wire keys (by_alias dump)
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog.schemas.product import LocalizedField, require_vi_or_en


class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ImageI18n(_Wire):
    url: str = Field(min_length=1, max_length=1000)
    alt_i18n: LocalizedField = None


class HeroSlide(_Wire):
    product: UUID | None = None
    title_i18n: LocalizedField = None
    subtitle_i18n: LocalizedField = None
    description_i18n: LocalizedField = None
    image: ImageI18n | None = None
    order: int = 0
    is_active: bool = Field(True, alias="isActive")


class CounterItem(_Wire):
    label_i18n: dict[str, str]
    value: str = Field(min_length=1)


class StorySection(_Wire):
    title_i18n: LocalizedField = None
    headline_i18n: LocalizedField = None
    paragraphs_i18n: list[dict[str, str]] = Field(default_factory=list)
    image: ImageI18n | None = None


class SignatureSection(_Wire):
    title_i18n: dict[str, str]
    subtitle_i18n: LocalizedField = None
    body_i18n: LocalizedField = None
    background_image: ImageI18n | None = Field(None, alias="backgroundImage")

    @field_validator("title_i18n")
    @classmethod
    def check_title(cls, v: dict[str, str]) -> dict[str, str]:
        return require_vi_or_en(v)


class HomeContentUpsert(_Wire):
    """Full home page payload; omitted optional sections keep stored values."""
    hero_title_i18n: dict[str, str] = Field(alias="heroTitle_i18n")
    hero_subtitle_i18n: LocalizedField = Field(None, alias="heroSubtitle_i18n")
    hero_body_i18n: list[dict[str, str]] | None = Field(None, alias="heroBody_i18n")
    hero_background_image: ImageI18n | None = Field(None, alias="heroBackgroundImage")
    hero_slides: list[HeroSlide] | None = Field(None, alias="heroSlides")
    counters: list[CounterItem] | None = None
    story_section: StorySection | None = Field(None, alias="storySection")
    signature_section: SignatureSection = Field(alias="signatureSection")
    seo_title_i18n: LocalizedField = Field(None, alias="seoTitle_i18n")
    seo_description_i18n: LocalizedField = Field(None, alias="seoDescription_i18n")
    seo_image_url: str | None = Field(None, alias="seoImageUrl")

    @field_validator("hero_title_i18n")
    @classmethod
    def check_hero_title(cls, v: dict[str, str]) -> dict[str, str]:
        return require_vi_or_en(v)

    def to_fields(self) -> dict[str, Any]:
        """Sent fields keyed by ORM attribute; nested values keep wire keys."""
        fields = {}
        for attr in self.model_fields_set:
            value = getattr(self, attr)
            if isinstance(value, BaseModel):
                value = value.model_dump(mode="json", by_alias=True)
            elif isinstance(value, list):
                value = [
                    item.model_dump(mode="json", by_alias=True)
                    if isinstance(item, BaseModel) else item
                    for item in value
                ]
            if value is None and attr in ("hero_body_i18n", "hero_slides", "counters"):
                continue
            fields[attr] = value
        return fields
