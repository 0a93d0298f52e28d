"""Product Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ProductCreate requires a name with non-blank vi or en text and price >= 0
    - temperatureOptions restricted to hot / iced / both / warm
    - Wire keys (camelCase, *_i18n) accepted via aliases; attribute names are snake_case
    - to_fields() yields only keys the client actually sent (partial update safe)

Design Decisions:
    - Validation failures surface as RequestValidationError -> VALIDATION_ERROR (400)
    - Explicit slug kept in the payload; ProductService decides whether it is used
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog.core.domain_types import (
    LocalizedString, ProductCategory, TemperatureOption,
)
from catalog.core.slug_identity import has_required_name

LocalizedField = LocalizedString | None


def require_vi_or_en(value: LocalizedField) -> LocalizedField:
    if value is None:
        return value
    if not has_required_name(value):
        raise ValueError("At least one localized name (vi/en) is required")
    return value


class ImageIn(BaseModel):
    url: str = Field(min_length=1, max_length=1000)
    alt_i18n: LocalizedField = None

    @field_validator("url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        return v.strip()


class ProductStatIn(BaseModel):
    label: LocalizedString
    value: float = Field(ge=0, le=100)


class _ProductFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    short_description_i18n: LocalizedField = Field(None, alias="shortDescription_i18n")
    description_i18n: LocalizedField = None
    slug: str | None = Field(None, max_length=160)
    slug_i18n: LocalizedField = None
    seo_title_i18n: LocalizedField = Field(None, alias="seoTitle_i18n")
    seo_description_i18n: LocalizedField = Field(None, alias="seoDescription_i18n")
    category: ProductCategory | None = None
    tags: list[str] | None = None
    temperature_options: list[TemperatureOption] | None = Field(
        None, alias="temperatureOptions",
    )
    image: ImageIn | None = None
    is_best_seller: bool | None = Field(None, alias="isBestSeller")
    best_seller_order: int | None = Field(None, alias="bestSellerOrder")
    best_seller_stats: list[ProductStatIn] | None = Field(None, alias="bestSellerStats")
    is_signature_lineup: bool | None = Field(None, alias="isSignatureLineup")
    signature_order: int | None = Field(None, alias="signatureOrder")
    is_published: bool | None = Field(None, alias="isPublished")

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return [tag.strip() for tag in v if tag.strip()]

    def to_fields(self) -> dict[str, Any]:
        """Sent fields keyed by ORM attribute, image flattened, None lists dropped."""
        fields = self.model_dump(mode="json", exclude_unset=True)
        if "image" in fields:
            image = fields.pop("image") or {}
            fields["image_url"] = image.get("url")
            fields["image_alt_i18n"] = image.get("alt_i18n")
        for key in ("tags", "temperature_options", "best_seller_stats"):
            if key in fields and fields[key] is None:
                fields.pop(key)
        for key in ("is_best_seller", "is_signature_lineup", "is_published"):
            if key in fields and fields[key] is None:
                fields.pop(key)
        if fields.get("category") is None:
            fields.pop("category", None)
        return fields


class ProductCreate(_ProductFields):
    """Product creation — name and price are mandatory."""
    name_i18n: LocalizedString
    price: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("name_i18n")
    @classmethod
    def check_name(cls, v: LocalizedField) -> LocalizedField:
        return require_vi_or_en(v)


class ProductUpdate(_ProductFields):
    """Partial product update — every field optional, same rules when present."""
    name_i18n: LocalizedField = None
    price: float | None = Field(None, ge=0, allow_inf_nan=False)

    @field_validator("name_i18n")
    @classmethod
    def check_name(cls, v: LocalizedField) -> LocalizedField:
        return require_vi_or_en(v)

    def to_fields(self) -> dict[str, Any]:
        fields = super().to_fields()
        for key in ("name_i18n", "price"):
            if key in fields and fields[key] is None:
                fields.pop(key)
        return fields
