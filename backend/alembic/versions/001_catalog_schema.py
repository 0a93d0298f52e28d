"""Catalog schema — products and the singleton home content page.

Revision ID: 001_catalog
Revises: None
Create Date: 2026-10-19

uq_products_slug is the final arbiter for concurrent slug assignment.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_catalog"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name_i18n", sa.JSON, nullable=False),
        sa.Column("short_description_i18n", sa.JSON, nullable=True),
        sa.Column("description_i18n", sa.JSON, nullable=True),
        sa.Column("slug", sa.String(160), nullable=False),
        sa.Column("slug_i18n", sa.JSON, nullable=True),
        sa.Column("seo_title_i18n", sa.JSON, nullable=True),
        sa.Column("seo_description_i18n", sa.JSON, nullable=True),
        sa.Column("category", sa.String(32), nullable=False, server_default="coffee"),
        sa.Column("tags", sa.JSON, nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("temperature_options", sa.JSON, nullable=False),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("image_alt_i18n", sa.JSON, nullable=True),
        sa.Column("is_best_seller", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("best_seller_order", sa.Integer, nullable=True),
        sa.Column("best_seller_stats", sa.JSON, nullable=False),
        sa.Column("is_signature_lineup", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("signature_order", sa.Integer, nullable=True),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("slug", name="uq_products_slug"),
    )
    op.create_index(
        "ix_products_published_category_best_seller",
        "products",
        ["is_published", "category", "is_best_seller"],
    )

    op.create_table(
        "home_content",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("page_key", sa.String(20), nullable=False, unique=True, server_default="home"),
        sa.Column("hero_title_i18n", sa.JSON, nullable=False),
        sa.Column("hero_subtitle_i18n", sa.JSON, nullable=True),
        sa.Column("hero_body_i18n", sa.JSON, nullable=False),
        sa.Column("hero_background_image", sa.JSON, nullable=True),
        sa.Column("hero_slides", sa.JSON, nullable=False),
        sa.Column("counters", sa.JSON, nullable=False),
        sa.Column("story_section", sa.JSON, nullable=True),
        sa.Column("signature_section", sa.JSON, nullable=False),
        sa.Column("seo_title_i18n", sa.JSON, nullable=True),
        sa.Column("seo_description_i18n", sa.JSON, nullable=True),
        sa.Column("seo_image_url", sa.String(1000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("home_content")
    op.drop_index("ix_products_published_category_best_seller", table_name="products")
    op.drop_table("products")
