"""Slug Identity Engine — negotiates unique slugs and the (category, name) invariant.

Invariants:
    - Never returns a slug the existence check reported as taken at call time
    - Candidates probed strictly sequentially, in trial order (base, base-2, base-3, ...)
    - Name conflicts raise DuplicateNameError before any mutation; slug collisions never raise
    - Collaborator failures propagate unchanged (no retry here)

Design Decisions:
    - Collaborators injected at construction: the engine owns no storage and is
      unit-tested against an in-memory fake
    - Check-then-write race accepted; the storage unique index is the final arbiter
      (see ProductService for the single retry on a lost race)
"""

import logging
from typing import Mapping

from catalog.core.domain_types import ProductId
from catalog.core.errors import DuplicateNameError
from catalog.core.repository_protocols import NameConflictCheck, SlugExistenceCheck
from catalog.core.slug_identity import (
    conflict_name_terms, derive_slug_base, slug_candidates,
)

logger = logging.getLogger(__name__)


class SlugIdentityEngine:
    """Derives collision-free slugs and blocks duplicate names within a category."""

    def __init__(
        self,
        slugs: SlugExistenceCheck,
        names: NameConflictCheck,
        default_locale: str,
        fallback_token: str = "product",
    ):
        self._slugs = slugs
        self._names = names
        self.default_locale = default_locale
        self.fallback_token = fallback_token

    def derive_base(
        self, name: Mapping[str, str] | None, explicit_slug: str | None = None,
    ) -> str:
        return derive_slug_base(
            name, explicit_slug,
            default_locale=self.default_locale, fallback=self.fallback_token,
        )

    async def assign_unique_slug(
        self,
        name: Mapping[str, str] | None,
        explicit_slug: str | None = None,
        exclude_id: ProductId | None = None,
    ) -> str:
        """First free candidate for the entity's slug base."""
        candidates = slug_candidates(
            self.derive_base(name, explicit_slug), self.fallback_token,
        )
        candidate = next(candidates)
        collisions = 0
        while await self._slugs.exists_slug(candidate, exclude_id):
            collisions += 1
            candidate = next(candidates)
        if collisions:
            logger.info(
                f"Slug '{candidate}' assigned after {collisions} collision(s)",
                extra={"slug": candidate, "attempt": collisions + 1},
            )
        return candidate

    async def enforce_name_uniqueness(
        self,
        category: str | None,
        name: Mapping[str, str] | None,
        exclude_id: ProductId | None = None,
    ) -> None:
        """Raise DuplicateNameError if another product in `category` shares a locale name."""
        if not category or not name:
            return
        terms = conflict_name_terms(name, self.default_locale)
        if not terms:
            return
        if await self._names.exists_name_conflict(category, terms, exclude_id):
            logger.warning(
                f"Duplicate product name in category '{category}'",
                extra={"error_code": "DUPLICATE_NAME"},
            )
            raise DuplicateNameError(category, terms)
