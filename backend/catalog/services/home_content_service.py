"""Home Content Service — singleton landing page reads and upserts."""

import logging

from catalog.core.domain_types import HOME_PAGE_KEY
from catalog.core.errors import ResourceNotFoundError
from catalog.core.repository_protocols import HomeContentRepository

logger = logging.getLogger(__name__)


class HomeContentService:
    def __init__(self, repo: HomeContentRepository):
        self._repo = repo

    async def get_home(self) -> dict:
        doc = await self._repo.get_home(populate_products=True)
        if doc is None:
            raise ResourceNotFoundError("HomeContent", HOME_PAGE_KEY)
        return doc

    async def upsert_home(self, fields: dict) -> dict:
        """Create or update the page, then re-read it with slide products populated."""
        await self._repo.upsert_home(fields)
        logger.info("Home content upserted")
        return await self.get_home()

    async def delete_home(self) -> bool:
        return await self._repo.delete_home()
