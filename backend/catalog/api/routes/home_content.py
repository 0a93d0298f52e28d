"""Home Content Routes — singleton landing page read, upsert, delete."""

import logging

from fastapi import APIRouter, Depends, Response

from catalog.api.dependencies import (
    get_home_content_service, get_locale_resolver, get_request_locale,
)
from catalog.api.routes.rendering import render_home
from catalog.core.locale_resolver import LocaleResolver, RequestLocale
from catalog.schemas.home_content import HomeContentUpsert
from catalog.services.home_content_service import HomeContentService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/home-content", tags=["home-content"])


@router.get("")
async def get_home_content(
    response: Response,
    service: HomeContentService = Depends(get_home_content_service),
    request_locale: RequestLocale = Depends(get_request_locale),
    resolver: LocaleResolver = Depends(get_locale_resolver),
):
    doc = await service.get_home()
    return render_home(doc, request_locale, resolver, response)


@router.put("")
async def upsert_home_content(
    body: HomeContentUpsert,
    response: Response,
    service: HomeContentService = Depends(get_home_content_service),
    request_locale: RequestLocale = Depends(get_request_locale),
    resolver: LocaleResolver = Depends(get_locale_resolver),
):
    doc = await service.upsert_home(body.to_fields())
    return render_home(doc, request_locale, resolver, response)


@router.delete("")
async def delete_home_content(
    service: HomeContentService = Depends(get_home_content_service),
):
    await service.delete_home()
    return {"message": "Home content deleted"}
