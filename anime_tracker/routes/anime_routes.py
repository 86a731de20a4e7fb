from typing import Optional

from fastapi import APIRouter, Depends, Query

from anime_tracker.errors import InvalidRequest
from anime_tracker.services.catalog import CatalogClient, get_catalog_client, DEFAULT_LIMIT

router = APIRouter(prefix="/api/anime", tags=["anime"])


@router.get("/search")
async def search_anime(
    q: Optional[str] = Query(None),
    catalog: CatalogClient = Depends(get_catalog_client),
):
    if not q or not q.strip():
        raise InvalidRequest("Query parameter required")
    return await catalog.search(q.strip())


@router.get("/top")
async def top_anime(
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=25),
    catalog: CatalogClient = Depends(get_catalog_client),
):
    return await catalog.top(limit)


@router.get("/seasonal")
async def seasonal_anime(
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=25),
    catalog: CatalogClient = Depends(get_catalog_client),
):
    return await catalog.seasonal(limit)
