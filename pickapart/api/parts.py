"""
Parts API Endpoints

Catalog listings per category and display currencies
"""

from fastapi import APIRouter, Depends

from pickapart.api.deps import get_part_catalog
from pickapart.build.categories import CATEGORIES, category_label, is_multi_select
from pickapart.build.pricing import currency_options
from pickapart.catalog.source import PartCatalog

router = APIRouter()


@router.get("/parts/categories")
async def list_categories():
    return [
        {"key": c.key, "name": c.label, "multiSelect": c.multi_select}
        for c in CATEGORIES.values()
    ]


@router.get("/parts/{category}")
async def list_parts(category: str, catalog: PartCatalog = Depends(get_part_catalog)):
    """
    Parts available for a category

    Scraped when a catalog source is configured, mock data otherwise
    """
    parts = await catalog.list_parts(category)
    return {
        "category": category,
        "name": category_label(category),
        "multiSelect": is_multi_select(category),
        "parts": parts,
    }


@router.get("/currencies")
async def list_currencies():
    return currency_options()
