"""
Part Catalog Source

Scrapes part listings from the configured pricing site, falling back to
static mock listings on any failure. Best effort only: prices are not
guaranteed to be current.
"""

import copy
import urllib.parse
from typing import Dict, List, Optional

import httpx
from bs4 import BeautifulSoup

from pickapart.build.categories import category_label
from pickapart.catalog.mock_data import MOCK_PARTS
from pickapart.config import get_settings

settings = get_settings()

# Build categories that the pricing site lists under a different name
SOURCE_CATEGORY = {
    "storage": "internal-hard-drive",
}

PLACEHOLDER_IMAGE = "https://via.placeholder.com/300x300/374151/FFFFFF?text={}"


def source_category(category_key: str) -> str:
    return SOURCE_CATEGORY.get(category_key, category_key)


def placeholder_image(name: str) -> str:
    return PLACEHOLDER_IMAGE.format(urllib.parse.quote(name))


def parse_listing(html: str, category_key: str) -> List[Dict]:
    """Extract parts from a product listing table"""
    soup = BeautifulSoup(html, "html.parser")
    parts = []

    for i, row in enumerate(soup.select("tr.tr__product")):
        name_el = row.select_one(".td__name")
        price_el = row.select_one(".td__price")
        if not name_el:
            continue

        name = name_el.get_text(" ", strip=True)
        img = row.select_one("img")
        part_id = row.get("data-product-id") or f"{category_key}-{i + 1}"

        parts.append({
            "id": str(part_id),
            "name": name,
            "price": price_el.get_text(strip=True) if price_el else "$0",
            "image": img.get("src") if img and img.get("src") else placeholder_image(name),
        })

    return parts


class PartCatalog:
    """Scrape-or-mock provider of part listings per category"""

    def __init__(self, base_url: str = "", timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client

    def mock_parts(self, category_key: str) -> List[Dict]:
        parts = copy.deepcopy(MOCK_PARTS.get(source_category(category_key), []))
        for part in parts:
            part.setdefault("image", placeholder_image(part["name"]))
        return parts

    async def scrape(self, category_key: str) -> List[Dict]:
        if self.client is None:
            self.client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)

        url = f"{self.base_url}/{source_category(category_key)}/"
        response = await self.client.get(url)
        response.raise_for_status()
        return parse_listing(response.text, category_key)

    async def list_parts(self, category_key: str) -> List[Dict]:
        parts: List[Dict] = []

        if self.base_url:
            try:
                parts = await self.scrape(category_key)
                print(f"[Catalog] Scraped {len(parts)} {category_label(category_key)} parts")
            except httpx.HTTPError as e:
                print(f"[Catalog] Scrape failed for {category_key}: {e}")

        if not parts:
            parts = self.mock_parts(category_key)
            print(f"[Catalog] Serving {len(parts)} mock {category_label(category_key)} parts")

        return parts

    async def close(self):
        """Close HTTP client"""
        if self.client is not None:
            await self.client.aclose()
            self.client = None


# Global catalog instance
_catalog: Optional[PartCatalog] = None


def get_catalog() -> PartCatalog:
    global _catalog

    if _catalog is None:
        _catalog = PartCatalog(
            base_url=settings.CATALOG_SOURCE_URL,
            timeout=settings.CATALOG_TIMEOUT
        )

    return _catalog


async def close_catalog():
    """Close catalog HTTP client on shutdown"""
    global _catalog
    if _catalog:
        await _catalog.close()
        _catalog = None
