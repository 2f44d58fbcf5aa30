"""
Tests for the scrape-or-mock part catalog
"""
import httpx
import pytest

from pickapart.catalog.source import PartCatalog, parse_listing

LISTING_HTML = """
<table>
  <tr class="tr__product" data-product-id="abc123">
    <td class="td__image"><img src="https://img.example/cpu.png"></td>
    <td class="td__name">AMD Ryzen 5 7600X</td>
    <td class="td__price">$189.00</td>
  </tr>
  <tr class="tr__product">
    <td class="td__name">Intel Core i5-14600K</td>
  </tr>
  <tr class="tr__product"><td class="td__price">$1.00</td></tr>
</table>
"""


def test_parse_listing():
    parts = parse_listing(LISTING_HTML, "cpu")

    assert [p["name"] for p in parts] == ["AMD Ryzen 5 7600X", "Intel Core i5-14600K"]
    assert parts[0]["id"] == "abc123"
    assert parts[0]["price"] == "$189.00"
    assert parts[0]["image"] == "https://img.example/cpu.png"
    # no id, price or image on the page
    assert parts[1]["id"] == "cpu-2"
    assert parts[1]["price"] == "$0"
    assert parts[1]["image"].startswith("https://via.placeholder.com/")


@pytest.mark.asyncio
async def test_scrape_uses_source_category_name():
    requested = []

    def handler(request):
        requested.append(request.url.path)
        return httpx.Response(200, text=LISTING_HTML)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    catalog = PartCatalog(base_url="https://prices.example/products", client=client)

    parts = await catalog.list_parts("storage")
    await catalog.close()

    assert requested == ["/products/internal-hard-drive/"]
    assert len(parts) == 2


@pytest.mark.asyncio
async def test_falls_back_to_mock_on_http_error():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(503)))
    catalog = PartCatalog(base_url="https://prices.example/products", client=client)

    parts = await catalog.list_parts("cpu")
    await catalog.close()

    assert parts == catalog.mock_parts("cpu")
    assert parts


@pytest.mark.asyncio
async def test_falls_back_to_mock_on_connection_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    catalog = PartCatalog(
        base_url="https://prices.example/products",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    parts = await catalog.list_parts("video-card")
    await catalog.close()

    assert any(p["name"] == "NVIDIA GeForce RTX 4090" for p in parts)


@pytest.mark.asyncio
async def test_empty_page_falls_back_to_mock():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html></html>")))
    catalog = PartCatalog(base_url="https://prices.example/products", client=client)

    assert await catalog.list_parts("case") == catalog.mock_parts("case")
    await catalog.close()


@pytest.mark.asyncio
async def test_unknown_category_without_source_is_empty():
    catalog = PartCatalog(base_url="")
    assert await catalog.list_parts("sound-card") == []


def test_mock_parts_are_copies():
    catalog = PartCatalog()
    catalog.mock_parts("cpu")[0]["name"] = "changed"

    assert catalog.mock_parts("cpu")[0]["name"] != "changed"
