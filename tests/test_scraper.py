import requests

from skinscore.scraper import IngredientScraper

PRODUCT_PAGE = """
<html><body>
  <nav><a href="/ingredients/all">All ingredients</a></nav>
  <div id="ingredlist-short" class="ingredient-list">
    <a href="/ingredients/water">Water</a>,
    <a href="/ingredients/glycerin">Glycerin</a>,
    <a href="/ingredients/niacinamide">Niacinamide</a>,
    <a href="/ingredients/glycerin">Glycerin</a>
  </div>
</body></html>
"""

TEXT_ONLY_PAGE = """
<html><body>
  <p>Water, Glycerin, Panthenol, Sodium Hyaluronate</p>
</body></html>
"""


def test_parse_structured_product_page():
    assert IngredientScraper().parse_product_page(PRODUCT_PAGE) == ["Water", "Glycerin", "Niacinamide"]


def test_parse_text_paragraph():
    assert IngredientScraper().parse_product_page(TEXT_ONLY_PAGE) == [
        "Water", "Glycerin", "Panthenol", "Sodium Hyaluronate",
    ]


def test_too_few_ingredients_is_empty():
    assert IngredientScraper().parse_product_page("<p>nothing here</p>") == []


def test_network_errors_return_empty_list(monkeypatch):
    def fail(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(requests, "get", fail)
    assert IngredientScraper().extract_ingredients_from_product("Any Cream") == []


def test_search_then_product_page(monkeypatch):
    search_page = '<a href="/products/brand-cream">Brand Cream</a>'
    pages = {
        "https://incidecoder.com/search": search_page,
        "https://incidecoder.com/products/brand-cream": PRODUCT_PAGE,
    }

    class Response:
        def __init__(self, body):
            self.status_code = 200
            self.content = body.encode()

    def fake_get(url, **kwargs):
        return Response(pages[url])

    monkeypatch.setattr(requests, "get", fake_get)
    assert IngredientScraper().extract_ingredients_from_product("Brand Cream") == [
        "Water", "Glycerin", "Niacinamide",
    ]
