import re
from typing import List

import requests
from bs4 import BeautifulSoup

from .ingredient_parser import clean_ingredient_name, is_valid_ingredient, parse_ingredient_text

INCIDECODER_URL = "https://incidecoder.com"
MAX_PRODUCT_PAGES = 3
MAX_INGREDIENTS = 20


class IngredientScraper:
    """Finds a product's ingredient list on INCIdecoder by product name."""

    def __init__(self, timeout: int = 15):
        self.timeout = timeout
        self.headers = {
            'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'
        }

    def extract_ingredients_from_product(self, product_name: str) -> List[str]:
        """Return the product's ingredients, or an empty list when none are found."""
        try:
            ingredients = self._scrape_incidecoder(product_name)
            if ingredients:
                return ingredients
        except requests.RequestException as e:
            print(f"INCIdecoder scraping failed: {e}")

        print(f"No ingredients found for {product_name}")
        return []

    def _scrape_incidecoder(self, product_name: str) -> List[str]:
        response = requests.get(
            f"{INCIDECODER_URL}/search",
            params={"query": product_name},
            headers=self.headers,
            timeout=self.timeout,
        )
        print(f"INCIdecoder search status: {response.status_code}")
        if response.status_code != 200:
            return []

        soup = BeautifulSoup(response.content, 'html.parser')
        product_links = soup.find_all('a', href=re.compile(r'^/products/'))
        print(f"Found {len(product_links)} product links")

        for link in product_links[:MAX_PRODUCT_PAGES]:
            product_url = INCIDECODER_URL + link['href']
            print(f"Trying product URL: {product_url}")
            ingredients = self._extract_from_product_page(product_url)
            if ingredients:
                return ingredients

        return []

    def _extract_from_product_page(self, product_url: str) -> List[str]:
        response = requests.get(product_url, headers=self.headers, timeout=self.timeout)
        if response.status_code != 200:
            print(f"Product page returned {response.status_code}")
            return []
        return self.parse_product_page(response.content)

    def parse_product_page(self, html) -> List[str]:
        """Pull ingredient names out of a product page's HTML."""
        soup = BeautifulSoup(html, 'html.parser')
        ingredients: List[str] = []

        def add(name: str) -> None:
            cleaned = clean_ingredient_name(name)
            if is_valid_ingredient(cleaned) and cleaned not in ingredients:
                ingredients.append(cleaned)

        # Structured ingredient links are the most reliable source
        containers = soup.find_all(['div', 'section'], class_=re.compile(r'ingredient|inci|formula', re.I))
        for container in containers:
            for link in container.find_all('a', href=re.compile(r'/ingredients/')):
                add(link.get_text())

        if len(ingredients) < 3:
            for link in soup.find_all('a', href=re.compile(r'/ingredients/')):
                add(link.get_text())

        # Last resort: a comma separated paragraph that starts with water
        if len(ingredients) < 3:
            for block in soup.find_all(['p', 'div'], string=re.compile(r'(aqua|water).*,', re.I)):
                for name in parse_ingredient_text(block.get_text()):
                    add(name)

        if len(ingredients) > 2:
            print(f"Found {len(ingredients)} ingredients from product page")
            return ingredients[:MAX_INGREDIENTS]

        print(f"Only found {len(ingredients)} ingredients, skipping page")
        return []
