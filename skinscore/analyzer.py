from typing import List, Optional, Union

from .advanced_scoring import score_advanced_product
from .gemini_client import GeminiClient
from .ingredient_parser import clean_ingredient_name, is_valid_ingredient
from .models import BrandInfo, ProductAnalysis
from .scoring import ProfileInput, coerce_profile, score_product
from .scraper import IngredientScraper


class SkincareAnalyzer:
    """Ties ingredient lookup, scoring, the narrative layer and storage together.

    The scores come only from the scoring engine; Gemini output is attached
    as ``summary`` and never alters them.
    """

    def __init__(self, database, scraper: IngredientScraper = None, gemini_client: GeminiClient = None):
        self.database = database
        self.scraper = scraper or IngredientScraper()
        self.gemini_client = gemini_client or GeminiClient()

    def clear_all_cache(self) -> bool:
        """Drop every stored analysis."""
        try:
            self.database.clear()
            print("✅ All cache cleared successfully!")
            return True
        except Exception as e:
            print(f"Cache clearing error: {e}")
            return False

    def list_analyses(self) -> List[dict]:
        return self.database.list_analyses()

    def get_stored_analysis(self, product_name: str) -> Optional[ProductAnalysis]:
        record = self.database.get_analysis(product_name)
        return ProductAnalysis.model_validate(record) if record else None

    def delete_analysis(self, product_name: str) -> bool:
        deleted = self.database.delete_analysis(product_name)
        if deleted:
            print(f"Deleted stored analysis for {product_name}")
        return deleted

    def analyze_product(
        self,
        product_name: str,
        profile: ProfileInput = None,
        price: Optional[float] = None,
        brand_info: Optional[BrandInfo] = None,
    ) -> ProductAnalysis:
        """Analyze a product by name, looking up its ingredient list first."""
        product_name = self._validate_product_name(product_name)

        ingredients = []
        try:
            cached = self.database.get_analysis(product_name)
        except Exception as e:
            print(f"Warning: Database lookup failed: {e}")
            cached = None

        if cached:
            print(f"Found cached ingredients for {product_name}")
            ingredients = cached.get("ingredients", [])
        else:
            print(f"Looking up ingredients for {product_name}")
            ingredients = self.scraper.extract_ingredients_from_product(product_name)

        if not ingredients:
            return self._create_fallback_analysis(product_name, "No ingredient data available for analysis")

        return self.analyze_ingredients(product_name, ingredients, profile, price, brand_info)

    def analyze_ingredients(
        self,
        product_name: str,
        ingredients: Union[List[str], str],
        profile: ProfileInput = None,
        price: Optional[float] = None,
        brand_info: Optional[BrandInfo] = None,
    ) -> ProductAnalysis:
        """Analyze an ingredient list, or a raw ingredient text block."""
        product_name = self._validate_product_name(product_name)
        profile = coerce_profile(profile)

        if isinstance(ingredients, str):
            ingredient_list = self.gemini_client.extract_ingredients(ingredients)
        elif isinstance(ingredients, (list, tuple)):
            ingredient_list = self._clean_ingredients(ingredients)
        else:
            raise ValueError("Ingredients must be a list of names or an ingredient text")

        if not ingredient_list:
            print(f"No valid ingredients found for {product_name}")
            return self._create_fallback_analysis(product_name, "No valid ingredients found after filtering")

        print(f"Scoring {len(ingredient_list)} ingredients for {product_name}")
        score = score_product(ingredient_list, product_name, profile, price)
        advanced_score = score_advanced_product(ingredient_list, product_name, profile, brand_info)

        summary = self.gemini_client.generate_insights(product_name, ingredient_list, advanced_score, profile)

        alternatives = []
        try:
            alternatives = self.database.find_alternatives(product_name, min_overall=advanced_score.overall)
        except Exception as e:
            print(f"Warning: Database alternatives failed: {e}")

        analysis = ProductAnalysis(
            product_name=product_name,
            ingredients=ingredient_list,
            score=score,
            advanced_score=advanced_score,
            summary=summary,
            alternatives=alternatives,
        )

        try:
            self.database.add_analysis(analysis.model_dump(exclude={"alternatives"}))
            print(f"Stored analysis for {product_name}")
        except Exception as e:
            print(f"Warning: Failed to store analysis: {e}")

        return analysis

    def _clean_ingredients(self, ingredients) -> List[str]:
        cleaned = []
        for ingredient in ingredients:
            if not isinstance(ingredient, str):
                raise ValueError("Ingredient names must be strings")
            name = clean_ingredient_name(ingredient)
            if is_valid_ingredient(name) and name not in cleaned:
                cleaned.append(name)
        return cleaned

    def _validate_product_name(self, product_name: str) -> str:
        if not product_name or not isinstance(product_name, str):
            raise ValueError("Product name must be a non-empty string")
        product_name = product_name.strip()
        if len(product_name) < 2:
            raise ValueError("Product name too short")
        return product_name

    def _create_fallback_analysis(self, product_name: str, error_message: str) -> ProductAnalysis:
        """Create a fallback analysis when no ingredients could be scored."""
        return ProductAnalysis(
            product_name=product_name,
            ingredients=[],
            score=None,
            advanced_score=None,
            summary=f"Unable to complete analysis: {error_message}",
            alternatives=[],
        )
