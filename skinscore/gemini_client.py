import json
import os
import re
from typing import List, Optional, Union

import google.generativeai as genai

from .ingredient_parser import is_valid_ingredient, parse_ingredient_text
from .models import AdvancedProductScore, ProductScore, SkinProfile


class GeminiClient:
    """Narrative layer on top of the deterministic score.

    Nothing returned here feeds back into a score: the numbers are computed
    before Gemini is asked and are only quoted in the prompt.
    """

    def __init__(self, api_key: str = None, model_name: str = "gemini-1.5-flash"):
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if self.api_key:
            genai.configure(api_key=self.api_key)
            self.model = genai.GenerativeModel(model_name)
        else:
            self.model = None

    def generate_insights(
        self,
        product_name: str,
        ingredients: List[str],
        score: Union[ProductScore, AdvancedProductScore],
        profile: Optional[SkinProfile] = None,
    ) -> str:
        """Explain a score in two or three sentences of plain language."""
        if not self.model:
            return self._fallback_summary(product_name, score)

        profile_text = ""
        if profile:
            profile_text = f"""
        The user's skin profile:
        - Skin type: {profile.skin_type}
        - Concerns: {', '.join(profile.skin_concerns) or 'none'}
        - Allergies: {', '.join(profile.allergies) or 'none'}
        - Preferences: {', '.join(profile.preferences) or 'none'}
        """

        prompt = f"""
        You are a cosmetic chemist. Write a brief, user-friendly summary for the product "{product_name}"
        with these ingredients: {', '.join(ingredients[:15])}.
        {profile_text}
        Our scoring engine rated it {score.overall}/100 overall ({score.recommendation}),
        safety {score.safety}/100, effectiveness {score.effectiveness}/100, suitability {score.suitability}/100.
        Do not change or re-estimate these numbers. Explain in 2-3 sentences why the product
        fits or does not fit this user.
        """

        try:
            response = self.model.generate_content(prompt)
            text = response.text.strip()
            return text or self._fallback_summary(product_name, score)
        except Exception as e:
            print(f"Warning: Gemini insights failed: {e}")
            return self._fallback_summary(product_name, score)

    def extract_ingredients(self, text: str) -> List[str]:
        """Extract ingredient names from free text, falling back to plain parsing."""
        if not self.model:
            return parse_ingredient_text(text)

        prompt = f"""
        Extract every cosmetic ingredient from the text below, in the order given.
        Reply with JSON only: {{"ingredients": ["ingredient1", "ingredient2"]}}

        Text: "{text}"
        """

        try:
            response = self.model.generate_content(prompt)
            ingredients = self._parse_ingredients_json(response.text)
            if ingredients:
                return ingredients
        except Exception as e:
            print(f"Warning: Gemini ingredient extraction failed: {e}")

        return parse_ingredient_text(text)

    def _parse_ingredients_json(self, response_text: str) -> List[str]:
        cleaned = re.sub(r'```(?:json)?', '', response_text or '').strip()
        match = re.search(r'\{.*\}', cleaned, re.S)
        if not match:
            return []
        # Tolerate trailing commas
        payload = re.sub(r',(\s*[}\]])', r'\1', match.group(0))
        try:
            data = json.loads(payload)
        except json.JSONDecodeError:
            return []
        names = data.get('ingredients', []) if isinstance(data, dict) else []
        return [n.strip() for n in names if isinstance(n, str) and is_valid_ingredient(n.strip())]

    def _fallback_summary(self, product_name: str, score: Union[ProductScore, AdvancedProductScore]) -> str:
        return (
            f"Analysis complete for {product_name}. Overall score: {score.overall}/100 "
            f"({score.recommendation}), confidence {score.confidence_level}%."
        )
