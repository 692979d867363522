"""Rule tables that turn an advanced score into human-readable guidance.

Each table is an ordered sequence of ``(condition, message)`` pairs. A
condition receives the ``AdviceContext`` and every rule whose condition holds
contributes its message, in table order.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .knowledge_base import normalize_name
from .models import IngredientScore, SkinProfile
from .scoring import matches_allergy


@dataclass(frozen=True)
class AdviceContext:
    product_name: str
    ingredients: Sequence[IngredientScore]
    profile: Optional[SkinProfile]
    categories: Dict[str, float] = field(default_factory=dict)
    breakdown: Dict[str, float] = field(default_factory=dict)
    recommendation: str = "fair"
    max_allergy_risk: float = 0.0

    @property
    def skin_type(self) -> Optional[str]:
        return self.profile.skin_type if self.profile else None

    def contains(self, *keywords: str) -> bool:
        return any(
            keyword in normalize_name(ingredient.name)
            for ingredient in self.ingredients
            for keyword in keywords
        )


Rule = Tuple[Callable[[AdviceContext], bool], str]


def apply_rules(rules: Sequence[Rule], context: AdviceContext) -> List[str]:
    return [message for condition, message in rules if condition(context)]


def _has_acids(ctx: AdviceContext) -> bool:
    return any(
        "acid" in normalize_name(i.name) and "hyaluronic" not in normalize_name(i.name)
        for i in ctx.ingredients
    )


def _has_declared_allergen(ctx: AdviceContext) -> bool:
    if not ctx.profile or not ctx.profile.allergies:
        return False
    return any(matches_allergy(i.name, ctx.profile.allergies) for i in ctx.ingredients)


def _is_mature(ctx: AdviceContext) -> bool:
    return bool(ctx.profile and ctx.profile.age and ctx.profile.age > 35)


ADVICE_RULES: Tuple[Rule, ...] = (
    (lambda ctx: ctx.profile is None,
     "Complete your skin profile to get personalized recommendations"),
    (lambda ctx: ctx.skin_type == "dry" and ctx.categories.get("hydration", 0) < 70,
     "For dry skin, follow up with an additional moisturizing cream"),
    (lambda ctx: ctx.skin_type == "dry",
     "Apply to damp skin for a better effect"),
    (lambda ctx: ctx.skin_type == "oily",
     "Apply a thin layer and avoid overloading the skin"),
    (lambda ctx: ctx.skin_type == "oily" and ctx.categories.get("hydration", 0) > 80,
     "The product may be too rich for oily skin - use it 2-3 times a week"),
    (lambda ctx: ctx.skin_type == "sensitive",
     "Do a patch test on a small area of skin before full use"),
    (lambda ctx: ctx.skin_type == "sensitive",
     "Start by using it every other day so your skin can adapt"),
    (lambda ctx: _is_mature(ctx) and ctx.categories.get("anti_aging", 0) > 70,
     "A great choice for anti-aging care"),
    (lambda ctx: _is_mature(ctx) and ctx.categories.get("anti_aging", 0) <= 70,
     "Consider adding anti-aging actives to your routine"),
)

WARNING_RULES: Tuple[Rule, ...] = (
    (lambda ctx: ctx.max_allergy_risk > 25,
     "The product contains potentially allergenic components"),
    (lambda ctx: ctx.contains("retinol", "retinyl"),
     "Contains retinol - use only in the evening and wear SPF during the day"),
    (_has_acids,
     "Contains acids - may increase sensitivity to the sun"),
    (_has_declared_allergen,
     "WARNING: the product contains ingredients from your allergy list!"),
)

ALTERNATIVE_RULES: Tuple[Rule, ...] = (
    (lambda ctx: ctx.recommendation in ("poor", "fair"),
     "CeraVe Moisturizing Cream - a safer alternative"),
    (lambda ctx: ctx.recommendation in ("poor", "fair"),
     "The Ordinary Hyaluronic Acid 2% + B5 - effective hydration"),
    (lambda ctx: ctx.recommendation in ("poor", "fair"),
     "La Roche-Posay Toleriane - for sensitive skin"),
)

STRONG_POINT_RULES: Tuple[Rule, ...] = (
    (lambda ctx: ctx.breakdown.get("ingredient_quality", 0) > 80, "High-quality ingredients"),
    (lambda ctx: ctx.breakdown.get("scientific_evidence", 0) > 80, "Scientifically backed formula"),
    (lambda ctx: ctx.categories.get("hydration", 0) > 80, "Excellent hydrating properties"),
    (lambda ctx: ctx.categories.get("gentleness", 0) > 80, "Suitable for sensitive skin"),
    (lambda ctx: ctx.breakdown.get("sustainability_score", 0) > 80, "Eco-friendly composition"),
)

WEAK_POINT_RULES: Tuple[Rule, ...] = (
    (lambda ctx: ctx.breakdown.get("allergy_risk", 100) < 60, "Increased risk of allergic reactions"),
    (lambda ctx: ctx.breakdown.get("price_performance", 100) < 60, "Modest price/performance ratio"),
    (lambda ctx: ctx.categories.get("absorption", 100) < 60, "May absorb poorly"),
    (lambda ctx: ctx.breakdown.get("sustainability_score", 100) < 50, "Many synthetic components"),
)

# First match wins; keywords cover English and Russian product names
PRODUCT_CATEGORIES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("cream", "крем"), "Moisturizing creams"),
    (("serum", "сыворотка"), "Serums"),
    (("cleanser", "очищающ"), "Cleansers"),
    (("sunscreen", "spf"), "Sunscreens"),
    (("mask", "маска"), "Face masks"),
)
DEFAULT_PRODUCT_CATEGORY = "Skin care products"


def generate_personalized_advice(context: AdviceContext) -> List[str]:
    return apply_rules(ADVICE_RULES, context)


def generate_warnings(context: AdviceContext) -> List[str]:
    return apply_rules(WARNING_RULES, context)


def generate_alternatives(context: AdviceContext) -> List[str]:
    return apply_rules(ALTERNATIVE_RULES, context)


def identify_strong_points(context: AdviceContext) -> List[str]:
    return apply_rules(STRONG_POINT_RULES, context)


def identify_weak_points(context: AdviceContext) -> List[str]:
    return apply_rules(WEAK_POINT_RULES, context)


def detect_product_category(product_name: str) -> str:
    name = normalize_name(product_name)
    for keywords, category in PRODUCT_CATEGORIES:
        if any(keyword in name for keyword in keywords):
            return category
    return DEFAULT_PRODUCT_CATEGORY
