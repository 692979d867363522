"""Extended product scoring: categories, guidance and a competitor summary.

The weights differ from the basic model in ``scoring.py`` on purpose; the two
models are separate products and are not meant to agree.
"""
from typing import Sequence, Tuple, Union

from .advice import (
    AdviceContext,
    detect_product_category,
    generate_alternatives,
    generate_personalized_advice,
    generate_warnings,
    identify_strong_points,
    identify_weak_points,
)
from .knowledge_base import normalize_name
from .models import (
    AdvancedProductScore,
    AdvancedScoreBreakdown,
    BrandInfo,
    CategoryScores,
    CompetitorComparison,
    IngredientScore,
)
from .scoring import (
    ProfileInput,
    ScoringModel,
    aggregate,
    clamp,
    classify_recommendation,
    classify_risk,
    coerce_profile,
    formulation_balance,
    round_score,
    score_ingredient,
    validate_ingredients,
)

ADVANCED_WEIGHTS = {
    "safety": 0.25,
    "effectiveness": 0.25,
    "suitability": 0.20,
    "innovation": 0.15,
    "value_for_money": 0.15,
}

DEFAULT_BRAND_REPUTATION = 75
PRICE_MULTIPLIERS = {
    "low": 1.2,
    "medium": 1.0,
    "high": 0.8,
    "luxury": 0.6,
}

# category -> (keywords, divisor); the matched effectiveness sum is divided
HYDRATION = (("glycerin", "hyaluronic", "sodium hyaluronate", "glycolic", "lactic", "ceramide", "squalane"), 2)
ANTI_AGING = (("retinol", "retinyl", "vitamin c", "ascorbic", "peptide", "niacinamide", "glycolic", "lactic"), 2)
PROTECTION = (("zinc oxide", "titanium dioxide", "avobenzone", "octinoxate", "antioxidant", "vitamin e", "vitamin c"), 3)

LIGHT_INGREDIENTS = ("squalane", "jojoba", "caprylic", "dimethicone")
HEAVY_INGREDIENTS = ("petrolatum", "mineral oil", "lanolin")
STABLE_INGREDIENTS = ("ceramide", "peptide", "niacinamide", "squalane")

# Placeholder until real competitor data exists
BETTER_THAN_FACTOR = 0.8


def _matches(ingredient: IngredientScore, keywords: Sequence[str]) -> bool:
    name = normalize_name(ingredient.name)
    return any(keyword in name for keyword in keywords)


def keyword_category_score(
    ingredients: Sequence[IngredientScore], rule: Tuple[Sequence[str], float]
) -> float:
    keywords, divisor = rule
    total = sum(i.effectiveness_score for i in ingredients if _matches(i, keywords))
    return min(100.0, total / divisor)


def absorption_score(ingredients: Sequence[IngredientScore]) -> float:
    score = 70.0
    for ingredient in ingredients:
        if _matches(ingredient, LIGHT_INGREDIENTS):
            score += 5
        if _matches(ingredient, HEAVY_INGREDIENTS):
            score -= 10
    return clamp(score)


def longevity_score(ingredients: Sequence[IngredientScore]) -> float:
    stable = sum(1 for i in ingredients if _matches(i, STABLE_INGREDIENTS))
    return clamp(65.0 + stable * 8)


def price_performance(price_range: str, effectiveness: float) -> float:
    multiplier = PRICE_MULTIPLIERS.get(normalize_name(price_range), 1.0)
    return min(100.0, effectiveness * multiplier)


def advanced_confidence(avg_research: float) -> int:
    return round_score(clamp(85 + (avg_research - 70) * 0.3))


def score_advanced_product(
    ingredients: Sequence[str],
    product_name: str = "",
    profile: ProfileInput = None,
    brand_info: Union[BrandInfo, dict, None] = None,
) -> AdvancedProductScore:
    validate_ingredients(ingredients)
    profile = coerce_profile(profile)
    if isinstance(brand_info, dict):
        brand_info = BrandInfo.model_validate(brand_info)
    elif brand_info is not None and not isinstance(brand_info, BrandInfo):
        raise TypeError(f"brand info must be a BrandInfo or dict, got {type(brand_info).__name__}")

    scores = [score_ingredient(name, profile, ScoringModel.ADVANCED) for name in ingredients]
    stats = aggregate(scores)

    reputation = brand_info.reputation if brand_info else DEFAULT_BRAND_REPUTATION
    price_range = brand_info.price_range if brand_info else "medium"

    breakdown = {
        "ingredient_quality": (stats.avg_safety + stats.avg_effectiveness) / 2,
        "formulation_balance": formulation_balance(scores),
        "skin_type_match": stats.avg_compatibility,
        "allergy_risk": max(0.0, 100 - stats.max_allergy_risk),
        "scientific_evidence": stats.avg_research,
        "brand_reputation": reputation,
        "price_performance": price_performance(price_range, stats.avg_effectiveness),
        "sustainability_score": stats.avg_naturalness,
    }

    categories = {
        "hydration": keyword_category_score(scores, HYDRATION),
        "anti_aging": keyword_category_score(scores, ANTI_AGING),
        "protection": keyword_category_score(scores, PROTECTION),
        "gentleness": max(0.0, 100 - stats.max_allergy_risk),
        "absorption": absorption_score(scores),
        "longevity": longevity_score(scores),
    }

    value_for_money = breakdown["price_performance"]
    overall = (
        stats.avg_safety * ADVANCED_WEIGHTS["safety"]
        + stats.avg_effectiveness * ADVANCED_WEIGHTS["effectiveness"]
        + stats.avg_compatibility * ADVANCED_WEIGHTS["suitability"]
        + stats.avg_innovation * ADVANCED_WEIGHTS["innovation"]
        + value_for_money * ADVANCED_WEIGHTS["value_for_money"]
    )
    recommendation = classify_recommendation(overall)

    context = AdviceContext(
        product_name=product_name or "",
        ingredients=scores,
        profile=profile,
        categories=categories,
        breakdown=breakdown,
        recommendation=recommendation,
        max_allergy_risk=stats.max_allergy_risk,
    )

    return AdvancedProductScore(
        overall=round_score(overall),
        safety=round_score(stats.avg_safety),
        effectiveness=round_score(stats.avg_effectiveness),
        suitability=round_score(stats.avg_compatibility),
        innovation=round_score(stats.avg_innovation),
        value_for_money=round_score(value_for_money),
        breakdown=AdvancedScoreBreakdown(**{k: round_score(v) for k, v in breakdown.items()}),
        categories=CategoryScores(**{k: round_score(v) for k, v in categories.items()}),
        recommendation=recommendation,
        confidence_level=advanced_confidence(stats.avg_research) if stats.count else 0,
        risk_level=classify_risk(stats.max_allergy_risk),
        personalized_advice=generate_personalized_advice(context),
        warnings=generate_warnings(context),
        alternatives=generate_alternatives(context),
        competitor_comparison=CompetitorComparison(
            better_than=round_score(overall * BETTER_THAN_FACTOR),
            category=detect_product_category(product_name or ""),
            strong_points=identify_strong_points(context),
            weak_points=identify_weak_points(context),
        ),
    )
