"""Deterministic ingredient and product scoring.

Every function here is pure: the static tables in ``knowledge_base`` are only
read, results are built fresh on each call and nothing is cached.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Union

from .knowledge_base import (
    ADVANCED_KNOWLEDGE_BASE,
    BASIC_KNOWLEDGE_BASE,
    KnowledgeBase,
    compatibility_multiplier,
    normalize_name,
)
from .models import IngredientScore, ProductScore, ScoreBreakdown, SkinProfile


class ScoringModel(str, Enum):
    BASIC = "basic"
    ADVANCED = "advanced"


# Only the first ingredients of a list are scored by the basic model
MAX_SCORED_INGREDIENTS = 10

NEUTRAL_COMPATIBILITY = 75
ALLERGY_MATCH_RISK = 95
ALLERGY_MATCH_COMPATIBILITY = 10

ACTIVE_EFFECTIVENESS_THRESHOLD = 80
IDEAL_ACTIVE_RATIO = 0.3

HYDRATING_KEYWORDS = ("glycerin", "hyaluronic", "ceramide")
RICH_TEXTURE_KEYWORDS = ("oil", "butter")
MODERN_INGREDIENTS = ("niacinamide", "peptides", "bakuchiol", "azelaic acid")

CONCERN_SYNONYMS = {
    "acne": ("acne", "акне"),
    "dryness": ("dryness", "dry", "сухость"),
}

BASIC_WEIGHTS = {
    "ingredient_quality": 0.30,
    "formulation_balance": 0.20,
    "skin_type_match": 0.25,
    "allergy_risk": 0.15,
    "scientific_evidence": 0.10,
}

RECOMMENDATION_THRESHOLDS = (
    (85, "excellent"),
    (70, "good"),
    (55, "fair"),
)

RISK_THRESHOLDS = (
    (10, "low"),
    (25, "medium"),
)

ProfileInput = Union[SkinProfile, dict, None]


def round_score(value: float) -> int:
    """Round half up, so 72.5 becomes 73 rather than 72."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def coerce_profile(profile: ProfileInput) -> Optional[SkinProfile]:
    if profile is None or isinstance(profile, SkinProfile):
        return profile
    if isinstance(profile, dict):
        return SkinProfile.model_validate(profile)
    raise TypeError(f"skin profile must be a SkinProfile or dict, got {type(profile).__name__}")


def validate_ingredients(ingredients) -> None:
    if not isinstance(ingredients, (list, tuple)):
        raise TypeError(f"ingredients must be a list of strings, got {type(ingredients).__name__}")
    for ingredient in ingredients:
        if ingredient is not None and not isinstance(ingredient, str):
            raise TypeError(f"ingredient names must be strings, got {type(ingredient).__name__}")


def matches_allergy(ingredient_name: str, allergies: Iterable[str]) -> bool:
    """True when an allergy and the ingredient name contain one another."""
    name = normalize_name(ingredient_name)
    if not name:
        return False
    for allergy in allergies:
        allergen = normalize_name(allergy)
        if allergen and (allergen in name or name in allergen):
            return True
    return False


def has_concern(profile: SkinProfile, concern: str) -> bool:
    synonyms = CONCERN_SYNONYMS.get(concern, (concern,))
    return any(normalize_name(c) in synonyms for c in profile.skin_concerns)


def knowledge_base_for(model: ScoringModel) -> KnowledgeBase:
    if model == ScoringModel.ADVANCED:
        return ADVANCED_KNOWLEDGE_BASE
    return BASIC_KNOWLEDGE_BASE


def score_ingredient(
    name: Optional[str],
    profile: ProfileInput = None,
    model: ScoringModel = ScoringModel.BASIC,
) -> IngredientScore:
    if name is None:
        name = ""
    if not isinstance(name, str):
        raise TypeError(f"ingredient name must be a string, got {type(name).__name__}")

    profile = coerce_profile(profile)
    knowledge_base = knowledge_base_for(model)
    normalized = normalize_name(name)
    record = knowledge_base.lookup(normalized)

    compatibility = float(NEUTRAL_COMPATIBILITY)
    allergy_risk = float(record.allergy_risk)

    if profile is not None and normalized:
        skin_type = profile.skin_type
        compatibility *= compatibility_multiplier(skin_type, normalized)

        if skin_type == "dry":
            if any(keyword in normalized for keyword in HYDRATING_KEYWORDS):
                compatibility += 15
        elif skin_type == "oily":
            if "acid" in normalized and "hyaluronic" not in normalized:
                compatibility += 10
            if any(keyword in normalized for keyword in RICH_TEXTURE_KEYWORDS):
                compatibility -= 15
        elif skin_type == "sensitive":
            compatibility = max(0.0, compatibility - allergy_risk * 2)
            if record.naturalness > 80:
                compatibility += 10

        if has_concern(profile, "acne") and "acid" in normalized:
            compatibility += 10
        if has_concern(profile, "dryness") and any(k in normalized for k in HYDRATING_KEYWORDS):
            compatibility += 15

        # Declared allergies override every adjustment above
        if matches_allergy(normalized, profile.allergies):
            allergy_risk = ALLERGY_MATCH_RISK
            compatibility = ALLERGY_MATCH_COMPATIBILITY

    return IngredientScore(
        name=name.strip(),
        safety_score=clamp(record.safety_score),
        effectiveness_score=clamp(record.effectiveness_score),
        compatibility_score=clamp(compatibility),
        allergy_risk=clamp(allergy_risk),
        research_backing=clamp(record.research_backing),
        innovation=clamp(record.innovation),
        naturalness=clamp(record.naturalness),
        known=knowledge_base.contains(normalized),
    )


@dataclass(frozen=True)
class IngredientStats:
    count: int
    avg_safety: float
    avg_effectiveness: float
    avg_compatibility: float
    avg_research: float
    avg_innovation: float
    avg_naturalness: float
    max_allergy_risk: float
    known_count: int


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def aggregate(scores: Sequence[IngredientScore]) -> IngredientStats:
    """Means over the scored ingredients plus the worst allergy risk.

    An empty list has means of 0 and a maximum allergy risk of 100, so a
    product without ingredients never looks safe.
    """
    return IngredientStats(
        count=len(scores),
        avg_safety=_mean([s.safety_score for s in scores]),
        avg_effectiveness=_mean([s.effectiveness_score for s in scores]),
        avg_compatibility=_mean([s.compatibility_score for s in scores]),
        avg_research=_mean([s.research_backing for s in scores]),
        avg_innovation=_mean([s.innovation for s in scores]),
        avg_naturalness=_mean([s.naturalness for s in scores]),
        max_allergy_risk=max((s.allergy_risk for s in scores), default=100.0),
        known_count=sum(1 for s in scores if s.known),
    )


def formulation_balance(scores: Sequence[IngredientScore]) -> float:
    """Penalize both all-filler and all-active formulas around a 30% active ratio."""
    if not scores:
        return 0.0
    actives = sum(1 for s in scores if s.effectiveness_score > ACTIVE_EFFECTIVENESS_THRESHOLD)
    ratio = actives / len(scores)
    return max(0.0, 100 - abs(ratio - IDEAL_ACTIVE_RATIO) * 200)


def classify_recommendation(overall: float) -> str:
    for threshold, tier in RECOMMENDATION_THRESHOLDS:
        if overall >= threshold:
            return tier
    return "poor"


def classify_risk(max_allergy_risk: float) -> str:
    for threshold, level in RISK_THRESHOLDS:
        if max_allergy_risk <= threshold:
            return level
    return "high"


def basic_overall(
    ingredient_quality: float,
    formulation: float,
    skin_type_match: float,
    allergy_score: float,
    scientific_evidence: float,
) -> float:
    return (
        ingredient_quality * BASIC_WEIGHTS["ingredient_quality"]
        + formulation * BASIC_WEIGHTS["formulation_balance"]
        + skin_type_match * BASIC_WEIGHTS["skin_type_match"]
        + allergy_score * BASIC_WEIGHTS["allergy_risk"]
        + scientific_evidence * BASIC_WEIGHTS["scientific_evidence"]
    )


def value_for_money(price: Optional[float], overall: float) -> float:
    # First matching branch wins; a zero price counts as unknown
    if not price:
        return 70
    if price < 500 and overall > 70:
        return 90
    if price < 1000 and overall > 75:
        return 80
    if price > 2000 and overall < 80:
        return 50
    return 70


def score_product(
    ingredients: Sequence[str],
    product_name: str = "",
    profile: ProfileInput = None,
    price: Optional[float] = None,
) -> ProductScore:
    """Score a product with the basic model.

    Only the first ``MAX_SCORED_INGREDIENTS`` entries are scored; ingredient
    lists are ordered by concentration so the tail carries little weight.
    ``product_name`` is accepted for symmetry with the advanced model.
    """
    validate_ingredients(ingredients)
    if price is not None and (isinstance(price, bool) or not isinstance(price, (int, float))):
        raise TypeError(f"price must be a number, got {type(price).__name__}")
    profile = coerce_profile(profile)

    scores = [score_ingredient(name, profile) for name in ingredients[:MAX_SCORED_INGREDIENTS]]
    stats = aggregate(scores)

    ingredient_quality = (
        stats.avg_safety * 0.4 + stats.avg_effectiveness * 0.4 + stats.avg_research * 0.2
    )
    formulation = formulation_balance(scores)
    skin_type_match = stats.avg_compatibility
    allergy_score = 100 - stats.max_allergy_risk
    scientific_evidence = stats.avg_research

    overall = basic_overall(
        ingredient_quality, formulation, skin_type_match, allergy_score, scientific_evidence
    )

    innovation = 60
    if any(modern in normalize_name(s.name) for s in scores for modern in MODERN_INGREDIENTS):
        innovation = 80

    confidence = stats.known_count / stats.count * 100 if stats.count else 0.0

    return ProductScore(
        overall=round_score(overall),
        safety=round_score(stats.avg_safety),
        effectiveness=round_score(stats.avg_effectiveness),
        suitability=round_score(stats.avg_compatibility),
        innovation=innovation,
        value_for_money=round_score(value_for_money(price, overall)),
        breakdown=ScoreBreakdown(
            ingredient_quality=round_score(ingredient_quality),
            formulation_balance=round_score(formulation),
            skin_type_match=round_score(skin_type_match),
            allergy_risk=round_score(allergy_score),
            scientific_evidence=round_score(scientific_evidence),
        ),
        recommendation=classify_recommendation(overall),
        confidence_level=round_score(min(100.0, confidence)),
    )
