from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional


@dataclass(frozen=True)
class IngredientRecord:
    safety_score: float
    effectiveness_score: float
    allergy_risk: float
    research_backing: float
    naturalness: Optional[float] = None
    innovation: Optional[float] = None


def normalize_name(name: str) -> str:
    """Canonical form used for every table lookup."""
    if not name or not isinstance(name, str):
        return ""
    return name.strip().lower()


class KnowledgeBase:
    """Read-only table of known ingredients with a default record for misses.

    Matching is verbatim on the normalized name: no fuzzy or partial matching
    happens here.
    """

    def __init__(self, records: Dict[str, IngredientRecord], defaults: IngredientRecord):
        self._records: Mapping[str, IngredientRecord] = MappingProxyType(
            {normalize_name(key): value for key, value in records.items()}
        )
        self.defaults = defaults

    def contains(self, name: str) -> bool:
        return normalize_name(name) in self._records

    def lookup(self, name: str) -> IngredientRecord:
        record = self._records.get(normalize_name(name))
        if record is None:
            return self.defaults
        # Optional attributes missing from the entry come from the defaults
        return replace(
            record,
            naturalness=record.naturalness if record.naturalness is not None else self.defaults.naturalness,
            innovation=record.innovation if record.innovation is not None else self.defaults.innovation,
        )


BASIC_DEFAULTS = IngredientRecord(
    safety_score=70,
    effectiveness_score=60,
    allergy_risk=20,
    research_backing=50,
    naturalness=60,
    innovation=60,
)

ADVANCED_DEFAULTS = IngredientRecord(
    safety_score=75,
    effectiveness_score=70,
    allergy_risk=10,
    research_backing=70,
    naturalness=60,
    innovation=60,
)


def _basic(safety, effectiveness, research, allergy_risk=BASIC_DEFAULTS.allergy_risk):
    return IngredientRecord(safety, effectiveness, allergy_risk, research)


BASIC_KNOWLEDGE_BASE = KnowledgeBase(
    {
        # Humectants and barrier lipids
        "hyaluronic acid": _basic(95, 90, 95),
        "glycerin": _basic(90, 85, 90),
        "ceramides": _basic(90, 88, 85),
        "squalane": _basic(95, 80, 80),
        # Actives
        "niacinamide": _basic(85, 90, 95),
        "retinol": _basic(70, 95, 98),
        "vitamin c": _basic(75, 90, 90),
        "salicylic acid": _basic(80, 85, 90),
        "lactic acid": _basic(82, 80, 85),
        # Soothing
        "aloe vera": _basic(95, 70, 75),
        "chamomile": _basic(90, 65, 70),
        "panthenol": _basic(95, 75, 80),
        # Potentially problematic
        "alcohol": _basic(40, 30, 60),
        "sulfates": _basic(50, 70, 70),
        "parabens": _basic(60, 80, 75),
        "fragrance": _basic(45, 20, 30),
    },
    BASIC_DEFAULTS,
)


# research_backing (fourth field) values are local additions; without them
# every advanced score would report a confidence of 85
ADVANCED_KNOWLEDGE_BASE = KnowledgeBase(
    {
        "water": IngredientRecord(100, 60, 0, 70, naturalness=100),
        "aqua": IngredientRecord(100, 60, 0, 70, naturalness=100),
        "glycerin": IngredientRecord(95, 85, 5, 90, naturalness=90),
        "hyaluronic acid": IngredientRecord(95, 95, 2, 95, naturalness=85, innovation=90),
        "sodium hyaluronate": IngredientRecord(95, 95, 2, 90, naturalness=85, innovation=85),
        "retinol": IngredientRecord(70, 95, 25, 98, naturalness=30, innovation=95),
        "retinyl palmitate": IngredientRecord(80, 75, 15, 80, naturalness=40, innovation=80),
        "niacinamide": IngredientRecord(90, 90, 5, 95, naturalness=80, innovation=85),
        "vitamin c": IngredientRecord(85, 90, 10, 90, naturalness=95, innovation=80),
        "ascorbic acid": IngredientRecord(85, 90, 10, 90, naturalness=95, innovation=80),
        "salicylic acid": IngredientRecord(80, 85, 15, 90, naturalness=70, innovation=75),
        "glycolic acid": IngredientRecord(75, 85, 20, 90, naturalness=60, innovation=80),
        "lactic acid": IngredientRecord(85, 80, 10, 85, naturalness=90, innovation=75),
        "peptides": IngredientRecord(90, 85, 5, 80, naturalness=70, innovation=95),
        "ceramides": IngredientRecord(95, 90, 2, 85, naturalness=85, innovation=85),
        "squalane": IngredientRecord(95, 85, 2, 80, naturalness=90, innovation=80),
        "dimethicone": IngredientRecord(85, 70, 5, 75, naturalness=20, innovation=60),
        "cetearyl alcohol": IngredientRecord(90, 70, 8, 75, naturalness=75, innovation=50),
        "phenoxyethanol": IngredientRecord(85, 60, 10, 75, naturalness=20, innovation=40),
        "sodium hydroxide": IngredientRecord(70, 50, 20, 70, naturalness=30, innovation=30),
        "fragrance": IngredientRecord(60, 30, 35, 30, naturalness=40, innovation=20),
        "parfum": IngredientRecord(60, 30, 35, 30, naturalness=40, innovation=20),
    },
    ADVANCED_DEFAULTS,
)


SKIN_TYPES = ("oily", "dry", "combination", "sensitive", "normal")

# skin type -> ingredient -> compatibility multiplier
SKIN_TYPE_COMPATIBILITY: Mapping[str, Mapping[str, float]] = MappingProxyType({
    "dry": MappingProxyType({
        "hyaluronic acid": 1.2,
        "glycerin": 1.15,
        "ceramides": 1.2,
        "alcohol": 0.3,
        "salicylic acid": 0.7,
    }),
    "oily": MappingProxyType({
        "niacinamide": 1.2,
        "salicylic acid": 1.3,
        "alcohol": 0.8,
        "hyaluronic acid": 1.1,
    }),
    "sensitive": MappingProxyType({
        "aloe vera": 1.3,
        "chamomile": 1.25,
        "panthenol": 1.2,
        "fragrance": 0.2,
        "alcohol": 0.1,
        "retinol": 0.4,
    }),
    "combination": MappingProxyType({
        "niacinamide": 1.15,
        "hyaluronic acid": 1.1,
        "salicylic acid": 1.1,
    }),
    "normal": MappingProxyType({}),
})


def compatibility_multiplier(skin_type: str, ingredient_name: str) -> float:
    rules = SKIN_TYPE_COMPATIBILITY.get(normalize_name(skin_type), {})
    return rules.get(normalize_name(ingredient_name), 1.0)
