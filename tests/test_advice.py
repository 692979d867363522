from skinscore.advice import (
    ADVICE_RULES,
    AdviceContext,
    apply_rules,
    detect_product_category,
    generate_alternatives,
    generate_personalized_advice,
    generate_warnings,
)
from skinscore.models import SkinProfile
from skinscore.scoring import ScoringModel, score_ingredient


def _context(names=("Water",), profile=None, **kwargs):
    ingredients = [score_ingredient(n, profile, ScoringModel.ADVANCED) for n in names]
    return AdviceContext(product_name="Test", ingredients=ingredients, profile=profile, **kwargs)


def test_rules_fire_in_table_order():
    advice = generate_personalized_advice(_context(profile=SkinProfile(skin_type="sensitive")))
    assert advice == [
        "Do a patch test on a small area of skin before full use",
        "Start by using it every other day so your skin can adapt",
    ]


def test_missing_profile_only_asks_for_one():
    advice = generate_personalized_advice(_context())
    assert len(advice) == 1
    assert "skin profile" in advice[0]


def test_dry_skin_with_low_hydration():
    advice = generate_personalized_advice(
        _context(profile=SkinProfile(skin_type="dry"), categories={"hydration": 40})
    )
    assert any("moisturizing cream" in a for a in advice)
    assert any("damp skin" in a for a in advice)


def test_dry_skin_with_good_hydration():
    advice = generate_personalized_advice(
        _context(profile=SkinProfile(skin_type="dry"), categories={"hydration": 90})
    )
    assert not any("moisturizing cream" in a for a in advice)


def test_oily_skin_with_rich_formula():
    advice = generate_personalized_advice(
        _context(profile=SkinProfile(skin_type="oily"), categories={"hydration": 95})
    )
    assert any("thin layer" in a for a in advice)
    assert any("2-3 times a week" in a for a in advice)


def test_age_based_advice():
    mature = SkinProfile(skin_type="normal", age=42)
    strong = generate_personalized_advice(_context(profile=mature, categories={"anti_aging": 90}))
    weak = generate_personalized_advice(_context(profile=mature, categories={"anti_aging": 10}))
    young = generate_personalized_advice(_context(profile=SkinProfile(skin_type="normal", age=25)))
    assert any("anti-aging care" in a for a in strong)
    assert any("Consider adding anti-aging" in a for a in weak)
    assert young == []


def test_warnings():
    profile = SkinProfile(skin_type="normal", allergies=["Retinyl"])
    warnings = generate_warnings(_context(("Retinyl Palmitate", "Glycolic Acid"), profile, max_allergy_risk=95))
    assert len(warnings) == 4

    assert generate_warnings(_context(("Water", "Hyaluronic Acid"))) == []


def test_alternatives_only_for_weak_products():
    assert len(generate_alternatives(_context(recommendation="poor"))) == 3
    assert len(generate_alternatives(_context(recommendation="fair"))) == 3
    assert generate_alternatives(_context(recommendation="good")) == []
    assert generate_alternatives(_context(recommendation="excellent")) == []


def test_custom_rule_table():
    rules = ((lambda ctx: ctx.contains("water"), "has water"),) + ADVICE_RULES[:1]
    assert apply_rules(rules, _context()) == ["has water", ADVICE_RULES[0][1]]


def test_detect_product_category():
    assert detect_product_category("Увлажняющий крем") == "Moisturizing creams"
    assert detect_product_category("Gentle Foaming Cleanser") == "Cleansers"
    assert detect_product_category("Clay Mask") == "Face masks"
    assert detect_product_category("") == "Skin care products"
