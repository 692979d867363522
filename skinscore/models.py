from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional, Union

SkinType = Literal["oily", "dry", "combination", "sensitive", "normal"]
Recommendation = Literal["excellent", "good", "fair", "poor"]
RiskLevel = Literal["low", "medium", "high"]


class SkinProfile(BaseModel):
    skin_type: SkinType
    skin_concerns: List[str] = []
    allergies: List[str] = []
    preferences: List[str] = []
    age: Optional[int] = Field(default=None, ge=0, le=130)

    @field_validator("skin_type", mode="before")
    @classmethod
    def _normalize_skin_type(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class BrandInfo(BaseModel):
    reputation: float = Field(default=75, ge=0, le=100)
    price_range: str = "medium"


class IngredientScore(BaseModel):
    name: str
    safety_score: float
    effectiveness_score: float
    compatibility_score: float
    allergy_risk: float
    research_backing: float
    innovation: float
    naturalness: float
    known: bool = False


class ScoreBreakdown(BaseModel):
    ingredient_quality: int
    formulation_balance: int
    skin_type_match: int
    allergy_risk: int
    scientific_evidence: int


class ProductScore(BaseModel):
    overall: int
    safety: int
    effectiveness: int
    suitability: int
    innovation: int
    value_for_money: int
    breakdown: ScoreBreakdown
    recommendation: Recommendation
    confidence_level: int


class AdvancedScoreBreakdown(ScoreBreakdown):
    brand_reputation: int
    price_performance: int
    sustainability_score: int


class CategoryScores(BaseModel):
    hydration: int
    anti_aging: int
    protection: int
    gentleness: int
    absorption: int
    longevity: int


class CompetitorComparison(BaseModel):
    better_than: int
    category: str
    strong_points: List[str]
    weak_points: List[str]


class AdvancedProductScore(BaseModel):
    overall: int
    safety: int
    effectiveness: int
    suitability: int
    innovation: int
    value_for_money: int
    breakdown: AdvancedScoreBreakdown
    categories: CategoryScores
    recommendation: Recommendation
    confidence_level: int
    risk_level: RiskLevel
    personalized_advice: List[str]
    warnings: List[str]
    alternatives: List[str]
    competitor_comparison: CompetitorComparison


class ProductAnalysis(BaseModel):
    product_name: str
    ingredients: List[str]
    score: Optional[ProductScore] = None
    advanced_score: Optional[AdvancedProductScore] = None
    summary: str
    alternatives: List[dict] = []


class AnalysisSummary(BaseModel):
    product_name: str
    overall: float
    recommendation: Recommendation


class IngredientLookup(BaseModel):
    name: str
    known: bool
    safety_score: float
    effectiveness_score: float
    allergy_risk: float
    research_backing: float
    naturalness: Optional[float] = None
    innovation: Optional[float] = None


class ScoreRequest(BaseModel):
    ingredients: List[str]
    product_name: str = ""
    skin_profile: Optional[SkinProfile] = None
    price: Optional[float] = Field(default=None, ge=0)


class AdvancedScoreRequest(BaseModel):
    ingredients: List[str]
    product_name: str = ""
    skin_profile: Optional[SkinProfile] = None
    brand_info: Optional[BrandInfo] = None


class IngredientsRequest(BaseModel):
    product_name: str
    ingredients: Union[List[str], str]
    skin_profile: Optional[SkinProfile] = None
    price: Optional[float] = Field(default=None, ge=0)
    brand_info: Optional[BrandInfo] = None


class ProductRequest(BaseModel):
    product_name: str
    skin_profile: Optional[SkinProfile] = None
    price: Optional[float] = Field(default=None, ge=0)
    brand_info: Optional[BrandInfo] = None


class ClearCacheRequest(BaseModel):
    password: str
