from functools import lru_cache
from typing import List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .advanced_scoring import score_advanced_product
from .analyzer import SkincareAnalyzer
from .config import Settings
from .gemini_client import GeminiClient
from .knowledge_base import ADVANCED_KNOWLEDGE_BASE
from .models import (
    AdvancedProductScore,
    AdvancedScoreRequest,
    AnalysisSummary,
    ClearCacheRequest,
    IngredientLookup,
    IngredientsRequest,
    ProductAnalysis,
    ProductRequest,
    ProductScore,
    ScoreRequest,
)
from .scoring import score_product
from .scraper import IngredientScraper

app = FastAPI(
    title="SkinScore",
    description="Score cosmetic products against a personal skin profile",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache()
def get_analyzer() -> SkincareAnalyzer:
    settings = get_settings()
    if settings.storage_backend == "memory":
        from .simple_database import SimpleAnalysisDatabase
        database = SimpleAnalysisDatabase()
    else:
        from .database import AnalysisDatabase
        database = AnalysisDatabase(settings.embedding_model)

    return SkincareAnalyzer(
        database,
        scraper=IngredientScraper(timeout=settings.scraper_timeout),
        gemini_client=GeminiClient(settings.gemini_api_key, settings.gemini_model),
    )


@app.get("/")
async def root():
    return {"message": "SkinScore product compatibility API"}


@app.get("/ingredients/{name}", response_model=IngredientLookup)
async def lookup_ingredient(name: str):
    """Knowledge-base attributes for one ingredient; unknown names get defaults."""
    record = ADVANCED_KNOWLEDGE_BASE.lookup(name)
    return IngredientLookup(
        name=name,
        known=ADVANCED_KNOWLEDGE_BASE.contains(name),
        safety_score=record.safety_score,
        effectiveness_score=record.effectiveness_score,
        allergy_risk=record.allergy_risk,
        research_backing=record.research_backing,
        naturalness=record.naturalness,
        innovation=record.innovation,
    )


@app.post("/score/", response_model=ProductScore)
async def score(request: ScoreRequest):
    """
    Score an ingredient list with the basic model.

    - **ingredients**: ingredient names in label order (first 10 are scored)
    - **skin_profile**: optional skin type, concerns and allergies
    - **price**: optional price used for the value-for-money estimate
    """
    return score_product(request.ingredients, request.product_name, request.skin_profile, request.price)


@app.post("/score/advanced/", response_model=AdvancedProductScore)
async def score_advanced(request: AdvancedScoreRequest):
    """Score an ingredient list with the advanced model, including advice and warnings."""
    return score_advanced_product(
        request.ingredients, request.product_name, request.skin_profile, request.brand_info
    )


@app.post("/analyze_ingredients/", response_model=ProductAnalysis)
def analyze_ingredients(request: IngredientsRequest, analyzer: SkincareAnalyzer = Depends(get_analyzer)):
    """Analyze a scanned or pasted ingredient list."""
    try:
        return analyzer.analyze_ingredients(
            request.product_name,
            request.ingredients,
            request.skin_profile,
            request.price,
            request.brand_info,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")


@app.post("/analyze_product/", response_model=ProductAnalysis)
def analyze_product(request: ProductRequest, analyzer: SkincareAnalyzer = Depends(get_analyzer)):
    """
    Look up a product's ingredients by name and analyze them.

    Returns the basic and advanced scores, a narrative summary and better
    scoring alternatives from earlier analyses.
    """
    try:
        return analyzer.analyze_product(
            request.product_name, request.skin_profile, request.price, request.brand_info
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")


@app.get("/analyses/", response_model=List[AnalysisSummary])
def list_analyses(analyzer: SkincareAnalyzer = Depends(get_analyzer)):
    """Every stored analysis, ordered by product name."""
    return analyzer.list_analyses()


@app.get("/analyses/{product_name}", response_model=ProductAnalysis)
def get_analysis(product_name: str, analyzer: SkincareAnalyzer = Depends(get_analyzer)):
    analysis = analyzer.get_stored_analysis(product_name)
    if analysis is None:
        raise HTTPException(status_code=404, detail=f"No stored analysis for {product_name}")
    return analysis


@app.delete("/analyses/{product_name}")
def delete_analysis(product_name: str, analyzer: SkincareAnalyzer = Depends(get_analyzer)):
    if not analyzer.delete_analysis(product_name):
        raise HTTPException(status_code=404, detail=f"No stored analysis for {product_name}")
    return {"message": f"Analysis for {product_name} deleted"}


@app.post("/clear_cache/")
def clear_cache(
    request: ClearCacheRequest,
    settings: Settings = Depends(get_settings),
    analyzer: SkincareAnalyzer = Depends(get_analyzer),
):
    """Clear all stored analyses. Requires admin password."""
    if not settings.admin_password:
        raise HTTPException(status_code=500, detail="Admin password not configured")

    if request.password != settings.admin_password:
        raise HTTPException(status_code=401, detail="Invalid password")

    if analyzer.clear_all_cache():
        return {"message": "All cache cleared successfully!"}
    raise HTTPException(status_code=500, detail="Failed to clear cache")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
