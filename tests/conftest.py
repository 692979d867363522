"""
Pytest configuration and shared fixtures for the scoring and service tests.
"""
import pytest
from fastapi.testclient import TestClient

from skinscore.analyzer import SkincareAnalyzer
from skinscore.gemini_client import GeminiClient
from skinscore.models import SkinProfile
from skinscore.simple_database import SimpleAnalysisDatabase


# ============================================================================
# Fixtures: Skin profiles
# ============================================================================

@pytest.fixture
def dry_profile() -> SkinProfile:
    return SkinProfile(skin_type="dry", skin_concerns=["Сухость"], allergies=[], preferences=[])


@pytest.fixture
def oily_profile() -> SkinProfile:
    return SkinProfile(skin_type="oily", skin_concerns=["Сухость"], allergies=[], preferences=[])


@pytest.fixture
def sensitive_fragrance_profile() -> SkinProfile:
    return SkinProfile(skin_type="sensitive", skin_concerns=[], allergies=["fragrance"], preferences=[])


# ============================================================================
# Fixtures: Service collaborators
# ============================================================================

class FakeScraper:
    """Stands in for INCIdecoder lookups."""

    def __init__(self, catalog=None):
        self.catalog = catalog or {}
        self.calls = []

    def extract_ingredients_from_product(self, product_name):
        self.calls.append(product_name)
        return list(self.catalog.get(product_name, []))


class FailingDatabase(SimpleAnalysisDatabase):
    def add_analysis(self, record):
        raise RuntimeError("storage offline")

    def find_alternatives(self, product_name, min_overall=0, n_results=3):
        raise RuntimeError("storage offline")


@pytest.fixture
def gemini_client(monkeypatch) -> GeminiClient:
    """Gemini client without an API key: every call takes the offline path."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    return GeminiClient()


@pytest.fixture
def fake_scraper() -> FakeScraper:
    return FakeScraper({
        "Hydrating Cream": ["Aqua", "Glycerin", "Hyaluronic Acid", "Ceramides", "Squalane"],
    })


@pytest.fixture
def database() -> SimpleAnalysisDatabase:
    return SimpleAnalysisDatabase()


@pytest.fixture
def failing_database() -> FailingDatabase:
    return FailingDatabase()


@pytest.fixture
def analyzer(database, fake_scraper, gemini_client) -> SkincareAnalyzer:
    return SkincareAnalyzer(database, scraper=fake_scraper, gemini_client=gemini_client)


@pytest.fixture
def client(analyzer, monkeypatch):
    from skinscore import main

    monkeypatch.setenv("ADMIN_PASSWORD", "secret")
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    main.get_settings.cache_clear()
    main.app.dependency_overrides[main.get_analyzer] = lambda: analyzer
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()
    main.get_settings.cache_clear()
