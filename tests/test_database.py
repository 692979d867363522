"""
AnalysisDatabase against a real in-memory chromadb, with a tiny fake encoder
so no sentence-transformers model is downloaded.
"""
import chromadb
import pytest

from skinscore import database as database_module
from skinscore.database import AnalysisDatabase


class FakeVector(list):
    def tolist(self):
        return list(self)


class FakeEncoder:
    def __init__(self, name):
        self.name = name

    def encode(self, texts):
        return [FakeVector([float(len(t)), float(sum(map(ord, t)) % 97), 1.0]) for t in texts]


@pytest.fixture
def chroma_db(monkeypatch):
    monkeypatch.setattr(database_module, "SentenceTransformer", FakeEncoder)
    db = AnalysisDatabase(client=chromadb.EphemeralClient())
    db.clear()
    yield db
    db.clear()


def _record(name, overall):
    return {
        "product_name": name,
        "ingredients": ["Aqua", "1,2-Hexanediol"],
        "score": {"overall": overall - 5, "recommendation": "fair"},
        "advanced_score": {"overall": overall, "recommendation": "good"},
        "summary": "stored",
    }


def test_add_and_get(chroma_db):
    chroma_db.add_analysis(_record("Hydra Gel", 80))
    stored = chroma_db.get_analysis("HYDRA GEL")
    assert stored["ingredients"] == ["Aqua", "1,2-Hexanediol"]
    assert stored["advanced_score"]["overall"] == 80
    assert chroma_db.get_analysis("Missing") is None


def test_upsert_replaces(chroma_db):
    chroma_db.add_analysis(_record("Hydra Gel", 80))
    chroma_db.add_analysis(_record("Hydra Gel", 60))
    assert chroma_db.count() == 1
    assert chroma_db.get_analysis("Hydra Gel")["advanced_score"]["overall"] == 60


def test_find_alternatives(chroma_db):
    assert chroma_db.find_alternatives("Anything") == []
    chroma_db.add_analysis(_record("Weak Lotion", 50))
    chroma_db.add_analysis(_record("Good Serum", 88))
    alternatives = chroma_db.find_alternatives("Weak Lotion", min_overall=50)
    assert [a["product_name"] for a in alternatives] == ["Good Serum"]
    assert alternatives[0]["overall"] == 88


def test_list_and_delete(chroma_db):
    assert chroma_db.list_analyses() == []
    chroma_db.add_analysis(_record("Weak Lotion", 50))
    chroma_db.add_analysis(_record("Good Serum", 88))
    assert [a["product_name"] for a in chroma_db.list_analyses()] == ["Good Serum", "Weak Lotion"]

    assert chroma_db.delete_analysis("good serum") is True
    assert chroma_db.delete_analysis("Good Serum") is False
    assert chroma_db.get_analysis("Good Serum") is None
    assert chroma_db.count() == 1
