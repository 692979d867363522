import json
from typing import Dict, List, Optional

import chromadb
from sentence_transformers import SentenceTransformer


class AnalysisDatabase:
    """Analysis records in chromadb, embedded by product name.

    Records are plain dicts with ``product_name``, ``ingredients``, ``score``,
    ``advanced_score`` and ``summary``. The scores are stored as an opaque JSON
    blob; only ``overall`` and ``recommendation`` are kept as filterable fields.
    """

    COLLECTION = "analyses"

    def __init__(self, embedding_model: str = 'all-MiniLM-L6-v2', client=None):
        self.client = client or chromadb.Client()
        self.collection = self.client.get_or_create_collection(self.COLLECTION)
        self.model = SentenceTransformer(embedding_model)

    @staticmethod
    def _key(product_name: str) -> str:
        return product_name.strip().lower()

    def _embed(self, text: str) -> List[float]:
        return self.model.encode([text])[0].tolist()

    def get_analysis(self, product_name: str) -> Optional[Dict]:
        """Get a stored analysis if the product was analyzed before."""
        results = self.collection.get(ids=[self._key(product_name)])
        if not results['metadatas']:
            return None
        return json.loads(results['metadatas'][0]['payload'])

    def add_analysis(self, record: Dict):
        """Add or replace the analysis for a product."""
        key = self._key(record["product_name"])
        score = record.get("advanced_score") or record.get("score") or {}
        metadata = {
            "product_name": record["product_name"],
            "overall": int(score.get("overall", 0)),
            "recommendation": score.get("recommendation", "poor"),
            "payload": json.dumps(record, ensure_ascii=False),
        }
        self.collection.upsert(
            embeddings=[self._embed(record["product_name"])],
            documents=[record["product_name"]],
            metadatas=[metadata],
            ids=[key],
        )

    def find_alternatives(
        self, product_name: str, min_overall: float = 0, n_results: int = 3
    ) -> List[Dict]:
        """Similar products that scored better than ``min_overall``."""
        total = self.collection.count()
        if total == 0:
            return []

        results = self.collection.query(
            query_embeddings=[self._embed(product_name)],
            n_results=min(n_results + 1, total),
            where={"overall": {"$gt": min_overall}},
        )
        alternatives = []
        for metadata in results['metadatas'][0]:
            if self._key(metadata['product_name']) == self._key(product_name):
                continue
            alternatives.append({
                "product_name": metadata["product_name"],
                "overall": metadata["overall"],
                "recommendation": metadata["recommendation"],
            })
        return alternatives[:n_results]

    def list_analyses(self) -> List[Dict]:
        """Summaries of every stored analysis, ordered by product name."""
        results = self.collection.get(include=["metadatas"])
        summaries = [
            {
                "product_name": metadata["product_name"],
                "overall": metadata["overall"],
                "recommendation": metadata["recommendation"],
            }
            for metadata in results["metadatas"]
        ]
        return sorted(summaries, key=lambda x: x["product_name"].lower())

    def delete_analysis(self, product_name: str) -> bool:
        key = self._key(product_name)
        if not self.collection.get(ids=[key])["ids"]:
            return False
        self.collection.delete(ids=[key])
        return True

    def clear(self):
        self.client.delete_collection(self.COLLECTION)
        self.collection = self.client.get_or_create_collection(self.COLLECTION)

    def count(self) -> int:
        return self.collection.count()
