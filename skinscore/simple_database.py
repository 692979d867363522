import copy
from typing import Dict, List, Optional


class SimpleAnalysisDatabase:
    def __init__(self):
        # Simple in-memory storage
        self.analyses = {}

    def get_analysis(self, product_name: str) -> Optional[Dict]:
        """Get a stored analysis if the product was analyzed before."""
        record = self.analyses.get(product_name.strip().lower())
        return copy.deepcopy(record) if record else None

    def add_analysis(self, record: Dict):
        """Add or replace the analysis for a product."""
        self.analyses[record["product_name"].strip().lower()] = copy.deepcopy(record)

    def find_alternatives(
        self, product_name: str, min_overall: float = 0, n_results: int = 3
    ) -> List[Dict]:
        """Stored products that scored better than ``min_overall``, best first."""
        alternatives = []
        for key, record in self.analyses.items():
            if key == product_name.strip().lower():
                continue
            score = record.get("advanced_score") or record.get("score") or {}
            overall = score.get("overall", 0)
            if overall > min_overall:
                alternatives.append({
                    "product_name": record["product_name"],
                    "overall": overall,
                    "recommendation": score.get("recommendation", "poor"),
                })

        alternatives.sort(key=lambda x: x["overall"], reverse=True)
        return alternatives[:n_results]

    def list_analyses(self) -> List[Dict]:
        """Summaries of every stored analysis, ordered by product name."""
        summaries = []
        for record in self.analyses.values():
            score = record.get("advanced_score") or record.get("score") or {}
            summaries.append({
                "product_name": record["product_name"],
                "overall": score.get("overall", 0),
                "recommendation": score.get("recommendation", "poor"),
            })
        return sorted(summaries, key=lambda x: x["product_name"].lower())

    def delete_analysis(self, product_name: str) -> bool:
        return self.analyses.pop(product_name.strip().lower(), None) is not None

    def clear(self):
        self.analyses.clear()

    def count(self) -> int:
        return len(self.analyses)
