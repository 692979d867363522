import os
from dataclasses import dataclass
from typing import Optional

STORAGE_BACKENDS = ("chroma", "memory")


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str]
    gemini_model: str
    admin_password: Optional[str]
    storage_backend: str
    embedding_model: str
    scraper_timeout: int

    @staticmethod
    def from_env() -> "Settings":
        gemini_key = os.environ.get("GEMINI_API_KEY", "").strip()
        admin_password = os.environ.get("ADMIN_PASSWORD", "").strip()
        backend = os.environ.get("STORAGE_BACKEND", "chroma").strip().lower()
        scraper_timeout = int(os.environ.get("SCRAPER_TIMEOUT", "15"))

        if backend not in STORAGE_BACKENDS:
            raise RuntimeError(f"Unknown STORAGE_BACKEND {backend!r} (expected one of {STORAGE_BACKENDS})")

        return Settings(
            gemini_api_key=gemini_key or None,
            gemini_model=os.environ.get("GEMINI_MODEL", "gemini-1.5-flash").strip(),
            admin_password=admin_password or None,
            storage_backend=backend,
            embedding_model=os.environ.get("EMBEDDING_MODEL", "all-MiniLM-L6-v2").strip(),
            scraper_timeout=scraper_timeout,
        )
