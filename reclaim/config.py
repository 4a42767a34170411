"""
Reclaim Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    VERSION: str = "0.3.0"

    # --- Model path ---
    # "gemini" enables the model verdict path; "none" runs heuristics only.
    LLM_PROVIDER: str = os.getenv("RECLAIM_LLM_PROVIDER", "gemini")
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("RECLAIM_LLM_TIMEOUT", "20"))

    # --- Input contracts ---
    MAX_INPUT_CHARS: int = int(os.getenv("RECLAIM_MAX_INPUT_CHARS", "20000"))
    MIN_AUTHORSHIP_CHARS: int = 20
    MIN_NEWS_CHARS: int = 50

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("RECLAIM_CORS_ORIGINS", "*")

    @property
    def model_path_enabled(self) -> bool:
        return self.LLM_PROVIDER != "none" and bool(self.GEMINI_API_KEY)


settings = Settings()
