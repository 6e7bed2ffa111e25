"""Centralised settings for the convaudit service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("FETCH_TIMEOUT", "10.0"))
    )
    fetch_max_retries: int = field(
        default_factory=lambda: int(os.environ.get("FETCH_MAX_RETRIES", "2"))
    )
    fetch_retry_delay: float = field(
        default_factory=lambda: float(os.environ.get("FETCH_RETRY_DELAY", "1.0"))
    )
    fetch_max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("FETCH_MAX_REDIRECTS", "5"))
    )
    fetch_max_body_chars: int = field(
        default_factory=lambda: int(os.environ.get("FETCH_MAX_BODY_CHARS", "2000000"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "FETCH_USER_AGENT",
            "Mozilla/5.0 (compatible; ConversionBot/1.0; +https://github.com/convaudit)",
        )
    )

    # ------------------------------------------------------------------
    # Extractor
    # ------------------------------------------------------------------
    max_h2: int = field(
        default_factory=lambda: int(os.environ.get("EXTRACT_MAX_H2", "5"))
    )
    max_ctas: int = field(
        default_factory=lambda: int(os.environ.get("EXTRACT_MAX_CTAS", "10"))
    )
    max_main_text: int = field(
        default_factory=lambda: int(os.environ.get("EXTRACT_MAX_MAIN_TEXT", "3000"))
    )

    # ------------------------------------------------------------------
    # Analysis model
    # ------------------------------------------------------------------
    llm_provider: str = field(
        default_factory=lambda: os.environ.get("LLM_PROVIDER", "openai")
    )
    openai_chat_model: str = field(
        default_factory=lambda: os.environ.get("OPENAI_CHAT_MODEL", "gpt-4o-mini")
    )
    ollama_chat_model: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_CHAT_MODEL", "ministral-3:8b")
    )
    ollama_base_url: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_BASE_URL", "http://localhost:11434")
    )

    @property
    def llm_configured(self) -> bool:
        """``True`` when a real chat model can be built from these settings."""
        if self.llm_provider == "ollama":
            return True
        if self.llm_provider == "openai":
            return bool(os.environ.get("OPENAI_API_KEY"))
        return False


# Module-level singleton, import this everywhere:
#   from convaudit.config import settings
settings = Settings()
