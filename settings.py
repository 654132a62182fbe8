"""
Centralized configuration.

Loads everything from environment variables and the project-level ``.env``
file through ``pydantic-settings``. ``OPENAI_API_KEY`` has no default, so the
app refuses to start until it is provided. Secrets are ``SecretStr`` and never
show up in repr or logs.

Usage:
    from settings import settings
    settings.OPENAI_API_KEY.get_secret_value()
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application-wide settings.

    Attributes
    ----------
    OPENAI_API_KEY : SecretStr
        Key for the embedding and completion provider. **Required.**
    OPENAI_BASE_URL : str | None
        Optional OpenAI-compatible endpoint (e.g. Groq) for completions
        and embeddings.
    QDRANT_NAMESPACE : str | None
        Restricts retrieval to reviews ingested under this namespace.
    TOP_K : int
        Number of nearest reviews fed into the prompt.
    REVIEW_PREVIEW_CHARS : int
        Reviews longer than this are cut and suffixed with ``...``.
    MAX_TURNS : int
        Prior conversation turns forwarded to the model.
    MAX_SESSIONS, SESSION_TTL_SECONDS
        Bound the in-memory per-session state: least recently used sessions
        are evicted past the cap, idle ones after the TTL.
    """

    # ── Environment Mode ───────────────────────────────────────────────
    ENV: Literal["dev", "prod"] = "dev"

    # ── OpenAI-compatible provider ─────────────────────────────────────
    OPENAI_API_KEY: SecretStr
    OPENAI_BASE_URL: str | None = None

    EMBEDDING_MODEL: str = "text-embedding-3-small"
    EMBEDDING_DIMENSIONS: int = 1536

    LLM_MODEL: str = "gpt-4.1-nano"
    TEMPERATURE: float = 0.7
    TOP_P: float = 0.9
    MAX_TOKENS: int = 500

    # ── Qdrant ─────────────────────────────────────────────────────────
    QDRANT_URL: str = "http://qdrant:6333"
    QDRANT_API_KEY: SecretStr | None = None
    QDRANT_COLLECTION: str = "rag"
    QDRANT_NAMESPACE: str | None = None

    # ── Retrieval / prompt ─────────────────────────────────────────────
    TOP_K: int = 5
    REVIEW_PREVIEW_CHARS: int = 300
    MAX_TURNS: int = 6

    # ── Session state ──────────────────────────────────────────────────
    MAX_SESSIONS: int = 10000
    SESSION_TTL_SECONDS: float = 3600

    # ── Firebase identity toolkit ──────────────────────────────────────
    FIREBASE_API_KEY: SecretStr | None = None

    # ── HTTP ───────────────────────────────────────────────────────────
    CORS_ORIGINS: list[str] = ["*"]

    @field_validator("TOP_K")
    @classmethod
    def _top_k_range(cls, v: int) -> int:
        if not 1 <= v <= 20:
            raise ValueError(f"TOP_K must be 1–20, got {v}")
        return v

    @field_validator("REVIEW_PREVIEW_CHARS", "MAX_TOKENS", "MAX_SESSIONS")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"must be positive, got {v}")
        return v

    model_config = SettingsConfigDict(env_file = Path(__file__).resolve().parent / ".env", env_file_encoding = "utf-8", extra = "ignore")


settings = Settings()
