from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _discover_env_files() -> tuple[str, ...]:
    """Determine which env files should be loaded."""
    files: list[str] = []

    custom_env = os.getenv("ENV_FILE")
    if custom_env and Path(custom_env).is_file():
        files.append(custom_env)

    project_root = Path(__file__).resolve().parents[2]
    default_env = project_root / "config" / "environments" / "development.env"
    if default_env.is_file():
        files.append(str(default_env))

    dot_env = project_root / ".env"
    if dot_env.is_file():
        files.append(str(dot_env))

    return tuple(dict.fromkeys(files))  # Preserve order, remove duplicates


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_discover_env_files(),
        env_file_encoding="utf-8",
        extra="allow",
        populate_by_name=True,
        protected_namespaces=("settings_",),
    )

    env: str = Field(default="development", alias="ENV")
    debug: bool = Field(default=True, alias="DEBUG")
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"], alias="CORS_ORIGINS")
    enable_swagger_ui: bool = Field(default=True, alias="ENABLE_SWAGGER_UI")
    enable_redoc: bool = Field(default=True, alias="ENABLE_REDOC")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    huggingface_api_key: str | None = Field(default=None, alias="HUGGING_FACE_API_KEY")
    huggingface_token_alt: str | None = Field(default=None, alias="HUGGINGFACE_TOKEN")
    hf_inference_url: str = Field(
        default="https://api-inference.huggingface.co/models",
        alias="HF_INFERENCE_URL",
    )
    hf_sentiment_model: str = Field(
        default="cardiffnlp/twitter-roberta-base-sentiment-latest",
        alias="HF_SENTIMENT_MODEL",
    )
    hf_emotion_model: str = Field(
        default="j-hartmann/emotion-english-distilroberta-base",
        alias="HF_EMOTION_MODEL",
    )
    hf_timeout_seconds: float = Field(default=15.0, alias="HF_TIMEOUT_SECONDS")
    hf_max_retries: int = Field(default=2, alias="HF_MAX_RETRIES")
    hf_retry_backoff_seconds: float = Field(default=1.0, alias="HF_RETRY_BACKOFF_SECONDS")
    hf_unavailable_backoff_seconds: float = Field(default=2.0, alias="HF_UNAVAILABLE_BACKOFF_SECONDS")
    hf_emotion_max_chars: int = Field(default=500, alias="HF_EMOTION_MAX_CHARS")
    hf_quota_reset_seconds: float = Field(default=3600.0, alias="HF_QUOTA_RESET_SECONDS")

    remote_enabled: bool = Field(default=True, alias="REMOTE_ANALYSIS_ENABLED")
    remote_min_chars: int = Field(default=30, alias="REMOTE_MIN_CHARS")

    sentiment_cache_ttl_seconds: float = Field(default=24 * 60 * 60, alias="SENTIMENT_CACHE_TTL_SECONDS")
    sentiment_cache_max_size: int = Field(default=1024, alias="SENTIMENT_CACHE_MAX_SIZE")
    sentiment_cache_key_length: int = Field(default=100, alias="SENTIMENT_CACHE_KEY_LENGTH")

    insight_seed: int | None = Field(default=None, alias="INSIGHT_SEED")

    migration_batch_size: int = Field(default=5, alias="MIGRATION_BATCH_SIZE")
    migration_batch_delay_seconds: float = Field(default=1.0, alias="MIGRATION_BATCH_DELAY_SECONDS")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, value: Any) -> List[str]:
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return []
            if stripped.startswith("["):
                try:
                    parsed = json.loads(stripped)
                    if isinstance(parsed, list):
                        return [str(item).strip() for item in parsed if str(item).strip()]
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in stripped.split(",") if item.strip()]
        if isinstance(value, (list, tuple)):
            return [str(item).strip() for item in value if str(item).strip()]
        return []

    @field_validator("hf_max_retries", "remote_min_chars", "sentiment_cache_key_length", mode="after")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(0, value)

    @field_validator("sentiment_cache_max_size", "migration_batch_size", mode="after")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        return max(1, value)

    @property
    def huggingface_token(self) -> str | None:
        return self.huggingface_api_key or self.huggingface_token_alt


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]
