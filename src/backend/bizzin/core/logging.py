"""Console logging with Hugging Face tokens masked in every record."""
from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any, Iterable

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
MASK_VISIBLE_CHARS = 4
QUIET_LOGGERS = ("uvicorn.access", "httpx")


def mask_token(token: str, visible: int = MASK_VISIBLE_CHARS) -> str:
    if len(token) <= visible:
        return "*" * len(token)
    return token[:visible] + "*" * (len(token) - visible)


class SecretMaskFilter(logging.Filter):
    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        cleaned = (secret.strip() for secret in secrets if secret)
        self.replacements = {secret: mask_token(secret) for secret in dict.fromkeys(cleaned) if secret}

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.replacements:
            return True
        message = record.getMessage()
        masked = message
        for secret, replacement in self.replacements.items():
            masked = masked.replace(secret, replacement)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True


def token_values(settings: Settings) -> list[str]:
    """Every Hugging Face token value the service reads from its environment."""
    return [token for token in (settings.huggingface_api_key, settings.huggingface_token_alt) if token]


def logging_config(settings: Settings) -> dict[str, Any]:
    # The filter sits on the handler so propagated records are masked too.
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"mask_tokens": {"()": SecretMaskFilter, "secrets": token_values(settings)}},
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "filters": ["mask_tokens"],
            }
        },
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        "root": {"level": settings.log_level.upper(), "handlers": ["console"]},
    }


def configure_logging(settings: Settings | None = None) -> None:
    dictConfig(logging_config(settings or get_settings()))
