import pathlib
import sys
from typing import Optional

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
BACKEND_PATH = ROOT / "src" / "backend"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))

from bizzin.core.config import Settings
from bizzin.services.huggingface import RemoteClassification, RemoteClassifierError, LabelScore


def make_settings(**overrides) -> Settings:
    values = {
        "huggingface_api_key": "hf_test_token",
        "huggingface_token_alt": None,
        "remote_enabled": True,
        "insight_seed": 7,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


class FakeRemote:
    """Stands in for HuggingFaceClient inside analyzer and API tests."""

    def __init__(
        self,
        result: Optional[RemoteClassification] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.result = result or RemoteClassification(
            primary_mood="excited",
            confidence=0.88,
            energy="high",
            emotions=["excited", "optimistic"],
            sentiment=LabelScore("positive", 0.95),
            emotion=LabelScore("joy", 0.88),
        )
        self.error = error
        self.calls: list[str] = []
        self.configured = True
        self.closed = False

    async def classify(self, text: str) -> RemoteClassification:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result

    def usage_stats(self) -> dict:
        return {"requests": len(self.calls), "errors": 0, "last_request_at": None, "quota_exceeded": False}

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def local_settings() -> Settings:
    return make_settings(remote_enabled=False)


@pytest.fixture
def failing_remote() -> FakeRemote:
    return FakeRemote(error=RemoteClassifierError("Hugging Face API error: 500", details="boom"))
