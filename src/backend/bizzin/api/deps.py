from __future__ import annotations

from fastapi import Request

from bizzin.services.analyzer import SentimentAnalyzer


def get_analyzer(request: Request) -> SentimentAnalyzer:
    return request.app.state.analyzer
