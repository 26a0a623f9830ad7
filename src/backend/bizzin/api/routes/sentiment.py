from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from bizzin.api import deps
from bizzin.schemas.sentiment import (
    AnalyzerStatusResponse,
    AnalyzeSentimentRequest,
    AnalyzeSentimentResponse,
    ErrorResponse,
    JournalAnalyzeRequest,
    SentimentRead,
)
from bizzin.services.analyzer import SentimentAnalyzer
from bizzin.services.huggingface import RemoteClassifierError
from bizzin.services.lexicon import LEXICON_VERSION

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sentiment"])


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/analyze-sentiment",
    response_model=AnalyzeSentimentResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_sentiment(
    request: AnalyzeSentimentRequest,
    analyzer: SentimentAnalyzer = Depends(deps.get_analyzer),
):
    text = (request.text or "").strip()
    if not text:
        return error_response(400, "Text is required")
    if request.title:
        text = f"{request.title} {text}"

    try:
        result = await analyzer.analyze_remote(text)
    except RemoteClassifierError as exc:
        logger.warning("Remote sentiment analysis failed: %s", exc)
        return error_response(500, "AI analysis failed", exc.details or str(exc))
    except Exception as exc:
        logger.exception("Unexpected error during remote sentiment analysis")
        return error_response(500, "AI analysis failed", str(exc) or exc.__class__.__name__)

    return AnalyzeSentimentResponse(sentiment=SentimentRead.model_validate(result))


@router.post("/journal/analyze", response_model=AnalyzeSentimentResponse)
async def analyze_journal_entry(
    request: JournalAnalyzeRequest,
    analyzer: SentimentAnalyzer = Depends(deps.get_analyzer),
):
    if not request.content.strip():
        return error_response(400, "Content is required")
    result = await analyzer.analyze(request.content, request.title, request.user_id)
    return AnalyzeSentimentResponse(sentiment=SentimentRead.model_validate(result))


@router.get("/analyze-sentiment/status", response_model=AnalyzerStatusResponse)
def analyzer_status(analyzer: SentimentAnalyzer = Depends(deps.get_analyzer)) -> AnalyzerStatusResponse:
    return AnalyzerStatusResponse(**analyzer.status(), lexicon_version=LEXICON_VERSION)
