from bizzin.schemas.sentiment import (
    AnalyzerStatusResponse,
    AnalyzeSentimentRequest,
    AnalyzeSentimentResponse,
    ErrorResponse,
    JournalAnalyzeRequest,
    SentimentRead,
    UsageStatsRead,
)

__all__ = [
    "AnalyzerStatusResponse",
    "AnalyzeSentimentRequest",
    "AnalyzeSentimentResponse",
    "ErrorResponse",
    "JournalAnalyzeRequest",
    "SentimentRead",
    "UsageStatsRead",
]
