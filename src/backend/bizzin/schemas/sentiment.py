from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeSentimentRequest(BaseModel):
    text: Optional[str] = None
    title: Optional[str] = None


class JournalAnalyzeRequest(BaseModel):
    content: str
    title: Optional[str] = None
    user_id: Optional[str] = None


class SentimentRead(BaseModel):
    primary_mood: str
    confidence: int = Field(ge=0, le=100)
    energy: Literal["high", "medium", "low"]
    emotions: List[str] = Field(default_factory=list)
    business_category: str
    insights: List[str] = Field(default_factory=list)
    suggested_title: Optional[str] = None
    analysis_source: str

    model_config = ConfigDict(from_attributes=True)


class AnalyzeSentimentResponse(BaseModel):
    success: bool = True
    sentiment: SentimentRead


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[str] = None


class UsageStatsRead(BaseModel):
    requests: int
    errors: int
    last_request_at: Optional[float] = None
    quota_exceeded: bool


class AnalyzerStatusResponse(BaseModel):
    remote_enabled: bool
    remote_configured: bool
    usage_stats: Optional[UsageStatsRead] = None
    cache_size: int
    lexicon_version: str
