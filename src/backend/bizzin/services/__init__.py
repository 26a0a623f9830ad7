"""
Journal analysis services used by the API routes and batch jobs.
"""

from .analyzer import SentimentAnalyzer  # noqa: F401
from .huggingface import RemoteClassifierError  # noqa: F401
