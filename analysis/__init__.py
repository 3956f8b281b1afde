"""
Interview analysis layer.

Feedback, translation, summary and consistency-check operations for the
bilingual marriage-interview tool, built on the inference model boundary.
"""

from .prompts import SummaryType, TargetLanguage
from .schemas import (
    ConsistencyRequest,
    ConsistencyResult,
    FeedbackRequest,
    SummaryRequest,
    TranslationRequest,
)
from .service import InterviewAnalysisService

__all__ = [
    "SummaryType",
    "TargetLanguage",
    "ConsistencyRequest",
    "ConsistencyResult",
    "FeedbackRequest",
    "SummaryRequest",
    "TranslationRequest",
    "InterviewAnalysisService",
]
