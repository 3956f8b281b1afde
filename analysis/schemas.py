"""
Request bundles and structured results for interview analysis.

Requests are frozen dataclasses built once per call. ConsistencyResult is
the only structured model output; CONSISTENCY_RESPONSE_SCHEMA declares the
same two fields to the model so the parser and the request agree.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .prompts import DEFAULT_SUMMARY_TYPE


@dataclass(frozen=True)
class FeedbackRequest:
    question: str
    male_answer: str
    female_answer: str
    target_language_name: str


@dataclass(frozen=True)
class TranslationRequest:
    text: str
    target_language: str       # "zh" | "vi"


@dataclass(frozen=True)
class SummaryRequest:
    answer: str
    target_language_name: str
    summary_type: str = DEFAULT_SUMMARY_TYPE


@dataclass(frozen=True)
class ConsistencyRequest:
    question: str
    male_answer: str
    female_answer: str


class ConsistencyResult(BaseModel):
    """Outcome of a contradiction check between the groom's and bride's answers."""

    model_config = ConfigDict(extra="ignore")

    consistent: bool
    reason: Optional[str] = Field(default=None, description="A short reason if contradictory")

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict without a `reason` key when none was given."""
        return self.model_dump(exclude_none=True)


# Sent as response_schema; mirrors ConsistencyResult.
CONSISTENCY_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "consistent": {"type": "BOOLEAN"},
        "reason": {"type": "STRING", "description": "A short reason if contradictory"},
    },
    "required": ["consistent"],
}
