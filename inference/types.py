from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class GenerationRequest:
    model: str
    contents: str
    system_instruction: str
    temperature: Optional[float] = None
    response_mime_type: Optional[str] = None     # e.g. "application/json"
    response_schema: Optional[Any] = None        # pydantic model class or schema dict


@dataclass
class GenerationResponse:
    text: Optional[str] = None


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded exponential backoff.

    Delay before the next attempt after a retryable failure on attempt i
    (0-based) is initial_delay_ms * 2**i. No jitter.
    """

    max_retries: int = 5
    initial_delay_ms: int = 5000

    def __post_init__(self):
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {self.max_retries}")
        if self.initial_delay_ms < 0:
            raise ValueError(f"initial_delay_ms must be >= 0, got {self.initial_delay_ms}")

    def delay_ms(self, attempt: int) -> int:
        return self.initial_delay_ms * (2 ** attempt)


class ErrorKind(str, Enum):
    RETRYABLE = "retryable"
    FATAL = "fatal"
