"""
Infrastructure configuration system.

Environment-based backend selection with sensible defaults.
Loads a .env file from the project root when one exists.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv

from inference import (
    DEFAULT_GEMINI_MODEL,
    GeminiModelBackend,
    ModelBackend,
    RetryPolicy,
    StubModelBackend,
)

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


LLMBackendType = Literal["gemini", "stub"]


@dataclass
class InfraConfig:
    """Infrastructure configuration from environment."""

    # LLM
    llm_backend: LLMBackendType
    gemini_api_key: Optional[str]
    gemini_model: str

    # Retry
    max_retries: int
    initial_delay_ms: int

    @classmethod
    def from_env(cls) -> "InfraConfig":
        """
        Load configuration from environment variables.

        Defaults:
        - LLM: gemini (gemini-2.0-flash)
        - Retry: 5 attempts, 5000 ms base delay
        """
        return cls(
            # LLM Configuration
            llm_backend=os.getenv("LLM_BACKEND", "gemini"),  # type: ignore
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),

            # Retry Configuration
            max_retries=int(os.getenv("AI_MAX_RETRIES", "5")),
            initial_delay_ms=int(os.getenv("AI_INITIAL_DELAY_MS", "5000")),
        )

    def retry_policy(self) -> RetryPolicy:
        """Build the shared RetryPolicy (raises ValueError on non-positive retries)."""
        return RetryPolicy(
            max_retries=self.max_retries,
            initial_delay_ms=self.initial_delay_ms,
        )

    def create_llm_backend(self) -> Optional[ModelBackend]:
        """
        Create LLM backend instance based on configuration.

        Returns None for gemini without a key; the analysis service then
        reports the missing credential per call instead of failing here.
        """
        if self.llm_backend == "stub":
            return StubModelBackend()
        if not self.gemini_api_key:
            return None
        return GeminiModelBackend(api_key=self.gemini_api_key)


def get_config() -> InfraConfig:
    """Get global infrastructure configuration."""
    return InfraConfig.from_env()
