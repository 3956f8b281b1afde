"""
Model boundary layer for LLM inference.

This package provides a clean abstraction for model invocation,
allowing the analysis layer to remain agnostic of the underlying backend.

Supported backends:
- StubModelBackend: Deterministic fake model (default for CI/tests)
- GeminiModelBackend: Google Gemini via google-genai

All calls go through call_with_retry(), which absorbs rate-limit errors
with exponential backoff.

Example usage:
    from inference import StubModelBackend, GenerationRequest, call_with_retry

    backend = StubModelBackend()
    request = GenerationRequest(model="stub", contents="Hello", system_instruction="Be brief.")
    response = await call_with_retry(lambda: backend.generate(request))
"""

from .types import ErrorKind, GenerationRequest, GenerationResponse, RetryPolicy
from .base import ModelBackend
from .stub import StubModelBackend
from .gemini import DEFAULT_GEMINI_MODEL, GeminiModelBackend
from .retry import call_with_retry, classify_error

__all__ = [
    "ErrorKind",
    "GenerationRequest",
    "GenerationResponse",
    "RetryPolicy",
    "ModelBackend",
    "StubModelBackend",
    "GeminiModelBackend",
    "DEFAULT_GEMINI_MODEL",
    "call_with_retry",
    "classify_error",
]
