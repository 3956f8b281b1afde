"""
Interview analysis service.

Four one-shot operations over the model boundary:
  get_feedback       → str            (bilingual fallback on failure)
  translate          → Optional[str]  (None on missing key or failure)
  summarize          → Optional[str]  (bilingual text on missing key, None on failure)
  check_consistency  → ConsistencyResult (fail-open: consistent=True)

Invariants:
- Credential presence is checked on every call; nothing is attempted without it
- Every model call goes through call_with_retry()
- These methods never raise; this is the only layer that converts errors
  into sentinel values
- The API key is never logged
"""

import asyncio
import logging
from typing import Optional

from inference import (
    DEFAULT_GEMINI_MODEL,
    GeminiModelBackend,
    GenerationRequest,
    GenerationResponse,
    ModelBackend,
    RetryPolicy,
    call_with_retry,
)
from inference.retry import Sleep

from . import prompts
from .schemas import (
    CONSISTENCY_RESPONSE_SCHEMA,
    ConsistencyRequest,
    ConsistencyResult,
    FeedbackRequest,
    SummaryRequest,
    TranslationRequest,
)

logger = logging.getLogger(__name__)


class InterviewAnalysisService:
    """
    AI-assisted analysis for bilingual marriage interviews.

    Usage:
        service = InterviewAnalysisService(api_key=config.gemini_api_key)
        text = await service.get_feedback(question, groom, bride, "Vietnamese")

    When no backend is injected a GeminiModelBackend is built per call from
    the configured key.
    """

    def __init__(
        self,
        api_key: Optional[str],
        backend: Optional[ModelBackend] = None,
        model: str = DEFAULT_GEMINI_MODEL,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Args:
            api_key:      Gemini credential; empty or None disables all calls
            backend:      Optional model backend (tests inject StubModelBackend)
            model:        Model identifier sent with every request
            retry_policy: Backoff policy shared by all operations
            sleep:        Awaitable sleep used between retries (unit-test hook)
        """
        self._api_key = api_key
        self._backend = backend
        self.model = model
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep

    # ── Internals ─────────────────────────────────────────────

    def _has_credential(self) -> bool:
        return bool(self._api_key)

    def _resolve_backend(self) -> ModelBackend:
        if self._backend is not None:
            return self._backend
        return GeminiModelBackend(api_key=self._api_key)

    async def _generate(self, request: GenerationRequest) -> GenerationResponse:
        backend = self._resolve_backend()
        return await call_with_retry(
            lambda: backend.generate(request),
            self.retry_policy,
            sleep=self._sleep,
        )

    # ── Operations ────────────────────────────────────────────

    async def get_feedback(
        self,
        question: str,
        male_answer: str,
        female_answer: str,
        target_language_name: str,
    ) -> str:
        """
        Advice on making both answers persuasive and consistent.

        Returns the raw model text, or a bilingual message when the key is
        missing or the model is unavailable.
        """
        if not self._has_credential():
            logger.error("API key not found. Set GEMINI_API_KEY in .env")
            return prompts.FEEDBACK_KEY_MISSING_MESSAGE

        req = FeedbackRequest(question, male_answer, female_answer, target_language_name)
        request = GenerationRequest(
            model=self.model,
            contents=prompts.feedback_contents(
                req.question, req.male_answer, req.female_answer, req.target_language_name
            ),
            system_instruction=prompts.feedback_instruction(req.target_language_name),
            temperature=prompts.FEEDBACK_TEMPERATURE,
        )

        try:
            response = await self._generate(request)
            if not response.text:
                logger.error("AI feedback returned no text")
                return prompts.FEEDBACK_UNAVAILABLE_MESSAGE
            return response.text
        except Exception as e:
            logger.error(f"AI feedback error: {e}", exc_info=True)
            return prompts.FEEDBACK_UNAVAILABLE_MESSAGE

    async def translate(self, text: str, target_language: prompts.TargetLanguage) -> Optional[str]:
        """Translate into Traditional Chinese ('zh') or Vietnamese ('vi'); None when unavailable."""
        if not self._has_credential():
            logger.error("API key not found")
            return None

        if target_language not in ("zh", "vi"):
            logger.warning(f"Unknown target language {target_language!r}, translating to Vietnamese")

        req = TranslationRequest(text, target_language)
        request = GenerationRequest(
            model=self.model,
            contents=req.text,
            system_instruction=prompts.translation_instruction(req.target_language),
            temperature=prompts.TRANSLATION_TEMPERATURE,
        )

        try:
            response = await self._generate(request)
            return response.text
        except Exception as e:
            logger.error(f"Translation error: {e}", exc_info=True)
            return None

    async def summarize(
        self,
        answer: str,
        target_language_name: str,
        summary_type: prompts.SummaryType = prompts.DEFAULT_SUMMARY_TYPE,
    ) -> Optional[str]:
        """
        Summarize an answer as 'concise', 'detailed' or 'keypoints'.

        Missing key returns a bilingual notice; model failure returns None.
        """
        if not self._has_credential():
            logger.error("API key not found")
            return prompts.SUMMARY_KEY_MISSING_MESSAGE

        if not prompts.is_summary_type(summary_type):
            logger.warning(f"Unknown summary type {summary_type!r}, using {prompts.DEFAULT_SUMMARY_TYPE}")
            summary_type = prompts.DEFAULT_SUMMARY_TYPE

        req = SummaryRequest(answer, target_language_name, summary_type)
        request = GenerationRequest(
            model=self.model,
            contents=prompts.summary_contents(req.answer),
            system_instruction=prompts.summary_instruction(req.target_language_name, req.summary_type),
            temperature=prompts.SUMMARY_TEMPERATURE,
        )

        try:
            response = await self._generate(request)
            return response.text
        except Exception as e:
            logger.error(f"AI summary error: {e}", exc_info=True)
            return None

    async def check_consistency(
        self,
        question: str,
        male_answer: str,
        female_answer: str,
    ) -> ConsistencyResult:
        """
        Flag factual contradictions between the two answers.

        Fails open: a missing key, transport error, or malformed response all
        yield ConsistencyResult(consistent=True) so the interview is never
        blocked by an AI malfunction.
        """
        if not self._has_credential():
            logger.error("API key not found")
            return ConsistencyResult(consistent=True)

        req = ConsistencyRequest(question, male_answer, female_answer)
        request = GenerationRequest(
            model=self.model,
            contents=prompts.consistency_contents(req.question, req.male_answer, req.female_answer),
            system_instruction=prompts.CONSISTENCY_INSTRUCTION,
            response_mime_type="application/json",
            response_schema=CONSISTENCY_RESPONSE_SCHEMA,
        )

        try:
            response = await self._generate(request)
            if not response.text:
                raise ValueError("empty structured response")
            return ConsistencyResult.model_validate_json(response.text)
        except Exception as e:
            logger.error(f"Consistency check error: {e}", exc_info=True)
            return ConsistencyResult(consistent=True)
