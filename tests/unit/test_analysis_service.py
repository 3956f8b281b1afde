"""
tests/unit/test_analysis_service.py

Unit tests for InterviewAnalysisService.

Verifies:
✔ Missing credential → per-operation sentinel, no backend call
✔ Successful calls return raw model text / parsed ConsistencyResult
✔ Fatal and exhausted failures → per-operation fallback, never raises
✔ Rate-limited calls are retried through the shared executor
✔ Requests carry the right instructions, temperatures and schema
✔ Concurrent operations do not interfere
"""

import asyncio

import pytest

from analysis import ConsistencyResult, InterviewAnalysisService
from analysis import prompts
from analysis.schemas import CONSISTENCY_RESPONSE_SCHEMA
from inference import RetryPolicy, StubModelBackend


# ─────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────


class RateLimitError(Exception):
    def __init__(self):
        super().__init__("429 RESOURCE_EXHAUSTED")
        self.code = 429


async def no_sleep(seconds):
    return None


def make_service(outcomes=None, api_key="test-key", max_retries=3):
    backend = StubModelBackend(outcomes)
    service = InterviewAnalysisService(
        api_key=api_key,
        backend=backend,
        model="gemini-test",
        retry_policy=RetryPolicy(max_retries=max_retries, initial_delay_ms=1),
        sleep=no_sleep,
    )
    return service, backend


QUESTION = "Where did you first meet?"
GROOM = "We met in Taipei"
BRIDE = "We met in Hanoi"


# ─────────────────────────────────────────────────────
# Missing credential
# ─────────────────────────────────────────────────────


class TestMissingCredential:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("api_key", [None, ""])
    async def test_feedback_returns_key_missing_message(self, api_key):
        service, backend = make_service(api_key=api_key)

        result = await service.get_feedback(QUESTION, GROOM, BRIDE, "Vietnamese")

        assert result == prompts.FEEDBACK_KEY_MISSING_MESSAGE
        assert backend.call_count == 0

    @pytest.mark.asyncio
    async def test_translate_returns_none(self):
        service, backend = make_service(api_key=None)

        assert await service.translate("你好", "vi") is None
        assert backend.call_count == 0

    @pytest.mark.asyncio
    async def test_summarize_returns_not_configured_text(self):
        service, backend = make_service(api_key=None)

        result = await service.summarize("long answer", "Traditional Chinese")

        assert result == prompts.SUMMARY_KEY_MISSING_MESSAGE
        assert backend.call_count == 0

    @pytest.mark.asyncio
    async def test_consistency_fails_open(self):
        service, backend = make_service(api_key=None)

        result = await service.check_consistency(QUESTION, GROOM, BRIDE)

        assert result.to_dict() == {"consistent": True}
        assert backend.call_count == 0


# ─────────────────────────────────────────────────────
# Feedback
# ─────────────────────────────────────────────────────


class TestFeedback:
    @pytest.mark.asyncio
    async def test_returns_raw_text(self):
        raw = "  **Advice**: align the meeting place.\n"
        service, _ = make_service([raw])

        assert await service.get_feedback(QUESTION, GROOM, BRIDE, "Vietnamese") == raw

    @pytest.mark.asyncio
    async def test_request_embeds_answers_and_language(self):
        service, backend = make_service(["ok"])

        await service.get_feedback(QUESTION, GROOM, BRIDE, "Vietnamese")

        request = backend.requests[0]
        assert request.model == "gemini-test"
        assert QUESTION in request.contents
        assert GROOM in request.contents
        assert BRIDE in request.contents
        assert "entirely in Vietnamese" in request.system_instruction
        assert request.temperature == 0.7
        assert request.response_schema is None

    @pytest.mark.asyncio
    async def test_fatal_error_returns_unavailable_message(self):
        service, backend = make_service([ValueError("bad request")])

        result = await service.get_feedback(QUESTION, GROOM, BRIDE, "Vietnamese")

        assert result == prompts.FEEDBACK_UNAVAILABLE_MESSAGE
        assert backend.call_count == 1

    @pytest.mark.asyncio
    async def test_exhausted_retries_return_unavailable_message(self):
        service, backend = make_service([RateLimitError() for _ in range(3)], max_retries=3)

        result = await service.get_feedback(QUESTION, GROOM, BRIDE, "Vietnamese")

        assert result == prompts.FEEDBACK_UNAVAILABLE_MESSAGE
        assert backend.call_count == 3

    @pytest.mark.asyncio
    async def test_recovers_after_rate_limit(self):
        service, backend = make_service([RateLimitError(), "advice"])

        assert await service.get_feedback(QUESTION, GROOM, BRIDE, "Vietnamese") == "advice"
        assert backend.call_count == 2
        assert backend.requests[0] is backend.requests[1]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, ""])
    async def test_empty_response_returns_unavailable_message(self, text):
        backend = StubModelBackend()
        backend.default_text = text
        service = InterviewAnalysisService(
            api_key="test-key",
            backend=backend,
            retry_policy=RetryPolicy(max_retries=1, initial_delay_ms=1),
            sleep=no_sleep,
        )

        result = await service.get_feedback(QUESTION, GROOM, BRIDE, "Vietnamese")

        assert isinstance(result, str)
        assert result == prompts.FEEDBACK_UNAVAILABLE_MESSAGE
        assert backend.call_count == 1


# ─────────────────────────────────────────────────────
# Translation
# ─────────────────────────────────────────────────────


class TestTranslate:
    @pytest.mark.asyncio
    async def test_zh_uses_traditional_chinese(self):
        service, backend = make_service(["我們在河內認識"])

        result = await service.translate("Chúng tôi gặp nhau ở Hà Nội", "zh")

        assert result == "我們在河內認識"
        request = backend.requests[0]
        assert "Traditional Chinese" in request.system_instruction
        assert "Only return the translated text" in request.system_instruction
        assert request.contents == "Chúng tôi gặp nhau ở Hà Nội"
        assert request.temperature == 0.3

    @pytest.mark.asyncio
    async def test_vi_uses_vietnamese(self):
        service, backend = make_service(["xin chào"])

        await service.translate("你好", "vi")

        assert "Vietnamese" in backend.requests[0].system_instruction

    @pytest.mark.asyncio
    async def test_failure_returns_none(self):
        service, _ = make_service([ConnectionError("reset")])

        assert await service.translate("你好", "vi") is None

    @pytest.mark.asyncio
    async def test_exhausted_returns_none(self):
        service, backend = make_service([RateLimitError() for _ in range(3)], max_retries=3)

        assert await service.translate("你好", "vi") is None
        assert backend.call_count == 3


# ─────────────────────────────────────────────────────
# Summary
# ─────────────────────────────────────────────────────


class TestSummarize:
    @pytest.mark.asyncio
    async def test_default_type_is_concise(self):
        service, backend = make_service(["short", "short"])

        await service.summarize("answer", "Vietnamese")
        await service.summarize("answer", "Vietnamese", "concise")

        assert backend.requests[0].system_instruction == backend.requests[1].system_instruction
        assert "30 words" in backend.requests[0].system_instruction

    @pytest.mark.asyncio
    async def test_variants_produce_distinct_instructions(self):
        service, backend = make_service(["a", "b", "c"])

        for summary_type in ("concise", "detailed", "keypoints"):
            await service.summarize("answer", "Vietnamese", summary_type)

        instructions = [r.system_instruction for r in backend.requests]
        assert len(set(instructions)) == 3
        assert "100 words" in instructions[1]
        assert "3 to 5" in instructions[2]
        assert all("entirely in Vietnamese" in i for i in instructions)

    @pytest.mark.asyncio
    async def test_request_contents_and_temperature(self):
        service, backend = make_service(["s"])

        await service.summarize("We married in 2023.", "Traditional Chinese")

        request = backend.requests[0]
        assert request.contents == "Content to summarize: We married in 2023."
        assert request.temperature == 0.5

    @pytest.mark.asyncio
    async def test_unknown_type_falls_back_to_concise(self):
        service, backend = make_service(["s", "s"])

        await service.summarize("answer", "Vietnamese", "haiku")
        await service.summarize("answer", "Vietnamese", "concise")

        assert backend.requests[0].system_instruction == backend.requests[1].system_instruction

    @pytest.mark.asyncio
    async def test_failure_returns_none(self):
        service, _ = make_service([RuntimeError("boom")])

        assert await service.summarize("answer", "Vietnamese") is None

    @pytest.mark.asyncio
    async def test_exhausted_returns_none(self):
        service, backend = make_service([RateLimitError() for _ in range(3)], max_retries=3)

        assert await service.summarize("answer", "Vietnamese", "detailed") is None
        assert backend.call_count == 3


# ─────────────────────────────────────────────────────
# Consistency check
# ─────────────────────────────────────────────────────


class TestCheckConsistency:
    @pytest.mark.asyncio
    async def test_contradiction_returned_verbatim(self):
        payload = '{"consistent": false, "reason": "Groom says Taipei, bride says Hanoi."}'
        service, _ = make_service([payload])

        result = await service.check_consistency(QUESTION, GROOM, BRIDE)

        assert isinstance(result, ConsistencyResult)
        assert result.consistent is False
        assert result.reason == "Groom says Taipei, bride says Hanoi."

    @pytest.mark.asyncio
    async def test_consistent_response_has_no_reason(self):
        service, _ = make_service(['{"consistent": true}'])

        result = await service.check_consistency(QUESTION, "In Taipei", "Taipei, at a cafe")

        assert result.to_dict() == {"consistent": True}

    @pytest.mark.asyncio
    async def test_request_is_structured(self):
        service, backend = make_service(['{"consistent": true}'])

        await service.check_consistency(QUESTION, GROOM, BRIDE)

        request = backend.requests[0]
        assert request.response_mime_type == "application/json"
        assert request.response_schema == CONSISTENCY_RESPONSE_SCHEMA
        assert request.response_schema["required"] == ["consistent"]
        assert "factual conflicts" in request.system_instruction
        assert GROOM in request.contents and BRIDE in request.contents

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "outcome",
        [
            "not json at all",
            '{"reason": "missing the required field"}',
            '{"consistent": "maybe"}',
            "",
            ConnectionError("network down"),
        ],
    )
    async def test_any_failure_fails_open(self, outcome):
        service, _ = make_service([outcome])

        result = await service.check_consistency(QUESTION, GROOM, BRIDE)

        assert result.to_dict() == {"consistent": True}

    @pytest.mark.asyncio
    async def test_exhausted_retries_fail_open(self):
        service, backend = make_service([RateLimitError() for _ in range(3)], max_retries=3)

        result = await service.check_consistency(QUESTION, GROOM, BRIDE)

        assert result.to_dict() == {"consistent": True}
        assert backend.call_count == 3


# ─────────────────────────────────────────────────────
# Concurrency
# ─────────────────────────────────────────────────────


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_operations_run_concurrently(self):
        service, backend = make_service()

        results = await asyncio.gather(
            service.get_feedback(QUESTION, GROOM, BRIDE, "Vietnamese"),
            service.translate("hello", "zh"),
            service.summarize("answer", "Vietnamese", "keypoints"),
        )

        assert results == [backend.default_text] * 3
        assert backend.call_count == 3
