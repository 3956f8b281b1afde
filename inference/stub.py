from typing import List, Optional, Sequence, Union

from .base import ModelBackend
from .types import GenerationRequest, GenerationResponse

ScriptedOutcome = Union[str, BaseException]


class StubModelBackend(ModelBackend):
    """
    Deterministic fake model for testing and CI.

    Plays back a script of outcomes, one per generate() call: a string is
    returned as the response text, an exception is raised as-is. Once the
    script runs out the default text is returned. Every request is recorded
    in `requests` so tests can assert on the prompts that were sent.
    """

    def __init__(
        self,
        outcomes: Optional[Sequence[ScriptedOutcome]] = None,
        default_text: str = "This is a stubbed response.",
    ):
        self._outcomes: List[ScriptedOutcome] = list(outcomes or [])
        self.default_text = default_text
        self.requests: List[GenerationRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        self.requests.append(request)

        if not self._outcomes:
            return GenerationResponse(text=self.default_text)

        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return GenerationResponse(text=outcome)
