from typing import Optional

from google import genai
from google.genai import types

from .base import ModelBackend
from .types import GenerationRequest, GenerationResponse

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class GeminiModelBackend(ModelBackend):
    """
    Google Gemini backend using the google-genai async client.

    Maps a GenerationRequest onto models.generate_content. Errors from the
    SDK (google.genai.errors.APIError and friends) are NOT caught here;
    the retry layer needs the original exception to classify it.
    """

    def __init__(self, api_key: str, client: Optional[genai.Client] = None):
        """
        Initialize Gemini backend.

        Args:
            api_key: Gemini API key (never logged)
            client:  Optional pre-built client (unit-test hook)
        """
        self._client = client or genai.Client(api_key=api_key)

    @staticmethod
    def build_config(request: GenerationRequest) -> types.GenerateContentConfig:
        """Translate request options into a GenerateContentConfig."""
        options = {"system_instruction": request.system_instruction}
        if request.temperature is not None:
            options["temperature"] = request.temperature
        if request.response_mime_type:
            options["response_mime_type"] = request.response_mime_type
        if request.response_schema is not None:
            options["response_schema"] = request.response_schema
        return types.GenerateContentConfig(**options)

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        response = await self._client.aio.models.generate_content(
            model=request.model,
            contents=request.contents,
            config=self.build_config(request),
        )
        return GenerationResponse(text=response.text)
