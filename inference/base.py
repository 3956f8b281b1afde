from abc import ABC, abstractmethod
from .types import GenerationRequest, GenerationResponse


class ModelBackend(ABC):
    """
    Abstract model boundary.
    Analysis code must depend ONLY on this interface.

    Implementations raise the upstream error unchanged on failure so the
    retry layer can classify it.
    """

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Generate a response from the model."""
        raise NotImplementedError
