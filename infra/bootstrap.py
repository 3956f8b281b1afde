"""
Infrastructure initialization and bootstrap.

Singleton pattern for creating the analysis service from configuration.
"""

from typing import Optional

from analysis import InterviewAnalysisService
from inference import ModelBackend

from .config import InfraConfig, get_config


class InfraBootstrap:
    """
    Bootstrap infrastructure based on configuration.

    Singleton pattern - single instance per process.
    """

    _instance: Optional["InfraBootstrap"] = None

    def __init__(self, config: Optional[InfraConfig] = None):
        """Initialize bootstrap with configuration."""
        self.config = config or get_config()
        self.llm_backend = self.config.create_llm_backend()
        self.analysis_service = InterviewAnalysisService(
            api_key=self._credential(),
            backend=self.llm_backend,
            model=self.config.gemini_model,
            retry_policy=self.config.retry_policy(),
        )

    def _credential(self) -> Optional[str]:
        # The stub backend needs no real key but operations still gate on one.
        if self.config.llm_backend == "stub":
            return self.config.gemini_api_key or "stub"
        return self.config.gemini_api_key

    @classmethod
    def get_instance(cls, config: Optional[InfraConfig] = None) -> "InfraBootstrap":
        """
        Get singleton instance.

        Args:
            config: Optional custom configuration (only used first time)

        Returns:
            Singleton InfraBootstrap instance
        """
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton (for testing)."""
        cls._instance = None

    def get_llm_backend(self) -> Optional[ModelBackend]:
        """Get LLM backend (or None when no credential is configured)."""
        return self.llm_backend

    def get_analysis_service(self) -> InterviewAnalysisService:
        """Get the interview analysis service."""
        return self.analysis_service

    def __repr__(self) -> str:
        """String representation showing configured backends."""
        return (
            f"InfraBootstrap(llm={self.config.llm_backend}, "
            f"model={self.config.gemini_model}, "
            f"key={'set' if self.config.gemini_api_key else 'missing'})"
        )


def bootstrap_infrastructure(config: Optional[InfraConfig] = None) -> InfraBootstrap:
    """
    Bootstrap all infrastructure backends.

    Args:
        config: Optional custom configuration

    Returns:
        InfraBootstrap instance with all backends initialized
    """
    return InfraBootstrap.get_instance(config)
