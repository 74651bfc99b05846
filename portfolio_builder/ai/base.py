from abc import ABC, abstractmethod


class BaseModelProvider(ABC):
    """Contract for hosted language-model backends."""

    @abstractmethod
    def generate_text(self, prompt: str) -> str:
        """Send a single user prompt and return the full text response.

        Raises:
            ProviderError: on network, auth, quota or empty-response failures.
        """

    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name for logging."""
