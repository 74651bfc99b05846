class ProviderError(Exception):
    """Raised when a model provider call fails."""


class ProviderNetworkError(ProviderError):
    """Raised when the model provider call fails due to network/infrastructure issues."""
