from portfolio_builder.ai.base import BaseModelProvider
from portfolio_builder.ai.exceptions import ProviderError
from portfolio_builder.ai.factory import ModelProviderFactory

__all__ = ["BaseModelProvider", "ModelProviderFactory", "ProviderError"]
