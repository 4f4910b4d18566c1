from .base import LLMProvider
from .perplexity import PerplexityProvider

__all__ = ["LLMProvider", "PerplexityProvider"]
