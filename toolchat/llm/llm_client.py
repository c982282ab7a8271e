"""
LLM Client Factory Module

This module provides a unified interface for creating inference endpoint clients.
"""
import logging

from toolchat.llm.anthropic_client import AnthropicClient
from toolchat.llm.base_client import BaseLLMClient
from toolchat.orchestrator.errors import ConfigError

logger = logging.getLogger(__name__)


class LLMClient:
    """
    Factory class for creating LLM clients based on the selected provider.
    """

    @staticmethod
    def create(
        provider: str = "anthropic",
        model: str = "claude-3-5-sonnet-20241022",
        api_key: str = "",
        max_tokens: int = 1000,
    ) -> BaseLLMClient:
        """
        Create an LLM client for the specified provider.

        Args:
            provider: The LLM provider to use ('anthropic')
            model: The model to use
            api_key: API key for the provider
            max_tokens: Maximum number of tokens to generate

        Returns:
            An instance of BaseLLMClient for the specified provider
        """
        if provider.lower() == "anthropic":
            logger.debug(f"Creating Anthropic client for model {model}")
            return AnthropicClient(api_key=api_key, model=model, max_tokens=max_tokens)

        raise ConfigError(f"Unsupported LLM provider: {provider}")
