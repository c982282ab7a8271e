"""
Base LLM Client Interface

This module defines the abstract base class for inference endpoint clients,
allowing for multiple hosted backends behind one request/response contract.
"""
import abc
import logging
from typing import Any, Dict, List, Optional

from toolchat.llm.models import LLMResponse
from toolchat.orchestrator.errors import InferenceEndpointError

logger = logging.getLogger(__name__)


class BaseLLMClient(abc.ABC):
    """
    Abstract base class for LLM clients.

    Implementations translate the provider's native response into an
    LLMResponse of ordered text and tool-use blocks.
    """
    def __init__(self, model: str, max_tokens: int = 1000):
        """
        Initialize the base LLM client.

        Args:
            model: The model identifier to use
            max_tokens: Output-length budget for every request
        """
        self.model = model
        self.max_tokens = max_tokens

    async def create_message(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> LLMResponse:
        """
        Request one response from the inference endpoint.

        Args:
            messages: Ordered role-tagged messages
            tools: Tool descriptors the model may invoke; None withholds the catalog

        Returns:
            The model's response content

        Raises:
            InferenceEndpointError: If the provider call fails for any reason
        """
        try:
            return await self._call_llm(messages, tools)
        except InferenceEndpointError:
            raise
        except Exception as e:
            logger.error(f"Error calling {self.model}: {str(e)}")
            raise InferenceEndpointError(str(e)) from e

    @abc.abstractmethod
    async def _call_llm(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]],
    ) -> LLMResponse:
        """
        Call the provider. Must be implemented by subclasses.

        Args:
            messages: List of message dictionaries representing the conversation
            tools: Tool descriptors, or None when the catalog is withheld

        Returns:
            Converted response from the LLM
        """
        pass
