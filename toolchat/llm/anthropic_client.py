"""
Anthropic LLM Client

This module provides the client for Anthropic's hosted Messages API.
"""
import logging
from typing import Any, Dict, List, Optional

from anthropic import AsyncAnthropic

from toolchat.llm.base_client import BaseLLMClient
from toolchat.llm.models import LLMResponse, TextBlock, ToolUseBlock

logger = logging.getLogger(__name__)


class AnthropicClient(BaseLLMClient):
    """
    Client for Claude models served by the Anthropic API.
    """
    def __init__(
        self,
        api_key: str,
        model: str,
        max_tokens: int = 1000,
        client: Optional[AsyncAnthropic] = None,
    ):
        """
        Initialize the Anthropic client.

        Args:
            api_key: Anthropic API key
            model: Claude model identifier
            max_tokens: Output-length budget for every request
            client: Optional preconfigured SDK client
        """
        super().__init__(model, max_tokens)
        self.client = client or AsyncAnthropic(api_key=api_key)

    async def _call_llm(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]],
    ) -> LLMResponse:
        request: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": messages,
        }
        # The tools key is left out entirely when the catalog is withheld
        if tools is not None:
            request["tools"] = tools

        response = await self.client.messages.create(**request)
        logger.info("Claude response received")

        return self._convert_response(response)

    @staticmethod
    def _convert_response(response: Any) -> LLMResponse:
        content = []
        for block in response.content:
            if block.type == "text":
                content.append(TextBlock(text=block.text))
            elif block.type == "tool_use":
                content.append(
                    ToolUseBlock(id=block.id, name=block.name, input=block.input or {})
                )
            else:
                logger.debug(f"Ignoring unsupported content block: {block.type}")

        return LLMResponse(content=content, stop_reason=getattr(response, "stop_reason", None))
