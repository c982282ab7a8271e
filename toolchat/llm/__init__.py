"""Inference endpoint clients and the data models they exchange."""

from toolchat.llm.base_client import BaseLLMClient
from toolchat.llm.llm_client import LLMClient
from toolchat.llm.models import (
    ContentBlock,
    Conversation,
    LLMResponse,
    Message,
    TextBlock,
    ToolUseBlock,
)

__all__ = [
    "BaseLLMClient",
    "LLMClient",
    "ContentBlock",
    "Conversation",
    "LLMResponse",
    "Message",
    "TextBlock",
    "ToolUseBlock",
]
