"""
LLM Client Data Models

This module defines the data models exchanged with the inference endpoint.
Response content is a closed variant: every block is either a TextBlock or a
ToolUseBlock, discriminated on its ``type`` field.
"""
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class TextBlock(BaseModel):
    """Free text produced by the model"""
    type: Literal["text"] = "text"
    text: str


class ToolUseBlock(BaseModel):
    """A request from the model to invoke a named tool"""
    type: Literal["tool_use"] = "tool_use"
    id: str = ""
    name: str
    input: Dict[str, Any] = Field(default_factory=dict)


ContentBlock = Annotated[Union[TextBlock, ToolUseBlock], Field(discriminator="type")]


class LLMResponse(BaseModel):
    """Ordered content blocks returned by one model call"""
    content: List[ContentBlock] = Field(default_factory=list)
    stop_reason: Optional[str] = None


class Message(BaseModel):
    """Represents a message in the conversation with the LLM"""
    role: Literal["user", "assistant"]
    content: str


class Conversation(BaseModel):
    """Messages accumulated while a single query is processed"""
    messages: List[Message] = Field(default_factory=list)

    def add_user(self, content: str) -> None:
        self.messages.append(Message(role="user", content=content))

    def to_params(self) -> List[Dict[str, str]]:
        return [message.model_dump() for message in self.messages]
