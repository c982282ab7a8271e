"""
Query Orchestrator

Drives the model/tool exchange for a single user query: the model sees the
full tool catalog once, every tool it asks for is routed to the owning server,
and the tool's result is handed back in one catalog-free continuation call.
"""
import json
import logging
from typing import Any, List

from mcp.types import CallToolResult, TextContent

from toolchat.llm.base_client import BaseLLMClient
from toolchat.llm.models import Conversation, LLMResponse, ToolUseBlock
from toolchat.orchestrator.errors import ToolResolutionError
from toolchat.orchestrator.registry import ToolRegistry
from toolchat.orchestrator.server_pool import ServerPool

logger = logging.getLogger(__name__)

# Tool-call rounds allowed per query. Continuation calls never carry the tool
# catalog, so the model cannot chain a second round from a tool result.
MAX_TOOL_ROUNDS = 1


def format_tool_call(name: str, arguments: Any) -> str:
    return f"[Called tool {name} with args {json.dumps(arguments, separators=(',', ':'))}]"


def format_missing_tool(name: str) -> str:
    return f"[Error: Tool {name} not found in any connected server]"


def format_query_error(error: BaseException) -> str:
    return f"[Error processing query: {error}]"


def render_tool_result(result: CallToolResult) -> str:
    """Flatten a tool result into the text handed back to the model."""
    parts = []
    for item in result.content:
        if isinstance(item, TextContent):
            parts.append(item.text)
        else:
            parts.append(item.model_dump_json(exclude_none=True))
    return "\n".join(parts)


class QueryOrchestrator:
    """
    Routes model tool requests to the servers of a ServerPool.
    """

    def __init__(self, llm_client: BaseLLMClient, registry: ToolRegistry, pool: ServerPool):
        """
        Initialize the query orchestrator.

        Args:
            llm_client: Client for the inference endpoint
            registry: Tool name to server index mapping built at startup
            pool: Connected tool servers
        """
        self.llm_client = llm_client
        self.registry = registry
        self.pool = pool

    async def process_query(self, query: str) -> str:
        """
        Answer one user query.

        Text blocks are copied to the answer in order. Each tool-use block is
        dispatched to its server and followed by one continuation call whose
        first text block joins the answer. Any failure stops the scan and is
        appended as an inline error marker; the partial answer is still
        returned.

        Args:
            query: The user's raw query text

        Returns:
            The answer lines joined by newlines
        """
        conversation = Conversation()
        conversation.add_user(query)
        final_text: List[str] = []

        try:
            response = await self.llm_client.create_message(
                conversation.to_params(), tools=self.registry.tool_params()
            )

            for block in response.content:
                if block.type == "text":
                    final_text.append(block.text)
                elif block.type == "tool_use":
                    await self._dispatch_tool(block, conversation, final_text)
                else:
                    raise TypeError(f"Unhandled content block type: {block.type}")

        except Exception as e:
            logger.error(f"Error on process_query: {str(e)}")
            final_text.append(format_query_error(e))

        return "\n".join(final_text)

    async def _dispatch_tool(
        self, block: ToolUseBlock, conversation: Conversation, final_text: List[str]
    ) -> None:
        try:
            server_index = self.registry.resolve(block.name)
        except ToolResolutionError as e:
            logger.error(str(e))
            final_text.append(format_missing_tool(block.name))
            return

        result = await self.pool.invoke(server_index, block.name, block.input)
        final_text.append(format_tool_call(block.name, block.input))

        conversation.add_user(render_tool_result(result))

        follow_up = await self._continue(conversation)
        final_text.append(self._first_text(follow_up))

    async def _continue(self, conversation: Conversation) -> LLMResponse:
        # Withholding the catalog ends the round (see MAX_TOOL_ROUNDS)
        return await self.llm_client.create_message(conversation.to_params(), tools=None)

    @staticmethod
    def _first_text(response: LLMResponse) -> str:
        if response.content and response.content[0].type == "text":
            return response.content[0].text
        return ""
