from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import pytest
from mcp import StdioServerParameters
from mcp.types import CallToolResult, ListToolsResult, TextContent, Tool

from toolchat.config import get_settings
from toolchat.llm.base_client import BaseLLMClient
from toolchat.llm.models import LLMResponse


class FakeLLMClient(BaseLLMClient):
    """Replays scripted responses and records every request."""

    def __init__(self, responses: List[Any] | None = None) -> None:
        super().__init__(model="fake-model", max_tokens=100)
        self.responses = list(responses or [])
        self.requests: List[Dict[str, Any]] = []

    async def _call_llm(self, messages, tools) -> LLMResponse:  # noqa: ANN001
        self.requests.append({"messages": [dict(m) for m in messages], "tools": tools})
        if not self.responses:
            raise AssertionError("Unexpected model call")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeServers:
    """Stands in for the stdio transport and MCP session of spawned servers.

    The server script path doubles as the transport's read/write handles so
    the fake session knows which server it is talking to.
    """

    def __init__(self) -> None:
        self.catalogs: Dict[str, List[str]] = {}
        self.failing: set[str] = set()
        self.spawned: List[StdioServerParameters] = []
        self.closed: List[str] = []
        self.calls: List[tuple] = []
        self.call_error: Optional[Exception] = None

    def stdio_client(self, params: StdioServerParameters, errlog: Any = None):  # noqa: ANN401
        return self._transport(params)

    @asynccontextmanager
    async def _transport(self, params: StdioServerParameters):
        path = params.args[0]
        self.spawned.append(params)
        if path in self.failing:
            raise OSError(f"cannot start {path}")
        try:
            yield path, path
        finally:
            self.closed.append(path)

    def session_class(self) -> type:
        servers = self

        class FakeClientSession:
            def __init__(self, read: str, write: str, client_info: Any = None) -> None:  # noqa: ANN401
                self.path = read
                self.client_info = client_info

            async def __aenter__(self) -> "FakeClientSession":
                return self

            async def __aexit__(self, *exc_info: Any) -> bool:  # noqa: ANN401
                return False

            async def initialize(self) -> None:
                return None

            async def list_tools(self) -> ListToolsResult:
                return ListToolsResult(
                    tools=[
                        Tool(
                            name=name,
                            description=f"{name} from {self.path}",
                            inputSchema={"type": "object", "properties": {}},
                        )
                        for name in servers.catalogs.get(self.path, [])
                    ]
                )

            async def call_tool(self, name: str, arguments: Dict[str, Any] | None = None) -> CallToolResult:
                servers.calls.append((self.path, name, arguments))
                if servers.call_error is not None:
                    raise servers.call_error
                return CallToolResult(content=[TextContent(type="text", text=f"{name} result")])

        return FakeClientSession


@pytest.fixture()
def fake_servers(monkeypatch: pytest.MonkeyPatch) -> FakeServers:
    servers = FakeServers()
    monkeypatch.setattr("toolchat.orchestrator.server_pool.stdio_client", servers.stdio_client)
    monkeypatch.setattr("toolchat.orchestrator.server_pool.ClientSession", servers.session_class())
    return servers


@pytest.fixture()
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Isolate settings from the developer's environment and .env file."""
    for name in (
        "ANTHROPIC_API_KEY",
        "METEOSTAT_RAPID_API_KEY",
        "TOOLCHAT_MODEL",
        "TOOLCHAT_MAX_TOKENS",
        "TOOLCHAT_LLM_PROVIDER",
        "TOOLCHAT_FORWARD_ENV",
        "TOOLCHAT_LOG_LEVEL",
        "TOOLCHAT_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("toolchat.config.load_dotenv", lambda: False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
