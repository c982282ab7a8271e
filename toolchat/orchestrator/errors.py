"""
Orchestrator Error Types

Startup failures (configuration, server connections) are fatal; tool and
inference failures are caught per query and surfaced inline in the answer.
"""


class ToolchatError(Exception):
    """Base class for all client errors."""


class ConfigError(ToolchatError):
    """Missing credential or invalid setting."""


class ServerConnectionError(ToolchatError, ConnectionError):
    """A tool server path was rejected or its connection attempt failed."""


class ToolResolutionError(ToolchatError, LookupError):
    """The model asked for a tool that no connected server provides."""

    def __init__(self, tool_name: str):
        super().__init__(f"Tool {tool_name} not found in any connected server")
        self.tool_name = tool_name


class ToolInvocationError(ToolchatError):
    """A call to a tool server failed."""


class InferenceEndpointError(ToolchatError):
    """A request to the language model failed."""
