"""
Server Pool

Owns the connections to every tool server named on the command line. Servers
are spawned as child processes and spoken to over stdio; all of them are
connected concurrently at startup and closed together on exit.
"""
import asyncio
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.types import CallToolResult, Implementation

from toolchat import __version__
from toolchat.orchestrator.errors import ServerConnectionError, ToolInvocationError
from toolchat.orchestrator.registry import ToolDescriptor

logger = logging.getLogger(__name__)

PYTHON_COMMAND = "python" if sys.platform == "win32" else "python3"

# Launch command per recognised script extension
SERVER_COMMANDS: Dict[str, str] = {
    ".py": PYTHON_COMMAND,
    ".js": "node",
}

EMPTY_SCHEMA: Dict[str, Any] = {"type": "object", "properties": {}}


def resolve_command(path: str) -> str:
    """
    Pick the interpreter for a server script from its extension.

    Args:
        path: Path to the server script

    Returns:
        The command used to launch the script

    Raises:
        ServerConnectionError: If the extension is not recognised
    """
    extension = os.path.splitext(path)[1]
    command = SERVER_COMMANDS.get(extension)
    if command is None:
        raise ServerConnectionError(
            f"Server script must be a .js or .py file (got {path})"
        )
    return command


class ServerConnection:
    """
    One tool server process and the MCP session talking to it.

    The stdio transport and the session are entered and exited by a dedicated
    task, since the cancel scopes they open must be closed by the task that
    opened them.
    """

    def __init__(self, index: int, path: str, params: StdioServerParameters):
        self.index = index
        self.path = path
        self.params = params
        self.session: Optional[ClientSession] = None
        self._ready: Optional[asyncio.Future] = None
        self._shutdown = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def is_open(self) -> bool:
        return self.session is not None

    async def open(self) -> None:
        """Spawn the server and wait until its session is initialized."""
        self._ready = asyncio.get_running_loop().create_future()
        self._task = asyncio.create_task(self._run(), name=f"mcp-server-{self.index}")
        await self._ready

    async def _run(self) -> None:
        client_info = Implementation(name=f"mcp-client-{self.index}", version=__version__)
        try:
            async with stdio_client(self.params) as (read, write):
                async with ClientSession(read, write, client_info=client_info) as session:
                    await session.initialize()
                    self.session = session
                    self._ready.set_result(None)
                    await self._shutdown.wait()
        except Exception as e:
            if not self._ready.done():
                self._ready.set_exception(e)
                return
            raise
        finally:
            self.session = None
            if not self._ready.done():
                self._ready.set_exception(
                    ServerConnectionError(f"Server {self.index + 1} stopped before it was ready")
                )

    async def list_tools(self) -> List[Any]:
        if self.session is None:
            raise ServerConnectionError(f"Server {self.index + 1} is not connected")
        result = await self.session.list_tools()
        return list(result.tools)

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> CallToolResult:
        if self.session is None:
            raise ToolInvocationError(f"Server {self.index} is not connected")
        return await self.session.call_tool(name, arguments=arguments)

    async def close(self) -> None:
        """Stop the session task and wait for the server process to be released."""
        if self._task is None:
            return
        self._shutdown.set()
        try:
            await self._task
        finally:
            self._task = None


class ServerPool:
    """
    Fixed set of tool server connections, keyed by command-line position.

    Use as an async context manager so every opened connection is closed on
    exit, whether or not startup succeeded.
    """

    def __init__(self, env: Optional[Dict[str, str]] = None):
        """
        Args:
            env: Extra environment variables for every spawned server
        """
        self.env = env
        self._connections: Dict[int, ServerConnection] = {}

    async def __aenter__(self) -> "ServerPool":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close_all()

    @property
    def connections(self) -> List[ServerConnection]:
        return [self._connections[index] for index in sorted(self._connections)]

    def __len__(self) -> int:
        return len(self._connections)

    async def connect(self, paths: Sequence[str]) -> List[ToolDescriptor]:
        """
        Connect to every server concurrently and collect their tool catalogs.

        All paths are validated before any process is spawned. If any
        connection fails, the remaining attempts are still awaited so that every
        server that did come up is tracked for close_all().

        Args:
            paths: Server script paths in command-line order

        Returns:
            Tool descriptors tagged with their server index, in server order

        Raises:
            ServerConnectionError: On an empty list, a bad extension or a failed connection
        """
        if not paths:
            raise ServerConnectionError("At least one server script path is required")

        commands = [resolve_command(path) for path in paths]

        results = await asyncio.gather(
            *[
                self._connect_one(index, path, command)
                for index, (path, command) in enumerate(zip(paths, commands))
            ],
            return_exceptions=True,
        )

        for result in results:
            if isinstance(result, BaseException):
                logger.error(f"Failed to connect to MCP server: {result}")
                raise result

        tools = [descriptor for catalog in results for descriptor in catalog]
        logger.info(f"Connected to server with tools: {[tool.name for tool in tools]}")
        return tools

    async def _connect_one(self, index: int, path: str, command: str) -> List[ToolDescriptor]:
        logger.info(f"Connecting to server {index + 1}: {path}")

        params = StdioServerParameters(command=command, args=[path], env=self.env or None)
        connection = ServerConnection(index, path, params)

        try:
            await connection.open()
        except Exception as e:
            raise ServerConnectionError(
                f"Failed to connect to server {index + 1} ({path}): {e}"
            ) from e

        self._connections[index] = connection

        try:
            catalog = await connection.list_tools()
        except Exception as e:
            raise ServerConnectionError(
                f"Failed to list tools of server {index + 1} ({path}): {e}"
            ) from e

        descriptors = [
            ToolDescriptor(
                name=tool.name,
                description=tool.description,
                input_schema=tool.inputSchema or EMPTY_SCHEMA,
                server_index=index,
            )
            for tool in catalog
        ]
        logger.info(f"Server {index + 1} tools: {', '.join(d.name for d in descriptors)}")

        return descriptors

    async def invoke(
        self, server_index: int, tool_name: str, arguments: Dict[str, Any]
    ) -> CallToolResult:
        """
        Call a tool on a specific server.

        Raises:
            ToolInvocationError: If the server is unknown or the remote call fails
        """
        connection = self._connections.get(server_index)
        if connection is None:
            raise ToolInvocationError(f"No connected server with index {server_index}")

        logger.info(f"Calling tool {tool_name} on server {server_index}")

        try:
            return await connection.call_tool(tool_name, arguments)
        except ToolInvocationError:
            raise
        except Exception as e:
            raise ToolInvocationError(
                f"Tool {tool_name} on server {server_index} failed: {e}"
            ) from e

    async def close_all(self) -> None:
        """Close every held connection; a failing close does not stop the others."""
        for index, connection in sorted(self._connections.items()):
            try:
                await connection.close()
            except Exception as e:
                logger.error(f"Error disconnecting from server {index + 1}: {str(e)}")

        self._connections.clear()
        logger.info("Closed all MCP connections")
