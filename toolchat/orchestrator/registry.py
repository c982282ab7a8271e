"""
Tool Registry

Maps every public tool name to the index of the server that owns it. Built
once from the catalogs gathered at startup and read-only afterwards.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from toolchat.orchestrator.errors import ToolResolutionError

logger = logging.getLogger(__name__)


class ToolDescriptor(BaseModel):
    """A tool advertised by one server, tagged with that server's index"""
    model_config = ConfigDict(frozen=True)

    name: str
    description: Optional[str] = None
    input_schema: Dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )
    server_index: int

    def to_tool_param(self) -> Dict[str, Any]:
        """Render the descriptor in the shape the inference endpoint expects."""
        param: Dict[str, Any] = {"name": self.name, "input_schema": self.input_schema}
        if self.description:
            param["description"] = self.description
        return param


class ToolRegistry:
    """Tool name to owning server index. A later registration replaces an earlier one."""

    def __init__(self):
        self._owners: Dict[str, int] = {}
        self._descriptors: Dict[str, ToolDescriptor] = {}

    @classmethod
    def from_descriptors(cls, descriptors: Iterable[ToolDescriptor]) -> "ToolRegistry":
        registry = cls()
        for descriptor in descriptors:
            registry.register(descriptor)
        return registry

    def register(self, descriptor: ToolDescriptor) -> None:
        """
        Record the owner of a tool.

        If the name is already registered the new server silently takes it over
        (last write wins); the collision is only reported as a warning.

        Args:
            descriptor: Tool descriptor tagged with its server index
        """
        previous = self._owners.get(descriptor.name)
        if previous is not None and previous != descriptor.server_index:
            logger.warning(
                f"Tool {descriptor.name} from server {previous} is shadowed "
                f"by server {descriptor.server_index}"
            )

        self._owners[descriptor.name] = descriptor.server_index
        self._descriptors[descriptor.name] = descriptor

    def resolve(self, name: str) -> int:
        """
        Find the server that owns a tool.

        Raises:
            ToolResolutionError: If no server provides the tool
        """
        try:
            return self._owners[name]
        except KeyError:
            raise ToolResolutionError(name) from None

    def descriptors(self) -> List[ToolDescriptor]:
        """One descriptor per registered name, owned by the winning server."""
        return list(self._descriptors.values())

    def tool_params(self) -> List[Dict[str, Any]]:
        return [descriptor.to_tool_param() for descriptor in self._descriptors.values()]

    def names(self) -> List[str]:
        return list(self._owners)

    def __contains__(self, name: object) -> bool:
        return name in self._owners

    def __len__(self) -> int:
        return len(self._owners)
