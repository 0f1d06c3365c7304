"""Minimal tool-server primitives: tool schemas, requests, results and registration."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from tfmcp.toolsets import is_tool_enabled
from tfmcp.version import get_human_version

_PARAMETER_KINDS = frozenset({"string", "number", "integer", "boolean", "array", "object"})
_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class ToolExecutionError(Exception):
    """Raised when a tool request cannot be served."""


@dataclass
class Tool:
    """A tool's name, description and JSON input schema."""

    name: str
    description: str = ""
    properties: dict[str, dict[str, Any]] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    annotations: dict[str, bool] = field(default_factory=dict)

    def add_parameter(
        self,
        name: str,
        kind: str,
        description: str = "",
        required: bool = False,
        **kwargs: Any,
    ) -> Tool:
        """Add (or replace) an input parameter; extra keywords become schema keys."""
        if kind not in _PARAMETER_KINDS:
            raise ValueError(f"unknown parameter kind: {kind!r}")
        schema: dict[str, Any] = {"type": kind}
        if description:
            schema["description"] = description
        schema.update(kwargs)
        self.properties[name] = schema
        if required and name not in self.required:
            self.required.append(name)
        elif not required and name in self.required:
            self.required.remove(name)
        return self

    @property
    def input_schema(self) -> dict[str, Any]:
        """The JSON schema of the tool's arguments."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {name: dict(prop) for name, prop in self.properties.items()},
        }
        if self.required:
            schema["required"] = list(self.required)
        return schema


@dataclass
class ToolRequest:
    """The arguments of one tool call, plus per-call context values."""

    arguments: dict[str, Any] = field(default_factory=dict)
    context: dict[str, Any] = field(default_factory=dict)

    def require_string(self, name: str) -> str:
        """Return a required string argument or raise ToolExecutionError."""
        if name not in self.arguments:
            raise ToolExecutionError(f'required argument "{name}" not found')
        value = self.arguments[name]
        if not isinstance(value, str):
            raise ToolExecutionError(f'argument "{name}" is not a string')
        return value

    def get_string(self, name: str, default: str = "") -> str:
        """Return a string argument, or the default when absent or not a string."""
        value = self.arguments.get(name)
        return value if isinstance(value, str) else default

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Return a boolean argument, accepting booleans, boolean strings and numbers."""
        if name not in self.arguments:
            return default
        value = self.arguments[name]
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            if value in _TRUE_STRINGS:
                return True
            if value in _FALSE_STRINGS:
                return False
            return default
        if isinstance(value, (int, float)):
            return value != 0
        return default


@dataclass
class ToolResult:
    """The text content returned by a tool."""

    content: list[str] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, text: str) -> ToolResult:
        """Build a successful result holding one piece of text."""
        return cls(content=[text])


Handler = Callable[[ToolRequest], ToolResult]


@dataclass
class ServerTool:
    """A tool definition paired with the handler that serves it."""

    tool: Tool
    handler: Handler


class ToolServer:
    """A named collection of tools, keyed by tool name."""

    def __init__(self, name: str = "terraform-mcp-server", version: str | None = None) -> None:
        self.name = name
        self.version = version if version is not None else get_human_version()
        self._tools: dict[str, ServerTool] = {}

    def add_tool(self, server_tool: ServerTool) -> None:
        """Register a tool, replacing any tool of the same name."""
        self._tools[server_tool.tool.name] = server_tool

    def tool_names(self) -> list[str]:
        """Return the registered tool names in registration order."""
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __getitem__(self, name: str) -> ServerTool:
        return self._tools[name]

    def __iter__(self) -> Iterator[ServerTool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


def register_tools(
    server: ToolServer,
    tools: Iterable[ServerTool],
    enabled_toolsets: Sequence[str],
) -> list[str]:
    """Add each tool enabled by ``enabled_toolsets`` to the server.

    Returns the names of the tools that were added, in order.
    """
    added: list[str] = []
    for server_tool in tools:
        if is_tool_enabled(server_tool.tool.name, enabled_toolsets):
            server.add_tool(server_tool)
            added.append(server_tool.tool.name)
    return added


def _as_mapping(arguments: Mapping[str, Any] | ToolRequest) -> Mapping[str, Any]:
    return arguments.arguments if isinstance(arguments, ToolRequest) else arguments