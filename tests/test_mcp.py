import pytest

from tfmcp.mcp import (
    ServerTool,
    Tool,
    ToolExecutionError,
    ToolRequest,
    ToolResult,
    ToolServer,
    register_tools,
)
from tfmcp.toolsets import enable_individual_tools


def _server_tool(name):
    return ServerTool(Tool(name, "desc"), lambda request: ToolResult.text(name))


def test_add_parameter_builds_schema():
    tool = Tool("create_workspace_tags", "Add tags")
    tool.add_parameter("workspace_name", "string", "Workspace name", True)
    tool.add_parameter("category", "string", "Category", False, enum=["terraform", "env"])
    schema = tool.input_schema
    assert schema["type"] == "object"
    assert schema["required"] == ["workspace_name"]
    assert schema["properties"]["workspace_name"] == {
        "type": "string",
        "description": "Workspace name",
    }
    assert schema["properties"]["category"]["enum"] == ["terraform", "env"]


def test_add_parameter_does_not_duplicate_required():
    tool = Tool("t")
    tool.add_parameter("key", "string", "Key", True)
    tool.add_parameter("key", "string", "Key", True)
    assert tool.required == ["key"]


def test_add_parameter_rejects_unknown_kind():
    with pytest.raises(ValueError):
        Tool("t").add_parameter("x", "widget", "bad", False)


def test_require_string_present():
    request = ToolRequest({"workspace_name": "prod"})
    assert request.require_string("workspace_name") == "prod"


def test_require_string_missing_raises():
    with pytest.raises(ToolExecutionError, match="workspace_name"):
        ToolRequest({}).require_string("workspace_name")


def test_require_string_wrong_type_raises():
    with pytest.raises(ToolExecutionError):
        ToolRequest({"key": 5}).require_string("key")


def test_get_string_defaults():
    request = ToolRequest({"category": "terraform", "sensitive": True})
    assert request.get_string("category", "") == "terraform"
    assert request.get_string("missing", "env") == "env"
    assert request.get_string("sensitive", "") == ""


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), (False, False), ("true", True), ("false", False), (1, True), (0.0, False)],
)
def test_get_bool_conversions(value, expected):
    assert ToolRequest({"hcl": value}).get_bool("hcl", not expected) is expected


def test_get_bool_default_for_missing_and_unparseable():
    assert ToolRequest({}).get_bool("hcl", True) is True
    assert ToolRequest({"hcl": "maybe"}).get_bool("hcl", False) is False


def test_tool_result_text():
    result = ToolResult.text("Added 2 tags")
    assert result.content == ["Added 2 tags"]
    assert result.is_error is False


def test_server_add_tool_replaces_by_name():
    server = ToolServer()
    server.add_tool(_server_tool("search_providers"))
    replacement = _server_tool("search_providers")
    server.add_tool(replacement)
    assert server.tool_names() == ["search_providers"]
    assert server["search_providers"] is replacement
    assert len(server) == 1


def test_register_tools_filters_by_toolset():
    server = ToolServer()
    tools = [_server_tool(n) for n in ("search_providers", "list_workspaces", "search_modules")]
    added = register_tools(server, tools, ["registry"])
    assert added == ["search_providers", "search_modules"]
    assert server.tool_names() == added
    assert "list_workspaces" not in server


def test_register_tools_individual_mode():
    server = ToolServer()
    tools = [_server_tool(n) for n in ("search_providers", "list_workspaces")]
    register_tools(server, tools, enable_individual_tools(["list_workspaces"]))
    assert server.tool_names() == ["list_workspaces"]


def test_registered_handler_runs():
    server = ToolServer()
    register_tools(server, [_server_tool("search_modules")], ["all"])
    result = server["search_modules"].handler(ToolRequest())
    assert result.content == ["search_modules"]