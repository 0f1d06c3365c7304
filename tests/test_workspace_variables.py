import json
import logging
from types import SimpleNamespace

import pytest

from tfmcp.mcp import ToolExecutionError, ToolRequest
from tfmcp.workspace_variables import (
    TFE_CLIENT_KEY,
    Variable,
    create_workspace_variable,
    list_workspace_variables,
    marshal_variables,
    update_workspace_variable,
)

LOGGER = logging.getLogger("test_workspace_variables")


class FakeWorkspaces:
    def read(self, org, name):
        if (org, name) != ("org", "ws"):
            raise LookupError("resource not found")
        return SimpleNamespace(id="ws-123")


class FakeVariables:
    def __init__(self, items=(), fail=False):
        self.items = list(items)
        self.fail = fail
        self.calls = []

    def list(self, workspace_id, page_number, page_size):
        self.calls.append(("list", workspace_id, page_number, page_size))
        if self.fail:
            raise RuntimeError("boom")
        return self.items

    def create(self, workspace_id, **options):
        self.calls.append(("create", workspace_id, options))
        if self.fail:
            raise RuntimeError("boom")
        return Variable(id="var-new", key=options["key"], value=options["value"])

    def update(self, workspace_id, variable_id, **options):
        self.calls.append(("update", workspace_id, variable_id, options))
        if self.fail:
            raise RuntimeError("boom")
        return Variable(id=variable_id, key=options["key"], value=options["value"])


def make_request(arguments, variables=None):
    context = {}
    if variables is not None:
        context[TFE_CLIENT_KEY] = SimpleNamespace(
            workspaces=FakeWorkspaces(), variables=variables
        )
    return ToolRequest(arguments=arguments, context=context)


BASE = {"terraform_org_name": "org", "workspace_name": "ws"}


def test_list_tool_creation():
    server_tool = list_workspace_variables(LOGGER)
    assert server_tool.tool.name == "list_workspace_variables"
    assert "List all variables in a Terraform workspace" in server_tool.tool.description
    assert callable(server_tool.handler)
    schema = server_tool.tool.input_schema
    assert "terraform_org_name" in schema["required"]
    assert "workspace_name" in schema["required"]
    assert schema["properties"]["pageSize"]["maximum"] == 100


def test_create_tool_creation():
    server_tool = create_workspace_variable(LOGGER)
    assert server_tool.tool.name == "create_workspace_variable"
    assert "Create a new variable in a Terraform workspace" in server_tool.tool.description
    assert callable(server_tool.handler)
    schema = server_tool.tool.input_schema
    for name in ("terraform_org_name", "workspace_name", "key", "value"):
        assert name in schema["required"]
    assert schema["properties"]["category"]["enum"] == ["terraform", "env"]
    assert schema["properties"]["category"]["default"] == "env"


def test_update_tool_creation():
    server_tool = update_workspace_variable(LOGGER)
    assert server_tool.tool.name == "update_workspace_variable"
    assert "Update an existing variable" in server_tool.tool.description
    assert callable(server_tool.handler)
    required = server_tool.tool.input_schema["required"]
    for name in ("terraform_org_name", "workspace_name", "variable_id"):
        assert name in required


def test_marshal_variables_document():
    document = json.loads(
        marshal_variables([Variable(id="var-1", key="region", value="eu", hcl=True)])
    )
    assert document == {
        "data": [
            {
                "type": "vars",
                "id": "var-1",
                "attributes": {
                    "key": "region",
                    "value": "eu",
                    "description": "",
                    "category": "env",
                    "hcl": True,
                    "sensitive": False,
                    "version-id": "",
                },
            }
        ]
    }


def test_marshal_variables_empty():
    assert json.loads(marshal_variables([])) == {"data": []}


def test_list_uses_default_pagination():
    variables = FakeVariables([Variable(id="var-1", key="a")])
    result = list_workspace_variables(LOGGER).handler(make_request(BASE, variables))
    assert variables.calls == [("list", "ws-123", 1, 30)]
    assert json.loads(result.content[0])["data"][0]["id"] == "var-1"


def test_list_uses_given_pagination():
    variables = FakeVariables()
    args = {**BASE, "page": 2.0, "pageSize": 10.0}
    list_workspace_variables(LOGGER).handler(make_request(args, variables))
    assert variables.calls == [("list", "ws-123", 2, 10)]


def test_list_invalid_pagination():
    args = {**BASE, "page": "two"}
    with pytest.raises(ToolExecutionError, match="invalid pagination parameters"):
        list_workspace_variables(LOGGER).handler(make_request(args, FakeVariables()))


def test_list_failure():
    with pytest.raises(ToolExecutionError, match="failed to list variables"):
        list_workspace_variables(LOGGER).handler(
            make_request(BASE, FakeVariables(fail=True))
        )


def test_create_defaults():
    variables = FakeVariables()
    args = {**BASE, "key": "region", "value": "eu"}
    result = create_workspace_variable(LOGGER).handler(make_request(args, variables))
    assert result.content == ["Created variable region with ID var-new"]
    assert variables.calls == [
        (
            "create",
            "ws-123",
            {
                "key": "region",
                "value": "eu",
                "category": "env",
                "sensitive": False,
                "hcl": False,
                "description": "",
            },
        )
    ]


def test_create_terraform_category_and_flags():
    variables = FakeVariables()
    args = {
        **BASE,
        "key": "region",
        "value": "eu",
        "category": "terraform",
        "sensitive": True,
        "hcl": "true",
        "description": "where",
    }
    create_workspace_variable(LOGGER).handler(make_request(args, variables))
    options = variables.calls[0][2]
    assert options["category"] == "terraform"
    assert options["sensitive"] is True
    assert options["hcl"] is True
    assert options["description"] == "where"


def test_create_missing_value():
    args = {**BASE, "key": "region"}
    with pytest.raises(ToolExecutionError, match="missing required input: value"):
        create_workspace_variable(LOGGER).handler(make_request(args, FakeVariables()))


def test_create_failure_message():
    args = {**BASE, "key": "region", "value": "eu"}
    with pytest.raises(ToolExecutionError) as info:
        create_workspace_variable(LOGGER).handler(
            make_request(args, FakeVariables(fail=True))
        )
    assert str(info.value) == "failed to create variable 'region': boom"


def test_create_unknown_workspace():
    args = {"terraform_org_name": "org", "workspace_name": "nope", "key": "k", "value": "v"}
    with pytest.raises(ToolExecutionError) as info:
        create_workspace_variable(LOGGER).handler(make_request(args, FakeVariables()))
    assert str(info.value) == "workspace 'nope' not found in org 'org'"


def test_update_includes_only_given_options():
    variables = FakeVariables()
    args = {
        **BASE,
        "variable_id": "var-9",
        "key": "region",
        "value": "us",
        "sensitive": "true",
        "description": "",
    }
    result = update_workspace_variable(LOGGER).handler(make_request(args, variables))
    assert result.content == ["Updated variable region with ID var-9"]
    assert variables.calls == [
        ("update", "ws-123", "var-9", {"key": "region", "value": "us", "sensitive": True})
    ]


def test_update_string_false_flags():
    variables = FakeVariables()
    args = {
        **BASE,
        "variable_id": "var-9",
        "key": "region",
        "value": "us",
        "hcl": "no",
        "description": "text",
    }
    update_workspace_variable(LOGGER).handler(make_request(args, variables))
    options = variables.calls[0][3]
    assert options == {"key": "region", "value": "us", "hcl": False, "description": "text"}


def test_update_missing_variable_id():
    args = {**BASE, "key": "region", "value": "us"}
    with pytest.raises(ToolExecutionError, match="missing required input: variable_id"):
        update_workspace_variable(LOGGER).handler(make_request(args, FakeVariables()))


def test_update_without_client():
    args = {**BASE, "variable_id": "var-9", "key": "region", "value": "us"}
    with pytest.raises(ToolExecutionError, match="failed to get Terraform client"):
        update_workspace_variable(LOGGER).handler(make_request(args))


def test_update_failure_message():
    args = {**BASE, "variable_id": "var-9", "key": "region", "value": "us"}
    with pytest.raises(ToolExecutionError) as info:
        update_workspace_variable(LOGGER).handler(
            make_request(args, FakeVariables(fail=True))
        )
    assert str(info.value) == "failed to update variable 'var-9': boom"