"""Tools that list, create and update Terraform workspace variables."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from tfmcp.mcp import ServerTool, Tool, ToolExecutionError, ToolRequest, ToolResult
from tfmcp.pagination import optional_pagination_params, with_pagination

# Key under which a request's context carries the Terraform API client.
TFE_CLIENT_KEY = "tfe_client"

CATEGORY_TERRAFORM = "terraform"
CATEGORY_ENV = "env"

_log = logging.getLogger(__name__)


@dataclass
class Variable:
    """A workspace variable as returned by the Terraform API."""

    id: str
    key: str
    value: str = ""
    description: str = ""
    category: str = CATEGORY_ENV
    hcl: bool = False
    sensitive: bool = False
    version_id: str = ""

    def to_resource(self) -> dict[str, Any]:
        """Return the variable as a JSON:API resource object."""
        return {
            "type": "vars",
            "id": self.id,
            "attributes": {
                "key": self.key,
                "value": self.value,
                "description": self.description,
                "category": self.category,
                "hcl": self.hcl,
                "sensitive": self.sensitive,
                "version-id": self.version_id,
            },
        }


def marshal_variables(variables: Iterable[Variable]) -> str:
    """Serialise variables as a JSON:API document."""
    return json.dumps({"data": [variable.to_resource() for variable in variables]})


def _error(
    logger: logging.Logger | None, message: str, err: BaseException | None = None
) -> ToolExecutionError:
    full = f"{message}: {err}" if err is not None else message
    (logger or _log).error(full)
    error = ToolExecutionError(full)
    error.__cause__ = err
    return error


def _require(request: ToolRequest, name: str, logger: logging.Logger | None) -> str:
    try:
        return request.require_string(name)
    except ToolExecutionError as exc:
        raise _error(logger, f"missing required input: {name}", exc) from exc


def _client(request: ToolRequest, logger: logging.Logger | None) -> Any:
    client = request.context.get(TFE_CLIENT_KEY)
    if client is None:
        raise _error(
            logger,
            "failed to get Terraform client",
            LookupError("no Terraform client in request context"),
        )
    return client


def _read_workspace(
    client: Any, org_name: str, workspace_name: str, logger: logging.Logger | None
) -> Any:
    try:
        return client.workspaces.read(org_name, workspace_name)
    except Exception as exc:
        raise _error(
            logger, f"workspace '{workspace_name}' not found in org '{org_name}'"
        ) from exc


def _workspace_tool(name: str, description: str) -> Tool:
    tool = Tool(name, description)
    tool.add_parameter("terraform_org_name", "string", "Organization name", True)
    tool.add_parameter("workspace_name", "string", "Workspace name", True)
    return tool


def list_workspace_variables(logger: logging.Logger | None) -> ServerTool:
    """Build the tool that lists a workspace's variables."""
    tool = with_pagination(
        _workspace_tool(
            "list_workspace_variables",
            "List all variables in a Terraform workspace. "
            "Returns all variables if query is empty.",
        )
    )

    def handler(request: ToolRequest) -> ToolResult:
        org_name = _require(request, "terraform_org_name", logger)
        workspace_name = _require(request, "workspace_name", logger)

        client = _client(request, logger)
        try:
            pagination = optional_pagination_params(request.arguments)
        except TypeError as exc:
            raise _error(logger, "invalid pagination parameters", exc) from exc

        workspace = _read_workspace(client, org_name, workspace_name, logger)
        try:
            variables = client.variables.list(
                workspace.id,
                page_number=pagination.page,
                page_size=pagination.page_size,
            )
        except Exception as exc:
            raise _error(logger, "failed to list variables", exc) from exc

        return ToolResult.text(marshal_variables(variables))

    return ServerTool(tool, handler)


def create_workspace_variable(logger: logging.Logger | None) -> ServerTool:
    """Build the tool that creates a workspace variable."""
    tool = _workspace_tool(
        "create_workspace_variable", "Create a new variable in a Terraform workspace."
    )
    tool.add_parameter("key", "string", "Variable key/name", True)
    tool.add_parameter("value", "string", "Variable value", True)
    tool.add_parameter("description", "string", "Variable description", default="")
    tool.add_parameter(
        "category",
        "string",
        "Variable category: terraform or env",
        enum=[CATEGORY_TERRAFORM, CATEGORY_ENV],
        default=CATEGORY_ENV,
    )
    tool.add_parameter(
        "sensitive", "boolean", "Whether variable is sensitive: true or false", default=False
    )
    tool.add_parameter("hcl", "boolean", "Whether variable is HCL: true or false", default=False)

    def handler(request: ToolRequest) -> ToolResult:
        org_name = _require(request, "terraform_org_name", logger)
        workspace_name = _require(request, "workspace_name", logger)
        key = _require(request, "key", logger)
        value = _require(request, "value", logger)

        category = (
            CATEGORY_TERRAFORM
            if request.get_string("category", "") == CATEGORY_TERRAFORM
            else CATEGORY_ENV
        )
        sensitive = request.get_bool("sensitive", False)
        hcl = request.get_bool("hcl", False)
        description = request.get_string("description", "")

        client = _client(request, logger)
        workspace = _read_workspace(client, org_name, workspace_name, logger)
        try:
            variable = client.variables.create(
                workspace.id,
                key=key,
                value=value,
                category=category,
                sensitive=sensitive,
                hcl=hcl,
                description=description,
            )
        except Exception as exc:
            raise _error(logger, f"failed to create variable '{key}': {exc}") from exc

        return ToolResult.text(f"Created variable {variable.key} with ID {variable.id}")

    return ServerTool(tool, handler)


def update_workspace_variable(logger: logging.Logger | None) -> ServerTool:
    """Build the tool that updates an existing workspace variable."""
    tool = _workspace_tool(
        "update_workspace_variable",
        "Update an existing variable in a Terraform workspace.",
    )
    tool.add_parameter("variable_id", "string", "Variable ID to update", True)
    tool.add_parameter("key", "string", "Variable key/name", True)
    tool.add_parameter("value", "string", "Variable value", True)
    tool.add_parameter(
        "sensitive", "boolean", "Whether variable is sensitive: true or false", default=False
    )
    tool.add_parameter("hcl", "boolean", "Whether variable is HCL: true or false", default=False)
    tool.add_parameter("description", "string", "Variable description")

    def handler(request: ToolRequest) -> ToolResult:
        org_name = _require(request, "terraform_org_name", logger)
        workspace_name = _require(request, "workspace_name", logger)
        variable_id = _require(request, "variable_id", logger)
        key = _require(request, "key", logger)
        value = _require(request, "value", logger)

        options: dict[str, Any] = {"key": key, "value": value}
        sensitive = request.get_string("sensitive", "")
        if sensitive:
            options["sensitive"] = sensitive == "true"
        hcl = request.get_string("hcl", "")
        if hcl:
            options["hcl"] = hcl == "true"
        description = request.get_string("description", "")
        if description:
            options["description"] = description

        client = _client(request, logger)
        workspace = _read_workspace(client, org_name, workspace_name, logger)
        try:
            variable = client.variables.update(workspace.id, variable_id, **options)
        except Exception as exc:
            raise _error(
                logger, f"failed to update variable '{variable_id}': {exc}"
            ) from exc

        return ToolResult.text(f"Updated variable {variable.key} with ID {variable.id}")

    return ServerTool(tool, handler)