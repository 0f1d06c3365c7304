"""Tools that add tags to and read tags from a Terraform workspace."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from tfmcp.mcp import ServerTool, Tool, ToolExecutionError, ToolRequest, ToolResult

# Key under which a request's context carries the Terraform API client.
TFE_CLIENT_KEY = "tfe_client"

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagBinding:
    """A workspace tag: a bare key, or a key with a value."""

    key: str
    value: str = ""

    def __str__(self) -> str:
        return f"{self.key}:{self.value}" if self.value else self.key


def parse_tag_bindings(tags: str) -> list[TagBinding]:
    """Parse a comma-separated tag list; ``key:value`` entries become key-value tags.

    Blank entries and entries with an empty key are dropped.
    """
    bindings: list[TagBinding] = []
    for raw in tags.strip().split(","):
        name = raw.strip()
        if ":" in name:
            key, _, value = name.partition(":")
            key = key.strip()
            if key:
                bindings.append(TagBinding(key, value.strip()))
            continue
        if name:
            bindings.append(TagBinding(name))
    return bindings


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


def create_workspace_tags(logger: logging.Logger | None) -> ServerTool:
    """Build the tool that adds tags to a workspace."""
    tool = Tool("create_workspace_tags", "Add tags to a Terraform workspace.")
    tool.add_parameter("terraform_org_name", "string", "Organization name", True)
    tool.add_parameter("workspace_name", "string", "Workspace name", True)
    tool.add_parameter(
        "tags",
        "string",
        "Comma-separated list of tag names to add, for key-value tags use key:value",
        True,
    )

    def handler(request: ToolRequest) -> ToolResult:
        org_name = _require(request, "terraform_org_name", logger)
        workspace_name = _require(request, "workspace_name", logger)
        tags = parse_tag_bindings(_require(request, "tags", logger))

        client = _client(request, logger)
        workspace = _read_workspace(client, org_name, workspace_name, logger)
        try:
            client.workspaces.add_tag_bindings(workspace.id, tags)
        except Exception as exc:
            raise _error(
                logger, f"failed to add tags to workspace '{workspace_name}': {exc}"
            ) from exc

        return ToolResult.text(f"Added {len(tags)} tags to workspace {workspace_name}")

    return ServerTool(tool, handler)


def read_workspace_tags(logger: logging.Logger | None) -> ServerTool:
    """Build the tool that reads the tags and tag bindings of a workspace."""
    tool = Tool(
        "read_workspace_tags",
        "Read all tags from a Terraform workspace.",
        annotations={"readOnlyHint": True, "destructiveHint": False},
    )
    tool.add_parameter("terraform_org_name", "string", "Organization name", True)
    tool.add_parameter("workspace_name", "string", "Workspace name", True)

    def handler(request: ToolRequest) -> ToolResult:
        org_name = _require(request, "terraform_org_name", logger)
        workspace_name = _require(request, "workspace_name", logger)

        client = _client(request, logger)
        workspace = _read_workspace(client, org_name, workspace_name, logger)

        try:
            tag_names = [tag.name for tag in client.workspaces.list_tags(workspace.id)]
        except Exception as exc:
            raise _error(logger, "failed to list tags", exc) from exc

        try:
            bindings = client.workspaces.list_tag_bindings(workspace.id)
        except Exception as exc:
            raise _error(logger, "failed to list tag bindings", exc) from exc
        tag_bindings = [
            f"{binding.key}:{binding.value}" if binding.value else binding.key
            for binding in bindings
        ]

        response = (
            f"Workspace {workspace_name} has {len(tag_names)} tags: "
            f"{', '.join(tag_names)}"
        )
        if tag_bindings:
            response += (
                f"Workspace {workspace_name} has {len(tag_bindings)} tag bindings: "
                f"{', '.join(tag_bindings)}"
            )
        return ToolResult.text(response)

    return ServerTool(tool, handler)