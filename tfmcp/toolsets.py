"""Toolset definitions and the rules that decide which tools are enabled."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

# Core toolsets
REGISTRY = "registry"
REGISTRY_PRIVATE = "registry-private"  # Private registry (TFE/TFC)
TERRAFORM = "terraform"  # TFE/TFC operations
DPAAS = "dpaas"  # DPaaS Innersource module generation

# Special toolsets
ALL = "all"
DEFAULT = "default"

# Internal marker for individual tool filtering
_INDIVIDUAL_TOOLS_MARKER = "__individual_tools__"


@dataclass(frozen=True)
class Toolset:
    """Metadata about a toolset."""

    name: str
    description: str


ALL_TOOLSET = Toolset(ALL, "Special toolset that enables all available toolsets")
DEFAULT_TOOLSET = Toolset(
    DEFAULT, "Special toolset that enables the default toolset configuration"
)
REGISTRY_TOOLSET = Toolset(
    REGISTRY, "Public Terraform Registry (providers, modules, policies)"
)
REGISTRY_PRIVATE_TOOLSET = Toolset(
    REGISTRY_PRIVATE,
    "Private registry access (TFE/TFC private modules and providers)",
)
TERRAFORM_TOOLSET = Toolset(
    TERRAFORM, "HCP Terraform/TFE operations (workspaces, runs, variables, etc.)"
)
DPAAS_TOOLSET = Toolset(
    DPAAS, "DPaaS Innersource module generation for Azure resources"
)

TOOL_TO_TOOLSET: dict[str, str] = {
    # Public Registry tools (providers, modules, policies)
    "search_providers": REGISTRY,
    "get_provider_details": REGISTRY,
    "get_latest_provider_version": REGISTRY,
    "get_provider_capabilities": REGISTRY,
    "search_modules": REGISTRY,
    "get_module_details": REGISTRY,
    "get_latest_module_version": REGISTRY,
    "search_policies": REGISTRY,
    "get_policy_details": REGISTRY,
    # Private Registry tools (TFE/TFC private registry)
    "search_private_modules": REGISTRY_PRIVATE,
    "get_private_module_details": REGISTRY_PRIVATE,
    "search_private_providers": REGISTRY_PRIVATE,
    "get_private_provider_details": REGISTRY_PRIVATE,
    # Terraform tools (TFE/TFC workspaces, runs, variables, etc.)
    "list_terraform_orgs": TERRAFORM,
    "list_terraform_projects": TERRAFORM,
    "list_workspaces": TERRAFORM,
    "get_workspace_details": TERRAFORM,
    "create_workspace": TERRAFORM,
    "create_no_code_workspace": TERRAFORM,
    "update_workspace": TERRAFORM,
    "delete_workspace_safely": TERRAFORM,
    "list_runs": TERRAFORM,
    "get_run_details": TERRAFORM,
    "create_run": TERRAFORM,
    "action_run": TERRAFORM,
    "list_workspace_variables": TERRAFORM,
    "create_workspace_variable": TERRAFORM,
    "update_workspace_variable": TERRAFORM,
    "list_variable_sets": TERRAFORM,
    "create_variable_set": TERRAFORM,
    "create_variable_in_variable_set": TERRAFORM,
    "delete_variable_in_variable_set": TERRAFORM,
    "attach_variable_set_to_workspaces": TERRAFORM,
    "detach_variable_set_from_workspaces": TERRAFORM,
    "create_workspace_tags": TERRAFORM,
    "read_workspace_tags": TERRAFORM,
    "attach_policy_set_to_workspaces": TERRAFORM,
    "get_token_permissions": TERRAFORM,
    "list_stacks": TERRAFORM,
    "get_stack_details": TERRAFORM,
    "list_workspace_policy_sets": TERRAFORM,
    # DPaaS Innersource tools
    "dpaas_list_azure_resources": DPAAS,
    "dpaas_extract_resource_schema": DPAAS,
    "dpaas_generate_innersource_module": DPAAS,
    "dpaas_validate_module": DPAAS,
}


def available_toolsets() -> list[Toolset]:
    """Return the selectable (non-special) toolsets."""
    return [REGISTRY_TOOLSET, REGISTRY_PRIVATE_TOOLSET, TERRAFORM_TOOLSET, DPAAS_TOOLSET]


def default_toolsets() -> list[str]:
    """Return the names of the toolsets enabled by default."""
    return [REGISTRY]


def get_valid_toolset_names() -> set[str]:
    """Return every name accepted as a toolset, special keywords included."""
    names = {ts.name for ts in available_toolsets()}
    names.add(ALL_TOOLSET.name)
    names.add(DEFAULT_TOOLSET.name)
    return names


def _unique_trimmed(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        trimmed = value.strip()
        if trimmed and trimmed not in seen:
            seen.add(trimmed)
            result.append(trimmed)
    return result


def clean_toolsets(enabled_toolsets: Iterable[str]) -> tuple[list[str], list[str]]:
    """Trim and de-duplicate toolset names.

    Returns all cleaned names (in first-seen order) and the subset of them
    that are not valid toolset names.
    """
    valid_names = get_valid_toolset_names()
    cleaned = _unique_trimmed(enabled_toolsets)
    invalid = [name for name in cleaned if name not in valid_names]
    return cleaned, invalid


def expand_default_toolset(toolsets: Sequence[str]) -> list[str]:
    """Replace the ``default`` keyword with the default toolsets not already listed."""
    if DEFAULT not in toolsets:
        return list(toolsets)
    seen = set(toolsets)
    result = [ts for ts in toolsets if ts != DEFAULT]
    result.extend(ts for ts in default_toolsets() if ts not in seen)
    return result


def contains_toolset(toolsets: Iterable[str], to_check: str) -> bool:
    """Return whether ``to_check`` is in ``toolsets``."""
    return to_check in toolsets


def generate_toolsets_help() -> str:
    """Build the help text for the toolsets option."""
    default_tools = ", ".join(default_toolsets())
    available = ", ".join(ts.name for ts in available_toolsets())
    return (
        "Comma-separated list of tool groups to enable.\n"
        f"Available: {available}\n"
        "Special toolset keywords:\n"
        "  - all: Enables all available toolsets\n"
        f"  - default: Enables the default toolset configuration ({default_tools})\n"
        "Examples:\n"
        "  - --toolsets=registry,terraform\n"
        "  - --toolsets=default,registry-private\n"
        "  - --toolsets=all"
    )


def generate_tools_help() -> str:
    """Build the help text for the tools option."""
    return (
        "Comma-separated list of individual tool names to enable.\n"
        "When specified, only these tools will be available.\n"
        "Cannot be used together with --toolsets flag.\n"
        "Example:\n"
        "  - --tools=search_providers,get_provider_details,search_modules"
    )


def get_toolset_for_tool(tool_name: str) -> str | None:
    """Return the toolset a tool belongs to, or None for an unknown tool."""
    return TOOL_TO_TOOLSET.get(tool_name)


def get_all_valid_tool_names() -> set[str]:
    """Return the names of all known tools."""
    return set(TOOL_TO_TOOLSET)


def parse_individual_tools(tool_names: Iterable[str]) -> tuple[list[str], list[str]]:
    """Trim, de-duplicate and validate tool names.

    Returns the valid names and the invalid names, each in first-seen order.
    """
    known = get_all_valid_tool_names()
    valid: list[str] = []
    invalid: list[str] = []
    for name in _unique_trimmed(tool_names):
        (valid if name in known else invalid).append(name)
    return valid, invalid


def enable_individual_tools(tool_names: Iterable[str]) -> list[str]:
    """Build an enabled-toolsets list that selects exactly the given tools."""
    return [_INDIVIDUAL_TOOLS_MARKER, *tool_names]


def is_tool_enabled(tool_name: str, enabled_toolsets: Sequence[str]) -> bool:
    """Return whether a tool is enabled by the given toolsets list."""
    if ALL in enabled_toolsets:
        return True
    if _INDIVIDUAL_TOOLS_MARKER in enabled_toolsets:
        return tool_name in enabled_toolsets
    toolset = get_toolset_for_tool(tool_name)
    if toolset is None:
        return False
    return toolset in enabled_toolsets