# tfmcp

Building blocks for a Model Context Protocol tool server that works with
Terraform: choosing which tools to expose, defining tools and their input
schemas, reading arguments out of tool requests, and a set of workspace
tag and variable tools.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Choosing tools (`tfmcp.toolsets`)

Every known tool name belongs to one toolset: `registry`,
`registry-private`, `terraform` or `dpaas` (the mapping is
`TOOL_TO_TOOLSET`). The special names `all` and `default` enable every
tool and the default configuration (`registry`) respectively.

```python
from tfmcp.toolsets import (
    clean_toolsets,
    expand_default_toolset,
    is_tool_enabled,
    parse_individual_tools,
    enable_individual_tools,
)

cleaned, invalid = clean_toolsets(["default", " terraform ", "terraform"])
# cleaned == ["default", "terraform"], invalid == []
enabled = expand_default_toolset(cleaned)       # ["terraform", "registry"]
is_tool_enabled("search_providers", enabled)     # True

valid, unknown = parse_individual_tools(["search_providers", "nope"])
# valid == ["search_providers"], unknown == ["nope"]
only = enable_individual_tools(valid)
is_tool_enabled("list_workspaces", only)         # False
```

`clean_toolsets` trims names, drops blanks and duplicates, and returns
every cleaned name together with those that are not valid toolset names.
Also available: `available_toolsets()`, `default_toolsets()`,
`get_valid_toolset_names()`, `contains_toolset()`,
`get_toolset_for_tool()` (returns `None` for an unknown tool),
`get_all_valid_tool_names()`, and `generate_toolsets_help()` /
`generate_tools_help()`, which return help text suited to command-line
options.

## Tools, requests and servers (`tfmcp.mcp`)

- `Tool(name, description)` holds a tool's input schema.
  `add_parameter(name, kind, description, required, **kwargs)` adds a
  parameter (`kind` is one of `string`, `number`, `integer`, `boolean`,
  `array`, `object`; extra keywords such as `minimum`, `enum` or
  `default` go into the parameter's schema). `input_schema` returns the
  JSON schema.
- `ToolRequest(arguments, context)` carries a call's arguments and
  per-call context. `require_string` raises `ToolExecutionError` when an
  argument is missing or not a string; `get_string` and `get_bool` fall
  back to a default.
- `ToolResult.text(text)` builds a result holding one piece of text.
- `ServerTool(tool, handler)` pairs a tool with a handler that takes a
  `ToolRequest` and returns a `ToolResult`.
- `ToolServer` keeps tools by name (`add_tool`, `tool_names`, `in`,
  indexing, iteration, `len`).
- `register_tools(server, tools, enabled_toolsets)` adds only the tools
  whose names are enabled and returns the names it added.

## Workspace tools

`tfmcp.workspace_tags` provides `create_workspace_tags(logger)` and
`read_workspace_tags(logger)`; `tfmcp.workspace_variables` provides
`list_workspace_variables(logger)`, `create_workspace_variable(logger)`
and `update_workspace_variable(logger)`. Each returns a `ServerTool`.
`parse_tag_bindings("a, env:prod")` turns a comma-separated tag list into
`TagBinding` objects, and `marshal_variables` writes `Variable` objects as
a JSON:API document.

The handlers call a Terraform API client that the caller supplies in the
request context under the key `"tfe_client"`:

```python
from tfmcp.mcp import ToolRequest
from tfmcp.workspace_tags import read_workspace_tags

tool = read_workspace_tags(None)
request = ToolRequest(
    arguments={"terraform_org_name": "my-org", "workspace_name": "web"},
    context={"tfe_client": client},
)
result = tool.handler(request)
print(result.content[0])
```

The client is expected to offer `workspaces.read(org, name)` (returning
an object with an `id`), `workspaces.add_tag_bindings`,
`workspaces.list_tags`, `workspaces.list_tag_bindings`, and
`variables.list`, `variables.create` and `variables.update`. Any failure
is raised as `ToolExecutionError` and logged to the given logger (or the
module's own logger when it is `None`).

## Request helpers

`tfmcp.pagination.optional_pagination_params(arguments)` reads `page`,
`pageSize` and `after` from a request's arguments, with defaults of 1 and
30 for the first two (a zero also gives the default), and raises
`TypeError` when an argument has the wrong type. `optional_param`,
`optional_int_param` and `optional_int_param_with_default` read single
arguments; `with_pagination(tool)` adds the `page` and `pageSize`
parameters to a tool.

`tfmcp.utils` has helpers for provider URIs
(`extract_provider_name_and_version`, `construct_provider_version_uri`),
`contains_slug`, `is_valid_provider_version_format`, document-type checks,
`log_and_return_error`, `extract_readme` (a README up to its second
heading) and `get_env`.

## Version

```python
from tfmcp.version import get_human_version
print(get_human_version())
```

The version is read from a `VERSION` file next to `tfmcp/version.py`;
without one it is `0.0.0-dev`.

## What this package does not do

- It has no command and does not run a server: `ToolServer` only holds
  tools, and nothing here speaks the MCP protocol over stdio or HTTP.
- It contains no Terraform API client; the workspace tools need one to be
  supplied in the request context.
- Of the tools named in `TOOL_TO_TOOLSET`, only the five workspace tag
  and variable tools are built here; the registry, private registry,
  other Terraform and DPaaS tools are listed by name only.