"""Toolset selection, tool definitions, request helpers and workspace tag and variable tools for a Terraform MCP tool server."""

__version__ = "0.1.0"