"""Optional tool parameters and pagination options."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from tfmcp.mcp import Tool

T = TypeVar("T")

_TYPE_NAMES = {
    str: "string",
    float: "float64",
    int: "int",
    bool: "bool",
    type(None): "<nil>",
    dict: "object",
    list: "array",
}


@dataclass(frozen=True)
class PaginationParams:
    """Page number, page size and cursor of a paginated listing."""

    page: int = 0
    page_size: int = 0
    after: str = ""


def _type_name(tp: type) -> str:
    return _TYPE_NAMES.get(tp, tp.__name__)


def _matches(value: Any, expected_type: type) -> bool:
    if expected_type in (int, float) and isinstance(value, bool):
        return False
    if expected_type is float:
        return isinstance(value, (int, float))
    return isinstance(value, expected_type)


def optional_param(arguments: Mapping[str, Any], name: str, expected_type: type[T]) -> T:
    """Return an optional argument of the given type.

    An absent argument gives the type's zero value; a present one of another
    type raises TypeError.
    """
    if name not in arguments:
        return expected_type()
    value = arguments[name]
    if not _matches(value, expected_type):
        raise TypeError(
            f"parameter {name} is not of type {_type_name(expected_type)}, "
            f"is {_type_name(type(value))}"
        )
    if expected_type is float:
        return float(value)  # type: ignore[return-value]
    return value


def optional_int_param(arguments: Mapping[str, Any], name: str) -> int:
    """Return an optional numeric argument truncated to an integer (0 if absent)."""
    return int(optional_param(arguments, name, float))


def optional_int_param_with_default(
    arguments: Mapping[str, Any], name: str, default: int
) -> int:
    """Return an optional integer argument, or ``default`` when absent or zero."""
    value = optional_int_param(arguments, name)
    return value if value != 0 else default


def optional_pagination_params(arguments: Mapping[str, Any]) -> PaginationParams:
    """Read ``page``, ``pageSize`` and ``after`` with their defaults (1, 30, "")."""
    return PaginationParams(
        page=optional_int_param_with_default(arguments, "page", 1),
        page_size=optional_int_param_with_default(arguments, "pageSize", 30),
        after=optional_param(arguments, "after", str),
    )


def with_pagination(tool: Tool) -> Tool:
    """Add the ``page`` and ``pageSize`` parameters to a tool."""
    tool.add_parameter(
        "page", "number", "Page number for pagination (min 1)", False, minimum=1
    )
    tool.add_parameter(
        "pageSize",
        "number",
        "Results per page for pagination (min 1, max 100)",
        False,
        minimum=1,
        maximum=100,
    )
    return tool