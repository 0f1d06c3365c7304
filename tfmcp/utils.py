"""Helpers for provider URIs, version strings, readmes and errors."""

from __future__ import annotations

import logging
import os
import re

PROVIDER_BASE_PATH = "registry://providers"

_SEMVER_RE = re.compile(r"v?(\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?)", re.ASCII)
_HEADER_RE = re.compile(r"#+\s?")

_VALID_DOCUMENT_TYPES = (
    "resources",
    "data-sources",
    "functions",
    "guides",
    "overview",
    "actions",
    "list-resources",
)
_V2_DOCUMENT_TYPES = ("guides", "functions", "overview", "actions", "list-resources")


def extract_provider_name_and_version(uri: str) -> tuple[str, str, str]:
    """Return (namespace, name, version) from a provider URI.

    The URI needs at least five ``/``-separated segments, e.g.
    ``registry://providers/<namespace>/namespace/<name>/version/<version>``.
    """
    parts = uri.split("/")
    if len(parts) < 5:
        raise ValueError("invalid provider URI format")
    return parts[-5], parts[-3], parts[-1]


def construct_provider_version_uri(
    provider_namespace: str, provider_name: str, provider_version: str
) -> str:
    """Build the registry URI of a provider version."""
    return (
        f"{PROVIDER_BASE_PATH}/{provider_namespace}/providers/"
        f"{provider_name}/versions/{provider_version}"
    )


def contains_slug(source_name: str, slug: str) -> bool:
    """Return whether ``slug`` occurs literally anywhere in ``source_name``."""
    return slug in source_name


def is_valid_provider_version_format(version: str) -> bool:
    """Return whether the version looks like ``1.2.3``, ``v1.2.3`` or ``1.2.3-beta``."""
    return _SEMVER_RE.fullmatch(version) is not None


def is_valid_provider_document_type(provider_document_type: str) -> bool:
    """Return whether the provider documentation category is known."""
    return provider_document_type in _VALID_DOCUMENT_TYPES


def is_v2_provider_document_type(data_type: str) -> bool:
    """Return whether the documentation category is served by the v2 API."""
    return data_type in _V2_DOCUMENT_TYPES


def log_and_return_error(
    logger: logging.Logger | None, context: str, err: BaseException | None
) -> RuntimeError:
    """Wrap ``err`` with context, log it if a logger is given, and return it."""
    message = f"{context}, {err}" if err is not None else context
    wrapped = RuntimeError(message)
    wrapped.__cause__ = err
    if logger is not None:
        logger.error("Error in %s, %s", context, wrapped)
    return wrapped


def extract_readme(readme: str) -> str:
    """Return the readme up to (not including) its second heading line."""
    if not readme:
        return ""
    kept: list[str] = []
    header_found = False
    for line in readme.split("\n"):
        if _HEADER_RE.match(line):
            if header_found:
                break
            header_found = True
        kept.append(line)
    return "\n".join(kept)


def get_env(key: str, fallback: str) -> str:
    """Return an environment variable's value, or ``fallback`` if it is unset."""
    return os.environ.get(key, fallback)