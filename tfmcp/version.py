"""Version information for the server."""

from __future__ import annotations

from pathlib import Path

_VERSION_FILE = Path(__file__).with_name("VERSION")
_FALLBACK_FULL_VERSION = "0.0.0-dev"


def split_version(text: str) -> tuple[str, str]:
    """Split a version string such as ``1.2.3-dev`` into version and pre-release.

    Surrounding whitespace is ignored; only the first ``-`` separates the parts.
    """
    version, _, prerelease = text.strip().partition("-")
    return version, prerelease


def _read_full_version() -> str:
    try:
        return _VERSION_FILE.read_text(encoding="utf-8")
    except OSError:
        return _FALLBACK_FULL_VERSION


# The git commit that was built; filled in at build time.
GIT_COMMIT = ""

VERSION, VERSION_PRERELEASE = split_version(_read_full_version())

# Build metadata as described by semantic versioning.
VERSION_METADATA = ""

# The date/time of the build (the HEAD commit, to keep builds reproducible).
BUILD_DATE = "1970-01-01T00:00:01Z"


def get_human_version() -> str:
    """Compose the version parts into a string suitable for display."""
    version = VERSION
    if VERSION_PRERELEASE:
        version += f"-{VERSION_PRERELEASE}"
    if VERSION_METADATA:
        version += f"+{VERSION_METADATA}"
    # Strip any single quotes added by the git information.
    return version.replace("'", "")