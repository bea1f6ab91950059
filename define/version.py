"""Application version information."""

from __future__ import annotations

import platform
import sys

APP_NAME = "define"

DEV_IDENTIFIER = "dev"

# Set by release builds
IDENTIFIER = DEV_IDENTIFIER
COMMIT_HASH = ""

# Normalize machine names to the short architecture names most tools print
ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
}


def version_name(identifier: str = IDENTIFIER, commit_hash: str = COMMIT_HASH) -> str:
    """The version identifier, with the commit appended for dev builds."""
    if identifier == DEV_IDENTIFIER and commit_hash:
        return f"{identifier}#{commit_hash}"
    return identifier


def platform_name() -> str:
    machine = platform.machine().lower()
    return f"{sys.platform}/{ARCH_ALIASES.get(machine, machine)}"


def printable(identifier: str = IDENTIFIER, commit_hash: str = COMMIT_HASH) -> str:
    """e.g. ``define dev#abc123 (linux/amd64)``"""
    return f"{APP_NAME} {version_name(identifier, commit_hash)} ({platform_name()})"
