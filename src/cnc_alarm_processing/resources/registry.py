"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from cnc_alarm_processing.core.config import AlarmPayload
from cnc_alarm_processing.core.merger import MergeType
from cnc_alarm_processing.core.translators import default_registry

ALLOWED_FILE_SUFFIXES = {".txt", ".tsv", ".dic"}
BASE_DIR_ENV = "CNC_ALARMS_BASE_DIR"
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "replace"


def _base_dir() -> Path:
    """Return the resolved base directory for file resources."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = _base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def _resolve_dictionary_path(path: str) -> Path:
    """Resolve and validate a dictionary file path."""
    resolved = _safe_resolve(path)
    if not resolved.is_file():
        raise FileNotFoundError(f"File not found: {resolved}")
    if resolved.suffix.lower() not in ALLOWED_FILE_SUFFIXES:
        allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
        raise ValueError(f"File type not allowed. Allowed: {allowed}.")
    return resolved


def _read_text(path: Path) -> str:
    return path.read_text(encoding=TEXT_ENCODING, errors=TEXT_ERRORS)


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://cnc-alarms/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
        return (
            "Resources:\n"
            "- app://cnc-alarms/help\n"
            "- app://cnc-alarms/config/translators\n"
            "- app://cnc-alarms/config/merge-types\n"
            "- app://cnc-alarms/schemas/alarm\n"
            "- app://cnc-alarms/examples/trigger-rules\n"
            f"- dictionary://{{path}} (restricted to {BASE_DIR_ENV}; allowed: {allowed})\n"
            f"\nBase directory: {_base_dir()}\n"
        )

    @mcp.resource("app://cnc-alarms/config/translators")
    def translators() -> list[str]:
        """Return the translator type names accepted by process_alarms."""
        return default_registry().names()

    @mcp.resource("app://cnc-alarms/config/merge-types")
    def merge_types() -> list[str]:
        """Return the merge rule names accepted by process_alarms."""
        return [m.value for m in MergeType]

    @mcp.resource("app://cnc-alarms/schemas/alarm")
    def alarm_schema() -> dict[str, Any]:
        """Return the JSON schema of an alarm payload."""
        return AlarmPayload.model_json_schema()

    @mcp.resource("app://cnc-alarms/examples/trigger-rules")
    def sample_trigger_rules() -> str:
        """Return a sample emergency trigger rule file."""
        return (
            "# Emergency stop rules\n"
            "message:EMERGENCY STOP\n"
            "number:188[0-9]\n"
        )

    @mcp.resource("dictionary://{path}")
    async def read_dictionary(path: str) -> str:
        """Read an alarm dictionary from within CNC_ALARMS_BASE_DIR."""
        p = _resolve_dictionary_path(path)
        return await asyncio.to_thread(_read_text, p)
