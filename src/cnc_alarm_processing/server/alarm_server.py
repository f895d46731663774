"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: run the alarm pipeline on a batch, look up one alarm code
- Resources: configuration names, schemas and dictionary files
- Prompts: reusable conversation templates that clients can invoke

Run locally (stdio):
    python -m cnc_alarm_processing.server.alarm_server
"""

from __future__ import annotations

import logging
import os
from typing import Any

from mcp.server.fastmcp import FastMCP

from cnc_alarm_processing.prompts.registry import register_prompts
from cnc_alarm_processing.resources.registry import register_resources
from cnc_alarm_processing.tools.alarms import lookup_alarm_code_impl, process_alarms_impl

LOGGER = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("CNC_ALARMS_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("cnc-alarms", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
def process_alarms(
    alarms: list[dict[str, Any]],
    translator_type: str | None = None,
    parameters: str = "",
    origin: str | None = None,
    trigger_rules: str | None = None,
    trigger_file_path: str | None = None,
    merge: str | None = None,
) -> dict[str, Any]:
    """Translate, classify and merge a batch of CNC alarms.

    Parameters
    ----------
    alarms:
        Alarm objects: {"origin", "category", "code", "message", "attributes"}.
        Only "code" is required.
    translator_type:
        Translator name: default, okuma or basic. No translation when omitted.
    parameters:
        Translator parameters as "key=value;key=value"
        (e.g., "filepath=okuma_alarms.txt;embedded=true", or for basic
        "messages=:,100:Overheat,200:Door open").
    origin:
        Replaces the origin of every translated alarm.
    trigger_rules/trigger_file_path:
        Emergency stop rules, e.g. "message:EMERGENCY STOP;number:188[0-9]".
    merge:
        Comma-separated merge rules (OP_MESSAGE_TEXT_WITH_MACHINE_ALARM_NUMBER).

    Returns
    -------
    dict:
        {"count": int, "alarms": list[dict], "is_in_emergency": bool,
         "initialization_error": bool}
    """
    return process_alarms_impl(
        alarms=alarms,
        translator_type=translator_type,
        parameters=parameters,
        origin=origin,
        trigger_rules=trigger_rules,
        trigger_file_path=trigger_file_path,
        merge=merge,
    )


@mcp.tool()
def lookup_alarm_code(dictionary_path: str, code: str, embedded: bool = False) -> dict[str, Any]:
    """Return the message, type and attributes of one code in an alarm dictionary."""
    return lookup_alarm_code_impl(dictionary_path=dictionary_path, code=code, embedded=embedded)


def main() -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
