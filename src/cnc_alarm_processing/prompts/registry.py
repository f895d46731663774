"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def explain_alarm_batch(
        alarms_json: str,
        translator_type: str = "default",
        parameters: str = "",
        trigger_rules: str | None = None,
    ) -> list[dict[str, Any]]:
        """Build a prompt that explains a batch of CNC alarms."""
        call_lines = [
            f"- translator_type: {translator_type}",
            f"- parameters: {parameters or '(none)'}",
        ]
        if trigger_rules:
            call_lines.append(f"- trigger_rules: {trigger_rules}")
        call_lines.append("- merge: OP_MESSAGE_TEXT_WITH_MACHINE_ALARM_NUMBER")
        call_block = "\n".join(call_lines)
        return [
            {
                "role": "system",
                "content": (
                    "You are a CNC maintenance assistant. Explain machine alarms precisely "
                    "for an operator on the shop floor. "
                    "Do not invent details; if the evidence is insufficient, say so."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Explain the alarm batch below. Follow this workflow:\n"
                    "- Always call process_alarms first with the alarms and the parameters below.\n"
                    "- If initialization_error is true, say that the alarms are untranslated.\n"
                    "- If is_in_emergency is true, start with the emergency condition.\n"
                    "- Mention operator messages folded into a machine alarm "
                    "(attribute 'operator message').\n\n"
                    "Call process_alarms with:\n"
                    f"{call_block}\n\n"
                    f"Alarms (JSON):\n{alarms_json}\n\n"
                    "Return this structure:\n"
                    "1) Machine state (1-2 sentences)\n"
                    "2) Active alarms (one bullet each: code, message, severity if any)\n"
                    "3) Suggested operator actions (2-4 bullets)\n"
                ),
            },
        ]
