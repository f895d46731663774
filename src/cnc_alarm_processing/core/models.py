"""Core data models for alarm processing."""

from __future__ import annotations

from dataclasses import dataclass, field

MACHINE_ALARM = "machine alarm"
OPERATOR_MESSAGE = "Operator message"


@dataclass(eq=False, slots=True)
class CncAlarm:
    """One alarm or condition reported by a CNC controller.

    Instances are compared by identity: two alarms with the same fields are
    still two distinct entries in a batch.
    """

    origin: str  # source subsystem, e.g. "MTConnect"
    category: str  # e.g. "machine alarm", "Operator message"
    code: str
    sub_origin: str = ""
    message: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.origin}/{self.category}/{self.code}: {self.message}"


# Ordered, mutable sequence handed from stage to stage.
AlarmBatch = list[CncAlarm]
