"""Alarm merging: correlate alarms of a batch and fold some into others."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from .models import MACHINE_ALARM, OPERATOR_MESSAGE, CncAlarm

logger = logging.getLogger(__name__)

OPERATOR_MESSAGE_ATTRIBUTE = "operator message"


class MergeType(str, Enum):
    """Available merge rules."""

    OP_MESSAGE_TEXT_WITH_MACHINE_ALARM_NUMBER = "OP_MESSAGE_TEXT_WITH_MACHINE_ALARM_NUMBER"


def parse_merge_types(value: str) -> list[MergeType]:
    """Parse a comma-separated list of merge rule names."""
    out: list[MergeType] = []
    for part in value.split(","):
        name = part.strip()
        if not name:
            continue
        try:
            out.append(MergeType(name.upper()))
        except ValueError as e:
            valid = ", ".join(m.value for m in MergeType)
            raise ValueError(f"Unknown merge type {name!r}. Valid values: {valid}") from e
    return out


def merge_operator_messages(alarms: list[CncAlarm]) -> None:
    """Fold operator messages that quote a machine alarm code into that alarm.

    The operator message code is appended to the machine alarm attribute
    ``operator message`` and the operator message leaves the batch. An
    operator message quoting several machine alarms is folded into each of
    them.
    """
    machine_alarms = [a for a in alarms if a.category == MACHINE_ALARM]
    operator_messages = [a for a in alarms if a.category == OPERATOR_MESSAGE]

    for operator_message in operator_messages:
        for machine_alarm in machine_alarms:
            if operator_message.message is None or machine_alarm.code is None:
                continue
            if machine_alarm.code not in operator_message.message:
                continue

            previous = machine_alarm.attributes.get(OPERATOR_MESSAGE_ATTRIBUTE)
            if previous is not None:
                machine_alarm.attributes[OPERATOR_MESSAGE_ATTRIBUTE] = f"{previous}, {operator_message.code}"
            else:
                machine_alarm.attributes[OPERATOR_MESSAGE_ATTRIBUTE] = operator_message.code
            logger.info("Merged %s in %s", operator_message, machine_alarm)

            if operator_message in alarms:
                alarms.remove(operator_message)


_MERGES = {
    MergeType.OP_MESSAGE_TEXT_WITH_MACHINE_ALARM_NUMBER: merge_operator_messages,
}


class AlarmMerger:
    """Apply the enabled merge rules, in order, to a batch of alarms."""

    def __init__(self, merges: Iterable[MergeType] = ()) -> None:
        self.merges: list[MergeType] = list(merges)

    @property
    def merge_type(self) -> str:
        return ",".join(m.value for m in self.merges)

    @merge_type.setter
    def merge_type(self, value: str) -> None:
        self.merges = parse_merge_types(value)

    def process(self, alarms: Any) -> None:
        """Merge alarms in place. Errors of one rule don't stop the next ones."""
        if alarms is None:
            logger.warning("Cannot merge, the input is None")
            return
        if not isinstance(alarms, list):
            logger.error("Cannot merge, wrong input type %s", type(alarms).__name__)
            return

        for merge in self.merges:
            try:
                _MERGES[merge](alarms)
            except Exception:
                logger.exception("Merge %s failed", merge.value)
