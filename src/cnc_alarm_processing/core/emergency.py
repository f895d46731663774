"""Emergency stop classification from alarm codes and messages.

Rules are regexes written one per line (file) or separated by ';' (inline)::

    message:EMERGENCY STOP
    number:188[0-9]
    # comment

``number`` rules are searched case-sensitively in the alarm code, ``message``
rules case-insensitively in the alarm message.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from .models import CncAlarm

logger = logging.getLogger(__name__)

MESSAGE_PREFIX = "message:"
NUMBER_PREFIX = "number:"
COMMENT_PREFIX = "#"

_LINE_SPLIT_RE = re.compile(r"[\r\n]+")


class RulesNotLoadedError(RuntimeError):
    """Raised when alarms are evaluated before the trigger rules are loaded."""


def parse_trigger_rules(
    lines: Iterable[str], *, source: str = "inline"
) -> tuple[list[re.Pattern[str]], list[re.Pattern[str]]]:
    """Compile rule lines into (number patterns, message patterns).

    Unknown lines are logged and ignored; an invalid regex raises re.error.
    """
    number_rules: list[re.Pattern[str]] = []
    message_rules: list[re.Pattern[str]] = []
    for line in lines:
        if not line:
            continue
        if line.startswith(MESSAGE_PREFIX):
            pattern = line[len(MESSAGE_PREFIX):]
            if pattern:
                message_rules.append(re.compile(pattern, re.IGNORECASE))
        elif line.startswith(NUMBER_PREFIX):
            pattern = line[len(NUMBER_PREFIX):]
            if pattern:
                number_rules.append(re.compile(pattern))
        elif not line.startswith(COMMENT_PREFIX):
            logger.warning("Cannot process line %r in the trigger rules %s", line, source)
    return number_rules, message_rules


class EmergencyStopTrigger:
    """Raise a global emergency flag when an alarm matches a trigger rule.

    Set either ``trigger_file_path`` or ``trigger_rules``; the file wins when
    both are set. Without any rule, no alarm ever triggers the emergency.
    """

    def __init__(self, trigger_rules: str | None = None, trigger_file_path: str | None = None) -> None:
        self.trigger_rules = trigger_rules
        self.trigger_file_path = trigger_file_path
        self.is_in_emergency = False
        self._number_rules: list[re.Pattern[str]] = []
        self._message_rules: list[re.Pattern[str]] = []
        self._rules_loaded = False

    @property
    def rules_loaded(self) -> bool:
        return self._rules_loaded

    @property
    def number_rules(self) -> list[str]:
        return [p.pattern for p in self._number_rules]

    @property
    def message_rules(self) -> list[str]:
        return [p.pattern for p in self._message_rules]

    def start(self) -> bool:
        """Load the trigger rules once. Return False if they couldn't be loaded."""
        if self._rules_loaded:
            return True

        if self.trigger_file_path:
            try:
                with open(self.trigger_file_path, encoding="utf-8") as f:
                    content = f.read()
                self._load(_LINE_SPLIT_RE.split(content), source=self.trigger_file_path)
            except (OSError, UnicodeDecodeError, re.error) as e:
                logger.error("Couldn't analyze the trigger rules in file %s: %s", self.trigger_file_path, e)
                return False
        elif self.trigger_rules:
            try:
                self._load(self.trigger_rules.split(";"), source="inline")
            except re.error as e:
                logger.error("Couldn't analyze the trigger rules %r: %s", self.trigger_rules, e)
                return False
        else:
            self._rules_loaded = True
        return True

    def _load(self, lines: Iterable[str], *, source: str) -> None:
        number_rules, message_rules = parse_trigger_rules(lines, source=source)
        self._number_rules = number_rules
        self._message_rules = message_rules
        self._rules_loaded = True
        logger.debug(
            "Loaded %s number rules and %s message rules from %s",
            len(number_rules),
            len(message_rules),
            source,
        )

    def process_alarms(self, alarms: Sequence[CncAlarm] | None) -> None:
        """Update ``is_in_emergency`` from a batch of alarms."""
        if not self._rules_loaded:
            raise RulesNotLoadedError("Trigger rules not analyzed, call start() first")

        self.is_in_emergency = False
        for alarm in alarms or ():
            if self._is_emergency_alarm(alarm):
                self.is_in_emergency = True
                return

    def evaluate(self, alarms: Sequence[CncAlarm] | None) -> bool:
        self.process_alarms(alarms)
        return self.is_in_emergency

    def _is_emergency_alarm(self, alarm: CncAlarm) -> bool:
        if alarm.code:
            for rule in self._number_rules:
                if rule.search(alarm.code):
                    logger.info(
                        "Alarm %s (%s) matches 'number:%s' => emergency status triggered",
                        alarm.code,
                        alarm.message,
                        rule.pattern,
                    )
                    return True

        if alarm.message:
            for rule in self._message_rules:
                if rule.search(alarm.message):
                    logger.info(
                        "Alarm %s (%s) matches 'message:%s' => emergency status triggered",
                        alarm.code,
                        alarm.message,
                        rule.pattern,
                    )
                    return True

        return False
