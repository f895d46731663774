"""Direct code-to-message translator built from inline configuration."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..models import CncAlarm

logger = logging.getLogger(__name__)

MESSAGES_PARAMETER = "messages"


def parse_dictionary_string(param: str) -> dict[str, str]:
    """Parse a self-describing dictionary string.

    The first character separates a key from its value, the second one
    separates the items, the rest is the data: ``"=;100=Overheat;200=Door"``.
    """
    if len(param) < 2:
        raise ValueError(f"Dictionary string {param!r} must start with two separator characters")

    kv_sep, item_sep = param[0], param[1]
    if kv_sep == item_sep:
        raise ValueError("Key/value and item separators must differ")

    out: dict[str, str] = {}
    for item in param[2:].split(item_sep):
        if not item:
            continue
        if kv_sep not in item:
            raise ValueError(f"Invalid dictionary item {item!r}: missing {kv_sep!r}")
        key, value = item.split(kv_sep, 1)
        out[key] = value
    return out


class BasicAlarmTranslator:
    """Exact-match code to message translator."""

    def __init__(self, messages: Mapping[str, str] | None = None) -> None:
        self._messages: dict[str, str] = dict(messages or {})

    @classmethod
    def from_dictionary_string(cls, param: str) -> BasicAlarmTranslator:
        translator = cls()
        translator.add_number_messages(param)
        return translator

    def add_message(self, code: str, message: str) -> None:
        self._messages[code] = message

    def add_number_messages(self, param: str) -> BasicAlarmTranslator:
        """Add the pairs of a dictionary string and return self."""
        try:
            pairs = parse_dictionary_string(param)
        except ValueError:
            logger.exception("BasicAlarmTranslator: invalid number messages %r", param)
            raise
        for code, message in pairs.items():
            self.add_message(code, message)
        return self

    def initialize(self, parameters: Mapping[str, str]) -> bool:
        """Add the pairs of the optional ``messages`` parameter.

        Parameters are split on ';', so ``messages`` must use other separators,
        e.g. ``messages=:,100:Overheat,200:Door open``.
        """
        messages = parameters.get(MESSAGES_PARAMETER)
        if messages is None:
            return True
        try:
            self.add_number_messages(messages)
        except ValueError:
            return False
        return True

    def process_alarm(self, alarm: CncAlarm) -> None:
        message = self._messages.get(alarm.code)
        if message is not None:
            alarm.message = message
