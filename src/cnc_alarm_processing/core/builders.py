"""Build alarms from raw controller values (alarm numbers, bit fields)."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .models import CncAlarm

logger = logging.getLogger(__name__)

INT32_BITS = 32
SEVERITY_ATTRIBUTE = "Severity"


class AlarmNumberCollector:
    """Collect one alarm per reported alarm number."""

    def __init__(self, cnc_info: str = "", alarm_type: str = "") -> None:
        self.cnc_info = cnc_info
        self.alarm_type = alarm_type
        self.alarms: list[CncAlarm] = []

    def start(self) -> None:
        self.alarms.clear()

    def add_number(self, number: object) -> None:
        self.alarms.append(CncAlarm(self.cnc_info, self.alarm_type, str(number)))

    def add_numbers(self, numbers: Iterable[object]) -> None:
        for number in numbers:
            self.add_number(number)


class AlarmFromBitsBuilder:
    """Create one alarm per bit set in a 32-bit status word.

    The alarm code is ``prefix + bit index``. ``message_array[i]`` (when set)
    becomes the message of bit ``i`` and a non-empty ``severity`` is stored in
    the ``Severity`` attribute.
    """

    def __init__(
        self,
        cnc_info: str = "",
        alarm_type: str = "",
        *,
        cnc_sub_info: str = "",
        severity: str | None = None,
        message_array: Sequence[str | None] | None = None,
    ) -> None:
        self.cnc_info = cnc_info
        self.alarm_type = alarm_type
        self.cnc_sub_info = cnc_sub_info
        self.severity = severity
        self.message_array = message_array
        self.alarms: list[CncAlarm] = []

    def start(self) -> bool:
        self.alarms.clear()
        return True

    def set_severity(self, severity: str | None) -> None:
        self.severity = severity

    def clear_message_array(self) -> None:
        self.message_array = None

    def add_int32(self, value: int, prefix: str | None = None) -> None:
        prefix = prefix or ""
        bits = value & 0xFFFFFFFF  # two's complement for negative words
        logger.debug("add_int32: value is %s", value)
        for i in range(INT32_BITS):
            if not bits >> i & 1:
                continue
            alarm = CncAlarm(self.cnc_info, self.alarm_type, f"{prefix}{i}", sub_origin=self.cnc_sub_info)
            if self.message_array is not None and i < len(self.message_array):
                message = self.message_array[i]
                if message is not None:
                    alarm.message = message
            if self.severity:
                alarm.attributes[SEVERITY_ATTRIBUTE] = self.severity
            self.alarms.append(alarm)
