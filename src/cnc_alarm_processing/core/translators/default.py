"""Dictionary translator keyed by the alarm code."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..dictionary import FileDictionary
from ..models import CncAlarm
from .base import load_dictionary

logger = logging.getLogger(__name__)


class DefaultAlarmTranslator:
    """Translate alarms with a dictionary file.

    Parameters: ``filepath`` (required) and ``embedded`` (optional bool, read
    the file from the package data). A dictionary line may also carry the
    alarm type and extra attributes.
    """

    def __init__(self) -> None:
        self.dictionary = FileDictionary()

    def initialize(self, parameters: Mapping[str, str]) -> bool:
        return load_dictionary(self.dictionary, parameters, name="DefaultAlarmTranslator")

    def initialize_with_content(self, content: str) -> bool:
        """Fill the dictionary directly from text instead of a file."""
        self.dictionary.parse_content(content)
        return True

    def clear_translations(self) -> None:
        self.dictionary.clear()

    def process_alarm(self, alarm: CncAlarm) -> None:
        if self.dictionary.parse_error:
            logger.error("DefaultAlarmTranslator: dictionary is in error")
            return

        translation = self.dictionary.get_translation(alarm.code)
        if not translation:
            return
        alarm.message = translation

        alarm_type = self.dictionary.get_type(alarm.code)
        if alarm_type:
            alarm.category = alarm_type

        attributes = self.dictionary.get_attributes(alarm.code)
        if attributes:
            alarm.attributes.update(attributes)
