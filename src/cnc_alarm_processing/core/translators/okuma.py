"""Okuma translator: the alarm code is the first word of the message."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from ..dictionary import FileDictionary
from ..models import CncAlarm
from .base import load_dictionary

logger = logging.getLogger(__name__)

_TOKEN_SPLIT_RE = re.compile(r"[\t ]+")


class OkumaAlarmTranslator:
    """Translate Okuma alarms whose message reads ``{CODE} {LABEL} {EXTRA...}``.

    The code is looked up from the first message token, then from the alarm
    code. Extra tokens are kept between parentheses after the translation.
    """

    def __init__(self) -> None:
        self.dictionary = FileDictionary()

    def initialize(self, parameters: Mapping[str, str]) -> bool:
        return load_dictionary(self.dictionary, parameters, name="OkumaAlarmTranslator")

    def process_alarm(self, alarm: CncAlarm) -> None:
        if self.dictionary.parse_error:
            logger.error("OkumaAlarmTranslator: dictionary is in error")
            return

        tokens = [t for t in _TOKEN_SPLIT_RE.split(alarm.message or "") if t]
        if not tokens:
            return

        translation = self.dictionary.get_translation(tokens[0])
        if not translation:
            translation = self.dictionary.get_translation(alarm.code)
        if not translation:
            return

        if len(tokens) > 2:
            alarm.message = f"{translation} ({' '.join(tokens[2:])})"
        else:
            alarm.message = translation
