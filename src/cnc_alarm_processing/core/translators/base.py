"""Translator interface and shared dictionary loading."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

from ..dictionary import FileDictionary
from ..models import CncAlarm

logger = logging.getLogger(__name__)


class AlarmTranslator(Protocol):
    """Translator interface: initialize once, then complete alarms in place."""

    def initialize(self, parameters: Mapping[str, str]) -> bool:
        """Prepare the translator. Return False if it can't be used."""
        ...

    def process_alarm(self, alarm: CncAlarm) -> None:
        """Complete the alarm. Must not be called if initialize failed."""
        ...


def parse_bool(value: str) -> bool | None:
    """Parse 'true'/'false' (any case, surrounding blanks allowed)."""
    s = value.strip().lower()
    if s == "true":
        return True
    if s == "false":
        return False
    return None


def load_dictionary(dictionary: FileDictionary, parameters: Mapping[str, str], *, name: str) -> bool:
    """Fill ``dictionary`` from the ``filepath``/``embedded`` parameters."""
    file_path = parameters.get("filepath")
    if file_path is None:
        logger.error("%s: couldn't find the parameter 'filepath'", name)
        return False

    embedded = False
    raw_embedded = parameters.get("embedded")
    if raw_embedded is not None:
        parsed = parse_bool(raw_embedded)
        if parsed is None:
            logger.error("%s: couldn't parse %r as bool", name, raw_embedded)
        else:
            embedded = parsed

    if not dictionary.parse_file(file_path, embedded=embedded):
        logger.error("%s: couldn't initialize the dictionary with the path %s", name, file_path)
        return False
    return True
