"""Translation stage: own one translator and apply it to alarm batches."""

from __future__ import annotations

import logging
from typing import Any

from .models import CncAlarm
from .translators import AlarmTranslator, TranslatorRegistry, default_registry

logger = logging.getLogger(__name__)


def parse_parameters(blob: str) -> dict[str, str]:
    """Parse a ``key=value;key=value`` blob. Keys are lowercased.

    Malformed pairs are logged and dropped.
    """
    out: dict[str, str] = {}
    for pair in blob.split(";"):
        if not pair:
            continue
        key, sep, value = pair.partition("=")
        if not sep or not key:
            logger.error("Invalid translator parameter %r", pair)
            continue
        out[key.lower()] = value
        logger.info("Found translator parameter %r -> %r", key.lower(), value)
    return out


class AlarmTranslationStage:
    """Apply the selected translator to every alarm of a batch.

    The translator is initialized once, on the first ``start()`` after it has
    been assigned. Until then, or if the initialization failed, ``translate``
    leaves the batch untouched.
    """

    def __init__(self, registry: TranslatorRegistry | None = None) -> None:
        self._registry = registry or default_registry()
        self._translator: AlarmTranslator | None = None
        self._translator_type = ""
        self._parameters: dict[str, str] = {}
        self._initialized = False
        self.initialization_error = False
        self.cnc_info_replacement: str | None = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def translator(self) -> AlarmTranslator | None:
        return self._translator

    @translator.setter
    def translator(self, value: AlarmTranslator | None) -> None:
        self._translator = value
        self._translator_type = type(value).__name__ if value is not None else ""
        self._initialized = False

    @property
    def translator_type(self) -> str:
        return self._translator_type

    @translator_type.setter
    def translator_type(self, name: str) -> None:
        try:
            self._translator = self._registry.create(name)
        except KeyError as e:
            logger.error("Couldn't resolve the translator type %r: %s", name, e)
            self._translator = None
        self._translator_type = name
        self._initialized = False

    @property
    def parameters(self) -> str:
        return "".join(f"{k}={v};" for k, v in self._parameters.items())

    @parameters.setter
    def parameters(self, blob: str) -> None:
        self._parameters = parse_parameters(blob)

    @property
    def parameter_map(self) -> dict[str, str]:
        return dict(self._parameters)

    def start(self) -> None:
        """Initialize the translator if it was not done yet."""
        if self._initialized:
            return

        logger.debug("Initializing translator %r", self._translator_type)
        if self._translator is None:
            self.initialization_error = True
        else:
            self.initialization_error = not self._translator.initialize(self._parameters)
        if self.initialization_error:
            logger.error("Translator initialization failed (type=%r)", self._translator_type)
        self._initialized = True

    def translate(self, alarms: Any) -> None:
        """Translate a batch of alarms in place.

        ``None`` is ignored. Anything else than a list of CncAlarm raises
        TypeError.
        """
        if alarms is None:
            logger.warning("Translation cannot be done, the input is None")
            return

        if not isinstance(alarms, list) or not all(isinstance(a, CncAlarm) for a in alarms):
            logger.error("%r is not a list of CncAlarm", alarms)
            raise TypeError("translate expects a list of CncAlarm")

        if not self._initialized:
            logger.warning("Translation skipped, the translator is not initialized")
            return

        if self.initialization_error or self._translator is None:
            logger.warning("Translation skipped, no usable translator")
            return

        for alarm in alarms:
            self._translator.process_alarm(alarm)

        if self.cnc_info_replacement:
            for alarm in alarms:
                alarm.origin = self.cnc_info_replacement
