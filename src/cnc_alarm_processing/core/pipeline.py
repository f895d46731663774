"""Per-cycle alarm pipeline: translate, classify emergency, merge.

The host calls ``start()`` at the beginning of every polling cycle (the
initialization only happens once) and then ``run()`` with the alarms
collected during the cycle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import PipelineConfig
from .emergency import EmergencyStopTrigger
from .merger import AlarmMerger
from .models import CncAlarm
from .translation import AlarmTranslationStage
from .translators import TranslatorRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineResult:
    alarms: list[CncAlarm]
    is_in_emergency: bool
    initialization_error: bool


class AlarmPipeline:
    """Own the stages of one machine. Do not share an instance between machines."""

    def __init__(self, config: PipelineConfig, *, registry: TranslatorRegistry | None = None) -> None:
        self.config = config

        self.translation: AlarmTranslationStage | None = None
        if config.translator_type:
            self.translation = AlarmTranslationStage(registry)
            self.translation.translator_type = config.translator_type
            self.translation.parameters = config.translator_parameters
            self.translation.cnc_info_replacement = config.cnc_info_replacement

        self.trigger = EmergencyStopTrigger(
            trigger_rules=config.trigger_rules,
            trigger_file_path=config.trigger_file_path,
        )
        self.merger = AlarmMerger(config.merges)
        self._trigger_error = False

    @property
    def initialization_error(self) -> bool:
        translation_error = self.translation is not None and self.translation.initialization_error
        return translation_error or self._trigger_error

    def start(self) -> None:
        if self.translation is not None:
            self.translation.start()
        self._trigger_error = not self.trigger.start()

    def run(self, alarms: list[CncAlarm]) -> PipelineResult:
        """Process the batch in place and return it with the emergency flag."""
        if self.translation is not None:
            self.translation.translate(alarms)

        if self.trigger.rules_loaded:
            self.trigger.process_alarms(alarms)
        else:
            logger.warning("Emergency evaluation skipped, trigger rules not loaded")

        self.merger.process(alarms)
        logger.debug("Cycle done: %s alarms, emergency=%s", len(alarms), self.trigger.is_in_emergency)
        return PipelineResult(
            alarms=alarms,
            is_in_emergency=self.trigger.is_in_emergency,
            initialization_error=self.initialization_error,
        )
