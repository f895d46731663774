"""Alarm processing core: translation, emergency classification and merging."""

from __future__ import annotations

from .builders import AlarmFromBitsBuilder, AlarmNumberCollector
from .config import AlarmPayload, PipelineConfig, resolve_pipeline_config
from .dictionary import FileDictionary, normalize_code
from .emergency import EmergencyStopTrigger, RulesNotLoadedError
from .merger import AlarmMerger, MergeType
from .models import MACHINE_ALARM, OPERATOR_MESSAGE, AlarmBatch, CncAlarm
from .pipeline import AlarmPipeline, PipelineResult
from .translation import AlarmTranslationStage, parse_parameters

__all__ = [
    "MACHINE_ALARM",
    "OPERATOR_MESSAGE",
    "AlarmBatch",
    "AlarmFromBitsBuilder",
    "AlarmMerger",
    "AlarmNumberCollector",
    "AlarmPayload",
    "AlarmPipeline",
    "AlarmTranslationStage",
    "CncAlarm",
    "EmergencyStopTrigger",
    "FileDictionary",
    "MergeType",
    "PipelineConfig",
    "PipelineResult",
    "RulesNotLoadedError",
    "normalize_code",
    "parse_parameters",
    "resolve_pipeline_config",
]
