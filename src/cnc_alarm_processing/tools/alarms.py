"""MCP tool implementations.

Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from cnc_alarm_processing.core.config import AlarmPayload, PipelineConfig
from cnc_alarm_processing.core.dictionary import FileDictionary, normalize_code
from cnc_alarm_processing.core.merger import parse_merge_types
from cnc_alarm_processing.core.models import CncAlarm
from cnc_alarm_processing.core.pipeline import AlarmPipeline

HARD_LIMIT = 5000


def _parse_alarms(alarms: Sequence[Mapping[str, Any]]) -> list[CncAlarm]:
    """Validate raw alarm objects and convert them to CncAlarm."""
    if len(alarms) > HARD_LIMIT:
        raise ValueError(f"Too many alarms ({len(alarms)}), the limit is {HARD_LIMIT}")
    return [AlarmPayload.model_validate(a).to_alarm() for a in alarms]


def _alarm_to_dict(alarm: CncAlarm) -> dict[str, Any]:
    return AlarmPayload.from_alarm(alarm).model_dump()


def process_alarms_impl(
    *,
    alarms: Sequence[Mapping[str, Any]],
    translator_type: str | None = None,
    parameters: str = "",
    origin: str | None = None,
    trigger_rules: str | None = None,
    trigger_file_path: str | None = None,
    merge: str | None = None,
) -> dict[str, Any]:
    """Implementation for the `process_alarms` MCP tool.

    Notes
    -----
    - The pipeline runs one cycle: translate, evaluate the emergency rules,
      then merge.
    - A translator that fails to initialize leaves the alarms untranslated and
      reports ``initialization_error``.
    """
    config = PipelineConfig(
        translator_type=translator_type or None,
        translator_parameters=parameters,
        cnc_info_replacement=origin or None,
        trigger_rules=trigger_rules or None,
        trigger_file_path=trigger_file_path or None,
        merges=tuple(parse_merge_types(merge)) if merge else (),
    )
    batch = _parse_alarms(alarms)

    pipeline = AlarmPipeline(config)
    pipeline.start()
    result = pipeline.run(batch)

    return {
        "count": len(result.alarms),
        "alarms": [_alarm_to_dict(a) for a in result.alarms],
        "is_in_emergency": result.is_in_emergency,
        "initialization_error": result.initialization_error,
    }


def lookup_alarm_code_impl(*, dictionary_path: str, code: str, embedded: bool = False) -> dict[str, Any]:
    """Implementation for the `lookup_alarm_code` MCP tool."""
    dictionary = FileDictionary()
    if not dictionary.parse_file(dictionary_path, embedded=embedded):
        raise FileNotFoundError(f"Couldn't read the alarm dictionary: {dictionary_path}")

    message = dictionary.get_translation(code)
    return {
        "code": code,
        "normalized_code": normalize_code(code),
        "found": message is not None,
        "message": message,
        "type": dictionary.get_type(code),
        "attributes": dictionary.get_attributes(code) or {},
    }
