"""Pipeline configuration and alarm payload schema."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from pydantic import BaseModel, Field

from .merger import MergeType, parse_merge_types
from .models import CncAlarm

ENV_TRANSLATOR = "CNC_ALARMS_TRANSLATOR"
ENV_TRANSLATOR_PARAMETERS = "CNC_ALARMS_TRANSLATOR_PARAMETERS"
ENV_TRIGGER_FILE = "CNC_ALARMS_TRIGGER_FILE"
ENV_MERGE = "CNC_ALARMS_MERGE"


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    translator_type: str | None = None
    translator_parameters: str = ""
    # Replaces the origin of every translated alarm (e.g. "MTConnect - Okuma")
    cnc_info_replacement: str | None = None

    # Emergency trigger: a rule file wins over inline rules
    trigger_rules: str | None = None
    trigger_file_path: str | None = None

    merges: tuple[MergeType, ...] = ()


def resolve_pipeline_config(cfg: PipelineConfig | None) -> PipelineConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = PipelineConfig()

    changes: dict[str, object] = {}
    translator = os.getenv(ENV_TRANSLATOR)
    if translator:
        changes["translator_type"] = translator
    parameters = os.getenv(ENV_TRANSLATOR_PARAMETERS)
    if parameters:
        changes["translator_parameters"] = parameters
    trigger_file = os.getenv(ENV_TRIGGER_FILE)
    if trigger_file:
        changes["trigger_file_path"] = trigger_file
    merge = os.getenv(ENV_MERGE)
    if merge:
        try:
            changes["merges"] = tuple(parse_merge_types(merge))
        except ValueError as exc:
            raise ValueError(f"{ENV_MERGE}: {exc}") from exc

    if not changes:
        return cfg
    return replace(cfg, **changes)


class AlarmPayload(BaseModel):
    """JSON shape of an alarm entering or leaving the pipeline."""

    origin: str = Field(default="", description="Source subsystem, e.g. a vendor tag.")
    sub_origin: str = Field(default="", description="Secondary source qualifier.")
    category: str = Field(default="", description="Alarm type, e.g. 'machine alarm'.")
    code: str = Field(description="Alarm code or number.")
    message: str = Field(default="", description="Human-readable text.")
    attributes: dict[str, str] = Field(default_factory=dict)

    def to_alarm(self) -> CncAlarm:
        return CncAlarm(
            origin=self.origin,
            category=self.category,
            code=self.code,
            sub_origin=self.sub_origin,
            message=self.message,
            attributes=dict(self.attributes),
        )

    @classmethod
    def from_alarm(cls, alarm: CncAlarm) -> AlarmPayload:
        return cls(
            origin=alarm.origin,
            sub_origin=alarm.sub_origin,
            category=alarm.category,
            code=alarm.code,
            message=alarm.message,
            attributes=dict(alarm.attributes),
        )
