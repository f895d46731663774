from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from cnc_alarm_processing.core.config import AlarmPayload, PipelineConfig, resolve_pipeline_config
from cnc_alarm_processing.core.merger import MergeType, parse_merge_types
from cnc_alarm_processing.core.models import CncAlarm
from cnc_alarm_processing.core.pipeline import AlarmPipeline
from cnc_alarm_processing.server.alarm_server import configure_logging


def _parse_merge(s: str) -> tuple[MergeType, ...]:
    try:
        return tuple(parse_merge_types(s))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _load_alarms(path: Path) -> list[CncAlarm]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("the alarm file must hold a JSON list")
    return [AlarmPayload.model_validate(item).to_alarm() for item in data]


def _format_alarm(alarm: CncAlarm) -> str:
    line = f"{alarm.origin} [{alarm.category}] {alarm.code}: {alarm.message}"
    if alarm.attributes:
        attrs = ", ".join(f"{k}={v}" for k, v in alarm.attributes.items())
        line += f" ({attrs})"
    return line


def main() -> None:
    p = argparse.ArgumentParser(description="Translate, classify and merge CNC alarms from a JSON file.")
    p.add_argument("alarms_path", help="JSON file holding a list of alarm objects")
    p.add_argument("--translator", default=None, help="Translator type: default, okuma or basic")
    p.add_argument(
        "--parameters",
        default="",
        help="Translator parameters, e.g. 'filepath=alarms.txt;embedded=false' or 'messages=:,100:Overheat'",
    )
    p.add_argument("--origin", default=None, help="Replace the origin of every translated alarm")
    p.add_argument("--rules", default=None, help="Inline emergency rules, e.g. 'number:188[0-9];message:E-STOP'")
    p.add_argument("--rules-file", default=None, help="Emergency rule file (wins over --rules)")
    p.add_argument(
        "--merge",
        type=_parse_merge,
        default=(),
        help="Comma-separated merge rules (e.g., OP_MESSAGE_TEXT_WITH_MACHINE_ALARM_NUMBER)",
    )

    args = p.parse_args()
    configure_logging()

    try:
        config = resolve_pipeline_config(
            PipelineConfig(
                translator_type=args.translator,
                translator_parameters=args.parameters,
                cnc_info_replacement=args.origin,
                trigger_rules=args.rules,
                trigger_file_path=args.rules_file,
                merges=args.merge,
            )
        )
        alarms = _load_alarms(Path(args.alarms_path))
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    pipeline = AlarmPipeline(config)
    pipeline.start()
    result = pipeline.run(alarms)

    for alarm in result.alarms:
        print(_format_alarm(alarm))

    if result.initialization_error:
        print("\nWarning: initialization failed, alarms may be untranslated.", file=sys.stderr)
    print(f"\n{len(result.alarms)} alarms, emergency: {'yes' if result.is_in_emergency else 'no'}")


if __name__ == "__main__":
    main()
