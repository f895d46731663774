from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import pytest

from cnc_alarm_processing.core.models import CncAlarm
from cnc_alarm_processing.core.translation import AlarmTranslationStage, parse_parameters
from cnc_alarm_processing.core.translators import BasicAlarmTranslator


class CountingTranslator:
    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.init_calls = 0
        self.seen: list[str] = []

    def initialize(self, parameters: Mapping[str, str]) -> bool:
        self.init_calls += 1
        return self.ok

    def process_alarm(self, alarm: CncAlarm) -> None:
        self.seen.append(alarm.code)
        alarm.message = f"translated {alarm.code}"


def test_parse_parameters_lowercases_keys_and_drops_malformed(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        params = parse_parameters("FilePath=C:\\a=b.txt;;bad;=novalue;Embedded=true")
    assert params == {"filepath": "C:\\a=b.txt", "embedded": "true"}
    assert "bad" in caplog.text


def test_parameters_round_trip_as_blob() -> None:
    stage = AlarmTranslationStage()
    stage.parameters = "FilePath=a.txt;embedded=false"
    assert stage.parameters == "filepath=a.txt;embedded=false;"
    assert stage.parameter_map == {"filepath": "a.txt", "embedded": "false"}


def test_start_initializes_only_once() -> None:
    translator = CountingTranslator()
    stage = AlarmTranslationStage()
    stage.translator = translator
    stage.start()
    stage.start()
    assert translator.init_calls == 1
    assert stage.initialized
    assert not stage.initialization_error


def test_reassigning_translator_requires_new_start() -> None:
    stage = AlarmTranslationStage()
    stage.translator = CountingTranslator()
    stage.start()

    second = CountingTranslator()
    stage.translator = second
    assert not stage.initialized
    stage.start()
    assert second.init_calls == 1


def test_translate_applies_translator_in_order() -> None:
    translator = CountingTranslator()
    stage = AlarmTranslationStage()
    stage.translator = translator
    stage.start()

    alarms = [CncAlarm("o", "", "1"), CncAlarm("o", "", "2")]
    stage.translate(alarms)
    assert translator.seen == ["1", "2"]
    assert [a.message for a in alarms] == ["translated 1", "translated 2"]
    assert [a.origin for a in alarms] == ["o", "o"]


def test_translate_overrides_origin() -> None:
    stage = AlarmTranslationStage()
    stage.translator = BasicAlarmTranslator()
    stage.cnc_info_replacement = "MTConnect - Okuma"
    stage.start()

    alarms = [CncAlarm("MTConnect", "", "1"), CncAlarm("MTConnect", "", "2")]
    stage.translate(alarms)
    assert {a.origin for a in alarms} == {"MTConnect - Okuma"}


def test_translate_none_is_ignored() -> None:
    stage = AlarmTranslationStage()
    stage.translator = CountingTranslator()
    stage.start()
    stage.translate(None)


def test_translate_before_start_leaves_batch() -> None:
    translator = CountingTranslator()
    stage = AlarmTranslationStage()
    stage.translator = translator
    stage.cnc_info_replacement = "new"

    alarms = [CncAlarm("old", "", "1", message="raw")]
    stage.translate(alarms)
    assert alarms[0].message == "raw"
    assert alarms[0].origin == "old"
    assert translator.seen == []


def test_translate_wrong_type_raises() -> None:
    stage = AlarmTranslationStage()
    stage.translator = CountingTranslator()
    stage.start()
    with pytest.raises(TypeError):
        stage.translate("not alarms")
    with pytest.raises(TypeError):
        stage.translate([CncAlarm("o", "", "1"), {"code": "2"}])


def test_failed_initialization_skips_translation() -> None:
    translator = CountingTranslator(ok=False)
    stage = AlarmTranslationStage()
    stage.translator = translator
    stage.start()
    assert stage.initialization_error

    alarms = [CncAlarm("o", "", "1", message="raw")]
    stage.translate(alarms)
    assert alarms[0].message == "raw"

    stage.start()
    assert translator.init_calls == 1


def test_start_without_translator_is_an_error() -> None:
    stage = AlarmTranslationStage()
    stage.start()
    assert stage.initialization_error


def test_unknown_translator_type_is_an_initialization_error() -> None:
    stage = AlarmTranslationStage()
    stage.translator_type = "Siemens"
    assert stage.translator is None
    stage.start()
    assert stage.initialization_error


def test_translator_type_with_dictionary_file(tmp_path: Path, write_dictionary) -> None:
    path = tmp_path / "alarms.txt"
    write_dictionary(path)

    stage = AlarmTranslationStage()
    stage.translator_type = "okuma"
    stage.parameters = f"FilePath={path}"
    stage.start()
    assert not stage.initialization_error

    alarms = [CncAlarm("Okuma", "", "0", message="42 ALARM_X extra info")]
    stage.translate(alarms)
    assert alarms[0].message == "Spindle fault (extra info)"


def test_translator_type_missing_filepath_fails() -> None:
    stage = AlarmTranslationStage()
    stage.translator_type = "default"
    stage.start()
    assert stage.initialization_error
