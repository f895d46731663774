from __future__ import annotations

from pathlib import Path

import pytest

from cnc_alarm_processing.core.dictionary import FileDictionary, normalize_code


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("0123", "123"),
        ("ABC", "abc"),
        ("00 12", "12"),
        (" 0 7", "7"),
        ("00", ""),
        ("100", "100"),
    ],
)
def test_normalize_code(code: str, expected: str) -> None:
    assert normalize_code(code) == expected
    assert normalize_code(normalize_code(code)) == normalize_code(code)


def test_parse_content_message_type_and_attributes() -> None:
    d = FileDictionary()
    d.parse_content("123\tOverload\ttype=Axis\tseverity=High\n")
    assert d.get_translation("0123") == "Overload"
    assert d.get_type("123") == "Axis"
    assert d.get_attributes("123") == {"severity": "High"}
    assert not d.parse_error


def test_parse_content_type_key_is_case_insensitive() -> None:
    d = FileDictionary()
    d.parse_content("7\tDoor open\tTYPE=Operator message\tColor=red")
    assert d.get_type("7") == "Operator message"
    assert d.get_attributes("7") == {"Color": "red"}


def test_attribute_value_keeps_extra_equal_signs() -> None:
    d = FileDictionary()
    d.parse_content("5\tMessage\tformula=a=b=c")
    assert d.get_attributes("5") == {"formula": "a=b=c"}


def test_reparse_replaces_message() -> None:
    d = FileDictionary()
    d.parse_content("42\tOld message\n042\tNew message\n")
    assert d.get_translation("42") == "New message"
    assert len(d) == 1


def test_later_attribute_overwrites_earlier() -> None:
    d = FileDictionary()
    d.parse_content("9\tA\tlevel=1\n9\tB\tlevel=2\n")
    assert d.get_attributes("9") == {"level": "2"}


def test_bad_lines_are_skipped_without_error() -> None:
    d = FileDictionary()
    d.parse_content("only-a-code\r\n\r\n10\tTen\tnot-an-attribute\r11\tEleven")
    assert d.get_translation("only-a-code") is None
    assert d.get_translation("10") == "Ten"
    assert d.get_attributes("10") is None
    assert d.get_translation("11") == "Eleven"
    assert not d.parse_error


def test_empty_fields_are_dropped() -> None:
    d = FileDictionary()
    d.parse_content("12\t\tTwelve\t\ttype=Axis")
    assert d.get_translation("12") == "Twelve"
    assert d.get_type("12") == "Axis"


def test_unknown_code_returns_none() -> None:
    d = FileDictionary()
    d.parse_content("1\tOne")
    assert d.get_translation("2") is None
    assert d.get_type("1") is None
    assert d.get_attributes("1") is None


def test_clear_removes_everything() -> None:
    d = FileDictionary()
    d.parse_content("1\tOne\ttype=T\tk=v")
    d.clear()
    assert d.get_translation("1") is None
    assert d.get_type("1") is None
    assert d.get_attributes("1") is None
    assert len(d) == 0


def test_parse_file(tmp_path: Path, write_dictionary) -> None:
    path = tmp_path / "alarms.txt"
    write_dictionary(path)
    d = FileDictionary()
    assert d.parse_file(str(path))
    assert d.get_translation("42") == "Spindle fault"
    assert d.get_type("123") == "Axis"


def test_parse_missing_file_sets_error(tmp_path: Path) -> None:
    d = FileDictionary()
    assert not d.parse_file(str(tmp_path / "missing.txt"))
    assert d.parse_error


def test_parse_embedded_file() -> None:
    d = FileDictionary()
    assert d.parse_file("okuma_alarms.txt", embedded=True)
    assert d.get_translation("1885") == "Emergency stop button pressed"
    assert d.get_attributes("1885") == {"Severity": "Critical"}


def test_parse_missing_embedded_file_sets_error() -> None:
    d = FileDictionary()
    assert not d.parse_file("does_not_exist.txt", embedded=True)
    assert d.parse_error


def test_successful_reparse_clears_error(tmp_path: Path, write_dictionary) -> None:
    d = FileDictionary()
    d.parse_file(str(tmp_path / "missing.txt"))
    path = tmp_path / "alarms.txt"
    write_dictionary(path)
    assert d.parse_file(str(path))
    assert not d.parse_error


def test_parse_content_clears_error(tmp_path: Path) -> None:
    d = FileDictionary()
    d.parse_file(str(tmp_path / "missing.txt"))
    d.parse_content("1\tOne")
    assert not d.parse_error
    assert d.get_translation("1") == "One"
