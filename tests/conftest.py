from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_dictionary() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text(
            "\n".join(
                [
                    "42\tSpindle fault",
                    "0123\tOverload\ttype=Axis\tseverity=High",
                    "188\tEmergency stop\ttype=machine alarm",
                ]
            )
            + "\n",
            encoding="utf-8",
        )

    return _write


@pytest.fixture
def write_rules() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text(
            "\n".join(
                [
                    "# Emergency stop rules",
                    "number:188[0-9]",
                    "message:EMERGENCY STOP",
                ]
            )
            + "\n",
            encoding="utf-8",
        )

    return _write
