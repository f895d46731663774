"""File-backed alarm code dictionary.

A dictionary source is made of tab-separated lines: the code, the message,
then optional ``attribute=value`` fields. The ``type`` attribute (any case)
sets the alarm category; every other attribute is copied into the alarm
attributes.
"""

from __future__ import annotations

import logging
import re
from importlib import resources

logger = logging.getLogger(__name__)

EMBEDDED_PACKAGE = "cnc_alarm_processing"
EMBEDDED_DIR = "data"
TEXT_ENCODING = "utf-8"

_LINE_SPLIT_RE = re.compile(r"[\r\n]+")


def normalize_code(code: str) -> str:
    """Lowercase a code and strip every leading '0' and ' '."""
    return code.lower().lstrip("0 ")


def _read_embedded(name: str) -> str:
    return resources.files(EMBEDDED_PACKAGE).joinpath(EMBEDDED_DIR).joinpath(name).read_text(encoding=TEXT_ENCODING)


class FileDictionary:
    """Map alarm codes to a message, an optional type and optional attributes."""

    def __init__(self) -> None:
        self._messages: dict[str, str] = {}
        self._types: dict[str, str] = {}
        self._attributes: dict[str, dict[str, str]] = {}
        self.parse_error = False

    def __len__(self) -> int:
        return len(self._messages)

    def parse_file(self, file_path: str, embedded: bool = False) -> bool:
        """Read and parse a dictionary file.

        ``embedded`` selects a file bundled in the package data instead of the
        file system. Returns False (and sets ``parse_error``) on a read error.
        """
        self.parse_error = False
        try:
            if embedded:
                content = _read_embedded(file_path)
            else:
                with open(file_path, encoding=TEXT_ENCODING) as f:
                    content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Couldn't read the alarm dictionary %s (embedded=%s): %s", file_path, embedded, e)
            self.parse_error = True
            return False

        self.parse_content(content)
        return True

    def parse_content(self, content: str) -> None:
        """Parse dictionary text and add its definitions."""
        self.parse_error = False
        for line in _LINE_SPLIT_RE.split(content):
            if not line:
                continue
            fields = [f for f in line.split("\t") if f]
            if len(fields) < 2:
                logger.warning("Bad dictionary entry %r", line)
                continue

            code = normalize_code(fields[0])
            message = fields[1]
            previous = self._messages.get(code)
            if previous is not None:
                logger.info("Dictionary key %r will change from %r to %r", code, previous, message)
            self._messages[code] = message

            for attribute in fields[2:]:
                if "=" not in attribute:
                    logger.warning("Cannot process attribute %r of code %r", attribute, code)
                    continue
                key, value = attribute.split("=", 1)
                if key.lower() == "type":
                    self._types[code] = value
                else:
                    self._attributes.setdefault(code, {})[key] = value

        logger.debug("Parsed %s alarm definitions", len(self._messages))

    def clear(self) -> None:
        """Remove every definition."""
        self._messages.clear()
        self._types.clear()
        self._attributes.clear()

    def get_translation(self, code: str) -> str | None:
        return self._messages.get(normalize_code(code))

    def get_type(self, code: str) -> str | None:
        return self._types.get(normalize_code(code))

    def get_attributes(self, code: str) -> dict[str, str] | None:
        return self._attributes.get(normalize_code(code))
