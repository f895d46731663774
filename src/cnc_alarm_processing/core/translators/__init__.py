"""Alarm translators.

Contains the dictionary translators (default and Okuma), the inline basic
translator and the registry used to resolve them by name.
"""

from __future__ import annotations

from .base import AlarmTranslator, load_dictionary, parse_bool
from .basic import BasicAlarmTranslator, parse_dictionary_string
from .default import DefaultAlarmTranslator
from .okuma import OkumaAlarmTranslator
from .registry import TranslatorFactory, TranslatorRegistry, default_registry

__all__ = [
    "AlarmTranslator",
    "BasicAlarmTranslator",
    "DefaultAlarmTranslator",
    "OkumaAlarmTranslator",
    "TranslatorFactory",
    "TranslatorRegistry",
    "default_registry",
    "load_dictionary",
    "parse_bool",
    "parse_dictionary_string",
]
