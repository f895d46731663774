"""Translator registry: resolve a translator from its configured name."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from .base import AlarmTranslator
from .basic import BasicAlarmTranslator
from .default import DefaultAlarmTranslator
from .okuma import OkumaAlarmTranslator

TranslatorFactory = Callable[[], AlarmTranslator]


class TranslatorRegistry:
    """Case-insensitive mapping from a translator name to its factory."""

    def __init__(self) -> None:
        self._factories: dict[str, TranslatorFactory] = {}

    def register(self, name: str, factory: TranslatorFactory) -> None:
        key = name.strip().lower()
        if not key:
            raise ValueError("Translator name must not be empty")
        self._factories[key] = factory

    def create(self, name: str) -> AlarmTranslator:
        """Build a new translator. Raise KeyError for unknown names."""
        try:
            factory = self._factories[name.strip().lower()]
        except KeyError as e:
            valid = ", ".join(self.names())
            raise KeyError(f"Unknown translator type {name!r}. Valid values: {valid}") from e
        return factory()

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


def default_registry() -> TranslatorRegistry:
    """Registry with the built-in translators.

    Both the short names and the historical type names are registered.
    """
    registry = TranslatorRegistry()
    for name in ("default", "AlarmTranslator_Default"):
        registry.register(name, DefaultAlarmTranslator)
    for name in ("okuma", "AlarmTranslator_Okuma"):
        registry.register(name, OkumaAlarmTranslator)
    for name in ("basic", "BasicAlarmTranslator"):
        registry.register(name, BasicAlarmTranslator)
    return registry
