"""CNC alarm processing: normalize, classify and merge controller alarms."""

from __future__ import annotations

__version__ = "0.1.0"
