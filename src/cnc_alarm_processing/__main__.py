"""Module entrypoint.

Allows:
    python -m cnc_alarm_processing
"""

from __future__ import annotations

from cnc_alarm_processing.server.alarm_server import main

if __name__ == "__main__":
    main()
