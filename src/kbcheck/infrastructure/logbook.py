"""Append-only checklist log, mirrored to the terminal."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class Logbook:
    """Writes ``<timestamp> - <message>`` lines.

    The file is opened in append mode for every line and never truncated,
    so repeated runs accumulate. Each line is also passed to *echo* (when
    given) and kept in :attr:`lines` for the run's result payload. If the
    file cannot be written, the first failure is logged and the run carries
    on with echo and memory only.
    """

    def __init__(
        self,
        path: Path,
        *,
        echo: Callable[[str], None] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.path = path
        self.lines: list[str] = []
        self.write_error: OSError | None = None
        self._echo = echo
        self._clock = clock

    def write(self, message: str) -> str:
        line = f"{self._clock().strftime(TIMESTAMP_FORMAT)} - {message}"
        self._append(line)
        self.lines.append(line)
        if self._echo is not None:
            self._echo(line)
        return line

    def _append(self, line: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as exc:
            if self.write_error is None:
                logger.warning("Cannot write log file %s: %s", self.path, exc)
            self.write_error = exc
