"""LayoutStore — the flat file holding saved monitor positions and priorities.

One line per monitor::

    <name> <x,y> <priority>

Lines are keyed by the exact monitor name. Saving rewrites matching lines
in place and appends new ones; nothing is ever removed automatically, and
lines that cannot be parsed are carried over untouched.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

from monitor_config.errors import LayoutFileError
from monitor_config.models import LayoutEntry, Monitor
from monitor_config.persistence import read_text, write_text_atomic

logger = logging.getLogger(__name__)

DEFAULT_LAYOUT_FILE = '~/.config/monitor_config'


class LayoutStore:
    """Read/update access to a layout file at an explicit path."""

    def __init__(self, path: str = DEFAULT_LAYOUT_FILE) -> None:
        self._path = os.path.expanduser(path)

    @property
    def path(self) -> str:
        return self._path

    def read_text(self) -> str:
        try:
            return read_text(self._path)
        except UnicodeDecodeError as exc:
            raise LayoutFileError(self._path, f"not valid UTF-8 ({exc.reason})") from None

    def is_saved(self) -> bool:
        """True when the file exists and holds anything but whitespace."""
        return bool(self.read_text().strip())

    def parse(self, text: str) -> dict[str, LayoutEntry]:
        """Entries in *text* keyed by name, in file order."""
        entries: dict[str, LayoutEntry] = {}
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                entry = LayoutEntry.parse(line)
            except ValueError as exc:
                logger.warning("%s:%d: skipping malformed line: %s", self._path, lineno, exc)
                continue
            if entry.name in entries:
                logger.warning("%s:%d: duplicate entry for %s, keeping the first",
                               self._path, lineno, entry.name)
                continue
            entries[entry.name] = entry
        return entries

    def load(self) -> dict[str, LayoutEntry]:
        """Return saved entries keyed by name, in file order."""
        return self.parse(self.read_text())

    def get(self, name: str) -> Optional[LayoutEntry]:
        return self.load().get(name)

    def render(self, monitors: Iterable[Monitor]) -> str:
        """File contents after an update-or-append of every positioned monitor."""
        updates: dict[str, LayoutEntry] = {}
        for monitor in monitors:
            if monitor.position is None:
                logger.info("Not saving %s: no geometry reported", monitor.name)
                continue
            updates[monitor.name] = LayoutEntry.from_monitor(monitor)

        lines: list[str] = []
        replaced: set[str] = set()
        for line in self.read_text().splitlines():
            fields = line.split()
            name = fields[0] if fields else None
            if name in replaced:
                # Later duplicates of an updated name are dropped
                continue
            if name in updates:
                entry = updates.pop(name)
                replaced.add(name)
                lines.append(entry.to_line())
                logger.debug("Updated %s", entry.to_line())
            else:
                lines.append(line)

        for entry in updates.values():
            lines.append(entry.to_line())
            logger.debug("Added %s", entry.to_line())

        return "\n".join(lines) + "\n"

    def save(self, monitors: Iterable[Monitor]) -> dict[str, LayoutEntry]:
        """Update-or-append one line per positioned monitor.

        Returns the entries stored in the file after the write.
        """
        write_text_atomic(self._path, self.render(monitors))
        logger.info("Saved layout to %s", self._path)
        return self.load()
