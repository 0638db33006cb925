"""kscreen-doctor output parser and command adapter.

``kscreen-doctor -o`` prints one record per output, e.g.::

    Output: 1 eDP-1 enabled connected priority 1 Panel Modes: 0:1920x1080@60*! ...
        Geometry: 0,0 1920x1080 Scale: 1 Rotation: 1 ...

Everything that depends on that format lives in :func:`parse_outputs`.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

import monitor_config.log  # registers TRACE level and logger.trace()
from monitor_config.errors import KScreenError, OutputParseError
from monitor_config.models import Directive, Monitor, Position, Size
from monitor_config.platform.subprocess_impl import SubprocessSystemAdapter
from monitor_config.platform.system_adapter import ISystemAdapter

logger = logging.getLogger(__name__)

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")

OUTPUT_MARKER = "Output:"
GEOMETRY_MARKER = "Geometry:"
PRIORITY_MARKER = "priority"


def strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


def _split_records(text: str) -> list[list[str]]:
    """Group whitespace tokens into records, each starting at ``Output:``."""
    records: list[list[str]] = []
    for token in strip_ansi(text).split():
        if token == OUTPUT_MARKER:
            records.append([])
        elif records:
            records[-1].append(token)
    return records


def _token_after(tokens: list[str], marker: str, offset: int = 1) -> Optional[str]:
    try:
        idx = tokens.index(marker)
    except ValueError:
        return None
    pos = idx + offset
    return tokens[pos] if pos < len(tokens) else None


def _parse_record(tokens: list[str]) -> Monitor:
    if len(tokens) < 2:
        raise OutputParseError(f"Output record without a name: {' '.join(tokens)!r}")
    try:
        output_id = int(tokens[0])
    except ValueError:
        raise OutputParseError(f"Invalid output id {tokens[0]!r}") from None

    monitor = Monitor(
        output_id=output_id,
        name=tokens[1],
        enabled="disabled" not in tokens,
        connected="disconnected" not in tokens,
    )

    pos_text = _token_after(tokens, GEOMETRY_MARKER)
    size_text = _token_after(tokens, GEOMETRY_MARKER, offset=2)
    if pos_text is not None:
        try:
            monitor.position = Position.parse(pos_text)
            if size_text is not None:
                monitor.size = Size.parse(size_text)
        except ValueError as exc:
            raise OutputParseError(f"Bad geometry for {monitor.name}: {exc}") from None

    prio_text = _token_after(tokens, PRIORITY_MARKER)
    if prio_text is not None:
        try:
            monitor.priority = int(prio_text)
        except ValueError:
            raise OutputParseError(
                f"Bad priority for {monitor.name}: {prio_text!r}"
            ) from None

    return monitor


def parse_outputs(text: str) -> list[Monitor]:
    """Parse ``kscreen-doctor -o`` output into monitors, in reported order."""
    return [_parse_record(tokens) for tokens in _split_records(text)]


class KScreenDoctor:
    """Thin wrapper running kscreen-doctor through an ISystemAdapter."""

    def __init__(
        self,
        system: ISystemAdapter | None = None,
        binary: str = "kscreen-doctor",
        timeout: float | None = 10.0,
    ) -> None:
        self.system = system or SubprocessSystemAdapter()
        self.binary = binary
        self.timeout = timeout

    def _run(self, args: list[str]) -> str:
        result = self.system.run_command(args, timeout=self.timeout)
        if result.returncode != 0:
            raise KScreenError(args, result.returncode, result.stderr)
        return result.stdout

    def query(self) -> list[Monitor]:
        """Return the outputs currently reported by ``kscreen-doctor -o``."""
        raw = self._run([self.binary, "-o"])
        logger.trace("kscreen-doctor -o:\n%s", raw)  # type: ignore[attr-defined]
        monitors = parse_outputs(raw)
        for m in monitors:
            logger.debug("Output %s: position=%s size=%s priority=%s enabled=%s",
                         m.name, m.position, m.size, m.priority, m.enabled)
        return monitors

    def command(self, directives: Iterable[Directive]) -> list[str]:
        """Serialize directives into a full kscreen-doctor argument list."""
        return [self.binary] + [d.to_arg() for d in directives]

    def apply(self, directives: Iterable[Directive]) -> list[str]:
        """Run kscreen-doctor once with all directives. Returns the command."""
        cmd = self.command(directives)
        logger.info("Running: %s", " ".join(cmd))
        self._run(cmd)
        return cmd
