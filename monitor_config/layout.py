"""Layout planning: turn monitors (and saved entries) into kscreen-doctor directives.

All functions here are pure. Disconnected outputs get no directives at
all. Directives for a saved layout follow the order the monitors were
reported in.
"""

from __future__ import annotations

import logging
from typing import Collection, Mapping, Optional

from monitor_config.errors import NoMonitorsError
from monitor_config.models import (
    ORIGIN,
    Directive,
    DisableOutput,
    EnableOutput,
    LayoutEntry,
    Monitor,
    Position,
    SetPosition,
    SetPriority,
)

logger = logging.getLogger(__name__)


def connected_outputs(monitors: list[Monitor]) -> list[Monitor]:
    """Outputs with a display attached. Disconnected ones are never planned."""
    return [m for m in monitors if m.connected]


def _positioned(monitors: list[Monitor]) -> list[Monitor]:
    found = [m for m in connected_outputs(monitors) if m.position is not None]
    if not found:
        raise NoMonitorsError("No connected output reports a position")
    return found


def leftmost(monitors: list[Monitor]) -> Monitor:
    """Monitor with the smallest x. Ties go to the lexicographically smallest name."""
    return min(_positioned(monitors), key=lambda m: (m.position.x, m.name))


def rightmost(monitors: list[Monitor]) -> Monitor:
    """Monitor with the largest x. Ties go to the lexicographically smallest name."""
    return min(_positioned(monitors), key=lambda m: (-m.position.x, m.name))


def resolve_entry(monitor: Monitor, saved: Mapping[str, LayoutEntry]) -> Optional[LayoutEntry]:
    """Saved placement for *monitor*, falling back to its live one.

    Returns None when neither is known.
    """
    entry = saved.get(monitor.name)
    if entry is not None:
        return entry
    if monitor.position is None:
        return None
    logger.debug("No saved entry for %s, using live position", monitor.name)
    return LayoutEntry.from_monitor(monitor)


def plan_saved(
    monitors: list[Monitor],
    saved: Mapping[str, LayoutEntry],
    disabled: Collection[str] = (),
) -> list[Directive]:
    directives: list[Directive] = []
    for m in connected_outputs(monitors):
        if m.name in disabled:
            directives.append(DisableOutput(m.name))
            continue
        directives.append(EnableOutput(m.name))
        entry = resolve_entry(m, saved)
        if entry is None:
            continue
        directives.append(SetPosition(m.name, entry.position))
        if entry.priority is not None:
            directives.append(SetPriority(m.name, entry.priority))
    return directives


def _only(monitors: list[Monitor], placements: Mapping[str, Position]) -> list[Directive]:
    """Enable the monitors in *placements* at their positions, disable the rest.

    The placed monitors come first, in *placements* order.
    """
    directives: list[Directive] = []
    for name, position in placements.items():
        directives.append(EnableOutput(name))
        directives.append(SetPosition(name, position))
    for m in connected_outputs(monitors):
        if m.name not in placements:
            directives.append(DisableOutput(m.name))
    return directives


def plan_left_only(monitors: list[Monitor]) -> list[Directive]:
    return _only(monitors, {leftmost(monitors).name: ORIGIN})


def plan_right_only(monitors: list[Monitor]) -> list[Directive]:
    return _only(monitors, {rightmost(monitors).name: ORIGIN})


def plan_left_right(monitors: list[Monitor]) -> list[Directive]:
    """Leftmost at the origin, rightmost directly to its right."""
    left = leftmost(monitors)
    right = rightmost(monitors)
    if left.name == right.name:
        return plan_left_only(monitors)
    if left.size is None:
        raise NoMonitorsError(f"Output {left.name} reports no resolution")
    return _only(monitors, {
        left.name: ORIGIN,
        right.name: Position(left.size.width, 0),
    })
