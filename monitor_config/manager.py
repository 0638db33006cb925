"""LayoutManager — list, save and apply monitor layouts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from monitor_config import layout
from monitor_config.errors import ConfigNotSavedError, NoMonitorsError
from monitor_config.kscreen import KScreenDoctor
from monitor_config.models import Directive, EnableOutput, LayoutEntry, Monitor
from monitor_config.store import LayoutStore

logger = logging.getLogger(__name__)


@dataclass
class ApplyResult:
    """What an apply operation did (or would do, on a dry run)."""

    command: list[str]
    enabled: list[str] = field(default_factory=list)
    disabled: list[str] = field(default_factory=list)
    dry_run: bool = False


class LayoutManager:
    """Coordinates kscreen-doctor queries, the layout store and the planner.

    Every apply operation runs kscreen-doctor exactly once, or not at all
    when *dry_run* is set.
    """

    def __init__(self, store: LayoutStore, kscreen: KScreenDoctor, dry_run: bool = False) -> None:
        self.store = store
        self.kscreen = kscreen
        self.dry_run = dry_run

    # -- queries ----------------------------------------------------------

    def list_monitors(self) -> list[str]:
        return [m.name for m in self.kscreen.query()]

    def require_saved(self) -> None:
        if not self.store.is_saved():
            raise ConfigNotSavedError(self.store.path)

    # -- save -------------------------------------------------------------

    def _saveable(self) -> list[Monitor]:
        """Connected outputs; a disconnected output's geometry is not a placement."""
        return layout.connected_outputs(self.kscreen.query())

    def save(self) -> dict[str, LayoutEntry]:
        """Write the live layout. Honours *dry_run* by not touching the file."""
        monitors = self._saveable()
        if self.dry_run:
            logger.info("Dry run: not writing %s", self.store.path)
            return self.store.parse(self.store.render(monitors))
        entries = self.store.save(monitors)
        logger.info("Saved %d monitor(s): %s", len(monitors),
                    ", ".join(m.name for m in monitors))
        return entries

    def preview_save(self) -> str:
        """Layout file contents a save would produce, without writing them."""
        return self.store.render(self._saveable())

    # -- apply ------------------------------------------------------------

    def apply_saved(self, disabled: Iterable[str] = ()) -> ApplyResult:
        """Apply the saved layout, disabling the monitors named in *disabled*."""
        self.require_saved()
        monitors = self.kscreen.query()
        names = {m.name for m in layout.connected_outputs(monitors)}
        to_disable = set()
        for name in disabled:
            if name in names:
                to_disable.add(name)
            else:
                logger.warning("Ignoring unknown monitor %r (connected: %s)",
                               name, ", ".join(sorted(names)))
        directives = layout.plan_saved(monitors, self.store.load(), to_disable)
        return self._apply(monitors, directives)

    def apply_left_only(self) -> ApplyResult:
        self.require_saved()
        monitors = self.kscreen.query()
        return self._apply(monitors, layout.plan_left_only(monitors))

    def apply_right_only(self) -> ApplyResult:
        self.require_saved()
        monitors = self.kscreen.query()
        return self._apply(monitors, layout.plan_right_only(monitors))

    def apply_left_right(self) -> ApplyResult:
        self.require_saved()
        monitors = self.kscreen.query()
        return self._apply(monitors, layout.plan_left_right(monitors))

    def _apply(self, monitors: list[Monitor], directives: list[Directive]) -> ApplyResult:
        if not directives:
            raise NoMonitorsError("kscreen-doctor reported no outputs")
        enabled = [d.name for d in directives if isinstance(d, EnableOutput)]
        result = ApplyResult(
            command=self.kscreen.command(directives),
            enabled=enabled,
            disabled=[m.name for m in layout.connected_outputs(monitors)
                      if m.name not in enabled],
            dry_run=self.dry_run,
        )
        if self.dry_run:
            logger.info("Dry run: %s", " ".join(result.command))
        else:
            self.kscreen.apply(directives)
        return result
