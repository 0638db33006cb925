"""Shared fixtures and mock adapters for monitor-config tests."""

from __future__ import annotations

import logging

import pytest

from monitor_config.kscreen import KScreenDoctor
from monitor_config.manager import LayoutManager
from monitor_config.platform.system_adapter import CommandResult, ISystemAdapter
from monitor_config.store import LayoutStore

ESC = "\x1b"


def kscreen_output(*outputs: tuple) -> str:
    """Build ``kscreen-doctor -o`` text.

    Each output is ``(id, name, "x,y", "WxH", priority)``; the colour codes
    mirror what kscreen-doctor prints on a terminal.
    """
    records = []
    for output_id, name, pos, size, priority in outputs:
        records.append(
            f"Output: {output_id} {ESC}[01;32m{name}{ESC}[0m enabled connected "
            f"priority {priority} DisplayPort Modes: 0:{size}@60*! 1:1280x720@60 "
            f"Geometry: {pos} {size} Scale: 1 Rotation: 1 Overscan: 0 "
            f"Vrr: incapable RgbRange: unknown HDR: incapable"
        )
    return "\n".join(records) + "\n"


THREE_MONITORS = kscreen_output(
    (1, "DP-1", "0,0", "2560x1440", 1),
    (2, "HDMI-A-1", "2560,0", "1920x1080", 2),
    (3, "eDP-1", "4480,200", "1920x1200", 3),
)


# DP-1 is unplugged but still listed, with a stale geometry at the origin
WITH_DISCONNECTED = (
    f"Output: 1 {ESC}[01;32mHDMI-A-1{ESC}[0m enabled connected priority 1 HDMI "
    f"Modes: 0:1920x1080@60*! Geometry: 0,0 1920x1080 Scale: 1 Rotation: 1\n"
    f"Output: 2 {ESC}[01;31mDP-1{ESC}[0m disabled disconnected priority 0 DisplayPort "
    f"Modes: Geometry: 0,0 0x0 Scale: 1 Rotation: 1\n"
    f"Output: 3 {ESC}[01;32meDP-1{ESC}[0m enabled connected priority 2 Panel "
    f"Modes: 0:1920x1200@60*! Geometry: 1920,0 1920x1200 Scale: 1 Rotation: 1\n"
)


class MockSystemAdapter(ISystemAdapter):
    """Records every command; ``-o`` queries return canned output."""

    def __init__(self, query_output: str = THREE_MONITORS, returncode: int = 0,
                 stderr: str = "") -> None:
        self.query_output = query_output
        self.returncode = returncode
        self.stderr = stderr
        self.calls: list[list[str]] = []

    def run_command(self, args: list[str], timeout: float | None = None) -> CommandResult:
        self.calls.append(list(args))
        stdout = self.query_output if args[1:] == ["-o"] else ""
        return CommandResult(stdout=stdout, stderr=self.stderr, returncode=self.returncode)

    @property
    def apply_calls(self) -> list[list[str]]:
        return [c for c in self.calls if c[1:] != ["-o"]]


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging() so they never outlive a test."""
    yield
    logger = logging.getLogger("monitor_config")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def mock_system() -> MockSystemAdapter:
    return MockSystemAdapter()


@pytest.fixture
def layout_path(tmp_path) -> str:
    return str(tmp_path / "monitor_config")


@pytest.fixture
def store(layout_path) -> LayoutStore:
    return LayoutStore(layout_path)


@pytest.fixture
def manager(store, mock_system) -> LayoutManager:
    return LayoutManager(store, KScreenDoctor(system=mock_system))
