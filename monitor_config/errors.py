"""Exception hierarchy for monitor-config."""

from __future__ import annotations


class MonitorConfigError(Exception):
    """Base class for all errors raised by monitor-config."""


class ConfigNotSavedError(MonitorConfigError):
    """A layout was requested before any layout has been saved."""

    def __init__(self, path: str) -> None:
        super().__init__(
            "Monitor config has not been saved yet. Please run with --save first."
        )
        self.path = path


class KScreenError(MonitorConfigError):
    """kscreen-doctor could not be run or exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        detail = stderr.strip() or "no error output"
        super().__init__(
            f"{' '.join(command)} failed with exit code {returncode}: {detail}"
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class OutputParseError(MonitorConfigError):
    """kscreen-doctor output did not have the expected shape."""


class NoMonitorsError(MonitorConfigError):
    """No usable monitor was found for the requested layout."""


class LayoutFileError(MonitorConfigError):
    """The saved layout file exists but cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read layout file {path}: {reason}")
        self.path = path
