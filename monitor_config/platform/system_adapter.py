"""ISystemAdapter interface — abstraction for subprocess/system calls."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class CommandResult:
    stdout: str
    stderr: str
    returncode: int


class ISystemAdapter(ABC):
    @abstractmethod
    def run_command(self, args: list[str], timeout: float | None = None) -> CommandResult: ...
