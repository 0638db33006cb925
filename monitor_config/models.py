"""Typed records shared by the parser, the layout store and the planner."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    @classmethod
    def parse(cls, text: str) -> "Position":
        """'1920,0' or '(1920,0)' → Position(1920, 0). Raises ValueError on bad input."""
        parts = text.strip().strip("()").split(",")
        if len(parts) != 2:
            raise ValueError(f"Invalid position: {text!r}")
        return cls(int(parts[0]), int(parts[1]))

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


ORIGIN = Position(0, 0)


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    @classmethod
    def parse(cls, text: str) -> "Size":
        """'(2560x1440)' or '2560x1440' → Size(2560, 1440)."""
        parts = text.strip().strip("()").split("x")
        if len(parts) != 2:
            raise ValueError(f"Invalid size: {text!r}")
        return cls(int(parts[0]), int(parts[1]))

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass
class Monitor:
    """One output as reported by ``kscreen-doctor -o``."""

    output_id: int
    name: str
    enabled: bool = True
    connected: bool = True
    position: Optional[Position] = None
    size: Optional[Size] = None
    priority: Optional[int] = None


@dataclass(frozen=True)
class LayoutEntry:
    """A saved monitor placement: one line of the layout file."""

    name: str
    position: Position
    priority: Optional[int] = None

    @classmethod
    def parse(cls, line: str) -> "LayoutEntry":
        """Parse ``<name> <x,y> [<priority>]``. Raises ValueError on bad input."""
        fields = line.split()
        if len(fields) not in (2, 3):
            raise ValueError(f"Expected '<name> <x,y> <priority>', got {line!r}")
        priority = int(fields[2]) if len(fields) == 3 else None
        return cls(fields[0], Position.parse(fields[1]), priority)

    @classmethod
    def from_monitor(cls, monitor: Monitor) -> "LayoutEntry":
        if monitor.position is None:
            raise ValueError(f"Output {monitor.name} has no position")
        return cls(monitor.name, monitor.position, monitor.priority)

    def to_line(self) -> str:
        if self.priority is None:
            return f"{self.name} {self.position}"
        return f"{self.name} {self.position} {self.priority}"


# ---------------------------------------------------------------------------
# kscreen-doctor directives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Directive(ABC):
    """A single ``output.<name>.<setting>`` argument for kscreen-doctor."""

    name: str

    @abstractmethod
    def setting(self) -> str: ...

    def to_arg(self) -> str:
        return f"output.{self.name}.{self.setting()}"


@dataclass(frozen=True)
class EnableOutput(Directive):
    def setting(self) -> str:
        return "enable"


@dataclass(frozen=True)
class DisableOutput(Directive):
    def setting(self) -> str:
        return "disable"


@dataclass(frozen=True)
class SetPosition(Directive):
    position: Position = ORIGIN

    def setting(self) -> str:
        return f"position.{self.position}"


@dataclass(frozen=True)
class SetPriority(Directive):
    priority: int = 1

    def setting(self) -> str:
        return f"priority.{self.priority}"
