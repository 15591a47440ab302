"""Shared types for visualine: layer tree, tokens, scan results, Command."""

from __future__ import annotations

import argparse
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


@dataclass(frozen=True)
class RGB:
    """Normalized colour channels as exported by the host (0.0–1.0, may be junk)."""

    r: Any = None
    g: Any = None
    b: Any = None


@dataclass(frozen=True)
class Paint:
    """A single fill or stroke entry on a layer."""

    type: str
    visible: bool = True
    color: RGB | None = None


@dataclass(frozen=True)
class LayerNode:
    """A node of the inspected document's layer tree.

    fills/strokes are None when the host reports them as mixed or absent.
    """

    type: str
    name: str | None = None
    id: str | None = None
    visible: bool = True
    fills: tuple[Paint, ...] | None = ()
    strokes: tuple[Paint, ...] | None = ()
    children: tuple[LayerNode, ...] = ()


class Availability(StrEnum):
    WIDELY = 'widely'
    LIMITED = 'limited'
    NEW = 'new'
    UNKNOWN = 'unknown'

    @classmethod
    def parse(cls, value: Any) -> Availability:
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.UNKNOWN


class StyleKind(StrEnum):
    FILL = 'fill'
    STROKE = 'stroke'


@dataclass(frozen=True)
class Token:
    """A named reference colour in the design palette."""

    name: str
    value: str  # hex, kept as given
    availability: Availability = Availability.UNKNOWN
    note: str = ''


@dataclass(frozen=True)
class TokenMatch:
    """The token chosen for a colour. distance is None for a degraded match."""

    name: str
    value: str
    availability: Availability
    note: str
    distance: float | None

    @property
    def degraded(self) -> bool:
        return self.distance is None


@dataclass(frozen=True)
class ScanResult:
    """One matched colour instance on a layer."""

    layer_name: str
    layer_type: str
    style: StyleKind
    color: str
    token: TokenMatch


@dataclass(frozen=True)
class ScanError:
    """A recoverable failure recorded during a scan."""

    node_name: str
    node_type: str
    cause: str

    @property
    def description(self) -> str:
        return self.cause


@dataclass(frozen=True)
class PaintProcessingError(ScanError):
    """Filtering or iterating a node's fills or strokes failed."""

    surface: StyleKind = StyleKind.FILL

    @property
    def description(self) -> str:
        return f'{self.surface.value.capitalize()} processing error: {self.cause}'


@dataclass(frozen=True)
class ChildProcessingError(ScanError):
    """A child subtree failed as a whole; attributed to the child."""

    @property
    def description(self) -> str:
        return f'Child processing error: {self.cause}'


@dataclass(frozen=True)
class NodeProcessingError(ScanError):
    """A top-level node failed outside the tree scanner's own guards."""


@dataclass
class ScanOutcome:
    """Results and errors produced by one subtree. Folded by the caller."""

    results: list[ScanResult] = field(default_factory=list)
    errors: list[ScanError] = field(default_factory=list)

    def extend(self, other: ScanOutcome) -> None:
        self.results.extend(other.results)
        self.errors.extend(other.errors)


@dataclass(frozen=True)
class ScanProgress:
    processed: int
    total: int


@dataclass(frozen=True)
class ScanStats:
    total_nodes: int = 0
    processed_nodes: int = 0
    error_count: int = 0
    color_matches: int = 0


@dataclass
class ScanReport:
    """Aggregate output of a scan."""

    results: list[ScanResult] = field(default_factory=list)
    errors: list[ScanError] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)

    def max_distance(self) -> float | None:
        """Largest non-degraded match distance, or None if there is none."""
        distances = [r.token.distance for r in self.results if r.token.distance is not None]
        return max(distances) if distances else None


class Command:
    """A self-registering CLI subcommand.

    Usage in a command module:

        command = Command(name='scan', help='Scan a layer document')

        @command.arguments
        def arguments(parser):
            parser.add_argument('document')

        @command.run
        def run(args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable[[argparse.Namespace], int | None] | None = None
        self._args_fn: Callable[[argparse.ArgumentParser], None] | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def arguments(self, fn: Callable) -> Callable:
        """Decorator to register the function that adds subcommand arguments."""
        self._args_fn = fn
        return fn

    def configure(self, parser: argparse.ArgumentParser) -> None:
        if self._args_fn is not None:
            self._args_fn(parser)

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the command's run function. Returns the exit status."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        return self._run_fn(args) or 0
