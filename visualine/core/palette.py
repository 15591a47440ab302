"""Design-token palette: embedded baseline table and JSON resource loader.

Resource format (the baseline-data layout):

    {"tokens": {"primary/500": {"value": "#FF3366",
                                "availability": "widely",
                                "note": "Main brand"}}}

Token order in the file is palette order, which decides match ties.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from visualine.core.errors import PaletteError
from visualine.core.types import Availability, Token

logger = logging.getLogger(__name__)

# (name, value, availability, note): baseline table shipped with the tool
BASELINE_TOKENS: tuple[tuple[str, str, str, str], ...] = (
    ('primary/50', '#FFF5F7', 'widely', 'Light tint'),
    ('primary/100', '#FFE4EA', 'widely', 'Soft background'),
    ('primary/300', '#FF7CA1', 'widely', 'Accent shade'),
    ('primary/500', '#FF3366', 'widely', 'Main brand'),
    ('primary/700', '#C0244B', 'widely', 'Dark brand'),
    ('neutral/50', '#FAFAFA', 'widely', 'Light bg'),
    ('neutral/100', '#F5F5F5', 'widely', 'Surface bg'),
    ('neutral/300', '#D4D4D8', 'widely', 'Border'),
    ('neutral/700', '#374151', 'widely', 'Text dark'),
    ('accent/blue', '#007BFF', 'limited', 'Some old browsers'),
    ('accent/teal', '#14B8A6', 'widely', 'Highlight'),
    ('accent/purple', '#8B5CF6', 'widely', 'Highlight'),
    ('success/500', '#10B981', 'widely', 'Success'),
    ('warning/500', '#F59E0B', 'widely', 'Warning'),
    ('danger/500', '#DC2626', 'widely', 'Error'),
    ('info/500', '#3B82F6', 'widely', 'Info'),
    ('glass/blur', '#FFFFFF', 'limited', 'Backdrop blur'),
    ('lab/lch', '#E0D8FF', 'limited', 'New color format'),
)


class Palette(Mapping[str, Token]):
    """Immutable, ordered mapping of token name to Token."""

    def __init__(self, tokens: Iterable[Token] = ()):
        entries: dict[str, Token] = {}
        for token in tokens:
            if token.name in entries:
                raise PaletteError(f'Duplicate token name: {token.name}')
            entries[token.name] = token
        self._tokens = MappingProxyType(entries)

    def __getitem__(self, name: str) -> Token:
        return self._tokens[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f'Palette({len(self)} tokens)'

    @classmethod
    def baseline(cls) -> Palette:
        return cls(
            Token(name=name, value=value, availability=Availability(availability), note=note)
            for name, value, availability, note in BASELINE_TOKENS
        )

    @classmethod
    def from_mapping(cls, data: Any) -> Palette:
        """Build a palette from a parsed baseline-data document."""
        if not isinstance(data, Mapping) or not isinstance(data.get('tokens'), Mapping):
            raise PaletteError("Palette data must be an object with a 'tokens' object")
        tokens = []
        for name, entry in data['tokens'].items():
            if not isinstance(entry, Mapping) or 'value' not in entry:
                raise PaletteError(f'Token {name!r} has no value')
            tokens.append(
                Token(
                    name=str(name),
                    value=str(entry['value']),
                    availability=Availability.parse(entry.get('availability', 'unknown')),
                    note=str(entry.get('note', '')),
                )
            )
        return cls(tokens)


def load_palette(path: str | Path) -> Palette:
    """Load a palette from a baseline-data JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except OSError as exc:
        raise PaletteError(f'Cannot read palette {path}: {exc}') from exc
    except json.JSONDecodeError as exc:
        raise PaletteError(f'Palette {path} is not valid JSON: {exc}') from exc
    palette = Palette.from_mapping(data)
    logger.debug('Loaded %d tokens from %s', len(palette), path)
    return palette


_default: Palette | None = None
_default_lock = threading.Lock()


def load_default_palette() -> Palette:
    """Return the process-wide baseline palette, building it on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = Palette.baseline()
                logger.debug('Baseline palette loaded (%d tokens)', len(_default))
    return _default


def reset_default_palette() -> None:
    """Drop the cached baseline palette. Used by tests."""
    global _default
    with _default_lock:
        _default = None
