"""List the tokens of the active design palette, in match order.

The palette is the built-in baseline table unless --palette (or
VISUALINE_PALETTE) points at a baseline-data JSON file. --json prints the
palette in that same file format.

Example:
    visualine palette
    visualine palette --palette tokens.json --json
"""

import argparse
import json

from visualine.commands._common import resolve_palette
from visualine.core.report import BADGES
from visualine.core.types import Command

command = Command(
    name='palette',
    help='List the design tokens colours are matched against.',
)


@command.run
def run(args: argparse.Namespace) -> int:
    palette = resolve_palette(args)
    if args.json:
        tokens = {
            name: {'value': t.value, 'availability': t.availability.value, 'note': t.note}
            for name, t in palette.items()
        }
        print(json.dumps({'tokens': tokens}, indent=2))
        return 0

    width = max((len(name) for name in palette), default=0)
    for name, token in palette.items():
        badge = BADGES.get(token.availability, '?')
        print(f'{name:<{width}}  {token.value:<8} {badge} {token.availability.value:<8} {token.note}')
    print(f'\n{len(palette)} tokens')
    return 0
