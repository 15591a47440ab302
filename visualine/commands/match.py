"""Match literal hex colours against the design-token palette.

Accepts #RGB or #RRGGBB, with or without the leading '#'. Each colour
gets the nearest token and its RGB distance. A colour that cannot be
parsed gets an 'Error' match explaining why.

Example:
    visualine match '#FF3366' 3b82f6 '#fff'
    visualine match '#123456' --palette tokens.json --json
"""

import argparse
import json

from visualine.commands._common import resolve_palette
from visualine.core.codec import normalize_hex
from visualine.core.errors import InvalidColor
from visualine.core.matcher import match_token
from visualine.core.report import format_match, token_to_dict
from visualine.core.types import Command

command = Command(
    name='match',
    help='Find the nearest design token for one or more hex colours.',
)


@command.arguments
def arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('colours', nargs='+', metavar='HEX', help='Hex colours to match')


def _canonical(value: str) -> str:
    candidate = value if value.startswith('#') else f'#{value}'
    try:
        return normalize_hex(candidate)
    except InvalidColor:
        return value


@command.run
def run(args: argparse.Namespace) -> int:
    palette = resolve_palette(args)
    matches = [(colour, match_token(colour, palette)) for colour in map(_canonical, args.colours)]

    if args.json:
        print(json.dumps([{'color': c, 'tokenMatch': token_to_dict(m)} for c, m in matches], indent=2))
    else:
        for colour, match in matches:
            print(format_match(colour, match))
    return 0
