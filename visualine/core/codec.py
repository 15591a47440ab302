"""Colour conversion between host channels, hex strings and 8-bit RGB.

Host colours arrive as normalized floats (0.0–1.0). They are quantized to
8 bits with halves rounded up, the same way the host rounds, so a colour
picked as #FF3366 in the document comes back as #FF3366 here.
"""

import math
import re
from typing import Any

from visualine.core.errors import InvalidColor

HEX_PATTERN = re.compile(r'#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})')


def _quantize(channel: Any) -> int:
    if channel is None:
        raise InvalidColor('Invalid color object')
    try:
        scaled = float(channel) * 255
    except (TypeError, ValueError) as exc:
        raise InvalidColor(f'Invalid RGB values: {channel!r}') from exc
    if not math.isfinite(scaled):
        raise InvalidColor('Invalid RGB values')
    level = math.floor(scaled + 0.5)
    if not 0 <= level <= 255:
        raise InvalidColor(f'RGB value out of range: {channel!r}')
    return level


def encode(color: Any) -> str:
    """Convert an object with r/g/b normalized channels to '#RRGGBB'.

    Raises InvalidColor for a missing colour, a missing or non-numeric
    channel, NaN/infinity, or a channel outside the 0–1 range.
    """
    if color is None:
        raise InvalidColor('Invalid color object')
    r, g, b = (_quantize(getattr(color, ch, None)) for ch in ('r', 'g', 'b'))
    return f'#{r:02X}{g:02X}{b:02X}'


def normalize_hex(value: str) -> str:
    """Return the 6-digit uppercase form of a '#RGB' or '#RRGGBB' string."""
    if not isinstance(value, str) or not HEX_PATTERN.fullmatch(value):
        raise InvalidColor(f'Invalid hex color format: {value!r}')
    digits = value[1:]
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)
    return '#' + digits.upper()


def decode(value: str) -> tuple[int, int, int]:
    """Convert '#RGB' or '#RRGGBB' to an (r, g, b) tuple of 0–255 ints."""
    digits = normalize_hex(value)[1:]
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def distance(hex_a: str, hex_b: str) -> float:
    """Euclidean distance between two hex colours in 8-bit RGB space.

    Never raises: malformed input is infinitely far from everything, so a
    broken token can never win a nearest-match search.
    """
    try:
        r1, g1, b1 = decode(hex_a)
        r2, g2, b2 = decode(hex_b)
    except InvalidColor:
        return math.inf
    return math.sqrt((r1 - r2) ** 2 + (g1 - g2) ** 2 + (b1 - b2) ** 2)
