"""Nearest design-token lookup under the Euclidean RGB metric."""

import logging
import math

from visualine.core.codec import distance
from visualine.core.errors import NoTokens
from visualine.core.palette import Palette
from visualine.core.types import Availability, TokenMatch

logger = logging.getLogger(__name__)

DEGRADED_NAME = 'Error'


def nearest(hex_color: str, palette: Palette) -> TokenMatch:
    """Return the palette token closest to hex_color.

    Tokens are scored in palette order and only a strictly smaller distance
    replaces the current best, so the earliest token wins a tie. A token
    that blows up while being scored is logged and skipped.

    Raises NoTokens if the palette is empty or no token is at a finite
    distance (which is also what a malformed hex_color produces).
    """
    if not palette:
        raise NoTokens('Palette has no tokens')

    best: TokenMatch | None = None
    best_distance = math.inf
    for name, token in palette.items():
        try:
            d = distance(hex_color, token.value)
        except Exception:
            logger.warning('Error processing token %s', name, exc_info=True)
            continue
        if d < best_distance:
            best_distance = d
            best = TokenMatch(
                name=name,
                value=token.value,
                availability=token.availability,
                note=token.note,
                distance=d,
            )

    if best is None:
        raise NoTokens('No tokens found for comparison')
    return best


def degraded_match(hex_color: str, reason: str) -> TokenMatch:
    return TokenMatch(
        name=DEGRADED_NAME,
        value=hex_color,
        availability=Availability.UNKNOWN,
        note=f'Matching failed: {reason}',
        distance=None,
    )


def match_token(hex_color: str, palette: Palette) -> TokenMatch:
    """Like nearest(), but always returns a displayable match."""
    try:
        return nearest(hex_color, palette)
    except Exception as exc:
        logger.warning('Token matching failed for %s: %s', hex_color, exc)
        return degraded_match(hex_color, str(exc))
