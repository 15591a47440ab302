"""Render a PNG swatch sheet of a scan: scanned colour beside matched token.

Runs the same scan as 'scan', then draws one row per result:

    [scanned colour] [token colour]  layer - fill #FF3366 -> primary/500 (d=0.00)

Saves to <out_dir>/swatches.png and prints the path. Useful for eyeballing
how far off-palette a document has drifted.

Example:
    visualine swatches page.json ./tmp
    visualine swatches page.json ./tmp --selected-only --palette tokens.json
"""

import argparse
import os
import sys

import numpy as np
from PIL import Image, ImageDraw

from visualine.commands._common import add_document_arguments, load_roots, print_progress, resolve_palette
from visualine.core.codec import decode
from visualine.core.errors import InvalidColor
from visualine.core.report import format_json
from visualine.core.scanner import scan
from visualine.core.types import Command, ScanReport

command = Command(
    name='swatches',
    help='Scan a document and render scanned vs. token colours as a PNG sheet.',
)

ROW_HEIGHT = 28
SWATCH_WIDTH = 48
LABEL_WIDTH = 420
PADDING = 4
FALLBACK_RGB = (128, 128, 128)


@command.arguments
def arguments(parser: argparse.ArgumentParser) -> None:
    add_document_arguments(parser)
    parser.add_argument('out_dir', help='Directory to write swatches.png into')


def _rgb(hex_color: str) -> tuple[int, int, int]:
    try:
        return decode(hex_color)
    except InvalidColor:
        return FALLBACK_RGB


def render_swatches(report: ScanReport) -> Image.Image:
    """One row per result: scanned swatch, token swatch, label."""
    rows = len(report.results)
    width = 2 * SWATCH_WIDTH + 3 * PADDING + LABEL_WIDTH
    height = max(rows, 1) * ROW_HEIGHT

    canvas = np.full((height, width, 3), 255, dtype=np.uint8)
    for i, result in enumerate(report.results):
        y0, y1 = i * ROW_HEIGHT + 2, (i + 1) * ROW_HEIGHT - 2
        x0 = PADDING
        canvas[y0:y1, x0 : x0 + SWATCH_WIDTH] = _rgb(result.color)
        x0 += SWATCH_WIDTH + PADDING
        canvas[y0:y1, x0 : x0 + SWATCH_WIDTH] = _rgb(result.token.value)

    image = Image.fromarray(canvas)
    draw = ImageDraw.Draw(image)
    text_x = 2 * SWATCH_WIDTH + 3 * PADDING
    for i, result in enumerate(report.results):
        match = result.token
        dist = 'n/a' if match.distance is None else f'{match.distance:.2f}'
        label = f'{result.layer_name} - {result.style.value} {result.color} -> {match.name} (d={dist})'
        # default bitmap font is latin-1 only
        label = label.encode('ascii', 'replace').decode('ascii')
        draw.text((text_x, i * ROW_HEIGHT + ROW_HEIGHT // 3), label, fill=(0, 0, 0))
    return image


@command.run
def run(args: argparse.Namespace) -> int:
    palette = resolve_palette(args)
    report = scan(load_roots(args), palette=palette, on_progress=print_progress)

    # stdout carries only the JSON report under --json
    status = sys.stderr if args.json else sys.stdout
    if args.json:
        print(format_json(report))
    if not report.results:
        print('swatches: no solid colours found, nothing rendered', file=status)
        return 0

    os.makedirs(args.out_dir, exist_ok=True)
    path = os.path.join(args.out_dir, 'swatches.png')
    render_swatches(report).save(path)
    print(f'swatches: {len(report.results)} colours → {path}', file=status)
    return 0
