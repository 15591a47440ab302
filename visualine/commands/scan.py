"""Scan a layer document and match every solid fill/stroke to a design token.

Walks each top-level layer (or the document's selection with
--selected-only) depth-first. Hidden layers and their subtrees are skipped,
as are non-solid and hidden paints. Each remaining colour is matched to the
nearest palette token by RGB Euclidean distance; ties go to the token listed
first in the palette.

A broken layer never stops the scan. Its failure is listed under errors and
the remaining layers are still scanned.

Output modes:
  (default)  human-readable report
  --json     report as JSON (results, stats, errors)
  --events   JSON lines: scan-started, scan-progress..., scan-results/scan-error

Exit status: 0 ok, 1 if --fail-on-distance is exceeded (a degraded "Error"
match always counts as exceeding it), 2 if the scan failed.

Example:
    visualine scan page.json
    visualine scan page.json --selected-only --json
    visualine scan page.json --palette tokens.json --fail-on-distance 12
"""

import argparse
import json
import sys
from typing import Any

from visualine.commands._common import add_document_arguments, load_roots, print_progress, resolve_palette
from visualine.core.events import run_scan
from visualine.core.report import format_json, format_text
from visualine.core.scanner import scan
from visualine.core.types import Command, ScanReport

command = Command(
    name='scan',
    help='Scan a layer document and match solid colours to design tokens.',
)


@command.arguments
def arguments(parser: argparse.ArgumentParser) -> None:
    add_document_arguments(parser)
    parser.add_argument('-e', '--events', action='store_true', help='Emit the host event stream as JSON lines')
    parser.add_argument(
        '-d',
        '--fail-on-distance',
        type=float,
        default=None,
        metavar='N',
        help='Exit 1 if any token match distance exceeds N (CI gating)',
    )


def _emit(event: dict[str, Any]) -> None:
    print(json.dumps(event), flush=True)


def check_fail_on_distance(report: ScanReport, threshold: float) -> bool:
    """Return True if any match distance exceeds threshold.

    A degraded match has no distance and always fails the gate.
    """
    failures = [r for r in report.results if r.token.degraded or r.token.distance > threshold]
    if failures:
        print(f'FAIL: {len(failures)} colour(s) exceeded distance threshold {threshold}:', file=sys.stderr)
        for r in failures:
            dist = 'n/a' if r.token.degraded else f'{r.token.distance:.2f}'
            print(f'  {r.layer_name} {r.style.value} {r.color} → {r.token.name}: Δ={dist}', file=sys.stderr)
        return True
    return False


@command.run
def run(args: argparse.Namespace) -> int:
    if args.events:
        report = run_scan(lambda: load_roots(args), emit=_emit, palette=lambda: resolve_palette(args))
        if report is None:
            return 2
    else:
        palette = resolve_palette(args)
        report = scan(load_roots(args), palette=palette, on_progress=print_progress)
        print(format_json(report) if args.json else format_text(report, source=args.document))

    # CI gate runs after output so the report is visible on failure
    if args.fail_on_distance is not None and check_fail_on_distance(report, args.fail_on_distance):
        return 1
    return 0
