"""Host-facing scan protocol.

A scan emits, in order:

    {'type': 'scan-started'}
    {'type': 'scan-progress', 'processed': n, 'total': m}     zero or more
    {'type': 'scan-results', 'results': [...], 'stats': {...}, 'errors': [...]}

or, if the scan cannot run at all, the terminal
{'type': 'scan-error', 'message': 'Scan failed: ...'} instead of results.
No partial report is emitted after a scan-error.

Nodes and palette may be passed as zero-argument loaders. They are then
called after scan-started, so an unreadable document or palette file ends
the stream with scan-error like any other orchestrator failure.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from visualine.core.palette import Palette
from visualine.core.report import report_to_dict
from visualine.core.scanner import scan
from visualine.core.types import ScanProgress, ScanReport

logger = logging.getLogger(__name__)

Emit = Callable[[dict[str, Any]], None]
NodeSource = Iterable[Any] | Callable[[], Iterable[Any]]
PaletteSource = Palette | Callable[[], Palette] | None


def run_scan(nodes: NodeSource, emit: Emit, palette: PaletteSource = None) -> ScanReport | None:
    """Run a scan, reporting through emit. Returns the report, or None on failure."""
    emit({'type': 'scan-started'})

    def on_progress(progress: ScanProgress) -> None:
        emit({'type': 'scan-progress', 'processed': progress.processed, 'total': progress.total})

    try:
        if callable(palette):
            palette = palette()
        if callable(nodes):
            nodes = nodes()
        report = scan(nodes, palette=palette, on_progress=on_progress)
    except Exception as exc:
        logger.error('Scan failed: %s', exc)
        emit({'type': 'scan-error', 'message': f'Scan failed: {exc}'})
        return None

    emit({'type': 'scan-results', **report_to_dict(report)})
    return report
