"""Layer-tree scanning: extract solid fills/strokes and match them to tokens.

process_node() walks one subtree depth-first, pre-order. Failures are kept
at the narrowest scope that still lets the walk move on:

  bad colour data          -> paint dropped silently
  fills/strokes blow up    -> one PaintProcessingError, other surface still read
  a child subtree blows up -> one ChildProcessingError, siblings still read
  a top-level node escapes -> one NodeProcessingError (scan() only)

scan() drives the top-level loop and aggregates a ScanReport.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from visualine.core.codec import encode
from visualine.core.errors import InvalidColor, ScanFailure
from visualine.core.matcher import match_token
from visualine.core.palette import Palette, load_default_palette
from visualine.core.types import (
    ChildProcessingError,
    NodeProcessingError,
    PaintProcessingError,
    ScanOutcome,
    ScanProgress,
    ScanReport,
    ScanResult,
    ScanStats,
    StyleKind,
)

logger = logging.getLogger(__name__)

SOLID = 'SOLID'
UNNAMED = 'Unnamed layer'
UNNAMED_CHILD = 'Unnamed child layer'
UNKNOWN_TYPE = 'UNKNOWN'

# Progress is only reported for scans larger than PROGRESS_MIN_NODES,
# once every PROGRESS_EVERY top-level nodes.
PROGRESS_MIN_NODES = 10
PROGRESS_EVERY = 5

_SURFACE_ATTRS = {StyleKind.FILL: 'fills', StyleKind.STROKE: 'strokes'}

ProgressCallback = Callable[[ScanProgress], None]


def _reason(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _describe(node: Any, default_name: str) -> tuple[str, str]:
    """(name, type) for attributing a result or error to a node."""
    try:
        name = getattr(node, 'name', None) or default_name
        node_type = getattr(node, 'type', None) or UNKNOWN_TYPE
    except Exception:
        return default_name, UNKNOWN_TYPE
    return str(name), str(node_type)


def _is_drawn(paint: Any) -> bool:
    return getattr(paint, 'type', None) == SOLID and getattr(paint, 'visible', True) is not False


def _scan_surface(node: Any, kind: StyleKind, palette: Palette, outcome: ScanOutcome) -> None:
    name, node_type = _describe(node, UNNAMED)
    try:
        paints = getattr(node, _SURFACE_ATTRS[kind], None)
        if not isinstance(paints, (list, tuple)):
            return
        for paint in [p for p in paints if _is_drawn(p)]:
            try:
                color = encode(getattr(paint, 'color', None))
            except InvalidColor as exc:
                logger.debug('Dropping %s paint on %s: %s', kind.value, name, exc)
                continue
            outcome.results.append(
                ScanResult(
                    layer_name=name,
                    layer_type=node_type,
                    style=kind,
                    color=color,
                    token=match_token(color, palette),
                )
            )
    except Exception as exc:
        error = PaintProcessingError(node_name=name, node_type=node_type, cause=_reason(exc), surface=kind)
        logger.debug('%s (%s): %s', name, node_type, error.description)
        outcome.errors.append(error)


def process_node(node: Any, palette: Palette, outcome: ScanOutcome | None = None) -> ScanOutcome:
    """Scan one subtree and return its results and errors.

    If outcome is given, findings are appended to it as they are made, so
    they survive an exception that escapes this call.
    """
    if outcome is None:
        outcome = ScanOutcome()
    if getattr(node, 'visible', True) is False:
        return outcome

    _scan_surface(node, StyleKind.FILL, palette, outcome)
    _scan_surface(node, StyleKind.STROKE, palette, outcome)

    children = getattr(node, 'children', None)
    if isinstance(children, (list, tuple)):
        for child in children:
            child_outcome = ScanOutcome()
            try:
                process_node(child, palette, child_outcome)
            except Exception as exc:
                child_name, child_type = _describe(child, UNNAMED_CHILD)
                error = ChildProcessingError(node_name=child_name, node_type=child_type, cause=_reason(exc))
                logger.debug('%s (%s): %s', child_name, child_type, error.description)
                child_outcome.errors.append(error)
            outcome.extend(child_outcome)
    return outcome


def _notify(on_progress: ProgressCallback | None, progress: ScanProgress) -> None:
    if on_progress is None:
        return
    try:
        on_progress(progress)
    except Exception:
        logger.warning('Progress callback failed at %d/%d', progress.processed, progress.total, exc_info=True)


def scan(
    nodes: Iterable[Any],
    palette: Palette | None = None,
    on_progress: ProgressCallback | None = None,
) -> ScanReport:
    """Scan top-level nodes in order and aggregate a ScanReport.

    palette defaults to the cached baseline palette. on_progress receives a
    ScanProgress after every PROGRESS_EVERY nodes of a scan larger than
    PROGRESS_MIN_NODES, between one node finishing and the next starting.

    Raises ScanFailure if the nodes or palette are unusable. Anything that
    goes wrong inside a single node is recorded in the report instead.
    """
    try:
        roots = list(nodes)
        if palette is None:
            palette = load_default_palette()
    except Exception as exc:
        raise ScanFailure(_reason(exc)) from exc
    if not palette:
        raise ScanFailure('Palette has no tokens')

    total = len(roots)
    report = ScanReport()
    processed = 0
    logger.debug('Scanning %d top-level nodes against %d tokens', total, len(palette))

    for node in roots:
        outcome = ScanOutcome()
        try:
            process_node(node, palette, outcome)
        except Exception as exc:
            name, node_type = _describe(node, UNNAMED)
            logger.warning('Error processing node %s: %s', name, exc)
            outcome.errors.append(NodeProcessingError(node_name=name, node_type=node_type, cause=_reason(exc)))
        report.results.extend(outcome.results)
        report.errors.extend(outcome.errors)
        processed += 1

        if total > PROGRESS_MIN_NODES and processed % PROGRESS_EVERY == 0:
            _notify(on_progress, ScanProgress(processed=processed, total=total))

    report.stats = ScanStats(
        total_nodes=total,
        processed_nodes=processed,
        error_count=len(report.errors),
        color_matches=len(report.results),
    )
    logger.debug(
        'Scan finished: %d colours, %d errors, %d/%d nodes',
        report.stats.color_matches,
        report.stats.error_count,
        processed,
        total,
    )
    return report
