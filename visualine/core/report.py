"""Report builder — text and JSON output for visualine results.

JSON keys are camelCase: the same shapes the host UI consumes.
"""

import json
from typing import Any

from visualine.core.types import Availability, ScanError, ScanReport, ScanResult, TokenMatch

BADGES = {
    Availability.WIDELY: '✓',
    Availability.LIMITED: '⚠',
    Availability.NEW: '★',
    Availability.UNKNOWN: '?',
}


def token_to_dict(match: TokenMatch) -> dict[str, Any]:
    return {
        'name': match.name,
        'value': match.value,
        'availability': match.availability.value,
        'note': match.note,
        'distance': match.distance,
    }


def result_to_dict(result: ScanResult) -> dict[str, Any]:
    return {
        'layerName': result.layer_name,
        'layerType': result.layer_type,
        'styleType': result.style.value,
        'color': result.color,
        'tokenMatch': token_to_dict(result.token),
    }


def error_to_dict(error: ScanError) -> dict[str, Any]:
    return {
        'nodeName': error.node_name,
        'nodeType': error.node_type,
        'error': error.description,
    }


def report_to_dict(report: ScanReport) -> dict[str, Any]:
    stats = report.stats
    return {
        'results': [result_to_dict(r) for r in report.results],
        'stats': {
            'totalNodes': stats.total_nodes,
            'processedNodes': stats.processed_nodes,
            'errorCount': stats.error_count,
            'colorMatches': stats.color_matches,
        },
        'errors': [error_to_dict(e) for e in report.errors],
    }


def format_json(report: ScanReport) -> str:
    """Format report as JSON."""
    return json.dumps(report_to_dict(report), indent=2)


def format_match(hex_color: str, match: TokenMatch) -> str:
    """One line for a single colour -> token match."""
    badge = BADGES.get(match.availability, '?')
    dist = '' if match.distance is None else f'  Δ={match.distance:.2f}'
    return f'{hex_color}  → {match.name} {match.value}  {badge} {match.availability.value}{dist}  {match.note}'


def format_text(report: ScanReport, source: str | None = None) -> str:
    """Format report as human-readable text."""
    stats = report.stats
    lines = []
    header = 'visualine'
    if source:
        header += f': {source}'
    lines.append(f'{header} — {stats.total_nodes} layers  {stats.color_matches} colours  {stats.error_count} errors')
    lines.append('')

    if report.errors:
        lines.append(f'{len(report.errors)} error(s) occurred during scan:')
        for error in report.errors:
            lines.append(f'  {error.node_name} ({error.node_type}): {error.description}')
        lines.append('')

    if not report.results:
        lines.append('No solid colours found.')
        return '\n'.join(lines)

    for result in report.results:
        match = result.token
        badge = BADGES.get(match.availability, '?')
        lines.append(f'── {result.layer_name} [{result.layer_type}]')
        lines.append(f'  {result.style.value}: {result.color}  {badge} {match.availability.value}')
        lines.append(f'  token: {match.name} {match.value}')
        if match.distance is not None:
            lines.append(f'  match distance: {match.distance:.2f}')
        if match.note:
            lines.append(f'  {match.note}')
        lines.append('')

    return '\n'.join(lines).rstrip('\n')
