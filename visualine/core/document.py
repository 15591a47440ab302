"""Load a JSON export of the host document into LayerNode trees.

Accepted shapes:

    [ {node}, ... ]                          top-level nodes
    {node}                                   a single root node
    {"children": [...], "selection": [...]}  a page, selection = node ids

Node keys: id, name, type, visible, fills, strokes, children.
Paint keys: type, visible, color {r, g, b}.

Colour channels are passed through untouched; the codec decides what is
usable. fills/strokes that are not lists (the host's "mixed" marker) load
as None.

A paint, child or top-level entry that is not an object does not reject the
document. It loads as a MalformedEntry, which raises DocumentError on any
attribute read, so the scanner records it against its own node and the
rest of the tree still scans.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from visualine.core.errors import DocumentError
from visualine.core.types import RGB, LayerNode, Paint


@dataclass
class Document:
    """Top-level nodes of a page plus the ids the host reported as selected."""

    children: list[LayerNode] = field(default_factory=list)
    selection: list[str] = field(default_factory=list)


class MalformedEntry:
    """Placeholder for an export entry of the wrong shape.

    Reading any attribute raises DocumentError with the reason, so the
    failure is reported by whichever scan step touches the entry first.
    """

    def __init__(self, reason: str):
        self._reason = reason

    def __getattr__(self, attr: str) -> Any:
        raise DocumentError(self._reason)

    def __repr__(self) -> str:
        return f'MalformedEntry({self._reason!r})'


def _parse_color(data: Any) -> RGB | None:
    if not isinstance(data, dict):
        return None
    return RGB(r=data.get('r'), g=data.get('g'), b=data.get('b'))


def _parse_paints(data: Any) -> tuple[Paint | MalformedEntry, ...] | None:
    if not isinstance(data, list):
        return None
    paints: list[Paint | MalformedEntry] = []
    for entry in data:
        if not isinstance(entry, dict):
            paints.append(MalformedEntry(f'Paint entry must be an object, got {type(entry).__name__}'))
            continue
        paints.append(
            Paint(
                type=str(entry.get('type', '')),
                visible=entry.get('visible', True) is not False,
                color=_parse_color(entry.get('color')),
            )
        )
    return tuple(paints)


def _parse_entry(data: Any) -> LayerNode | MalformedEntry:
    if not isinstance(data, dict):
        return MalformedEntry(f'Layer node must be an object, got {type(data).__name__}')
    return parse_node(data)


def parse_node(data: Any) -> LayerNode:
    """Build a LayerNode (and its subtree) from a parsed JSON object.

    data itself must be an object; malformed entries below it load as
    MalformedEntry placeholders.
    """
    if not isinstance(data, dict):
        raise DocumentError(f'Layer node must be an object, got {type(data).__name__}')
    children = data.get('children') or []
    if isinstance(children, list):
        parsed_children = tuple(_parse_entry(child) for child in children)
    else:
        reason = f'children of {data.get("name")!r} must be a list, got {type(children).__name__}'
        parsed_children = (MalformedEntry(reason),)
    return LayerNode(
        type=str(data.get('type', 'UNKNOWN')),
        name=data.get('name'),
        id=None if data.get('id') is None else str(data['id']),
        visible=data.get('visible', True) is not False,
        fills=_parse_paints(data.get('fills')),
        strokes=_parse_paints(data.get('strokes')),
        children=parsed_children,
    )


def parse_document(data: Any) -> Document:
    if isinstance(data, list):
        return Document(children=[_parse_entry(n) for n in data])
    if not isinstance(data, dict):
        raise DocumentError('Document must be a JSON object or array')
    selection = data.get('selection') or []
    if not isinstance(selection, list):
        raise DocumentError('selection must be a list of node ids')
    if 'type' in data and data.get('type') not in ('PAGE', 'DOCUMENT'):
        return Document(children=[parse_node(data)], selection=[str(s) for s in selection])
    page_children = data.get('children') or []
    if not isinstance(page_children, list):
        raise DocumentError('Page children must be a list')
    return Document(
        children=[_parse_entry(n) for n in page_children],
        selection=[str(s) for s in selection],
    )


def load_document(path: str | Path) -> Document:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except OSError as exc:
        raise DocumentError(f'Cannot read document {path}: {exc}') from exc
    except json.JSONDecodeError as exc:
        raise DocumentError(f'Document {path} is not valid JSON: {exc}') from exc
    return parse_document(data)


def _find(nodes: list[LayerNode] | tuple[LayerNode, ...], wanted: set[str], found: dict[str, LayerNode]) -> None:
    for node in nodes:
        if isinstance(node, MalformedEntry):
            continue
        if node.id in wanted and node.id not in found:
            found[node.id] = node
        _find(node.children, wanted, found)


def select_roots(document: Document, selected_only: bool = False) -> list[LayerNode]:
    """Nodes to scan: the selection if asked for and non-empty, else the page."""
    if selected_only and document.selection:
        found: dict[str, LayerNode] = {}
        _find(document.children, set(document.selection), found)
        selected = [found[node_id] for node_id in document.selection if node_id in found]
        if selected:
            return selected
    return list(document.children)
