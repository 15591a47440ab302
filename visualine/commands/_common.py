"""Helpers shared by command modules: palette and document resolution."""

import argparse
import sys

from visualine.core.document import load_document, select_roots
from visualine.core.palette import Palette, load_default_palette, load_palette
from visualine.core.types import LayerNode, ScanProgress


def resolve_palette(args: argparse.Namespace) -> Palette:
    """Palette from --palette / VISUALINE_PALETTE, else the baseline table."""
    path = getattr(args, 'palette', None)
    if path:
        return load_palette(path)
    return load_default_palette()


def load_roots(args: argparse.Namespace) -> list[LayerNode]:
    document = load_document(args.document)
    return select_roots(document, selected_only=getattr(args, 'selected_only', False))


def add_document_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('document', help='JSON export of the layer document')
    parser.add_argument(
        '-s',
        '--selected-only',
        action='store_true',
        help="Scan only the document's selection (falls back to the whole page if empty)",
    )


def print_progress(progress: ScanProgress) -> None:
    print(f'Scanning... ({progress.processed}/{progress.total} layers)', file=sys.stderr)
