"""Tests for visualine.core.document — JSON export parsing and selection."""

import json
from pathlib import Path

import pytest
from visualine.core.document import (
    Document,
    MalformedEntry,
    load_document,
    parse_document,
    parse_node,
    select_roots,
)
from visualine.core.errors import DocumentError
from visualine.core.types import RGB, Paint

PAGE = {
    'type': 'PAGE',
    'name': 'Page 1',
    'selection': ['2:1'],
    'children': [
        {
            'id': '1:1',
            'name': 'Header',
            'type': 'FRAME',
            'fills': [{'type': 'SOLID', 'color': {'r': 1, 'g': 1, 'b': 1}}],
            'children': [
                {
                    'id': '2:1',
                    'name': 'Logo',
                    'type': 'VECTOR',
                    'fills': [{'type': 'SOLID', 'visible': False, 'color': {'r': 1, 'g': 0.2, 'b': 0.4}}],
                    'strokes': [],
                },
            ],
        },
        {'id': '1:2', 'name': 'Body', 'type': 'FRAME', 'visible': False},
    ],
}


class TestParseNode:
    def test_fields(self):
        node = parse_node(PAGE['children'][0])
        assert node.id == '1:1'
        assert node.name == 'Header'
        assert node.type == 'FRAME'
        assert node.visible is True
        assert node.fills == (Paint(type='SOLID', visible=True, color=RGB(1, 1, 1)),)
        assert node.strokes is None
        assert [c.name for c in node.children] == ['Logo']

    def test_hidden_paint_and_node(self):
        logo = parse_node(PAGE['children'][0]).children[0]
        assert logo.fills[0].visible is False
        assert parse_node(PAGE['children'][1]).visible is False

    def test_mixed_fills_load_as_none(self):
        node = parse_node({'type': 'TEXT', 'fills': 'mixed', 'strokes': []})
        assert node.fills is None
        assert node.strokes == ()

    def test_missing_colour_kept_as_none(self):
        node = parse_node({'type': 'RECTANGLE', 'fills': [{'type': 'SOLID'}]})
        assert node.fills[0].color is None

    def test_channels_passed_through(self):
        node = parse_node({'type': 'RECTANGLE', 'fills': [{'type': 'SOLID', 'color': {'r': 'x'}}]})
        assert node.fills[0].color == RGB(r='x', g=None, b=None)

    def test_numeric_id_stringified(self):
        assert parse_node({'type': 'FRAME', 'id': 7}).id == '7'

    def test_non_object_node_raises(self):
        with pytest.raises(DocumentError):
            parse_node('FRAME')

    def test_malformed_paint_loads_as_placeholder(self):
        node = parse_node({'type': 'FRAME', 'fills': [None, {'type': 'SOLID'}]})
        assert isinstance(node.fills[0], MalformedEntry)
        assert node.fills[1].type == 'SOLID'
        with pytest.raises(DocumentError, match='Paint entry must be an object, got NoneType'):
            node.fills[0].type

    @pytest.mark.parametrize(
        'children, reason',
        [
            (['oops'], 'Layer node must be an object, got str'),
            ({'a': 1}, "children of 'Box' must be a list, got dict"),
        ],
    )
    def test_malformed_children_load_as_placeholders(self, children, reason):
        node = parse_node({'type': 'FRAME', 'name': 'Box', 'children': children})
        [child] = node.children
        assert isinstance(child, MalformedEntry)
        with pytest.raises(DocumentError, match=reason):
            child.visible


class TestParseDocument:
    def test_page(self):
        doc = parse_document(PAGE)
        assert [n.name for n in doc.children] == ['Header', 'Body']
        assert doc.selection == ['2:1']

    def test_list_of_nodes(self):
        doc = parse_document([{'type': 'FRAME', 'name': 'A'}, {'type': 'FRAME', 'name': 'B'}])
        assert [n.name for n in doc.children] == ['A', 'B']
        assert doc.selection == []

    def test_single_root_node(self):
        doc = parse_document({'type': 'FRAME', 'name': 'Solo', 'children': [{'type': 'RECTANGLE'}]})
        assert [n.name for n in doc.children] == ['Solo']

    def test_object_without_type_is_a_page(self):
        doc = parse_document({'children': [{'type': 'FRAME'}]})
        assert len(doc.children) == 1

    def test_non_object_top_level_entry_kept(self):
        doc = parse_document([None, {'type': 'FRAME', 'name': 'B'}])
        assert isinstance(doc.children[0], MalformedEntry)
        assert doc.children[1].name == 'B'

    def test_bad_selection(self):
        with pytest.raises(DocumentError):
            parse_document({'children': [], 'selection': '1:1'})

    def test_not_json_object(self):
        with pytest.raises(DocumentError):
            parse_document('page')


class TestLoadDocument:
    def test_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / 'page.json'
        path.write_text(json.dumps(PAGE))
        assert len(load_document(path).children) == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentError, match='Cannot read document'):
            load_document(tmp_path / 'missing.json')

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / 'page.json'
        path.write_text('[{')
        with pytest.raises(DocumentError, match='not valid JSON'):
            load_document(path)


class TestSelectRoots:
    def test_whole_page_by_default(self):
        doc = parse_document(PAGE)
        assert [n.name for n in select_roots(doc)] == ['Header', 'Body']

    def test_selection_resolved_anywhere_in_tree(self):
        doc = parse_document(PAGE)
        assert [n.name for n in select_roots(doc, selected_only=True)] == ['Logo']

    def test_selection_keeps_selection_order(self):
        doc = parse_document({**PAGE, 'selection': ['1:2', '1:1']})
        assert [n.name for n in select_roots(doc, selected_only=True)] == ['Body', 'Header']

    def test_empty_selection_falls_back_to_page(self):
        doc = Document(children=parse_document(PAGE).children, selection=[])
        assert len(select_roots(doc, selected_only=True)) == 2

    def test_stale_selection_falls_back_to_page(self):
        doc = parse_document({**PAGE, 'selection': ['9:9']})
        assert len(select_roots(doc, selected_only=True)) == 2

    def test_selection_skips_malformed_entries(self):
        doc = parse_document({'children': [None, {'id': '1:1', 'type': 'FRAME', 'children': [7]}], 'selection': ['1:1']})
        assert [n.id for n in select_roots(doc, selected_only=True)] == ['1:1']
