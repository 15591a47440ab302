"""Tests for visualine.core.palette — baseline tokens, loading and caching."""

import json
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from visualine.core import palette as palette_mod
from visualine.core.errors import PaletteError
from visualine.core.palette import (
    BASELINE_TOKENS,
    Palette,
    load_default_palette,
    load_palette,
    reset_default_palette,
)
from visualine.core.types import Availability, Token


@pytest.fixture(autouse=True)
def _fresh_default_palette():
    reset_default_palette()
    yield
    reset_default_palette()


class TestBaselinePalette:
    def test_has_all_tokens(self):
        assert len(Palette.baseline()) == len(BASELINE_TOKENS) == 18

    def test_order_is_table_order(self):
        names = list(Palette.baseline())
        assert names[0] == 'primary/50'
        assert names[3] == 'primary/500'
        assert names[-1] == 'lab/lch'

    def test_values_are_hex(self):
        for name, token in Palette.baseline().items():
            assert token.value.startswith('#'), f'{name} value {token.value} missing #'
            assert len(token.value) == 7, f'{name} value {token.value} not 7 chars'

    def test_brand_token(self):
        token = Palette.baseline()['primary/500']
        assert token.value == '#FF3366'
        assert token.availability is Availability.WIDELY
        assert token.note == 'Main brand'

    def test_limited_tokens(self):
        limited = [n for n, t in Palette.baseline().items() if t.availability is Availability.LIMITED]
        assert limited == ['accent/blue', 'glass/blur', 'lab/lch']


class TestPalette:
    def test_is_read_only(self):
        pal = Palette([Token('a', '#000000')])
        with pytest.raises(TypeError):
            pal['b'] = Token('b', '#FFFFFF')  # type: ignore[index]

    def test_duplicate_names_rejected(self):
        with pytest.raises(PaletteError):
            Palette([Token('a', '#000000'), Token('a', '#FFFFFF')])

    def test_empty_is_falsy(self):
        assert not Palette()


class TestFromMapping:
    def test_preserves_file_order(self):
        pal = Palette.from_mapping(
            {'tokens': {'z/last': {'value': '#000000'}, 'a/first': {'value': '#FFFFFF'}}}
        )
        assert list(pal) == ['z/last', 'a/first']

    def test_fields(self):
        pal = Palette.from_mapping(
            {'tokens': {'brand': {'value': '#FF3366', 'availability': 'new', 'note': 'Fresh'}}}
        )
        assert pal['brand'] == Token('brand', '#FF3366', Availability.NEW, 'Fresh')

    def test_unknown_availability_loads_as_unknown(self):
        pal = Palette.from_mapping({'tokens': {'x': {'value': '#000000', 'availability': 'everywhere'}}})
        assert pal['x'].availability is Availability.UNKNOWN

    def test_malformed_value_is_kept(self):
        pal = Palette.from_mapping({'tokens': {'x': {'value': 'not-a-colour'}}})
        assert pal['x'].value == 'not-a-colour'

    def test_missing_value_raises(self):
        with pytest.raises(PaletteError):
            Palette.from_mapping({'tokens': {'x': {'note': 'no value'}}})

    @pytest.mark.parametrize('data', [[], {'tokens': []}, {'colours': {}}, None])
    def test_wrong_shape_raises(self, data):
        with pytest.raises(PaletteError):
            Palette.from_mapping(data)


class TestLoadPalette:
    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / 'tokens.json'
        path.write_text(json.dumps({'tokens': {'ink': {'value': '#111111', 'availability': 'widely'}}}))
        pal = load_palette(path)
        assert list(pal) == ['ink']

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(PaletteError, match='Cannot read palette'):
            load_palette(tmp_path / 'nope.json')

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / 'tokens.json'
        path.write_text('{tokens: ')
        with pytest.raises(PaletteError, match='not valid JSON'):
            load_palette(path)


class TestDefaultPalette:
    def test_cached_between_calls(self):
        assert load_default_palette() is load_default_palette()

    def test_reset_rebuilds(self):
        first = load_default_palette()
        reset_default_palette()
        assert load_default_palette() is not first

    def test_concurrent_first_use_builds_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = []
        barrier = threading.Barrier(8)
        original = Palette.baseline.__func__

        def counting_baseline(cls):
            calls.append(1)
            return original(cls)

        monkeypatch.setattr(palette_mod.Palette, 'baseline', classmethod(counting_baseline))

        def first_use(_):
            barrier.wait()
            return load_default_palette()

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(first_use, range(8)))

        assert len(calls) == 1
        assert all(r is results[0] for r in results)
