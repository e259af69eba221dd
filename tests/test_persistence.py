"""
Tests for saving and loading layers.
"""
import logging

import pytest
from termlayers.layers import Layer, LayerStack
from termlayers.persistence import (
    LAYER_FILE_PATTERN, layer_path, load_layers, parse_rows, save_layers,
)


class TestSave:
    """Tests for save_layers."""

    def test_only_non_empty_layers(self, tmp_path):
        """Blank layers don't get a file."""
        stack = LayerStack(4, 2)
        stack[3].set(1, 1, 'x')

        assert save_layers(stack, tmp_path) == [3]
        assert [p.name for p in tmp_path.iterdir()] == [LAYER_FILE_PATTERN.format(3)]

    def test_file_format(self, tmp_path):
        """Every row is written in full, newline terminated."""
        stack = LayerStack(4, 2)
        stack[0].set(0, 0, '╔')
        stack[0].set(2, 1, 'x')
        save_layers(stack, tmp_path)

        text = layer_path(tmp_path, 0).read_text(encoding='utf-8')
        assert text == "╔   \n  x \n"

    def test_save_failure_raises(self, tmp_path):
        """I/O errors reach the caller."""
        stack = LayerStack(4, 2)
        stack[0].set(0, 0, 'x')
        with pytest.raises(OSError):
            save_layers(stack, tmp_path / "missing")


class TestLoad:
    """Tests for load_layers."""

    def test_round_trip(self, tmp_path):
        """Saving then loading into a fresh stack reproduces every layer."""
        stack = LayerStack(5, 3)
        stack[0].fill_rect(1, 0, 3, 2, '#')
        stack[7].set(4, 2, '~')
        save_layers(stack, tmp_path)

        fresh = LayerStack(5, 3)
        assert load_layers(fresh, tmp_path) == []
        for i in range(len(stack)):
            assert fresh[i].rows() == stack[i].rows()

    def test_missing_files(self, tmp_path):
        """No files means nothing changes."""
        stack = LayerStack(5, 3)
        assert load_layers(stack, tmp_path) == []
        assert all(layer.is_empty() for layer in stack)

    def test_too_many_rows(self, tmp_path, caplog):
        """A file taller than the canvas is skipped entirely."""
        layer_path(tmp_path, 2).write_text("ab\ncd\nef\ngh\n", encoding='utf-8')
        stack = LayerStack(5, 3)
        stack[2].set(4, 0, 'k')

        with caplog.at_level(logging.WARNING):
            assert load_layers(stack, tmp_path) == [2]
        assert stack[2].rows() == ["    k", "     ", "     "]
        assert "exceed" in caplog.text

    def test_too_wide(self, tmp_path):
        """A file wider than the canvas is skipped entirely."""
        layer_path(tmp_path, 0).write_text("abc\nabcdef\n", encoding='utf-8')
        stack = LayerStack(5, 3)
        assert load_layers(stack, tmp_path) == [0]
        assert stack[0].is_empty()

    def test_smaller_file(self, tmp_path):
        """Cells past the loaded rows and columns keep their value."""
        layer_path(tmp_path, 1).write_text("xy\nz\n", encoding='utf-8')
        stack = LayerStack(4, 3)
        stack[1].fill_rect(0, 0, 4, 3, '.')

        load_layers(stack, tmp_path)
        assert stack[1].rows() == ["xy..", "z...", "...."]

    def test_not_utf8(self, tmp_path, caplog):
        """A file that doesn't decode is skipped like an oversized one."""
        layer_path(tmp_path, 0).write_bytes(b"ab\xff\n")
        layer_path(tmp_path, 1).write_text("ok\n", encoding='utf-8')
        stack = LayerStack(4, 2)
        stack[0].set(3, 1, 'k')

        with caplog.at_level(logging.WARNING):
            assert load_layers(stack, tmp_path) == [0]
        assert stack[0].rows() == ["    ", "   k"]
        assert stack[1].row(0) == "ok  "
        assert "UTF-8" in caplog.text

    def test_other_layers_still_load(self, tmp_path):
        """One oversized file doesn't stop the rest."""
        layer_path(tmp_path, 0).write_text("toolongrow\n", encoding='utf-8')
        layer_path(tmp_path, 1).write_text("ok\n", encoding='utf-8')
        stack = LayerStack(4, 2)

        assert load_layers(stack, tmp_path) == [0]
        assert stack[1].row(0) == "ok  "


class TestParseRows:
    """Tests for parse_rows."""

    def test_trailing_newline(self):
        """A final newline doesn't add a row."""
        assert parse_rows("ab\ncd\n") == ["ab", "cd"]
        assert parse_rows("ab\ncd") == ["ab", "cd"]

    def test_crlf(self):
        """Windows line endings are accepted."""
        assert parse_rows("ab\r\ncd\r\n") == ["ab", "cd"]

    def test_empty(self):
        """An empty file has no rows."""
        assert parse_rows("") == []
