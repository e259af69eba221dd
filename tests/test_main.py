"""
Tests for startup parameters and the host loop.
"""
import contextlib
import pathlib
import sys

import termlayers.__main__ as entry
from termlayers.__main__ import DEFAULT_HEIGHT, DEFAULT_WIDTH, main, parse_args, run
from termlayers.editor import Editor, KeyEvent
from termlayers.persistence import layer_path


class FakeTerm:
    """Feeds scripted key events and records what gets drawn."""

    def __init__(self, events):
        self.events = list(events)
        self.frames = []
        self.help_shown = 0

    def read_key(self):
        if len(self.events) == 0:
            return KeyEvent('c', ctrl=True)
        return self.events.pop(0)

    def draw(self, frame, status, message, cursor):
        self.frames.append((frame.rows(), status, message, cursor))

    def show_help(self, helps):
        self.help_shown += 1


class TestParseArgs:
    """Tests for parse_args."""

    def test_defaults(self):
        """No arguments gives an 80x24 canvas in the current directory."""
        assert parse_args([]) == (DEFAULT_WIDTH, DEFAULT_HEIGHT, pathlib.Path('.'))
        assert (DEFAULT_WIDTH, DEFAULT_HEIGHT) == (80, 24)

    def test_dimensions(self):
        """Width, height and layer directory are positional."""
        assert parse_args(["40", "10", "art"]) == (40, 10, pathlib.Path("art"))

    def test_unparsable(self):
        """Bad or non-positive sizes fall back to the defaults."""
        assert parse_args(["wide", "0"])[:2] == (DEFAULT_WIDTH, DEFAULT_HEIGHT)
        assert parse_args(["-3", "x"])[:2] == (DEFAULT_WIDTH, DEFAULT_HEIGHT)


class TestRun:
    """Tests for the host loop."""

    def test_draws_after_every_event(self):
        """Each processed event is followed by a redraw."""
        editor = Editor(5, 2)
        term = FakeTerm([KeyEvent('w'), KeyEvent('x'), None, KeyEvent('c', ctrl=True)])
        run(editor, term)

        # initial frame plus one per real event
        assert len(term.frames) == 4
        assert term.frames[2][0] == ["x    ", "     "]
        assert term.frames[2][3] == (1, 0)
        assert not editor.running

    def test_help(self):
        """? shows help once and clears the request."""
        editor = Editor(5, 2)
        term = FakeTerm([KeyEvent('?')])
        run(editor, term)
        assert term.help_shown == 1
        assert not editor.need_help


class FakeTerminal:
    """Stands in for blessed.Terminal, tracking whether it was restored."""

    def __init__(self):
        self.active = 0
        self.restored = False

    @contextlib.contextmanager
    def mode(self):
        self.active += 1
        try:
            yield
        finally:
            self.active -= 1
            self.restored = self.active == 0

    def raw(self):
        return self.mode()

    def fullscreen(self):
        return self.mode()


class TestMain:
    """Tests for main."""

    def setup_session(self, monkeypatch, tmp_path, events):
        terminal = FakeTerminal()
        monkeypatch.setattr(sys, 'argv', ["termlayers", "4", "2", str(tmp_path)])
        monkeypatch.setattr(entry.blessed, 'Terminal', lambda: terminal)
        monkeypatch.setattr(entry, 'Term', lambda t: FakeTerm(events))
        return terminal

    def test_session(self, monkeypatch, tmp_path):
        """A normal session saves what was drawn and exits cleanly."""
        terminal = self.setup_session(monkeypatch, tmp_path,
                                      [KeyEvent('w'), KeyEvent('x'), KeyEvent('s', ctrl=True)])
        assert main() == 0
        assert terminal.restored
        assert layer_path(tmp_path, 0).read_text(encoding='utf-8') == "x   \n    \n"

    def test_load_failure(self, monkeypatch, tmp_path, capsys):
        """An I/O error while loading is reported and exits with 1."""
        self.setup_session(monkeypatch, tmp_path, [])

        def fail(editor):
            raise OSError("disk gone")
        monkeypatch.setattr(Editor, 'load', fail)

        assert main() == 1
        assert "Failed to load layers: disk gone" in capsys.readouterr().err

    def test_save_failure(self, monkeypatch, tmp_path, capsys):
        """An I/O error while saving ends the session after restoring the terminal."""
        terminal = self.setup_session(monkeypatch, tmp_path,
                                      [KeyEvent('w'), KeyEvent('x'), KeyEvent('s', ctrl=True)])
        # saving into a directory that doesn't exist
        monkeypatch.setattr(sys, 'argv', ["termlayers", "4", "2", str(tmp_path / "missing")])

        assert main() == 1
        assert terminal.restored
        assert "Failed to save layers" in capsys.readouterr().err
