#!/usr/bin/env python

import logging
import pathlib
import sys

import blessed

from termlayers.editor import HELPS, Editor
from termlayers.term import Term

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24

logger = logging.getLogger("termlayers")

def parse_dimension(value : str, default : int) -> int:
    try:
        dim = int(value)
    except ValueError:
        logger.warning("Invalid dimension %r, using %d.", value, default)
        return default

    if dim <= 0:
        logger.warning("Dimension must be positive, using %d.", default)
        return default
    return dim

def parse_args(args : list[str]) -> tuple[int, int, pathlib.Path]:
    width : int = DEFAULT_WIDTH
    height : int = DEFAULT_HEIGHT
    layer_dir : pathlib.Path = pathlib.Path('.')

    if len(args) > 0:
        width = parse_dimension(args[0], DEFAULT_WIDTH)
    if len(args) > 1:
        height = parse_dimension(args[1], DEFAULT_HEIGHT)
    if len(args) > 2:
        layer_dir = pathlib.Path(args[2])

    return width, height, layer_dir

def run(editor : Editor, term):
    # term needs read_key(), draw() and show_help()
    term.draw(editor.frame(), editor.status_text(), editor.message, (editor.x, editor.y))
    while editor.running:
        event = term.read_key()
        if event is None:
            continue

        editor.handle_key(event)
        if editor.need_help:
            editor.need_help = False
            term.show_help(HELPS)
        term.draw(editor.frame(), editor.status_text(), editor.message, (editor.x, editor.y))

def main() -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    width, height, layer_dir = parse_args(sys.argv[1:])
    editor = Editor(width, height, layer_dir)

    try:
        editor.load()
    except OSError as e:
        print(f"Failed to load layers: {e}", file=sys.stderr)
        return 1

    t = blessed.Terminal()
    try:
        with t.raw(), t.fullscreen():
            run(editor, Term(t))
    except OSError as e:
        # terminal is restored by now
        print(f"Failed to save layers: {e}", file=sys.stderr)
        return 1

    return 0

if __name__ == '__main__':
    sys.exit(main())
