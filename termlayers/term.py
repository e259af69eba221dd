import sys

import blessed
from blessed.keyboard import Keystroke

from termlayers.compositor import Frame
from termlayers.editor import KeyActions, KeyEvent

class Term():
    def __init__(self, t : blessed.Terminal):
        self.t : blessed.Terminal = t
        self.normal : bool = False

    def out(self, text : str):
        print(text, end='')

    def send_normal(self):
        if not self.normal:
            self.out(self.t.normal)
            self.normal = True

    def send_reverse(self):
        self.out(self.t.reverse)
        self.normal = False

    def send_pos(self, x : int, y : int):
        self.out(self.t.move_xy(x, y))

    def clear(self):
        self.send_normal()
        self.out(self.t.clear)

    def read_key(self) -> KeyEvent | None:
        return keystroke_to_event(self.t.inkey())

    def print_status(self, text : str, row : int, reverse : bool = False):
        self.send_pos(0, row)
        self.send_normal()
        if reverse:
            self.send_reverse()
        self.out(self.t.ljust(text))
        self.send_normal()

    def draw(self, frame : Frame, status : str, message : str, cursor : tuple[int, int]):
        self.send_normal()
        for y in range(frame.height):
            self.send_pos(0, y)
            for x in range(frame.width):
                # only change attributes at the edges of the selection
                if frame.is_inverted(x, y):
                    if self.normal:
                        self.send_reverse()
                else:
                    self.send_normal()
                self.out(frame.get(x, y))
            self.send_normal()

        self.print_status(status, frame.height, True)
        self.print_status(message, frame.height + 1)
        self.send_pos(cursor[0], cursor[1])
        sys.stdout.flush()

    def show_help(self, helps : dict):
        self.clear()
        for row, line in enumerate(help_lines(helps)):
            self.send_pos(0, row)
            self.out(line)
        self.print_status("Press any key to return . . .", self.t.height - 1, True)
        sys.stdout.flush()
        self.t.inkey()
        self.clear()

def keystroke_to_event(key : Keystroke) -> KeyEvent | None:
    if key.is_sequence:
        if key.name is None:
            return None
        if key.name.startswith('KEY_CTRL_') and len(key.name) == 10:
            return KeyEvent(key.name[-1].lower(), ctrl=True)
        return KeyEvent(key.name)

    ch = str(key)
    if len(ch) != 1:
        return None
    if ord(ch) < 32:
        # ^A through ^Z arrive as 0x01 - 0x1a
        return KeyEvent(chr(ord(ch) + 96), ctrl=True)
    return KeyEvent(ch)

def keycode_to_name(key : str, ctrl : bool = False) -> str:
    if key == ' ':
        name = "SPACE"
    elif key.startswith('KEY_'):
        name = key[4:]
    elif key.isupper():
        name = f"Shift+{key}"
    else:
        name = key.upper()

    if ctrl:
        return f"Ctrl+{name}"
    return name

def help_lines(helps : dict) -> list[str]:
    lines = []
    for title, (key_actions, descriptions, note) in helps.items():
        lines.append(title)
        lines.append(f"{'':-<{len(title)}}")

        ctrl = title.startswith("Any Mode")
        # group every key bound to the same action on one line
        done : set[KeyActions] = set()
        for action in key_actions.values():
            if action in done:
                continue
            done.add(action)
            keys = [keycode_to_name(key, ctrl) for key in key_actions.keys()
                    if key_actions[key] == action]
            lines.append(f"{', '.join(keys)}: {descriptions[action]}")
        if note is not None:
            lines.append(note)
        lines.append("")

    return lines
