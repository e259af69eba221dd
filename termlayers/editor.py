from dataclasses import dataclass
from enum import Enum, auto
import logging
import pathlib

from termlayers.compositor import Frame, composite
from termlayers.drawing import draw_box, draw_line
from termlayers.layers import LayerStack
from termlayers.persistence import load_layers, save_layers
from termlayers.selection import DataRect, cut, get_xywh, paste, yank

logger = logging.getLogger(__name__)

class Mode(Enum):
    MOVE = auto()
    SELECT = auto()
    BOX_DRAW = auto()
    PENCIL_DRAW = auto()
    LINE_DRAW = auto()

MODE_NAMES = {
    Mode.MOVE: "Move",
    Mode.SELECT: "Select",
    Mode.BOX_DRAW: "BoxDraw",
    Mode.PENCIL_DRAW: "PencilDraw",
    Mode.LINE_DRAW: "LineDraw"
}

@dataclass(frozen=True)
class KeyEvent:
    # a single character, or a blessed key name like KEY_LEFT
    key : str
    ctrl : bool = False

    def is_printable(self) -> bool:
        return not self.ctrl and len(self.key) == 1 and self.key.isprintable()

class KeyActions(Enum):
    NONE = auto()
    QUIT = auto()
    SAVE = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MODE_MOVE = auto()
    MODE_SELECT = auto()
    MODE_BOX = auto()
    MODE_PENCIL = auto()
    MODE_LINE = auto()
    PASTE = auto()
    LAYER_UP = auto()
    LAYER_DOWN = auto()
    TOGGLE_LAYER = auto()
    HELP = auto()
    CONFIRM = auto()
    CANCEL = auto()

    # for selection
    YANK = auto()
    CUT = auto()

KEY_ACTIONS_ARROWS = {
    'KEY_LEFT': KeyActions.MOVE_LEFT,
    'KEY_RIGHT': KeyActions.MOVE_RIGHT,
    'KEY_UP': KeyActions.MOVE_UP,
    'KEY_DOWN': KeyActions.MOVE_DOWN
}

KEY_ACTIONS_GLOBAL = {
    's': KeyActions.SAVE,
    'c': KeyActions.QUIT
}

KEY_ACTIONS_GLOBAL_DESCRIPTIONS = {
    KeyActions.SAVE: "Save all non-empty layers",
    KeyActions.QUIT: "Quit"
}

KEY_ACTIONS = {
    **KEY_ACTIONS_ARROWS,
    'm': KeyActions.MODE_MOVE,
    'M': KeyActions.MODE_MOVE,
    'v': KeyActions.MODE_SELECT,
    'V': KeyActions.MODE_SELECT,
    'q': KeyActions.MODE_BOX,
    'Q': KeyActions.MODE_BOX,
    'w': KeyActions.MODE_PENCIL,
    'W': KeyActions.MODE_PENCIL,
    'e': KeyActions.MODE_LINE,
    'E': KeyActions.MODE_LINE,
    'p': KeyActions.PASTE,
    'P': KeyActions.PASTE,
    '+': KeyActions.LAYER_UP,
    '-': KeyActions.LAYER_DOWN,
    'h': KeyActions.TOGGLE_LAYER,
    'H': KeyActions.TOGGLE_LAYER,
    '?': KeyActions.HELP
}

KEY_ACTIONS_DESCRIPTIONS = {
    KeyActions.MOVE_LEFT: "Move Left (wraps around)",
    KeyActions.MOVE_RIGHT: "Move Right (wraps around)",
    KeyActions.MOVE_UP: "Move Up (wraps around)",
    KeyActions.MOVE_DOWN: "Move Down (wraps around)",
    KeyActions.MODE_MOVE: "Move mode",
    KeyActions.MODE_SELECT: "Select mode",
    KeyActions.MODE_BOX: "Box drawing mode",
    KeyActions.MODE_PENCIL: "Pencil mode",
    KeyActions.MODE_LINE: "Line drawing mode",
    KeyActions.PASTE: "Paste from clipboard at cursor",
    KeyActions.LAYER_UP: "Next layer",
    KeyActions.LAYER_DOWN: "Previous layer",
    KeyActions.TOGGLE_LAYER: "Show/hide current layer",
    KeyActions.HELP: "Print this help"
}

KEY_ACTIONS_SELECT = {
    **KEY_ACTIONS_ARROWS,
    'y': KeyActions.YANK,
    'Y': KeyActions.YANK,
    'c': KeyActions.CUT,
    'C': KeyActions.CUT,
    'KEY_ESCAPE': KeyActions.CANCEL
}

KEY_ACTIONS_SELECT_DESCRIPTIONS = {
    KeyActions.MOVE_LEFT: "Move other corner left",
    KeyActions.MOVE_RIGHT: "Move other corner right",
    KeyActions.MOVE_UP: "Move other corner up",
    KeyActions.MOVE_DOWN: "Move other corner down",
    KeyActions.YANK: "Copy selection to clipboard",
    KeyActions.CUT: "Copy selection to clipboard and clear it",
    KeyActions.CANCEL: "Leave selection mode"
}

KEY_ACTIONS_BOX = {
    **KEY_ACTIONS_ARROWS,
    'q': KeyActions.CONFIRM,
    'Q': KeyActions.CONFIRM,
    'KEY_ENTER': KeyActions.CONFIRM,
    'KEY_ESCAPE': KeyActions.CANCEL
}

KEY_ACTIONS_BOX_DESCRIPTIONS = {
    KeyActions.MOVE_LEFT: "Move other corner left",
    KeyActions.MOVE_RIGHT: "Move other corner right",
    KeyActions.MOVE_UP: "Move other corner up",
    KeyActions.MOVE_DOWN: "Move other corner down",
    KeyActions.CONFIRM: "Draw box",
    KeyActions.CANCEL: "Leave box drawing mode"
}

KEY_ACTIONS_PENCIL = {
    'KEY_ESCAPE': KeyActions.CANCEL
}

KEY_ACTIONS_PENCIL_DESCRIPTIONS = {
    KeyActions.CANCEL: "Leave pencil mode"
}

KEY_ACTIONS_LINE = {
    **KEY_ACTIONS_ARROWS,
    'KEY_ESCAPE': KeyActions.CANCEL
}

KEY_ACTIONS_LINE_DESCRIPTIONS = {
    KeyActions.MOVE_LEFT: "Move line end left",
    KeyActions.MOVE_RIGHT: "Move line end right",
    KeyActions.MOVE_UP: "Move line end up",
    KeyActions.MOVE_DOWN: "Move line end down",
    KeyActions.CANCEL: "Leave line drawing mode"
}

HELPS = {
    "Any Mode (with Ctrl)": (KEY_ACTIONS_GLOBAL, KEY_ACTIONS_GLOBAL_DESCRIPTIONS, None),
    "Move Mode": (KEY_ACTIONS, KEY_ACTIONS_DESCRIPTIONS, None),
    "Select Mode": (KEY_ACTIONS_SELECT, KEY_ACTIONS_SELECT_DESCRIPTIONS, None),
    "Box Drawing Mode": (KEY_ACTIONS_BOX, KEY_ACTIONS_BOX_DESCRIPTIONS, None),
    "Pencil Mode": (KEY_ACTIONS_PENCIL, KEY_ACTIONS_PENCIL_DESCRIPTIONS,
                    "Any other character is written at the cursor, which then advances."),
    "Line Drawing Mode": (KEY_ACTIONS_LINE, KEY_ACTIONS_LINE_DESCRIPTIONS,
                          "Any other character draws the line with that character.")
}

MOVES = {
    KeyActions.MOVE_LEFT: (-1, 0),
    KeyActions.MOVE_RIGHT: (1, 0),
    KeyActions.MOVE_UP: (0, -1),
    KeyActions.MOVE_DOWN: (0, 1)
}

def key_to_action(key_actions : dict[str, KeyActions], key : str) -> KeyActions:
    # convert to an action
    try:
        return key_actions[key]
    except KeyError:
        pass

    return KeyActions.NONE

class Editor:
    """All mutable editing state, driven one key event at a time."""

    def __init__(self, width : int, height : int,
                 layer_dir : pathlib.Path | None = None):
        self.width : int = width
        self.height : int = height
        self.stack : LayerStack = LayerStack(width, height)
        self.layer_dir : pathlib.Path = layer_dir if layer_dir is not None else pathlib.Path('.')
        self.x : int = 0
        self.y : int = 0
        self.mode : Mode = Mode.MOVE
        self.clipboard : DataRect | None = None
        self.select_x : int = 0
        self.select_y : int = 0
        self.line_x : int = 0
        self.line_y : int = 0
        self.message : str = ""
        self.running : bool = True
        self.need_help : bool = False

    def load(self) -> list[int]:
        skipped = load_layers(self.stack, self.layer_dir)
        if len(skipped) > 0:
            if len(skipped) == 1:
                self.message = f"Layer {skipped[0] + 1} could not be loaded, skipped."
            else:
                self.message = f"Layers {', '.join(str(i + 1) for i in skipped)} could not be loaded, skipped."
        return skipped

    def save(self) -> list[int]:
        saved = save_layers(self.stack, self.layer_dir)
        if len(saved) == 0:
            self.message = "Nothing to save."
        else:
            self.message = f"Saved {len(saved)} layer(s)."
        return saved

    def selection_rect(self) -> tuple[int, int, int, int] | None:
        if self.mode != Mode.SELECT:
            return None
        return get_xywh(self.select_x, self.select_y, self.x, self.y)

    def frame(self) -> Frame:
        return composite(self.stack, self.selection_rect())

    def status_text(self) -> str:
        status = f"Mode: {MODE_NAMES[self.mode]} | Layer: {self.stack.active + 1}/{len(self.stack)} | Cursor: ({self.x}, {self.y})"
        if not self.stack.active_layer.visible:
            status += " | Hidden"
        return status

    def enter_mode(self, mode : Mode):
        self.mode = mode
        if mode != Mode.MOVE:
            self.select_x = self.x
            self.select_y = self.y
        if mode == Mode.LINE_DRAW:
            self.line_x = self.x
            self.line_y = self.y
        logger.debug("entered %s at %d, %d", MODE_NAMES[mode], self.x, self.y)

    def move_cursor(self, dx : int, dy : int):
        if self.mode == Mode.MOVE:
            # toroidal
            self.x = (self.x + dx) % self.width
            self.y = (self.y + dy) % self.height
        else:
            self.x = max(0, min(self.width - 1, self.x + dx))
            self.y = max(0, min(self.height - 1, self.y + dy))

    def advance_cursor(self):
        # raster order, wrapping back to the top left
        self.x += 1
        if self.x >= self.width:
            self.x = 0
            self.y += 1
            if self.y >= self.height:
                self.y = 0

    def handle_key(self, event : KeyEvent):
        # control-modified keys only mean something globally
        if not event.ctrl:
            match self.mode:
                case Mode.MOVE:
                    self.handle_move(event)
                case Mode.SELECT:
                    self.handle_select(event)
                case Mode.BOX_DRAW:
                    self.handle_box(event)
                case Mode.PENCIL_DRAW:
                    self.handle_pencil(event)
                case Mode.LINE_DRAW:
                    self.handle_line(event)
        else:
            match key_to_action(KEY_ACTIONS_GLOBAL, event.key.lower()):
                case KeyActions.SAVE:
                    self.save()
                case KeyActions.QUIT:
                    self.running = False

    def handle_move(self, event : KeyEvent):
        action = key_to_action(KEY_ACTIONS, event.key)
        match action:
            case KeyActions.MOVE_LEFT | KeyActions.MOVE_RIGHT | \
                 KeyActions.MOVE_UP | KeyActions.MOVE_DOWN:
                self.move_cursor(*MOVES[action])
            case KeyActions.MODE_MOVE:
                self.enter_mode(Mode.MOVE)
            case KeyActions.MODE_SELECT:
                self.enter_mode(Mode.SELECT)
                self.message = "Entered selection mode."
            case KeyActions.MODE_BOX:
                self.enter_mode(Mode.BOX_DRAW)
                self.message = "Entered box drawing mode."
            case KeyActions.MODE_PENCIL:
                self.enter_mode(Mode.PENCIL_DRAW)
                self.message = "Entered pencil mode."
            case KeyActions.MODE_LINE:
                self.enter_mode(Mode.LINE_DRAW)
                self.message = "Entered line drawing mode."
            case KeyActions.PASTE:
                if self.clipboard is None:
                    self.message = "Clipboard is empty."
                else:
                    paste(self.stack.active_layer, self.clipboard, self.x, self.y)
                    self.message = "Pasted."
            case KeyActions.LAYER_UP:
                self.stack.layer_up()
            case KeyActions.LAYER_DOWN:
                self.stack.layer_down()
            case KeyActions.TOGGLE_LAYER:
                if self.stack.toggle_visible():
                    self.message = f"Layer {self.stack.active + 1} shown."
                else:
                    self.message = f"Layer {self.stack.active + 1} hidden."
            case KeyActions.HELP:
                self.need_help = True

    def handle_select(self, event : KeyEvent):
        action = key_to_action(KEY_ACTIONS_SELECT, event.key)
        match action:
            case KeyActions.MOVE_LEFT | KeyActions.MOVE_RIGHT | \
                 KeyActions.MOVE_UP | KeyActions.MOVE_DOWN:
                self.move_cursor(*MOVES[action])
            case KeyActions.YANK:
                self.clipboard = yank(self.stack.active_layer,
                                      self.select_x, self.select_y,
                                      self.x, self.y)
                self.enter_mode(Mode.MOVE)
                self.message = "Copied {}x{}.".format(*self.clipboard.get_dims())
            case KeyActions.CUT:
                self.clipboard = cut(self.stack.active_layer,
                                     self.select_x, self.select_y,
                                     self.x, self.y)
                self.enter_mode(Mode.MOVE)
                self.message = "Cut {}x{}.".format(*self.clipboard.get_dims())
            case KeyActions.CANCEL:
                self.enter_mode(Mode.MOVE)
                self.message = "Left selection mode."

    def handle_box(self, event : KeyEvent):
        action = key_to_action(KEY_ACTIONS_BOX, event.key)
        match action:
            case KeyActions.MOVE_LEFT | KeyActions.MOVE_RIGHT | \
                 KeyActions.MOVE_UP | KeyActions.MOVE_DOWN:
                self.move_cursor(*MOVES[action])
            case KeyActions.CONFIRM:
                if draw_box(self.stack.active_layer,
                            self.select_x, self.select_y,
                            self.x, self.y):
                    self.message = "Box drawn."
                else:
                    self.message = "Box too small."
                self.enter_mode(Mode.MOVE)
            case KeyActions.CANCEL:
                self.enter_mode(Mode.MOVE)
                self.message = "Left box drawing mode."

    def handle_pencil(self, event : KeyEvent):
        if key_to_action(KEY_ACTIONS_PENCIL, event.key) == KeyActions.CANCEL:
            self.enter_mode(Mode.MOVE)
            self.message = "Left pencil mode."
        elif event.is_printable():
            self.stack.active_layer.set(self.x, self.y, event.key)
            self.advance_cursor()

    def handle_line(self, event : KeyEvent):
        action = key_to_action(KEY_ACTIONS_LINE, event.key)
        match action:
            case KeyActions.MOVE_LEFT | KeyActions.MOVE_RIGHT | \
                 KeyActions.MOVE_UP | KeyActions.MOVE_DOWN:
                self.move_cursor(*MOVES[action])
            case KeyActions.CANCEL:
                self.enter_mode(Mode.MOVE)
                self.message = "Left line drawing mode."
            case KeyActions.NONE if event.is_printable():
                draw_line(self.stack.active_layer,
                          self.line_x, self.line_y,
                          self.x, self.y,
                          event.key)
                self.enter_mode(Mode.MOVE)
                self.message = "Line drawn."
