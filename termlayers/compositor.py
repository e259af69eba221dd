from array import array

from termlayers.layers import EMPTY, LayerStack
from termlayers.selection import in_rect

class Frame:
    """Composited glyphs plus a per-cell inverted-display flag."""

    def __init__(self, width : int, height : int):
        self.width : int = width
        self.height : int = height
        self.data : array = array('w', EMPTY * (width * height))
        self.inverted : array = array('b', bytes(width * height))

    def get(self, x : int, y : int) -> str:
        return self.data[y * self.width + x]

    def is_inverted(self, x : int, y : int) -> bool:
        return bool(self.inverted[y * self.width + x])

    def row(self, y : int) -> str:
        return self.data[y * self.width:(y + 1) * self.width].tounicode()

    def rows(self) -> list[str]:
        return [self.row(y) for y in range(self.height)]

def composite(stack : LayerStack,
              selection : tuple[int, int, int, int] | None = None) -> Frame:
    frame = Frame(stack.width, stack.height)

    # painter's algorithm, empty cells are transparent
    for layer in stack:
        if not layer.visible:
            continue
        for i, ch in enumerate(layer.data):
            if ch != EMPTY:
                frame.data[i] = ch

    if selection is not None:
        for y in range(frame.height):
            for x in range(frame.width):
                if in_rect(x, y, selection):
                    frame.inverted[y * frame.width + x] = 1

    return frame
