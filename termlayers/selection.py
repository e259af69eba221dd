from array import array

from termlayers.layers import EMPTY, Layer

def get_xywh(x1 : int, y1 : int,
             x2 : int, y2 : int) -> tuple[int, int, int, int]:
    # get top left (1) and bottom right (2), both inclusive
    sx1 : int = min(x1, x2)
    sy1 : int = min(y1, y2)
    sx2 : int = max(x1, x2)
    sy2 : int = max(y1, y2)

    w : int = sx2 - sx1 + 1
    h : int = sy2 - sy1 + 1

    return sx1, sy1, w, h

def in_rect(x : int, y : int, rect : tuple[int, int, int, int]) -> bool:
    rx, ry, rw, rh = rect
    return x >= rx and x < rx + rw and \
           y >= ry and y < ry + rh

class DataRect:
    """A rectangular copy of glyphs, independent of the layer it came from."""

    def __init__(self,
                 x : int, y : int,
                 w : int, h : int,
                 layer : Layer):
        if not layer.in_bounds(x, y) or not layer.in_bounds(x + w - 1, y + h - 1):
            raise ValueError(f"Rect {w}x{h} at {x}, {y} is outside the layer.")
        self.w : int = w
        self.h : int = h
        self.data : array = array('w')
        for i in range(h):
            start = (y + i) * layer.width + x
            self.data.extend(layer.data[start:start + w])

    def get_dims(self) -> tuple[int, int]:
        return self.w, self.h

    def rows(self) -> list[str]:
        return [self.data[i * self.w:(i + 1) * self.w].tounicode() for i in range(self.h)]

    def apply(self, layer : Layer, x : int, y : int) -> int:
        # clip to the layer, never wrap or grow it
        w : int = min(self.w, layer.width - x)
        h : int = min(self.h, layer.height - y)
        count : int = 0
        for dy in range(max(0, -y), h):
            for dx in range(max(0, -x), w):
                layer.set(x + dx, y + dy, self.data[dy * self.w + dx])
                count += 1
        return count

def yank(layer : Layer,
         x1 : int, y1 : int,
         x2 : int, y2 : int) -> DataRect:
    x, y, w, h = get_xywh(x1, y1, x2, y2)
    return DataRect(x, y, w, h, layer)

def cut(layer : Layer,
        x1 : int, y1 : int,
        x2 : int, y2 : int) -> DataRect:
    x, y, w, h = get_xywh(x1, y1, x2, y2)
    clipboard = DataRect(x, y, w, h, layer)
    layer.fill_rect(x, y, w, h, EMPTY)
    return clipboard

def paste(layer : Layer, clipboard : DataRect | None, x : int, y : int) -> int:
    if clipboard is None:
        return 0
    return clipboard.apply(layer, x, y)
