from termlayers.layers import Layer

BOX_TOP_LEFT = '╔'
BOX_TOP_RIGHT = '╗'
BOX_BOTTOM_LEFT = '╚'
BOX_BOTTOM_RIGHT = '╝'
BOX_HORIZONTAL = '═'
BOX_VERTICAL = '║'

def draw_box(layer : Layer,
             x1 : int, y1 : int,
             x2 : int, y2 : int) -> bool:
    # a box needs two distinct columns and two distinct rows
    if x1 == x2 or y1 == y2:
        return False

    sx1 : int = min(x1, x2)
    sy1 : int = min(y1, y2)
    sx2 : int = max(x1, x2)
    sy2 : int = max(y1, y2)

    for tx in range(sx1 + 1, sx2):
        layer.set(tx, sy1, BOX_HORIZONTAL)
        layer.set(tx, sy2, BOX_HORIZONTAL)
    for ty in range(sy1 + 1, sy2):
        layer.set(sx1, ty, BOX_VERTICAL)
        layer.set(sx2, ty, BOX_VERTICAL)

    # corners last so they always win
    layer.set(sx1, sy1, BOX_TOP_LEFT)
    layer.set(sx2, sy1, BOX_TOP_RIGHT)
    layer.set(sx1, sy2, BOX_BOTTOM_LEFT)
    layer.set(sx2, sy2, BOX_BOTTOM_RIGHT)

    return True

def draw_line(layer : Layer,
              x1 : int, y1 : int,
              x2 : int, y2 : int,
              ch : str):
    """Bresenham line from (x1, y1) to (x2, y2) inclusive.

    Points falling outside the layer are skipped, the rest of the line is
    still drawn.
    """
    dx : int = abs(x2 - x1)
    dy : int = abs(y2 - y1)
    sx : int = 1 if x1 < x2 else -1
    sy : int = 1 if y1 < y2 else -1
    err : int = dx - dy

    x : int = x1
    y : int = y1
    while x != x2 or y != y2:
        if layer.in_bounds(x, y):
            layer.set(x, y, ch)

        e2 : int = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy

    if layer.in_bounds(x, y):
        layer.set(x, y, ch)
