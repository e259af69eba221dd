from array import array
import logging

logger = logging.getLogger(__name__)

EMPTY = ' '
NUM_LAYERS = 10

class Layer:
    def __init__(self, width : int, height : int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Layer dimensions must be positive, got {width}x{height}.")
        self.width : int = width
        self.height : int = height
        self.visible : bool = True
        # row major, indexed y * width + x
        self.data : array = array('w', EMPTY * (width * height))

    def in_bounds(self, x : int, y : int) -> bool:
        return x >= 0 and x < self.width and \
               y >= 0 and y < self.height

    def get(self, x : int, y : int) -> str:
        return self.data[y * self.width + x]

    def set(self, x : int, y : int, ch : str):
        self.data[y * self.width + x] = ch

    def fill_rect(self, x : int, y : int, w : int, h : int, ch : str = EMPTY):
        for ty in range(max(0, y), min(self.height, y + h)):
            for tx in range(max(0, x), min(self.width, x + w)):
                self.data[ty * self.width + tx] = ch

    def is_empty(self) -> bool:
        return all(ch == EMPTY for ch in self.data)

    def row(self, y : int) -> str:
        return self.data[y * self.width:(y + 1) * self.width].tounicode()

    def rows(self) -> list[str]:
        return [self.row(y) for y in range(self.height)]

class LayerStack:
    """Fixed set of equally sized layers, drawn bottom (0) to top."""

    def __init__(self, width : int, height : int, count : int = NUM_LAYERS):
        self.width : int = width
        self.height : int = height
        self.layers : list[Layer] = [Layer(width, height) for _ in range(count)]
        self.active : int = 0

    def __len__(self):
        return len(self.layers)

    def __iter__(self):
        return iter(self.layers)

    def __getitem__(self, index : int) -> Layer:
        return self.layers[index]

    @property
    def active_layer(self) -> Layer:
        return self.layers[self.active]

    def layer_up(self) -> bool:
        if self.active < len(self.layers) - 1:
            self.active += 1
            return True
        return False

    def layer_down(self) -> bool:
        if self.active > 0:
            self.active -= 1
            return True
        return False

    def toggle_visible(self, index : int | None = None) -> bool:
        if index is None:
            index = self.active
        layer = self.layers[index]
        layer.visible = not layer.visible
        logger.debug("layer %d visible=%s", index, layer.visible)
        return layer.visible
