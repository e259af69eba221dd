import logging
import pathlib

from termlayers.layers import Layer, LayerStack

logger = logging.getLogger(__name__)

LAYER_FILE_PATTERN = "output_layer_{}.txt"

def layer_path(directory : pathlib.Path, index : int) -> pathlib.Path:
    return directory / LAYER_FILE_PATTERN.format(index)

def parse_rows(text : str) -> list[str]:
    rows = text.split('\n')
    # a terminating newline doesn't start another row
    if rows[-1] == '':
        rows.pop()
    return [row[:-1] if row.endswith('\r') else row for row in rows]

def save_layer(layer : Layer, path : pathlib.Path):
    with path.open('w', encoding='utf-8', newline='\n') as out:
        for row in layer.rows():
            out.write(row)
            out.write('\n')

def save_layers(stack : LayerStack, directory : pathlib.Path) -> list[int]:
    """Write every layer holding at least one glyph, one file per layer.

    Empty layers are not written. OSError is left to the caller.
    """
    saved = []
    for i, layer in enumerate(stack):
        if layer.is_empty():
            continue
        save_layer(layer, layer_path(directory, i))
        saved.append(i)
    logger.info("saved layers %s to %s", saved, directory)
    return saved

def load_layer(layer : Layer, rows : list[str]) -> bool:
    if len(rows) > layer.height or \
       any(len(row) > layer.width for row in rows):
        return False

    # anything past the loaded rows and columns keeps its value
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            layer.set(x, y, ch)
    return True

def load_layers(stack : LayerStack, directory : pathlib.Path) -> list[int]:
    skipped = []
    for i, layer in enumerate(stack):
        path = layer_path(directory, i)
        if not path.is_file():
            continue

        try:
            rows = parse_rows(path.read_text(encoding='utf-8'))
        except UnicodeDecodeError as e:
            logger.warning("Layer %d file %s is not valid UTF-8 (%s). Skipping.", i, path, e)
            skipped.append(i)
            continue

        if not load_layer(layer, rows):
            logger.warning("Layer %d data dimensions exceed canvas size %dx%d. Skipping.",
                           i, stack.width, stack.height)
            skipped.append(i)
    return skipped
