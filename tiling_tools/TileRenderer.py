# tiling_tools/TileRenderer.py
import logging

from PIL import Image, ImageDraw

from tiling_tools.Recovery import PENROSE

# Color palettes
COLORS = {
    'penrose': {
        'thick': (99, 102, 241),         # Indigo
        'thick_stroke': (67, 56, 202),
        'thin': (244, 114, 182),         # Pink
        'thin_stroke': (219, 39, 119),
    },
    'periodic': {
        'thick': (148, 163, 184),        # Slate gray, same for both kinds
        'thick_stroke': (100, 116, 139),
        'thin': (148, 163, 184),
        'thin_stroke': (100, 116, 139),
    },
}
ERASED_COLOR = (24, 24, 27)
BACKGROUND = (250, 250, 249)
CONSTRAINT_STROKE = (251, 191, 36)       # Amber
RECOVERING_STROKE = (255, 255, 255)


class TileRenderer:
    """Draws a tile list with its erasure state into a Pillow image."""

    def __init__(self, width, height, scale=1):
        self.logger = logging.getLogger('TileRenderer')
        self.width = width
        self.height = height
        self.scale = scale

    def _polygon(self, tile):
        return [(v.real * self.scale, v.imag * self.scale) for v in tile.vertices]

    def render(self, tiles, mode=PENROSE, erased=(), constraints=(), recovering_index=None):
        palette = COLORS[mode]
        erased = set(erased)
        constraints = set(constraints)

        image = Image.new('RGB', (int(self.width * self.scale), int(self.height * self.scale)), BACKGROUND)
        draw = ImageDraw.Draw(image)

        for index, tile in enumerate(tiles):
            fill = palette[tile.kind]
            outline = palette[f"{tile.kind}_stroke"]
            line_width = 1
            if index in erased:
                fill = ERASED_COLOR
                outline = ERASED_COLOR
            if index == recovering_index:
                # Half-tone fill over the background stands in for 50% opacity
                fill = tuple((c + b) // 2 for c, b in zip(palette[tile.kind], BACKGROUND))
                outline = RECOVERING_STROKE
                line_width = 2
            draw.polygon(self._polygon(tile), fill=fill, outline=outline, width=line_width)

        # Constraint outlines go on top so neighbors cannot hide them
        for index in sorted(constraints):
            draw.polygon(self._polygon(tiles[index]), outline=CONSTRAINT_STROKE, width=3)

        return image

    def render_session(self, manager, constraints=()):
        return self.render(manager.tiles, manager.mode, manager.erased,
                           constraints, manager.recovering_index)

    def save(self, image, path):
        image.save(path)
        self.logger.debug(f"Saved frame to {path}")
