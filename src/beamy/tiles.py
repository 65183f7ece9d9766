"""
Image partitioning into independent rectangular work units.
"""
from dataclasses import dataclass
import numpy as np
from beamy import constants


@dataclass(frozen=True)
class RenderTile:
    x: int
    y: int
    width: int
    height: int

    def pixels(self, image_width, image_height):
        """
        Coordinates of the tile's pixels that fall inside the image.

        Tiles on the right and bottom edges may extend past the image; those
        pixels are skipped.

        Returns:
            tuple: (xs, ys) flat int arrays in row-major order
        """
        x_end = min(self.x + self.width, image_width)
        y_end = min(self.y + self.height, image_height)
        x_start = max(self.x, 0)
        y_start = max(self.y, 0)
        if x_start >= x_end or y_start >= y_end:
            empty = np.empty(0, dtype=np.intp)
            return empty, empty

        ys, xs = np.mgrid[y_start:y_end, x_start:x_end]
        return xs.ravel(), ys.ravel()


def generate_tiles(width, height, tile_size=None):
    """
    Row-major tiles of `tile_size` covering a width x height image.

    Args:
        width, height: Image size in pixels
        tile_size: Tile edge in pixels (default 32)

    Returns:
        List of RenderTile, all of full size
    """
    tile_size = tile_size if tile_size is not None else constants.DEFAULT_TILE_SIZE
    if tile_size <= 0:
        raise ValueError(f"tile_size must be positive, got {tile_size}")

    return [
        RenderTile(x=x, y=y, width=tile_size, height=tile_size)
        for y in range(0, height, tile_size)
        for x in range(0, width, tile_size)
    ]
