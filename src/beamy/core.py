import logging
import time
from concurrent.futures import ThreadPoolExecutor
import numpy as np
from beamy import constants
from beamy.rays import generate_directions
from beamy.shading import quantize, shade
from beamy.tiles import generate_tiles

logger = logging.getLogger(__name__)


class Renderer:
    def __init__(self, scene, tile_size=None, workers=None, shadows=False):
        """
        Tile-based renderer for a fully built scene.

        The scene is treated as read-only while rendering. Each tile writes a
        disjoint set of buffer offsets, so tiles can be processed by a pool of
        worker threads without locking.

        Args:
            scene: Scene to render
            tile_size: Tile edge in pixels (default 32)
            workers: Number of worker threads; 1 renders tiles in order on the caller's thread
            shadows: Cast shadow rays toward each light
        """
        self.scene = scene
        self.tile_size = tile_size if tile_size is not None else constants.DEFAULT_TILE_SIZE
        self.workers = workers if workers is not None else constants.DEFAULT_WORKERS
        self.shadows = shadows

        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

    def new_buffer(self) -> np.ndarray:
        """Zeroed row-major interleaved RGB buffer."""
        scene = self.scene
        return np.zeros(scene.width * scene.height * constants.CHANNELS, dtype=np.uint8)

    def get_color(self, xs, ys) -> np.ndarray:
        """
        Linear RGB colour for each pixel.

        Args:
            xs, ys: (N,) in-bounds pixel coordinates

        Returns:
            (N, 3) array of colours, black where the ray hits nothing
        """
        scene = self.scene
        directions = generate_directions(xs, ys, scene)
        hits = scene.hits(scene.camera.position, directions)
        return shade(scene, hits, shadows=self.shadows)

    def render_tile(self, tile, buffer):
        """Render one tile into `buffer` at offsets (x + y * width) * 3."""
        scene = self.scene
        xs, ys = tile.pixels(scene.width, scene.height)
        if xs.size == 0:
            return

        pixels = quantize(self.get_color(xs, ys))
        offsets = (xs + ys * scene.width) * constants.CHANNELS
        for channel in range(constants.CHANNELS):
            buffer[offsets + channel] = pixels[:, channel]

    def render(self) -> np.ndarray:
        """
        Render the whole image.

        Returns:
            uint8 array of length width * height * 3
        """
        scene = self.scene
        tiles = generate_tiles(scene.width, scene.height, self.tile_size)
        buffer = self.new_buffer()

        logger.info("Rendering %d tiles (%dx%d, tile %d, %d worker%s)...",
                    len(tiles), scene.width, scene.height, self.tile_size,
                    self.workers, "" if self.workers == 1 else "s")
        t0 = time.perf_counter()

        if self.workers == 1:
            for tile in tiles:
                self.render_tile(tile, buffer)
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                # list() propagates the first worker exception
                list(pool.map(lambda tile: self.render_tile(tile, buffer), tiles))

        logger.info("Rendering time: %.3fs", time.perf_counter() - t0)
        return buffer


def render(scene, tile_size=None, workers=None, shadows=False) -> np.ndarray:
    """Render `scene` to a flat RGB byte buffer of length width * height * 3."""
    return Renderer(scene, tile_size=tile_size, workers=workers, shadows=shadows).render()
