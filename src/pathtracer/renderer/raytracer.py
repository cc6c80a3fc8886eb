# renderer/raytracer.py
import logging
import math
import time
from concurrent.futures import ProcessPoolExecutor
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.config import RenderSettings
from pathtracer.geometry.scene import Scene
from pathtracer.renderer.integrator import PathIntegrator, PathStats

logger = logging.getLogger(__name__)

def _render_rows(scene: Scene, camera: Camera, settings: RenderSettings,
                 rows: Sequence[int], seeds: Sequence[np.random.SeedSequence]
                 ) -> Tuple[Sequence[int], np.ndarray, PathStats]:
    """
    Renders the given image rows. Row ``rows[k]`` draws all its randomness
    from ``seeds[k]``, so the result does not depend on how rows are grouped.
    Module level so worker processes can unpickle it.
    """
    integrator = PathIntegrator.from_settings(settings)
    stats = PathStats()
    spp = settings.samples_per_pixel
    sqrt_spp = math.isqrt(spp) if settings.stratified else 1
    grid_samples = sqrt_spp * sqrt_spp if settings.stratified else 0
    scale = 1.0 / spp

    block = np.zeros((len(rows), camera.image_width, 3), dtype=np.float64)
    for k, (j, seed) in enumerate(zip(rows, seeds)):
        rng = np.random.default_rng(seed)
        for i in range(camera.image_width):
            r = g = b = 0.0
            for s in range(spp):
                # samples past the last full grid cell fall back to plain jitter
                cell = s if s < grid_samples else None
                ray = camera.get_ray(i, j, rng, cell, sqrt_spp)
                colour = integrator.trace(scene, ray, rng, stats)
                r += colour.x
                g += colour.y
                b += colour.z
            block[k, i, 0] = r * scale
            block[k, i, 1] = g * scale
            block[k, i, 2] = b * scale
    return rows, block, stats

class Renderer:
    """
    Renders a scene through a camera into a linear-RGB float image.

    Rows are independent: each one gets its own random generator spawned
    from the root seed, and with ``workers > 1`` bands of rows are rendered
    in separate processes.
    """
    def __init__(self, scene: Scene, camera: Camera, settings: Optional[RenderSettings] = None):
        self.scene = scene
        self.camera = camera
        self.settings = (settings if settings is not None else RenderSettings()).validate()
        self.camera.initialize()
        self.stats = PathStats()
        self.render_time = 0.0

    @property
    def width(self) -> int:
        return self.camera.image_width

    @property
    def height(self) -> int:
        return self.camera.image_height

    def _row_bands(self, count: int) -> List[List[int]]:
        # interleaved so every band gets a similar mix of cheap and expensive rows
        return [list(range(start, self.height, count)) for start in range(count)]

    def render(self) -> np.ndarray:
        """
        Returns an array of shape (height, width, 3), row 0 at the top,
        holding the mean radiance of each pixel.
        """
        settings = self.settings
        root = np.random.SeedSequence(settings.seed)
        row_seeds = root.spawn(self.height)
        workers = min(settings.workers, self.height)

        logger.info("Rendering %dx%d, %d spp, max depth %d, %d worker(s)",
                    self.width, self.height, settings.samples_per_pixel,
                    settings.max_depth, workers)
        if settings.seed is None:
            logger.info("Random seed entropy: %d", root.entropy)
        if not self.scene.lights:
            logger.debug("Scene has no lights; only ambient light reaches the camera")

        image = np.zeros((self.height, self.width, 3), dtype=np.float64)
        self.stats = PathStats()
        start = time.perf_counter()

        if workers <= 1:
            rows = list(range(self.height))
            results = [_render_rows(self.scene, self.camera, settings, rows, row_seeds)]
        else:
            bands = self._row_bands(workers)
            with ProcessPoolExecutor(max_workers=workers) as executor:
                futures = [executor.submit(_render_rows, self.scene, self.camera, settings,
                                           band, [row_seeds[j] for j in band])
                           for band in bands]
                results = [future.result() for future in futures]

        for rows, block, stats in results:
            image[list(rows)] = block
            self.stats.merge(stats)

        self.render_time = time.perf_counter() - start
        logger.info("Render finished in %.2fs", self.render_time)
        summary = self.stats.as_dict()
        if summary:
            logger.info("Average path depth: %.2f", summary['average_path_depth'])
            logger.info("Russian roulette terminations: %d (%.1f%%)",
                        summary['rr_terminations'], summary['rr_percentage'])
            logger.info("Max depth terminations: %d (%.1f%%)",
                        summary['max_depth_terminations'], summary['max_depth_percentage'])
        return image
