# renderer/raytracer.py
import logging
import os
import time
from concurrent import futures
from typing import Optional

import numpy as np

from core.utils import seed_stream
from renderer.integrator import ray_color
from renderer.tone_mapping import resolve_accumulation

logger = logging.getLogger(__name__)

# Rows between progress messages.
PROGRESS_INTERVAL = 10

# Scene installed in each pool worker by _init_worker. Read-only.
_worker_scene = None


def row_seed(entropy: int, row: int) -> int:
    """Seed of the random stream for one image row."""
    seq = np.random.SeedSequence(entropy=entropy, spawn_key=(row,))
    return int.from_bytes(seq.generate_state(4).tobytes(), "little")


def render_row(camera, world, lights, j: int, entropy: int) -> np.ndarray:
    """
    Trace every sample of image row j.

    Installs the row's own random stream first, so the result depends only
    on (entropy, j) and not on which worker runs it or when.

    Returns:
        np.ndarray: (image_width, 4) float32 of (r, g, b, sample_count) sums.
    """
    seed_stream(row_seed(entropy, j))
    sqrt_spp = camera.sqrt_spp
    samples = sqrt_spp * sqrt_spp
    row = np.zeros((camera.image_width, 4), dtype=np.float32)

    for i in range(camera.image_width):
        r = g = b = 0.0
        for s_j in range(sqrt_spp):
            for s_i in range(sqrt_spp):
                ray = camera.get_ray(i, j, s_i, s_j)
                color = ray_color(ray, camera.max_depth, world, lights, camera.background)
                r += color.x
                g += color.y
                b += color.z
        row[i] = (r, g, b, samples)
    return row


def _init_worker(camera, world, lights):
    global _worker_scene
    _worker_scene = (camera, world, lights)


def _render_row_task(j: int, entropy: int):
    camera, world, lights = _worker_scene
    return j, render_row(camera, world, lights, j, entropy)


class Renderer:
    """
    CPU path tracer driving the integrator over image rows.

    Rows are independent tasks. With one worker they run in this process;
    otherwise a process pool receives the scene once per worker and rows
    come back in any order. Output is identical either way for a fixed seed.
    """
    def __init__(self, workers: Optional[int] = None, seed: Optional[int] = None):
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")
        self.workers = workers if workers is not None else (os.cpu_count() or 1)
        self.seed = seed

    def root_entropy(self) -> int:
        """Entropy of this render; fresh from the OS when no seed was given."""
        return np.random.SeedSequence(self.seed).entropy

    def render_accumulation(self, world, lights, camera) -> np.ndarray:
        """
        Render to an (height, width, 4) float32 buffer of (r, g, b, count).
        """
        camera.update_camera()
        width, height = camera.image_width, camera.image_height
        entropy = self.root_entropy()
        accum = np.zeros((height, width, 4), dtype=np.float32)

        workers = min(self.workers, height)
        logger.info("Rendering %dx%d, %d spp, depth %d, %d worker(s)",
                    width, height, camera.sqrt_spp * camera.sqrt_spp,
                    camera.max_depth, workers)
        start = time.perf_counter()

        if workers == 1:
            for j in range(height):
                accum[j] = render_row(camera, world, lights, j, entropy)
                self._log_progress(height - j - 1)
        else:
            with futures.ProcessPoolExecutor(max_workers=workers,
                                             initializer=_init_worker,
                                             initargs=(camera, world, lights)) as executor:
                pending = [executor.submit(_render_row_task, j, entropy) for j in range(height)]
                remaining = height
                for future in futures.as_completed(pending):
                    j, row = future.result()
                    accum[j] = row
                    remaining -= 1
                    self._log_progress(remaining)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return accum

    def render(self, world, lights, camera) -> np.ndarray:
        """Render to an (height, width, 3) uint8 image."""
        return resolve_accumulation(self.render_accumulation(world, lights, camera))

    @staticmethod
    def _log_progress(remaining: int):
        if remaining % PROGRESS_INTERVAL == 0:
            logger.debug("Scanlines remaining: %d", remaining)
