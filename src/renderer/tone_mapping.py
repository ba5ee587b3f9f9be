# renderer/tone_mapping.py
import math

import numpy as np
from numba import njit


@njit(cache=True)
def resolve_accumulation(accum):
    """
    Turn an (h, w, 4) buffer of (r, g, b, sample_count) sums into an
    (h, w, 3) uint8 image: average, gamma 2, clamp to [0, 0.999], scale by 256.
    """
    height, width = accum.shape[0], accum.shape[1]
    output = np.zeros((height, width, 3), dtype=np.uint8)
    for y in range(height):
        for x in range(width):
            count = accum[y, x, 3]
            if count <= 0:
                continue
            scale = 1.0 / count
            for c in range(3):
                value = accum[y, x, c] * scale
                # NaN and inf from a bad sample would poison the pixel
                if not math.isfinite(value) or value < 0.0:
                    value = 0.0
                value = math.sqrt(value)
                if value > 0.999:
                    value = 0.999
                output[y, x, c] = np.uint8(int(256.0 * value))
    return output

