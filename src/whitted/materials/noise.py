"""Seeded 3D Perlin gradient noise.

The lattice tables (unit gradient vectors and three axis permutations) are
generated with numpy from a seed, then kept as plain Python lists because the
noise is evaluated one point at a time from inside the shading loop.

Example:
    >>> from src.whitted.materials.noise import PerlinNoise
    >>> noise = PerlinNoise(seed=7)
    >>> noise(0.0, 0.0, 0.0)
    0.0
    >>> -1.0 <= noise(0.3, 1.7, -2.2) <= 1.0
    True
"""

from __future__ import annotations

import math

import numpy as np

TABLE_SIZE = 256
_MASK = TABLE_SIZE - 1


class PerlinNoise:
    """Gradient noise on an integer lattice.

    Noise is zero at every lattice point and varies smoothly in between.

    Args:
        seed: Seed for the lattice tables. Equal seeds give equal noise.
    """

    def __init__(self, seed: int = 0):
        self.seed = seed
        rng = np.random.default_rng(seed)
        gradients = rng.uniform(-1.0, 1.0, size=(TABLE_SIZE, 3))
        lengths = np.linalg.norm(gradients, axis=1, keepdims=True)
        # Degenerate draws are vanishingly rare but would divide by zero.
        lengths[lengths == 0.0] = 1.0
        self._gradients = (gradients / lengths).tolist()
        self._perm_x = rng.permutation(TABLE_SIZE).tolist()
        self._perm_y = rng.permutation(TABLE_SIZE).tolist()
        self._perm_z = rng.permutation(TABLE_SIZE).tolist()

    def __call__(self, x: float, y: float, z: float) -> float:
        return self.noise(x, y, z)

    def noise(self, x: float, y: float, z: float) -> float:
        """Noise value at a point, roughly in [-1, 1]."""
        fx, fy, fz = math.floor(x), math.floor(y), math.floor(z)
        u, v, w = x - fx, y - fy, z - fz
        i, j, k = int(fx), int(fy), int(fz)

        # Hermite smoothing of the interpolation weights.
        uu = u * u * (3.0 - 2.0 * u)
        vv = v * v * (3.0 - 2.0 * v)
        ww = w * w * (3.0 - 2.0 * w)

        px, py, pz, grads = self._perm_x, self._perm_y, self._perm_z, self._gradients
        accum = 0.0
        for di in (0, 1):
            wx = uu if di else 1.0 - uu
            hx = px[(i + di) & _MASK]
            for dj in (0, 1):
                wy = vv if dj else 1.0 - vv
                hy = py[(j + dj) & _MASK]
                for dk in (0, 1):
                    wz = ww if dk else 1.0 - ww
                    gx, gy, gz = grads[hx ^ hy ^ pz[(k + dk) & _MASK]]
                    accum += wx * wy * wz * (gx * (u - di) + gy * (v - dj) + gz * (w - dk))
        return accum

    def turbulence(self, x: float, y: float, z: float, depth: int = 7) -> float:
        """Sum of ``depth`` octaves of absolute noise, each at twice the frequency."""
        accum = 0.0
        weight = 1.0
        for _ in range(depth):
            accum += weight * self.noise(x, y, z)
            weight *= 0.5
            x, y, z = x * 2.0, y * 2.0, z * 2.0
        return abs(accum)
