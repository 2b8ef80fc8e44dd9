# simplex_field/generator.py

"""
================================================================================
NOISE GENERATOR
================================================================================
This module contains the seeded noise generator classes, the public entry point
of the package. A generator owns the per-seed permutation table and gradient
caches, and evaluates noise through the compiled kernels in simplex_field.noise.

Data Contract:
---------------
- Inputs (on initialization):
    - seed (int): Any integer. It is consumed as a signed 64-bit value.
    - logger: An optional configured Python logging object.
- Outputs (from methods):
    - Floats (scalar queries) or float64 arrays (array queries) of noise values.
- Side Effects: Logs messages using the provided logger at construction only.
- Invariants: Given the same seed and profile, every query is deterministic.
  Instance tables are read-only, so one generator can be shared across threads.
================================================================================
"""

import logging

import numpy as np

from . import config as DEFAULTS
from . import noise
from .gradients import shared_gradient_table
from .lattice import get_geometry
from .permutation import build_permutation, build_gradient_cache


def _freeze(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


def _orientation_code(orientation: str, choices: tuple) -> int:
    """Maps an orientation name to the code understood by the compiled kernels."""
    try:
        return choices.index(orientation)
    except ValueError:
        raise ValueError(
            f"Unknown orientation '{orientation}'. Expected one of: {list(choices)}"
        ) from None


def _flat_coordinates(*coordinates):
    """Broadcasts coordinate inputs and flattens them into contiguous float64 arrays."""
    arrays = np.broadcast_arrays(*(np.asarray(c, dtype=np.float64) for c in coordinates))
    shape = arrays[0].shape
    return shape, [np.ascontiguousarray(a).ravel() for a in arrays]


class NoiseGenerator:
    """
    Seeded gradient noise for one kernel profile.
    Subclasses select the profile; use create_generator() or from_config().
    """
    PROFILE = None

    def __init__(self, seed: int = DEFAULTS.DEFAULT_SEED, logger: logging.Logger = None):
        """
        Initializes the generator.

        Args:
            seed (int): The noise seed.
            logger (logging.Logger, optional): The logger instance for all output.
                Defaults to this module's logger.
        """
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.seed = int(seed)
        self.profile = self.PROFILE
        self.geometry = get_geometry(self.PROFILE)
        self.settings = self.geometry.settings

        # --- Per-Seed Tables ---
        self.perm = _freeze(build_permutation(self.seed))
        self.grads_2d = self._gradient_cache(2, self.settings['n2'])
        self.grads_3d = self._gradient_cache(3, self.settings['n3'])
        self.logger.debug(f"Permutation table and gradient caches built for seed {self.seed}.")

    def _gradient_cache(self, dimension: int, norm: float) -> np.ndarray:
        return _freeze(build_gradient_cache(self.perm, shared_gradient_table(dimension, norm)))

    def _log_ready(self):
        self.logger.info(f"{type(self).__name__} ready (seed={self.seed}, profile='{self.profile}').")

    # --- 2D ---

    def _noise2(self, orientation: int, x, y) -> float:
        g = self.geometry
        return noise.noise2_point(self.perm, self.grads_2d, g.offsets_2d, g.deltas_2d, g.wide,
                                  self.settings['radius_sq_2d'], orientation, float(x), float(y))

    def noise2(self, x: float, y: float) -> float:
        """2D noise, standard lattice orientation."""
        return self._noise2(0, x, y)

    def noise2_alt_orientation(self, x: float, y: float) -> float:
        """
        2D noise with Y pointing down the main diagonal.
        Useful for a 2D sandbox with Y vertical, or for slices of 3D noise.
        """
        return self._noise2(1, x, y)

    def noise2_array(self, x, y, orientation: str = "standard") -> np.ndarray:
        """Evaluates 2D noise over broadcast coordinate arrays."""
        code = _orientation_code(orientation, DEFAULTS.ORIENTATIONS_2D)
        shape, (xf, yf) = _flat_coordinates(x, y)
        g = self.geometry
        out = noise.noise2_grid(self.perm, self.grads_2d, g.offsets_2d, g.deltas_2d, g.wide,
                                self.settings['radius_sq_2d'], code, xf, yf)
        return out.reshape(shape)

    # --- 3D ---

    def _noise3(self, orientation: int, x, y, z) -> float:
        g = self.geometry
        return noise.noise3_point(self.perm, self.grads_3d, g.offsets_3d, g.deltas_3d,
                                  g.on_success_3d, g.on_failure_3d, g.nodes_per_octant,
                                  self.settings['radius_sq_3d'], orientation, float(x), float(y), float(z))

    def noise3_classic(self, x: float, y: float, z: float) -> float:
        """3D noise, rotated so that cardinal planar slices look like the classic lattice."""
        return self._noise3(0, x, y, z)

    def noise3_xy_before_z(self, x: float, y: float, z: float) -> float:
        """
        3D noise with better visual isotropy in (X, Y).
        Recommended for 3D terrain and time-varied animations, with Z as the
        vertical or time axis.
        """
        return self._noise3(1, x, y, z)

    def noise3_xz_before_y(self, x: float, y: float, z: float) -> float:
        """
        3D noise with better visual isotropy in (X, Z).
        Recommended for worlds where Y is the vertical axis.
        """
        return self._noise3(2, x, y, z)

    def noise3_array(self, x, y, z, orientation: str = "classic") -> np.ndarray:
        """Evaluates 3D noise over broadcast coordinate arrays."""
        code = _orientation_code(orientation, DEFAULTS.ORIENTATIONS_3D)
        shape, (xf, yf, zf) = _flat_coordinates(x, y, z)
        g = self.geometry
        out = noise.noise3_grid(self.perm, self.grads_3d, g.offsets_3d, g.deltas_3d,
                                g.on_success_3d, g.on_failure_3d, g.nodes_per_octant,
                                self.settings['radius_sq_3d'], code, xf, yf, zf)
        return out.reshape(shape)


class NarrowNoiseGenerator(NoiseGenerator):
    """
    Narrow-kernel profile: fewer overlapping contributions, cheaper to evaluate.
    Offers 2D and 3D noise only.
    """
    PROFILE = "narrow"

    def __init__(self, seed: int = DEFAULTS.DEFAULT_SEED, logger: logging.Logger = None):
        super().__init__(seed, logger)
        self._log_ready()


class WideNoiseGenerator(NoiseGenerator):
    """
    Wide-kernel profile: larger kernels and a smoother field.
    Adds 4D noise.
    """
    PROFILE = "wide"

    def __init__(self, seed: int = DEFAULTS.DEFAULT_SEED, logger: logging.Logger = None):
        super().__init__(seed, logger)
        self.grads_4d = self._gradient_cache(4, self.settings['n4'])
        self._log_ready()

    def _noise4(self, orientation: int, x, y, z, w) -> float:
        g = self.geometry
        return noise.noise4_point(self.perm, self.grads_4d, g.starts_4d, g.offsets_4d, g.deltas_4d,
                                  self.settings['radius_sq_4d'], orientation,
                                  float(x), float(y), float(z), float(w))

    def noise4_classic(self, x: float, y: float, z: float, w: float) -> float:
        """4D noise, classic lattice orientation."""
        return self._noise4(0, x, y, z, w)

    def noise4_xy_before_zw(self, x: float, y: float, z: float, w: float) -> float:
        """4D noise with XY and ZW forming orthogonal triangular planes."""
        return self._noise4(1, x, y, z, w)

    def noise4_xz_before_yw(self, x: float, y: float, z: float, w: float) -> float:
        """4D noise with XZ and YW forming orthogonal triangular planes."""
        return self._noise4(2, x, y, z, w)

    def noise4_xyz_before_w(self, x: float, y: float, z: float, w: float) -> float:
        """4D noise with XYZ oriented like noise3_classic and W as the extra axis."""
        return self._noise4(3, x, y, z, w)

    def noise4_array(self, x, y, z, w, orientation: str = "classic") -> np.ndarray:
        """Evaluates 4D noise over broadcast coordinate arrays."""
        code = _orientation_code(orientation, DEFAULTS.ORIENTATIONS_4D)
        shape, (xf, yf, zf, wf) = _flat_coordinates(x, y, z, w)
        g = self.geometry
        out = noise.noise4_grid(self.perm, self.grads_4d, g.starts_4d, g.offsets_4d, g.deltas_4d,
                                self.settings['radius_sq_4d'], code, xf, yf, zf, wf)
        return out.reshape(shape)


GENERATOR_TYPES = {
    WideNoiseGenerator.PROFILE: WideNoiseGenerator,
    NarrowNoiseGenerator.PROFILE: NarrowNoiseGenerator,
}


def create_generator(seed: int = DEFAULTS.DEFAULT_SEED, profile: str = DEFAULTS.DEFAULT_PROFILE,
                     logger: logging.Logger = None) -> NoiseGenerator:
    """Builds a generator for the given seed and kernel profile ('wide' or 'narrow')."""
    generator_type = GENERATOR_TYPES.get(profile)
    if generator_type is None:
        raise ValueError(f"Unknown kernel profile '{profile}'. Expected one of: {sorted(GENERATOR_TYPES)}")
    return generator_type(seed, logger)


def from_config(config: dict, logger: logging.Logger = None) -> NoiseGenerator:
    """
    Builds a generator from a configuration dictionary.

    Args:
        config (dict): Optional keys 'seed' and 'profile' override the defaults.
        logger (logging.Logger, optional): The logger instance for all output.
    """
    return create_generator(
        seed=config.get('seed', DEFAULTS.DEFAULT_SEED),
        profile=config.get('profile', DEFAULTS.DEFAULT_PROFILE),
        logger=logger,
    )
