# ==============================================================================
# File: tests/test_noise.py
# Purpose: Behavioural tests for noise evaluation: determinism, seeding,
#          pinned reference values, continuity, lattice boundaries, NaN and
#          infinity handling, and array queries.
# ==============================================================================
import itertools
import math
import unittest
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from simplex_field import config as DEFAULTS
from simplex_field import noise
from simplex_field.generator import NarrowNoiseGenerator, WideNoiseGenerator, create_generator
from simplex_field.lattice import closest_approach_4d, displacement_4d

NOISE2 = ("noise2", "noise2_alt_orientation")
NOISE3 = ("noise3_classic", "noise3_xy_before_z", "noise3_xz_before_y")
NOISE4 = ("noise4_classic", "noise4_xy_before_zw", "noise4_xz_before_yw", "noise4_xyz_before_w")


def _queries(generator):
    """(method name, arity) pairs for every scalar query the generator offers."""
    pairs = [(name, 2) for name in NOISE2] + [(name, 3) for name in NOISE3]
    if isinstance(generator, WideNoiseGenerator):
        pairs += [(name, 4) for name in NOISE4]
    return pairs


# (seed, profile, query, point, value). Each value is the sum over every
# lattice point strictly inside the kernel, accumulated point by point.
REFERENCE_VALUES = [
    (0, "wide", "noise2", (0.5, -1.25), 0.38689315573617156),
    (0, "wide", "noise2", (13.7, 42.05), 0.24214959888753079),
    (0, "wide", "noise2", (-3.3, 0.8), -0.42900308919486607),
    (0, "wide", "noise2_alt_orientation", (0.5, -1.25), 0.20312927628980978),
    (0, "wide", "noise2_alt_orientation", (13.7, 42.05), -0.0020732834562530531),
    (0, "wide", "noise2_alt_orientation", (-3.3, 0.8), -0.78305797721981096),
    (0, "wide", "noise3_classic", (101.3, -7.7, 12.01), 0.0083612195127520939),
    (0, "wide", "noise3_classic", (0.25, 0.6, -2.2), -0.2177807918448591),
    (0, "wide", "noise3_classic", (-15.5, 3.125, 7.9), -0.49996915394425556),
    (0, "wide", "noise3_xy_before_z", (101.3, -7.7, 12.01), -0.27201822096151973),
    (0, "wide", "noise3_xy_before_z", (0.25, 0.6, -2.2), 0.42747779512255218),
    (0, "wide", "noise3_xy_before_z", (-15.5, 3.125, 7.9), -0.090486759669654915),
    (0, "wide", "noise3_xz_before_y", (101.3, -7.7, 12.01), -0.36495221169147701),
    (0, "wide", "noise3_xz_before_y", (0.25, 0.6, -2.2), -0.34102151801985914),
    (0, "wide", "noise3_xz_before_y", (-15.5, 3.125, 7.9), 0.3123717463670963),
    (0, "wide", "noise4_classic", (0.5, -1.25, 3.75, 0.125), 0.11835614029891536),
    (0, "wide", "noise4_classic", (-7.3, 2.2, 0.9, 11.6), -0.025038491098037421),
    (0, "wide", "noise4_classic", (3.1, 4.1, 5.9, -2.6), -0.12047649256154139),
    (0, "wide", "noise4_xy_before_zw", (0.5, -1.25, 3.75, 0.125), 0.31687427582667749),
    (0, "wide", "noise4_xy_before_zw", (-7.3, 2.2, 0.9, 11.6), 0.18468626179200384),
    (0, "wide", "noise4_xy_before_zw", (3.1, 4.1, 5.9, -2.6), -0.3283067230685508),
    (0, "wide", "noise4_xz_before_yw", (0.5, -1.25, 3.75, 0.125), 0.16195698056873867),
    (0, "wide", "noise4_xz_before_yw", (-7.3, 2.2, 0.9, 11.6), -0.060136990681283878),
    (0, "wide", "noise4_xz_before_yw", (3.1, 4.1, 5.9, -2.6), 0.22452432023747107),
    (0, "wide", "noise4_xyz_before_w", (0.5, -1.25, 3.75, 0.125), -0.44020732634997839),
    (0, "wide", "noise4_xyz_before_w", (-7.3, 2.2, 0.9, 11.6), -0.25189271535797458),
    (0, "wide", "noise4_xyz_before_w", (3.1, 4.1, 5.9, -2.6), 0.14188468882428953),
    (0, "narrow", "noise2", (0.5, -1.25), 0.56338888861587177),
    (0, "narrow", "noise2", (13.7, 42.05), 0.42596049464600994),
    (0, "narrow", "noise2", (-3.3, 0.8), -0.73726250696540296),
    (0, "narrow", "noise2_alt_orientation", (0.5, -1.25), 0.45183810604313346),
    (0, "narrow", "noise2_alt_orientation", (13.7, 42.05), -0.098847221597226892),
    (0, "narrow", "noise2_alt_orientation", (-3.3, 0.8), -0.65307309852431172),
    (0, "narrow", "noise3_classic", (101.3, -7.7, 12.01), -0.19260267318432339),
    (0, "narrow", "noise3_classic", (0.25, 0.6, -2.2), -0.32129780572017447),
    (0, "narrow", "noise3_classic", (-15.5, 3.125, 7.9), -0.20895135784612029),
    (0, "narrow", "noise3_xy_before_z", (101.3, -7.7, 12.01), -0.062644483128614037),
    (0, "narrow", "noise3_xy_before_z", (0.25, 0.6, -2.2), 0.27108798150018565),
    (0, "narrow", "noise3_xy_before_z", (-15.5, 3.125, 7.9), -0.18470472996412968),
    (0, "narrow", "noise3_xz_before_y", (101.3, -7.7, 12.01), -0.13052309276930057),
    (0, "narrow", "noise3_xz_before_y", (0.25, 0.6, -2.2), -0.30670519740221952),
    (0, "narrow", "noise3_xz_before_y", (-15.5, 3.125, 7.9), 0.3792864237017462),
    (42, "wide", "noise2", (0.5, -1.25), 0.51152174347723589),
    (42, "wide", "noise2", (13.7, 42.05), -0.42037914124206166),
    (42, "wide", "noise2", (-3.3, 0.8), 0.11048869838078024),
    (42, "wide", "noise2_alt_orientation", (0.5, -1.25), -0.017756044972232338),
    (42, "wide", "noise2_alt_orientation", (13.7, 42.05), -0.57700716204214508),
    (42, "wide", "noise2_alt_orientation", (-3.3, 0.8), -0.092770538886162532),
    (42, "wide", "noise3_classic", (101.3, -7.7, 12.01), 0.090148620912114744),
    (42, "wide", "noise3_classic", (0.25, 0.6, -2.2), -0.24839833620109736),
    (42, "wide", "noise3_classic", (-15.5, 3.125, 7.9), -0.23121567514011482),
    (42, "wide", "noise3_xy_before_z", (101.3, -7.7, 12.01), 0.22522597460022664),
    (42, "wide", "noise3_xy_before_z", (0.25, 0.6, -2.2), -0.037653164517540721),
    (42, "wide", "noise3_xy_before_z", (-15.5, 3.125, 7.9), -0.14612875711633802),
    (42, "wide", "noise3_xz_before_y", (101.3, -7.7, 12.01), -0.10594979171325904),
    (42, "wide", "noise3_xz_before_y", (0.25, 0.6, -2.2), -0.30659566534354304),
    (42, "wide", "noise3_xz_before_y", (-15.5, 3.125, 7.9), 0.2682814895566053),
    (42, "wide", "noise4_classic", (0.5, -1.25, 3.75, 0.125), -0.24851535421438947),
    (42, "wide", "noise4_classic", (-7.3, 2.2, 0.9, 11.6), 0.21148337438051049),
    (42, "wide", "noise4_classic", (3.1, 4.1, 5.9, -2.6), -0.29865432148723037),
    (42, "wide", "noise4_xy_before_zw", (0.5, -1.25, 3.75, 0.125), 0.56449981311644004),
    (42, "wide", "noise4_xy_before_zw", (-7.3, 2.2, 0.9, 11.6), -0.076652815568546209),
    (42, "wide", "noise4_xy_before_zw", (3.1, 4.1, 5.9, -2.6), -0.23614144172514884),
    (42, "wide", "noise4_xz_before_yw", (0.5, -1.25, 3.75, 0.125), 0.10402210209591557),
    (42, "wide", "noise4_xz_before_yw", (-7.3, 2.2, 0.9, 11.6), -0.38229728380470379),
    (42, "wide", "noise4_xz_before_yw", (3.1, 4.1, 5.9, -2.6), 0.10812984338040592),
    (42, "wide", "noise4_xyz_before_w", (0.5, -1.25, 3.75, 0.125), 0.19547162556359182),
    (42, "wide", "noise4_xyz_before_w", (-7.3, 2.2, 0.9, 11.6), 0.010460773439677868),
    (42, "wide", "noise4_xyz_before_w", (3.1, 4.1, 5.9, -2.6), -0.039923612919946713),
    (42, "narrow", "noise2", (0.5, -1.25), 0.67837610236923207),
    (42, "narrow", "noise2", (13.7, 42.05), -0.59526490451173519),
    (42, "narrow", "noise2", (-3.3, 0.8), 0.13398434262898168),
    (42, "narrow", "noise2_alt_orientation", (0.5, -1.25), -0.011678687350623841),
    (42, "narrow", "noise2_alt_orientation", (13.7, 42.05), -0.83638704377085982),
    (42, "narrow", "noise2_alt_orientation", (-3.3, 0.8), -0.08873092338821191),
    (42, "narrow", "noise3_classic", (101.3, -7.7, 12.01), 0.077689878792672987),
    (42, "narrow", "noise3_classic", (0.25, 0.6, -2.2), -0.33160782267000283),
    (42, "narrow", "noise3_classic", (-15.5, 3.125, 7.9), -0.079429157618508259),
    (42, "narrow", "noise3_xy_before_z", (101.3, -7.7, 12.01), 0.050811305362415987),
    (42, "narrow", "noise3_xy_before_z", (0.25, 0.6, -2.2), -0.0093151085144561607),
    (42, "narrow", "noise3_xy_before_z", (-15.5, 3.125, 7.9), -0.23399569616017665),
    (42, "narrow", "noise3_xz_before_y", (101.3, -7.7, 12.01), -0.071570985367720968),
    (42, "narrow", "noise3_xz_before_y", (0.25, 0.6, -2.2), -0.36073700554075883),
    (42, "narrow", "noise3_xz_before_y", (-15.5, 3.125, 7.9), 0.48700379963083318),
]

# Published 4D candidates whose kernel only grazes their subcell, as
# (subcell class, packed offset code). Every other published candidate reaches
# deeper than RIM_DISTANCE_SQ, and every regenerated candidate is published
# except for further rim candidates.
PUBLISHED_RIM_CANDIDATES = {
    (2, 0x05), (2, 0x11), (2, 0x41), (8, 0x05), (8, 0x14), (8, 0x44),
    (32, 0x11), (32, 0x14), (32, 0x50), (86, 0x15), (86, 0x45), (86, 0x51),
    (89, 0x15), (89, 0x45), (89, 0x54), (101, 0x15), (101, 0x51), (101, 0x54),
    (111, 0x15), (123, 0x15), (126, 0x15), (128, 0x41), (128, 0x44), (128, 0x50),
    (149, 0x45), (149, 0x51), (149, 0x54), (159, 0x45), (183, 0x51), (189, 0x54),
    (219, 0x45), (222, 0x45), (231, 0x51), (237, 0x54), (246, 0x51), (249, 0x54),
}
RIM_DISTANCE_SQ = 0.796875


def _bcc_sum(generator, xr, yr, zr):
    """Sums every BCC lattice point strictly inside the kernel, without a decision graph."""
    radius_sq = generator.settings['radius_sq_3d']
    base = np.floor([xr, yr, zr]).astype(np.int64)
    frac = np.array([xr, yr, zr]) - base
    value = 0.0
    for half_lattice in (0, 1):
        for cell in itertools.product(range(-1, 3), repeat=3):
            d = frac - np.array(cell) + 0.5 * half_lattice
            attn = radius_sq - float(d @ d)
            if attn <= 0:
                continue
            m = (base + np.array(cell) + DEFAULTS.BCC_HALF_LATTICE_OFFSET * half_lattice) & DEFAULTS.PMASK
            g = generator.perm[generator.perm[m[0]] ^ m[1]] ^ m[2]
            value += attn ** 4 * float(generator.grads_3d[g] @ d)
    return value


class NoiseTestCase(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.wide = create_generator(0, "wide")
        cls.narrow = create_generator(0, "narrow")
        cls.generators = (cls.wide, cls.narrow)
        cls.rng = np.random.default_rng(1234)


class TestDeterminism(NoiseTestCase):

    def test_repeat_queries_are_bit_identical(self):
        points = self.rng.uniform(-50, 50, size=(25, 4))
        for generator in self.generators:
            twin = create_generator(generator.seed, generator.profile)
            for name, arity in _queries(generator):
                for point in points:
                    first = getattr(generator, name)(*point[:arity])
                    self.assertEqual(first, getattr(generator, name)(*point[:arity]))
                    self.assertEqual(first, getattr(twin, name)(*point[:arity]))

    def test_integer_and_float_inputs_agree(self):
        self.assertEqual(self.wide.noise2(3, -4), self.wide.noise2(3.0, -4.0))
        self.assertEqual(self.wide.noise4_classic(1, 2, 3, 4), self.wide.noise4_classic(1.0, 2.0, 3.0, 4.0))

    def test_shared_across_threads(self):
        points = self.rng.uniform(-10, 10, size=(200, 3))
        expected = [self.wide.noise3_classic(*p) for p in points]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda p: self.wide.noise3_classic(*p), points))
        self.assertEqual(results, expected)


class TestSeeding(NoiseTestCase):

    def test_seeds_change_the_field(self):
        point = (12.34, -5.67, 8.9, 0.123)
        for profile in ("wide", "narrow"):
            values = {create_generator(seed, profile).noise3_classic(*point[:3]) for seed in range(20)}
            self.assertGreaterEqual(len(values), 18)
        values = {WideNoiseGenerator(seed).noise4_classic(*point) for seed in range(20)}
        self.assertGreaterEqual(len(values), 18)

    def test_seed_wraps_to_64_bits(self):
        a = create_generator(77)
        b = create_generator(77 + 2 ** 64)
        self.assertEqual(a.noise2(1.5, 2.5), b.noise2(1.5, 2.5))


class TestReferenceValues(NoiseTestCase):

    def test_lattice_origin_is_zero(self):
        # Every contribution at a lattice vertex is either the vertex itself,
        # whose extrapolation is zero, or lies on the kernel boundary.
        for generator in self.generators:
            for name, arity in _queries(generator):
                value = getattr(generator, name)(*([0.0] * arity))
                self.assertLess(abs(value), 1e-12, f"{generator.profile} {name}")

    def test_values_vanish_on_every_lattice_vertex(self):
        for generator in self.generators:
            for xs, ys in ((3, -2), (-7, 5), (100, 41)):
                value = noise.noise2_base(generator.perm, generator.grads_2d, generator.geometry.offsets_2d,
                                          generator.geometry.deltas_2d, generator.geometry.wide,
                                          generator.settings['radius_sq_2d'], float(xs), float(ys))
                self.assertLess(abs(value), 1e-12)


class TestPinnedValues(unittest.TestCase):

    def test_values_off_the_lattice(self):
        generators = {}
        for seed, profile, name, point, expected in REFERENCE_VALUES:
            if (seed, profile) not in generators:
                generators[seed, profile] = create_generator(seed, profile)
            value = getattr(generators[seed, profile], name)(*point)
            self.assertAlmostEqual(value, expected, delta=1e-12, msg=f"seed {seed} {profile} {name}{point}")

    def test_3d_walk_counts_every_nearby_point(self):
        rng = np.random.default_rng(77)
        for profile in ("wide", "narrow"):
            generator = create_generator(0, profile)
            g = generator.geometry
            for xr, yr, zr in rng.uniform(-40, 40, size=(400, 3)):
                value = noise.noise3_bcc(generator.perm, generator.grads_3d, g.offsets_3d, g.deltas_3d,
                                         g.on_success_3d, g.on_failure_3d, g.nodes_per_octant,
                                         generator.settings['radius_sq_3d'], xr, yr, zr)
                self.assertAlmostEqual(value, _bcc_sum(generator, xr, yr, zr), delta=1e-12)


class TestPublishedSubcellLists(NoiseTestCase):
    """Compares 4D output with the regenerated lists against the published ones."""

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        dist_sq, cls.witness = closest_approach_4d()
        starts, offsets, cls.extras = [0], [], []
        for class_index in range(256):
            for offset in cls.wide.geometry.subcell_candidates(class_index):
                code = sum((c - DEFAULTS.SUBCELL_OFFSET_MIN) << (2 * axis) for axis, c in enumerate(offset))
                on_rim = dist_sq[class_index, code] > RIM_DISTANCE_SQ - 1e-9
                if on_rim and (class_index, code) not in PUBLISHED_RIM_CANDIDATES:
                    cls.extras.append((class_index, code))
                    continue
                offsets.append(offset)
            starts.append(len(offsets))
        cls.published = (
            np.array(starts, dtype=np.int64),
            np.array(offsets, dtype=np.int64),
            np.array([displacement_4d(offset) for offset in offsets], dtype=np.float64),
        )

    def _both(self, xs, ys, zs, ws):
        g = self.wide.geometry
        radius_sq = self.wide.settings['radius_sq_4d']
        full = noise.noise4_base(self.wide.perm, self.wide.grads_4d, g.starts_4d, g.offsets_4d, g.deltas_4d,
                                 radius_sq, xs, ys, zs, ws)
        published = noise.noise4_base(self.wide.perm, self.wide.grads_4d, *self.published, radius_sq, xs, ys, zs, ws)
        return full, published

    def test_extra_candidates(self):
        self.assertEqual(len(self.extras), 156)
        starts = self.published[0]
        self.assertEqual(starts[1] - starts[0], 20)

    def test_extras_only_graze_their_subcell(self):
        largest = 0.0
        for class_index, code in self.extras:
            quadrants = np.array([(class_index >> (2 * axis)) & 3 for axis in range(4)])
            centre = (quadrants + 0.5) / DEFAULTS.SUBCELL_DIVISIONS
            point = self.witness[class_index, code]
            point = point + (centre - point) * 1e-9 + 3.0
            full, published = self._both(*point)
            self.assertLess(abs(full - published), 1e-9)
            largest = max(largest, abs(full - published))
        self.assertGreater(largest, 1e-12)

    def test_random_points_agree(self):
        for point in self.rng.uniform(-25, 25, size=(2000, 4)):
            full, published = self._both(*point)
            self.assertLess(abs(full - published), 1e-9)


class TestContinuity(NoiseTestCase):

    def test_small_steps_make_small_changes(self):
        points = self.rng.uniform(-20, 20, size=(60, 4))
        steps = self.rng.normal(size=(60, 4))
        steps /= np.linalg.norm(steps, axis=1, keepdims=True)
        for generator in self.generators:
            for name, arity in _queries(generator):
                query = getattr(generator, name)
                for point, step in zip(points, steps):
                    p = point[:arity]
                    coarse = abs(query(*(p + 1e-3 * step[:arity])) - query(*p))
                    fine = abs(query(*(p + 1e-6 * step[:arity])) - query(*p))
                    self.assertLess(coarse, 0.05, name)
                    self.assertLess(fine, 1e-4, name)

    def test_cell_boundaries_match_either_side(self):
        delta = 1e-9
        for generator in self.generators:
            # Points with integer skewed coordinates, mapped back to input space.
            for xs, ys in ((2.0, 5.0), (-1.0, 3.0)):
                s = (xs + ys) * DEFAULTS.UNSKEW_2D
                x, y = xs + s, ys + s
                centre = generator.noise2(x, y)
                for dx, dy in ((delta, 0), (-delta, 0), (0, delta), (0, -delta)):
                    self.assertAlmostEqual(generator.noise2(x + dx, y + dy), centre, delta=1e-6)

            # The classic 3D rotation is its own inverse.
            for xr, yr, zr in ((1.0, 2.0, -3.0), (0.5, 0.5, 0.5), (4.0, -0.5, 2.0)):
                r = DEFAULTS.ROTATE_3D_CLASSIC * (xr + yr + zr)
                x, y, z = r - xr, r - yr, r - zr
                centre = generator.noise3_classic(x, y, z)
                for axis in range(3):
                    for sign in (1, -1):
                        p = [x, y, z]
                        p[axis] += sign * delta
                        self.assertAlmostEqual(generator.noise3_classic(*p), centre, delta=1e-6)

        for xs, ys, zs, ws in ((1.0, 2.0, 3.0, 4.0), (0.25, 0.5, 0.75, -1.0)):
            s = (xs + ys + zs + ws) * DEFAULTS.UNSKEW_4D
            point = [xs + s, ys + s, zs + s, ws + s]
            centre = self.wide.noise4_classic(*point)
            for axis in range(4):
                for sign in (1, -1):
                    p = list(point)
                    p[axis] += sign * delta
                    self.assertAlmostEqual(self.wide.noise4_classic(*p), centre, delta=1e-6)


class TestRangeAndSpecialValues(NoiseTestCase):

    def test_empirical_range(self):
        points = self.rng.uniform(-1000, 1000, size=(3000, 4))
        for generator in self.generators:
            for name, arity in _queries(generator):
                values = np.array([getattr(generator, name)(*p[:arity]) for p in points])
                self.assertTrue(np.all(np.isfinite(values)))
                self.assertLess(np.abs(values).max(), 1.25, name)
                self.assertGreater(values.std(), 0.05, name)

    def test_nan_propagates(self):
        for generator in self.generators:
            for name, arity in _queries(generator):
                args = [0.3] * arity
                args[0] = math.nan
                self.assertTrue(math.isnan(getattr(generator, name)(*args)), name)

    def test_infinities_give_nan(self):
        for generator in self.generators:
            for name, arity in _queries(generator):
                for position in range(arity):
                    for inf in (math.inf, -math.inf):
                        args = [1.7] * arity
                        args[position] = inf
                        self.assertTrue(math.isnan(getattr(generator, name)(*args)), f"{name}{tuple(args)}")

    def test_infinite_height_on_triangular_plane(self):
        # Every lattice point is infinitely far away here, so no candidate is
        # in range and only the explicit check yields NaN.
        for generator in self.generators:
            self.assertTrue(math.isnan(generator.noise3_xy_before_z(1.7, 1.7, math.inf)))
            self.assertTrue(math.isnan(generator.noise3_array(1.7, 1.7, math.inf, "xy_before_z")))

    def test_large_coordinates(self):
        value = self.wide.noise3_xz_before_y(1e9, -3e8, 7.5e7)
        self.assertTrue(math.isfinite(value))


class TestArrayQueries(NoiseTestCase):

    def test_arrays_match_scalar_queries(self):
        coords = self.rng.uniform(-30, 30, size=(4, 40))
        x, y, z, w = coords
        for generator in self.generators:
            for orientation, name in zip(DEFAULTS.ORIENTATIONS_2D, NOISE2):
                expected = [getattr(generator, name)(*p) for p in zip(x, y)]
                np.testing.assert_array_equal(generator.noise2_array(x, y, orientation), expected)
            for orientation, name in zip(DEFAULTS.ORIENTATIONS_3D, NOISE3):
                expected = [getattr(generator, name)(*p) for p in zip(x, y, z)]
                np.testing.assert_array_equal(generator.noise3_array(x, y, z, orientation), expected)
        for orientation, name in zip(DEFAULTS.ORIENTATIONS_4D, NOISE4):
            expected = [getattr(self.wide, name)(*p) for p in zip(x, y, z, w)]
            np.testing.assert_array_equal(self.wide.noise4_array(x, y, z, w, orientation), expected)

    def test_broadcasting(self):
        xs = np.linspace(0, 4, 5)[:, None]
        ys = np.linspace(0, 3, 4)[None, :]
        grid = self.narrow.noise2_array(xs, ys)
        self.assertEqual(grid.shape, (5, 4))
        self.assertEqual(grid[2, 3], self.narrow.noise2(xs[2, 0], ys[0, 3]))

        column = self.wide.noise4_array(xs, 1.5, -2.0, 0.25)
        self.assertEqual(column.shape, (5, 1))

        self.assertEqual(self.wide.noise3_array(1.0, 2.0, 3.0).shape, ())

    def test_bad_arguments(self):
        with self.assertRaises(ValueError):
            self.wide.noise2_array([0.0], [0.0], orientation="diagonal")
        with self.assertRaises(ValueError):
            self.wide.noise4_array(0.0, 0.0, 0.0, 0.0, orientation="xy_before_z")
        with self.assertRaises(ValueError):
            self.narrow.noise3_array(np.zeros(3), np.zeros(4), 0.0)


class TestProfiles(NoiseTestCase):

    def test_profiles_are_different_functions(self):
        point = (0.37, -1.91, 4.2)
        self.assertNotEqual(self.wide.noise2(*point[:2]), self.narrow.noise2(*point[:2]))
        self.assertNotEqual(self.wide.noise3_classic(*point), self.narrow.noise3_classic(*point))

    def test_narrow_has_no_4d(self):
        self.assertIsInstance(self.narrow, NarrowNoiseGenerator)
        self.assertFalse(hasattr(self.narrow, "noise4_classic"))
        self.assertFalse(hasattr(self.narrow, "noise4_array"))

    def test_orientations_differ(self):
        point = (0.37, -1.91, 4.2, 2.6)
        values = {getattr(self.wide, name)(*point) for name in NOISE4}
        self.assertEqual(len(values), 4)
        values = {getattr(self.wide, name)(*point[:3]) for name in NOISE3}
        self.assertEqual(len(values), 3)


if __name__ == '__main__':
    unittest.main()
