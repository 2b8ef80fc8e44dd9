# simplex_field/lattice.py

"""
================================================================================
LATTICE GEOMETRY
================================================================================
This module builds the seed-independent description of which lattice points
can influence a query point, for every cell region the evaluators distinguish:

- 2D: for each skew-orientation class of the unit rhombus, a short fixed list
  of simplex vertices.
- 3D: for each octant of the unit cube, a decision graph over candidate points
  of the body-centered-cubic (BCC) lattice, stored as a flat node arena with
  index links. A node's success link is followed when it is inside the kernel,
  its failure link when it is not; -1 ends the walk.
- 4D: for each of the 256 subcell classes, the list of lattice offsets whose
  kernel reaches into the subcell, regenerated here by exact geometry.

Data Contract:
---------------
- Inputs:
    - profile (str): A key of config.KERNEL_PROFILES.
- Outputs:
    - LatticeGeometry: read-only NumPy tables consumed by simplex_field.noise.
- Side Effects: Geometries are built once per profile per process and cached.
  Construction is serialized with a lock.
- Invariants: Each candidate list is complete (every lattice point that can
  overlap a point of its region is present) and minimal (every listed point
  overlaps some point of its region). The audit_* functions check this.
================================================================================
"""

import itertools
import logging
import threading

import numpy as np
from numba import njit

from . import config as DEFAULTS

logger = logging.getLogger(__name__)

_SUBCELLS = DEFAULTS.SUBCELL_DIVISIONS
_SUBCELL_MASK = _SUBCELLS - 1
_SUBCELL_BITS = 2
_BISECTION_STEPS = 64
_BISECTION_BOUND = 4.0
_CLASS_GRID_STEPS = 50


# --- Cell Classification (shared with the compiled evaluators) ---

@njit
def fast_floor(x):
    """Floor via truncation, corrected downwards for negative non-integers."""
    xi = int(x)
    if x < xi:
        return xi - 1
    return xi


@njit
def class_index_2d(wide, xsi, ysi):
    """Selects the 2D skew-orientation class for fractional skewed offsets."""
    if wide:
        a = int(xsi + ysi)
        return ((a & 1)
                | ((int(xsi - ysi / 2 + 1 - a / 2.0) & 1) << 1)
                | ((int(ysi - xsi / 2 + 1 - a / 2.0) & 1) << 2))
    return int((ysi - xsi) / 2 + 1) & 1


@njit
def octant_index_3d(xri, yri, zri):
    """Octant of the unit cube: one bit per axis, set in the upper half."""
    return ((int(xri + 0.5) & 1)
            | ((int(yri + 0.5) & 1) << 1)
            | ((int(zri + 0.5) & 1) << 2))


@njit
def subcell_index_4d(xs, ys, zs, ws):
    """Packs the quarter-cell slice of each skewed axis into an 8-bit class."""
    return ((fast_floor(xs * _SUBCELLS) & _SUBCELL_MASK)
            | ((fast_floor(ys * _SUBCELLS) & _SUBCELL_MASK) << 2)
            | ((fast_floor(zs * _SUBCELLS) & _SUBCELL_MASK) << 4)
            | ((fast_floor(ws * _SUBCELLS) & _SUBCELL_MASK) << 6))


# --- 2D Simplex Classes ---

def _class_points_2d_narrow(class_index):
    # The rhombus splits into two triangles along its short diagonal.
    third = (1, 0) if class_index == 0 else (0, 1)
    return [(0, 0), (1, 1), third]


def _class_points_2d_wide(class_index):
    # Bit 0: which half of the rhombus. Bits 1 and 2 pick the two extra
    # vertices beyond it that the larger kernel can still reach.
    if class_index & 1 == 0:
        extra_a = (1, 0) if class_index & 2 else (-1, 0)
        extra_b = (0, 1) if class_index & 4 else (0, -1)
    else:
        extra_a = (2, 1) if class_index & 2 else (0, 1)
        extra_b = (1, 2) if class_index & 4 else (1, 0)
    return [(0, 0), (1, 1), extra_a, extra_b]


def displacement_2d(xsv, ysv):
    """Unskewed vector from a lattice vertex back to its cell's base corner."""
    ssv = (xsv + ysv) * DEFAULTS.UNSKEW_2D
    return -xsv - ssv, -ysv - ssv


def _build_lookup_2d(wide):
    if wide:
        points = [_class_points_2d_wide(i) for i in range(8)]
    else:
        points = [_class_points_2d_narrow(i) for i in range(2)]
    offsets = np.array(points, dtype=np.int64)
    deltas = np.array([[displacement_2d(x, y) for x, y in row] for row in points], dtype=np.float64)
    return offsets, deltas


# --- 3D BCC Decision Graphs ---
# Each node: (half_lattice, flip_x, flip_y, flip_z, on_success, on_failure).
# The flips are unit steps away from the octant's own point on that half-lattice.
# Links are local node indices within one octant; None ends the walk.
# The first two nodes (one per half-lattice) are always visited.

_GRAPH_3D_NARROW = (
    (0, 0, 0, 0, 1, 1),
    (1, 0, 0, 0, 2, 2),
    # A hit on one first-half-lattice step rules out the other two, and a hit
    # on the x step also rules out the second-half-lattice x step.
    (0, 1, 0, 0, 6, 3),
    (0, 0, 1, 0, 5, 4),
    (0, 0, 0, 1, 5, 5),
    # At most one step on the second half-lattice can be in range.
    (1, 1, 0, 0, None, 6),
    (1, 0, 1, 0, None, 7),
    (1, 0, 0, 1, None, None),
)

_GRAPH_3D_WIDE = (
    (0, 0, 0, 0, 1, 1),
    (1, 0, 0, 0, 2, 2),
    # (1, 0, 0) vs (0, 1, 1) away from the octant, then the same on the
    # second half-lattice. Opposite steps on one half-lattice have tangent
    # kernels, so a hit on either rules out its partner and nothing else.
    (0, 1, 0, 0, 4, 3),
    (0, 0, 1, 1, 4, 4),
    (1, 1, 0, 0, 6, 5),
    (1, 0, 1, 1, 6, 6),
    # (0, 1, 0) vs (1, 0, 1).
    (0, 0, 1, 0, 8, 7),
    (0, 1, 0, 1, 8, 8),
    (1, 0, 1, 0, 10, 9),
    (1, 1, 0, 1, 10, 10),
    # (0, 0, 1) vs (1, 1, 0).
    (0, 0, 0, 1, 12, 11),
    (0, 1, 1, 0, 12, 12),
    (1, 0, 0, 1, None, 13),
    (1, 1, 1, 0, None, None),
)


def _node_cell_3d(octant, half_lattice, flips):
    """Integer offset of a graph node from the base corner of the cube."""
    near = [(octant >> axis) & 1 for axis in range(3)]
    if half_lattice == 0:
        return [n ^ f for n, f in zip(near, flips)]
    return [n + ((n ^ 1) ^ f) for n, f in zip(near, flips)]


def _build_graph_3d(graph):
    per_octant = len(graph)
    total = 8 * per_octant
    cells = np.empty((total, 3), dtype=np.int64)
    half_lattices = np.empty(total, dtype=np.int64)
    on_success = np.full(total, -1, dtype=np.int64)
    on_failure = np.full(total, -1, dtype=np.int64)

    for octant in range(8):
        base = octant * per_octant
        for local, (half_lattice, fx, fy, fz, success, failure) in enumerate(graph):
            node = base + local
            cells[node] = _node_cell_3d(octant, half_lattice, (fx, fy, fz))
            half_lattices[node] = half_lattice
            if success is not None:
                on_success[node] = base + success
            if failure is not None:
                on_failure[node] = base + failure

    deltas = -cells + 0.5 * half_lattices[:, None]
    offsets = cells + DEFAULTS.BCC_HALF_LATTICE_OFFSET * half_lattices[:, None]
    return {
        'per_octant': per_octant,
        'cells': cells,
        'half_lattices': half_lattices,
        'offsets': offsets,
        'deltas': deltas.astype(np.float64),
        'on_success': on_success,
        'on_failure': on_failure,
    }


# --- 4D Subcell Candidate Lists ---

def unpack_offset_4d(code):
    """Offset vector for a packed 4D candidate code (two bits per axis)."""
    return tuple(((code >> (_SUBCELL_BITS * axis)) & 3) + DEFAULTS.SUBCELL_OFFSET_MIN for axis in range(4))


def displacement_4d(offset):
    ssv = sum(offset) * DEFAULTS.UNSKEW_4D
    return tuple(-c - ssv for c in offset)


def closest_approach_4d():
    """
    For every (subcell class, candidate code) pair, finds the point of the
    closed subcell box that is closest to the candidate in unskewed space.

    With v = s - c in skewed space, the unskewed squared distance is
    |v|^2 - k (sum v)^2 with k = -(2u + 4u^2) for unskew factor u. This is a
    convex quadratic, and its minimum over a box has v_i = clip(t, lo_i, hi_i)
    where t solves t = k * sum_i clip(t, lo_i, hi_i). That scalar equation is
    strictly monotone, so it is solved by bisection for all pairs at once.

    Returns:
        (dist_sq, witness): arrays of shape (256, 256) and (256, 256, 4). The
        witness is the minimizing point in skewed cell coordinates.
    """
    u = DEFAULTS.UNSKEW_4D
    k = -(2.0 * u + 4.0 * u * u)
    divisions = DEFAULTS.SUBCELL_DIVISIONS

    codes = np.arange(256)
    shifts = _SUBCELL_BITS * np.arange(4)
    quadrants = (codes[:, None] >> shifts) & 3
    offsets = quadrants + DEFAULTS.SUBCELL_OFFSET_MIN

    # Broadcast to (class, candidate, axis).
    lo = quadrants[:, None, :] / divisions - offsets[None, :, :]
    hi = lo + 1.0 / divisions

    t_lo = np.full(lo.shape[:-1], -_BISECTION_BOUND)
    t_hi = np.full(lo.shape[:-1], _BISECTION_BOUND)
    for _ in range(_BISECTION_STEPS):
        mid = 0.5 * (t_lo + t_hi)
        excess = k * np.clip(mid[..., None], lo, hi).sum(axis=-1) - mid
        above = excess > 0
        t_lo = np.where(above, mid, t_lo)
        t_hi = np.where(above, t_hi, mid)

    v = np.clip(0.5 * (t_lo + t_hi)[..., None], lo, hi)
    total = v.sum(axis=-1)
    dist_sq = (v * v).sum(axis=-1) - k * total * total
    witness = v + offsets[None, :, :]
    return dist_sq, witness


def _build_lookup_4d(radius_sq):
    dist_sq, _ = closest_approach_4d()
    members = dist_sq < radius_sq - DEFAULTS.KERNEL_GRAZE_TOLERANCE

    starts = np.zeros(257, dtype=np.int64)
    starts[1:] = np.cumsum(members.sum(axis=1))
    codes = [code for class_index in range(256) for code in np.flatnonzero(members[class_index])]

    offsets = np.array([unpack_offset_4d(code) for code in codes], dtype=np.int64)
    deltas = np.array([displacement_4d(offset) for offset in offsets.tolist()], dtype=np.float64)
    return starts, offsets, deltas


def _freeze(array):
    array = np.ascontiguousarray(array)
    array.setflags(write=False)
    return array


class LatticeGeometry:
    """
    Read-only lattice tables for one kernel profile.
    Shared by every generator built with that profile.
    """
    def __init__(self, profile: str):
        if profile not in DEFAULTS.KERNEL_PROFILES:
            raise ValueError(
                f"Unknown kernel profile '{profile}'. Expected one of: {sorted(DEFAULTS.KERNEL_PROFILES)}"
            )
        self.profile = profile
        self.settings = DEFAULTS.KERNEL_PROFILES[profile]
        self.wide = profile == "wide"

        # --- 2D ---
        offsets_2d, deltas_2d = _build_lookup_2d(self.wide)
        self.offsets_2d = _freeze(offsets_2d)
        self.deltas_2d = _freeze(deltas_2d)

        # --- 3D ---
        graph = _build_graph_3d(_GRAPH_3D_WIDE if self.wide else _GRAPH_3D_NARROW)
        self.nodes_per_octant = graph['per_octant']
        self.cells_3d = _freeze(graph['cells'])
        self.half_lattices_3d = _freeze(graph['half_lattices'])
        self.offsets_3d = _freeze(graph['offsets'])
        self.deltas_3d = _freeze(graph['deltas'])
        self.on_success_3d = _freeze(graph['on_success'])
        self.on_failure_3d = _freeze(graph['on_failure'])

        # --- 4D ---
        self.has_4d = self.settings['radius_sq_4d'] is not None
        if self.has_4d:
            starts, offsets_4d, deltas_4d = _build_lookup_4d(self.settings['radius_sq_4d'])
            self.starts_4d = _freeze(starts)
            self.offsets_4d = _freeze(offsets_4d)
            self.deltas_4d = _freeze(deltas_4d)
            lengths = np.diff(starts)
            logger.debug(
                f"4D subcell lists for '{profile}': {len(lengths)} classes, "
                f"{int(lengths.min())}-{int(lengths.max())} candidates each."
            )
        else:
            self.starts_4d = self.offsets_4d = self.deltas_4d = None

        logger.debug(
            f"Lattice geometry '{profile}' built: {len(self.offsets_2d)} 2D classes, "
            f"{self.nodes_per_octant} 3D nodes per octant."
        )

    def subcell_candidates(self, class_index: int) -> list:
        """Offsets listed for a 4D subcell class, in evaluation order."""
        start, end = self.starts_4d[class_index], self.starts_4d[class_index + 1]
        return [tuple(row) for row in self.offsets_4d[start:end].tolist()]


_GEOMETRIES = {}
_GEOMETRY_LOCK = threading.Lock()


def get_geometry(profile: str) -> LatticeGeometry:
    """Returns the process-wide geometry for a profile, building it on first use."""
    with _GEOMETRY_LOCK:
        geometry = _GEOMETRIES.get(profile)
        if geometry is None:
            geometry = LatticeGeometry(profile)
            _GEOMETRIES[profile] = geometry
    return geometry


# --- Reference Walks & Audits ---
# Plain-Python views of the same tables, used to validate them. Never on the
# evaluation hot path.

def contributors_3d(geometry: LatticeGeometry, xri: float, yri: float, zri: float) -> list:
    """
    Walks the decision graph for a point in the unit cube and returns the
    (cell, half_lattice) keys of visited nodes that are strictly inside the kernel.
    """
    radius_sq = geometry.settings['radius_sq_3d']
    found = []
    node = int(octant_index_3d(xri, yri, zri)) * geometry.nodes_per_octant
    while node >= 0:
        dx, dy, dz = np.array((xri, yri, zri)) + geometry.deltas_3d[node]
        attn = radius_sq - dx * dx - dy * dy - dz * dz
        if attn < 0:
            node = int(geometry.on_failure_3d[node])
            continue
        if attn > 0:
            found.append((tuple(geometry.cells_3d[node].tolist()), int(geometry.half_lattices_3d[node])))
        node = int(geometry.on_success_3d[node])
    return found


def _bcc_points_in_range(point, radius_sq, reach=range(-1, 3)):
    found = set()
    for half_lattice in (0, 1):
        for cell in itertools.product(reach, repeat=3):
            d = np.asarray(point) - np.asarray(cell) + 0.5 * half_lattice
            if radius_sq - float(d @ d) > 0:
                found.add((cell, half_lattice))
    return found


def audit_octant_3d(geometry: LatticeGeometry, octant: int, points: np.ndarray) -> list:
    """
    Checks one octant's decision graph against brute force.

    Completeness: for every sample point, the walk must find exactly the BCC
    points strictly inside the kernel. Minimality: every node of the octant
    must be within kernel range of some point of the octant's box.
    """
    defects = []
    radius_sq = geometry.settings['radius_sq_3d']
    for point in points:
        walked = set(contributors_3d(geometry, *point))
        expected = _bcc_points_in_range(point, radius_sq)
        if walked != expected:
            defects.append(
                f"3D octant {octant} at {tuple(np.round(point, 6))}: "
                f"missing {sorted(expected - walked)}, spurious {sorted(walked - expected)}"
            )

    lo = np.array([((octant >> axis) & 1) * 0.5 for axis in range(3)])
    hi = lo + 0.5
    base = octant * geometry.nodes_per_octant
    for node in range(base, base + geometry.nodes_per_octant):
        position = -geometry.deltas_3d[node]
        gap = position - np.clip(position, lo, hi)
        if float(gap @ gap) >= radius_sq:
            defects.append(f"3D octant {octant}: node {node - base} can never be in range")
    return defects


def _unit_grid_2d(steps=_CLASS_GRID_STEPS):
    ticks = (np.arange(steps) + 0.5) / steps
    xs, ys = np.meshgrid(ticks, ticks, indexing='ij')
    return np.column_stack((xs.ravel(), ys.ravel()))


def audit_class_2d(geometry: LatticeGeometry, class_index: int, points: np.ndarray) -> list:
    """
    Checks one 2D class against brute force.

    Completeness: every simplex vertex in range of a sample point is listed.
    Minimality: every listed vertex is in range of some point of a fixed grid
    over the class's region. Classes whose region is empty are not checked
    for minimality.
    """
    defects = []
    radius_sq = geometry.settings['radius_sq_2d']
    listed = {tuple(p) for p in geometry.offsets_2d[class_index].tolist()}
    for xsi, ysi in points:
        ssi = (xsi + ysi) * DEFAULTS.UNSKEW_2D
        for cell in itertools.product(range(-1, 3), repeat=2):
            dx, dy = displacement_2d(*cell)
            dx, dy = xsi + ssi + dx, ysi + ssi + dy
            if radius_sq - dx * dx - dy * dy > 0 and cell not in listed:
                defects.append(f"2D class {class_index} at ({xsi:.6f}, {ysi:.6f}): missing {cell}")

    grid = _unit_grid_2d()
    inside = np.array([class_index_2d(geometry.wide, x, y) == class_index for x, y in grid], dtype=bool)
    region = grid[inside]
    if len(region) == 0:
        return defects
    unskewed = region + (region.sum(axis=1, keepdims=True) * DEFAULTS.UNSKEW_2D)
    for cell, delta in zip(geometry.offsets_2d[class_index].tolist(), geometry.deltas_2d[class_index]):
        d = unskewed + delta
        if not np.any(radius_sq - (d * d).sum(axis=1) > 0):
            defects.append(f"2D class {class_index}: vertex {tuple(cell)} can never be in range")
    return defects


def audit_subcell_4d(geometry: LatticeGeometry, class_index: int, points: np.ndarray,
                     reach=range(-2, 4)) -> list:
    """
    Checks one 4D subcell list against brute force over a generous box of
    lattice offsets. Every offset strictly inside the kernel of a sample point
    must be listed.
    """
    defects = []
    radius_sq = geometry.settings['radius_sq_4d']
    listed = set(geometry.subcell_candidates(class_index))

    cells = np.array(list(itertools.product(reach, repeat=4)), dtype=np.float64)
    v = points[:, None, :] - cells[None, :, :]
    d = v + DEFAULTS.UNSKEW_4D * v.sum(axis=-1, keepdims=True)
    inside = radius_sq - (d * d).sum(axis=-1) > 0

    for cell_index in np.flatnonzero(inside.any(axis=0)):
        cell = tuple(int(c) for c in cells[cell_index])
        if cell not in listed:
            defects.append(f"4D class {class_index}: missing offset {cell}")
    return defects


def audit_minimality_4d(geometry: LatticeGeometry) -> list:
    """
    Checks that every listed 4D candidate reaches into its subcell, by
    re-measuring the closest approach with the plain unskew transform.
    """
    defects = []
    radius_sq = geometry.settings['radius_sq_4d']
    _, witness = closest_approach_4d()
    divisions = DEFAULTS.SUBCELL_DIVISIONS
    for class_index in range(256):
        quadrants = np.array([(class_index >> (_SUBCELL_BITS * axis)) & _SUBCELL_MASK for axis in range(4)])
        lo, hi = quadrants / divisions, (quadrants + 1) / divisions
        for offset in geometry.subcell_candidates(class_index):
            code = sum((c - DEFAULTS.SUBCELL_OFFSET_MIN) << (_SUBCELL_BITS * axis) for axis, c in enumerate(offset))
            point = witness[class_index, code]
            if np.any(point < lo - 1e-12) or np.any(point > hi + 1e-12):
                defects.append(f"4D class {class_index}: witness for {offset} lies outside the subcell")
                continue
            v = point - np.asarray(offset)
            d = v + DEFAULTS.UNSKEW_4D * v.sum()
            if float(d @ d) >= radius_sq:
                defects.append(f"4D class {class_index}: offset {offset} never reaches the subcell")
    return defects


def sample_box(rng: np.random.Generator, lo, hi, count: int) -> np.ndarray:
    """Uniform samples strictly inside an axis-aligned box."""
    lo = np.asarray(lo, dtype=np.float64)
    hi = np.asarray(hi, dtype=np.float64)
    return lo + (hi - lo) * rng.uniform(1e-9, 1.0 - 1e-9, size=(count, len(lo)))


def region_count(geometry: LatticeGeometry) -> int:
    """Number of regions audit_regions() visits for a geometry."""
    count = len(geometry.offsets_2d) + 8
    if geometry.has_4d:
        count += 256 + 1
    return count


def audit_regions(geometry: LatticeGeometry, samples: int = 64, seed: int = 0):
    """
    Audits a geometry one region at a time, yielding (region, defects) pairs:
    each 2D class, each 3D octant, each 4D subcell class, then the 4D
    minimality check. Sample points are drawn from a seeded generator.
    """
    rng = np.random.default_rng(seed)

    unit_points = sample_box(rng, (0.0, 0.0), (1.0, 1.0), samples * len(geometry.offsets_2d))
    for class_index in range(len(geometry.offsets_2d)):
        mask = np.array([class_index_2d(geometry.wide, x, y) == class_index for x, y in unit_points])
        yield f"2D class {class_index}", audit_class_2d(geometry, class_index, unit_points[mask])

    for octant in range(8):
        lo = [((octant >> axis) & 1) * 0.5 for axis in range(3)]
        points = sample_box(rng, lo, [c + 0.5 for c in lo], samples)
        yield f"3D octant {octant}", audit_octant_3d(geometry, octant, points)

    if geometry.has_4d:
        divisions = DEFAULTS.SUBCELL_DIVISIONS
        for class_index in range(256):
            lo = [((class_index >> (_SUBCELL_BITS * axis)) & _SUBCELL_MASK) / divisions for axis in range(4)]
            points = sample_box(rng, lo, [c + 1.0 / divisions for c in lo], samples)
            yield f"4D class {class_index}", audit_subcell_4d(geometry, class_index, points)
        yield "4D minimality", audit_minimality_4d(geometry)


def audit_lattice(geometry: LatticeGeometry, samples: int = 64, seed: int = 0) -> list:
    """Runs every audit for a geometry. An empty result means the tables are sound."""
    defects = []
    for _, region_defects in audit_regions(geometry, samples, seed):
        defects += region_defects
    return defects
