# simplex_field/noise.py

"""
================================================================================
NOISE EVALUATION KERNELS
================================================================================
This module provides the Numba-compiled evaluators for 2D, 3D and 4D gradient
noise. It is designed to be a pure, stateless utility: every table it reads is
passed in by the caller.

Data Contract:
---------------
- Inputs:
    - perm: The seeded permutation table (int64 array of length PSIZE).
    - grads: The matching gradient cache (float64 array of shape (PSIZE, d)).
    - Lattice tables from simplex_field.lattice.LatticeGeometry.
    - Scalar coordinates, or flat float64 arrays of coordinates for the
      *_grid functions.
- Outputs:
    - A float (or a float64 array) of noise values, roughly in [-1, 1].
- Side Effects: None.
- Invariants: Identical inputs always give bit-identical outputs. Any real
  input yields a float. NaN propagates, and an infinite lattice coordinate
  gives NaN.
================================================================================
"""

import math

import numpy as np
from numba import njit

from . import config as DEFAULTS
from .lattice import fast_floor, class_index_2d, octant_index_3d, subcell_index_4d

_PMASK = DEFAULTS.PMASK

_SKEW_2D = DEFAULTS.SKEW_2D
_UNSKEW_2D = DEFAULTS.UNSKEW_2D
_ROTATE_2D_X = DEFAULTS.ROTATE_2D_X
_ROTATE_2D_Y = DEFAULTS.ROTATE_2D_Y
_ROTATE_3D_CLASSIC = DEFAULTS.ROTATE_3D_CLASSIC
_ROTATE_3D_AXIS = DEFAULTS.ROTATE_3D_AXIS
_SKEW_4D = DEFAULTS.SKEW_4D
_UNSKEW_4D = DEFAULTS.UNSKEW_4D
_S_NEAR = DEFAULTS.ROTATE_4D_PAIR_S_NEAR
_S_FAR = DEFAULTS.ROTATE_4D_PAIR_S_FAR
_T_NEAR = DEFAULTS.ROTATE_4D_PAIR_T_NEAR
_T_FAR = DEFAULTS.ROTATE_4D_PAIR_T_FAR
_ROTATE_4D_W = DEFAULTS.ROTATE_4D_W


# --- Coordinate Front-Ends ---

@njit
def skew2_standard(x, y):
    "Skew onto the 2D simplex lattice."
    s = _SKEW_2D * (x + y)
    return x + s, y + s


@njit
def skew2_x_before_y(x, y):
    "Skew and rotation in one, with Y pointing down the main diagonal."
    xx = x * _ROTATE_2D_X
    yy = y * _ROTATE_2D_Y
    return yy + xx, yy - xx


@njit
def rotate3_classic(x, y, z):
    "Orthonormal rotation that gives the expected look on cardinal planar slices."
    r = _ROTATE_3D_CLASSIC * (x + y + z)
    return r - x, r - y, r - z


@njit
def rotate3_xy_before_z(x, y, z):
    "Orthonormal rotation making X and Y triangular like 2D; Z is the odd axis."
    xy = x + y
    s2 = xy * _UNSKEW_2D
    zz = z * _ROTATE_3D_AXIS
    return x + s2 - zz, y + s2 - zz, xy * _ROTATE_3D_AXIS + zz


@njit
def rotate3_xz_before_y(x, y, z):
    "Orthonormal rotation making X and Z triangular like 2D; Y is the odd axis."
    xz = x + z
    s2 = xz * _UNSKEW_2D
    yy = y * _ROTATE_3D_AXIS
    return x + s2 - yy, xz * _ROTATE_3D_AXIS + yy, z + s2 - yy


@njit
def skew4_classic(x, y, z, w):
    "Skew onto the 4D simplex lattice."
    s = _SKEW_4D * (x + y + z + w)
    return x + s, y + s, z + s, w + s


@njit
def skew4_xy_before_zw(x, y, z, w):
    "XY and ZW form orthogonal triangular planes."
    s2 = (x + y) * _S_NEAR + (z + w) * _S_FAR
    t2 = (z + w) * _T_NEAR + (x + y) * _T_FAR
    return x + s2, y + s2, z + t2, w + t2


@njit
def skew4_xz_before_yw(x, y, z, w):
    "XZ and YW form orthogonal triangular planes."
    s2 = (x + z) * _S_NEAR + (y + w) * _S_FAR
    t2 = (y + w) * _T_NEAR + (x + z) * _T_FAR
    return x + s2, y + t2, z + s2, w + t2


@njit
def skew4_xyz_before_w(x, y, z, w):
    "XYZ oriented like the classic 3D rotation, W as the extra degree of freedom."
    xyz = x + y + z
    ww = w * _ROTATE_4D_W
    s2 = xyz / -6.0 + ww
    return x + s2, y + s2, z + s2, -0.5 * xyz + ww


# --- Base Evaluators ---

@njit
def noise2_base(perm, grads, offsets, deltas, wide, radius_sq, xs, ys):
    """
    2D simplex noise on skewed coordinates.
    Walks the 3 or 4 candidate vertices of the point's orientation class.
    """
    if math.isinf(xs) or math.isinf(ys):
        return math.nan

    value = 0.0

    xsb = fast_floor(xs)
    ysb = fast_floor(ys)
    xsi = xs - xsb
    ysi = ys - ysb

    index = class_index_2d(wide, xsi, ysi)
    ssi = (xsi + ysi) * _UNSKEW_2D
    xi = xsi + ssi
    yi = ysi + ssi

    for i in range(offsets.shape[1]):
        dx = xi + deltas[index, i, 0]
        dy = yi + deltas[index, i, 1]
        attn = radius_sq - dx * dx - dy * dy
        if attn <= 0:
            continue

        pxm = (xsb + offsets[index, i, 0]) & _PMASK
        pym = (ysb + offsets[index, i, 1]) & _PMASK
        g = perm[pxm] ^ pym
        extrapolation = grads[g, 0] * dx + grads[g, 1] * dy

        attn *= attn
        value += attn * attn * extrapolation

    return value


@njit
def noise3_bcc(perm, grads, offsets, deltas, on_success, on_failure, nodes_per_octant, radius_sq, xr, yr, zr):
    """
    3D noise on the body-centered-cubic lattice, for rotated (not skewed)
    coordinates. Follows the octant's decision graph until a link is -1.
    """
    # Infinite coordinates have no fractional offset to measure from.
    if math.isinf(xr) or math.isinf(yr) or math.isinf(zr):
        return math.nan

    xrb = fast_floor(xr)
    yrb = fast_floor(yr)
    zrb = fast_floor(zr)
    xri = xr - xrb
    yri = yr - yrb
    zri = zr - zrb

    value = 0.0
    c = octant_index_3d(xri, yri, zri) * nodes_per_octant
    while c >= 0:
        dxr = xri + deltas[c, 0]
        dyr = yri + deltas[c, 1]
        dzr = zri + deltas[c, 2]
        attn = radius_sq - dxr * dxr - dyr * dyr - dzr * dzr
        if attn < 0:
            c = on_failure[c]
            continue

        pxm = (xrb + offsets[c, 0]) & _PMASK
        pym = (yrb + offsets[c, 1]) & _PMASK
        pzm = (zrb + offsets[c, 2]) & _PMASK
        g = perm[perm[pxm] ^ pym] ^ pzm
        extrapolation = grads[g, 0] * dxr + grads[g, 1] * dyr + grads[g, 2] * dzr

        attn *= attn
        value += attn * attn * extrapolation
        c = on_success[c]

    return value


@njit
def noise4_base(perm, grads, starts, offsets, deltas, radius_sq, xs, ys, zs, ws):
    """
    4D simplex noise on skewed coordinates.
    Scans the full candidate list of the point's subcell class.
    """
    if math.isinf(xs) or math.isinf(ys) or math.isinf(zs) or math.isinf(ws):
        return math.nan

    value = 0.0

    xsb = fast_floor(xs)
    ysb = fast_floor(ys)
    zsb = fast_floor(zs)
    wsb = fast_floor(ws)
    xsi = xs - xsb
    ysi = ys - ysb
    zsi = zs - zsb
    wsi = ws - wsb

    ssi = (xsi + ysi + zsi + wsi) * _UNSKEW_4D
    xi = xsi + ssi
    yi = ysi + ssi
    zi = zsi + ssi
    wi = wsi + ssi

    index = subcell_index_4d(xs, ys, zs, ws)
    for c in range(starts[index], starts[index + 1]):
        dx = xi + deltas[c, 0]
        dy = yi + deltas[c, 1]
        dz = zi + deltas[c, 2]
        dw = wi + deltas[c, 3]
        attn = radius_sq - dx * dx - dy * dy - dz * dz - dw * dw
        if attn <= 0:
            continue

        attn *= attn
        pxm = (xsb + offsets[c, 0]) & _PMASK
        pym = (ysb + offsets[c, 1]) & _PMASK
        pzm = (zsb + offsets[c, 2]) & _PMASK
        pwm = (wsb + offsets[c, 3]) & _PMASK
        g = perm[perm[perm[pxm] ^ pym] ^ pzm] ^ pwm
        extrapolation = grads[g, 0] * dx + grads[g, 1] * dy + grads[g, 2] * dz + grads[g, 3] * dw

        value += attn * attn * extrapolation

    return value


# --- Oriented Entry Points ---
# Orientation codes are indices into config.ORIENTATIONS_2D/3D/4D.

@njit
def noise2_point(perm, grads, offsets, deltas, wide, radius_sq, orientation, x, y):
    if orientation == 0:
        xs, ys = skew2_standard(x, y)
    else:
        xs, ys = skew2_x_before_y(x, y)
    return noise2_base(perm, grads, offsets, deltas, wide, radius_sq, xs, ys)


@njit
def noise3_point(perm, grads, offsets, deltas, on_success, on_failure, nodes_per_octant, radius_sq,
                 orientation, x, y, z):
    if orientation == 0:
        xr, yr, zr = rotate3_classic(x, y, z)
    elif orientation == 1:
        xr, yr, zr = rotate3_xy_before_z(x, y, z)
    else:
        xr, yr, zr = rotate3_xz_before_y(x, y, z)
    return noise3_bcc(perm, grads, offsets, deltas, on_success, on_failure, nodes_per_octant, radius_sq,
                      xr, yr, zr)


@njit
def noise4_point(perm, grads, starts, offsets, deltas, radius_sq, orientation, x, y, z, w):
    if orientation == 0:
        xs, ys, zs, ws = skew4_classic(x, y, z, w)
    elif orientation == 1:
        xs, ys, zs, ws = skew4_xy_before_zw(x, y, z, w)
    elif orientation == 2:
        xs, ys, zs, ws = skew4_xz_before_yw(x, y, z, w)
    else:
        xs, ys, zs, ws = skew4_xyz_before_w(x, y, z, w)
    return noise4_base(perm, grads, starts, offsets, deltas, radius_sq, xs, ys, zs, ws)


# --- Array Samplers ---
# Explicit loops over flat coordinate arrays, compiled by Numba.

@njit
def noise2_grid(perm, grads, offsets, deltas, wide, radius_sq, orientation, x, y):
    out = np.empty(x.size)
    for i in range(x.size):
        out[i] = noise2_point(perm, grads, offsets, deltas, wide, radius_sq, orientation, x[i], y[i])
    return out


@njit
def noise3_grid(perm, grads, offsets, deltas, on_success, on_failure, nodes_per_octant, radius_sq,
                orientation, x, y, z):
    out = np.empty(x.size)
    for i in range(x.size):
        out[i] = noise3_point(perm, grads, offsets, deltas, on_success, on_failure, nodes_per_octant,
                              radius_sq, orientation, x[i], y[i], z[i])
    return out


@njit
def noise4_grid(perm, grads, starts, offsets, deltas, radius_sq, orientation, x, y, z, w):
    out = np.empty(x.size)
    for i in range(x.size):
        out[i] = noise4_point(perm, grads, starts, offsets, deltas, radius_sq, orientation,
                              x[i], y[i], z[i], w[i])
    return out
