# simplex_field/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the noise
engine. The lattice constants are part of the noise function itself: changing
any of them changes every value the engine produces for every seed.

DO NOT MODIFY THIS FILE FOR A SPECIFIC PROJECT.
Instead, pass a seed and profile (or a configuration dictionary) to the
generator factory in simplex_field.generator.
================================================================================
"""

# --- Seeding ---
DEFAULT_SEED = 0
DEFAULT_PROFILE = "wide"

# The seed is consumed as a signed 64-bit integer.
SEED_BITS = 64

# Linear congruential step used by the seeded shuffle. These must be reproduced
# bit-for-bit; every published value for a given seed depends on them.
LCG_MULTIPLIER = 6364136223846793005
LCG_INCREMENT = 1442695040888963407
# Added to the advanced seed before it is reduced into the shuffle range.
LCG_OUTPUT_OFFSET = 31

# --- Permutation Table ---
# Must be a power of two so that a bitwise AND wraps lattice coordinates.
PSIZE = 2048
PMASK = PSIZE - 1

# Offset added to every permutation index of the second cubic half-lattice in 3D.
BCC_HALF_LATTICE_OFFSET = 1024

# --- Skew / Unskew Constants ---
SKEW_2D = 0.366025403784439          # (sqrt(3) - 1) / 2
UNSKEW_2D = -0.211324865405187       # (1 / sqrt(3) - 1) / 2
SKEW_4D = 0.309016994374947          # (sqrt(5) - 1) / 4
UNSKEW_4D = -0.138196601125011       # (1 / sqrt(5) - 1) / 4

# 2D with Y pointing down the main diagonal (skew and rotation baked into one).
ROTATE_2D_X = 0.7071067811865476
ROTATE_2D_Y = 1.224744871380249

# 3D orthonormal rotations (not skews).
ROTATE_3D_CLASSIC = 2.0 / 3.0
ROTATE_3D_AXIS = 0.577350269189626

# 4D plane-pair orientations.
ROTATE_4D_PAIR_S_NEAR = -0.28522513987434876941
ROTATE_4D_PAIR_S_FAR = 0.83897065470611435718
ROTATE_4D_PAIR_T_NEAR = 0.21939749883706435719
ROTATE_4D_PAIR_T_FAR = -0.48214856493302476942
ROTATE_4D_W = 1.118033988749894

# --- 4D Subcell Partitioning ---
# Each skewed axis is split into this many slices per unit cell, giving
# SUBCELL_DIVISIONS ** 4 subcell classes.
SUBCELL_DIVISIONS = 4
# Candidate offsets are searched in [SUBCELL_OFFSET_MIN, SUBCELL_OFFSET_MIN + 3]
# on every axis and packed into two bits each.
SUBCELL_OFFSET_MIN = -1
# Candidates whose closest approach to a subcell only grazes the kernel
# boundary (within this tolerance) can never contribute and are left out.
KERNEL_GRAZE_TOLERANCE = 1e-9

# --- Kernel Profiles ---
# 'wide': larger kernels, more overlapping contributions, smoother field.
# 'narrow': smaller kernels, fewer contributions, cheaper evaluation.
# The two are different noise functions and do not agree numerically.
# The N* values divide the gradient sets so that outputs land in roughly [-1, 1].
KERNEL_PROFILES = {
    "wide": {
        "radius_sq_2d": 2.0 / 3.0,
        "radius_sq_3d": 0.75,
        "radius_sq_4d": 0.8,
        "n2": 0.05481866495625118,
        "n3": 0.2781926117527186,
        "n4": 0.11127401889945551,
    },
    "narrow": {
        "radius_sq_2d": 0.5,
        "radius_sq_3d": 0.5,
        "radius_sq_4d": None,  # No 4D evaluator on this profile.
        "n2": 0.01001634121365712,
        "n3": 0.030485933181293584,
        "n4": None,
    },
}

# --- Orientation Names (array evaluation) ---
ORIENTATIONS_2D = ("standard", "x_before_y")
ORIENTATIONS_3D = ("classic", "xy_before_z", "xz_before_y")
ORIENTATIONS_4D = ("classic", "xy_before_zw", "xz_before_yw", "xyz_before_w")
