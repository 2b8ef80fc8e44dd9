# simplex_field/gradients.py

"""
================================================================================
GRADIENT SETS
================================================================================
This module holds the fixed gradient direction sets for 2D, 3D and 4D noise
and turns them into the repeated, normalized tables that the per-seed gradient
caches are filled from.

Data Contract:
---------------
- Inputs:
    - A dimension normalization constant (N2, N3 or N4) from the kernel profile.
- Outputs:
    - float64 arrays of shape (PSIZE, d): the gradient set divided by the
      normalization constant and repeated cyclically to PSIZE rows.
- Side Effects: None.
- Invariants: Every row of a repeated table is a row of the fixed set (scaled).
  The raw sets are never modified.
================================================================================
"""

import functools

import numpy as np

from . import config as DEFAULTS

# 24 directions evenly spaced around the circle, offset from the axes.
GRADIENTS_2D = np.array([
    (0.130526192220052, 0.99144486137381),
    (0.38268343236509, 0.923879532511287),
    (0.608761429008721, 0.793353340291235),
    (0.793353340291235, 0.608761429008721),
    (0.923879532511287, 0.38268343236509),
    (0.99144486137381, 0.130526192220051),
    (0.99144486137381, -0.130526192220051),
    (0.923879532511287, -0.38268343236509),
    (0.793353340291235, -0.60876142900872),
    (0.608761429008721, -0.793353340291235),
    (0.38268343236509, -0.923879532511287),
    (0.130526192220052, -0.99144486137381),
    (-0.130526192220052, -0.99144486137381),
    (-0.38268343236509, -0.923879532511287),
    (-0.608761429008721, -0.793353340291235),
    (-0.793353340291235, -0.608761429008721),
    (-0.923879532511287, -0.38268343236509),
    (-0.99144486137381, -0.130526192220052),
    (-0.99144486137381, 0.130526192220051),
    (-0.923879532511287, 0.38268343236509),
    (-0.793353340291235, 0.608761429008721),
    (-0.608761429008721, 0.793353340291235),
    (-0.38268343236509, 0.923879532511287),
    (-0.130526192220052, 0.99144486137381),
], dtype=np.float64)

# 48 directions: vertices of a rhombicuboctahedron-like arrangement, all of
# equal length, chosen to sit well on the rotated BCC lattice.
GRADIENTS_3D = np.array([
    (-2.22474487139, -2.22474487139, -1.0),
    (-2.22474487139, -2.22474487139, 1.0),
    (-3.0862664687972017, -1.1721513422464978, 0.0),
    (-1.1721513422464978, -3.0862664687972017, 0.0),
    (-2.22474487139, -1.0, -2.22474487139),
    (-2.22474487139, 1.0, -2.22474487139),
    (-1.1721513422464978, 0.0, -3.0862664687972017),
    (-3.0862664687972017, 0.0, -1.1721513422464978),
    (-2.22474487139, -1.0, 2.22474487139),
    (-2.22474487139, 1.0, 2.22474487139),
    (-3.0862664687972017, 0.0, 1.1721513422464978),
    (-1.1721513422464978, 0.0, 3.0862664687972017),
    (-2.22474487139, 2.22474487139, -1.0),
    (-2.22474487139, 2.22474487139, 1.0),
    (-1.1721513422464978, 3.0862664687972017, 0.0),
    (-3.0862664687972017, 1.1721513422464978, 0.0),
    (-1.0, -2.22474487139, -2.22474487139),
    (1.0, -2.22474487139, -2.22474487139),
    (0.0, -3.0862664687972017, -1.1721513422464978),
    (0.0, -1.1721513422464978, -3.0862664687972017),
    (-1.0, -2.22474487139, 2.22474487139),
    (1.0, -2.22474487139, 2.22474487139),
    (0.0, -1.1721513422464978, 3.0862664687972017),
    (0.0, -3.0862664687972017, 1.1721513422464978),
    (-1.0, 2.22474487139, -2.22474487139),
    (1.0, 2.22474487139, -2.22474487139),
    (0.0, 1.1721513422464978, -3.0862664687972017),
    (0.0, 3.0862664687972017, -1.1721513422464978),
    (-1.0, 2.22474487139, 2.22474487139),
    (1.0, 2.22474487139, 2.22474487139),
    (0.0, 3.0862664687972017, 1.1721513422464978),
    (0.0, 1.1721513422464978, 3.0862664687972017),
    (2.22474487139, -2.22474487139, -1.0),
    (2.22474487139, -2.22474487139, 1.0),
    (1.1721513422464978, -3.0862664687972017, 0.0),
    (3.0862664687972017, -1.1721513422464978, 0.0),
    (2.22474487139, -1.0, -2.22474487139),
    (2.22474487139, 1.0, -2.22474487139),
    (3.0862664687972017, 0.0, -1.1721513422464978),
    (1.1721513422464978, 0.0, -3.0862664687972017),
    (2.22474487139, -1.0, 2.22474487139),
    (2.22474487139, 1.0, 2.22474487139),
    (1.1721513422464978, 0.0, 3.0862664687972017),
    (3.0862664687972017, 0.0, 1.1721513422464978),
    (2.22474487139, 2.22474487139, -1.0),
    (2.22474487139, 2.22474487139, 1.0),
    (3.0862664687972017, 1.1721513422464978, 0.0),
    (1.1721513422464978, 3.0862664687972017, 0.0),
], dtype=np.float64)

# 160 unit directions for the 4D lattice.
GRADIENTS_4D = np.array([
    (-0.753341017856078, -0.37968289875261624, -0.37968289875261624, -0.37968289875261624),
    (-0.7821684431180708, -0.4321472685365301, -0.4321472685365301, 0.12128480194602098),
    (-0.7821684431180708, -0.4321472685365301, 0.12128480194602098, -0.4321472685365301),
    (-0.7821684431180708, 0.12128480194602098, -0.4321472685365301, -0.4321472685365301),
    (-0.8586508742123365, -0.508629699630796, 0.044802370851755174, 0.044802370851755174),
    (-0.8586508742123365, 0.044802370851755174, -0.508629699630796, 0.044802370851755174),
    (-0.8586508742123365, 0.044802370851755174, 0.044802370851755174, -0.508629699630796),
    (-0.9982828964265062, -0.03381941603233842, -0.03381941603233842, -0.03381941603233842),
    (-0.37968289875261624, -0.753341017856078, -0.37968289875261624, -0.37968289875261624),
    (-0.4321472685365301, -0.7821684431180708, -0.4321472685365301, 0.12128480194602098),
    (-0.4321472685365301, -0.7821684431180708, 0.12128480194602098, -0.4321472685365301),
    (0.12128480194602098, -0.7821684431180708, -0.4321472685365301, -0.4321472685365301),
    (-0.508629699630796, -0.8586508742123365, 0.044802370851755174, 0.044802370851755174),
    (0.044802370851755174, -0.8586508742123365, -0.508629699630796, 0.044802370851755174),
    (0.044802370851755174, -0.8586508742123365, 0.044802370851755174, -0.508629699630796),
    (-0.03381941603233842, -0.9982828964265062, -0.03381941603233842, -0.03381941603233842),
    (-0.37968289875261624, -0.37968289875261624, -0.753341017856078, -0.37968289875261624),
    (-0.4321472685365301, -0.4321472685365301, -0.7821684431180708, 0.12128480194602098),
    (-0.4321472685365301, 0.12128480194602098, -0.7821684431180708, -0.4321472685365301),
    (0.12128480194602098, -0.4321472685365301, -0.7821684431180708, -0.4321472685365301),
    (-0.508629699630796, 0.044802370851755174, -0.8586508742123365, 0.044802370851755174),
    (0.044802370851755174, -0.508629699630796, -0.8586508742123365, 0.044802370851755174),
    (0.044802370851755174, 0.044802370851755174, -0.8586508742123365, -0.508629699630796),
    (-0.03381941603233842, -0.03381941603233842, -0.9982828964265062, -0.03381941603233842),
    (-0.37968289875261624, -0.37968289875261624, -0.37968289875261624, -0.753341017856078),
    (-0.4321472685365301, -0.4321472685365301, 0.12128480194602098, -0.7821684431180708),
    (-0.4321472685365301, 0.12128480194602098, -0.4321472685365301, -0.7821684431180708),
    (0.12128480194602098, -0.4321472685365301, -0.4321472685365301, -0.7821684431180708),
    (-0.508629699630796, 0.044802370851755174, 0.044802370851755174, -0.8586508742123365),
    (0.044802370851755174, -0.508629699630796, 0.044802370851755174, -0.8586508742123365),
    (0.044802370851755174, 0.044802370851755174, -0.508629699630796, -0.8586508742123365),
    (-0.03381941603233842, -0.03381941603233842, -0.03381941603233842, -0.9982828964265062),
    (-0.6740059517812944, -0.3239847771997537, -0.3239847771997537, 0.5794684678643381),
    (-0.7504883828755602, -0.4004672082940195, 0.15296486218853164, 0.5029860367700724),
    (-0.7504883828755602, 0.15296486218853164, -0.4004672082940195, 0.5029860367700724),
    (-0.8828161875373585, 0.08164729285680945, 0.08164729285680945, 0.4553054119602712),
    (-0.4553054119602712, -0.08164729285680945, -0.08164729285680945, 0.8828161875373585),
    (-0.5029860367700724, -0.15296486218853164, 0.4004672082940195, 0.7504883828755602),
    (-0.5029860367700724, 0.4004672082940195, -0.15296486218853164, 0.7504883828755602),
    (-0.5794684678643381, 0.3239847771997537, 0.3239847771997537, 0.6740059517812944),
    (-0.3239847771997537, -0.6740059517812944, -0.3239847771997537, 0.5794684678643381),
    (-0.4004672082940195, -0.7504883828755602, 0.15296486218853164, 0.5029860367700724),
    (0.15296486218853164, -0.7504883828755602, -0.4004672082940195, 0.5029860367700724),
    (0.08164729285680945, -0.8828161875373585, 0.08164729285680945, 0.4553054119602712),
    (-0.08164729285680945, -0.4553054119602712, -0.08164729285680945, 0.8828161875373585),
    (-0.15296486218853164, -0.5029860367700724, 0.4004672082940195, 0.7504883828755602),
    (0.4004672082940195, -0.5029860367700724, -0.15296486218853164, 0.7504883828755602),
    (0.3239847771997537, -0.5794684678643381, 0.3239847771997537, 0.6740059517812944),
    (-0.3239847771997537, -0.3239847771997537, -0.6740059517812944, 0.5794684678643381),
    (-0.4004672082940195, 0.15296486218853164, -0.7504883828755602, 0.5029860367700724),
    (0.15296486218853164, -0.4004672082940195, -0.7504883828755602, 0.5029860367700724),
    (0.08164729285680945, 0.08164729285680945, -0.8828161875373585, 0.4553054119602712),
    (-0.08164729285680945, -0.08164729285680945, -0.4553054119602712, 0.8828161875373585),
    (-0.15296486218853164, 0.4004672082940195, -0.5029860367700724, 0.7504883828755602),
    (0.4004672082940195, -0.15296486218853164, -0.5029860367700724, 0.7504883828755602),
    (0.3239847771997537, 0.3239847771997537, -0.5794684678643381, 0.6740059517812944),
    (-0.6740059517812944, -0.3239847771997537, 0.5794684678643381, -0.3239847771997537),
    (-0.7504883828755602, -0.4004672082940195, 0.5029860367700724, 0.15296486218853164),
    (-0.7504883828755602, 0.15296486218853164, 0.5029860367700724, -0.4004672082940195),
    (-0.8828161875373585, 0.08164729285680945, 0.4553054119602712, 0.08164729285680945),
    (-0.4553054119602712, -0.08164729285680945, 0.8828161875373585, -0.08164729285680945),
    (-0.5029860367700724, -0.15296486218853164, 0.7504883828755602, 0.4004672082940195),
    (-0.5029860367700724, 0.4004672082940195, 0.7504883828755602, -0.15296486218853164),
    (-0.5794684678643381, 0.3239847771997537, 0.6740059517812944, 0.3239847771997537),
    (-0.3239847771997537, -0.6740059517812944, 0.5794684678643381, -0.3239847771997537),
    (-0.4004672082940195, -0.7504883828755602, 0.5029860367700724, 0.15296486218853164),
    (0.15296486218853164, -0.7504883828755602, 0.5029860367700724, -0.4004672082940195),
    (0.08164729285680945, -0.8828161875373585, 0.4553054119602712, 0.08164729285680945),
    (-0.08164729285680945, -0.4553054119602712, 0.8828161875373585, -0.08164729285680945),
    (-0.15296486218853164, -0.5029860367700724, 0.7504883828755602, 0.4004672082940195),
    (0.4004672082940195, -0.5029860367700724, 0.7504883828755602, -0.15296486218853164),
    (0.3239847771997537, -0.5794684678643381, 0.6740059517812944, 0.3239847771997537),
    (-0.3239847771997537, -0.3239847771997537, 0.5794684678643381, -0.6740059517812944),
    (-0.4004672082940195, 0.15296486218853164, 0.5029860367700724, -0.7504883828755602),
    (0.15296486218853164, -0.4004672082940195, 0.5029860367700724, -0.7504883828755602),
    (0.08164729285680945, 0.08164729285680945, 0.4553054119602712, -0.8828161875373585),
    (-0.08164729285680945, -0.08164729285680945, 0.8828161875373585, -0.4553054119602712),
    (-0.15296486218853164, 0.4004672082940195, 0.7504883828755602, -0.5029860367700724),
    (0.4004672082940195, -0.15296486218853164, 0.7504883828755602, -0.5029860367700724),
    (0.3239847771997537, 0.3239847771997537, 0.6740059517812944, -0.5794684678643381),
    (-0.6740059517812944, 0.5794684678643381, -0.3239847771997537, -0.3239847771997537),
    (-0.7504883828755602, 0.5029860367700724, -0.4004672082940195, 0.15296486218853164),
    (-0.7504883828755602, 0.5029860367700724, 0.15296486218853164, -0.4004672082940195),
    (-0.8828161875373585, 0.4553054119602712, 0.08164729285680945, 0.08164729285680945),
    (-0.4553054119602712, 0.8828161875373585, -0.08164729285680945, -0.08164729285680945),
    (-0.5029860367700724, 0.7504883828755602, -0.15296486218853164, 0.4004672082940195),
    (-0.5029860367700724, 0.7504883828755602, 0.4004672082940195, -0.15296486218853164),
    (-0.5794684678643381, 0.6740059517812944, 0.3239847771997537, 0.3239847771997537),
    (-0.3239847771997537, 0.5794684678643381, -0.6740059517812944, -0.3239847771997537),
    (-0.4004672082940195, 0.5029860367700724, -0.7504883828755602, 0.15296486218853164),
    (0.15296486218853164, 0.5029860367700724, -0.7504883828755602, -0.4004672082940195),
    (0.08164729285680945, 0.4553054119602712, -0.8828161875373585, 0.08164729285680945),
    (-0.08164729285680945, 0.8828161875373585, -0.4553054119602712, -0.08164729285680945),
    (-0.15296486218853164, 0.7504883828755602, -0.5029860367700724, 0.4004672082940195),
    (0.4004672082940195, 0.7504883828755602, -0.5029860367700724, -0.15296486218853164),
    (0.3239847771997537, 0.6740059517812944, -0.5794684678643381, 0.3239847771997537),
    (-0.3239847771997537, 0.5794684678643381, -0.3239847771997537, -0.6740059517812944),
    (-0.4004672082940195, 0.5029860367700724, 0.15296486218853164, -0.7504883828755602),
    (0.15296486218853164, 0.5029860367700724, -0.4004672082940195, -0.7504883828755602),
    (0.08164729285680945, 0.4553054119602712, 0.08164729285680945, -0.8828161875373585),
    (-0.08164729285680945, 0.8828161875373585, -0.08164729285680945, -0.4553054119602712),
    (-0.15296486218853164, 0.7504883828755602, 0.4004672082940195, -0.5029860367700724),
    (0.4004672082940195, 0.7504883828755602, -0.15296486218853164, -0.5029860367700724),
    (0.3239847771997537, 0.6740059517812944, 0.3239847771997537, -0.5794684678643381),
    (0.5794684678643381, -0.6740059517812944, -0.3239847771997537, -0.3239847771997537),
    (0.5029860367700724, -0.7504883828755602, -0.4004672082940195, 0.15296486218853164),
    (0.5029860367700724, -0.7504883828755602, 0.15296486218853164, -0.4004672082940195),
    (0.4553054119602712, -0.8828161875373585, 0.08164729285680945, 0.08164729285680945),
    (0.8828161875373585, -0.4553054119602712, -0.08164729285680945, -0.08164729285680945),
    (0.7504883828755602, -0.5029860367700724, -0.15296486218853164, 0.4004672082940195),
    (0.7504883828755602, -0.5029860367700724, 0.4004672082940195, -0.15296486218853164),
    (0.6740059517812944, -0.5794684678643381, 0.3239847771997537, 0.3239847771997537),
    (0.5794684678643381, -0.3239847771997537, -0.6740059517812944, -0.3239847771997537),
    (0.5029860367700724, -0.4004672082940195, -0.7504883828755602, 0.15296486218853164),
    (0.5029860367700724, 0.15296486218853164, -0.7504883828755602, -0.4004672082940195),
    (0.4553054119602712, 0.08164729285680945, -0.8828161875373585, 0.08164729285680945),
    (0.8828161875373585, -0.08164729285680945, -0.4553054119602712, -0.08164729285680945),
    (0.7504883828755602, -0.15296486218853164, -0.5029860367700724, 0.4004672082940195),
    (0.7504883828755602, 0.4004672082940195, -0.5029860367700724, -0.15296486218853164),
    (0.6740059517812944, 0.3239847771997537, -0.5794684678643381, 0.3239847771997537),
    (0.5794684678643381, -0.3239847771997537, -0.3239847771997537, -0.6740059517812944),
    (0.5029860367700724, -0.4004672082940195, 0.15296486218853164, -0.7504883828755602),
    (0.5029860367700724, 0.15296486218853164, -0.4004672082940195, -0.7504883828755602),
    (0.4553054119602712, 0.08164729285680945, 0.08164729285680945, -0.8828161875373585),
    (0.8828161875373585, -0.08164729285680945, -0.08164729285680945, -0.4553054119602712),
    (0.7504883828755602, -0.15296486218853164, 0.4004672082940195, -0.5029860367700724),
    (0.7504883828755602, 0.4004672082940195, -0.15296486218853164, -0.5029860367700724),
    (0.6740059517812944, 0.3239847771997537, 0.3239847771997537, -0.5794684678643381),
    (0.03381941603233842, 0.03381941603233842, 0.03381941603233842, 0.9982828964265062),
    (-0.044802370851755174, -0.044802370851755174, 0.508629699630796, 0.8586508742123365),
    (-0.044802370851755174, 0.508629699630796, -0.044802370851755174, 0.8586508742123365),
    (-0.12128480194602098, 0.4321472685365301, 0.4321472685365301, 0.7821684431180708),
    (0.508629699630796, -0.044802370851755174, -0.044802370851755174, 0.8586508742123365),
    (0.4321472685365301, -0.12128480194602098, 0.4321472685365301, 0.7821684431180708),
    (0.4321472685365301, 0.4321472685365301, -0.12128480194602098, 0.7821684431180708),
    (0.37968289875261624, 0.37968289875261624, 0.37968289875261624, 0.753341017856078),
    (0.03381941603233842, 0.03381941603233842, 0.9982828964265062, 0.03381941603233842),
    (-0.044802370851755174, 0.044802370851755174, 0.8586508742123365, 0.508629699630796),
    (-0.044802370851755174, 0.508629699630796, 0.8586508742123365, -0.044802370851755174),
    (-0.12128480194602098, 0.4321472685365301, 0.7821684431180708, 0.4321472685365301),
    (0.508629699630796, -0.044802370851755174, 0.8586508742123365, -0.044802370851755174),
    (0.4321472685365301, -0.12128480194602098, 0.7821684431180708, 0.4321472685365301),
    (0.4321472685365301, 0.4321472685365301, 0.7821684431180708, -0.12128480194602098),
    (0.37968289875261624, 0.37968289875261624, 0.753341017856078, 0.37968289875261624),
    (0.03381941603233842, 0.9982828964265062, 0.03381941603233842, 0.03381941603233842),
    (-0.044802370851755174, 0.8586508742123365, -0.044802370851755174, 0.508629699630796),
    (-0.044802370851755174, 0.8586508742123365, 0.508629699630796, -0.044802370851755174),
    (-0.12128480194602098, 0.7821684431180708, 0.4321472685365301, 0.4321472685365301),
    (0.508629699630796, 0.8586508742123365, -0.044802370851755174, -0.044802370851755174),
    (0.4321472685365301, 0.7821684431180708, -0.12128480194602098, 0.4321472685365301),
    (0.4321472685365301, 0.7821684431180708, 0.4321472685365301, -0.12128480194602098),
    (0.37968289875261624, 0.753341017856078, 0.37968289875261624, 0.37968289875261624),
    (0.9982828964265062, 0.03381941603233842, 0.03381941603233842, 0.03381941603233842),
    (0.8586508742123365, -0.044802370851755174, -0.044802370851755174, 0.508629699630796),
    (0.8586508742123365, -0.044802370851755174, 0.508629699630796, -0.044802370851755174),
    (0.7821684431180708, -0.12128480194602098, 0.4321472685365301, 0.4321472685365301),
    (0.8586508742123365, 0.508629699630796, -0.044802370851755174, -0.044802370851755174),
    (0.7821684431180708, 0.4321472685365301, -0.12128480194602098, 0.4321472685365301),
    (0.7821684431180708, 0.4321472685365301, 0.4321472685365301, -0.12128480194602098),
    (0.753341017856078, 0.37968289875261624, 0.37968289875261624, 0.37968289875261624),
], dtype=np.float64)

_GRADIENT_SETS = {2: GRADIENTS_2D, 3: GRADIENTS_3D, 4: GRADIENTS_4D}
for _table in _GRADIENT_SETS.values():
    _table.setflags(write=False)


def normalized_gradients(dimension: int, norm: float) -> np.ndarray:
    """Returns the gradient set for a dimension divided by its normalization constant."""
    return _GRADIENT_SETS[dimension] / norm


def repeated_gradient_table(dimension: int, norm: float, size: int = DEFAULTS.PSIZE) -> np.ndarray:
    """
    Repeats the normalized gradient set cyclically until it has `size` rows.

    Row i is gradient (i mod set size). The seeded caches index this table
    through the permutation, so a query never dereferences the small set.
    """
    grads = normalized_gradients(dimension, norm)
    rows = np.arange(size) % len(grads)
    return np.ascontiguousarray(grads[rows])


@functools.lru_cache(maxsize=None)
def shared_gradient_table(dimension: int, norm: float) -> np.ndarray:
    """Process-wide, read-only repeated table for a dimension and normalization."""
    table = repeated_gradient_table(dimension, norm)
    table.setflags(write=False)
    return table
