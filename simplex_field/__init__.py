# simplex_field/__init__.py

# This file makes 'simplex_field' a Python package and defines its public API.

from .generator import (
    NoiseGenerator,
    WideNoiseGenerator,
    NarrowNoiseGenerator,
    create_generator,
    from_config,
)
from .lattice import LatticeGeometry, get_geometry, audit_lattice
from .permutation import build_permutation

__all__ = [
    "NoiseGenerator",
    "WideNoiseGenerator",
    "NarrowNoiseGenerator",
    "create_generator",
    "from_config",
    "LatticeGeometry",
    "get_geometry",
    "audit_lattice",
    "build_permutation",
]
