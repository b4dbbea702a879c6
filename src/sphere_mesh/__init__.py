"""
SPHERE_MESH - UV sphere generation
==================================

NO rendering. NO file export. NO I/O.

Structure:
    vectors/    - Vector3 (4-lane storage, 3-lane contract), FitVector3
    spec/       - Constants and mesh contract (VertexRef, Face, Mesh)
    builders/   - Sampling, triangulation, generate_sphere
    operators/  - Incidence matrices d₀, d₁
    analysis/   - Topology and geometry verification

Requirements:
    Python >= 3.9
    numpy >= 1.20
    scipy >= 1.11

Usage:
    from sphere_mesh import generate_sphere
    mesh = generate_sphere(32, 32)
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"sphere_mesh requires Python >= 3.9, got {sys.version}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"sphere_mesh requires numpy >= 1.20, got {np.__version__}")

# scipy version check (ConvexHull volume cross-check)
import scipy
_scipy_version = tuple(int(p) for p in scipy.__version__.split('.')[:2] if p.isdigit())
if _scipy_version < (1, 11):
    raise ImportError(f"sphere_mesh requires scipy >= 1.11, got {scipy.__version__}")

from . import vectors
from . import spec
from . import builders
from . import operators
from . import analysis

from .vectors import Vector3, FitVector3
from .spec import InvalidParameters, VertexRef, Face, Mesh
from .builders import generate_sphere

__version__ = "0.1.0"
