"""
Analysis functions - depend on operators layer.

Separated from builders to maintain clean layering:
    builders → spec → vectors
    analysis → operators → spec

Includes:
- verify_topology: χ, closedness, winding consistency, connectivity
- geometry: unit norms, outward faces, volume vs convex hull
"""

from .verify_topology import verify_sphere_topology
from .geometry import (
    face_orientation_sign,
    face_orientation_signs,
    signed_volume,
    convex_hull_volume,
    verify_sphere_geometry,
)
