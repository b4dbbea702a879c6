"""
Geometry builders - pure geometry construction, no operators dependency.

EXPORTS:
- Contract wrapper: generate_sphere (returns Mesh)
- Raw geometry: build_uv_sphere (returns vertices, triangles)
- Sampling: sample_uv_sphere, sample_uv_sphere_vertices, uv_from_parameters
- Triangulation: build_uv_sphere_triangles, build_uv_sphere_indices, build_uv_sphere_faces
"""

# === Contract wrapper (returns Mesh) ===
from .uv_sphere import generate_sphere

# === Raw geometry ===
from .uv_sphere import build_uv_sphere

# === Sampling ===
from .sampling import (
    check_sphere_counts,
    sample_uv_sphere,
    sample_uv_sphere_vertices,
    uv_from_parameters,
    expected_position_count,
    expected_parameter_count,
)

# === Triangulation ===
from .triangulation import (
    build_uv_sphere_triangles,
    build_uv_sphere_indices,
    build_uv_sphere_faces,
    expected_triangle_count,
)
