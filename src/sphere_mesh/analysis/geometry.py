"""
Geometry Verification - Orientation, Unit Norms, Enclosed Volume
================================================================

Functions:
  1. Orientation: face_orientation_sign, face_orientation_signs
  2. Volume: signed_volume, convex_hull_volume
  3. Report: verify_sphere_geometry

Orientation test (per triangle v0, v1, v2):
    sign( (v1 - v0) × (v2 - v0) · c )     c = centroid of the triangle
  +1 means the right-hand-rule normal points away from the origin (outward).
  For a triangle inscribed in a sphere around the origin, c and v0 give the
  same sign (both lie in the triangle's plane).

Volume cross-check:
  A UV sphere is convex (bands are planar rings, quads are planar
  trapezoids), so the volume enclosed by its outward triangles equals
  the convex hull volume of its positions. Any inward triangle subtracts
  its cone instead of adding it and breaks the equality.
  Uses scipy.spatial.ConvexHull.
"""

import numpy as np
from scipy.spatial import ConvexHull
from typing import Dict

from ..spec.constants import EPS_ZERO, EPS_UNIT, EPS_VOLUME
from ..spec.structures import Mesh
from ..vectors.vec3 import Vector3


# =====================================================================
# 1. ORIENTATION
# =====================================================================

def face_orientation_sign(v0: Vector3, v1: Vector3, v2: Vector3) -> int:
    """+1 outward, -1 inward, 0 degenerate (zero area or through the origin)."""
    normal = (v1 - v0).cross(v2 - v0)
    centroid = (v0 + v1 + v2) * (1.0 / 3.0)
    s = normal.dot(centroid)
    if abs(s) < EPS_ZERO:
        return 0
    return 1 if s > 0 else -1


def face_orientation_signs(mesh: Mesh) -> np.ndarray:
    """Orientation sign of every face, in face order."""
    points = [Vector3.from_fit(p) for p in mesh.positions]
    return np.array([
        face_orientation_sign(points[a], points[b], points[c])
        for a, b, c in (f.positions for f in (mesh.faces or ()))
    ], dtype=int)


# =====================================================================
# 2. VOLUME
# =====================================================================

def signed_volume(mesh: Mesh) -> float:
    """
    Volume enclosed by the faces (divergence theorem).

        V = Σ v0 · (v1 × v2) / 6

    Positive when the faces are wound outward.
    """
    P = mesh.positions_array()
    T = mesh.triangle_array()
    if len(T) == 0:
        return 0.0
    v0, v1, v2 = P[T[:, 0]], P[T[:, 1]], P[T[:, 2]]
    return float(np.sum(np.einsum('ij,ij->i', v0, np.cross(v1, v2))) / 6.0)


def convex_hull_volume(points: np.ndarray) -> float:
    """Volume of the convex hull of an (N, 3) point set (N >= 4, not coplanar)."""
    return float(ConvexHull(np.asarray(points, dtype=float)).volume)


# =====================================================================
# 3. REPORT
# =====================================================================

def verify_sphere_geometry(mesh: Mesh) -> Dict:
    """
    Verify unit-sphere geometry of a Mesh.

    Checks:
        - every position has |p| = 1 (within EPS_UNIT)
        - normals, if present, equal positions (normal index = position index)
        - every face is wound outward
        - enclosed volume equals the convex hull volume (within EPS_VOLUME, relative)
        - uvs, if present, lie in [0, 1]²

    Returns:
        dict with the measured values, the individual checks and 'valid'
    """
    P = mesh.positions_array()
    norms = np.linalg.norm(P, axis=1)
    max_norm_error = float(np.max(np.abs(norms - 1.0)))

    normals_ok = True
    if mesh.normals is not None:
        N = mesh.normals_array()
        for f in (mesh.faces or ()):
            for ref in f.vertices:
                if ref.normal is None or not np.allclose(N[ref.normal], P[ref.position], atol=EPS_UNIT):
                    normals_ok = False
                    break
            if not normals_ok:
                break

    signs = face_orientation_signs(mesh)
    n_outward = int(np.sum(signs > 0))
    n_inward = int(np.sum(signs < 0))
    n_degenerate = int(np.sum(signs == 0))

    volume = signed_volume(mesh)
    hull_volume = convex_hull_volume(P)
    volume_rel_error = abs(volume - hull_volume) / hull_volume

    uvs_ok = True
    if mesh.uvs is not None:
        uv = np.array(mesh.uvs, dtype=float).reshape(-1, 2)
        uvs_ok = bool(np.all(uv >= 0.0) and np.all(uv <= 1.0))

    result = {
        'name': mesh.name,
        'max_norm_error': max_norm_error,
        'unit_norm_ok': max_norm_error < EPS_UNIT,
        'normals_ok': normals_ok,
        'n_outward': n_outward,
        'n_inward': n_inward,
        'n_degenerate': n_degenerate,
        'all_outward': n_inward == 0 and n_degenerate == 0 and n_outward == mesh.n_F,
        'volume': volume,
        'hull_volume': hull_volume,
        'volume_rel_error': volume_rel_error,
        'volume_ok': volume_rel_error < EPS_VOLUME,
        'uvs_ok': uvs_ok,
    }
    result['valid'] = all(result[c] for c in
                          ['unit_norm_ok', 'normals_ok', 'all_outward', 'volume_ok', 'uvs_ok'])
    return result


# Self-test when run directly
# Run with: python -m sphere_mesh.analysis.geometry (from src/)
if __name__ == "__main__":
    from sphere_mesh.builders import generate_sphere

    print("=" * 60)
    print("UV SPHERE - GEOMETRY VERIFICATION")
    print("=" * 60)

    for s, t in [(3, 2), (8, 6), (32, 32)]:
        geo = verify_sphere_geometry(generate_sphere(s, t))
        print(f"\n{geo['name']}:")
        print(f"  max ||p| - 1| = {geo['max_norm_error']:.2e}")
        print(f"  outward faces = {geo['n_outward']}, inward = {geo['n_inward']}")
        print(f"  volume = {geo['volume']:.6f}, hull = {geo['hull_volume']:.6f} "
              f"{'✓' if geo['volume_ok'] else '✗'}  (sphere: {4 * np.pi / 3:.6f})")
