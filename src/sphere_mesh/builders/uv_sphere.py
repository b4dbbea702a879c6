"""
UV Sphere Mesh
==============

Unit sphere centred at the origin, built from slice_count longitude
divisions and stack_count latitude divisions.

TOPOLOGY (s = slice_count, t = stack_count):
    V = s*(t-1) + 2
    E = 3*s*(t-1)
    F = 2*s*(t-1)            (triangles)
    χ = V - E + F = 2

GEOMETRY:
    Every position has |p| = 1, and the normal of a vertex IS its position.

ENTRY POINTS:
    build_uv_sphere(s, t)   raw (vertices, triangles)
    generate_sphere(s, t)   contract-compliant Mesh (normals, faces, no uvs)
"""

import numpy as np
from typing import List, Tuple

from .sampling import sample_uv_sphere, uv_from_parameters
from .triangulation import build_uv_sphere_triangles, build_uv_sphere_faces
from ..spec.constants import DEFAULT_SLICE_COUNT, DEFAULT_STACK_COUNT
from ..spec.structures import Mesh, create_mesh


def build_uv_sphere(slice_count: int = DEFAULT_SLICE_COUNT,
                    stack_count: int = DEFAULT_STACK_COUNT) -> Tuple[np.ndarray, List[Tuple[int, int, int]]]:
    """
    Build raw UV sphere geometry.

    Returns:
        vertices: (s*(t-1)+2, 3) array
        triangles: list of 2*s*(t-1) outward-wound index triples

    Raises:
        InvalidParameters: slice_count < 3 or stack_count < 2
    """
    positions, _ = sample_uv_sphere(slice_count, stack_count)
    triangles = build_uv_sphere_triangles(slice_count, stack_count, len(positions))

    vertices = np.array([p.to_array() for p in positions], dtype=float)
    return vertices, triangles


def generate_sphere(slice_count: int = DEFAULT_SLICE_COUNT,
                    stack_count: int = DEFAULT_STACK_COUNT,
                    with_uvs: bool = False,
                    name: str = None) -> Mesh:
    """
    Generate a unit UV sphere Mesh.

    All-or-nothing: bad counts raise before anything is allocated, and the
    Mesh is validated against the contract before it is returned.

    Args:
        slice_count: longitude divisions (>= 3)
        stack_count: latitude divisions (>= 2)
        with_uvs: also attach (u, v) texture coordinates; off by default,
                  in which case Mesh.uvs is None
        name: Mesh name (default "uv_sphere_<s>x<t>")

    Returns:
        Mesh with positions, normals (= positions), faces, and uvs if asked

    Raises:
        InvalidParameters: slice_count < 3 or stack_count < 2
    """
    positions, parameters = sample_uv_sphere(slice_count, stack_count)

    packed = [p.to_fit() for p in positions]

    faces = build_uv_sphere_faces(slice_count, stack_count, len(positions),
                                  with_normals=True, with_uvs=with_uvs)

    return create_mesh(
        positions=packed,
        # Unit sphere at the origin: normal == position
        normals=packed,
        uvs=uv_from_parameters(parameters) if with_uvs else None,
        faces=faces,
        name=name or f"uv_sphere_{slice_count}x{stack_count}",
    )


# Self-test when run directly
# Run with: python -m sphere_mesh.builders.uv_sphere (from src/)
if __name__ == "__main__":
    print("=" * 60)
    print("UV SPHERE - CONSTRUCTION")
    print("=" * 60)

    for s, t in [(3, 2), (4, 3), (8, 6), (DEFAULT_SLICE_COUNT, DEFAULT_STACK_COUNT)]:
        mesh = generate_sphere(s, t)
        n_E = len(mesh.edges())
        chi = mesh.n_V - n_E + mesh.n_F
        print(f"  ({s:2d}, {t:2d}): V = {mesh.n_V:4d}, E = {n_E:4d}, F = {mesh.n_F:4d}, "
              f"χ = {chi} {'✓' if chi == 2 else '✗'}")
