"""
UV Sphere Triangulation
=======================

Turn the sampled vertex grid (see sampling.py) into outward-wound triangles.

REGIONS (s = slice_count, t = stack_count, n = s*(t-1) + 2 positions):

    North cap   s triangles      (0, i+1, next+1)
    Body        2*s*(t-2)        per quad:
                                   (i2+1, i1+1, i3+1)
                                   (i2+1, i3+1, i4+1)
    South cap   s triangles      (n-1, first+next, first+i)

    next  = (i+1) % s
    i1    = b*s + i          band b, longitude i
    i2    = b*s + next       band b, longitude i+1
    i3    = i1 + s           band b+1, longitude i
    i4    = i2 + s           band b+1, longitude i+1
    first = n-1-s            first index of the last band

    The two body triangles share the i2-i3 diagonal.
    t == 2: no body band, caps only (2*s triangles).

WINDING:
    Counter-clockwise seen from outside in all three regions, so
    (v1 - v0) × (v2 - v0) points away from the origin. The south cap is the
    mirror of the north cap: walking the last band east-to-west around the
    south pole is counter-clockwise seen from below.

UV SEAM:
    Positions wrap (longitude s == longitude 0) but uv parameters do not:
    the column i = s-1 references the band's seam parameter (2π, lat), so a
    face corner can share a position with its neighbour but not its uv.

Date: Oct 2026
"""

from typing import Iterator, List, Tuple

from .sampling import check_sphere_counts, expected_position_count, expected_parameter_count
from ..spec.structures import Face, VertexRef

Triangle = Tuple[int, int, int]
Corner = Tuple[int, int]  # (band, longitude step); band -1 / t-1 are the poles


def _corner_triangles(slice_count: int, stack_count: int) -> Iterator[Tuple[Corner, Corner, Corner]]:
    """
    Yield triangles as (band, longitude) corners, longitude NOT wrapped.

    Band -1 is the north pole, band stack_count-1 the south pole,
    bands 0 .. stack_count-2 are the sampled latitude bands.
    """
    s = slice_count
    north = (-1, 0)
    south = (stack_count - 1, 0)

    # Triangles around the north pole
    for i in range(s):
        yield north, (0, i), (0, i + 1)

    # Quads between neighbouring bands, two triangles each
    for b in range(stack_count - 2):
        for i in range(s):
            c1, c2 = (b, i), (b, i + 1)
            c3, c4 = (b + 1, i), (b + 1, i + 1)
            yield c2, c1, c3
            yield c2, c3, c4

    # Triangles around the south pole
    last = stack_count - 2
    for i in range(s):
        yield south, (last, i + 1), (last, i)


def _position_index(corner: Corner, slice_count: int, stack_count: int) -> int:
    band, k = corner
    if band < 0:
        return 0
    if band == stack_count - 1:
        return expected_position_count(slice_count, stack_count) - 1
    return 1 + band * slice_count + k % slice_count


def _uv_index(corner: Corner, slice_count: int, stack_count: int) -> int:
    band, k = corner
    if band < 0:
        return 0
    if band == stack_count - 1:
        return expected_parameter_count(slice_count, stack_count) - 1
    return 1 + band * (slice_count + 1) + k


def _check_position_count(slice_count: int, stack_count: int, n_positions: int) -> None:
    check_sphere_counts(slice_count, stack_count)
    expected = expected_position_count(slice_count, stack_count)
    if n_positions != expected:
        raise ValueError(
            f"n_positions = {n_positions} does not match slice_count={slice_count}, "
            f"stack_count={stack_count} (expected {expected})"
        )


def build_uv_sphere_triangles(slice_count: int,
                              stack_count: int,
                              n_positions: int) -> List[Triangle]:
    """
    Build position index triples for a UV sphere.

    Args:
        slice_count: longitude divisions (>= 3)
        stack_count: latitude divisions (>= 2)
        n_positions: length of the sampled position list (locates the south pole)

    Returns:
        list of 2*slice_count*(stack_count-1) triangles, north cap first,
        then body bands top to bottom, then south cap

    Raises:
        InvalidParameters: bad slice/stack counts
        ValueError: n_positions does not belong to these counts
    """
    _check_position_count(slice_count, stack_count, n_positions)

    return [
        tuple(_position_index(c, slice_count, stack_count) for c in tri)
        for tri in _corner_triangles(slice_count, stack_count)
    ]


def build_uv_sphere_indices(slice_count: int,
                            stack_count: int,
                            n_positions: int) -> List[int]:
    """Flat index list (length is a multiple of 3), same order as build_uv_sphere_triangles."""
    return [i for tri in build_uv_sphere_triangles(slice_count, stack_count, n_positions)
            for i in tri]


def build_uv_sphere_faces(slice_count: int,
                          stack_count: int,
                          n_positions: int,
                          with_normals: bool = True,
                          with_uvs: bool = False) -> List[Face]:
    """
    Build Face objects for a UV sphere.

    Normal indices (with_normals) equal the position indices. UV indices
    (with_uvs) point into the sampler's parameter list, including the seam
    entries, so they diverge from the position indices.
    """
    _check_position_count(slice_count, stack_count, n_positions)

    faces = []
    for tri in _corner_triangles(slice_count, stack_count):
        refs = []
        for corner in tri:
            p = _position_index(corner, slice_count, stack_count)
            refs.append(VertexRef(
                position=p,
                normal=p if with_normals else None,
                uv=_uv_index(corner, slice_count, stack_count) if with_uvs else None,
            ))
        faces.append(Face(tuple(refs)))
    return faces


def expected_triangle_count(slice_count: int, stack_count: int) -> int:
    """s (north) + 2*s*(t-2) (body) + s (south)."""
    return slice_count + 2 * slice_count * (stack_count - 2) + slice_count
