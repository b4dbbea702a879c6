"""
UV Sphere Parameter Sampling
============================

Raw vertex positions of a unit UV sphere plus their (longitude, latitude)
parameter pairs.

LAYOUT (s = slice_count, t = stack_count):
    [0]                   north pole (0, 1, 0)
    [1 .. s*(t-1)]        t-1 latitude bands of s vertices, band by band,
                          each band ordered by longitude
    [s*(t-1) + 1]         south pole (0, -1, 0)

    lat = π * band / t         band = 1 .. t-1
    lon = 2π * k / s           k    = 0 .. s-1

    x = sin(lat) sin(lon)
    y = cos(lat)
    z = sin(lat) cos(lon)

SEAM:
    Every band also gets one extra parameter pair (2π, lat) after its last
    vertex. It closes the texture seam; there is no matching position.

The layout is fixed: builders/triangulation.py computes indices from it.

Date: Oct 2026
"""

import math
from numbers import Integral
from typing import List, Tuple

from ..spec.constants import (
    MIN_SLICE_COUNT,
    MIN_STACK_COUNT,
    NORTH_POLE,
    SOUTH_POLE,
    LONGITUDE_SPAN,
    LATITUDE_SPAN,
)
from ..spec.structures import InvalidParameters
from ..vectors.vec3 import Vector3

Parameter = Tuple[float, float]


def check_sphere_counts(slice_count: int, stack_count: int) -> None:
    """
    Raise InvalidParameters unless slice_count >= 3 and stack_count >= 2.

    Non-integers (including bool) are rejected the same way.
    """
    for value in (slice_count, stack_count):
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidParameters(slice_count, stack_count)
    if slice_count < MIN_SLICE_COUNT or stack_count < MIN_STACK_COUNT:
        raise InvalidParameters(slice_count, stack_count)


def expected_position_count(slice_count: int, stack_count: int) -> int:
    return slice_count * (stack_count - 1) + 2


def expected_parameter_count(slice_count: int, stack_count: int) -> int:
    return (slice_count + 1) * (stack_count - 1) + 2


def sample_uv_sphere(slice_count: int,
                     stack_count: int) -> Tuple[List[Vector3], List[Parameter]]:
    """
    Sample positions and (lon, lat) parameters of a unit UV sphere.

    Args:
        slice_count: longitude divisions (>= 3)
        stack_count: latitude divisions (>= 2)

    Returns:
        positions: list of slice_count*(stack_count-1) + 2 Vector3
        parameters: list of (lon, lat) pairs in radians, one per position
                    plus one seam pair per band. The poles are (0, 0) and
                    (0, π), in radians like every other pair; use
                    uv_from_parameters for the [0, 1] texture range,
                    where the south pole becomes (0, 1).

    Raises:
        InvalidParameters: before anything is allocated
    """
    check_sphere_counts(slice_count, stack_count)

    positions = [Vector3(*NORTH_POLE)]
    parameters = [(0.0, 0.0)]

    for band in range(1, stack_count):
        lat = LATITUDE_SPAN * band / stack_count
        sin_lat = math.sin(lat)
        cos_lat = math.cos(lat)
        for k in range(slice_count):
            lon = LONGITUDE_SPAN * k / slice_count
            positions.append(Vector3(sin_lat * math.sin(lon),
                                     cos_lat,
                                     sin_lat * math.cos(lon)))
            parameters.append((lon, lat))
        # Seam: parameter only, no duplicate position
        parameters.append((LONGITUDE_SPAN, lat))

    positions.append(Vector3(*SOUTH_POLE))
    parameters.append((0.0, LATITUDE_SPAN))

    return positions, parameters


def sample_uv_sphere_vertices(slice_count: int, stack_count: int) -> List[Vector3]:
    """Positions only (see sample_uv_sphere)."""
    positions, _ = sample_uv_sphere(slice_count, stack_count)
    return positions


def uv_from_parameters(parameters: List[Parameter]) -> List[Tuple[float, float]]:
    """
    Map (lon, lat) radians to texture coordinates (u, v) in [0, 1]².

        u = lon / 2π       (seam entries land on u = 1)
        v = lat / π        (north pole v = 0, south pole v = 1)
    """
    return [(lon / LONGITUDE_SPAN, lat / LATITUDE_SPAN) for lon, lat in parameters]


# Self-test when run directly
# Run with: python -m sphere_mesh.builders.sampling (from src/)
if __name__ == "__main__":
    print("=" * 60)
    print("UV SPHERE SAMPLING - MINIMAL SPHERE (3, 2)")
    print("=" * 60)

    pos, params = sample_uv_sphere(3, 2)
    for i, p in enumerate(pos):
        print(f"  [{i}] ({p.x:+.4f}, {p.y:+.4f}, {p.z:+.4f})  |p| = {p.norm():.12f}")
    print(f"\n  parameters ({len(params)}):")
    for lon, lat in params:
        print(f"    lon = {lon:.4f}, lat = {lat:.4f}")
