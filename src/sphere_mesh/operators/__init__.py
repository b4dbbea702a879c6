"""Incidence operators d₀, d₁ and the closed-surface checks built on them."""

from .incidence import (
    extract_edges,
    build_d0,
    build_d1,
    build_incidence_matrices,
    count_connected_components,
    verify_faces_per_edge,
    verify_orientation,
    assert_faces_per_edge,
    build_operators_from_mesh,
)
