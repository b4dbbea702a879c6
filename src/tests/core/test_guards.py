"""
Guard and Edge Case Tests for sphere_mesh
==========================================

Tests for boundary conditions, guards, and edge cases.
Separated from test_uv_sphere.py to keep main suite focused on invariants.

Run: python -m pytest tests/core/test_guards.py -v
"""

import pytest
import numpy as np
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from sphere_mesh import generate_sphere, InvalidParameters
from sphere_mesh.builders import (
    sample_uv_sphere,
    build_uv_sphere,
    build_uv_sphere_triangles,
    build_uv_sphere_faces,
)
from sphere_mesh.spec.structures import (
    Face,
    Mesh,
    VertexRef,
    canonical_face,
    create_mesh,
    validate_mesh,
)


# =============================================================================
# P1: CRITICAL - Guards for degenerate counts
# =============================================================================

@pytest.mark.parametrize("s, t", [(2, 5), (5, 1), (0, 0), (-3, 4), (3, 1), (2, 2), (3, -2)])
def test_generate_sphere_invalid_counts_raise(s, t):
    """P1.1: slice_count < 3 or stack_count < 2 → InvalidParameters."""
    with pytest.raises(InvalidParameters, match=r"slice_count\s*>=\s*3"):
        generate_sphere(s, t)


def test_minimal_valid_sphere():
    """P1.2: (3, 2) is the smallest valid sphere."""
    mesh = generate_sphere(3, 2)
    assert mesh.n_V == 5
    assert mesh.n_F == 6


def test_invalid_parameters_is_value_error():
    """P1.3: InvalidParameters carries both counts and is a ValueError."""
    with pytest.raises(ValueError) as exc_info:
        generate_sphere(2, 5)
    err = exc_info.value
    assert isinstance(err, InvalidParameters)
    assert (err.slice_count, err.stack_count) == (2, 5)


@pytest.mark.parametrize("s, t", [(3.0, 2), (3, 2.5), ("3", 2), (True, 2), (None, 2)])
def test_non_integer_counts_raise(s, t):
    """P1.4: floats, strings and bools are not counts."""
    with pytest.raises(InvalidParameters):
        generate_sphere(s, t)


def test_numpy_integer_counts_accepted():
    """P1.5: numpy integers are integers."""
    mesh = generate_sphere(np.int64(4), np.int32(3))
    assert mesh.n_V == 4 * 2 + 2


@pytest.mark.parametrize("builder", [
    lambda: sample_uv_sphere(2, 5),
    lambda: build_uv_sphere(5, 1),
    lambda: build_uv_sphere_triangles(2, 3, 6),
    lambda: build_uv_sphere_faces(3, 1, 2),
])
def test_every_entry_point_rejects_bad_counts(builder):
    """P1.6: sampler, raw builder and triangulation all validate up front."""
    with pytest.raises(InvalidParameters):
        builder()


def test_triangulation_position_count_mismatch():
    """P1.7: n_positions must belong to the counts (plain ValueError)."""
    with pytest.raises(ValueError, match="n_positions") as exc_info:
        build_uv_sphere_triangles(4, 3, 9)
    assert not isinstance(exc_info.value, InvalidParameters)


# =============================================================================
# P2: IMPORTANT - canonical_face correctness
# =============================================================================

def test_canonical_face_rotation_invariant():
    """P2.1: Rotations of same triangle → same key, same orientation."""
    rotations = [[5, 7, 9], [7, 9, 5], [9, 5, 7]]
    canonicals = [canonical_face(r) for r in rotations]
    assert all(c == canonicals[0] for c in canonicals), f"Rotations differ: {canonicals}"


def test_canonical_face_reverse_orientation():
    """P2.2: Reversed triangle → same key, opposite orientation."""
    fwd = canonical_face([0, 1, 2])
    rev = canonical_face([0, 2, 1])
    assert fwd[0] == rev[0]
    assert fwd[1] == -rev[1]


def test_canonical_face_too_short():
    """P2.3: Fewer than 3 vertices is not a face."""
    with pytest.raises(ValueError, match="at least 3"):
        canonical_face([1, 2])


def test_sphere_has_no_duplicate_faces():
    """P2.4: No triangle appears twice, in either winding."""
    mesh = generate_sphere(8, 6)
    keys = [canonical_face(list(f.positions))[0] for f in mesh.faces]
    assert len(keys) == len(set(keys))


# =============================================================================
# P3: Mesh contract validation
# =============================================================================

def _tetra_positions():
    return [(1, 1, 1), (1, -1, -1), (-1, 1, -1), (-1, -1, 1)]


def test_face_needs_three_vertices():
    """P3.1: A Face is exactly three VertexRefs."""
    with pytest.raises(ValueError, match="exactly 3"):
        Face((VertexRef(0), VertexRef(1)))
    with pytest.raises(ValueError, match="exactly 3"):
        Face((VertexRef(0), VertexRef(1), VertexRef(2), VertexRef(3)))


def test_contract_position_out_of_bounds():
    """P3.2: Position index past the end is rejected (strict raises, non-strict lists)."""
    bad = Mesh(positions=tuple(create_mesh(_tetra_positions()).positions),
               faces=(Face.from_positions(0, 1, 7, with_normals=False),))
    with pytest.raises(ValueError, match="out of bounds"):
        validate_mesh(bad, strict=True)
    ok, errors = validate_mesh(bad, strict=False)
    assert not ok and len(errors) == 1


def test_contract_repeated_position():
    """P3.3: Degenerate triangle (repeated position)."""
    with pytest.raises(ValueError, match="repeated positions"):
        create_mesh(_tetra_positions(), faces=[Face.from_positions(0, 1, 1, with_normals=False)])


def test_contract_normal_index_without_normals():
    """P3.4: Normal index on a mesh that has no normals."""
    with pytest.raises(ValueError, match="no normals"):
        create_mesh(_tetra_positions(), faces=[Face.from_positions(0, 1, 2, with_normals=True)])


def test_contract_missing_normal_index():
    """P3.5: Mesh has normals but a face vertex does not reference one."""
    with pytest.raises(ValueError, match="missing normal"):
        create_mesh(_tetra_positions(), normals=_tetra_positions(),
                    faces=[Face.from_positions(0, 1, 2, with_normals=False)])


def test_contract_uv_index_out_of_bounds():
    """P3.6: UV index past the end of the uv list."""
    face = Face((VertexRef(0, uv=0), VertexRef(1, uv=1), VertexRef(2, uv=5)))
    with pytest.raises(ValueError, match="uv index 5"):
        create_mesh(_tetra_positions(), uvs=[(0, 0), (1, 0), (0, 1)], faces=[face])


def test_contract_divergent_indices_allowed():
    """P3.7: Position and normal indices may differ (hard edges)."""
    face = Face((VertexRef(0, 3), VertexRef(1, 3), VertexRef(2, 3)))
    mesh = create_mesh(_tetra_positions(),
                       normals=[(0, 0, 1), (0, 1, 0), (1, 0, 0), (0.577, 0.577, 0.577)],
                       faces=[face])
    assert mesh.faces[0].normals == (3, 3, 3)
    assert mesh.faces[0].positions == (0, 1, 2)


def test_contract_no_positions():
    """P3.8: Empty mesh is invalid."""
    ok, errors = validate_mesh(Mesh(positions=()), strict=False)
    assert not ok
    assert "no positions" in errors[0]


def test_optional_fields_default_to_none():
    """P3.9: Absent fields are None, not empty sequences."""
    mesh = create_mesh(_tetra_positions())
    assert mesh.normals is None and mesh.uvs is None and mesh.faces is None
    assert mesh.n_F == 0
    assert mesh.flat_indices() == []
    assert mesh.triangle_array().shape == (0, 3)


@pytest.mark.parametrize("positions, normals, kind", [
    ([(1, 2, 3, 4), (0, 0, 1), (0, 1, 0)], None, "Position 0"),
    ([(1, 0, 0), (0, 1), (0, 0, 1)], None, "Position 1"),
    (_tetra_positions(), [(1, 0, 0), (0, 1, 0), (0, 0, 1), (1, 1, 1, 1)], "Normal 3"),
])
def test_contract_wrong_component_count(positions, normals, kind):
    """P3.10: Positions / normals with other than 3 components are rejected, never truncated."""
    with pytest.raises(ValueError, match=f"{kind}: expected 3 components, got"):
        create_mesh(positions, normals=normals)


def test_face_rejects_plain_indices():
    """P3.11: Face corners must be VertexRefs (plain ints are a contract error, not an AttributeError)."""
    with pytest.raises(ValueError, match="must be VertexRef"):
        Face((0, 1, 2))
    with pytest.raises(ValueError, match="must be VertexRef"):
        Face((VertexRef(0), VertexRef(1), (2, None, None)))


def test_face_list_argument_is_frozen():
    """P3.12: A list of VertexRefs is stored as a tuple: immutable and hashable."""
    refs = [VertexRef(0), VertexRef(1), VertexRef(2)]
    face = Face(refs)
    refs[0] = VertexRef(3)

    assert isinstance(face.vertices, tuple)
    assert face.positions == (0, 1, 2)
    assert hash(face) == hash(Face.from_positions(0, 1, 2, with_normals=False))
    assert face == Face.from_positions(0, 1, 2, with_normals=False)


# =============================================================================
# P4: Import smoke tests
# =============================================================================

def test_import_smoke_builders():
    """P4.1: Import builders module works."""
    from sphere_mesh import builders
    assert hasattr(builders, 'generate_sphere')
    assert hasattr(builders, 'sample_uv_sphere')


def test_import_smoke_operators():
    """P4.2: Import operators module works."""
    from sphere_mesh import operators
    assert hasattr(operators, 'build_incidence_matrices')
    assert hasattr(operators, 'build_operators_from_mesh')


def test_import_smoke_analysis():
    """P4.3: Import analysis module works."""
    from sphere_mesh import analysis
    assert hasattr(analysis, 'verify_sphere_topology')
    assert hasattr(analysis, 'verify_sphere_geometry')


def test_smoke_pipeline():
    """P4.4: Full pipeline: builder → validate → operators → analysis."""
    from sphere_mesh.operators import build_operators_from_mesh
    from sphere_mesh.analysis import verify_sphere_topology, verify_sphere_geometry

    mesh = generate_sphere(6, 4)

    is_valid, errors = validate_mesh(mesh, strict=True)
    assert is_valid, f"Validation failed: {errors}"

    ops = build_operators_from_mesh(mesh)
    assert 'd0' in ops and 'd1' in ops

    assert verify_sphere_topology(mesh, 6, 4)['valid']
    assert verify_sphere_geometry(mesh)['valid']


# =============================================================================
# Self-test when run directly
# =============================================================================

if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
