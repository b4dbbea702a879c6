"""
Topology Verification Functions
===============================

Verify that a mesh is a closed, connected, consistently oriented genus-0
triangle surface, using the incidence operators (d₀, d₁).

These functions are in analysis/ layer because they depend on operators.

EXPECTED for a UV sphere (s = slice_count, t = stack_count):
    V = s*(t-1) + 2,  E = 3*s*(t-1),  F = 2*s*(t-1),  χ = 2
"""

from typing import Dict, Optional

from ..builders.sampling import expected_position_count
from ..builders.triangulation import expected_triangle_count
from ..operators.incidence import build_operators_from_mesh
from ..spec.constants import EULER_CHARACTERISTIC_SPHERE
from ..spec.structures import Mesh


def verify_sphere_topology(mesh: Mesh,
                           slice_count: Optional[int] = None,
                           stack_count: Optional[int] = None) -> Dict:
    """
    Verify sphere topology of a Mesh.

    Args:
        mesh: Mesh with faces
        slice_count, stack_count: if both given, also compare V and F
            against the UV sphere counts

    Returns:
        dict with V, E, F, chi and the individual checks; 'valid' is their AND
    """
    ops = build_operators_from_mesh(mesh, strict=False)

    V = mesh.n_V
    E = len(ops['edges'])
    F = mesh.n_F
    chi = V - E + F

    result = {
        'name': mesh.name,
        'V': V,
        'E': E,
        'F': F,
        'chi': chi,
        'chi_ok': chi == EULER_CHARACTERISTIC_SPHERE,
        'closed': ops['faces_per_edge_histogram']['valid'],
        'faces_per_edge_histogram': ops['faces_per_edge_histogram']['histogram'],
        'consistently_oriented': ops['orientation']['consistent'],
        'n_bad_edges': ops['orientation']['n_bad_edges'],
        'connected': ops['n_components'] == 1,
        'flat_index_count_ok': len(mesh.flat_indices()) % 3 == 0,
    }

    checks = ['chi_ok', 'closed', 'consistently_oriented', 'connected', 'flat_index_count_ok']

    if slice_count is not None and stack_count is not None:
        result['expected_V'] = expected_position_count(slice_count, stack_count)
        result['expected_F'] = expected_triangle_count(slice_count, stack_count)
        result['counts_ok'] = (V == result['expected_V'] and F == result['expected_F'])
        checks.append('counts_ok')

    result['valid'] = all(result[c] for c in checks)
    return result
