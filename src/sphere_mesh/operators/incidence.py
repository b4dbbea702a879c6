"""
Incidence Matrices of a Triangle Mesh
=====================================

Pure combinatorics - NO geometry assumptions.

DEFINITIONS:
    d₀: E × V  oriented edge-vertex incidence
    d₁: F × E  oriented face-edge incidence

IDENTITIES (closed, consistently oriented surface):
    1. d₁d₀ = 0                 (ALWAYS - each face boundary is a closed loop)
    2. Tr(d₀d₀ᵀ) = 2E           (ALWAYS - each edge has 2 endpoints)
    3. Tr(d₁ᵀd₁) = 2E           (every edge bounds exactly 2 faces)
    4. column sums of d₁ = 0    (the 2 faces walk the shared edge in
                                 opposite directions = consistent winding)

A UV sphere satisfies all four. A flipped triangle breaks (4) on its
three edges without touching (1)-(3).

REFERENCE: Discrete Exterior Calculus (Desbrun et al., 2005)
"""

import warnings
import numpy as np
from collections import deque
from typing import List, Tuple, Dict, Any

from ..spec.constants import EPS_CLOSE, FACES_PER_EDGE_SURFACE, DENSE_OPERATOR_WARN_ENTRIES
from ..spec.structures import Mesh


def extract_edges(triangles) -> List[Tuple[int, int]]:
    """
    Unique undirected edges of a triangle list.

    Args:
        triangles: iterable of (a, b, c) vertex index triples

    Returns:
        sorted list of (i, j) with i < j
    """
    edge_set = set()
    for tri in triangles:
        n = len(tri)
        for k in range(n):
            v1, v2 = int(tri[k]), int(tri[(k + 1) % n])
            if v1 == v2:
                raise ValueError(f"Degenerate face {tuple(tri)}: repeated vertex {v1}")
            edge_set.add((min(v1, v2), max(v1, v2)))
    return sorted(edge_set)


def build_d0(n_vertices: int,
             edges: List[Tuple[int, int]]) -> np.ndarray:
    """
    Build gradient operator d₀: C⁰ → C¹.

    DEFINITION:
        d₀[e, v] = -1 if v is the source of edge e
        d₀[e, v] = +1 if v is the target of edge e
        d₀[e, v] = 0 otherwise

    Convention: for edge (i, j) with i < j, i is source, j is target.

    Returns:
        d0: (E, V) dense incidence matrix
    """
    d0 = np.zeros((len(edges), n_vertices))

    for e_idx, (i, j) in enumerate(edges):
        d0[e_idx, i] = -1  # source
        d0[e_idx, j] = +1  # target

    return d0


def build_d1(edges: List[Tuple[int, int]],
             triangles) -> np.ndarray:
    """
    Build curl operator d₁: C¹ → C².

    DEFINITION:
        d₁[f, e] = +1 if face f walks edge e from source to target
        d₁[f, e] = -1 if face f walks it target to source
        d₁[f, e] = 0 if edge e is not on boundary of f

    Args:
        edges: list of E tuples (i, j), i < j
        triangles: list of F vertex triples in winding order

    Returns:
        d1: (F, E) incidence matrix

    FAIL-FAST:
        Raises ValueError if any face segment is not in edge list.
    """
    edge_dict = {}
    for e_idx, (i, j) in enumerate(edges):
        edge_dict[(i, j)] = (e_idx, +1)  # forward direction
        edge_dict[(j, i)] = (e_idx, -1)  # backward direction

    d1 = np.zeros((len(triangles), len(edges)))

    for f_idx, tri in enumerate(triangles):
        n = len(tri)
        for k in range(n):
            v1 = int(tri[k])
            v2 = int(tri[(k + 1) % n])
            if (v1, v2) not in edge_dict:
                raise ValueError(f"Face {f_idx} uses segment ({v1},{v2}) which is not in edge list. "
                                 f"Face vertices: {tuple(tri)}")
            e_idx, sign = edge_dict[(v1, v2)]
            if d1[f_idx, e_idx] != 0:
                raise ValueError(f"Face {f_idx} uses edge {e_idx} twice. "
                                 f"Face vertices: {tuple(tri)}")
            d1[f_idx, e_idx] += sign

    return d1


def build_incidence_matrices(n_vertices: int,
                             edges: List[Tuple[int, int]],
                             triangles) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build both incidence matrices d₀ and d₁ and check exactness d₁d₀ = 0.

    Returns:
        d0: (E, V) gradient matrix
        d1: (F, E) curl matrix
    """
    d0 = build_d0(n_vertices, edges)
    d1 = build_d1(edges, triangles)

    d1d0 = d1 @ d0
    if not np.allclose(d1d0, 0):
        raise ValueError(f"Exactness failed: ||d₁d₀|| = {np.linalg.norm(d1d0)}")

    return d0, d1


def count_connected_components(n_vertices: int, edges: List[Tuple[int, int]]) -> int:
    """
    Count connected components of the edge graph via BFS.

    Isolated vertices (used by no face) count as their own component.
    """
    adj = [[] for _ in range(n_vertices)]
    for i, j in edges:
        adj[i].append(j)
        adj[j].append(i)

    visited = [False] * n_vertices
    components = 0

    for start in range(n_vertices):
        if visited[start]:
            continue
        queue = deque([start])
        visited[start] = True
        while queue:
            v = queue.popleft()
            for neighbor in adj[v]:
                if not visited[neighbor]:
                    visited[neighbor] = True
                    queue.append(neighbor)
        components += 1

    return components


# =============================================================================
# UNIVERSAL VERIFICATION HELPERS
# =============================================================================

def verify_faces_per_edge(d1: np.ndarray, k: int = FACES_PER_EDGE_SURFACE) -> Dict[str, Any]:
    """
    Check that every edge has exactly k incident faces.

    Returns:
        dict with:
            'valid': bool - all edges have exactly k faces
            'min', 'max': int - faces per edge range
            'expected': int - k
            'histogram': dict - {count: n_edges_with_that_count}
    """
    faces_per_edge_actual = np.sum(np.abs(d1), axis=0)

    if faces_per_edge_actual.size == 0:
        return {'valid': False, 'min': 0, 'max': 0, 'expected': k, 'histogram': {}}

    fpe_min = int(np.min(faces_per_edge_actual))
    fpe_max = int(np.max(faces_per_edge_actual))

    unique, counts = np.unique(faces_per_edge_actual, return_counts=True)
    histogram = {int(u): int(c) for u, c in zip(unique, counts)}

    return {
        'valid': fpe_min == fpe_max == k,
        'min': fpe_min,
        'max': fpe_max,
        'expected': k,
        'histogram': histogram,
    }


def verify_orientation(d1: np.ndarray) -> Dict[str, Any]:
    """
    Check consistent winding: every column of d₁ sums to zero.

    Returns:
        dict with 'consistent' and the indices of the offending edges
    """
    col_sums = np.sum(d1, axis=0)
    bad = np.where(np.abs(col_sums) > EPS_CLOSE)[0]
    return {
        'consistent': len(bad) == 0,
        'n_bad_edges': int(len(bad)),
        'bad_edges': [int(e) for e in bad],
    }


def assert_faces_per_edge(d1: np.ndarray, k: int = FACES_PER_EDGE_SURFACE, context: str = "") -> None:
    """
    Fail-fast version of verify_faces_per_edge.

    Raises:
        ValueError: if invariant violated
    """
    result = verify_faces_per_edge(d1, k)
    if not result['valid']:
        ctx = f" [{context}]" if context else ""
        raise ValueError(
            f"faces_per_edge invariant violated{ctx}: "
            f"expected all edges to have {k} faces, "
            f"got min={result['min']}, max={result['max']}. "
            f"Histogram: {result['histogram']}"
        )


# =============================================================================
# CONTRACT-AWARE WRAPPER
# =============================================================================

def build_operators_from_mesh(mesh: Mesh, strict: bool = True) -> dict:
    """
    Build incidence operators from a Mesh.

    Args:
        mesh: Mesh with faces
        strict: If True (default), raise unless every edge bounds exactly 2 faces

    Returns:
        dict with:
            edges: sorted (i, j) list
            d0, d1: incidence matrices
            traces: Tr(d₀d₀ᵀ), Tr(d₁ᵀd₁) and their closed-surface values
            faces_per_edge_histogram: verify_faces_per_edge result
            orientation: verify_orientation result
            n_components: connected components of the edge graph

    WARNS:
        UserWarning when the dense matrices get large (they are O(E·V)).
    """
    if mesh.faces is None:
        raise ValueError(f"Mesh '{mesh.name}' has no faces")

    triangles = mesh.triangle_array()
    edges = extract_edges(triangles)
    n_V, n_E, n_F = mesh.n_V, len(edges), len(triangles)

    n_entries = n_E * n_V + n_F * n_E
    if n_entries > DENSE_OPERATOR_WARN_ENTRIES:
        warnings.warn(
            f"Dense incidence matrices for '{mesh.name}' need {n_entries} entries "
            f"(V={n_V}, E={n_E}, F={n_F}). Use a coarser mesh for verification.",
            UserWarning
        )

    d0, d1 = build_incidence_matrices(n_V, edges, triangles)

    if strict:
        assert_faces_per_edge(d1, FACES_PER_EDGE_SURFACE, context=mesh.name)

    return {
        'edges': edges,
        'd0': d0,
        'd1': d1,
        'traces': {
            'Tr_d0d0t': float(np.sum(d0 * d0)),
            'Tr_d1td1': float(np.sum(d1 * d1)),
            'expected_d0d0t': 2 * n_E,
            'expected_d1td1': FACES_PER_EDGE_SURFACE * n_E,
        },
        'faces_per_edge_histogram': verify_faces_per_edge(d1, FACES_PER_EDGE_SURFACE),
        'orientation': verify_orientation(d1),
        'n_components': count_connected_components(n_V, edges),
    }


# Self-test when run directly
# Run with: python -m sphere_mesh.operators.incidence (from src/)
if __name__ == "__main__":
    from sphere_mesh.builders import generate_sphere

    print("=" * 60)
    print("INCIDENCE OPERATORS - VERIFICATION")
    print("=" * 60)

    for s, t in [(3, 2), (6, 4), (12, 8)]:
        mesh = generate_sphere(s, t)
        ops = build_operators_from_mesh(mesh)
        E = len(ops['edges'])
        print(f"\n{mesh.name}: V={mesh.n_V}, E={E}, F={mesh.n_F}")
        print(f"  Tr(d₀d₀ᵀ) = {ops['traces']['Tr_d0d0t']:.0f} (expected 2E = {2*E})")
        print(f"  Tr(d₁ᵀd₁) = {ops['traces']['Tr_d1td1']:.0f} (expected 2E = {2*E})")
        print(f"  consistent winding: {'✓' if ops['orientation']['consistent'] else '✗'}")
        print(f"  components: {ops['n_components']}")
