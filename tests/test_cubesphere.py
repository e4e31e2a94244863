from collections import Counter

import numpy as np
import pytest

from flyearth.cubesphere import (
    create_bottom_face,
    create_top_face,
    generate_cubesphere,
    set_quad,
)

DIVS = [2, 3, 4, 7]


def test_set_quad_layout():
    triangles = [0] * 6
    assert set_quad(triangles, 0, 10, 11, 12, 13) == 6
    assert triangles == [10, 12, 11, 11, 12, 13]


def test_set_quad_at_offset_leaves_rest_untouched():
    triangles = [-1] * 12
    assert set_quad(triangles, 6, 1, 2, 3, 4) == 12
    assert triangles[:6] == [-1] * 6
    assert triangles[6:] == [1, 3, 2, 2, 3, 4]


@pytest.mark.parametrize("divs", DIVS)
def test_vertex_and_index_counts(divs):
    mesh = generate_cubesphere(divs)
    expected_vertices = 8 + (divs + divs + divs - 3) * 4 + (divs - 1) * (divs - 1) * 6
    assert mesh.vertices.shape == (expected_vertices, 3)
    assert len(mesh.indices) == (divs * divs * 3) * 2 * 6
    assert mesh.divs == divs


@pytest.mark.parametrize("divs", DIVS)
def test_vertices_on_unit_sphere(divs):
    mesh = generate_cubesphere(divs)
    lengths = np.linalg.norm(mesh.vertices.astype(np.float64), axis=1)
    assert np.allclose(lengths, 1.0, atol=1e-5)


@pytest.mark.parametrize("divs", DIVS)
def test_indices_in_range_and_all_used(divs):
    mesh = generate_cubesphere(divs)
    assert mesh.indices.dtype == np.uint32
    assert int(mesh.indices.max()) < len(mesh.vertices)
    assert set(mesh.indices.tolist()) == set(range(len(mesh.vertices)))


@pytest.mark.parametrize("divs", DIVS)
def test_no_degenerate_triangles(divs):
    tris = generate_cubesphere(divs).indices.reshape(-1, 3).tolist()
    assert all(len(set(tri)) == 3 for tri in tris)


@pytest.mark.parametrize("divs", DIVS)
def test_mesh_is_closed(divs):
    mesh = generate_cubesphere(divs)
    tris = mesh.indices.reshape(-1, 3).tolist()
    edges = Counter(
        frozenset(pair)
        for a, b, c in tris
        for pair in ((a, b), (b, c), (c, a))
    )
    assert sorted(set(edges.values())) == [2]
    assert len(edges) * 2 == len(tris) * 3
    # A closed sphere-like surface has Euler characteristic 2.
    assert len(mesh.vertices) - len(edges) + len(tris) == 2


@pytest.mark.parametrize("divs", [2, 5])
def test_vertices_symmetric_under_negation(divs):
    verts = generate_cubesphere(divs).vertices
    points = {tuple(np.round(v, 4) + 0.0) for v in verts}
    negated = {tuple(np.round(-v, 4) + 0.0) for v in verts}
    assert points == negated


def test_first_vertex_is_cube_corner():
    mesh = generate_cubesphere(3)
    corner = mesh.vertices[0]
    assert np.allclose(corner, [-1 / np.sqrt(3)] * 3, atol=1e-6)


@pytest.mark.parametrize("divs", DIVS)
def test_faces_write_divs_squared_quads(divs):
    ring = divs * 4
    triangles = [0] * (divs * divs * 6)
    assert create_top_face(triangles, divs, 0, ring) == len(triangles)
    vertex_count = len(generate_cubesphere(divs).vertices)
    triangles = [0] * (divs * divs * 6)
    assert create_bottom_face(vertex_count, triangles, divs, 0, ring) == len(triangles)
    assert max(triangles) < vertex_count


@pytest.mark.parametrize("divs", [0, 1, -3])
def test_too_few_divisions_rejected(divs):
    with pytest.raises(ValueError):
        generate_cubesphere(divs)