"""Cube-sphere mesh of the Earth: a subdivided cube projected onto the unit sphere."""

from __future__ import annotations

from dataclasses import dataclass
from typing import MutableSequence

import numpy as np

EARTH_FRAG_SHADER_SRC = "Game/shaders/earthfrag.spv"
EARTH_VERT_SHADER_SRC = "Game/shaders/earthvert.spv"
EARTH_CUBEMAP_SRC = "assets/skybox/earth/cube.ktx2"
EARTH_CUBEMAP_PATHS = (
    "assets/skybox/earth/px.ktx2",
    "assets/skybox/earth/nx.ktx2",
    "assets/skybox/earth/py.ktx2",
    "assets/skybox/earth/ny.ktx2",
    "assets/skybox/earth/pz.ktx2",
    "assets/skybox/earth/nz.ktx2",
)


@dataclass
class Cubesphere:
    """Triangle mesh of a unit sphere built from a cube with ``divs`` cells per edge.

    ``vertices`` is an (N, 3) float32 array; ``indices`` holds three vertex
    indices per triangle as uint32.
    """

    divs: int
    vertices: np.ndarray
    indices: np.ndarray


def set_quad(
    triangles: MutableSequence[int], i: int, v00: int, v10: int, v01: int, v11: int
) -> int:
    """Write the two triangles of a quad at offset ``i``; return the next offset."""
    triangles[i] = v00
    triangles[i + 1] = triangles[i + 4] = v01
    triangles[i + 2] = triangles[i + 3] = v10
    triangles[i + 5] = v11
    return i + 6


def create_top_face(
    triangles: MutableSequence[int], divs: int, t: int, ring: int
) -> int:
    """Write the quads of the cube's top face starting at offset ``t``."""
    v = ring * divs
    for _ in range(divs - 1):
        t = set_quad(triangles, t, v, v + 1, v + ring - 1, v + ring)
        v += 1
    t = set_quad(triangles, t, v, v + 1, v + ring - 1, v + 2)

    v_min = ring * (divs + 1) - 1
    v_mid = v_min + 1
    v_max = v + 2
    for _ in range(1, divs - 1):
        t = set_quad(triangles, t, v_min, v_mid, v_min - 1, v_mid + divs - 1)
        for _ in range(1, divs - 1):
            t = set_quad(triangles, t, v_mid, v_mid + 1, v_mid + divs - 1, v_mid + divs)
            v_mid += 1
        t = set_quad(triangles, t, v_mid, v_max, v_mid + divs - 1, v_max + 1)
        v_min -= 1
        v_mid += 1
        v_max += 1

    v_top = v_min - 2
    t = set_quad(triangles, t, v_min, v_mid, v_top + 1, v_top)
    for _ in range(1, divs - 1):
        t = set_quad(triangles, t, v_mid, v_mid + 1, v_top, v_top - 1)
        v_top -= 1
        v_mid += 1
    return set_quad(triangles, t, v_mid, v_top - 2, v_top, v_top - 1)


def create_bottom_face(
    length: int, triangles: MutableSequence[int], divs: int, t: int, ring: int
) -> int:
    """Write the quads of the cube's bottom face starting at offset ``t``.

    ``length`` is the total number of vertices of the mesh.
    """
    v = 1
    v_mid = length - (divs - 1) * (divs - 1)
    t = set_quad(triangles, t, ring - 1, v_mid, 0, 1)
    for _ in range(1, divs - 1):
        t = set_quad(triangles, t, v_mid, v_mid + 1, v, v + 1)
        v += 1
        v_mid += 1
    t = set_quad(triangles, t, v_mid, v + 2, v, v + 1)

    v_min = ring - 2
    v_mid -= divs - 2
    v_max = v + 2
    for _ in range(1, divs - 1):
        t = set_quad(triangles, t, v_min, v_mid + divs - 1, v_min + 1, v_mid)
        for _ in range(1, divs - 1):
            t = set_quad(triangles, t, v_mid + divs - 1, v_mid + divs, v_mid, v_mid + 1)
            v_mid += 1
        t = set_quad(triangles, t, v_mid + divs - 1, v_max + 1, v_mid, v_max)
        v_min -= 1
        v_mid += 1
        v_max += 1

    v_top = v_min - 1
    t = set_quad(triangles, t, v_top + 1, v_top, v_top + 2, v_mid)
    for _ in range(1, divs - 1):
        t = set_quad(triangles, t, v_top, v_top - 1, v_mid, v_mid + 1)
        v_top -= 1
        v_mid += 1
    return set_quad(triangles, t, v_top, v_top - 1, v_mid, v_top - 2)


def _cube_grid(divs: int) -> list[tuple[int, int, int]]:
    """Integer grid positions of the cube's surface vertices, in mesh order."""
    points: list[tuple[int, int, int]] = []
    for y in range(divs + 1):
        points.extend((x, y, 0) for x in range(divs + 1))
        points.extend((divs, y, z) for z in range(1, divs + 1))
        points.extend((x, y, divs) for x in range(divs - 1, -1, -1))
        points.extend((0, y, z) for z in range(divs - 1, 0, -1))
    points.extend((x, divs, z) for z in range(1, divs) for x in range(1, divs))
    points.extend((x, 0, z) for z in range(1, divs) for x in range(1, divs))
    return points


def _spherify(grid: np.ndarray, divs: int) -> np.ndarray:
    v = grid * np.float32(2.0 / divs) - np.float32(1.0)
    x2, y2, z2 = v[:, 0] ** 2, v[:, 1] ** 2, v[:, 2] ** 2
    out = np.empty_like(v)
    out[:, 0] = v[:, 0] * np.sqrt(1 - y2 / 2 - z2 / 2 + y2 * z2 / 3)
    out[:, 1] = v[:, 1] * np.sqrt(1 - x2 / 2 - z2 / 2 + x2 * z2 / 3)
    out[:, 2] = v[:, 2] * np.sqrt(1 - x2 / 2 - y2 / 2 + x2 * y2 / 3)
    return out


def generate_cubesphere(divs: int) -> Cubesphere:
    """Build a cube-sphere mesh with ``divs`` subdivisions per cube edge."""
    if divs < 2:
        raise ValueError(f"a cubesphere needs at least 2 divisions, got {divs}")

    grid = np.array(_cube_grid(divs), dtype=np.float32)

    quads = divs * divs * 6
    indices = [0] * (quads * 6)
    ring = divs * 4
    t = v = 0
    for _ in range(divs):
        for _ in range(ring - 1):
            t = set_quad(indices, t, v, v + 1, v + ring, v + ring + 1)
            v += 1
        t = set_quad(indices, t, v, v - ring + 1, v + ring, v + 1)
        v += 1
    t = create_top_face(indices, divs, t, ring)
    create_bottom_face(len(grid), indices, divs, t, ring)

    return Cubesphere(
        divs=divs,
        vertices=_spherify(grid, divs),
        indices=np.array(indices, dtype=np.uint32),
    )