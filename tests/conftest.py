"""Shared meshes for the gradient operator tests."""

from __future__ import annotations

import numpy as np
import pytest
import trimesh

from meshgrad import Mesh


@pytest.fixture
def right_triangle():
    V = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    F = np.array([[0, 1, 2]])
    return V, F


@pytest.fixture
def icosphere() -> Mesh:
    return Mesh.from_trimesh(trimesh.creation.icosphere(subdivisions=2, radius=1.0))


@pytest.fixture
def planar_grid():
    """Jittered 6x5 grid in the plane, two triangles per cell."""
    rng = np.random.default_rng(7)
    nx, ny = 6, 5
    xs, ys = np.meshgrid(np.arange(nx, dtype=float), np.arange(ny, dtype=float))
    V = np.column_stack([xs.ravel(), ys.ravel()])
    V += rng.uniform(-0.2, 0.2, size=V.shape)

    faces = []
    for r in range(ny - 1):
        for c in range(nx - 1):
            a = r * nx + c
            b, d, e = a + 1, a + nx, a + nx + 1
            faces.append([a, b, e])
            faces.append([a, e, d])
    return V, np.array(faces)
