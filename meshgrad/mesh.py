# meshgrad/mesh.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
import numpy as np
import scipy.sparse as sp
import trimesh

from meshgrad.gradient import grad, gradient_scalar_per_face

logger = logging.getLogger(__name__)


@dataclass
class Mesh:
    """Tiny mesh wrapper: vertex positions V (n,2|3) and triangles F (m,3)."""
    V: np.ndarray
    F: np.ndarray

    @classmethod
    def load(
        cls,
        path: str,
        process: bool = True,
        recenter: bool = True,
        rescale_unit: bool = True,
    ) -> "Mesh":
        """
        Load a surface mesh via trimesh, ensure triangles, recenter at origin,
        and rescale to unit size (so all models have comparable scale).
        F comes back as 0-based int64 indices, ready for grad(V, F).
        """
        if not os.path.exists(path):
            raise FileNotFoundError(path)

        obj = trimesh.load(path, process=process)

        if isinstance(obj, trimesh.Scene):
            if len(obj.geometry) == 0:
                raise ValueError("Scene contains no geometry.")
            tm = trimesh.util.concatenate(tuple(obj.dump()))
        elif isinstance(obj, trimesh.Trimesh):
            tm = obj
        else:
            raise TypeError(f"Unsupported type from trimesh.load: {type(obj)}")

        if tm.faces is None or len(tm.faces) == 0:
            raise ValueError("Loaded geometry has no faces (is it a point cloud?)")

        translation = -tm.centroid if recenter else np.zeros(3)
        if rescale_unit:
            if tm.scale == 0:
                raise ValueError("Degenerate geometry with zero scale.")
            scale = 1.0 / float(tm.scale)
        else:
            scale = 1.0

        V = (tm.vertices + translation) * scale
        F = tm.faces.astype(np.int64, copy=False)
        logger.debug("loaded %s: %d vertices, %d faces", path, V.shape[0], F.shape[0])

        return cls(V=V.astype(np.float64, copy=False), F=F)

    @classmethod
    def from_trimesh(cls, tm: trimesh.Trimesh) -> "Mesh":
        """Wrap an in-memory trimesh as-is (no recentering or rescaling)."""
        return cls(
            V=np.asarray(tm.vertices, dtype=np.float64),
            F=np.asarray(tm.faces, dtype=np.int64),
        )

    def gradient_operator(self, format: str = "csr") -> sp.spmatrix:
        return grad(self.V, self.F, format=format)

    def gradient(self, u: np.ndarray) -> np.ndarray:
        return gradient_scalar_per_face(self.V, self.F, u)
