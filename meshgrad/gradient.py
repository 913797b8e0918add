import logging

import numpy as np
import scipy.sparse as sp

from meshgrad.exceptions import InvalidMeshError

logger = logging.getLogger(__name__)

_FORMATS = ("csr", "csc", "coo")


def _check_mesh(V, F):
    """
    Normalize (V, F) to float64 positions and integer faces.

    Returns (V3, F, dim) where V3 is V embedded in R^3 (z=0 for planar input)
    and dim is the ambient dimension of the input V.
    """
    V = np.asarray(V, dtype=np.float64)
    if V.ndim != 2 or V.shape[1] not in (2, 3):
        raise InvalidMeshError(f"V must be an n x 2 or n x 3 array, got shape {V.shape}")
    n, dim = V.shape

    F = np.asarray(F)
    if F.ndim == 1 and F.size == 0:
        F = np.empty((0, 3), dtype=np.int64)
    if F.ndim != 2 or F.shape[1] != 3:
        raise InvalidMeshError(f"F must be an m x 3 array of triangles, got shape {F.shape}")
    if not np.issubdtype(F.dtype, np.integer):
        raise InvalidMeshError(f"F must hold integer vertex indices, got dtype {F.dtype}")

    if F.shape[0] > 0:
        lo, hi = int(F.min()), int(F.max())
        if lo < 0:
            raise InvalidMeshError(f"Face index {lo} is out of range [0, {n})", index=lo)
        if hi >= n:
            raise InvalidMeshError(f"Face index {hi} is out of range [0, {n})", index=hi)

    if dim == 2:
        # append with 0s so the planar case shares the 3D formulas
        V = np.hstack([V, np.zeros((n, 1))])
    return V, F.astype(np.int64, copy=False), dim


def _edge_perpendiculars(V, F):
    i, j, k = F[:, 0], F[:, 1], F[:, 2]
    vi, vj, vk = V[i], V[j], V[k]

    # edge vectors, named after the opposite vertex
    e_i = vk - vj
    e_j = vi - vk
    e_k = vj - vi

    N = np.cross(e_i, e_j)                         # (m,3)
    dblA = np.linalg.norm(N, axis=1)               # = 2*area

    # zero-area faces are left unguarded: their rows come out inf/nan
    with np.errstate(divide="ignore", invalid="ignore"):
        u = N / dblA[:, None]
        eperp_j = np.cross(u, e_j) / dblA[:, None]
        eperp_k = np.cross(u, e_k) / dblA[:, None]

    n_degenerate = int(np.count_nonzero(dblA == 0.0))
    if n_degenerate:
        logger.warning(
            "%d of %d faces have zero area; their gradient rows are non-finite",
            n_degenerate, F.shape[0],
        )
    return eperp_j, eperp_k, dblA


def face_edge_perpendiculars(V: np.ndarray, F: np.ndarray):
    """
    Per-face rotated edge vectors used by the gradient operator.

    Returns:
      eperp_j : (m,3) = (u × (Vi - Vk)) / dblA, coefficient of Xj
      eperp_k : (m,3) = (u × (Vj - Vi)) / dblA, coefficient of Xk
      dblA    : (m,)  = 2 * area = ||(Vk - Vj) × (Vi - Vk)||
    The coefficient of Xi is -(eperp_j + eperp_k).
    Planar (n,2) input is embedded in the z=0 plane.
    """
    V3, F, _ = _check_mesh(V, F)
    return _edge_perpendiculars(V3, F)


def grad(V: np.ndarray, F: np.ndarray, *, format: str = "csr") -> sp.spmatrix:
    """
    Sparse gradient operator of piecewise-linear vertex functions.

    G has shape (dim*m, n) with dim = V.shape[1]. Row axis*m + f holds the
    `axis` component of the constant gradient on face f, so for a vertex
    function x the per-face gradients are (G @ x).reshape(dim, m).T.

    On face (i,j,k):
      grad(X) = (Xj - Xi) * eperp_j + (Xk - Xi) * eperp_k

    Faces with zero area are not rejected; their rows hold inf/nan.
    Raises InvalidMeshError for bad shapes or out-of-range face indices.
    """
    if format not in _FORMATS:
        raise ValueError(f"format must be one of {_FORMATS}, got {format!r}")

    V3, F, dim = _check_mesh(V, F)
    return _assemble(V3, F, dim).asformat(format)


def _assemble(V3, F, dim):
    n, m = V3.shape[0], F.shape[0]
    eperp_j, eperp_k, _ = _edge_perpendiculars(V3, F)

    i, j, k = F[:, 0], F[:, 1], F[:, 2]
    face = np.tile(np.arange(m), 4)
    cols = np.concatenate([j, i, k, i])

    rows = np.concatenate([axis * m + face for axis in range(dim)])
    data = np.concatenate([
        np.concatenate([eperp_j[:, a], -eperp_j[:, a], eperp_k[:, a], -eperp_k[:, a]])
        for a in range(dim)
    ])

    G = sp.coo_matrix((data, (rows, np.tile(cols, dim))), shape=(dim * m, n))
    # vertex i receives two terms per axis; they must add, not overwrite
    G.sum_duplicates()

    logger.debug("gradient operator: %d vertices, %d faces, dim=%d, nnz=%d", n, m, dim, G.nnz)
    return G


def gradient_scalar_per_face(V: np.ndarray, F: np.ndarray, u: np.ndarray) -> np.ndarray:
    """
    Compute per-face gradient of a scalar vertex function u.
    Returns:
      grad_u : (m,dim) vector constant on each face.
    """
    V3, F, dim = _check_mesh(V, F)
    n = V3.shape[0]

    u = np.asarray(u, dtype=np.float64)
    if u.ndim != 1 or u.shape[0] != n:
        raise ValueError(f"u must have shape ({n},), got {u.shape}")

    G = _assemble(V3, F, dim)
    return (G @ u).reshape(dim, -1).T
