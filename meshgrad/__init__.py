# meshgrad/__init__.py
from .exceptions import InvalidMeshError, MeshGradError
from .gradient import face_edge_perpendiculars, grad, gradient_scalar_per_face
from .mesh import Mesh

__all__ = [
    "InvalidMeshError",
    "MeshGradError",
    "Mesh",
    "face_edge_perpendiculars",
    "grad",
    "gradient_scalar_per_face",
]
