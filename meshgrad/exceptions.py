"""Custom exception types for mesh gradient operators."""

from __future__ import annotations


class MeshGradError(Exception):
    """Base class for domain-specific errors."""


class InvalidMeshError(MeshGradError, ValueError):
    """Raised when vertex positions or face indices are structurally invalid."""

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


__all__ = ["MeshGradError", "InvalidMeshError"]
