"""
Transform

Decomposed joint transformation (translation, rotation, scale).

Matrices follow pyrr's row-major layout: points are row vectors
(p' = p @ M) and translation lives in row 3. pyrr's ``Quaternion.matrix33``
is the column-vector rotation, so the row-vector rotation of a quaternion
is its transpose.
"""

from dataclasses import dataclass, field

import numpy as np
from pyrr import Matrix33, Matrix44, Quaternion, Vector3


def rotation_matrix(quat) -> np.ndarray:
    """
    Row-major 3x3 rotation matrix of a quaternion [x, y, z, w].

    Args:
        quat: Quaternion, normalized on the fly

    Returns:
        3x3 numpy array such that p @ R rotates p by ``quat``
    """
    return np.asarray(Quaternion(quat).normalized.matrix33, dtype=np.float64).T


def quaternion_from_rotation(rotation) -> Quaternion:
    """
    Extract a unit quaternion from a row-major rotation matrix.

    Args:
        rotation: 3x3 orthonormal matrix

    Returns:
        Quaternion [x, y, z, w] with w >= 0
    """
    column_major = Matrix33(np.array(rotation, dtype=np.float64).T)
    quat = np.array(Quaternion.from_matrix(column_major), dtype=np.float64)
    quat /= np.linalg.norm(quat)
    if quat[3] < 0.0:
        quat = -quat
    return Quaternion(quat)


def _zero():
    return Vector3([0.0, 0.0, 0.0])


def _one():
    return Vector3([1.0, 1.0, 1.0])


@dataclass
class Transform:
    """
    Translation/rotation/scale triplet.

    Rotation is a unit pyrr quaternion stored as [x, y, z, w].
    """

    translation: Vector3 = field(default_factory=_zero)
    rotation: Quaternion = field(default_factory=Quaternion)
    scale: Vector3 = field(default_factory=_one)

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    def copy(self) -> "Transform":
        """Deep copy; the result shares no storage with this transform."""
        return Transform(
            translation=Vector3(np.array(self.translation)),
            rotation=Quaternion(np.array(self.rotation)),
            scale=Vector3(np.array(self.scale)),
        )

    def to_matrix(self) -> Matrix44:
        """
        Compose the row-major matrix for this transform.

        Scale is applied first, then rotation, then translation.
        """
        matrix = Matrix44.from_scale(np.array(self.scale, dtype=np.float64))
        matrix = matrix @ Matrix44.from_matrix33(rotation_matrix(self.rotation))
        matrix = matrix @ Matrix44.from_translation(np.array(self.translation, dtype=np.float64))
        return Matrix44(np.asarray(matrix, dtype=np.float64))

    def allclose(self, other: "Transform", atol: float = 1e-5) -> bool:
        """Compare with another transform, treating q and -q as the same rotation."""
        if not np.allclose(np.asarray(self.translation), np.asarray(other.translation), atol=atol):
            return False
        if not np.allclose(np.asarray(self.scale), np.asarray(other.scale), atol=atol):
            return False
        dot = float(np.dot(np.asarray(self.rotation, dtype=np.float64), np.asarray(other.rotation, dtype=np.float64)))
        return abs(abs(dot) - 1.0) <= atol

    def __repr__(self):
        return (
            f"Transform(t={list(np.round(np.asarray(self.translation), 4))}, "
            f"r={list(np.round(np.asarray(self.rotation), 4))}, s={list(np.round(np.asarray(self.scale), 4))})"
        )
