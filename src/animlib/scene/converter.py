"""
Transform Converter

Converts raw evaluated scene matrices into normalized
translation/rotation/scale in the Y-up, right-handed system.
"""

import logging
from enum import Enum
from typing import Optional

import numpy as np
from pyrr import Vector3

from ..animation.transform import Transform, quaternion_from_rotation
from ..config.settings import DEFAULT_AXIS_SYSTEM, DEFAULT_UNIT_SCALE, MIN_SCALE_MAGNITUDE

logger = logging.getLogger(__name__)


class AxisSystem(Enum):
    """Source coordinate systems."""
    Y_UP_RH = "y_up_rh"   # Y-up, right-handed (target)
    Z_UP_RH = "z_up_rh"   # Z-up, right-handed
    Y_UP_LH = "y_up_lh"   # Y-up, left-handed


# Row-vector basis changes into the target system (p_target = p_source @ M)
_BASIS_CHANGES = {
    AxisSystem.Y_UP_RH: np.eye(3),
    AxisSystem.Z_UP_RH: np.array([
        [1.0, 0.0, 0.0],
        [0.0, 0.0, -1.0],
        [0.0, 1.0, 0.0],
    ]),
    AxisSystem.Y_UP_LH: np.array([
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, -1.0],
    ]),
}


class TransformConverter:
    """
    Converts scene matrices to transforms in the target unit/axis system.

    Translation is multiplied by ``unit_scale``; rotation and scale are
    re-expressed in the target axis system.
    """

    def __init__(self, axis_system=DEFAULT_AXIS_SYSTEM, unit_scale: float = DEFAULT_UNIT_SCALE):
        """
        Initialize converter.

        Args:
            axis_system: Source AxisSystem (or its string value)
            unit_scale: Multiplier from scene units to target units

        Raises:
            ValueError: If the axis system is unknown or the unit scale isn't positive
        """
        self.axis_system = AxisSystem(axis_system)
        if not unit_scale > 0.0:
            raise ValueError(f"Unit scale must be positive, got {unit_scale}")
        self.unit_scale = float(unit_scale)

        basis = _BASIS_CHANGES[self.axis_system]
        self._basis = np.eye(4)
        self._basis[:3, :3] = basis
        self._basis_inverse = np.linalg.inv(self._basis)

    def convert_matrix(self, matrix) -> np.ndarray:
        """Express a row-major scene matrix in the target axis system."""
        return self._basis_inverse @ np.asarray(matrix, dtype=np.float64) @ self._basis

    def convert(self, matrix) -> Optional[Transform]:
        """
        Convert a raw evaluated matrix to a transform.

        Args:
            matrix: Row-major 4x4 matrix (translation in row 3)

        Returns:
            Transform, or None if the matrix is non-finite or has a collapsed axis
        """
        raw = np.asarray(matrix, dtype=np.float64)
        if raw.shape != (4, 4) or not np.all(np.isfinite(raw)):
            logger.debug("Rejecting malformed matrix")
            return None
        m = self.convert_matrix(raw)

        basis = m[:3, :3]
        scale = np.linalg.norm(basis, axis=1)
        if np.any(scale < MIN_SCALE_MAGNITUDE):
            logger.debug("Rejecting matrix with collapsed scale %s", scale)
            return None

        # Mirrored matrices carry the reflection on the x scale
        if np.linalg.det(basis) < 0.0:
            scale[0] = -scale[0]

        rotation = quaternion_from_rotation(basis / scale[:, None])

        return Transform(
            translation=Vector3(m[3, :3] * self.unit_scale),
            rotation=rotation,
            scale=Vector3(scale),
        )

    def __repr__(self):
        return f"TransformConverter(axis={self.axis_system.value}, unit_scale={self.unit_scale})"
