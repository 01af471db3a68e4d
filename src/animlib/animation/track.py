"""
Track

Generic keyframe tracks for non-skeletal scene properties.
"""

from enum import Enum
from typing import List

from .animation import InterpolationType, Keyframe, keys_are_valid


class ValueKind(Enum):
    """Value types a property track can hold."""
    FLOAT = 1
    FLOAT2 = 2
    FLOAT3 = 3


class RawTrack:
    """
    Keyframes of one scene property.

    Key times are normalized to [0, 1] over the sampled window.
    """

    def __init__(self, value_kind: ValueKind, name: str = ""):
        """
        Initialize track.

        Args:
            value_kind: Kind of value stored in every keyframe
            name: Track name, usually "node:property"
        """
        self.value_kind = value_kind
        self.name = name
        self.keyframes: List[Keyframe] = []

    def add_keyframe(self, time: float, value, interpolation: InterpolationType):
        self.keyframes.append(Keyframe(time, value, interpolation))

    def validate(self) -> bool:
        """Check that key times are strictly increasing within [0, 1]."""
        return keys_are_valid(self.keyframes, 1.0)

    def __len__(self):
        return len(self.keyframes)

    def __repr__(self):
        return f"RawTrack(name='{self.name}', kind={self.value_kind.name}, keyframes={len(self.keyframes)})"
