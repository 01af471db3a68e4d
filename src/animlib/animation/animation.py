"""
Animation

Raw (uncompressed) skeletal keyframe animation data.
"""

from enum import Enum
from typing import List

from .transform import Transform


class InterpolationType(Enum):
    """Keyframe interpolation types."""
    LINEAR = "LINEAR"
    STEP = "STEP"


class AnimationTarget(Enum):
    """Animated joint properties."""
    TRANSLATION = "translation"
    ROTATION = "rotation"
    SCALE = "scale"


class Keyframe:
    """
    Single keyframe of a track.

    Stores time, value and how the value blends toward the next key.
    """

    def __init__(self, time: float, value, interpolation: InterpolationType = InterpolationType.LINEAR):
        """
        Initialize keyframe.

        Args:
            time: Time in seconds, or normalized [0, 1] time for property tracks
            value: Value at this time (float, 2-vector, Vector3 or Quaternion)
            interpolation: Interpolation toward the next keyframe
        """
        self.time = time
        self.value = value
        self.interpolation = interpolation

    def __repr__(self):
        return f"Keyframe(t={self.time:.3f}, v={self.value}, {self.interpolation.value})"


def keys_are_valid(keyframes: List[Keyframe], end_time: float) -> bool:
    """
    Check that key times are strictly increasing and lie in [0, end_time].

    Args:
        keyframes: Keys to check
        end_time: Upper bound of the time range

    Returns:
        True if every key time is in range and unique
    """
    previous = None
    for key in keyframes:
        if key.time < 0.0 or key.time > end_time:
            return False
        if previous is not None and key.time <= previous:
            return False
        previous = key.time
    return True


class JointTrack:
    """
    Keyframes of a single skeleton joint.

    Translation, rotation and scale are keyed independently, although the
    sampler always fills the three channels at the same times.
    """

    def __init__(self):
        self.translations: List[Keyframe] = []
        self.rotations: List[Keyframe] = []
        self.scales: List[Keyframe] = []

    def add_key(self, time: float, transform: Transform):
        """Push one keyframe per channel at ``time``."""
        self.translations.append(Keyframe(time, transform.translation))
        self.rotations.append(Keyframe(time, transform.rotation))
        self.scales.append(Keyframe(time, transform.scale))

    @property
    def key_count(self) -> int:
        return len(self.translations) + len(self.rotations) + len(self.scales)

    def validate(self, duration: float) -> bool:
        """
        Validate the track against its animation duration.

        Every channel needs at least one key, with strictly increasing times
        inside [0, duration].
        """
        for keys in (self.translations, self.rotations, self.scales):
            if not keys:
                return False
            if not keys_are_valid(keys, duration):
                return False
        return True

    def __repr__(self):
        return (
            f"JointTrack(translations={len(self.translations)}, "
            f"rotations={len(self.rotations)}, scales={len(self.scales)})"
        )


class RawAnimation:
    """
    Complete animation of a skeleton.

    Tracks are indexed like the skeleton joints: ``tracks[i]`` animates joint ``i``.
    """

    def __init__(self, name: str, duration: float = 1.0):
        """
        Initialize animation.

        Args:
            name: Animation name (the source clip name)
            duration: Duration in seconds
        """
        self.name = name
        self.duration = duration
        self.tracks: List[JointTrack] = []

    @property
    def num_tracks(self) -> int:
        return len(self.tracks)

    @property
    def key_count(self) -> int:
        return sum(track.key_count for track in self.tracks)

    def validate(self) -> bool:
        """Check duration and every track's keyframes."""
        if self.duration <= 0.0:
            return False
        return all(track.validate(self.duration) for track in self.tracks)

    def __repr__(self):
        return f"RawAnimation(name='{self.name}', duration={self.duration:.2f}s, tracks={len(self.tracks)})"


# Ordered animations of one scene, one per clip
AnimationSet = List[RawAnimation]
