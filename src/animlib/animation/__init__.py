"""
Animation Data

Skeletons and the raw keyframe representation produced by extraction.
"""

from .transform import Transform
from .skeleton import Joint, Skeleton
from .animation import (
    AnimationSet, AnimationTarget, InterpolationType, JointTrack, Keyframe, RawAnimation
)
from .track import RawTrack, ValueKind

__all__ = [
    'Transform',
    'Joint',
    'Skeleton',
    'Keyframe',
    'JointTrack',
    'RawAnimation',
    'AnimationSet',
    'AnimationTarget',
    'InterpolationType',
    'RawTrack',
    'ValueKind',
]
