"""
AnimLib - Skeletal Animation Extraction

Resamples animated scenes into normalized, skeleton-relative raw keyframe
tracks ready for compression and runtime playback.
"""

# Configuration
from .config.settings import *

# Data model
from .animation import (
    AnimationSet, InterpolationType, Joint, JointTrack, Keyframe, RawAnimation, RawTrack,
    Skeleton, Transform, ValueKind,
)

# Scenes
from .scene import (
    AnimClip, AnimScene, AxisSystem, GltfScene, MemoryScene, PropertyType, SceneProperty,
    TimeMode, TimeSpan, TransformConverter,
)

# Extraction
from .extraction import (
    AnimationSetBuilder, JointAnimationSampler, PropertyCurveSampler, SamplingPlanner,
    SamplingWindow, extract_animations, extract_track, plan_sampling_window,
)

# Errors
from .errors import (
    AnimationExtractionError, AnimationValidationError, NoAnimationFoundError,
    NodeNotFoundError, PropertyNotFoundError, TransformConversionError,
    UnsupportedPropertyTypeError,
)

__version__ = "0.1.0"
__all__ = [
    # Config (exported via *)
    # Data model
    "AnimationSet",
    "InterpolationType",
    "Joint",
    "JointTrack",
    "Keyframe",
    "RawAnimation",
    "RawTrack",
    "Skeleton",
    "Transform",
    "ValueKind",
    # Scenes
    "AnimClip",
    "AnimScene",
    "AxisSystem",
    "GltfScene",
    "MemoryScene",
    "PropertyType",
    "SceneProperty",
    "TimeMode",
    "TimeSpan",
    "TransformConverter",
    # Extraction
    "AnimationSetBuilder",
    "JointAnimationSampler",
    "PropertyCurveSampler",
    "SamplingPlanner",
    "SamplingWindow",
    "extract_animations",
    "extract_track",
    "plan_sampling_window",
    # Errors
    "AnimationExtractionError",
    "AnimationValidationError",
    "NoAnimationFoundError",
    "NodeNotFoundError",
    "PropertyNotFoundError",
    "TransformConversionError",
    "UnsupportedPropertyTypeError",
]
