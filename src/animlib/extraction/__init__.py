"""
Extraction

Resamples scene clips and properties into raw keyframe tracks.
"""

from .sampling import (
    SamplingPlanner, SamplingWindow, estimate_key_count, plan_sampling_window, sample_times
)
from .joint_sampler import JointAnimationSampler
from .property_sampler import DECODERS, PropertyCurveSampler, extract_track
from .builder import AnimationSetBuilder, extract_animations

__all__ = [
    'SamplingWindow',
    'SamplingPlanner',
    'plan_sampling_window',
    'estimate_key_count',
    'sample_times',
    'JointAnimationSampler',
    'PropertyCurveSampler',
    'DECODERS',
    'extract_track',
    'AnimationSetBuilder',
    'extract_animations',
]
