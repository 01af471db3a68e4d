"""
Sampling

Sampling windows and the fixed-rate sampling loop shared by the joint and
property samplers.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Optional

from ..config.settings import (
    DEFAULT_SAMPLING_RATE,
    KEY_RESERVE_MARGIN,
    POSE_DURATION,
    SAMPLE_TIME_TOLERANCE,
)
from ..scene.base_scene import AnimClip, AnimScene, TimeSpan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SamplingWindow:
    """Time range and period used to sample one clip.

    Attributes:
        start: First sample time in seconds (scene time)
        end: Last sample time in seconds (scene time)
        duration: end - start, or POSE_DURATION when the span is empty
        period: Seconds between two samples
    """
    start: float
    end: float
    duration: float
    period: float

    @property
    def rate(self) -> float:
        return 1.0 / self.period

    def normalize(self, time: float) -> float:
        """Map a scene time to [0, 1] over the window duration."""
        return (time - self.start) / self.duration


def plan_sampling_window(
    time_span: TimeSpan,
    scene_frame_rate: float,
    sampling_rate: float = DEFAULT_SAMPLING_RATE,
) -> SamplingWindow:
    """
    Derive the sampling window of a clip.

    Args:
        time_span: Clip local span, or the scene default span
        scene_frame_rate: Scene frame rate in Hz
        sampling_rate: Override rate in Hz; values <= 0 use the scene rate

    Returns:
        SamplingWindow for the span
    """
    if sampling_rate > 0.0:
        rate = sampling_rate
        logger.info("Using sampling rate of %ghz.", rate)
    else:
        rate = scene_frame_rate
        logger.info("Using scene sampling rate of %ghz.", rate)

    start = float(time_span.start)
    end = float(time_span.stop)

    # A pose (empty span) still gets a default duration
    duration = end - start if end > start else POSE_DURATION

    return SamplingWindow(start=start, end=end, duration=duration, period=1.0 / rate)


class SamplingPlanner:
    """
    Plans sampling windows for the clips of a scene.
    """

    def __init__(self, sampling_rate: float = DEFAULT_SAMPLING_RATE):
        """
        Initialize planner.

        Args:
            sampling_rate: Override rate in Hz; values <= 0 use the scene rate
        """
        self.sampling_rate = sampling_rate

    def resolve_time_span(self, scene: AnimScene, clip: Optional[AnimClip]) -> TimeSpan:
        """Clip local span if it has one, the scene default span otherwise."""
        span = scene.get_clip_time_span(clip) if clip is not None else None
        if span is None:
            span = scene.get_default_time_span()
        return span

    def plan(self, scene: AnimScene, clip: Optional[AnimClip]) -> SamplingWindow:
        return plan_sampling_window(
            self.resolve_time_span(scene, clip),
            scene.get_frame_rate(),
            self.sampling_rate,
        )


def estimate_key_count(window: SamplingWindow) -> int:
    """Upper bound on the number of samples taken over ``window``."""
    span = max(window.end - window.start, 0.0)
    return int(math.ceil(span / window.period)) + KEY_RESERVE_MARGIN


def sample_times(window: SamplingWindow) -> Iterator[float]:
    """
    Yield sample times over a window.

    Times are start, start + period, start + 2 * period, ... and the last
    sample is always exactly ``end``. At least one time is yielded, even
    for an empty span.

    Args:
        window: Sampling window

    Yields:
        Scene times in seconds
    """
    tolerance = window.period * SAMPLE_TIME_TOLERANCE
    for i in range(estimate_key_count(window)):
        t = window.start + i * window.period
        if t >= window.end - tolerance:
            # Clamp so an inverted span never yields a time before start
            yield max(window.end, window.start)
            return
        yield t
