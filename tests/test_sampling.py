"""Tests for sampling windows and the sampling loop"""

import pytest
import numpy as np

from src.animlib.extraction.sampling import (
    SamplingPlanner,
    SamplingWindow,
    estimate_key_count,
    plan_sampling_window,
    sample_times,
)
from src.animlib.scene.base_scene import TimeMode, TimeSpan
from src.animlib.scene.memory_scene import MemoryScene


def test_override_rate_sets_period():
    """A positive override rate wins over the scene rate"""
    window = plan_sampling_window(TimeSpan(0.0, 2.0), scene_frame_rate=60.0, sampling_rate=24.0)

    assert window.period == pytest.approx(1.0 / 24.0)
    assert window.rate == pytest.approx(24.0)


@pytest.mark.parametrize("override", [0.0, -5.0])
def test_non_positive_override_uses_scene_rate(override):
    """Rates <= 0 fall back to the scene frame rate"""
    window = plan_sampling_window(TimeSpan(0.0, 2.0), scene_frame_rate=30.0, sampling_rate=override)

    assert window.period == pytest.approx(1.0 / 30.0)


def test_window_bounds_and_duration():
    """Start/end come from the span, duration is their difference"""
    window = plan_sampling_window(TimeSpan(1.5, 4.0), scene_frame_rate=24.0)

    assert window.start == 1.5
    assert window.end == 4.0
    assert window.duration == pytest.approx(2.5)


@pytest.mark.parametrize("span", [TimeSpan(2.0, 2.0), TimeSpan(3.0, 1.0)])
def test_degenerate_span_has_default_duration(span):
    """Pose-only clips get a 1 second duration"""
    window = plan_sampling_window(span, scene_frame_rate=24.0)

    assert window.duration == 1.0
    assert window.period > 0.0


def test_normalize():
    """Scene times map to [0, 1] over the window"""
    window = SamplingWindow(start=1.0, end=3.0, duration=2.0, period=0.5)

    assert window.normalize(1.0) == 0.0
    assert window.normalize(2.0) == 0.5
    assert window.normalize(3.0) == 1.0


def test_planner_uses_clip_span():
    """A clip with its own span is planned over that span"""
    scene = MemoryScene(
        clips=[("run", TimeSpan(0.5, 1.5))],
        default_time_span=TimeSpan(0.0, 10.0),
        time_mode=TimeMode.FRAMES_24,
    )
    clip = scene.get_clips()[0]

    window = SamplingPlanner().plan(scene, clip)

    assert window.start == 0.5
    assert window.end == 1.5
    assert window.period == pytest.approx(1.0 / 24.0)


def test_planner_falls_back_to_default_span():
    """A clip without a span uses the scene default span"""
    scene = MemoryScene(clips=["idle"], default_time_span=TimeSpan(0.0, 3.0))
    clip = scene.get_clips()[0]

    window = SamplingPlanner(sampling_rate=10.0).plan(scene, clip)

    assert window.start == 0.0
    assert window.end == 3.0
    assert window.period == pytest.approx(0.1)


def test_planner_custom_frame_rate():
    """CUSTOM time mode reads the scene custom rate"""
    scene = MemoryScene(
        clips=["idle"],
        default_time_span=TimeSpan(0.0, 1.0),
        time_mode=TimeMode.CUSTOM,
        custom_frame_rate=12.5,
    )

    window = SamplingPlanner().plan(scene, scene.get_clips()[0])

    assert window.period == pytest.approx(1.0 / 12.5)


def test_time_mode_frame_rates():
    """Time modes resolve to their frame rates"""
    assert TimeMode.FRAMES_24.frame_rate == 24.0
    assert TimeMode.PAL.frame_rate == 25.0
    assert TimeMode.FRAMES_59_94.frame_rate == pytest.approx(59.94)
    assert TimeMode.NTSC_FULL_FRAME.frame_rate == pytest.approx(29.97, abs=1e-3)
    assert TimeMode.CUSTOM.frame_rate is None
    assert TimeMode.FRAMES_30 is not TimeMode.FRAMES_30_DROP


def test_sample_times_include_endpoint():
    """Sampling [0, 2] at 10hz gives 21 times ending exactly at 2"""
    window = plan_sampling_window(TimeSpan(0.0, 2.0), scene_frame_rate=30.0, sampling_rate=10.0)
    times = list(sample_times(window))

    assert len(times) == 21
    assert times[0] == 0.0
    assert times[-1] == 2.0
    assert np.allclose(times, np.linspace(0.0, 2.0, 21))
    assert all(b > a for a, b in zip(times, times[1:]))


def test_sample_times_forces_end_on_partial_period():
    """The final sample lands on end even if end isn't a period multiple"""
    window = plan_sampling_window(TimeSpan(0.0, 1.0), scene_frame_rate=3.5)
    times = list(sample_times(window))

    assert times[-1] == 1.0
    assert len(times) == 5  # 0, 2/7, 4/7, 6/7, 1
    assert times[-2] < times[-1]


def test_sample_times_offset_window():
    """Times are scene times starting at the window start"""
    window = plan_sampling_window(TimeSpan(1.0, 2.0), scene_frame_rate=30.0, sampling_rate=4.0)
    times = list(sample_times(window))

    assert np.allclose(times, [1.0, 1.25, 1.5, 1.75, 2.0])


@pytest.mark.parametrize("span", [TimeSpan(2.0, 2.0), TimeSpan(3.0, 1.0)])
def test_sample_times_empty_span_samples_once(span):
    """The loop runs once even when the window is empty"""
    window = plan_sampling_window(span, scene_frame_rate=24.0)
    times = list(sample_times(window))

    assert times == [span.start]


def test_estimate_key_count_bounds_samples():
    """The reservation estimate is never exceeded"""
    window = plan_sampling_window(TimeSpan(0.0, 2.0), scene_frame_rate=30.0, sampling_rate=10.0)

    assert estimate_key_count(window) >= 21
    assert len(list(sample_times(window))) <= estimate_key_count(window)
