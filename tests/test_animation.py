"""Tests for raw animation data and validation"""

import pytest
import numpy as np
from pyrr import Quaternion, Vector3

from src.animlib.animation import (
    InterpolationType, JointTrack, Keyframe, RawAnimation, RawTrack, Transform, ValueKind
)


def _track(*times):
    track = JointTrack()
    for t in times:
        track.add_key(t, Transform())
    return track


def test_keyframe_defaults_to_linear():
    """Keyframes interpolate linearly unless told otherwise"""
    key = Keyframe(0.5, 1.0)
    assert key.interpolation == InterpolationType.LINEAR


def test_joint_track_add_key_fills_all_channels():
    """One key lands in each of the three channels"""
    transform = Transform(Vector3([1.0, 2.0, 3.0]), Quaternion(), Vector3([2.0, 2.0, 2.0]))
    track = JointTrack()
    track.add_key(0.25, transform)

    assert len(track.translations) == len(track.rotations) == len(track.scales) == 1
    assert np.allclose(np.asarray(track.translations[0].value), [1.0, 2.0, 3.0])
    assert np.allclose(np.asarray(track.scales[0].value), [2.0, 2.0, 2.0])
    assert track.rotations[0].time == 0.25
    assert track.key_count == 3


def test_joint_track_validation():
    """Keys must be non-empty, strictly increasing and within the duration"""
    assert _track(0.0, 0.5, 1.0).validate(1.0)
    assert _track(0.0).validate(1.0)
    assert not JointTrack().validate(1.0)
    assert not _track(0.0, 0.5, 0.5).validate(1.0)
    assert not _track(0.0, 1.5).validate(1.0)
    assert not _track(-0.1, 0.5).validate(1.0)


def test_raw_animation_validation():
    """Animations need a positive duration and valid tracks"""
    animation = RawAnimation("walk", duration=1.0)
    animation.tracks = [_track(0.0, 1.0), _track(0.0)]
    assert animation.validate()
    assert animation.num_tracks == 2
    assert animation.key_count == 9

    animation.duration = 0.0
    assert not animation.validate()

    animation.duration = 1.0
    animation.tracks.append(JointTrack())
    assert not animation.validate()


def test_raw_track_validation():
    """Property track times are normalized to [0, 1]"""
    track = RawTrack(ValueKind.FLOAT, name="node:prop")
    track.add_keyframe(0.0, 1.0, InterpolationType.LINEAR)
    track.add_keyframe(1.0, 2.0, InterpolationType.LINEAR)
    assert track.validate()
    assert len(track) == 2

    track.add_keyframe(1.5, 3.0, InterpolationType.LINEAR)
    assert not track.validate()

