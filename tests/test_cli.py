"""Tests for the command line entry point"""

import numpy as np
from pygltflib import (
    FLOAT, GLTF2, SCALAR, VEC3, Accessor, Animation, AnimationChannel, AnimationChannelTarget,
    AnimationSampler, Buffer, BufferView, Node, Scene, Skin,
)

from src.animlib.cli import build_parser, main


def _write_glb(path):
    times = np.array([0.0, 1.0], dtype=np.float32)
    values = np.array([[0.0, 0.0, 0.0], [0.0, 2.0, 0.0]], dtype=np.float32)
    blob = times.tobytes() + values.tobytes()

    gltf = GLTF2(
        scene=0,
        scenes=[Scene(nodes=[0])],
        nodes=[Node(name="root", children=[1]), Node(name="child")],
        skins=[Skin(joints=[0, 1])],
        animations=[
            Animation(
                name="Move",
                samplers=[AnimationSampler(input=0, output=1)],
                channels=[AnimationChannel(sampler=0, target=AnimationChannelTarget(node=1, path="translation"))],
            )
        ],
        accessors=[
            Accessor(bufferView=0, componentType=FLOAT, count=2, type=SCALAR, min=[0.0], max=[1.0]),
            Accessor(bufferView=1, componentType=FLOAT, count=2, type=VEC3),
        ],
        bufferViews=[
            BufferView(buffer=0, byteOffset=0, byteLength=8),
            BufferView(buffer=0, byteOffset=8, byteLength=24),
        ],
        buffers=[Buffer(byteLength=len(blob))],
    )
    gltf.set_binary_blob(blob)
    gltf.save_binary(str(path))
    return path


def test_parser_defaults():
    """Defaults resample at the scene rate without conversion"""
    args = build_parser().parse_args(["model.glb"])

    assert args.sampling_rate == 0.0
    assert args.axis == "y_up_rh"
    assert args.unit_scale == 1.0
    assert args.track == []


def test_missing_file(tmp_path, capsys):
    """Missing inputs fail with an error"""
    assert main([str(tmp_path / "missing.glb")]) == 1
    assert "not found" in capsys.readouterr().err


def test_unsupported_extension(tmp_path, capsys):
    """Only GLTF/GLB inputs are accepted"""
    path = tmp_path / "model.fbx"
    path.write_bytes(b"")

    assert main([str(path)]) == 1
    assert "Unsupported file format" in capsys.readouterr().err


def test_invalid_unit_scale(tmp_path, capsys):
    """Non-positive unit scales are rejected"""
    path = _write_glb(tmp_path / "model.glb")

    assert main([str(path), "--unit-scale", "0"]) == 1
    assert "Unit scale" in capsys.readouterr().err


def test_extract(tmp_path, capsys):
    """Every animation is summarized"""
    path = _write_glb(tmp_path / "model.glb")

    assert main([str(path), "--sampling-rate", "4"]) == 0
    out = capsys.readouterr().out
    assert "Move: duration=1.000s, joints=2" in out


def test_extract_track(tmp_path, capsys):
    """Requested property tracks are summarized"""
    path = _write_glb(tmp_path / "model.glb")

    assert main([str(path), "--sampling-rate", "4", "--track", "child:translation"]) == 0
    assert "child:translation: kind=FLOAT3, keys=5" in capsys.readouterr().out


def test_unknown_track_node(tmp_path, capsys):
    """Unknown nodes fail the run"""
    path = _write_glb(tmp_path / "model.glb")

    assert main([str(path), "--track", "tail:translation"]) == 1
    assert "tail" in capsys.readouterr().err


def test_malformed_track(tmp_path, capsys):
    """Tracks must be NODE:PROPERTY"""
    path = _write_glb(tmp_path / "model.glb")

    assert main([str(path), "--track", "child"]) == 1
    assert "NODE:PROPERTY" in capsys.readouterr().err


def test_malformed_asset(tmp_path, capsys):
    """Unreadable assets fail with an error instead of a traceback"""
    path = tmp_path / "broken.gltf"
    path.write_text("{not json")

    assert main([str(path)]) == 1
    assert "Failed to load scene" in capsys.readouterr().err
