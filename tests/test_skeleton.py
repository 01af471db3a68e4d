"""Tests for skeleton joints and bind poses"""

import numpy as np
from pyrr import Quaternion, Vector3

from src.animlib.animation import Joint, Skeleton, Transform


def test_create_joint_indices_and_roots():
    """Joints are indexed in insertion order, roots have no parent"""
    skeleton = Skeleton("Rig")
    hips = skeleton.create_joint("hips")
    spine = skeleton.create_joint("spine", parent=hips)
    skeleton.create_joint("head", parent=spine)

    assert skeleton.num_joints == 3
    assert skeleton.joint_names == ["hips", "spine", "head"]
    assert [j.index for j in skeleton.joints] == [0, 1, 2]
    assert skeleton.root_joints == [hips]
    assert not skeleton.has_parent(0)
    assert skeleton.has_parent(1)
    assert spine in hips.children


def test_get_joint():
    """Joints can be looked up by name"""
    skeleton = Skeleton()
    skeleton.create_joint("hips")

    assert skeleton.get_joint("hips").name == "hips"
    assert skeleton.get_joint("tail") is None


def test_add_joint_reindexes():
    """add_joint assigns the joint's position as its index"""
    skeleton = Skeleton()
    joint = Joint("root", index=42)
    skeleton.add_joint(joint)

    assert joint.index == 0
    assert skeleton.root_joints == [joint]


def test_bind_pose_defaults_to_identity():
    """Joints created without a bind pose rest at identity"""
    skeleton = Skeleton()
    skeleton.create_joint("hips")

    assert skeleton.get_joint_local_bind_pose(0).allclose(Transform.identity())


def test_bind_pose_is_a_copy():
    """Mutating a returned bind pose leaves the joint untouched"""
    rest = Transform(Vector3([0.0, 1.0, 0.0]), Quaternion([0.0, 0.0, 0.0, 1.0]), Vector3([1.0, 1.0, 1.0]))
    skeleton = Skeleton()
    skeleton.create_joint("hips", bind_pose=rest)

    pose = skeleton.get_joint_local_bind_pose(0)
    pose.translation[1] = 10.0

    assert np.allclose(np.asarray(skeleton.get_joint_local_bind_pose(0).translation), [0.0, 1.0, 0.0])


def test_create_joint_copies_bind_pose():
    """Later edits to the source transform don't reach the joint"""
    rest = Transform(Vector3([0.0, 1.0, 0.0]))
    skeleton = Skeleton()
    skeleton.create_joint("hips", bind_pose=rest)

    rest.translation[1] = 10.0

    assert np.allclose(np.asarray(skeleton.get_joint("hips").base_translation), [0.0, 1.0, 0.0])
