"""
Joint Animation Sampler

Samples the scene node matching each skeleton joint into joint tracks.
"""

import logging
from typing import Any, List

from ..animation.animation import JointTrack, RawAnimation
from ..animation.skeleton import Skeleton
from ..errors import AnimationValidationError, TransformConversionError
from ..scene.base_scene import AnimClip, AnimScene
from ..scene.converter import TransformConverter
from .sampling import SamplingWindow, sample_times

logger = logging.getLogger(__name__)


class JointAnimationSampler:
    """
    Builds one JointTrack per skeleton joint, in joint index order.

    Joints without a matching scene node keep their bind pose. The others
    are sampled at a fixed rate over the clip window: root joints in world
    space, child joints relative to their parent.
    """

    def __init__(self, scene: AnimScene, converter: TransformConverter = None):
        """
        Initialize sampler.

        Args:
            scene: Scene to evaluate
            converter: Matrix to transform converter (identity axis/unit by default)
        """
        self.scene = scene
        self.converter = converter if converter is not None else TransformConverter()

    def extract(self, clip: AnimClip, window: SamplingWindow, skeleton: Skeleton) -> RawAnimation:
        """
        Extract the animation of a clip.

        Args:
            clip: Clip to sample
            window: Sampling window of the clip
            skeleton: Skeleton whose joints receive tracks

        Returns:
            RawAnimation named after the clip, with one track per joint

        Raises:
            TransformConversionError: If a sampled matrix can't be converted
            AnimationValidationError: If the produced keys are invalid
        """
        logger.info("Extracting animation \"%s\"", clip.name)

        animation = RawAnimation(clip.name, window.duration)
        animation.tracks = self.sample_tracks(clip, window, skeleton)

        if not animation.validate():
            raise AnimationValidationError(f"Extracted animation \"{clip.name}\" is invalid.")
        return animation

    def sample_tracks(self, clip: AnimClip, window: SamplingWindow, skeleton: Skeleton) -> List[JointTrack]:
        """Sample every joint of ``skeleton``; track ``i`` belongs to joint ``i``."""
        tracks = []
        for index, joint_name in enumerate(skeleton.joint_names):
            node = self.scene.find_node(joint_name)
            if node is None:
                logger.info(
                    "No animation track found for joint \"%s\". Using skeleton bind pose instead.", joint_name
                )
                tracks.append(self.bind_pose_track(skeleton, index))
                continue

            tracks.append(self.sample_joint(node, joint_name, skeleton.has_parent(index), clip, window))
        return tracks

    @staticmethod
    def bind_pose_track(skeleton: Skeleton, index: int) -> JointTrack:
        """Single-key track holding the joint's bind pose at time 0."""
        track = JointTrack()
        track.add_key(0.0, skeleton.get_joint_local_bind_pose(index))
        return track

    def sample_joint(
        self,
        node: Any,
        joint_name: str,
        has_parent: bool,
        clip: AnimClip,
        window: SamplingWindow,
    ) -> JointTrack:
        """
        Sample one joint's node over the window.

        Args:
            node: Scene node matching the joint
            joint_name: Joint name, for error reporting
            has_parent: False for root joints, sampled in world space
            clip: Clip to evaluate
            window: Sampling window

        Returns:
            JointTrack with keys at t - window.start
        """
        track = JointTrack()
        for t in sample_times(window):
            if has_parent:
                matrix = self.scene.evaluate_local_transform(node, t, clip)
            else:
                matrix = self.scene.evaluate_global_transform(node, t, clip)

            transform = self.converter.convert(matrix)
            if transform is None:
                error = TransformConversionError(joint_name, t, clip.name)
                logger.error("%s", error)
                raise error

            track.add_key(t - window.start, transform)
        return track
