"""
Animation Set Builder

Extracts every clip of a scene into raw skeletal animations.
"""

import logging
from typing import List

from ..animation.animation import RawAnimation
from ..animation.skeleton import Skeleton
from ..config.settings import DEFAULT_SAMPLING_RATE
from ..errors import AnimationExtractionError, NoAnimationFoundError
from ..scene.base_scene import AnimScene
from ..scene.converter import TransformConverter
from .joint_sampler import JointAnimationSampler
from .sampling import SamplingPlanner

logger = logging.getLogger(__name__)


class AnimationSetBuilder:
    """
    Extracts all clips of a scene, in scene order.

    Clips are processed one at a time. Extraction is all-or-nothing: the
    first failing clip stops the build and ``animations`` is left empty.
    """

    def __init__(
        self,
        scene: AnimScene,
        skeleton: Skeleton,
        sampling_rate: float = DEFAULT_SAMPLING_RATE,
        converter: TransformConverter = None,
    ):
        """
        Initialize builder.

        Args:
            scene: Scene holding the clips
            skeleton: Skeleton whose joints receive tracks
            sampling_rate: Override rate in Hz; values <= 0 use the scene rate
            converter: Matrix to transform converter
        """
        self.scene = scene
        self.skeleton = skeleton
        self.planner = SamplingPlanner(sampling_rate)
        self.sampler = JointAnimationSampler(scene, converter)
        self.animations: List[RawAnimation] = []

    def build(self) -> List[RawAnimation]:
        """
        Extract every clip.

        Returns:
            One RawAnimation per clip, in clip order

        Raises:
            NoAnimationFoundError: If the scene holds no clip
            AnimationExtractionError: If any clip fails; nothing is kept
        """
        self.animations = []

        clips = self.scene.get_clips()
        if not clips:
            logger.error("No animation found.")
            raise NoAnimationFoundError()

        animations = []
        try:
            for clip in clips:
                window = self.planner.plan(self.scene, clip)
                animations.append(self.sampler.extract(clip, window, self.skeleton))
        except AnimationExtractionError:
            # Avoid handing out partial data
            animations.clear()
            raise

        self.animations = animations
        return animations


def extract_animations(
    scene: AnimScene,
    skeleton: Skeleton,
    sampling_rate: float = DEFAULT_SAMPLING_RATE,
    converter: TransformConverter = None,
) -> List[RawAnimation]:
    """
    Extract every clip of a scene.

    Args:
        scene: Scene holding the clips
        skeleton: Skeleton whose joints receive tracks
        sampling_rate: Override rate in Hz; values <= 0 use the scene rate
        converter: Matrix to transform converter

    Returns:
        One RawAnimation per clip, in clip order
    """
    return AnimationSetBuilder(scene, skeleton, sampling_rate, converter).build()
