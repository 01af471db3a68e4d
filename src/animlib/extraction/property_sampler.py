"""
Property Curve Sampler

Extracts a single named scene property into a keyframe track.

Decoding is a dispatch over a closed set of value kinds (float, 2-vector,
3-vector); the constant-vs-resampled policy is written once for all of them.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np
from pyrr import Vector3

from ..animation.animation import InterpolationType
from ..animation.track import RawTrack, ValueKind
from ..errors import (
    AnimationExtractionError,
    AnimationValidationError,
    NodeNotFoundError,
    PropertyNotFoundError,
    UnsupportedPropertyTypeError,
)
from ..scene.base_scene import AnimClip, AnimScene, PropertyType, SceneProperty
from .sampling import SamplingWindow, sample_times

logger = logging.getLogger(__name__)


def _decode_bool(value) -> float:
    return 1.0 if value else 0.0


def _decode_int(value) -> float:
    return float(int(value))


def _decode_float(value) -> float:
    return float(np.float32(value))


def _decode_double2(value) -> np.ndarray:
    components = [float(v) for v in value]
    if len(components) != 2:
        raise ValueError(f"Expected 2 components, got {value}")
    return np.array(components, dtype='f4')


def _decode_double3(value) -> Vector3:
    components = [float(v) for v in value]
    if len(components) != 3:
        raise ValueError(f"Expected 3 components, got {value}")
    return Vector3(components, dtype='f4')


# Declared type -> (track value kind, decoder)
DECODERS: Dict[PropertyType, Tuple[ValueKind, Callable[[Any], Any]]] = {
    PropertyType.BOOL: (ValueKind.FLOAT, _decode_bool),
    PropertyType.INT: (ValueKind.FLOAT, _decode_int),
    PropertyType.FLOAT: (ValueKind.FLOAT, _decode_float),
    PropertyType.DOUBLE: (ValueKind.FLOAT, _decode_float),
    PropertyType.DOUBLE2: (ValueKind.FLOAT2, _decode_double2),
    PropertyType.DOUBLE3: (ValueKind.FLOAT3, _decode_double3),
}


class PropertyCurveSampler:
    """
    Samples a scene property over a window.

    Constant properties yield a single STEP key at time 0. Animated ones are
    resampled over the whole window with LINEAR keys at normalized times.
    """

    def __init__(self, scene: AnimScene):
        self.scene = scene

    def sample(self, prop: SceneProperty, window: SamplingWindow, clip: Optional[AnimClip] = None) -> RawTrack:
        """
        Sample a property into a track.

        Args:
            prop: Property to sample
            window: Sampling window
            clip: Clip to evaluate, None for the scene's rest state

        Returns:
            RawTrack with normalized key times

        Raises:
            UnsupportedPropertyTypeError: If the property type has no decoder
            AnimationValidationError: If the produced keys are invalid
        """
        if prop.property_type not in DECODERS:
            error = UnsupportedPropertyTypeError(prop.property_type, prop.name)
            logger.error("%s", error)
            raise error
        value_kind, decode = DECODERS[prop.property_type]

        track = RawTrack(value_kind, name=f"{prop.node_name}:{prop.name}")

        if not prop.animated:
            value = self._decode(decode, prop, 0.0, clip)
            track.add_keyframe(0.0, value, InterpolationType.STEP)
        else:
            for t in sample_times(window):
                value = self._decode(decode, prop, t, clip)
                track.add_keyframe(window.normalize(t), value, InterpolationType.LINEAR)

        if not track.validate():
            raise AnimationValidationError(f"Extracted track \"{track.name}\" is invalid.")
        return track

    def _decode(self, decode, prop: SceneProperty, time: float, clip: Optional[AnimClip]):
        raw = self.scene.evaluate_property(prop, time, clip)
        try:
            return decode(raw)
        except (TypeError, ValueError) as exc:
            raise AnimationExtractionError(
                f"Failed to decode property \"{prop.node_name}:{prop.name}\" "
                f"({prop.property_type.description}) at t = {time}s: {exc}"
            ) from exc


def extract_track(
    scene: AnimScene,
    node_name: str,
    property_name: str,
    window: SamplingWindow,
    clip: Optional[AnimClip] = None,
) -> RawTrack:
    """
    Extract one named node property as a track.

    Args:
        scene: Scene to query
        node_name: Name of the node owning the property
        property_name: Property name
        window: Sampling window
        clip: Clip to evaluate, None for the scene's rest state

    Returns:
        RawTrack of the property

    Raises:
        NodeNotFoundError: If no node has that name
        PropertyNotFoundError: If the node has no such property
        UnsupportedPropertyTypeError: If the property type has no decoder
    """
    logger.info("Extracting animation track \"%s:%s\"", node_name, property_name)

    node = scene.find_node(node_name)
    if node is None:
        error = NodeNotFoundError(node_name)
        logger.error("%s", error)
        raise error

    prop = scene.find_property(node, property_name)
    if prop is None:
        error = PropertyNotFoundError(node_name, property_name)
        logger.error("%s", error)
        raise error

    return PropertyCurveSampler(scene).sample(prop, window, clip)
