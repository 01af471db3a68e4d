"""
GLTF Scene

Animated scene backed by a GLTF/GLB asset.

Each GLTF animation is a clip. Node transforms are the node's rest TRS,
overridden by the clip's channels sampled at the requested time.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pygltflib
from pyrr import Matrix44, Quaternion, Vector3

from ..animation.animation import AnimationTarget
from ..animation.skeleton import Skeleton
from ..animation.transform import Transform
from ..config.settings import GLTF_FRAME_RATE
from .base_scene import AnimClip, AnimScene, PropertyType, SceneProperty, TimeMode, TimeSpan
from .converter import TransformConverter

logger = logging.getLogger(__name__)

_TARGET_PATHS = {
    "translation": AnimationTarget.TRANSLATION,
    "rotation": AnimationTarget.ROTATION,
    "scale": AnimationTarget.SCALE,
}

# TRS components exposed as node properties
_TRS_PROPERTIES = {
    "translation": (AnimationTarget.TRANSLATION, PropertyType.DOUBLE3),
    "rotation": (AnimationTarget.ROTATION, PropertyType.DOUBLE4),
    "scale": (AnimationTarget.SCALE, PropertyType.DOUBLE3),
}

_COMPONENT_TYPE_SIZES = {
    5120: 1,  # BYTE
    5121: 1,  # UNSIGNED_BYTE
    5122: 2,  # SHORT
    5123: 2,  # UNSIGNED_SHORT
    5125: 4,  # UNSIGNED_INT
    5126: 4,  # FLOAT
}

_COMPONENT_DTYPES = {
    5120: np.int8,
    5121: np.uint8,
    5122: np.int16,
    5123: np.uint16,
    5125: np.uint32,
    5126: np.float32,
}

_COMPONENT_COUNTS = {
    'SCALAR': 1,
    'VEC2': 2,
    'VEC3': 3,
    'VEC4': 4,
    'MAT2': 4,
    'MAT3': 9,
    'MAT4': 16,
}


def property_type_of(value: Any) -> PropertyType:
    """Infer the declared type of a JSON extras value."""
    if isinstance(value, bool):
        return PropertyType.BOOL
    if isinstance(value, int):
        return PropertyType.INT
    if isinstance(value, float):
        return PropertyType.DOUBLE
    if isinstance(value, str):
        return PropertyType.STRING
    if isinstance(value, (list, tuple)) and all(
        isinstance(v, (int, float)) and not isinstance(v, bool) for v in value
    ):
        return {
            2: PropertyType.DOUBLE2,
            3: PropertyType.DOUBLE3,
            4: PropertyType.DOUBLE4,
            16: PropertyType.DOUBLE4X4,
        }.get(len(value), PropertyType.UNDEFINED)
    return PropertyType.UNDEFINED


class ChannelSampler:
    """
    Keyframes of one GLTF animation channel.

    Samples the channel at arbitrary times with its sampler interpolation.
    """

    def __init__(self, target: AnimationTarget, times: np.ndarray, values: np.ndarray, interpolation: str = "LINEAR"):
        """
        Initialize channel sampler.

        Args:
            target: Animated node property
            times: Key times in seconds, shape (N,)
            values: Key values, shape (N, components)
            interpolation: GLTF interpolation ("LINEAR", "STEP" or "CUBICSPLINE")
        """
        self.target = target
        self.times = np.asarray(times, dtype=np.float64)
        self.values = np.asarray(values, dtype=np.float64)
        self.interpolation = interpolation

    @property
    def start(self) -> float:
        return float(self.times[0])

    @property
    def stop(self) -> float:
        return float(self.times[-1])

    def sample(self, time: float) -> np.ndarray:
        """
        Sample the channel at a given time.

        Args:
            time: Time in seconds

        Returns:
            Interpolated value at this time
        """
        # Clamp time to the keyed range
        if time <= self.times[0]:
            return self.values[0]
        if time >= self.times[-1]:
            return self.values[-1]

        i = int(np.searchsorted(self.times, time, side='right')) - 1
        t0, t1 = self.times[i], self.times[i + 1]
        v0, v1 = self.values[i], self.values[i + 1]

        if self.interpolation == "STEP":
            return v0

        # CUBICSPLINE keys are reduced to their values and blended linearly
        factor = (time - t0) / (t1 - t0) if t1 > t0 else 0.0
        if self.target == AnimationTarget.ROTATION:
            return np.asarray(Quaternion.slerp(Quaternion(v0), Quaternion(v1), factor))
        return v0 * (1.0 - factor) + v1 * factor

    def __repr__(self):
        return f"ChannelSampler(target={self.target.value}, keys={len(self.times)}, {self.interpolation})"


class GltfScene(AnimScene):
    """
    Scene backed by GLTF data.
    """

    def __init__(self, gltf: pygltflib.GLTF2, frame_rate: float = GLTF_FRAME_RATE):
        """
        Initialize scene.

        Args:
            gltf: Loaded GLTF document
            frame_rate: Frame rate reported for the scene
        """
        self.gltf = gltf
        self.frame_rate = frame_rate

        self._node_names: List[str] = [
            node.name if node.name else f"Node_{idx}" for idx, node in enumerate(gltf.nodes)
        ]
        self._node_by_name: Dict[str, int] = {}
        for idx, name in enumerate(self._node_names):
            self._node_by_name.setdefault(name, idx)

        self._parent_map: Dict[int, int] = {}
        for idx, node in enumerate(gltf.nodes):
            for child_idx in node.children or []:
                self._parent_map[child_idx] = idx

        self._rest_transforms: List[Transform] = []
        self._rest_matrices: Dict[int, Matrix44] = {}
        converter = TransformConverter()
        for idx, node in enumerate(gltf.nodes):
            if node.matrix is not None and len(node.matrix) == 16:
                # Column-major GLTF storage reshapes directly into pyrr's row-major layout
                matrix = Matrix44(np.array(node.matrix, dtype=np.float64).reshape(4, 4))
                self._rest_matrices[idx] = matrix
                rest = converter.convert(matrix) or Transform()
            else:
                rest = self._node_trs(node)
            self._rest_transforms.append(rest)

        self._clips: List[AnimClip] = []
        self._channels: List[Dict[Tuple[int, AnimationTarget], ChannelSampler]] = []
        for anim_idx, gltf_anim in enumerate(gltf.animations):
            name = gltf_anim.name if gltf_anim.name else f"Animation_{anim_idx}"
            self._clips.append(AnimClip(name=name, index=anim_idx, handle=anim_idx))
            self._channels.append(self._load_channels(gltf_anim))

    @classmethod
    def load(cls, filepath, frame_rate: float = GLTF_FRAME_RATE) -> "GltfScene":
        """
        Load a GLTF or GLB file.

        Args:
            filepath: Path to .gltf or .glb file
            frame_rate: Frame rate reported for the scene

        Returns:
            GltfScene for the file
        """
        filepath = Path(filepath)
        logger.info("Loading scene: %s", filepath)
        gltf = pygltflib.GLTF2().load(str(filepath))
        scene = cls(gltf, frame_rate=frame_rate)
        logger.info("  %d nodes, %d animations", len(gltf.nodes), len(scene._clips))
        return scene

    # Loading helpers

    @staticmethod
    def _node_trs(node) -> Transform:
        rest = Transform()
        if node.translation is not None:
            rest.translation = Vector3([float(v) for v in node.translation])
        if node.rotation is not None:
            # GLTF quaternions are (x, y, z, w), same as pyrr
            rest.rotation = Quaternion([float(v) for v in node.rotation])
        if node.scale is not None:
            rest.scale = Vector3([float(v) for v in node.scale])
        return rest

    def _load_channels(self, gltf_anim) -> Dict[Tuple[int, AnimationTarget], ChannelSampler]:
        channels = {}
        for channel in gltf_anim.channels:
            sampler = gltf_anim.samplers[channel.sampler]
            target_node_idx = channel.target.node
            target_path = channel.target.path

            target = _TARGET_PATHS.get(target_path)
            if target_path == "weights":
                # Morph weights don't drive joints
                logger.debug("Skipping morph weights channel")
                continue
            if target is None or target_node_idx is None:
                logger.warning("Skipping unknown animation target path: %s", target_path)
                continue

            times = self._get_accessor_data(sampler.input)
            values = self._get_accessor_data(sampler.output)
            if times is None or values is None or len(times) == 0:
                logger.warning(
                    "Missing keyframe data for channel %s.%s", self._node_names[target_node_idx], target_path
                )
                continue

            interpolation = sampler.interpolation if sampler.interpolation else "LINEAR"
            value_size = 4 if target == AnimationTarget.ROTATION else 3

            if interpolation == "CUBICSPLINE":
                # (in-tangent, value, out-tangent) triplets
                values = values.reshape(-1, 3, value_size)[:, 1, :]
            else:
                values = values.reshape(-1, value_size)

            channels[(target_node_idx, target)] = ChannelSampler(target, times, values, interpolation)
        return channels

    def _get_accessor_data(self, accessor_idx: Optional[int]) -> Optional[np.ndarray]:
        """
        Get data from an accessor.

        Args:
            accessor_idx: Accessor index

        Returns:
            Flat float array with the accessor elements
        """
        if accessor_idx is None:
            return None
        gltf = self.gltf
        accessor = gltf.accessors[accessor_idx]
        if accessor.bufferView is None:
            return None
        buffer_view = gltf.bufferViews[accessor.bufferView]
        buffer = gltf.buffers[buffer_view.buffer]

        # Get buffer data
        if buffer.uri:
            # External or data-uri buffer
            buffer_data = gltf.get_data_from_buffer_uri(buffer.uri)
        else:
            # Embedded buffer (GLB)
            buffer_data = gltf.binary_blob()

        offset = (buffer_view.byteOffset or 0) + (accessor.byteOffset or 0)
        stride = buffer_view.byteStride or 0

        component_size = _COMPONENT_TYPE_SIZES[accessor.componentType]
        component_count = _COMPONENT_COUNTS[accessor.type]
        element_size = component_size * component_count

        if stride == 0 or stride == element_size:
            # Tightly packed
            data = buffer_data[offset:offset + accessor.count * element_size]
        else:
            # Strided data
            data = bytearray()
            for i in range(accessor.count):
                element_offset = offset + i * stride
                data.extend(buffer_data[element_offset:element_offset + element_size])

        array = np.frombuffer(bytes(data), dtype=_COMPONENT_DTYPES[accessor.componentType])
        array = array.astype(np.float64)
        if accessor.normalized and accessor.componentType != 5126:
            array /= float(np.iinfo(_COMPONENT_DTYPES[accessor.componentType]).max)
        return array

    # Skeleton

    def load_skeleton(self) -> Skeleton:
        """
        Build a skeleton from the joints referenced by GLTF skins.

        Joints are ordered depth-first so parents precede their children.
        A joint's parent is its closest ancestor that is also a joint.

        Returns:
            Skeleton with bind poses taken from the nodes' rest transforms
        """
        gltf = self.gltf
        name = "Skeleton"
        if gltf.skins and gltf.skins[0].name:
            name = gltf.skins[0].name
        skeleton = Skeleton(name=name)

        joint_indices = set()
        for skin in gltf.skins:
            joint_indices.update(skin.joints)

        def visit(node_idx: int, parent_joint):
            joint = parent_joint
            if node_idx in joint_indices:
                joint = skeleton.create_joint(
                    self._node_names[node_idx], parent=parent_joint, bind_pose=self._rest_transforms[node_idx]
                )
            for child_idx in gltf.nodes[node_idx].children or []:
                visit(child_idx, joint)

        for node_idx in range(len(gltf.nodes)):
            if node_idx not in self._parent_map:
                visit(node_idx, None)

        logger.info("Loaded skeleton with %d joints", skeleton.num_joints)
        return skeleton

    # Scene queries

    def get_clips(self) -> List[AnimClip]:
        return list(self._clips)

    def get_clip_time_span(self, clip: AnimClip) -> Optional[TimeSpan]:
        channels = self._channels[clip.handle]
        if not channels:
            return None
        start = min(sampler.start for sampler in channels.values())
        stop = max(sampler.stop for sampler in channels.values())
        return TimeSpan(start, stop)

    def get_default_time_span(self) -> TimeSpan:
        spans = [span for span in (self.get_clip_time_span(clip) for clip in self._clips) if span is not None]
        if not spans:
            return TimeSpan(0.0, 0.0)
        return TimeSpan(min(s.start for s in spans), max(s.stop for s in spans))

    def get_time_mode(self) -> TimeMode:
        return TimeMode.CUSTOM

    def get_custom_frame_rate(self) -> float:
        return self.frame_rate

    def find_node(self, name: str) -> Optional[int]:
        return self._node_by_name.get(name)

    def find_property(self, node: int, name: str) -> Optional[SceneProperty]:
        node_name = self._node_names[node]
        if name in _TRS_PROPERTIES:
            target, property_type = _TRS_PROPERTIES[name]
            animated = any((node, target) in channels for channels in self._channels)
            return SceneProperty(node_name, name, property_type, animated=animated, handle=(node, target))

        extras = self.gltf.nodes[node].extras or {}
        if isinstance(extras, dict) and name in extras:
            return SceneProperty(node_name, name, property_type_of(extras[name]), animated=False, handle=(node, None))
        return None

    # Evaluation

    def _local_trs(self, node: int, time: float, clip: Optional[AnimClip]) -> Transform:
        local = self._rest_transforms[node].copy()
        if clip is None:
            return local

        channels = self._channels[clip.handle]
        sampler = channels.get((node, AnimationTarget.TRANSLATION))
        if sampler is not None:
            local.translation = Vector3(np.array(sampler.sample(time)))
        sampler = channels.get((node, AnimationTarget.ROTATION))
        if sampler is not None:
            local.rotation = Quaternion(np.array(sampler.sample(time))).normalized
        sampler = channels.get((node, AnimationTarget.SCALE))
        if sampler is not None:
            local.scale = Vector3(np.array(sampler.sample(time)))
        return local

    def _is_animated(self, node: int, clip: Optional[AnimClip]) -> bool:
        if clip is None:
            return False
        return any(key[0] == node for key in self._channels[clip.handle])

    def evaluate_local_transform(self, node: int, time: float, clip: Optional[AnimClip]) -> Matrix44:
        if node in self._rest_matrices and not self._is_animated(node, clip):
            return Matrix44(self._rest_matrices[node])
        return self._local_trs(node, time, clip).to_matrix()

    def evaluate_global_transform(self, node: int, time: float, clip: Optional[AnimClip]) -> Matrix44:
        world = self.evaluate_local_transform(node, time, clip)
        parent_idx = self._parent_map.get(node)
        while parent_idx is not None:
            world = world @ self.evaluate_local_transform(parent_idx, time, clip)
            parent_idx = self._parent_map.get(parent_idx)
        return world

    def evaluate_property(self, prop: SceneProperty, time: float, clip: Optional[AnimClip]) -> Any:
        node, target = prop.handle
        if target is None:
            return self.gltf.nodes[node].extras[prop.name]

        local = self._local_trs(node, time, clip)
        if target == AnimationTarget.TRANSLATION:
            return [float(v) for v in local.translation]
        if target == AnimationTarget.ROTATION:
            return [float(v) for v in local.rotation]
        return [float(v) for v in local.scale]

    def __repr__(self):
        return f"GltfScene(nodes={len(self._node_names)}, clips={len(self._clips)})"
