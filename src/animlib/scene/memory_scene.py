"""
Memory Scene

In-memory scene with scripted transform and property curves.

Curves are either constant values or callables ``curve(time, clip_name)``,
which makes it easy to script time series for tests and tools.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from pyrr import Matrix44

from ..animation.transform import Transform
from ..config.settings import DEFAULT_FRAME_RATE
from .base_scene import AnimClip, AnimScene, PropertyType, SceneProperty, TimeMode, TimeSpan

TransformCurve = Union[Transform, Callable[[float, Optional[str]], Transform]]


@dataclass
class MemoryNode:
    """Scene node with a scripted local transform."""

    name: str
    parent: Optional[str] = None
    transform: TransformCurve = field(default_factory=Transform)
    properties: Dict[str, Tuple[SceneProperty, Any]] = field(default_factory=dict)

    def local_transform(self, time: float, clip_name: Optional[str]) -> Transform:
        if callable(self.transform):
            return self.transform(time, clip_name)
        return self.transform


class MemoryScene(AnimScene):
    """Scene held entirely in memory."""

    def __init__(
        self,
        clips: Sequence[Union[str, Tuple[str, Optional[TimeSpan]]]] = (),
        default_time_span: TimeSpan = TimeSpan(0.0, 0.0),
        time_mode: TimeMode = TimeMode.FRAMES_30,
        custom_frame_rate: float = DEFAULT_FRAME_RATE,
    ):
        """
        Initialize scene.

        Args:
            clips: Clip names, or (name, local span) pairs; a None span falls
                back to the default time span
            default_time_span: Timeline default span
            time_mode: Scene time mode
            custom_frame_rate: Rate used when time_mode is CUSTOM
        """
        self.nodes: Dict[str, MemoryNode] = {}
        self.default_time_span = default_time_span
        self.time_mode = time_mode
        self.custom_frame_rate = custom_frame_rate

        self._clips: List[AnimClip] = []
        self._clip_spans: Dict[str, Optional[TimeSpan]] = {}
        for clip in clips:
            name, span = (clip, None) if isinstance(clip, str) else clip
            self.add_clip(name, span)

    def add_clip(self, name: str, time_span: Optional[TimeSpan] = None) -> AnimClip:
        clip = AnimClip(name=name, index=len(self._clips))
        self._clips.append(clip)
        self._clip_spans[name] = time_span
        return clip

    def add_node(self, name: str, transform: TransformCurve = None, parent: Optional[str] = None) -> MemoryNode:
        """
        Add a node.

        Args:
            name: Node name
            transform: Constant local Transform or curve(time, clip_name) -> Transform
            parent: Parent node name, None for a scene root

        Returns:
            The new node
        """
        if parent is not None and parent not in self.nodes:
            raise ValueError(f"Unknown parent node '{parent}' for '{name}'")
        node = MemoryNode(name=name, parent=parent, transform=transform if transform is not None else Transform())
        self.nodes[name] = node
        return node

    def add_property(
        self,
        node_name: str,
        name: str,
        property_type: PropertyType,
        value: Any,
        animated: bool = False,
    ) -> SceneProperty:
        """
        Add a property to a node.

        Args:
            node_name: Owning node
            name: Property name
            property_type: Declared type
            value: Constant value or curve(time, clip_name) -> value
            animated: Whether the property is flagged as animated

        Returns:
            The new property
        """
        node = self.nodes[node_name]
        prop = SceneProperty(node_name=node_name, name=name, property_type=property_type, animated=animated)
        node.properties[name] = (prop, value)
        return prop

    # Scene queries

    def get_clips(self) -> List[AnimClip]:
        return list(self._clips)

    def get_clip_time_span(self, clip: AnimClip) -> Optional[TimeSpan]:
        return self._clip_spans.get(clip.name)

    def get_default_time_span(self) -> TimeSpan:
        return self.default_time_span

    def get_time_mode(self) -> TimeMode:
        return self.time_mode

    def get_custom_frame_rate(self) -> float:
        return self.custom_frame_rate

    def find_node(self, name: str) -> Optional[MemoryNode]:
        return self.nodes.get(name)

    def find_property(self, node: MemoryNode, name: str) -> Optional[SceneProperty]:
        entry = node.properties.get(name)
        return entry[0] if entry is not None else None

    # Evaluation

    def evaluate_local_transform(self, node: MemoryNode, time: float, clip: Optional[AnimClip]) -> Matrix44:
        clip_name = clip.name if clip is not None else None
        return node.local_transform(time, clip_name).to_matrix()

    def evaluate_global_transform(self, node: MemoryNode, time: float, clip: Optional[AnimClip]) -> Matrix44:
        world = self.evaluate_local_transform(node, time, clip)
        parent_name = node.parent
        while parent_name is not None:
            parent = self.nodes[parent_name]
            world = world @ self.evaluate_local_transform(parent, time, clip)
            parent_name = parent.parent
        return world

    def evaluate_property(self, prop: SceneProperty, time: float, clip: Optional[AnimClip]) -> Any:
        _, value = self.nodes[prop.node_name].properties[prop.name]
        if callable(value):
            return value(time, clip.name if clip is not None else None)
        return value

    def __repr__(self):
        return f"MemoryScene(nodes={len(self.nodes)}, clips={len(self._clips)})"
