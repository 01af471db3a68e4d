"""Scene interfaces, transform conversion and concrete scenes."""

from .base_scene import AnimClip, AnimScene, PropertyType, SceneProperty, TimeMode, TimeSpan
from .converter import AxisSystem, TransformConverter
from .memory_scene import MemoryNode, MemoryScene
from .gltf_scene import ChannelSampler, GltfScene

__all__ = [
    'AnimScene',
    'AnimClip',
    'SceneProperty',
    'PropertyType',
    'TimeMode',
    'TimeSpan',
    'AxisSystem',
    'TransformConverter',
    'MemoryNode',
    'MemoryScene',
    'ChannelSampler',
    'GltfScene',
]
