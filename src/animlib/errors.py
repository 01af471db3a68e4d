"""
Extraction Errors

Exceptions raised while extracting animations and property tracks from a scene.
"""

from typing import Optional


class AnimationExtractionError(RuntimeError):
    """Base class for every extraction failure."""


class NoAnimationFoundError(AnimationExtractionError):
    """Raised when a scene holds no animation clip."""

    def __init__(self):
        super().__init__("No animation found.")


class NodeNotFoundError(AnimationExtractionError):
    """Raised when a named node does not exist in the scene."""

    def __init__(self, node_name: str):
        super().__init__(f"Invalid node name \"{node_name}\"")
        self.node_name = node_name


class PropertyNotFoundError(AnimationExtractionError):
    """Raised when a node has no property with the requested name."""

    def __init__(self, node_name: str, property_name: str):
        super().__init__(f"Invalid property name \"{property_name}\" on node \"{node_name}\"")
        self.node_name = node_name
        self.property_name = property_name


class TransformConversionError(AnimationExtractionError):
    """Raised when a sampled joint matrix can't be converted to a transform."""

    def __init__(self, joint_name: str, time: float, clip_name: Optional[str] = None):
        message = f"Failed to extract animation transform for joint \"{joint_name}\" at t = {time}s"
        if clip_name is not None:
            message += f" in animation \"{clip_name}\""
        super().__init__(message + ".")
        self.joint_name = joint_name
        self.time = time
        self.clip_name = clip_name


class UnsupportedPropertyTypeError(AnimationExtractionError):
    """Raised when a property's declared type has no decoder."""

    def __init__(self, property_type, property_name: Optional[str] = None):
        description = getattr(property_type, "description", str(property_type))
        message = f"Unsupported track type: \"{description}\""
        if property_name is not None:
            message += f" for property \"{property_name}\""
        super().__init__(message)
        self.property_type = property_type
        self.property_name = property_name


class AnimationValidationError(AnimationExtractionError):
    """Raised when extracted keyframes are out of order or out of range."""
