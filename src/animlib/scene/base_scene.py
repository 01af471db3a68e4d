"""
Base Scene Module
Abstract interface for querying and evaluating animated scenes.

Extraction never talks to an asset SDK directly. It goes through this
interface, which keeps the samplers testable against scripted scenes.
The clip being sampled is passed explicitly to every evaluation call
rather than selected as hidden scene state.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from pyrr import Matrix44

from ..config.settings import DEFAULT_FRAME_RATE


class TimeMode(Enum):
    """Scene frame-rate modes, valued (name, frames per second)."""
    DEFAULT = ("default", DEFAULT_FRAME_RATE)
    FRAMES_120 = ("120", 120.0)
    FRAMES_100 = ("100", 100.0)
    FRAMES_60 = ("60", 60.0)
    FRAMES_50 = ("50", 50.0)
    FRAMES_48 = ("48", 48.0)
    FRAMES_30 = ("30", 30.0)
    FRAMES_30_DROP = ("30 drop", 30.0)
    NTSC_DROP_FRAME = ("ntsc drop", 29.97002617)
    NTSC_FULL_FRAME = ("ntsc full", 29.97002617)
    PAL = ("pal", 25.0)
    FRAMES_24 = ("24", 24.0)
    FRAMES_1000 = ("1000", 1000.0)
    FILM_FULL_FRAME = ("film full", 23.976)
    CUSTOM = ("custom", None)
    FRAMES_96 = ("96", 96.0)
    FRAMES_72 = ("72", 72.0)
    FRAMES_59_94 = ("59.94", 59.94)
    FRAMES_119_88 = ("119.88", 119.88)

    @property
    def frame_rate(self) -> Optional[float]:
        """Frames per second, None for CUSTOM."""
        return self.value[1]


class PropertyType(Enum):
    """Declared data types of scene properties."""
    UNDEFINED = "Undefined - Unidentified"
    CHAR = "Char - 8 bit signed integer"
    UCHAR = "UChar - 8 bit unsigned integer"
    SHORT = "Short - 16 bit signed integer"
    USHORT = "UShort - 16 bit unsigned integer"
    UINT = "UInt - 32 bit unsigned integer"
    LONG_LONG = "LongLong - 64 bit signed integer"
    ULONG_LONG = "ULongLong - 64 bit unsigned integer"
    HALF_FLOAT = "HalfFloat - 16 bit floating point"
    BOOL = "Bool - Boolean"
    INT = "Int - 32 bit signed integer"
    FLOAT = "Float - Floating point value"
    DOUBLE = "Double - Double width floating point value"
    DOUBLE2 = "Double2 - Vector of two double values"
    DOUBLE3 = "Double3 - Vector of three double values"
    DOUBLE4 = "Double4 - Vector of four double values"
    DOUBLE4X4 = "Double4x4 - Four vectors of four double values"
    ENUM = "Enum - Enumeration"
    ENUM_M = "EnumM - Enumeration allowing duplicated items"
    STRING = "String - String"
    TIME = "Time - Time value"
    REFERENCE = "Reference - Reference to object or property"
    BLOB = "Blob - Binary data block type"
    DISTANCE = "Distance - Distance"
    DATE_TIME = "DateTime - Date and time"

    @property
    def description(self) -> str:
        return self.value


@dataclass(frozen=True)
class TimeSpan:
    """Time range in seconds."""
    start: float
    stop: float


@dataclass(frozen=True)
class AnimClip:
    """One animation take ("stack") of a scene.

    Attributes:
        name: Clip name, used as the output animation name
        index: Position in the scene's clip enumeration
        handle: Backend-specific clip object
    """
    name: str
    index: int
    handle: Any = None


@dataclass(frozen=True)
class SceneProperty:
    """A named, typed property of a scene node.

    Attributes:
        node_name: Owning node name
        name: Property name
        property_type: Declared data type
        animated: True if the property carries animation curves
        handle: Backend-specific property object
    """
    node_name: str
    name: str
    property_type: PropertyType
    animated: bool = False
    handle: Any = None


class AnimScene(ABC):
    """Abstract base class for animated scenes

    Provides the queries extraction needs: clips and their time spans, the
    scene frame rate, node and property lookup, and time-based evaluation.
    """

    @abstractmethod
    def get_clips(self) -> List[AnimClip]:
        """Enumerate animation clips in scene order

        Returns:
            list: Scene clips, possibly empty
        """
        pass

    @abstractmethod
    def get_clip_time_span(self, clip: AnimClip) -> Optional[TimeSpan]:
        """Get a clip's local time span

        Args:
            clip: Scene clip

        Returns:
            TimeSpan, or None if the clip carries no time information
        """
        pass

    @abstractmethod
    def get_default_time_span(self) -> TimeSpan:
        """Get the scene timeline default time span"""
        pass

    @abstractmethod
    def get_time_mode(self) -> TimeMode:
        """Get the scene time mode"""
        pass

    def get_custom_frame_rate(self) -> float:
        """Frame rate used when the time mode is CUSTOM"""
        return DEFAULT_FRAME_RATE

    def get_frame_rate(self) -> float:
        """Resolve the scene frame rate from its time mode

        Returns:
            float: Frames per second
        """
        mode = self.get_time_mode()
        if mode == TimeMode.CUSTOM:
            return float(self.get_custom_frame_rate())
        return mode.frame_rate

    @abstractmethod
    def find_node(self, name: str) -> Optional[Any]:
        """Find a node by name

        Args:
            name: Node name

        Returns:
            Backend node object, or None if not found
        """
        pass

    @abstractmethod
    def find_property(self, node: Any, name: str) -> Optional[SceneProperty]:
        """Find a property of a node by name

        Args:
            node: Node returned by find_node()
            name: Property name

        Returns:
            SceneProperty, or None if the node has no such property
        """
        pass

    @abstractmethod
    def evaluate_global_transform(self, node: Any, time: float, clip: Optional[AnimClip]) -> Matrix44:
        """Evaluate a node's world transform

        Args:
            node: Node returned by find_node()
            time: Time in seconds
            clip: Clip to evaluate, None for the scene's rest state

        Returns:
            Matrix44: Row-major world matrix
        """
        pass

    @abstractmethod
    def evaluate_local_transform(self, node: Any, time: float, clip: Optional[AnimClip]) -> Matrix44:
        """Evaluate a node's transform relative to its parent

        Args:
            node: Node returned by find_node()
            time: Time in seconds
            clip: Clip to evaluate, None for the scene's rest state

        Returns:
            Matrix44: Row-major local matrix
        """
        pass

    @abstractmethod
    def evaluate_property(self, prop: SceneProperty, time: float, clip: Optional[AnimClip]) -> Any:
        """Evaluate a property value

        Args:
            prop: Property returned by find_property()
            time: Time in seconds
            clip: Clip to evaluate, None for the scene's rest state

        Returns:
            Raw value (bool, int, float or a sequence of floats)
        """
        pass
