"""
Skeleton

Represents a hierarchical skeleton structure with joints/bones.
"""

from typing import Dict, List, Optional

from pyrr import Quaternion, Vector3

from .transform import Transform


class Joint:
    """
    Represents a single joint (bone) in a skeleton hierarchy.

    Each joint has:
    - A name, matched against scene node names during extraction
    - Parent-child relationships
    - A bind pose (rest local transform, relative to its parent)
    """

    def __init__(
        self,
        name: str,
        index: int,
        parent: Optional['Joint'] = None
    ):
        """
        Initialize a joint.

        Args:
            name: Joint name
            index: Joint index in skeleton
            parent: Parent joint (None for root)
        """
        self.name = name
        self.index = index
        self.parent = parent
        self.children: List['Joint'] = []

        # Bind pose, used when a joint has no animated scene node
        self.base_translation = Vector3([0.0, 0.0, 0.0])
        self.base_rotation = Quaternion()
        self.base_scale = Vector3([1.0, 1.0, 1.0])

    def add_child(self, child: 'Joint'):
        """Add a child joint to this joint's hierarchy."""
        self.children.append(child)
        child.parent = self

    @property
    def bind_pose(self) -> Transform:
        """Copy of the rest local transform."""
        return Transform(self.base_translation, self.base_rotation, self.base_scale).copy()

    def __repr__(self):
        return f"Joint(name='{self.name}', index={self.index}, children={len(self.children)})"


class Skeleton:
    """
    Hierarchical skeleton structure.

    Joints are stored in index order and are read-only once built:
    - Joint names, looked up in the scene during extraction
    - Per-joint root flag (root joints are sampled in world space)
    - Per-joint local bind pose
    """

    def __init__(self, name: str = "Skeleton"):
        """
        Initialize skeleton.

        Args:
            name: Skeleton name for debugging
        """
        self.name = name
        self.joints: List[Joint] = []
        self.root_joints: List[Joint] = []
        self.joint_by_name: Dict[str, Joint] = {}

    def add_joint(self, joint: Joint):
        """
        Add a joint to the skeleton.

        The joint index is its position in the skeleton; parents must be
        assigned before the joint is added.

        Args:
            joint: Joint to add
        """
        joint.index = len(self.joints)
        self.joints.append(joint)
        self.joint_by_name[joint.name] = joint

        # If joint has no parent, it's a root joint
        if joint.parent is None:
            self.root_joints.append(joint)

    def create_joint(self, name: str, parent: Optional[Joint] = None, bind_pose: Optional[Transform] = None) -> Joint:
        """
        Create, attach and add a joint in one step.

        Args:
            name: Joint name
            parent: Parent joint, None for a root
            bind_pose: Rest local transform (identity when omitted)

        Returns:
            The new joint
        """
        joint = Joint(name, len(self.joints))
        if parent is not None:
            parent.add_child(joint)
        if bind_pose is not None:
            rest = bind_pose.copy()
            joint.base_translation = rest.translation
            joint.base_rotation = rest.rotation
            joint.base_scale = rest.scale
        self.add_joint(joint)
        return joint

    def get_joint(self, name: str) -> Optional[Joint]:
        """
        Find a joint by name.

        Args:
            name: Joint name

        Returns:
            Joint if found, None otherwise
        """
        return self.joint_by_name.get(name)

    @property
    def num_joints(self) -> int:
        return len(self.joints)

    @property
    def joint_names(self) -> List[str]:
        return [joint.name for joint in self.joints]

    def has_parent(self, index: int) -> bool:
        return self.joints[index].parent is not None

    def get_joint_local_bind_pose(self, index: int) -> Transform:
        """Return a copy of the bind pose of joint ``index``."""
        return self.joints[index].bind_pose

    def __repr__(self):
        return f"Skeleton(name='{self.name}', joints={len(self.joints)}, roots={len(self.root_joints)})"
