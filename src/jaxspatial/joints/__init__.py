from .common import Joint, JointState, JointType, RotationalJoint
from .prismatic import PrismaticJoint
from .revolute import RevoluteJoint
from .spherical import SphericalJoint
from .universal import UniversalJoint


def build_joint(joint_type: int, *args, **kwargs) -> Joint:
    """
    Create a joint of the given type.

    Args:
        joint_type: The JointType tag of the joint.
        *args: The positional arguments of the joint constructor.
        **kwargs: The keyword arguments of the joint constructor.

    Returns:
        The joint.
    """

    match joint_type:
        case JointType.Revolute:
            cls = RevoluteJoint
        case JointType.Prismatic:
            cls = PrismaticJoint
        case JointType.Universal:
            cls = UniversalJoint
        case JointType.Spherical:
            cls = SphericalJoint
        case _:
            raise ValueError(f"Joint type '{joint_type}' not supported")

    return cls(*args, **kwargs)
