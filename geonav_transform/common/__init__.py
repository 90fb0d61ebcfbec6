"""
Common package for geonav_transform.

Shared types, constants and math used by the core and the ROS node.

Subpackages:
- geometry/: rigid transforms and covariance rotation
"""

from geonav_transform.common.op_report import OpReport
from geonav_transform.common import constants
from geonav_transform.common import errors

__all__ = [
    "OpReport",
    "constants",
    "errors",
]
