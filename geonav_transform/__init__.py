"""
geonav_transform: geodetic navigation fixes to UTM and local Cartesian odometry.

Subpackages:
- common/: types, constants, errors, UTM projection, geometry
- core/: pure datum / sample pipeline
- utils/: latest-sample slot used by the node
- diagnostics/: status reporting
- nodes/: ROS 2 entry points
"""

__version__ = "0.1.0"
