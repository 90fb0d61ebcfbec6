"""
geonav_transform constants.

All magic numbers are centralized here with clear documentation.
"""

# =============================================================================
# UTM Projection
# =============================================================================

UTM_ELLIPSOID = "WGS84"
UTM_K0 = 0.9996  # Central meridian scale factor
UTM_ZONE_WIDTH_DEG = 6.0

# Supported latitude band; outside this UTM is undefined (UPS territory)
UTM_MIN_LATITUDE = -80.0
UTM_MAX_LATITUDE = 84.0

# Latitude band letters, 8 degrees each from -80; X is stretched to 84
UTM_BAND_LETTERS = "CDEFGHJKLMNPQRSTUVWX"

# =============================================================================
# Frames and Message Layout
# =============================================================================

UTM_FRAME_ID = "utm"  # Literal, never prefixed
DEFAULT_WORLD_FRAME = "odom"
DEFAULT_BASE_LINK_FRAME = "base_link"

POSITION_SIZE = 3
POSE_SIZE = 6  # (x, y, z, roll, pitch, yaw)

# =============================================================================
# Node Defaults
# =============================================================================

DEFAULT_FREQUENCY_HZ = 10.0
DEFAULT_STATUS_PERIOD_SEC = 5.0

# Datum yaw beyond this magnitude triggers the "ignored" warning (rad)
DATUM_YAW_WARN_THRESHOLD = 0.01

# Cap on repeated warnings from the sample slot
MAX_WARNING_COUNT = 10

# =============================================================================
# Numerical Stability Thresholds
# =============================================================================

# Quaternion norm below which normalization is refused
QUATERNION_NORM_EPSILON = 1e-10
