"""
Extraction Configuration Settings

All configuration constants for the animation extraction pipeline.
Modify these values to change sampling, conversion and logging behavior.
"""

# ============================================================================
# Sampling
# ============================================================================

DEFAULT_SAMPLING_RATE = 0.0   # Hz. Values <= 0 use the scene frame rate
POSE_DURATION = 1.0           # Seconds assigned to clips with an empty time span (pose-only assets)
KEY_RESERVE_MARGIN = 3        # Extra keys on top of ceil(span / period)

# A sample closer to the window end than this fraction of a period snaps to the end,
# so float accumulation never emits a near-duplicate final key
SAMPLE_TIME_TOLERANCE = 1e-4

# ============================================================================
# Transform Conversion
# ============================================================================

DEFAULT_AXIS_SYSTEM = "y_up_rh"   # Target system: Y-up, right-handed
DEFAULT_UNIT_SCALE = 1.0          # Multiplier applied to translations
MIN_SCALE_MAGNITUDE = 1e-8        # Below this a matrix axis is considered collapsed

# ============================================================================
# Scenes
# ============================================================================

DEFAULT_FRAME_RATE = 30.0   # FBX-style "default" time mode
GLTF_FRAME_RATE = 30.0      # glTF carries no time mode; scenes report this rate

# ============================================================================
# Logging
# ============================================================================

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
LOG_LEVEL = "INFO"
