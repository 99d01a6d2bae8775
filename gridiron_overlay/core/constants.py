"""
Constants for the football overlay engine
"""

# Coordinate space
PERCENT_MIN = 0.0
PERCENT_MAX = 100.0

# Default colors (hex RGB)
PLAYER_HIGHLIGHT_COLOR = "#FFD700"
PLAYER_NORMAL_COLOR = "#FFFFFF"
ARROW_COLOR = "#FF0000"
TERMINOLOGY_COLOR = "#00FF00"

# Frame interpolation
TERM_FADE_SECONDS = 0.3
TERM_LATE_FADE_IN_THRESHOLD = 0.7
DEFAULT_TERM_DURATION = 3.0
DISCRETE_SNAP_PROGRESS = 0.5

# Arrow identity
ARROW_MATCH_DISTANCE = 8.0

# Terminology overlay scheduling
MAX_TERMS_ON_SCREEN = 2
TERM_COOLDOWN_SECONDS = 6.0
TERM_DISPLAY_SECONDS = 4.0
TERM_COLLISION_THRESHOLD = 0.15
HIGHLIGHTED_PLAYER_DISTANCE = 10.0
TERM_COLLISION_PENALTY = 5

# Broadcast overlay caps
MAX_CALLOUTS = 4
MAX_ARROWS = 4
MAX_CIRCLES = 4
MAX_MICRO_STORIES = 2

# Editorial callouts
MAX_EDITORIAL_CALLOUTS = 3
MIN_CALLOUT_DURATION = 3.0
CALLOUT_GAP_SECONDS = 1.0
FIRST_CALLOUT_START = 1.0
MAX_CALLOUT_TEXT = 50
MAX_CALLOUT_DETAIL = 200

# Box placement (pixels)
PLACEMENT_OFFSET = 8.0
SAFE_MARGIN = 8.0
IN_BOUNDS_BONUS = 1000.0

# Default video geometry when the source does not report one
DEFAULT_VIDEO_WIDTH = 1920
DEFAULT_VIDEO_HEIGHT = 1080
