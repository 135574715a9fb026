"""
Replay Constants

Central location for replay timing and speed constants.
"""

# =============================================================================
# Virtual Clock
# =============================================================================

# Virtual time added to the clock on every TIME_TICK (milliseconds)
DEFAULT_TIME_TICK_RATE_MS = 1000

# =============================================================================
# Speed
# =============================================================================

MIN_SPEED = 1
MAX_SPEED = 16
SPEED_FACTOR = 2  # increase_speed() multiplies, decrease_speed() divides
DEFAULT_SPEED = 1
SPEED_STEPS = (1, 2, 4, 8, 16)  # MIN_SPEED * SPEED_FACTOR**k up to MAX_SPEED
