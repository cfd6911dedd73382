"""Constants and configuration."""

# Unit stats
DEFAULT_HEALTH = 200
DEFAULT_POWER = 3

# Power search upper bound (inclusive)
MAX_POWER = 200

# Grid symbols
WALL = "#"
SPACE = "."
ELF = "E"
GOBLIN = "G"

# Runtime cadence
TICK_MS = 500
TIME_COMPRESSION = 30.0
