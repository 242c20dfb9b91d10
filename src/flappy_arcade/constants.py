"""
constants.py: Centralized tuning for the playfield, physics, pipes and progression.
"""

# -------- Playfield Config --------
PLAYFIELD_WIDTH = 800
PLAYFIELD_HEIGHT = 500

# -------- Bird Config --------
BIRD_X = 50                     # Fixed bird X position (left edge)
BIRD_SIZE = 40                  # Bounding box is BIRD_SIZE x BIRD_SIZE
INITIAL_BIRD_Y = 250
INITIAL_BIRD_VELOCITY = 0.0

# -------- Physics Config (pixels / tick) --------
GRAVITY = 0.5                   # Added to velocity every physics tick
JUMP_FORCE = -8.0               # Velocity is overwritten with this on a jump

# -------- Pipe Config --------
PIPE_WIDTH = 60
GAP_SIZE = 173
BASE_PIPE_SPEED = 5.0           # Pixels per obstacle tick at multiplier 1.0
PIPE_SPAWN_X = 800              # Leading edge of a freshly spawned pipe
PRUNE_MARGIN = 100              # Pipes left of -PRUNE_MARGIN are dropped
MIN_GAP_HEIGHT_MARGIN = 50

# -------- Timing (milliseconds) --------
PHYSICS_TICK_MS = 20
OBSTACLE_TICK_MS = 16
SPAWN_INTERVAL_MS = 2000
ADVANCED_SPAWN_INTERVAL_MS = 1800
WARMUP_MS = 1000                # Grace period before pipes start

# -------- Scoring & Progression --------
POINTS_PER_PIPE = 10
POINTS_FOR_LEVEL_UP = 50
SPEED_INCREASE_PER_LEVEL = 0.1
MAJOR_BOOST_INTERVAL = 3        # Every 3rd level gets an extra boost
MAJOR_BOOST_AMOUNT = 0.2
ADVANCED_MODE_LEVEL = 5

# -------- Advanced Mode --------
ADVANCED_SPEED_FACTOR = 1.2     # Applied on top of the speed multiplier
ADVANCED_PIPE_SPAWN_X = 900
ADVANCED_GAP_MARGIN = 100       # Narrower, centered band for gap heights
ADVANCED_MAX_PIPES = 4
DOUBLE_SPAWN_PROBABILITY = 0.3
DOUBLE_SPAWN_OFFSET = 300       # Extra X offset of the second pipe
