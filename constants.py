import math

# Stepping loop: 4 s of simulated time at 0.008 s/step
STEP = 0.008
STEP_LIMIT = 4

GRAVITY_Z = -9.81
MAX_FORCE = 50.0  # servo force limit (N); bodies in body.urdf are light
SLEEP_TIME = 1/120  # GUI pacing only

# Terrain (2D gaussian of boxes)
TILT = 0.0
OBSTACLE_COUNT = 10
OBSTACLE_SIZE = 6  # amplitude upper bound is OBSTACLE_SIZE / 1000 before the 4x stretch
TERRAIN_XC = -0.4  # gaussian skew
TERRAIN_YC = 0.0
TERRAIN_SPREAD = 0.5
TERRAIN_MIN_AMPLITUDE = 0.002
FOOTPRINT_STRETCH = 4.0

# Gait controller gene scaling
AMPLITUDE_GAIN = 40.0  # degrees
AMPLITUDE_DEADBAND = 5.0
PHASE_GAIN = 1.0
BIAS_GAIN = 40.0
BIAS_OFFSET = -20.0
FREQUENCY_GAIN = 2.0
SATURATION = 4.0
GENES_PER_GROUP = 3

# Joint grouping for the 14-servo robot
TRAILING_SERVOS = 4  # servos driven only as mirror partners
BODY_GROUPS = 2
MIRROR_OFFSET = 4
OUTER_GROUPS = (6, 9)
OUTER_GAIN = 1.8

ROBOT_URDF = "body.urdf"
ROBOT_START = (0.0, 0.0, 0.2)

DEG = math.pi / 180
