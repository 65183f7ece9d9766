"""
Default configuration for the beamy ray tracer.
"""
import numpy as np

# Image
DEFAULT_WIDTH = 512
DEFAULT_HEIGHT = 512
CHANNELS = 3

# Camera
DEFAULT_FOV_DEGREES = 60.0
DEFAULT_FOV = np.deg2rad(DEFAULT_FOV_DEGREES)

# Scheduling
DEFAULT_TILE_SIZE = 32
DEFAULT_WORKERS = 1

# Geometry
EPSILON = 1e-6
# Quadratic leading coefficient below which a ray direction counts as degenerate
DEGENERATE_DIRECTION = 1e-12

# Object defaults
DEFAULT_RADIUS = 1.0
DEFAULT_INTENSITY = 1.0
DEFAULT_PLANE_NORMAL = (0.0, -1.0, 0.0)

# Quantization
MAX_CHANNEL_VALUE = 255

# Output
DEFAULT_SCENE_PATH = "scene.json"
DEFAULT_OUTPUT_PATH = "out.png"
