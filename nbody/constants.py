#!/usr/bin/env python3
"""
Shared constants for the Solar System Formation Simulator.

World units are screen pixels at zoom 1.0 and simulation time units; masses are
dimensionless. G is a tuning constant chosen so that a disc at the default
parameters completes an orbit in tens of seconds of wall time.
"""

# Physics
G = 1000.0  # tuning constant, not user-exposed
CENTER = (0.0, 0.0)  # fixed position of the central mass
MIN_BODY_RADIUS = 2.0  # visual radius floor; radius = max(mass ** 0.3, MIN_BODY_RADIUS)
HEAVY_BODY_FACTOR = 100.0  # "Add Mass" tool places base_mass * this

# Initial disc
SPAWN_RADIUS_MIN = 100.0
SPAWN_RADIUS_MAX = 300.0
MASS_SPREAD = (0.5, 1.5)  # body masses drawn from base_mass * [lo, hi)

# Rendering (viewport)
VIEW_WIDTH = 1600
VIEW_HEIGHT = 1200
TARGET_FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
BODY_COLOR = (255, 255, 255)
CENTRAL_COLOR = (255, 204, 0)
PREVIEW_COLOR = (255, 255, 0)
HUD_COLOR = (200, 200, 200)

# Camera zoom bounds (zoom factor, 1.0 = one world unit per pixel)
DEFAULT_ZOOM = 1.0
MIN_ZOOM = 0.05
MAX_ZOOM = 20.0
ZOOM_STEP = 1.1
PAN_STEP = 10.0  # world units per key press at zoom 1.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
