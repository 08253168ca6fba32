# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They are fundamental to the application's framework, such as rendering
properties and default window sizes. Tunable physics values live in
`config.json` under "simulation_parameters".
"""

# Visualization settings
# Set to True to run in borderless fullscreen mode.
# Set to False to run in a resizable window (WINDOW_WIDTH x WINDOW_HEIGHT).
FULLSCREEN = False
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
WINDOW_TITLE = "Constellation"
FPS = 60
BACKGROUND_COLOR = (12, 12, 20) # Near black

# --- Particle Rendering ---
# Radius is always mass * PARTICLE_SIZE_SCALE.
PARTICLE_SIZE_SCALE = 1.5
# RGBA; alpha 178 is roughly 0.7 opacity.
PARTICLE_COLOR = (255, 255, 255, 178)

# --- Connection Lines ---
# RGBA; alpha 20 is roughly 0.08 opacity.
CONNECTION_COLOR = (255, 255, 255, 20)
CONNECTION_LINE_WIDTH = 1.5
