"""
Configuration constants.

Centralizes the magic values used by the tile collapse engine.
Organized by functional area for easy maintenance.
"""

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = "tiles1"
RANDOM_SEED = None

# =============================================================================
# SOCKETS
# =============================================================================

# Trailing character marking a socket that matches an identical label
SYMMETRIC_MARKER = "s"

# Trailing character marking the flipped half of a directional socket pair.
# "1" fits "1f", but "1" does not fit "1".
DIRECTIONAL_MARKER = "f"

# =============================================================================
# PROTOTYPES
# =============================================================================

DEFAULT_WEIGHT = 1.0

# Id suffixes for rotated siblings, by number of clockwise quarter turns
ROTATION_SUFFIXES = {1: "_1", 2: "_2", 3: "_3"}

# =============================================================================
# SOLVING
# =============================================================================

# Name of the selection policy new solvers start with
DEFAULT_SELECTION_POLICY = "weight-biased-random"

# RNG stream used by solvers that are not handed an explicit generator
SELECTION_RNG_DOMAIN = "collapse.selection"

# Full attempts made by solve_with_retries before giving up
DEFAULT_MAX_ATTEMPTS = 10
