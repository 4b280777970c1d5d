"""
Engineering constants for IS 456 reinforcement design.
"""

import math

# Candidate diameters for beam tension bars and column longitudinal bars
LONGITUDINAL_BAR_SIZES = [12, 16, 20, 25, 32]

# Standard tie/stirrup bar sizes in mm
TIE_BAR_SIZES = [8, 10, 12]

# Unit weight of concrete (kN/m³)
CONCRETE_UNIT_WEIGHT = 25.0

# Density of reinforcing steel (kg/m³)
STEEL_DENSITY = 7850.0

# Slab design strip width (mm)
SLAB_STRIP_WIDTH = 1000.0

# Bar diameter assumed when estimating slab/beam effective depth (mm)
ASSUMED_BAR_ALLOWANCE = 10.0


def bar_area(diameter: float) -> float:
    """Cross-sectional area of one bar in mm² (πφ²/4)."""
    return math.pi * diameter * diameter / 4.0
