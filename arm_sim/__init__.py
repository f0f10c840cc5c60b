"""
Two-segment arm kinematics and visualization.

Computes the planar geometry of a rigid two-segment arm (upper arm and
forearm) with biceps and triceps connectors attached at configurable
offsets, and keeps a figure synchronised with that geometry as the
parameters change.

Modules:
    robots: The arm kinematic model and its parameter store.
    visualization: Renderer interface, headless and Pygame renderers, styles.
    utils: Shared constants and planar geometry helpers.
    errors: Exception types raised on rejected updates.
    logging_config: Logger setup for the ``arm_sim`` namespace.
"""

from arm_sim.errors import (
    ArmSimError,
    ParameterError,
    RendererClosedError,
    ShapeMismatchError,
    UnknownParameterError,
)
from arm_sim.robots.arm import ArmModel, KinematicSnapshot
from arm_sim.robots.configs import ArmParameters
from arm_sim.utils.helpers import polar_to_cartesian, rotate

__version__ = "0.1.0"

__all__ = [
    "ArmModel",
    "ArmParameters",
    "ArmSimError",
    "KinematicSnapshot",
    "ParameterError",
    "RendererClosedError",
    "ShapeMismatchError",
    "UnknownParameterError",
    "polar_to_cartesian",
    "rotate",
]
