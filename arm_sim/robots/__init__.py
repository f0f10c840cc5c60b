"""
Arm kinematics and parameter handling.

Provides the two-segment arm model with forward kinematics for the upper
and lower segments and the biceps and triceps connectors.
"""

from arm_sim.robots.arm import ArmModel, KinematicSnapshot
from arm_sim.robots.configs import ArmParameters

__all__ = ["ArmModel", "ArmParameters", "KinematicSnapshot"]
