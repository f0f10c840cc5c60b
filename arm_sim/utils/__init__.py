"""
Shared utilities for the arm_sim package.

Includes constants, default parameters, colours and planar geometry helpers.
"""
