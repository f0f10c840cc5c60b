"""
Figure rendering for the arm model.

Provides the renderer interface consumed by ``ArmModel``, a headless NumPy
renderer and a live Pygame window renderer.
"""

from arm_sim.visualization.renderer import ArmRenderer, CanvasRenderer, RenderHandle
from arm_sim.visualization.style import FigureStyle, LineStyle, MarkerStyle
from arm_sim.visualization.visualizer import PygameRenderer

__all__ = [
    "ArmRenderer",
    "CanvasRenderer",
    "FigureStyle",
    "LineStyle",
    "MarkerStyle",
    "PygameRenderer",
    "RenderHandle",
]
