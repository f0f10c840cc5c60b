"""
Shared constants and type aliases for the arm_sim package.

Holds the default arm parameters, the canonical parameter names accepted by
``ArmModel.configure`` (plus the short aliases of the original tool), and the
colour palette used by the figure renderers.
"""

from __future__ import annotations

from typing import Dict, Tuple

# ---------------------------------------------------------------------------
# Parameter names accepted by ArmModel.configure
# ---------------------------------------------------------------------------
SEGMENT_LENGTHS: str = "segment_lengths"
JOINT_ANGLES: str = "joint_angles"
ELBOW_OFFSET: str = "elbow_offset"
ATTACHMENT_OFFSETS: str = "attachment_offsets"
STRESS: str = "stress"
STRAIN_DELTA: str = "strain_delta"

PARAMETER_NAMES: Tuple[str, ...] = (
    SEGMENT_LENGTHS,
    JOINT_ANGLES,
    ELBOW_OFFSET,
    ATTACHMENT_OFFSETS,
    STRESS,
    STRAIN_DELTA,
)

# Short names used by the original arm plotting tool
PARAMETER_ALIASES: Dict[str, str] = {
    "r": SEGMENT_LENGTHS,
    "theta": JOINT_ANGLES,
    "delta": ELBOW_OFFSET,
    "lambda": ATTACHMENT_OFFSETS,
    "sigma": STRESS,
    "d_epsilon": STRAIN_DELTA,
}

# ---------------------------------------------------------------------------
# Default arm geometry (metres / degrees)
# ---------------------------------------------------------------------------
DEFAULT_SEGMENT_LENGTHS: Tuple[float, float] = (0.315, 0.290)
DEFAULT_JOINT_ANGLES: Tuple[float, float] = (30.0, 15.0)
DEFAULT_ELBOW_OFFSET: float = 0.020
# rows: (proximal, distal); columns: (biceps, triceps)
DEFAULT_ATTACHMENT_OFFSETS: Tuple[Tuple[float, float], Tuple[float, float]] = (
    (0.010, 0.050),
    (0.025, 0.015),
)
DEFAULT_STRESS: Tuple[float, float] = (0.0, 0.0)
DEFAULT_STRAIN_DELTA: Tuple[float, float] = (0.0, 0.0)

DEFAULT_ARM_NAME: str = "Untitled"
WINDOW_LABEL_FORMAT: str = "Arm Plot ({name})"

# ---------------------------------------------------------------------------
# Default figure layout
# ---------------------------------------------------------------------------
DEFAULT_RENDER_WIDTH: int = 480
DEFAULT_RENDER_HEIGHT: int = 480
DEFAULT_FIGURE_TITLE: str = "Ball-and-Stick 2-Segment Arm"
DEFAULT_X_LIMITS: Tuple[float, float] = (-0.1, 0.4)
DEFAULT_Y_LIMITS: Tuple[float, float] = (-0.25, 0.25)
DEFAULT_X_LABEL: str = "AP (m)"
DEFAULT_Y_LABEL: str = "ML (m)"

# ---------------------------------------------------------------------------
# Color palette (RGB 0-255) used by the renderers
# ---------------------------------------------------------------------------
COLOR_BACKGROUND: Tuple[int, int, int] = (0, 0, 0)
COLOR_TEXT: Tuple[int, int, int] = (255, 255, 255)
COLOR_BODY: Tuple[int, int, int] = (51, 51, 51)
COLOR_BODY_EDGE: Tuple[int, int, int] = (136, 136, 136)
COLOR_SEGMENT: Tuple[int, int, int] = (213, 219, 204)
COLOR_BICEPS: Tuple[int, int, int] = (210, 52, 15)
COLOR_TRICEPS: Tuple[int, int, int] = (210, 135, 15)
COLOR_SHOULDER_MARKER: Tuple[int, int, int] = (85, 85, 85)
COLOR_ELBOW_MARKER: Tuple[int, int, int] = (255, 255, 255)
COLOR_ELBOW_MARKER_EDGE: Tuple[int, int, int] = (255, 0, 0)
COLOR_MUSCLE_MARKER: Tuple[int, int, int] = (192, 209, 169)
COLOR_MUSCLE_MARKER_EDGE: Tuple[int, int, int] = (102, 102, 102)
