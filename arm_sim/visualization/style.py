"""
Style configuration for the arm figure.

Dataclasses describing how the figure looks: axis limits and labels, the
body patch the shoulder is fixed to, and per-entity line and marker styles.
Colours may be given as RGB tuples or hex strings (``'#d5dbcc'``).

Classes:
    MarkerStyle: Marker drawn on selected points of a line.
    LineStyle: Colour, width, dash pattern and marker of one line entity.
    FigureStyle: Complete figure configuration handed to a renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple, Union

from arm_sim.utils.constants import (
    COLOR_BACKGROUND,
    COLOR_BICEPS,
    COLOR_BODY,
    COLOR_BODY_EDGE,
    COLOR_ELBOW_MARKER,
    COLOR_ELBOW_MARKER_EDGE,
    COLOR_MUSCLE_MARKER,
    COLOR_MUSCLE_MARKER_EDGE,
    COLOR_SEGMENT,
    COLOR_SHOULDER_MARKER,
    COLOR_TEXT,
    COLOR_TRICEPS,
    DEFAULT_FIGURE_TITLE,
    DEFAULT_RENDER_HEIGHT,
    DEFAULT_RENDER_WIDTH,
    DEFAULT_X_LABEL,
    DEFAULT_X_LIMITS,
    DEFAULT_Y_LABEL,
    DEFAULT_Y_LIMITS,
)
from arm_sim.utils.helpers import hex_to_rgb

Color = Union[str, Tuple[int, int, int]]

ENTITY_NAMES: Tuple[str, ...] = ("upper", "lower", "biceps", "triceps")


def as_rgb(color: Color) -> Tuple[int, int, int]:
    """Normalise a hex string or RGB sequence to an ``(r, g, b)`` tuple.

    Raises:
        ValueError: If the colour is malformed or a channel is outside 0-255.
    """
    if isinstance(color, str):
        return hex_to_rgb(color)
    rgb = tuple(int(c) for c in color)
    if len(rgb) != 3 or not all(0 <= c <= 255 for c in rgb):
        raise ValueError(f"Expected an RGB triple in 0-255, got {color!r}")
    return rgb  # type: ignore[return-value]


@dataclass
class MarkerStyle:
    """Marker drawn on points of a line.

    Attributes:
        shape: ``'square'`` or ``'circle'``.
        size: Marker edge length / diameter in pixels.
        face_color: Fill colour.
        edge_color: Outline colour.
        indices: Point indices that get a marker; ``None`` marks every point.
    """

    shape: str = "square"
    size: int = 8
    face_color: Color = COLOR_MUSCLE_MARKER
    edge_color: Color = COLOR_MUSCLE_MARKER_EDGE
    indices: Optional[Sequence[int]] = None

    def __post_init__(self) -> None:
        if self.shape not in ("square", "circle"):
            raise ValueError(f"Unknown marker shape '{self.shape}'")
        self.face_color = as_rgb(self.face_color)
        self.edge_color = as_rgb(self.edge_color)


@dataclass
class LineStyle:
    """Appearance of one of the four arm entities.

    Attributes:
        label: Legend text.
        color: Line colour.
        width: Line width in pixels.
        dotted: Draw the line as a dotted stroke.
        marker: Optional marker style.
    """

    label: str
    color: Color = COLOR_SEGMENT
    width: float = 5.0
    dotted: bool = False
    marker: Optional[MarkerStyle] = None

    def __post_init__(self) -> None:
        self.color = as_rgb(self.color)


def _default_lines() -> Dict[str, LineStyle]:
    """Line styles reproducing the original arm plot."""
    return {
        "upper": LineStyle(
            label="Upper Arm",
            color=COLOR_SEGMENT,
            width=5.0,
            marker=MarkerStyle(
                shape="square",
                size=10,
                face_color=COLOR_SHOULDER_MARKER,
                edge_color=(0, 0, 0),
                indices=(0,),
            ),
        ),
        "lower": LineStyle(
            label="Lower Arm",
            color=COLOR_SEGMENT,
            width=5.0,
            marker=MarkerStyle(
                shape="circle",
                size=8,
                face_color=COLOR_ELBOW_MARKER,
                edge_color=COLOR_ELBOW_MARKER_EDGE,
                indices=(1,),
            ),
        ),
        "biceps": LineStyle(
            label="Biceps", color=COLOR_BICEPS, width=3.5, dotted=True, marker=MarkerStyle()
        ),
        "triceps": LineStyle(
            label="Triceps", color=COLOR_TRICEPS, width=3.5, dotted=True, marker=MarkerStyle()
        ),
    }


@dataclass
class FigureStyle:
    """Figure configuration consumed by ``ArmRenderer.initialize``.

    Attributes:
        width: Frame width in pixels.
        height: Frame height in pixels.
        title: Figure title.
        x_label: Horizontal axis label.
        y_label: Vertical axis label.
        x_limits: Visible x range in metres.
        y_limits: Visible y range in metres.
        background: Background colour.
        text_color: Colour of title, labels and legend.
        body_x: Horizontal extent of the body patch (m); it spans all of y.
        body_color: Body patch fill.
        body_edge_color: Body patch outline.
        lines: Style per entity, keyed by ``upper/lower/biceps/triceps``.
        show_legend: Draw the legend (window renderers only).
    """

    width: int = DEFAULT_RENDER_WIDTH
    height: int = DEFAULT_RENDER_HEIGHT
    title: str = DEFAULT_FIGURE_TITLE
    x_label: str = DEFAULT_X_LABEL
    y_label: str = DEFAULT_Y_LABEL
    x_limits: Tuple[float, float] = DEFAULT_X_LIMITS
    y_limits: Tuple[float, float] = DEFAULT_Y_LIMITS
    background: Color = COLOR_BACKGROUND
    text_color: Color = COLOR_TEXT
    body_x: Tuple[float, float] = (-0.2, 0.0)
    body_color: Color = COLOR_BODY
    body_edge_color: Color = COLOR_BODY_EDGE
    lines: Dict[str, LineStyle] = field(default_factory=_default_lines)
    show_legend: bool = True

    def __post_init__(self) -> None:
        """Normalise colours and check the axes and line table."""
        if self.width < 2 or self.height < 2:
            raise ValueError(f"Frame must be at least 2x2 pixels, got {self.width}x{self.height}")
        for lo, hi in (self.x_limits, self.y_limits):
            if not hi > lo:
                raise ValueError(f"Axis limits must be increasing, got ({lo}, {hi})")
        missing = [name for name in ENTITY_NAMES if name not in self.lines]
        if missing:
            raise ValueError(f"Missing line styles for {missing}")
        self.background = as_rgb(self.background)
        self.text_color = as_rgb(self.text_color)
        self.body_color = as_rgb(self.body_color)
        self.body_edge_color = as_rgb(self.body_edge_color)
