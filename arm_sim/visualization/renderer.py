"""
Renderer interface and a headless NumPy rasteriser for the arm figure.

An ``ArmModel`` never touches graphics state directly: it acquires a
``RenderHandle`` from an ``ArmRenderer`` and then only pushes coordinate
arrays and label text through it.

Classes:
    RenderHandle: Per-figure state owned by a renderer.
    ArmRenderer: Abstract renderer consumed by ``ArmModel``.
    CanvasRenderer: Renders each update into an (H, W, 3) uint8 frame.
"""

from __future__ import annotations

import abc
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import numpy as np

from arm_sim.errors import RendererClosedError
from arm_sim.visualization.style import ENTITY_NAMES, FigureStyle, LineStyle, MarkerStyle

logger = logging.getLogger(__name__)

_handle_ids = itertools.count(1)


@dataclass
class RenderHandle:
    """State for one figure.

    Attributes:
        handle_id: Unique id of the figure within the process.
        title: Figure title.
        style: Figure configuration.
        label: Window label (e.g. ``'Arm Plot (Left)'``).
        geometry: Last coordinate arrays received, keyed by entity name.
        frame: Last rasterised frame, if the renderer produces frames.
        update_count: Number of geometry updates received.
        disposed: Whether the figure has been released.
        backend: Renderer-specific resources (window surface, clock, ...).
    """

    handle_id: int
    title: str
    style: FigureStyle
    label: str = ""
    geometry: Dict[str, np.ndarray] = field(default_factory=dict)
    frame: Optional[np.ndarray] = None
    update_count: int = 0
    disposed: bool = False
    backend: Dict[str, Any] = field(default_factory=dict)


def validate_geometry(geometry: Mapping[str, Any]) -> Dict[str, np.ndarray]:
    """Check that *geometry* holds an (N, 2) array for each arm entity.

    Args:
        geometry: Mapping with ``upper``, ``lower``, ``biceps`` and ``triceps``.

    Returns:
        New dictionary of ``float64`` arrays.

    Raises:
        ValueError: If an entity is missing or is not of shape (N, 2).
    """
    missing = [name for name in ENTITY_NAMES if name not in geometry]
    if missing:
        raise ValueError(f"Geometry is missing entities {missing}")
    result: Dict[str, np.ndarray] = {}
    for name in ENTITY_NAMES:
        arr = np.array(geometry[name], dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"Expected shape (N, 2) for '{name}', got {arr.shape}.")
        result[name] = arr
    return result


class ArmRenderer(abc.ABC):
    """Collaborator that owns figures and draws arm geometry into them."""

    def initialize(self, title: str, style: Optional[FigureStyle] = None) -> RenderHandle:
        """Create a figure and return its handle.

        Args:
            title: Figure title.
            style: Figure configuration; defaults to ``FigureStyle()``.

        Returns:
            A fresh ``RenderHandle``.
        """
        resolved = style if style is not None else FigureStyle()
        handle = RenderHandle(handle_id=next(_handle_ids), title=title, style=resolved)
        self._open(handle)
        logger.debug("Opened figure %d (%s)", handle.handle_id, title)
        return handle

    def update_geometry(self, handle: RenderHandle, geometry: Mapping[str, Any]) -> None:
        """Replace the figure's line data with *geometry* and redraw.

        Raises:
            RendererClosedError: If *handle* was disposed.
            ValueError: If *geometry* is malformed.
        """
        self._check_open(handle)
        handle.geometry = validate_geometry(geometry)
        handle.update_count += 1
        self._redraw(handle)

    def set_label(self, handle: RenderHandle, text: str) -> None:
        """Set the window label of the figure.

        Raises:
            RendererClosedError: If *handle* was disposed.
        """
        self._check_open(handle)
        handle.label = text
        self._apply_label(handle)

    def dispose(self, handle: RenderHandle) -> None:
        """Release the figure. Disposing twice is a no-op."""
        if handle.disposed:
            return
        self._close(handle)
        handle.disposed = True
        logger.debug("Disposed figure %d", handle.handle_id)

    @staticmethod
    def _check_open(handle: RenderHandle) -> None:
        if handle.disposed:
            raise RendererClosedError(f"Figure {handle.handle_id} has been disposed")

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    def _open(self, handle: RenderHandle) -> None:
        """Allocate backend resources for *handle*."""

    @abc.abstractmethod
    def _redraw(self, handle: RenderHandle) -> None:
        """Draw ``handle.geometry``."""
        raise NotImplementedError

    def _apply_label(self, handle: RenderHandle) -> None:
        """Show ``handle.label`` wherever the backend displays it."""

    def _close(self, handle: RenderHandle) -> None:
        """Free backend resources for *handle*."""


# ======================================================================
# CanvasRenderer
# ======================================================================


class CanvasRenderer(ArmRenderer):
    """Headless renderer that rasterises the figure into a NumPy image.

    Each geometry update produces a new (H, W, 3) uint8 frame stored on the
    handle: background, body patch, the four arm lines (muscles dotted) and
    their markers, in that order.
    """

    def _redraw(self, handle: RenderHandle) -> None:
        handle.frame = self.render(handle)

    def render(self, handle: RenderHandle) -> np.ndarray:
        """Rasterise the current geometry of *handle*.

        Returns:
            (H, W, 3) uint8 NumPy array.
        """
        style = handle.style
        canvas = np.zeros((style.height, style.width, 3), dtype=np.uint8)
        self._draw_background(canvas, style)
        self._draw_body(canvas, style)
        for name in ENTITY_NAMES:
            points = handle.geometry.get(name)
            if points is None:
                continue
            line_style = style.lines[name]
            pixels = self.world_to_pixel(points, style)
            self._draw_polyline(canvas, pixels, line_style)
            if line_style.marker is not None:
                self._draw_markers(canvas, pixels, line_style.marker)
        return canvas

    # ------------------------------------------------------------------
    # Coordinate mapping
    # ------------------------------------------------------------------

    @staticmethod
    def world_to_pixel(points: np.ndarray, style: FigureStyle) -> np.ndarray:
        """Map (N, 2) world points in metres to (N, 2) ``(col, row)`` pixels.

        The y axis points up, so larger y maps to smaller row indices.
        """
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        (x_lo, x_hi), (y_lo, y_hi) = style.x_limits, style.y_limits
        cols = (pts[:, 0] - x_lo) / (x_hi - x_lo) * (style.width - 1)
        rows = (y_hi - pts[:, 1]) / (y_hi - y_lo) * (style.height - 1)
        return np.stack([cols, rows], axis=1)

    @staticmethod
    def _pixel_grid(canvas: np.ndarray) -> tuple:
        h, w = canvas.shape[:2]
        rows, cols = np.mgrid[:h, :w]
        return cols.astype(np.float64), rows.astype(np.float64)

    # ------------------------------------------------------------------
    # Drawing primitives
    # ------------------------------------------------------------------

    @staticmethod
    def _draw_background(canvas: np.ndarray, style: FigureStyle) -> None:
        canvas[:] = style.background

    def _draw_body(self, canvas: np.ndarray, style: FigureStyle) -> None:
        """Fill the body patch the shoulder is fixed to, with a 1-pixel edge."""
        corners = np.array([[style.body_x[0], 0.0], [style.body_x[1], 0.0]])
        (c0, _), (c1, _) = self.world_to_pixel(corners, style)
        lo = max(int(np.floor(min(c0, c1))), 0)
        hi = min(int(np.ceil(max(c0, c1))), canvas.shape[1] - 1)
        if hi < lo:
            return
        canvas[:, lo : hi + 1] = style.body_color
        for edge in (int(round(c0)), int(round(c1))):
            if 0 <= edge < canvas.shape[1]:
                canvas[:, edge] = style.body_edge_color

    def _segment_mask(
        self,
        canvas: np.ndarray,
        start: np.ndarray,
        end: np.ndarray,
        line_style: LineStyle,
    ) -> np.ndarray:
        """Boolean mask of pixels covered by the stroke from *start* to *end*."""
        cols, rows = self._pixel_grid(canvas)
        d = end - start
        length_sq = float(d @ d)
        if length_sq > 0.0:
            t = ((cols - start[0]) * d[0] + (rows - start[1]) * d[1]) / length_sq
            t = np.clip(t, 0.0, 1.0)
        else:
            t = np.zeros_like(cols)
        dist = np.hypot(cols - (start[0] + t * d[0]), rows - (start[1] + t * d[1]))
        mask = dist <= max(line_style.width / 2.0, 0.5)
        if line_style.dotted:
            period = max(2.0 * line_style.width, 2.0)
            along = t * np.sqrt(length_sq)
            mask &= np.mod(along, period) < period / 2.0
        return mask

    def _draw_polyline(
        self, canvas: np.ndarray, pixels: np.ndarray, line_style: LineStyle
    ) -> None:
        for start, end in zip(pixels[:-1], pixels[1:]):
            if not (np.all(np.isfinite(start)) and np.all(np.isfinite(end))):
                continue
            canvas[self._segment_mask(canvas, start, end, line_style)] = line_style.color

    def _draw_markers(
        self, canvas: np.ndarray, pixels: np.ndarray, marker: MarkerStyle
    ) -> None:
        indices = range(len(pixels)) if marker.indices is None else marker.indices
        cols, rows = self._pixel_grid(canvas)
        half = marker.size / 2.0
        for idx in indices:
            if not -len(pixels) <= idx < len(pixels):
                continue
            cx, cy = pixels[idx]
            if not (np.isfinite(cx) and np.isfinite(cy)):
                continue
            if marker.shape == "circle":
                dist = np.hypot(cols - cx, rows - cy)
            else:
                dist = np.maximum(np.abs(cols - cx), np.abs(rows - cy))
            canvas[dist <= half] = marker.edge_color
            canvas[dist <= half - 1.0] = marker.face_color
