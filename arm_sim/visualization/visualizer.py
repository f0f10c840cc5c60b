"""
Real-time window renderer for the arm figure.

Provides a Pygame-based window that shows the frames produced by
``CanvasRenderer`` and overlays the figure title, axis labels and a legend.
The window caption follows the label pushed by the arm model.

Classes:
    PygameRenderer: Live arm figure in a Pygame window.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np

from arm_sim.visualization.renderer import CanvasRenderer, RenderHandle
from arm_sim.visualization.style import ENTITY_NAMES

logger = logging.getLogger(__name__)


class PygameRenderer(CanvasRenderer):
    """Pygame-backed renderer showing one arm figure per window.

    Pygame supports a single display surface per process, so only one
    handle may be open at a time.

    Attributes:
        fps: Maximum redraw rate; ``0`` disables throttling.
        font_name: System font used for the overlay text.
    """

    def __init__(self, fps: int = 30, font_name: str = "arial") -> None:
        self.fps = fps
        self.font_name = font_name
        self._active: Optional[RenderHandle] = None
        self._fonts: Dict[Tuple[int, bool], Any] = {}

    # ------------------------------------------------------------------
    # Initialisation / teardown
    # ------------------------------------------------------------------

    def _open(self, handle: RenderHandle) -> None:
        """Create the Pygame window and clock.

        Raises:
            ImportError: If Pygame is not installed.
            RuntimeError: If another figure already owns the window.
        """
        try:
            import pygame
        except ImportError as exc:
            raise ImportError("Pygame required: pip install pygame") from exc
        if self._active is not None and not self._active.disposed:
            raise RuntimeError(
                f"Figure {self._active.handle_id} already owns the Pygame window"
            )
        pygame.init()
        style = handle.style
        handle.backend["screen"] = pygame.display.set_mode((style.width, style.height))
        handle.backend["clock"] = pygame.time.Clock()
        pygame.display.set_caption(handle.title)
        self._active = handle
        logger.info("Opened Pygame window %dx%d", style.width, style.height)

    def _close(self, handle: RenderHandle) -> None:
        """Destroy the Pygame window and quit Pygame."""
        handle.backend.clear()
        self._fonts.clear()
        if self._active is handle:
            self._active = None
        try:
            import pygame

            pygame.quit()
        except Exception:
            logger.debug("Pygame shutdown failed", exc_info=True)

    # ------------------------------------------------------------------
    # Live rendering
    # ------------------------------------------------------------------

    def _apply_label(self, handle: RenderHandle) -> None:
        import pygame

        pygame.display.set_caption(handle.label or handle.title)

    def _redraw(self, handle: RenderHandle) -> None:
        """Rasterise the geometry, blit it and draw the overlay."""
        super()._redraw(handle)
        screen = handle.backend["screen"]
        screen.blit(self._image_to_surface(handle.frame), (0, 0))
        self._draw_overlay(handle)
        handle.backend["alive"] = self._flip_display(handle)

    def _image_to_surface(self, image: np.ndarray) -> Any:
        """Convert an (H, W, 3) uint8 NumPy image to a Pygame surface.

        Args:
            image: RGB image array.

        Returns:
            A Pygame ``Surface`` object.
        """
        import pygame

        return pygame.surfarray.make_surface(np.transpose(image, (1, 0, 2)))

    def _font(self, size: int, bold: bool) -> Any:
        """Return the overlay font for *size*, loading it on first use."""
        import pygame

        key = (size, bold)
        if key not in self._fonts:
            self._fonts[key] = pygame.font.SysFont(self.font_name, size, bold=bold)
        return self._fonts[key]

    def _draw_text(
        self, handle: RenderHandle, text: str, pos: tuple, size: int = 14,
        bold: bool = False, color: Optional[tuple] = None,
    ) -> None:
        """Draw a single line of text with its top-left corner at *pos*."""
        rendered = self._font(size, bold).render(text, True, color or handle.style.text_color)
        handle.backend["screen"].blit(rendered, pos)

    def _draw_overlay(self, handle: RenderHandle) -> None:
        """Draw title, axis labels and legend on top of the frame."""
        style = handle.style
        self._draw_text(handle, handle.title, (8, 4), size=16, bold=True)
        self._draw_text(handle, style.x_label, (style.width // 2 - 20, style.height - 20))
        self._draw_text(handle, style.y_label, (4, style.height // 2))
        if style.show_legend:
            self._draw_legend(handle)

    def _draw_legend(self, handle: RenderHandle) -> None:
        """Draw the legend in the top-right (north-east) corner."""
        import pygame

        style = handle.style
        x = style.width - 120
        for row, name in enumerate(ENTITY_NAMES):
            line_style = style.lines[name]
            y = 28 + row * 18
            pygame.draw.line(
                handle.backend["screen"], line_style.color,
                (x, y + 7), (x + 20, y + 7), max(int(line_style.width // 2), 1),
            )
            self._draw_text(handle, line_style.label, (x + 26, y), size=12)

    def _pump_events(self) -> bool:
        """Process Pygame events and return False if user quit.

        Returns:
            True if the window should stay open, False on quit.
        """
        import pygame

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
        return True

    def _flip_display(self, handle: RenderHandle) -> bool:
        """Update the Pygame display, pump events, and tick the clock.

        Returns:
            True if still running, False if user closed the window.
        """
        import pygame

        pygame.display.flip()
        alive = self._pump_events()
        clock = handle.backend.get("clock")
        if clock is not None and self.fps > 0:
            clock.tick(self.fps)
        return alive

    def is_alive(self, handle: RenderHandle) -> bool:
        """Return False once the user has closed the window."""
        return not handle.disposed and handle.backend.get("alive", True)
