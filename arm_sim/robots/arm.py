"""
Two-segment arm with biceps and triceps connectors, with forward kinematics.

The arm is rigidly fixed at the shoulder (the origin).  From the segment
lengths, joint angles, elbow offset and muscle attachment offsets the model
derives the planar coordinates of the upper segment, the lower segment, the
biceps and the triceps, and pushes them to a renderer whenever the
parameters change.

Classes:
    KinematicSnapshot: Coordinates of the four arm entities.
    ArmModel: The arm kinematic model and its parameter configurator.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np

from arm_sim.errors import ParameterError, RendererClosedError
from arm_sim.robots.configs import ArmParameters, iter_updates
from arm_sim.utils.constants import DEFAULT_ARM_NAME, WINDOW_LABEL_FORMAT
from arm_sim.utils.helpers import polar_to_cartesian, rotate
from arm_sim.visualization.renderer import ArmRenderer, CanvasRenderer, RenderHandle
from arm_sim.visualization.style import FigureStyle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KinematicSnapshot:
    """Coordinates of the arm entities; each array has one (x, y) row per point.

    Attributes:
        upper: (2, 2) shoulder and elbow anchor.
        lower: (3, 2) elbow stick-out, elbow anchor, wrist.
        biceps: (2, 2) proximal and distal attachment.
        triceps: (2, 2) proximal and distal attachment.
    """

    upper: np.ndarray
    lower: np.ndarray
    biceps: np.ndarray
    triceps: np.ndarray

    def as_dict(self) -> Dict[str, np.ndarray]:
        """Return the arrays keyed by entity name, as expected by renderers."""
        return {
            "upper": self.upper,
            "lower": self.lower,
            "biceps": self.biceps,
            "triceps": self.triceps,
        }


class ArmModel:
    """Kinematic model of a two-segment arm driving one renderer figure.

    The model owns a renderer handle from construction until ``close()``.
    Parameters change only through ``configure``, which validates the whole
    update before applying any of it and then redraws the figure.

    Example::

        with ArmModel("Left", joint_angles=[45, 30]) as arm:
            arm.configure(segment_lengths=[0.4, 0.3])
            wrist = arm.lower()[2]
    """

    def __init__(
        self,
        name: str = DEFAULT_ARM_NAME,
        renderer: Optional[ArmRenderer] = None,
        style: Optional[FigureStyle] = None,
        **parameters: Any,
    ) -> None:
        """Create the arm and its figure.

        Args:
            name: Arm name, shown in the window label.
            renderer: Figure collaborator; defaults to a ``CanvasRenderer``.
            style: Figure style passed to ``renderer.initialize``.
            **parameters: Initial parameter overrides, validated like
                ``configure`` (aliases such as ``r`` or ``theta`` allowed).

        Raises:
            ParameterError: If an override is unknown or malformed.
        """
        self._params = ArmParameters().with_updates(iter_updates(None, parameters))
        self._name = name
        self._renderer = renderer if renderer is not None else CanvasRenderer()
        resolved_style = style if style is not None else FigureStyle()
        self._handle: Optional[RenderHandle] = self._renderer.initialize(
            resolved_style.title, resolved_style
        )
        logger.info("Arm '%s' acquired figure %d", name, self._handle.handle_id)
        try:
            self.draw()
            self._push_label()
        except BaseException:
            self.close()
            raise

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Dispose of the renderer figure. Safe to call more than once."""
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        self._renderer.dispose(handle)
        logger.info("Arm '%s' released figure %d", self._name, handle.handle_id)

    def __enter__(self) -> "ArmModel":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        """Whether the figure has been released."""
        return self._handle is None

    @property
    def handle(self) -> Optional[RenderHandle]:
        """The renderer handle, or ``None`` after ``close()``."""
        return self._handle

    def _require_handle(self) -> RenderHandle:
        if self._handle is None:
            raise RendererClosedError(f"Arm '{self._name}' has been closed")
        return self._handle

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        """The arm name (``'Untitled'`` by default)."""
        return self._name

    def rename(self, name: str) -> None:
        """Change the arm name and push the new window label."""
        self._require_handle()
        self._name = name
        self._push_label()

    @property
    def label(self) -> str:
        """The window label derived from the arm name."""
        return WINDOW_LABEL_FORMAT.format(name=self._name)

    def configure(self, updates: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        """Update core parameters and redraw the figure.

        Updates from *updates* are applied in order, then *kwargs*; a later
        value for the same parameter wins.  The update is all-or-nothing.

        Args:
            updates: Mapping of parameter name to value.
            **kwargs: Further updates as keyword arguments. Accepted names are
                ``segment_lengths`` (upper, lower radii in m), ``joint_angles``
                (shoulder degrees clockwise from horizontal, elbow degrees
                relative to the upper segment), ``elbow_offset`` (m),
                ``attachment_offsets`` (2x2, m), ``stress`` and
                ``strain_delta``, or the aliases ``r``, ``theta``, ``delta``,
                ``lambda``, ``sigma`` and ``d_epsilon``.

        Raises:
            UnknownParameterError: If a key is not a parameter; nothing changes.
            ShapeMismatchError: If a value has the wrong shape; nothing changes.
            RendererClosedError: If the arm has been closed.
        """
        self._require_handle()
        pairs = iter_updates(updates, kwargs)
        try:
            self._params = self._params.with_updates(pairs)
        except ParameterError as exc:
            logger.warning("Rejected update for arm '%s': %s", self._name, exc)
            raise
        logger.debug("Arm '%s' configured: %s", self._name, [name for name, _ in pairs])
        self.draw()
        self._push_label()

    def draw(self) -> KinematicSnapshot:
        """Recompute all coordinates and push them to the renderer.

        Returns:
            The snapshot that was drawn.
        """
        handle = self._require_handle()
        snapshot = self.snapshot()
        self._renderer.update_geometry(handle, snapshot.as_dict())
        return snapshot

    def _push_label(self) -> None:
        self._renderer.set_label(self._require_handle(), self.label)

    # ------------------------------------------------------------------
    # Parameter access
    # ------------------------------------------------------------------

    def parameters(self) -> ArmParameters:
        """Return a copy of the current parameters."""
        return copy.deepcopy(self._params)

    @property
    def segment_lengths(self) -> np.ndarray:
        """Radius of the [upper, lower] segments (m)."""
        return self._params.segment_lengths.copy()

    @property
    def joint_angles(self) -> np.ndarray:
        """[shoulder, elbow] angles (degrees)."""
        return self._params.joint_angles.copy()

    @property
    def elbow_offset(self) -> float:
        """Elbow stick-out used as the triceps anchor (m)."""
        return self._params.elbow_offset

    @property
    def attachment_offsets(self) -> np.ndarray:
        """Muscle attachment offsets; rows (proximal, distal), columns (biceps, triceps)."""
        return self._params.attachment_offsets.copy()

    @property
    def stress(self) -> np.ndarray:
        """Stored stress on [biceps, triceps] (N)."""
        return self._params.stress.copy()

    @property
    def strain_delta(self) -> np.ndarray:
        """Stored change in strain on [biceps, triceps] (m)."""
        return self._params.strain_delta.copy()

    # ------------------------------------------------------------------
    # Forward kinematics
    # ------------------------------------------------------------------

    def _elbow_anchor(self) -> Tuple[float, float]:
        """End of the upper segment, shared by every entity that uses it."""
        p = self._params
        return polar_to_cartesian(p.upper_length, -p.shoulder_angle)

    def _elbow_frame_offset(self, radius: float) -> Tuple[float, float]:
        """Offset *radius* along the elbow angle, turned into the upper segment's frame."""
        p = self._params
        a, b = polar_to_cartesian(radius, p.elbow_angle)
        return rotate(a, b, -p.shoulder_angle)

    def upper(self) -> np.ndarray:
        """Return the (2, 2) coordinates of the upper segment."""
        points = np.zeros((2, 2))
        points[1] = self._elbow_anchor()
        return points

    def lower(self) -> np.ndarray:
        """Return the (3, 2) coordinates of the lower segment.

        Point 0 is the elbow stick-out, point 1 the elbow anchor and point 2
        the distal end of the forearm.
        """
        points = np.full((3, 2), np.nan)
        points[1] = self._elbow_anchor()
        points[0] = points[1] - self._elbow_frame_offset(self._params.elbow_offset)
        points[2] = points[1] + self._elbow_frame_offset(self._params.lower_length)
        return points

    def biceps(self) -> np.ndarray:
        """Return the (2, 2) coordinates of both biceps endpoints."""
        return self._muscle(column=0, sign=1.0)

    def triceps(self) -> np.ndarray:
        """Return the (2, 2) coordinates of both triceps endpoints."""
        return self._muscle(column=1, sign=-1.0)

    def _muscle(self, column: int, sign: float) -> np.ndarray:
        # Triceps hangs on the opposite side of the elbow anchor from biceps
        p = self._params
        points = np.full((2, 2), np.nan)
        points[0] = polar_to_cartesian(p.attachment_offsets[0, column], -p.shoulder_angle)
        anchor = np.array(self._elbow_anchor())
        points[1] = anchor + sign * np.array(
            self._elbow_frame_offset(p.attachment_offsets[1, column])
        )
        return points

    def snapshot(self) -> KinematicSnapshot:
        """Recompute the coordinates of all four entities."""
        return KinematicSnapshot(
            upper=self.upper(),
            lower=self.lower(),
            biceps=self.biceps(),
            triceps=self.triceps(),
        )

    def __repr__(self) -> str:
        p = self._params
        return (
            f"ArmModel(name={self._name!r}, segment_lengths={p.segment_lengths.tolist()}, "
            f"joint_angles={p.joint_angles.tolist()}, elbow_offset={p.elbow_offset})"
        )
