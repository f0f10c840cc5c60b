"""
Dataclass configuration holding the parameters of a two-segment arm.

``ArmParameters`` is the parameter store behind ``ArmModel``: it owns the
segment lengths, joint angles, elbow offset, muscle attachment offsets and
the passively stored muscle state.  Updates are validated as a whole by
``ArmParameters.with_updates`` which returns a new instance, so a rejected
update never leaves the store half-changed.

Classes:
    ArmParameters: Geometry and muscle-state parameters of an arm.

Functions:
    resolve_parameter_name: Map a parameter name or alias to its canonical name.
    coerce_parameter: Validate one value against its parameter shape.
    iter_updates: Merge a mapping and keyword overrides into ordered pairs.
"""

from __future__ import annotations

import copy
import numbers
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterable, Mapping, Tuple

import numpy as np

from arm_sim.errors import ShapeMismatchError, UnknownParameterError
from arm_sim.utils.constants import (
    ATTACHMENT_OFFSETS,
    DEFAULT_ATTACHMENT_OFFSETS,
    DEFAULT_ELBOW_OFFSET,
    DEFAULT_JOINT_ANGLES,
    DEFAULT_SEGMENT_LENGTHS,
    DEFAULT_STRAIN_DELTA,
    DEFAULT_STRESS,
    ELBOW_OFFSET,
    JOINT_ANGLES,
    PARAMETER_ALIASES,
    PARAMETER_NAMES,
    SEGMENT_LENGTHS,
    STRAIN_DELTA,
    STRESS,
)

# Expected array shape per parameter; () is a scalar
_EXPECTED_SHAPES: Dict[str, Tuple[int, ...]] = {
    SEGMENT_LENGTHS: (2,),
    JOINT_ANGLES: (2,),
    ELBOW_OFFSET: (),
    ATTACHMENT_OFFSETS: (2, 2),
    STRESS: (2,),
    STRAIN_DELTA: (2,),
}

_SHAPE_DESCRIPTIONS: Dict[Tuple[int, ...], str] = {
    (): "a real scalar",
    (2,): "a pair of 2 real numbers",
    (2, 2): "a 2x2 matrix of real numbers",
}


def resolve_parameter_name(name: str) -> str:
    """Return the canonical parameter name for *name*.

    Args:
        name: A canonical name (``'segment_lengths'``) or original alias (``'r'``).

    Returns:
        The canonical parameter name.

    Raises:
        UnknownParameterError: If *name* is neither.
    """
    if name in _EXPECTED_SHAPES:
        return name
    if isinstance(name, str) and name in PARAMETER_ALIASES:
        return PARAMETER_ALIASES[name]
    raise UnknownParameterError(name, PARAMETER_NAMES)


def _is_real(value: Any) -> bool:
    """Return True for real numbers, excluding booleans and complex values."""
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _coerce_scalar(name: str, value: Any) -> float:
    """Validate and convert a scalar parameter value.

    Raises:
        ShapeMismatchError: When *value* is not a single real number.
    """
    if isinstance(value, np.ndarray) and value.shape == () and _is_real(value.item()):
        return float(value)
    if not _is_real(value):
        raise ShapeMismatchError(name, _SHAPE_DESCRIPTIONS[()], type(value).__name__)
    return float(value)


def _flatten(value: Any) -> Iterable[Any]:
    """Yield the leaves of a nested sequence (strings count as leaves)."""
    if isinstance(value, np.ndarray) and value.ndim == 0:
        yield value.item()
    elif isinstance(value, (list, tuple, np.ndarray)):
        for item in value:
            yield from _flatten(item)
    else:
        yield value


def _coerce_array(name: str, value: Any, shape: Tuple[int, ...]) -> np.ndarray:
    """Validate and convert a pair/matrix parameter value.

    Args:
        name: Parameter being updated (used in the error message).
        value: Candidate value, any nested sequence or array.
        shape: Required shape.

    Returns:
        A fresh ``float64`` array of shape *shape*.

    Raises:
        ShapeMismatchError: On wrong arity, ragged nesting or non-real entries.
    """
    expected = _SHAPE_DESCRIPTIONS[shape]
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, np.ndarray)):
        raise ShapeMismatchError(name, expected, type(value).__name__)
    if not all(_is_real(leaf) for leaf in _flatten(value)):
        raise ShapeMismatchError(name, expected, "non-numeric entries")
    try:
        arr = np.array(value, dtype=np.float64)
    except ValueError as exc:
        raise ShapeMismatchError(name, expected, "a ragged sequence") from exc
    if arr.shape != shape:
        raise ShapeMismatchError(name, expected, f"shape {arr.shape}")
    return arr


def coerce_parameter(name: str, value: Any) -> Any:
    """Validate *value* for the canonical parameter *name*.

    Args:
        name: Canonical parameter name.
        value: Raw user-supplied value.

    Returns:
        A ``float`` for scalars, otherwise a new ``float64`` array.
    """
    shape = _EXPECTED_SHAPES[name]
    if shape == ():
        return _coerce_scalar(name, value)
    return _coerce_array(name, value, shape)


@dataclass
class ArmParameters:
    """Parameters of a two-segment arm with biceps and triceps connectors.

    Attributes:
        segment_lengths: Radius of the [upper, lower] segments (m).
        joint_angles: [shoulder angle clockwise from horizontal, elbow angle
            relative to the upper segment's frame] in degrees.
        elbow_offset: How far the elbow sticks out past the joint to serve as
            the triceps attachment (m).
        attachment_offsets: Muscle connection offsets (m); rows are
            (proximal, distal), columns are (biceps, triceps).
        stress: Stress on [biceps, triceps] (N). Stored only.
        strain_delta: Change in strain on [biceps, triceps] (m). Stored only.
    """

    segment_lengths: np.ndarray = field(
        default_factory=lambda: np.array(DEFAULT_SEGMENT_LENGTHS, dtype=np.float64)
    )
    joint_angles: np.ndarray = field(
        default_factory=lambda: np.array(DEFAULT_JOINT_ANGLES, dtype=np.float64)
    )
    elbow_offset: float = DEFAULT_ELBOW_OFFSET
    attachment_offsets: np.ndarray = field(
        default_factory=lambda: np.array(DEFAULT_ATTACHMENT_OFFSETS, dtype=np.float64)
    )
    stress: np.ndarray = field(
        default_factory=lambda: np.array(DEFAULT_STRESS, dtype=np.float64)
    )
    strain_delta: np.ndarray = field(
        default_factory=lambda: np.array(DEFAULT_STRAIN_DELTA, dtype=np.float64)
    )

    def __post_init__(self) -> None:
        """Coerce every field so direct construction is validated too."""
        for f in fields(self):
            setattr(self, f.name, coerce_parameter(f.name, getattr(self, f.name)))

    # ------------------------------------------------------------------
    # Convenience accessors
    # ------------------------------------------------------------------

    @property
    def upper_length(self) -> float:
        """Length of the upper segment (m)."""
        return float(self.segment_lengths[0])

    @property
    def lower_length(self) -> float:
        """Length of the lower segment (m)."""
        return float(self.segment_lengths[1])

    @property
    def shoulder_angle(self) -> float:
        """Shoulder angle in degrees, clockwise from horizontal."""
        return float(self.joint_angles[0])

    @property
    def elbow_angle(self) -> float:
        """Elbow angle in degrees, relative to the upper segment."""
        return float(self.joint_angles[1])

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def with_updates(self, updates: Iterable[Tuple[str, Any]]) -> "ArmParameters":
        """Return a copy with *updates* applied, validating all of them first.

        Updates are applied in order so a later duplicate wins.  Every key is
        resolved before any value is checked, and nothing is written until
        every value has passed.

        Args:
            updates: ``(name, value)`` pairs; names may be aliases.

        Returns:
            A new ``ArmParameters``; ``self`` is left untouched.

        Raises:
            UnknownParameterError: If any key is not a known parameter.
            ShapeMismatchError: If any value has the wrong shape or type.
        """
        pairs = list(updates)
        resolved = [(resolve_parameter_name(name), value) for name, value in pairs]
        coerced = [(name, coerce_parameter(name, value)) for name, value in resolved]
        updated = copy.deepcopy(self)
        for name, value in coerced:
            setattr(updated, name, value)
        return updated

    def as_dict(self) -> Dict[str, Any]:
        """Return a copy of every parameter keyed by canonical name."""
        return {f.name: copy.deepcopy(getattr(self, f.name)) for f in fields(self)}


def iter_updates(updates: Mapping[str, Any] | None, extra: Mapping[str, Any]) -> list:
    """Flatten a mapping plus keyword overrides into ordered ``(name, value)`` pairs.

    Args:
        updates: Optional mapping of parameter name to value.
        extra: Keyword-argument overrides, applied after *updates*.

    Returns:
        List of ``(name, value)`` tuples.
    """
    pairs = list(updates.items()) if updates else []
    pairs.extend(extra.items())
    return pairs
