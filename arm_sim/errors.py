"""
Exception types raised by the arm_sim package.

Classes:
    ArmSimError: Base class for every error raised by arm_sim.
    ParameterError: A ``configure`` update was rejected.
    UnknownParameterError: The update named a parameter the arm does not have.
    ShapeMismatchError: The update value has the wrong arity or type.
    RendererClosedError: The arm's renderer handle was already released.
"""

from __future__ import annotations


class ArmSimError(Exception):
    """Base class for arm_sim errors."""


class ParameterError(ArmSimError, ValueError):
    """A parameter update was rejected; no parameter was changed."""


class UnknownParameterError(ParameterError):
    """Raised when an update names an unrecognised parameter.

    Attributes:
        name: The offending key.
    """

    def __init__(self, name: str, known: tuple = ()) -> None:
        self.name = name
        message = f"Unknown parameter '{name}'"
        if known:
            message += f". Choose from {list(known)}"
        super().__init__(message)


class ShapeMismatchError(ParameterError):
    """Raised when an update value does not have the expected shape.

    Attributes:
        name: The parameter being updated.
        expected: Human-readable description of the expected shape.
    """

    def __init__(self, name: str, expected: str, got: str = "") -> None:
        self.name = name
        self.expected = expected
        message = f"Parameter '{name}' expects {expected}"
        if got:
            message += f", got {got}"
        super().__init__(message)


class RendererClosedError(ArmSimError, RuntimeError):
    """Raised when drawing is requested after the renderer was disposed."""
