"""Shared fixtures for the arm_sim test-suite."""

from __future__ import annotations

from typing import Any, List, Tuple

import pytest

from arm_sim.robots.arm import ArmModel
from arm_sim.visualization.renderer import ArmRenderer, RenderHandle


class RecordingRenderer(ArmRenderer):
    """Renderer that logs every call instead of drawing."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []

    def _open(self, handle: RenderHandle) -> None:
        self.calls.append(("initialize", handle.title))

    def _redraw(self, handle: RenderHandle) -> None:
        self.calls.append(("update_geometry", {k: v.copy() for k, v in handle.geometry.items()}))

    def _apply_label(self, handle: RenderHandle) -> None:
        self.calls.append(("set_label", handle.label))

    def _close(self, handle: RenderHandle) -> None:
        self.calls.append(("dispose", handle.handle_id))

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def recorder() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def arm(recorder: RecordingRenderer):
    model = ArmModel(renderer=recorder)
    yield model
    model.close()
