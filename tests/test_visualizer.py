"""Tests for the Pygame window renderer (dummy SDL video driver)."""

import sys

import pytest

from arm_sim.robots.arm import ArmModel
from arm_sim.visualization.visualizer import PygameRenderer


def test_missing_pygame_raises_import_error(monkeypatch):
    monkeypatch.setitem(sys.modules, "pygame", None)
    with pytest.raises(ImportError, match="pip install pygame"):
        PygameRenderer().initialize("t")


@pytest.fixture
def pygame(monkeypatch):
    module = pytest.importorskip("pygame")
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    return module


def test_window_follows_arm(pygame):
    renderer = PygameRenderer(fps=0)
    with ArmModel("Left", renderer=renderer) as arm:
        handle = arm.handle
        assert pygame.display.get_caption()[0] == "Arm Plot (Left)"
        assert handle.frame is not None
        assert renderer.is_alive(handle)
        arm.configure(joint_angles=[45, 20])
        arm.rename("Right")
        assert pygame.display.get_caption()[0] == "Arm Plot (Right)"
        assert handle.update_count == 2
    assert handle.disposed
    assert handle.backend == {}
    assert not renderer.is_alive(handle)


def test_single_window_per_renderer(pygame):
    renderer = PygameRenderer(fps=0)
    with ArmModel(renderer=renderer):
        with pytest.raises(RuntimeError, match="already owns"):
            renderer.initialize("second")
    with ArmModel(renderer=renderer) as arm:
        assert not arm.closed


def test_fonts_loaded_once_per_size(pygame, monkeypatch):
    renderer = PygameRenderer(fps=0)
    loads = []
    real_sysfont = pygame.font.SysFont

    def counting_sysfont(name, size, bold=False, italic=False):
        loads.append((size, bold))
        return real_sysfont(name, size, bold=bold, italic=italic)

    monkeypatch.setattr(pygame.font, "SysFont", counting_sysfont)
    with ArmModel(renderer=renderer) as arm:
        arm.configure(joint_angles=[40, 10])
        arm.configure(joint_angles=[50, 20])
        assert sorted(loads) == [(12, False), (14, False), (16, True)]
    assert renderer._fonts == {}
