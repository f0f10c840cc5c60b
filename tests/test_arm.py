"""Tests for the arm kinematic model and its configurator."""

import math

import numpy as np
import pytest

from arm_sim.errors import RendererClosedError, ShapeMismatchError, UnknownParameterError
from arm_sim.robots.arm import ArmModel, KinematicSnapshot
from arm_sim.utils.helpers import polar_to_cartesian, rotate


def _expected_lower(upper, lower, shoulder, elbow, offset):
    ax, ay = polar_to_cartesian(upper, -shoulder)
    dx, dy = rotate(*polar_to_cartesian(offset, elbow), -shoulder)
    lx, ly = rotate(*polar_to_cartesian(lower, elbow), -shoulder)
    return np.array([[ax - dx, ay - dy], [ax, ay], [ax + lx, ay + ly]])


# ----------------------------------------------------------------------
# Forward kinematics
# ----------------------------------------------------------------------


def test_default_upper_segment(arm):
    upper = arm.upper()
    assert upper.shape == (2, 2)
    np.testing.assert_array_equal(upper[0], [0.0, 0.0])
    np.testing.assert_allclose(
        upper[1],
        [0.315 * math.cos(math.radians(-30)), 0.315 * math.sin(math.radians(-30))],
        atol=1e-12,
    )
    np.testing.assert_allclose(upper[1], [0.2728, -0.1575], atol=1e-4)


def test_lower_shares_elbow_anchor_exactly(arm):
    assert arm.lower()[1][0] == arm.upper()[1][0]
    assert arm.lower()[1][1] == arm.upper()[1][1]


def test_default_lower_segment(arm):
    lower = arm.lower()
    assert lower.shape == (3, 2)
    np.testing.assert_allclose(lower, _expected_lower(0.315, 0.290, 30, 15, 0.020), atol=1e-12)


def test_lower_in_closed_form():
    # Rotating by -shoulder turns the elbow-local frame counter-clockwise
    with ArmModel(joint_angles=[30, 15]) as arm:
        lower = arm.lower()
    anchor = 0.315 * np.array([math.cos(math.radians(-30)), math.sin(math.radians(-30))])
    forearm = 0.290 * np.array([math.cos(math.radians(45)), math.sin(math.radians(45))])
    np.testing.assert_allclose(lower[2], anchor + forearm, atol=1e-12)


def test_straight_arm_along_x_axis():
    with ArmModel(joint_angles=[0, 0], elbow_offset=0.02) as arm:
        np.testing.assert_allclose(arm.upper(), [[0, 0], [0.315, 0]], atol=1e-15)
        np.testing.assert_allclose(
            arm.lower(), [[0.295, 0], [0.315, 0], [0.605, 0]], atol=1e-12
        )


def test_default_biceps_and_triceps(arm):
    a = np.array(polar_to_cartesian(0.315, -30))
    b = np.array(rotate(*polar_to_cartesian(0.025, 15), -30))
    t = np.array(rotate(*polar_to_cartesian(0.015, 15), -30))
    np.testing.assert_allclose(arm.biceps()[0], polar_to_cartesian(0.010, -30), atol=1e-15)
    np.testing.assert_allclose(arm.biceps()[1], a + b, atol=1e-15)
    np.testing.assert_allclose(arm.triceps()[0], polar_to_cartesian(0.050, -30), atol=1e-15)
    np.testing.assert_allclose(arm.triceps()[1], a - t, atol=1e-15)


def test_equal_columns_give_symmetric_muscles(arm):
    arm.configure(attachment_offsets=[[0.03, 0.03], [0.02, 0.02]])
    biceps, triceps = arm.biceps(), arm.triceps()
    np.testing.assert_array_equal(biceps[0], triceps[0])
    np.testing.assert_allclose((biceps[1] + triceps[1]) / 2.0, arm.upper()[1], atol=1e-15)


def test_equal_columns_mirror_about_horizontal_upper_segment(arm):
    arm.configure(joint_angles=[0, 90], attachment_offsets=[[0.03, 0.03], [0.02, 0.02]])
    biceps, triceps = arm.biceps(), arm.triceps()
    np.testing.assert_allclose(biceps[1], [0.315, 0.02], atol=1e-15)
    np.testing.assert_allclose(triceps[1], [biceps[1][0], -biceps[1][1]], atol=1e-15)


def test_degenerate_parameters_do_not_fail(arm):
    arm.configure(segment_lengths=[0, 0], elbow_offset=0, attachment_offsets=np.zeros((2, 2)))
    snapshot = arm.snapshot()
    for points in snapshot.as_dict().values():
        np.testing.assert_allclose(points, 0.0, atol=1e-15)


def test_negative_length_inverts_geometry(arm):
    arm.configure(segment_lengths=[-0.315, 0.29])
    np.testing.assert_allclose(arm.upper()[1], -np.array(polar_to_cartesian(0.315, -30)))


def test_snapshot_is_recomputed_fresh(arm):
    first = arm.snapshot()
    first.upper[1] = [9.0, 9.0]
    second = arm.snapshot()
    assert isinstance(second, KinematicSnapshot)
    assert second.upper[1][0] != 9.0
    assert set(second.as_dict()) == {"upper", "lower", "biceps", "triceps"}


# ----------------------------------------------------------------------
# Configurator
# ----------------------------------------------------------------------


def test_configure_segment_lengths_changes_upper_radius(arm):
    arm.configure({"segment_lengths": [0.4, 0.3]})
    assert float(np.hypot(*arm.upper()[1])) == pytest.approx(0.4, abs=1e-15)


def test_unknown_key_leaves_geometry_unchanged(arm, recorder):
    before = arm.snapshot()
    calls = len(recorder.calls)
    with pytest.raises(UnknownParameterError) as excinfo:
        arm.configure({"segment_lengths": [0.4, 0.3], "badKey": 1})
    assert excinfo.value.name == "badKey"
    after = arm.snapshot()
    for name, points in before.as_dict().items():
        np.testing.assert_array_equal(after.as_dict()[name], points)
    assert len(recorder.calls) == calls


def test_shape_mismatch_leaves_parameters_unchanged(arm):
    with pytest.raises(ShapeMismatchError) as excinfo:
        arm.configure(joint_angles=[10, 20], segment_lengths=[0.4])
    assert "pair" in excinfo.value.expected
    np.testing.assert_array_equal(arm.joint_angles, [30.0, 15.0])


def test_keywords_applied_after_mapping(arm):
    arm.configure({"joint_angles": [1, 2]}, theta=[3, 4])
    np.testing.assert_array_equal(arm.joint_angles, [3.0, 4.0])


def test_original_aliases(arm):
    arm.configure({"r": [0.3, 0.2], "delta": 0.01, "lambda": [[1, 2], [3, 4]]})
    np.testing.assert_array_equal(arm.segment_lengths, [0.3, 0.2])
    assert arm.elbow_offset == 0.01
    np.testing.assert_array_equal(arm.attachment_offsets, [[1, 2], [3, 4]])


def test_muscle_state_is_stored_but_not_used(arm):
    before = arm.snapshot()
    arm.configure(stress=[1.5, 2.5], strain_delta=[0.001, -0.002])
    np.testing.assert_array_equal(arm.stress, [1.5, 2.5])
    np.testing.assert_array_equal(arm.strain_delta, [0.001, -0.002])
    np.testing.assert_array_equal(arm.snapshot().lower, before.lower)


def test_getters_return_copies(arm):
    arm.segment_lengths[0] = 5.0
    arm.parameters().joint_angles[0] = 5.0
    assert arm.segment_lengths[0] == 0.315
    assert arm.joint_angles[0] == 30.0


def test_constructor_overrides_are_validated(recorder):
    with pytest.raises(UnknownParameterError):
        ArmModel(renderer=recorder, wingspan=2.0)
    assert recorder.calls == []


def test_constructor_overrides(recorder):
    with ArmModel("Left", renderer=recorder, theta=[45, 30]) as arm:
        np.testing.assert_array_equal(arm.joint_angles, [45.0, 30.0])
        assert arm.name == "Left"


# ----------------------------------------------------------------------
# Renderer collaboration
# ----------------------------------------------------------------------


def test_construction_draws_and_labels(arm, recorder):
    assert recorder.names() == ["initialize", "update_geometry", "set_label"]
    assert recorder.calls[0][1] == "Ball-and-Stick 2-Segment Arm"
    assert recorder.calls[-1][1] == "Arm Plot (Untitled)"


def test_configure_pushes_geometry_then_label(arm, recorder):
    arm.configure(segment_lengths=[0.4, 0.3])
    assert recorder.names()[-2:] == ["update_geometry", "set_label"]
    pushed = recorder.calls[-2][1]
    np.testing.assert_array_equal(pushed["upper"], arm.upper())
    np.testing.assert_array_equal(pushed["lower"], arm.lower())


def test_rename_updates_label(arm, recorder):
    arm.rename("Right")
    assert arm.name == "Right"
    assert arm.label == "Arm Plot (Right)"
    assert recorder.calls[-1] == ("set_label", "Arm Plot (Right)")


def test_close_disposes_once(recorder):
    arm = ArmModel(renderer=recorder)
    arm.close()
    arm.close()
    assert recorder.names().count("dispose") == 1
    assert arm.closed
    assert arm.handle is None


def test_context_manager_disposes_on_error(recorder):
    with pytest.raises(RuntimeError):
        with ArmModel(renderer=recorder):
            raise RuntimeError("boom")
    assert recorder.names()[-1] == "dispose"


def test_closed_arm_rejects_drawing(recorder):
    arm = ArmModel(renderer=recorder)
    arm.close()
    with pytest.raises(RendererClosedError):
        arm.configure(segment_lengths=[0.4, 0.3])
    with pytest.raises(RendererClosedError):
        arm.rename("Other")
    # Geometry stays readable without a figure
    assert arm.upper().shape == (2, 2)


def test_independent_arms_do_not_share_state():
    with ArmModel("Left") as left, ArmModel("Right") as right:
        left.configure(joint_angles=[60, 10])
        assert left.handle is not right.handle
        np.testing.assert_array_equal(right.joint_angles, [30.0, 15.0])


def test_rejected_update_is_logged(arm, caplog):
    with caplog.at_level("WARNING", logger="arm_sim"):
        with pytest.raises(UnknownParameterError):
            arm.configure(badKey=1)
    assert "badKey" in caplog.text


def test_configure_rejects_scalar_array_and_complex_pairs(arm):
    with pytest.raises(ShapeMismatchError):
        arm.configure(segment_lengths=np.array(0.4))
    with pytest.raises(ShapeMismatchError):
        arm.configure(segment_lengths=np.array([0.4 + 1j, 0.3]))
    np.testing.assert_array_equal(arm.segment_lengths, [0.315, 0.290])
    arm.configure(segment_lengths=[np.array(0.4), np.array(0.3)])
    np.testing.assert_array_equal(arm.segment_lengths, [0.4, 0.3])
