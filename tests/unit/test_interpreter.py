import numpy as np
import pytest

from toolpath_mesh.gcode.interpreter import GcodeInterpreter, GcodeMove
from toolpath_mesh.gcode.parser import GcodeLine
from toolpath_mesh.gcode.state import GcodeState, PositioningMode


def _move(interp: GcodeInterpreter, code: int, **words) -> tuple[GcodeMove, np.ndarray]:
    """Apply a command like the segment builder does and return (move, target)."""
    target = interp.state.current_position.copy()
    move = interp.read_move(code, GcodeLine(**words), target)
    interp.state.update_position(target)
    return move, target


def test_initial_state_is_absolute_at_origin():
    state = GcodeState()
    assert state.positioning_mode is PositioningMode.ABSOLUTE
    np.testing.assert_array_equal(state.current_position, [0, 0, 0])
    np.testing.assert_array_equal(state.origin_offset, [0, 0, 0])


@pytest.mark.parametrize("code", [0, 1])
def test_absolute_move_replaces_present_axes(code):
    interp = GcodeInterpreter()
    _move(interp, code, x=1.0, y=2.0, z=3.0)
    _move(interp, code, x=10.0)
    np.testing.assert_array_equal(interp.state.current_position, [10.0, 2.0, 3.0])


def test_absolute_fallback_is_bit_exact():
    interp = GcodeInterpreter()
    y = 0.1 + 0.2
    z = 1.0 / 3.0
    _move(interp, 1, x=0.7, y=y, z=z)
    _move(interp, 1, x=5.0)
    assert interp.state.current_position[1] == y
    assert interp.state.current_position[2] == z


def test_relative_move_adds_to_current():
    interp = GcodeInterpreter()
    _move(interp, 1, x=1.0, y=1.0, z=1.0)
    _move(interp, 91)
    _move(interp, 1, x=2.0)
    np.testing.assert_array_equal(interp.state.current_position, [3.0, 1.0, 1.0])


def test_g7_is_relative_in_absolute_mode():
    interp = GcodeInterpreter()
    _move(interp, 0, x=5.0, y=5.0)
    move, _ = _move(interp, 7, x=1.0, z=2.0)
    assert move is GcodeMove.TRAVEL
    assert interp.state.positioning_mode is PositioningMode.ABSOLUTE
    np.testing.assert_array_equal(interp.state.current_position, [6.0, 5.0, 2.0])


def test_relative_accumulation_is_independent_of_grouping():
    a = GcodeInterpreter()
    b = GcodeInterpreter()
    _move(a, 91)
    _move(b, 91)
    for _ in range(8):
        _move(a, 1, x=0.5, y=-0.25, z=0.125)
    for _ in range(4):
        _move(b, 1, x=1.0, y=-0.5, z=0.25)
    np.testing.assert_allclose(a.state.current_position, [4.0, -2.0, 1.0])
    np.testing.assert_allclose(a.state.current_position, b.state.current_position)


@pytest.mark.parametrize("code,mode", [(90, PositioningMode.ABSOLUTE), (91, PositioningMode.RELATIVE)])
def test_mode_switch_returns_none_without_moving(code, mode):
    interp = GcodeInterpreter()
    _move(interp, 1, x=3.0, y=4.0)
    if code == 90:
        _move(interp, 91)
    before = interp.state.current_position.copy()
    move, _ = _move(interp, code, x=100.0, e=5.0)
    assert move is GcodeMove.NONE
    assert interp.state.positioning_mode is mode
    np.testing.assert_array_equal(interp.state.current_position, before)


def test_mode_toggle_applies_to_next_move():
    interp = GcodeInterpreter()
    _move(interp, 1, x=2.0)
    _move(interp, 91)
    _move(interp, 1, x=2.0)
    assert interp.state.current_position[0] == 4.0
    _move(interp, 90)
    _move(interp, 1, x=2.0)
    assert interp.state.current_position[0] == 2.0


def test_g92_without_words_redefines_origin():
    interp = GcodeInterpreter()
    _move(interp, 1, x=10.0, y=20.0, z=0.3)
    move, target = _move(interp, 92)
    assert move is GcodeMove.NONE
    np.testing.assert_array_equal(interp.state.current_position, [0, 0, 0])
    np.testing.assert_array_equal(target, [0, 0, 0])
    np.testing.assert_array_equal(interp.state.origin_offset, [10.0, 20.0, 0.3])
    np.testing.assert_allclose(interp.state.absolute_position(), [10.0, 20.0, 0.3])


def test_moves_after_g92_are_offset():
    interp = GcodeInterpreter()
    _move(interp, 1, x=10.0, y=20.0)
    _move(interp, 92)
    _move(interp, 1, x=1.0)
    np.testing.assert_allclose(interp.state.absolute_position(), [11.0, 20.0, 0.0])


@pytest.mark.parametrize(
    "words",
    [
        {"x": 0.0},
        {"y": 5.0},
        {"z": 2.5},
        {"x": 1.0, "z": -1.0},
        {"x": 3.0, "y": 4.0, "z": 5.0},
    ],
)
def test_g92_with_words_preserves_absolute_position(words):
    interp = GcodeInterpreter()
    _move(interp, 1, x=10.0, y=20.0, z=30.0)
    _move(interp, 92, x=1.0)  # non-zero offset on X before the test
    before = interp.state.absolute_position()
    move, _ = _move(interp, 92, **words)
    assert move is GcodeMove.NONE
    np.testing.assert_allclose(interp.state.absolute_position(), before)
    for idx, axis in enumerate("xyz"):
        if axis in words:
            assert interp.state.current_position[idx] == words[axis]


def test_g92_z_uses_z_for_offset():
    interp = GcodeInterpreter()
    _move(interp, 1, x=1.0, y=7.0, z=0.2)
    _move(interp, 92, z=0.0)
    assert interp.state.origin_offset[2] == pytest.approx(0.2)
    _move(interp, 1, z=1.0)
    assert interp.state.absolute_position()[2] == pytest.approx(1.2)


def test_g92_with_only_e_changes_nothing():
    interp = GcodeInterpreter()
    _move(interp, 1, x=3.0, y=4.0)
    _move(interp, 92, e=0.0)
    np.testing.assert_array_equal(interp.state.current_position, [3.0, 4.0, 0.0])
    np.testing.assert_array_equal(interp.state.origin_offset, [0.0, 0.0, 0.0])


@pytest.mark.parametrize(
    "words,expected",
    [
        ({"e": 1.0}, GcodeMove.EXTRUSION),
        ({"x": 1.0, "e": 0.1}, GcodeMove.EXTRUSION),
        ({"x": 1.0, "e": 0.0}, GcodeMove.TRAVEL),
        ({"x": 1.0, "e": -0.8}, GcodeMove.TRAVEL),
        ({"e": -0.8}, GcodeMove.NONE),
        ({"e": 0.0}, GcodeMove.NONE),
        ({"z": 0.2}, GcodeMove.TRAVEL),
        ({}, GcodeMove.NONE),
    ],
)
def test_classification(words, expected):
    interp = GcodeInterpreter()
    move, _ = _move(interp, 1, **words)
    assert move is expected


def test_extrusion_without_axis_change_keeps_position():
    interp = GcodeInterpreter()
    _move(interp, 1, x=2.0)
    move, target = _move(interp, 1, e=0.5)
    assert move is GcodeMove.EXTRUSION
    np.testing.assert_array_equal(target, [2.0, 0.0, 0.0])


@pytest.mark.parametrize("code", [4, 28, 29, 2, 3])
def test_other_codes_are_ignored(code):
    interp = GcodeInterpreter()
    move, _ = _move(interp, code, x=9.0, y=9.0, e=1.0)
    assert move is GcodeMove.NONE
    np.testing.assert_array_equal(interp.state.current_position, [0, 0, 0])


def test_interpret_line():
    interp = GcodeInterpreter()
    assert interp.interpret_line("G1 X1 Y2 E0.5 ; first") is GcodeMove.EXTRUSION
    assert interp.interpret_line("M104 S200") is GcodeMove.NONE
    assert interp.interpret_line("G0 Z5") is GcodeMove.TRAVEL
    np.testing.assert_array_equal(interp.state.current_position, [1.0, 2.0, 5.0])


def test_shared_state_instance():
    state = GcodeState()
    interp = GcodeInterpreter(state)
    interp.interpret_line("G91")
    assert state.positioning_mode is PositioningMode.RELATIVE


def test_status_snapshot():
    interp = GcodeInterpreter()
    interp.interpret_line("G1 X1")
    interp.interpret_line("G92 X0")
    status = interp.state.get_status()
    assert status["positioning_mode"] == "ABSOLUTE"
    assert status["current_position"] == [0.0, 0.0, 0.0]
    assert status["origin_offset"] == [1.0, 0.0, 0.0]
    assert status["absolute_position"] == [1.0, 0.0, 0.0]


def test_to_logical_position_inverts_absolute():
    state = GcodeState()
    state.origin_offset = np.array([1.0, -2.0, 0.5])
    p = np.array([3.0, 3.0, 3.0])
    np.testing.assert_allclose(state.to_logical_position(state.to_absolute_position(p)), p)


def test_interpret_line_uses_command_letter(monkeypatch):
    from toolpath_mesh.gcode import interpreter as interpreter_module

    interp = GcodeInterpreter()
    assert interp.interpret_line("g1 x1 e1") is GcodeMove.EXTRUSION
    monkeypatch.setattr(interpreter_module, "COMMAND_LETTER", "M")
    assert interp.interpret_line("G1 X5 E1") is GcodeMove.NONE
    assert interp.state.current_position[0] == 1.0
