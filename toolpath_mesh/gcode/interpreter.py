"""
Motion Interpreter

Applies one G command to the carried GcodeState and classifies the
resulting move as no movement, travel or extrusion.

Supported codes:
- G0/G1: linear move (absolute or relative by mode)
- G7: relative move regardless of mode
- G90/G91: absolute/relative positioning
- G92: set position / redefine origin
Anything else is accepted and ignored.
"""

import logging
from enum import Enum

import numpy as np

from toolpath_mesh.config import COMMAND_LETTER

from .parser import GcodeLine, parse_line
from .state import GcodeState, PositioningMode, zero_position

logger = logging.getLogger(__name__)


class GcodeMove(Enum):
    """Classification of a single command"""

    NONE = 0
    TRAVEL = 1
    EXTRUSION = 2


class GcodeInterpreter:
    """Stateful interpreter for the G motion-command family"""

    def __init__(self, state: GcodeState | None = None):
        self.state = state if state is not None else GcodeState()

    def read_move(self, code: int, line: GcodeLine, target: np.ndarray) -> GcodeMove:
        """
        Apply a command to the state and classify it

        Args:
            code: Numeric code following the G letter
            line: Coordinate words of the command
            target: Copy of the current logical position; updated in place
                with the position after the command

        Returns:
            GcodeMove classification
        """
        state = self.state
        current = state.current_position

        if code in (0, 1) and state.is_absolute:
            target[0] = line.get_x(current[0])
            target[1] = line.get_y(current[1])
            target[2] = line.get_z(current[2])
        elif code in (0, 1, 7):
            target[0] = current[0] + line.get_x()
            target[1] = current[1] + line.get_y()
            target[2] = current[2] + line.get_z()
        elif code == 90:
            state.set_positioning_mode(PositioningMode.ABSOLUTE)
            return GcodeMove.NONE
        elif code == 91:
            state.set_positioning_mode(PositioningMode.RELATIVE)
            return GcodeMove.NONE
        elif code == 92:
            self._set_position(line)
            target[:] = state.current_position
            return GcodeMove.NONE
        else:
            logger.trace(f"Ignoring G{code}")
            return GcodeMove.NONE

        if line.get_e() > 0:
            return GcodeMove.EXTRUSION
        if line.has_axis():
            return GcodeMove.TRAVEL
        return GcodeMove.NONE

    def _set_position(self, line: GcodeLine) -> None:
        """
        G92 - redefine the logical position without moving

        With no words the current absolute position becomes the new origin.
        Otherwise each given axis takes the given logical value and the
        offset on that axis absorbs the difference, so the absolute position
        is unchanged.
        """
        state = self.state
        if line.is_empty():
            state.origin_offset = state.absolute_position()
            state.current_position = zero_position()
        else:
            absolute = state.absolute_position()
            for idx, value in enumerate((line.x, line.y, line.z)):
                if value is None:
                    continue
                state.current_position[idx] = value
                state.origin_offset[idx] = absolute[idx] - value
        logger.debug(
            f"G92 origin offset {state.origin_offset.tolist()}, "
            f"position {state.current_position.tolist()}"
        )

    def interpret_line(self, gcode_line: str) -> GcodeMove:
        """
        Parse and apply a single line of GCODE, committing the new position

        Lines that are not G commands are ignored.

        Args:
            gcode_line: Single line of GCODE, e.g. "G1 X10 E0.4"

        Returns:
            GcodeMove classification
        """
        letter, code, words = parse_line(gcode_line)
        if letter != COMMAND_LETTER:
            return GcodeMove.NONE
        target = self.state.current_position.copy()
        move = self.read_move(code, words, target)
        self.state.update_position(target)
        logger.trace(f"G{code} {words} -> {move.name} at {target.tolist()}")
        return move
