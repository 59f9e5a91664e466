"""
Segment Builder

Walks a decoded G-code buffer command by command and groups consecutive
extrusion moves into line-segment meshes. A travel move, or the end of the
input, closes the current run.
"""

import logging

import numpy as np

from toolpath_mesh.config import COMMAND_LETTER, ROOT_NODE_NAME
from toolpath_mesh.scene import Mesh, Node, PrimitiveType, Scene

from .interpreter import GcodeInterpreter, GcodeMove
from .parser import GcodeLine, read_command_code, read_gcode_line, skip_line, skip_spaces_and_line_end
from .state import GcodeState

logger = logging.getLogger(__name__)


class SegmentBuilder:
    """Builds a Scene of extrusion runs from G-code text"""

    def __init__(self, interpreter: GcodeInterpreter | None = None):
        self.interpreter = interpreter if interpreter is not None else GcodeInterpreter()
        self.scene = Scene(root=Node(ROOT_NODE_NAME))
        self._positions: list[np.ndarray] = []
        self._indices: list[tuple[int, int]] = []

    @property
    def state(self) -> GcodeState:
        return self.interpreter.state

    def build(self, text: str) -> Scene:
        """
        Build a scene from a complete G-code buffer

        Args:
            text: Decoded G-code program

        Returns:
            Scene with one child node per extrusion run
        """
        self.state.reset()
        self.scene = Scene(root=Node(ROOT_NODE_NAME))
        self._positions = []
        self._indices = []

        commands = 0
        pos = skip_spaces_and_line_end(text, 0)
        while pos < len(text):
            if text[pos].upper() == COMMAND_LETTER:
                code, pos = read_command_code(text, pos + 1)
                words, pos = read_gcode_line(text, pos)
                self.feed(code, words)
                commands += 1
            pos = skip_line(text, pos)
            pos = skip_spaces_and_line_end(text, pos)
        self.flush()

        logger.info(f"Built {self.scene.num_meshes} meshes from {commands} G commands")
        return self.scene

    def feed(self, code: int, words: GcodeLine) -> GcodeMove:
        """Apply one command and update the run buffer"""
        state = self.state
        target = state.current_position.copy()
        move = self.interpreter.read_move(code, words, target)
        if move is GcodeMove.EXTRUSION:
            self._positions.append(state.to_absolute_position(state.current_position))
            self._positions.append(state.to_absolute_position(target))
            size = len(self._positions)
            self._indices.append((size - 2, size - 1))
        elif move is GcodeMove.TRAVEL:
            self.flush()
        state.update_position(target)
        return move

    def flush(self) -> Mesh | None:
        """
        Close the current run

        Returns:
            The new Mesh, or None if the run buffer was empty
        """
        if not self._positions:
            return None

        index = len(self.scene.meshes)
        mesh = Mesh(
            name=str(index),
            vertices=np.array(self._positions, dtype=np.float64).reshape(-1, 3),
            faces=np.array(self._indices, dtype=np.uint32).reshape(-1, 2),
            primitive_type=PrimitiveType.LINE,
        )
        node = Node(name=str(index), meshes=[index])
        self.scene.root.add_child(node)
        self.scene.meshes.append(mesh)
        logger.debug(f"Mesh {index}: {mesh.num_vertices} vertices, {mesh.num_faces} segments")

        self._positions = []
        self._indices = []
        return mesh


def build_scene(text: str) -> Scene:
    """Build a Scene from G-code text with a fresh builder"""
    return SegmentBuilder().build(text)
