"""
GCODE Implementation for toolpath_mesh

Turns G-code text into line-segment geometry.

Main components:
- parser.py: Line tokenizer (X/Y/Z/E words, comments)
- state.py: Modal state (positioning mode, position, origin offset)
- interpreter.py: Motion interpreter and move classification
- builder.py: Segment builder grouping extrusion runs into meshes
"""

from .builder import SegmentBuilder, build_scene
from .interpreter import GcodeInterpreter, GcodeMove
from .parser import GcodeLine, parse_line, read_gcode_line
from .state import GcodeState, PositioningMode

__all__ = [
    "GcodeLine",
    "parse_line",
    "read_gcode_line",
    "GcodeState",
    "PositioningMode",
    "GcodeInterpreter",
    "GcodeMove",
    "SegmentBuilder",
    "build_scene",
]
