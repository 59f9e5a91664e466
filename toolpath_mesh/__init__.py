"""
toolpath_mesh Python Package

Imports G-code toolpaths as polyline geometry: one line-segment mesh per
continuous extrusion run, parented to a root scene node.

Key components:
- GcodeImporter: File/text importer with extension-based format detection
- SegmentBuilder: Run partitioning over a G-code buffer
- GcodeInterpreter: Stateful motion interpreter
- Scene, Node, Mesh, Material: Output geometry description
"""

from ._version import __version__
from .gcode import GcodeInterpreter, GcodeMove, GcodeState, SegmentBuilder, build_scene
from .importer import GcodeImporter, ImporterDescription, import_file
from .scene import Material, Mesh, Node, PrimitiveType, Scene
from .utils.errors import InputUnavailableError, ToolpathImportError

__all__ = [
    "__version__",
    "GcodeImporter",
    "ImporterDescription",
    "import_file",
    "SegmentBuilder",
    "build_scene",
    "GcodeInterpreter",
    "GcodeMove",
    "GcodeState",
    "Scene",
    "Node",
    "Mesh",
    "Material",
    "PrimitiveType",
    "ToolpathImportError",
    "InputUnavailableError",
]
