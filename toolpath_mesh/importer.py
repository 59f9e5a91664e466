"""
G-code importer

Front end used by callers: recognizes G-code files by extension, reads
them into memory, runs the segment builder and attaches the default
material to the resulting scene.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from toolpath_mesh.config import (
    DEFAULT_AMBIENT,
    DEFAULT_DIFFUSE,
    DEFAULT_MATERIAL_NAME,
    DEFAULT_SPECULAR,
    FILE_ENCODING,
    GCODE_EXTENSIONS,
)
from toolpath_mesh.gcode.builder import SegmentBuilder
from toolpath_mesh.scene import Material, Scene
from toolpath_mesh.utils.errors import InputUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImporterDescription:
    """Importer meta information"""

    name: str
    extensions: tuple[str, ...]
    text_flavour: bool = True
    binary_flavour: bool = False


def default_material() -> Material:
    return Material(
        name=DEFAULT_MATERIAL_NAME,
        diffuse=DEFAULT_DIFFUSE,
        specular=DEFAULT_SPECULAR,
        ambient=DEFAULT_AMBIENT,
    )


class GcodeImporter:
    """Importer for the G-code toolpath format"""

    DESCRIPTION = ImporterDescription(name="G-code Importer", extensions=GCODE_EXTENSIONS)

    def __init__(self, encoding: str = FILE_ENCODING):
        self.encoding = encoding

    def get_info(self) -> ImporterDescription:
        return self.DESCRIPTION

    def can_read(self, path: str | os.PathLike) -> bool:
        """
        Check whether a file looks like G-code

        Only the extension is inspected; the file is never opened.
        """
        suffix = Path(path).suffix.lower().lstrip(".")
        return suffix in self.DESCRIPTION.extensions

    def read_file(self, path: str | os.PathLike) -> Scene:
        """
        Import a G-code file

        Args:
            path: Path to the G-code file

        Returns:
            Scene with one mesh per extrusion run

        Raises:
            InputUnavailableError: If the file cannot be opened or read
        """
        return self.read_text(self.read_source(path))

    def read_source(self, path: str | os.PathLike) -> str:
        """Read the whole file into memory, raising InputUnavailableError on failure"""
        try:
            with open(path, "r", encoding=self.encoding, errors="replace") as f:
                text = f.read()
        except OSError as e:
            logger.error(f"Failed to open G-code file {path}: {e}")
            raise InputUnavailableError(str(path), e.strerror) from e

        logger.info(f"Read {len(text)} characters from {path}")
        return text

    def read_text(self, text: str) -> Scene:
        """Import G-code from an in-memory buffer"""
        scene = SegmentBuilder().build(text)
        scene.materials.append(default_material())
        return scene


def import_file(path: str | os.PathLike) -> Scene:
    """Convenience wrapper around GcodeImporter().read_file()"""
    return GcodeImporter().read_file(path)
