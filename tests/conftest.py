"""
Pytest configuration and shared fixtures for toolpath_mesh tests.

Provides sample programs and helpers for writing G-code files to a
temporary directory.
"""

import logging
import os
import sys
from pathlib import Path

import pytest

# Add the parent directory to Python path so we can import the package
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from toolpath_mesh.config import TRACE  # noqa: E402

logger = logging.getLogger(__name__)


SEGMENTATION_PROGRAM = (
    "G92\n"
    "G1 X0 Y0 E0\n"
    "G1 X1 Y0 E1\n"
    "G1 X1 Y1 E1\n"
    "G0 X5 Y5\n"
    "G1 X6 Y5 E1\n"
)


@pytest.fixture
def segmentation_program() -> str:
    """Extrude, extrude, travel, extrude"""
    return SEGMENTATION_PROGRAM


@pytest.fixture
def write_gcode(tmp_path: Path):
    """Factory writing text to a file under tmp_path and returning its path."""

    def _write(text: str, name: str = "part.gcode") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def trace_logging(caplog):
    """Capture records down to TRACE level."""
    caplog.set_level(TRACE, logger="toolpath_mesh")
    return caplog
