"""
GCODE State Management

Tracks the modal state carried between commands:
- Positioning mode (G90/G91)
- Current logical position
- Origin offset established by G92

The absolute scene position is always current_position + origin_offset.
"""

import logging
from enum import Enum

import numpy as np

logger = logging.getLogger(__name__)


class PositioningMode(Enum):
    """Interpretation of coordinate words on G0/G1"""

    ABSOLUTE = 90
    RELATIVE = 91


def zero_position() -> np.ndarray:
    return np.zeros(3, dtype=np.float64)


class GcodeState:
    """Tracks modal GCODE state during an import"""

    def __init__(self):
        self.positioning_mode = PositioningMode.ABSOLUTE
        self.current_position = zero_position()
        self.origin_offset = zero_position()

    @property
    def is_absolute(self) -> bool:
        return self.positioning_mode is PositioningMode.ABSOLUTE

    def set_positioning_mode(self, mode: PositioningMode) -> None:
        if mode is not self.positioning_mode:
            logger.debug(f"Positioning mode {self.positioning_mode.name} -> {mode.name}")
        self.positioning_mode = mode

    def to_absolute_position(self, position: np.ndarray) -> np.ndarray:
        """
        Convert a logical position to the absolute scene frame

        Args:
            position: Logical position (x, y, z)

        Returns:
            New array holding position + origin_offset
        """
        return self.origin_offset + position

    def to_logical_position(self, position: np.ndarray) -> np.ndarray:
        """Convert an absolute scene position to the logical frame"""
        return np.asarray(position, dtype=np.float64) - self.origin_offset

    def absolute_position(self) -> np.ndarray:
        """Absolute scene position of the current logical position"""
        return self.to_absolute_position(self.current_position)

    def update_position(self, new_position: np.ndarray) -> None:
        """Commit a new logical position"""
        self.current_position = np.array(new_position, dtype=np.float64)

    def reset(self) -> None:
        """Reset state to defaults"""
        self.positioning_mode = PositioningMode.ABSOLUTE
        self.current_position = zero_position()
        self.origin_offset = zero_position()

    def get_status(self) -> dict:
        """Get current state as dictionary for status reporting"""
        return {
            "positioning_mode": self.positioning_mode.name,
            "current_position": self.current_position.tolist(),
            "origin_offset": self.origin_offset.tolist(),
            "absolute_position": self.absolute_position().tolist(),
        }
