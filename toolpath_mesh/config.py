"""
Central configuration for toolpath_mesh tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("TOOLPATH_TRACE", "0")).lower() in ("1", "true", "yes", "on")

logger = logging.getLogger(__name__)

LOG_LEVEL_DEFAULT: str = os.getenv("TOOLPATH_LOG_LEVEL", "INFO").upper()

# Input decoding. Undecodable bytes are replaced, never fatal.
FILE_ENCODING: str = os.getenv("TOOLPATH_ENCODING", "utf-8")

# Format recognition is by extension only (lowercase, no dot)
GCODE_EXTENSIONS: tuple[str, ...] = ("gcode",)

# Tokenizer
COMMAND_LETTER: str = "G"
COMMENT_CHAR: str = ";"

# Scene naming
ROOT_NODE_NAME: str = "G"

# Default material (RGBA)
DEFAULT_MATERIAL_NAME: str = "DefaultMaterial"
DEFAULT_DIFFUSE: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
DEFAULT_SPECULAR: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
DEFAULT_AMBIENT: tuple[float, float, float, float] = (0.05, 0.05, 0.05, 1.0)


def resolve_log_level(name: str | None) -> int:
    """
    Map a level name (including TRACE) to its numeric value.

    Unknown names fall back to INFO.
    """
    if not name:
        return logging.INFO
    name = name.strip().upper()
    if name == "TRACE":
        return TRACE
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    logger.warning(f"Unknown log level {name!r}, using INFO")
    return logging.INFO
